"""Utility helpers."""

from uct_mcts.utils.logging import setup_logging

__all__ = ['setup_logging']
