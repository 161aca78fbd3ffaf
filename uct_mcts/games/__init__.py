"""
Example games implementing the GameState contract.
"""

from uct_mcts.games.nim import NimState, NimMove, MAX_PICKABLE_CHIPS

__all__ = ['NimState', 'NimMove', 'MAX_PICKABLE_CHIPS']
