"""
UCT MCTS - a game-agnostic Monte Carlo Tree Search engine.

This package provides Upper Confidence Bound Tree search over any turn-based,
perfect-information game that implements the small GameState contract,
along with Nim as a reference game and a command-line experiment runner.
"""

__version__ = "0.1.0"
__author__ = "UCT MCTS Team"

# Make key components available at package level
from uct_mcts.core.game import GameState, Move
from uct_mcts.core.errors import (
    MCTSError, IllegalMoveError, EmptyMoveSetError, NoMovesAvailableError
)
from uct_mcts.mcts.config import UCTConfig
from uct_mcts.mcts.search import search, run_search

# Version info as a tuple for programmatic access
VERSION_INFO = tuple(map(int, __version__.split('.')))
