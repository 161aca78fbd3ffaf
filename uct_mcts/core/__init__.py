"""
UCT MCTS Core Package

This package contains the contract between the search engine and the games
it searches:
- The abstract game state
- Error types shared by the engine and game implementations
"""

from uct_mcts.core.game import GameState, Move, PlayerId
from uct_mcts.core.errors import (
    MCTSError, IllegalMoveError, EmptyMoveSetError, NoMovesAvailableError
)

__all__ = [
    'GameState', 'Move', 'PlayerId',
    'MCTSError', 'IllegalMoveError', 'EmptyMoveSetError', 'NoMovesAvailableError',
]
