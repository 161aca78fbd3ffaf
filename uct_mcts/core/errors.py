"""
Error types raised by the search engine and by game implementations.

All of them signal a broken contract between the caller and the engine,
so none are caught inside the engine; they reach the caller of ``search``.
"""
from typing import Any, Optional


class MCTSError(Exception):
    """Base class for all search engine errors."""


class IllegalMoveError(MCTSError, ValueError):
    """A move was applied to a state whose legal move list does not contain it."""

    def __init__(self, move: Any, message: Optional[str] = None):
        self.move = move
        super().__init__(message or f"Illegal move: {move!r}")


class EmptyMoveSetError(MCTSError, ValueError):
    """Random extraction was attempted on a node with no untried moves left."""


class NoMovesAvailableError(MCTSError, ValueError):
    """Search was started from a position with no legal moves."""
