"""
Game state contract for the search engine.

The engine never looks inside a concrete game. Anything that implements
the five operations of ``GameState`` can be searched:

- legal_moves: the moves available from the current position (empty when over)
- apply: play a move, changing the state in place
- clone: an independent deep copy
- score: the outcome for a player, 0.0 (lost), 0.5 (undecided) or 1.0 (won)
- last_mover: the player who made the most recent move
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Hashable, List

# Moves are opaque to the engine; equality is defined by the game.
Move = Any
PlayerId = Hashable


class GameState(ABC):
    """
    Abstract turn-based, perfect-information game state.

    Scores must be consistent: once the game is over, the player who made
    the final move and the opponent get complementary scores (1.0 and 0.0).
    While the game is still going every player scores 0.5.
    """

    @abstractmethod
    def legal_moves(self) -> List[Move]:
        """
        Get the moves available from the current position.

        Returns:
            Ordered list of distinct legal moves, empty if the game is over
        """

    @abstractmethod
    def apply(self, move: Move) -> None:
        """
        Play a move, mutating this state.

        Raises:
            IllegalMoveError: If the move is not currently legal
        """

    @abstractmethod
    def clone(self) -> 'GameState':
        """Return an independent deep copy of this state."""

    @abstractmethod
    def score(self, player_id: PlayerId) -> float:
        """
        Score the position from a player's point of view.

        Args:
            player_id: Player to score for

        Returns:
            0.0 if the player lost, 1.0 if the player won, 0.5 otherwise
        """

    @abstractmethod
    def last_mover(self) -> PlayerId:
        """Return the player who made the most recent move."""

    def is_terminal(self) -> bool:
        """Check whether the game is over (no legal moves remain)."""
        return not self.legal_moves()
