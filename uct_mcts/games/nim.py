"""
Nim, the reference game for the search engine.

Players alternately take 1, 2 or 3 chips from a single pile; whoever takes
the last chip wins. Any starting pile of the form 4n+k (k = 1, 2, 3) is a
win for the first player (by taking k chips). Any pile of the form 4n is a
win for the second player.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from uct_mcts.core.errors import IllegalMoveError
from uct_mcts.core.game import GameState

MAX_PICKABLE_CHIPS = 3  # The max chips a player can pick on their move
FIRST_PLAYER = 1
SECOND_PLAYER = 2


@dataclass(frozen=True)
class NimMove:
    """A single move: a player taking 1 to 3 chips."""
    player_id: int
    chips: int

    def __post_init__(self):
        if self.chips < 1 or self.chips > MAX_PICKABLE_CHIPS:
            raise ValueError(f"Nim move cannot be to remove {self.chips} chips")

    def __str__(self) -> str:
        return f"player {self.player_id} takes {self.chips} chips"


class NimState(GameState):
    """
    State of a Nim game.

    The player who just moved is the one who wins if the pile is empty.
    """

    def __init__(
        self,
        chips: int,
        active_player: int = FIRST_PLAYER,
        just_moved_player: int = SECOND_PLAYER
    ):
        """
        Create a Nim position.

        Args:
            chips: Chips left in the pile
            active_player: Player whose turn it is
            just_moved_player: Player who made the previous move
        """
        if chips < 0:
            raise ValueError("chips must be non-negative")

        self.chips = chips
        self.active_player = active_player
        self.just_moved_player = just_moved_player

    def legal_moves(self) -> List[NimMove]:
        max_pickable = min(self.chips, MAX_PICKABLE_CHIPS)
        return [NimMove(self.active_player, chips) for chips in range(1, max_pickable + 1)]

    def apply(self, move: NimMove) -> None:
        if move not in self.legal_moves():
            raise IllegalMoveError(move, f"Illegal move with {self.chips} chips left: {move}")

        self.chips -= move.chips
        # It is now the next player's turn
        self.just_moved_player, self.active_player = self.active_player, self.just_moved_player

    def clone(self) -> 'NimState':
        return NimState(self.chips, self.active_player, self.just_moved_player)

    def score(self, player_id: int) -> float:
        """
        Score the position: 0.0 (lost), 0.5 (in progress), 1.0 (won).

        Args:
            player_id: Player to score for

        Returns:
            Outcome for the player
        """
        if self.chips > 0:
            return 0.5

        # Taking the last chip wins
        if player_id == self.just_moved_player:
            return 1.0
        return 0.0

    def last_mover(self) -> int:
        return self.just_moved_player

    @property
    def winner(self) -> Optional[int]:
        """The winning player once the pile is empty, otherwise None."""
        if self.chips > 0:
            return None
        return self.just_moved_player

    def log(self) -> None:
        logger.info(f"CHIPS: {self.chips}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NimState):
            return NotImplemented
        return (self.chips == other.chips
                and self.active_player == other.active_player
                and self.just_moved_player == other.just_moved_player)

    def __hash__(self) -> int:
        return hash((self.chips, self.active_player, self.just_moved_player))

    def __repr__(self) -> str:
        return (f"NimState(chips={self.chips}, active_player={self.active_player}, "
                f"just_moved_player={self.just_moved_player})")
