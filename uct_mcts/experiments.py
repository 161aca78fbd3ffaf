"""
Experiments built on the search engine.

- play_game: self-play a full game, one fresh search per turn
- move_distribution: run many seeded searches from the same position and
  count which move each one picks
"""
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional
import random

from loguru import logger
from tqdm import tqdm

from uct_mcts.core.game import GameState, Move, PlayerId
from uct_mcts.mcts.agent import UCTAgent
from uct_mcts.mcts.config import UCTConfig
from uct_mcts.mcts.search import search


@dataclass
class GameRecord:
    """Moves played in a finished game and who won it."""
    moves: List[Move] = field(default_factory=list)
    winner: Optional[PlayerId] = None
    final_state: Optional[GameState] = None

    @property
    def num_moves(self) -> int:
        return len(self.moves)


def play_game(
    state: GameState,
    config: Optional[UCTConfig] = None,
    rng: Optional[random.Random] = None,
    agent: Optional[UCTAgent] = None,
    on_move: Optional[Callable[[GameState, Move], None]] = None
) -> GameRecord:
    """
    Play a game to the end with UCT search choosing every move.

    Args:
        state: Starting position; it is cloned, never modified
        config: Search configuration used when no agent is given
        rng: Random source shared by every search of the game
        agent: Optional agent that plays both sides instead of plain searches
        on_move: Callback invoked after each move with the new state and the move

    Returns:
        GameRecord with the moves and the winner (the last mover once the game is over)
    """
    config = config or UCTConfig()
    if rng is None:
        rng = random.Random(config.seed)

    state = state.clone()
    record = GameRecord()

    while not state.is_terminal():
        if agent is not None:
            move = agent.select_move(state)
        else:
            move = search(state, config, rng=rng)

        state.apply(move)
        record.moves.append(move)
        logger.info(f"{move}")

        if on_move is not None:
            on_move(state, move)

    record.winner = state.last_mover() if state.score(state.last_mover()) == 1.0 else None
    record.final_state = state
    logger.info(f"PLAYER {record.winner} WINS after {record.num_moves} moves")
    return record


def move_distribution(
    state_factory: Callable[[], GameState],
    config: UCTConfig,
    seeds: Iterable[int],
    progress: bool = True
) -> Counter:
    """
    Count the moves chosen by independent seeded searches from the same position.

    Args:
        state_factory: Builds a fresh copy of the starting position
        config: Search configuration
        seeds: One search is run per seed
        progress: Whether to show a progress bar

    Returns:
        Counter mapping each chosen move to the number of searches that picked it
    """
    seeds = list(seeds)
    counts = Counter()
    for seed in tqdm(seeds, desc="Searches", disable=not progress):
        move = search(state_factory(), config, rng=random.Random(seed))
        counts[move] += 1

    logger.debug(f"Move distribution over {len(seeds)} searches: {dict(counts)}")
    return counts

