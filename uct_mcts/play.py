#!/usr/bin/env python
"""
Nim experiment runner.

Plays a full game of Nim with UCT search choosing every move, logging the
pile and each move, or (with --runs) repeats the search from the starting
pile with different seeds and reports which moves were picked.

    uct-nim --ucbc 1.0 --chips 10
    uct-nim --chips 7 --runs 20 --seed 1
"""
import argparse
import random
import sys
from typing import List, Optional

from loguru import logger
from rich.console import Console
from rich.table import Table

from uct_mcts.core.errors import MCTSError
from uct_mcts.experiments import move_distribution, play_game
from uct_mcts.games.nim import NimState
from uct_mcts.mcts.agent import UCTAgent
from uct_mcts.mcts.config import UCTConfig
from uct_mcts.utils.logging import setup_logging

console = Console()


def parse_args(argv: Optional[List[str]] = None):
    """Parse command-line arguments for the experiment."""
    parser = argparse.ArgumentParser(description="Play Nim with UCT search")

    # Game configuration
    parser.add_argument("--chips", type=int, default=100,
                        help="Number of chips in the starting state")

    # Search configuration
    parser.add_argument("--ucbc", type=float, default=1.0,
                        help="The constant biasing exploitation vs exploration")
    parser.add_argument("--iterations", type=int, default=1000,
                        help="Number of search iterations per move")
    parser.add_argument("--simulations", type=int, default=100,
                        help="Maximum random rollout steps per iteration")
    parser.add_argument("--time-limit", type=float, default=None,
                        help="Optional time limit per move in seconds")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducible runs")

    # Experiment configuration
    parser.add_argument("--runs", type=int, default=0,
                        help="Repeat the first search this many times instead of playing a game")
    parser.add_argument("--show-tree", action="store_true",
                        help="Print the top of the search tree after each move")

    # Logging
    parser.add_argument("--log-level", type=str, default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Minimum log level")
    parser.add_argument("--log-file", type=str, default=None,
                        help="Optional file to write logs to")

    return parser.parse_args(argv)


def run_game(args, config: UCTConfig) -> None:
    """Play one full game and report the winner."""
    state = NimState(args.chips)
    agent = UCTAgent(config=config, rng=random.Random(args.seed), name="UCT")

    def on_move(new_state: NimState, move) -> None:
        new_state.log()
        if args.show_tree and agent.last_tree is not None:
            for line in agent.last_tree.format_tree(max_depth=1):
                console.print(line, markup=False)

    state.log()
    record = play_game(state, config, agent=agent, on_move=on_move)
    console.print(f"[bold green]PLAYER {record.winner} WINS![/bold green] ({record.num_moves} moves)")


def run_distribution(args, config: UCTConfig) -> None:
    """Repeat the search from the starting pile and tabulate the chosen moves."""
    base_seed = args.seed if args.seed is not None else random.randrange(2 ** 31)
    counts = move_distribution(
        lambda: NimState(args.chips),
        config,
        seeds=range(base_seed, base_seed + args.runs),
    )

    table = Table(title=f"Moves chosen from {args.chips} chips over {args.runs} searches")
    table.add_column("Move")
    table.add_column("Count", justify="right")
    table.add_column("Leaves", justify="right")
    for move, count in counts.most_common():
        table.add_row(str(move), str(count), str(args.chips - move.chips))
    console.print(table)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function."""
    args = parse_args(argv)
    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        config = UCTConfig(
            iterations=args.iterations,
            simulations_per_iteration=args.simulations,
            exploration_constant=args.ucbc,
            time_limit=args.time_limit,
            seed=args.seed,
        )
        logger.info(f"Experiment game: 'nim' with {config}")

        if args.runs > 0:
            run_distribution(args, config)
        else:
            run_game(args, config)
    except (MCTSError, ValueError) as e:
        logger.error(f"Experiment failed: {e}")
        return 1
    except KeyboardInterrupt:
        console.print("\nExperiment interrupted by user.")
        return 0

    logger.info("Experiment Complete.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
