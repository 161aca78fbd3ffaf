"""
UCT search agent.

This module provides the UCTAgent class, a ready-to-use player that runs a
fresh search for every decision and keeps statistics about its searches.
"""
from typing import Any, Dict, List, Optional, Tuple
import json
import random
import time

from rich.console import Console
from rich.table import Table

from uct_mcts.core.errors import NoMovesAvailableError
from uct_mcts.core.game import GameState, Move
from uct_mcts.mcts.config import UCTConfig
from uct_mcts.mcts.node import SearchTree
from uct_mcts.mcts.search import run_search, get_move_statistics, get_principal_variation


class UCTAgent:
    """
    Upper Confidence Bound Tree search agent.

    The agent owns one random source for its whole lifetime, so a seeded
    agent plays a reproducible sequence of moves.
    """

    def __init__(
        self,
        config: Optional[UCTConfig] = None,
        rng: Optional[random.Random] = None,
        name: str = "UCT Agent",
        verbose: bool = False,
        console: Optional[Console] = None
    ):
        """
        Initialize a UCT agent.

        Args:
            config: Search configuration
            rng: Random source (defaults to one seeded from config.seed)
            name: Name of the agent
            verbose: Whether to print a summary after every search
            console: Rich console used in verbose mode
        """
        self.config = config or UCTConfig()
        self.rng = rng if rng is not None else random.Random(self.config.seed)
        self.name = name
        self.verbose = verbose
        self.console = console or Console()

        # Statistics from the most recent search
        self.last_stats: Dict[str, Any] = {}

        # History of all moves and their statistics
        self.move_history: List[Tuple[Move, Dict[str, Any]]] = []

        # Tree of the last search
        self.last_tree: Optional[SearchTree] = None

    def select_move(self, state: GameState) -> Move:
        """
        Select a move using UCT search.

        Args:
            state: Current game state

        Returns:
            Selected move

        Raises:
            NoMovesAvailableError: If the game is already over
        """
        legal_moves = state.legal_moves()
        if not legal_moves:
            raise NoMovesAvailableError(f"{self.name} has no legal moves to choose from")

        # If there's only one legal move, no need to search
        if len(legal_moves) == 1:
            move = legal_moves[0]
            self.last_stats = {"iterations": 0, "forced_move": True}
            self.last_tree = None
            self.move_history.append((move, self.last_stats))
            return move

        start_time = time.time()
        result = run_search(state, self.config, rng=self.rng)
        result.stats["total_time"] = time.time() - start_time

        self.last_stats = result.stats
        self.last_tree = result.tree
        self.move_history.append((result.move, result.stats))

        if self.verbose:
            self._print_search_info(result.move, result.stats)

        return result.move

    def _print_search_info(self, move: Move, stats: Dict[str, Any]) -> None:
        """
        Print a summary of the search.

        Args:
            move: Selected move
            stats: Search statistics
        """
        self.console.print(f"\n[bold]{self.name}[/bold] selected: [cyan]{move}[/cyan]")
        self.console.print(
            f"Iterations: {stats['iterations']}  "
            f"Time: {stats['time_elapsed']:.3f}s ({stats['iterations_per_second']:.1f} it/s)  "
            f"Nodes: {stats['node_count']}  Depth: {stats['max_tree_depth']}"
        )

        table = Table(title="Top moves")
        table.add_column("#", justify="right")
        table.add_column("Move")
        table.add_column("Visits", justify="right")
        table.add_column("Value", justify="right")

        moves_by_visits = sorted(stats["move_visits"].items(), key=lambda x: x[1], reverse=True)
        for i, (move_str, visits) in enumerate(moves_by_visits[:5]):
            value = stats["move_values"].get(move_str, 0.0)
            table.add_row(str(i + 1), move_str, str(visits), f"{value:.3f}")
        self.console.print(table)

    def get_last_statistics(self) -> Dict[str, Any]:
        return self.last_stats

    def get_principal_variation(self) -> List[Tuple[Move, float, int]]:
        """
        Get the principal variation (most visited path) from the last search.

        Returns:
            List of (move, average outcome, visits) tuples, empty if there was no search
        """
        if self.last_tree is None:
            return []

        return get_principal_variation(self.last_tree)

    def get_move_statistics(self) -> Dict[str, Dict[str, float]]:
        """Get statistics for all root moves of the last search."""
        if self.last_tree is None:
            return {}

        return get_move_statistics(self.last_tree)

    def reset_statistics(self) -> None:
        """Reset all statistics."""
        self.last_stats = {}
        self.move_history = []
        self.last_tree = None

    def save_statistics(self, filename: str) -> None:
        """
        Save the move history to a JSON file.

        Args:
            filename: Name of the file to save to
        """
        history = []
        for move, stats in self.move_history:
            history.append({
                "move": str(move),
                "stats": {k: v for k, v in stats.items() if not isinstance(v, dict)}
            })

        data = {
            "agent_name": self.name,
            "config": self.config.to_dict(),
            "history": history,
            "total_moves": len(self.move_history)
        }

        with open(filename, 'w') as f:
            json.dump(data, f, indent=2)

    def __str__(self) -> str:
        return f"{self.name} (UCT, {self.config.iterations} iterations)"
