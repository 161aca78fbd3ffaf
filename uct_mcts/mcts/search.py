"""
Upper Confidence Bound Tree (UCT) search.

This module implements the search loop with the four standard phases:
1. Selection: Descend through fully expanded nodes using cached UCB1 scores
2. Expansion: Add exactly one child for a random untried move
3. Simulation: Play random moves from the new position
4. Backpropagation: Fold the final position's score back up the path

After the last round the most visited child of the root gives the move.
Every random decision is drawn from one random source, so a seeded search
is reproducible.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union
import random
import time

from loguru import logger

from uct_mcts.core.errors import NoMovesAvailableError
from uct_mcts.core.game import GameState, Move
from uct_mcts.mcts.config import UCTConfig
from uct_mcts.mcts.node import SearchNode, SearchTree

RolloutPolicy = Callable[[GameState, Sequence[Move], random.Random], Move]


def random_rollout_policy(
    state: GameState,
    legal_moves: Sequence[Move],
    rng: random.Random
) -> Move:
    """Pick a legal move uniformly at random."""
    return legal_moves[rng.randrange(len(legal_moves))]


@dataclass
class SearchResult:
    """Outcome of a search: the chosen move, the tree it came from and run statistics."""
    move: Move
    tree: SearchTree
    stats: Dict[str, Any] = field(default_factory=dict)


def search(
    state: GameState,
    config: Union[UCTConfig, Mapping[str, Any], None] = None,
    rng: Optional[random.Random] = None,
    rollout_policy: Optional[RolloutPolicy] = None
) -> Move:
    """
    Search for the most promising move from a position.

    Args:
        state: Position to move from; it is cloned, never modified
        config: Search configuration, or a mapping accepted by UCTConfig.from_dict
        rng: Random source for expansion and rollouts
        rollout_policy: Move picker for the simulation phase

    Returns:
        The move leading to the most visited child of the root

    Raises:
        NoMovesAvailableError: If the position has no legal moves
    """
    return run_search(state, config, rng, rollout_policy).move


def run_search(
    state: GameState,
    config: Union[UCTConfig, Mapping[str, Any], None] = None,
    rng: Optional[random.Random] = None,
    rollout_policy: Optional[RolloutPolicy] = None
) -> SearchResult:
    """
    Run UCT search and keep the tree and statistics.

    The random source is, in order of preference: the ``rng`` argument,
    a new ``random.Random(config.seed)``, or an unseeded ``random.Random()``.

    Args:
        state: Position to move from; it is cloned, never modified
        config: Search configuration, or a mapping accepted by UCTConfig.from_dict
        rng: Random source for expansion and rollouts
        rollout_policy: Move picker for the simulation phase

    Returns:
        SearchResult with the chosen move, the tree and run statistics

    Raises:
        NoMovesAvailableError: If the position has no legal moves
    """
    config = _resolve_config(config)
    if rng is None:
        rng = random.Random(config.seed)
    if rollout_policy is None:
        rollout_policy = random_rollout_policy

    # Check before building anything
    if not state.legal_moves():
        raise NoMovesAvailableError("Cannot search from a position with no legal moves")

    tree = SearchTree(state.clone(), config.exploration_constant)

    stats = {
        "iterations": 0,
        "total_simulation_steps": 0,
        "stopped_early": False,
    }

    logger.debug(f"Starting search: {config}")
    start_time = time.time()

    for i in range(config.iterations):
        # Always run at least one round so there is a move to return
        if (config.time_limit is not None and i > 0
                and time.time() - start_time > config.time_limit):
            stats["stopped_early"] = True
            logger.debug(f"Time limit reached after {i} iterations")
            break

        working_state = tree.root.state.clone()

        # 1. Selection
        node = select_node(tree, working_state)

        # 2. Expansion
        node = expand_node(tree, node, working_state, rng)

        # 3. Simulation
        steps = simulate_game(working_state, config.simulations_per_iteration, rng, rollout_policy)

        # 4. Backpropagation
        backpropagate(tree, node, working_state)

        stats["iterations"] += 1
        stats["total_simulation_steps"] += steps

    best = tree.best_child()
    stats.update(_summarize(tree, stats, time.time() - start_time))
    logger.debug(
        f"Search finished: {stats['iterations']} iterations, "
        f"{stats['node_count']} nodes, best move {best.move} ({best.visits} visits)"
    )

    return SearchResult(move=best.move, tree=tree, stats=stats)


def select_node(tree: SearchTree, working_state: GameState) -> SearchNode:
    """
    Descend from the root while nodes are fully expanded.

    Each chosen child's move is replayed on the working state so that it
    matches the returned node's position.

    Args:
        tree: Search tree
        working_state: Clone of the root state owned by this round

    Returns:
        First node on the path with untried moves, or a terminal node
    """
    node = tree.root
    while not node.has_untried_moves() and node.children:
        node = tree.select_child(node)
        working_state.apply(node.move)
    return node


def expand_node(
    tree: SearchTree,
    node: SearchNode,
    working_state: GameState,
    rng: random.Random
) -> SearchNode:
    """
    Grow the tree by one child if the node still has untried moves.

    Args:
        tree: Search tree
        node: Node reached by selection
        working_state: Working state matching the node's position
        rng: Random source

    Returns:
        The new child, or the node itself when it has nothing left to expand
    """
    if not node.has_untried_moves():
        return node

    move = node.pop_untried_move(rng)
    working_state.apply(move)
    return tree.add_child(node, move, working_state.clone())


def simulate_game(
    working_state: GameState,
    max_steps: int,
    rng: random.Random,
    rollout_policy: RolloutPolicy = random_rollout_policy
) -> int:
    """
    Play rollout moves on the working state until it is over or the step budget runs out.

    Args:
        working_state: State to play on, mutated in place
        max_steps: Maximum number of moves to play
        rng: Random source
        rollout_policy: Move picker

    Returns:
        Number of moves played
    """
    steps = 0
    while steps < max_steps:
        legal_moves = working_state.legal_moves()
        if not legal_moves:
            break

        working_state.apply(rollout_policy(working_state, legal_moves, rng))
        steps += 1
    return steps


def backpropagate(tree: SearchTree, node: SearchNode, final_state: GameState) -> None:
    """
    Update statistics from the node up to the root using the final state's score.

    Args:
        tree: Search tree
        node: Node the simulation started from
        final_state: Working state after the simulation
    """
    tree.backpropagate(node, final_state.score)


def get_principal_variation(tree: SearchTree, max_depth: int = 10) -> List[Tuple[Move, float, int]]:
    """
    Get the principal variation (most visited path) of a finished search.

    Args:
        tree: Search tree
        max_depth: Maximum number of moves to follow

    Returns:
        List of (move, average outcome, visits) tuples
    """
    return tree.principal_variation(max_depth)


def get_move_statistics(tree: SearchTree) -> Dict[str, Dict[str, float]]:
    """
    Get statistics for all moves from the root, keyed by the move's string form.

    Args:
        tree: Search tree

    Returns:
        Dictionary mapping move strings to statistics
    """
    result = {}
    for entry in tree.move_statistics():
        result[str(entry["move"])] = {
            "visits": entry["visits"],
            "outcome": entry["outcome"],
            "value": entry["value"],
            "selection_score": entry["selection_score"],
        }
    return result


def _resolve_config(config: Union[UCTConfig, Mapping[str, Any], None]) -> UCTConfig:
    if config is None:
        return UCTConfig()
    if isinstance(config, UCTConfig):
        return config
    return UCTConfig.from_dict(config)


def _summarize(tree: SearchTree, stats: Dict[str, Any], elapsed: float) -> Dict[str, Any]:
    iterations = stats["iterations"]
    return {
        "time_elapsed": elapsed,
        "iterations_per_second": iterations / max(0.001, elapsed),
        "average_simulation_steps": stats["total_simulation_steps"] / max(1, iterations),
        "node_count": len(tree),
        "max_tree_depth": tree.max_depth(),
        "move_visits": {str(c.move): c.visits for c in tree.children_of(tree.root)},
        "move_values": {str(c.move): c.average_outcome for c in tree.children_of(tree.root)},
    }
