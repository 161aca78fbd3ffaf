"""
Upper Confidence Bound Tree (UCT) search.

This package provides a game-agnostic Monte Carlo Tree Search. Each round:

1. Selection: Starting from the root, follow the child with the highest cached
   UCB1 score while the current node has no untried moves.
2. Expansion: Create one new child for a random untried move.
3. Simulation: Play random moves from the new position for a bounded number of steps.
4. Backpropagation: Score the final position for each node's perspective player
   and update every node on the path back to the root.

The move finally returned is the one leading to the root's most visited child.
"""

from uct_mcts.mcts.node import SearchNode, SearchTree
from uct_mcts.mcts.agent import UCTAgent
from uct_mcts.mcts.policy import upper_confidence_bound
from uct_mcts.mcts.search import (
    search,
    run_search,
    SearchResult,
    select_node,
    expand_node,
    simulate_game,
    backpropagate,
    random_rollout_policy,
)
from uct_mcts.mcts.config import UCTConfig

# Default configuration, matching the reference experiment runner
DEFAULT_CONFIG = UCTConfig(
    iterations=1000,               # Search rounds per move
    simulations_per_iteration=100, # Maximum rollout steps per round
    exploration_constant=1.0,      # UCB1 C parameter
    time_limit=None                # Optional time limit in seconds (None = no limit)
)

__all__ = [
    'UCTAgent',
    'SearchNode',
    'SearchTree',
    'SearchResult',
    'UCTConfig',
    'search',
    'run_search',
    'select_node',
    'expand_node',
    'simulate_game',
    'backpropagate',
    'random_rollout_policy',
    'upper_confidence_bound',
    'DEFAULT_CONFIG'
]
