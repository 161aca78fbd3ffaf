"""
Search tree for Upper Confidence Bound Tree search.

This module defines the SearchNode record and the SearchTree arena that owns
every node. Nodes refer to each other by index only: a node stores its own
index, its parent's index and its children's indices, so the tree holds no
reference cycles and nodes can be walked upwards without owning a parent.

Statistics at a node are kept from the point of view of the player who made
the move leading into it (the node's perspective player).
"""
from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Tuple
import random

from uct_mcts.core.errors import EmptyMoveSetError, MCTSError
from uct_mcts.core.game import GameState, Move, PlayerId
from uct_mcts.mcts.policy import upper_confidence_bound


class SearchNode:
    """
    A node in the partially expanded game tree.

    Each node owns a snapshot of the game state, the moves from that state
    that have not been expanded yet, and aggregate simulation statistics.
    """

    def __init__(
        self,
        index: int,
        state: GameState,
        parent_index: Optional[int] = None,
        move: Optional[Move] = None,
    ):
        """
        Initialize a search node.

        Args:
            index: Position of this node in its tree's arena
            state: The game state this node owns
            parent_index: Arena index of the parent (None for root)
            move: The move that led to this state (None for root)
        """
        self.index = index
        self.parent_index = parent_index
        self.move = move
        self.state = state

        # Whose outcome the statistics below are recorded for
        self.perspective_player: PlayerId = state.last_mover()

        # Node statistics
        self.aggregate_outcome = 0.0
        self.visits = 0
        self.selection_score = 0.0

        # Children and untried moves always partition the legal moves at creation
        self.untried_moves: List[Move] = list(state.legal_moves())
        self.legal_move_count = len(self.untried_moves)
        self.children: List[int] = []

    @property
    def is_root(self) -> bool:
        return self.parent_index is None

    @property
    def average_outcome(self) -> float:
        """Mean outcome over all visits, 0.0 for an unvisited node."""
        if self.visits == 0:
            return 0.0
        return self.aggregate_outcome / self.visits

    def has_untried_moves(self) -> bool:
        return bool(self.untried_moves)

    def pop_untried_move(self, rng: random.Random) -> Move:
        """
        Remove and return one untried move chosen uniformly at random.

        Args:
            rng: Random source shared by the whole search

        Returns:
            The extracted move

        Raises:
            EmptyMoveSetError: If every move has already been expanded
        """
        if not self.untried_moves:
            raise EmptyMoveSetError(f"Node {self.index} has no untried moves")

        i = rng.randrange(len(self.untried_moves))
        return self.untried_moves.pop(i)

    def update(self, outcome: float) -> None:
        """Record one simulation outcome seen from the perspective player."""
        self.aggregate_outcome += outcome
        self.visits += 1

    def __str__(self) -> str:
        return (f"SearchNode(index={self.index}, "
                f"player={self.perspective_player}, "
                f"move={self.move}, "
                f"outcome={self.aggregate_outcome:.2f}, "
                f"visits={self.visits}, "
                f"children={len(self.children)}, "
                f"untried={len(self.untried_moves)})")


class SearchTree:
    """
    Arena owning every node of a single search.

    The tree is built once per search call and discarded when the call
    returns its move. All nodes share one exploration constant.
    """

    def __init__(self, state: GameState, exploration_constant: float):
        """
        Create a tree with a root wrapping the given state.

        Args:
            state: State snapshot owned by the root
            exploration_constant: UCB1 C parameter for the whole tree
        """
        self.exploration_constant = exploration_constant
        self.nodes: List[SearchNode] = [SearchNode(index=0, state=state)]

    @property
    def root(self) -> SearchNode:
        return self.nodes[0]

    def __len__(self) -> int:
        return len(self.nodes)

    def add_child(self, parent: SearchNode, move: Move, state: GameState) -> SearchNode:
        """
        Append a new child node for a move that was just extracted from the parent.

        Args:
            parent: Node being expanded
            move: Move leading from the parent to the new node
            state: State snapshot owned by the new node

        Returns:
            The new child node
        """
        child = SearchNode(
            index=len(self.nodes),
            state=state,
            parent_index=parent.index,
            move=move,
        )
        self.nodes.append(child)
        parent.children.append(child.index)
        return child

    def parent_of(self, node: SearchNode) -> Optional[SearchNode]:
        if node.parent_index is None:
            return None
        return self.nodes[node.parent_index]

    def children_of(self, node: SearchNode) -> List[SearchNode]:
        return [self.nodes[i] for i in node.children]

    def compute_selection_score(self, node: SearchNode) -> None:
        """
        Refresh the cached UCB1 score of a node from its parent's current visits.

        The root is never a selection candidate, so it keeps its initial score.
        """
        parent = self.parent_of(node)
        if parent is None:
            return

        node.selection_score = upper_confidence_bound(
            node.aggregate_outcome,
            self.exploration_constant,
            parent.visits,
            node.visits,
        )

    def select_child(self, node: SearchNode) -> SearchNode:
        """
        Select the child with the highest cached selection score.

        Ties go to the child that was added first.

        Returns:
            Selected child node
        """
        if not node.children:
            raise MCTSError(f"Cannot select child from node {node.index} with no children")

        return max(self.children_of(node), key=lambda c: c.selection_score)

    def backpropagate(self, node: SearchNode, score: Callable[[PlayerId], float]) -> None:
        """
        Fold a simulation outcome into a node and all of its ancestors.

        Every node on the path records ``score(perspective_player)``. Once all
        ancestors are updated, selection scores are refreshed from the top of
        the path down, so each node sees its parent's already incremented
        visit count. Siblings off the path keep their cached scores, which
        may lag behind the parent's visit count until they are visited again.

        Args:
            node: Node the simulation started from
            score: Scoring function of the final simulated state
        """
        path = []
        current: Optional[SearchNode] = node
        while current is not None:
            current.update(score(current.perspective_player))
            path.append(current)
            current = self.parent_of(current)

        for current in reversed(path):
            self.compute_selection_score(current)

    def best_child(self, node: Optional[SearchNode] = None) -> Optional[SearchNode]:
        """
        Get the most visited child of a node (the root by default).

        Visit count is more robust than average outcome. Ties go to the
        child that was added first.

        Returns:
            The most visited child, or None if the node has no children
        """
        if node is None:
            node = self.root
        if not node.children:
            return None
        return max(self.children_of(node), key=lambda c: c.visits)

    def max_depth(self) -> int:
        """Depth of the deepest node, 0 for a lone root."""
        depths = {0: 0}
        for node in self.nodes[1:]:
            # Children are always appended after their parent
            depths[node.index] = depths[node.parent_index] + 1
        return max(depths.values())

    def principal_variation(self, max_depth: int = 10) -> List[Tuple[Move, float, int]]:
        """
        Get the principal variation (most visited path) from the root.

        Args:
            max_depth: Maximum number of moves to follow

        Returns:
            List of (move, average outcome, visits) along the path
        """
        result = []
        current = self.root

        while current.children and len(result) < max_depth:
            current = self.best_child(current)
            result.append((current.move, current.average_outcome, current.visits))

        return result

    def move_statistics(self) -> List[Dict[str, Any]]:
        """
        Get statistics for every move expanded from the root.

        Returns:
            One dictionary per root child, in insertion order
        """
        return [
            {
                "move": child.move,
                "visits": child.visits,
                "outcome": child.aggregate_outcome,
                "value": child.average_outcome,
                "selection_score": child.selection_score,
            }
            for child in self.children_of(self.root)
        ]

    def format_tree(self, max_depth: Optional[int] = None) -> List[str]:
        """
        Render the tree as indented lines, one per node, depth first.

        Args:
            max_depth: Deepest level to include (None = whole tree)

        Returns:
            List of lines
        """
        lines = []
        stack = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            lines.append(
                f"{'  ' * depth}d{depth}>p{node.perspective_player} "
                f"move:{node.move} oc{node.aggregate_outcome:.6f} vst{node.visits}"
            )
            if max_depth is None or depth < max_depth:
                for child in reversed(self.children_of(node)):
                    stack.append((child, depth + 1))
        return lines
