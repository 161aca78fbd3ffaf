"""
UCB1 selection policy.

The score of a child relative to its parent balances the average observed
outcome (exploitation) against a bonus that shrinks as the child gets
visited more often than its siblings (exploration).
"""
import math


def upper_confidence_bound(
    child_aggregate_outcome: float,
    exploration_constant: float,
    parent_visits: int,
    child_visits: int
) -> float:
    """
    Calculate the UCB1 value of a child node.

    UCB1 = outcome / child_visits + C * sqrt(2 * ln(parent_visits) / child_visits)

    A larger exploration constant favours children that have not been
    explored much, a smaller one favours children that already score well.

    Args:
        child_aggregate_outcome: Sum of outcomes recorded at the child
        exploration_constant: The C parameter
        parent_visits: Visit count of the parent, at least 1
        child_visits: Visit count of the child, at least 1

    Returns:
        UCB1 score

    Raises:
        ValueError: If either visit count is below 1
    """
    if child_visits < 1 or parent_visits < 1:
        raise ValueError(
            f"UCB1 needs visited nodes (parent_visits={parent_visits}, "
            f"child_visits={child_visits})"
        )

    exploitation = child_aggregate_outcome / child_visits
    exploration = math.sqrt(2 * math.log(parent_visits) / child_visits)
    return exploitation + exploration_constant * exploration
