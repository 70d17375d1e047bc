"""
Primary and secondary breadth-first searches.

primary_search picks the move for this tick: the first step towards the
nearest goal it may approach, or towards the deepest reachable cell when no
goal qualifies. secondary_search answers "after eating the goal at this
cell, which way would I go next" and is used only to veto approach angles
that would make the snake double back.
"""

import logging
from typing import Dict, Optional

from domain.direction import Direction
from domain.position import Position

from .contracts import BoardView
from .traversal import SearchResult, breadth_first_search

logger = logging.getLogger(__name__)


def secondary_search(board: BoardView, goal: Position) -> Optional[Direction]:
    """
    Favoured direction to continue in right after reaching goal.

    Seeded with the goal cell only; the snake's heading after eating is not
    committed yet, so nothing else is excluded. Returns None when the goal
    has no open neighbour.
    """
    return breadth_first_search(board, goal).first_step()


def primary_search_result(
    board: BoardView,
    head: Position,
    current: Direction,
) -> SearchResult:
    """Run the primary traversal and return the full SearchResult."""
    head = Position(*head)
    neck = current.opposite().step(head)
    afterwards: Dict[Position, Optional[Direction]] = {}

    def admit(cell: Position, direction: Direction) -> bool:
        if not board.has_goal(cell):
            return True
        if cell not in afterwards:
            afterwards[cell] = secondary_search(board, cell)
        vetoed = afterwards[cell] is not None and afterwards[cell].is_opposite(direction)
        if vetoed:
            logger.debug(
                "Approach %s into goal %s vetoed, next move would be %s",
                direction.value, tuple(cell), afterwards[cell].value,
            )
        return not vetoed

    return breadth_first_search(board, head, excluded=(neck,), admit=admit)


def primary_search(
    board: BoardView,
    head: Position,
    current: Direction,
) -> Optional[Direction]:
    """
    Direction to move this tick, or None when nothing beyond the head and
    neck is reachable.

    The cell behind the head is seeded as visited, so the answer is never a
    reversal of current.
    """
    result = primary_search_result(board, head, current)
    direction = result.first_step()
    if result.goal is not None:
        logger.debug(
            "Goal %s at distance %d, heading %s",
            tuple(result.goal), len(result.path_to(result.goal)),
            direction.value,
        )
    else:
        logger.debug(
            "No goal reachable, heading %s towards %s (%d cells reachable)",
            direction.value if direction else None,
            tuple(result.terminal), len(result.expanded) - 1,
        )
    return direction
