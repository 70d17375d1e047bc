"""
One-step head-to-head collision check applied after the search.
"""

import logging
from typing import Iterable, List

from domain.direction import Direction
from domain.position import Position

from .contracts import BoardView, SnakeView

logger = logging.getLogger(__name__)


def _is_same_snake(a: SnakeView, b: SnakeView) -> bool:
    # Views of one snake may be distinct objects; bare snakes have no id.
    if a is b:
        return True
    return a.snake_id is not None and a.snake_id == b.snake_id


def predicts_head_collision(
    snake: SnakeView,
    target: Position,
    snakes: Iterable[SnakeView],
) -> bool:
    """
    True when another live snake's head is next to target and its last
    direction would carry it into target on this tick.
    """
    target = Position(*target)
    for other in snakes:
        if not other.alive or _is_same_snake(other, snake):
            continue
        if target.is_adjacent(other.head) and other.direction.step(other.head) == target:
            return True
    return False


def alternative_directions(current: Direction, rejected: Direction) -> List[Direction]:
    """Directions other than rejected and the reversal of current, in fixed order."""
    return [d for d in Direction if d is not rejected and d is not current.opposite()]


def resolve_collision(
    snake: SnakeView,
    chosen: Direction,
    board: BoardView,
    snakes: Iterable[SnakeView],
) -> Direction:
    """
    Keep chosen unless it probably ends in a head-to-head collision. In that
    case return the first alternative that is neither lethal nor itself a
    predicted collision, or chosen when there is none.
    """
    snakes = list(snakes)
    head = Position(*snake.head)

    if not predicts_head_collision(snake, chosen.step(head), snakes):
        return chosen

    for direction in alternative_directions(snake.direction, chosen):
        target = direction.step(head)
        if board.is_lethal(target) or predicts_head_collision(snake, target, snakes):
            continue
        logger.debug(
            "Snake %s: %s risks a head-on collision, taking %s instead",
            snake.snake_id, chosen.value, direction.value,
        )
        return direction

    logger.debug("Snake %s: no safe alternative to %s", snake.snake_id, chosen.value)
    return chosen
