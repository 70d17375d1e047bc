"""
Decision engine - the single per-tick entry point.

Stateless: every call builds its own search structures from the snapshot it
is given and keeps nothing afterwards, so it is safe to call for several
snakes at once.
"""

import logging

from domain.direction import Direction

from .collision import resolve_collision
from .contracts import BoardView, SnakeView, StateView
from .search import primary_search

logger = logging.getLogger(__name__)


def fallback_direction(board: BoardView, snake: SnakeView) -> Direction:
    """
    Move for a head with nowhere to go: the first non-reversal direction
    whose cell is not lethal, else keep going straight.

    A one-cell snake whose only open neighbour lies behind it still keeps
    its current direction into a lethal cell. Reversing is never chosen.
    """
    for direction in Direction:
        if direction.is_opposite(snake.direction):
            continue
        if not board.is_lethal(direction.step(snake.head)):
            return direction
    return snake.direction


def decide_next_move(snake: SnakeView, state: StateView) -> Direction:
    """
    Choose the direction for snake on this tick.

    Runs the primary search from the head, falls back when the head is boxed
    in, then passes the choice through the head-to-head collision check.
    """
    board = state.board
    chosen = primary_search(board, snake.head, snake.direction)
    if chosen is None:
        chosen = fallback_direction(board, snake)
        logger.debug("Snake %s is boxed in, falling back to %s", snake.snake_id, chosen.value)

    final = resolve_collision(snake, chosen, board, state.entities())
    logger.debug("Snake %s at %s decided %s", snake.snake_id, tuple(snake.head), final.value)
    return final
