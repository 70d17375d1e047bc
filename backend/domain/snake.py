"""
Snake entity for the game engine.
"""

from collections import deque
from typing import List, Tuple, Optional

from .constants import DEFAULT_DIRECTION
from .direction import Direction
from .position import Position


class Snake:
    """
    Represents a snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
        direction: the direction the snake moved last
        snake_id: id of the snake in the game (optional for bare snakes)
        alive: whether this snake is still alive
        death_reason: e.g., 'wall', 'obstacle', 'body_collision', 'head_collision'
        death_round: The round number when the snake died
    """

    def __init__(
        self,
        positions: List[Tuple[int, int]],
        direction: Direction = DEFAULT_DIRECTION,
        snake_id: Optional[str] = None,
    ):
        self.positions = deque(positions)
        self.direction = Direction.parse(direction)
        self.snake_id = snake_id
        self.alive = True
        self.death_reason: Optional[str] = None
        self.death_round: Optional[int] = None

    @property
    def head(self) -> Position:
        """Return the head position (first element)."""
        return Position(*self.positions[0])

    def __repr__(self):
        return (
            f"<Snake id={self.snake_id} head={tuple(self.head)} "
            f"direction={self.direction.value} length={len(self.positions)} alive={self.alive}>"
        )
