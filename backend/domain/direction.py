"""
Direction value type.

The four cardinal directions, in the fixed order NORTH, EAST, SOUTH, WEST.
Every search iterates in this order, which is what makes decisions
deterministic. Values are the engine's move strings, so a Direction compares
equal to "UP", "RIGHT", "DOWN" or "LEFT".
"""

from enum import Enum
from typing import Tuple, Union

from .position import Position


class Direction(str, Enum):
    NORTH = "UP"
    EAST = "RIGHT"
    SOUTH = "DOWN"
    WEST = "LEFT"

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]

    def step(self, position: Tuple[int, int]) -> Position:
        """Return the neighbour of position one cell away in this direction."""
        dx, dy = _DELTAS[self]
        x, y = position
        return Position(x + dx, y + dy)

    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    def is_opposite(self, other: "Direction") -> bool:
        return _OPPOSITES[self] is other

    @classmethod
    def between(cls, start: Tuple[int, int], end: Tuple[int, int]) -> "Direction":
        """
        Direction that moves from start to the adjacent cell end.

        Raises:
            ValueError: If the two cells are not orthogonally adjacent.
        """
        for direction in cls:
            if direction.step(start) == end:
                return direction
        raise ValueError(f"{tuple(end)} is not adjacent to {tuple(start)}")

    @classmethod
    def parse(cls, value: Union["Direction", str]) -> "Direction":
        """
        Accept a Direction or a move string such as "up" or "LEFT".

        Raises:
            ValueError: If the value names no direction.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        for direction in cls:
            if text in (direction.value, direction.name):
                return direction
        raise ValueError(f"Unknown direction '{value}'")

    def __str__(self) -> str:
        return self.value


# (0, 0) is the bottom-left cell; UP increases y.
_DELTAS = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}

_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.EAST: Direction.WEST,
    Direction.SOUTH: Direction.NORTH,
    Direction.WEST: Direction.EAST,
}
