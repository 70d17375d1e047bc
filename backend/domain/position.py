"""
Position value type - an (x, y) cell on the board.
"""

from typing import List, NamedTuple

# Same order as Direction: NORTH, EAST, SOUTH, WEST
NEIGHBOR_OFFSETS = ((0, 1), (1, 0), (0, -1), (-1, 0))


class Position(NamedTuple):
    """
    Grid coordinate. Equal (and hashes equal) to the plain (x, y) tuple,
    so it can be mixed freely with the tuples stored in GameState.
    """

    x: int
    y: int

    def neighbors(self) -> List["Position"]:
        """The four orthogonally adjacent cells, north first, clockwise."""
        return [Position(self.x + dx, self.y + dy) for dx, dy in NEIGHBOR_OFFSETS]

    def is_adjacent(self, other) -> bool:
        ox, oy = other
        return abs(self.x - ox) + abs(self.y - oy) == 1
