"""
Board - read-only cell queries over a GameState snapshot.
"""

from typing import FrozenSet, Iterable, Tuple

Cell = Tuple[int, int]


class Board:
    """
    Fixed-size grid built from a snapshot.

    A cell is lethal when it is outside the board, holds an obstacle, or is
    covered by any segment of a live snake. Dead snakes are off the board.
    """

    def __init__(
        self,
        width: int,
        height: int,
        apples: Iterable[Cell] = (),
        bodies: Iterable[Cell] = (),
        obstacles: Iterable[Cell] = (),
    ):
        self.width = width
        self.height = height
        self.apples: FrozenSet[Cell] = frozenset(tuple(a) for a in apples)
        self.blocked: FrozenSet[Cell] = frozenset(
            [tuple(c) for c in bodies] + [tuple(c) for c in obstacles]
        )

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def is_lethal(self, cell: Cell) -> bool:
        return not self.in_bounds(cell) or tuple(cell) in self.blocked

    def has_goal(self, cell: Cell) -> bool:
        return tuple(cell) in self.apples

    def __repr__(self):
        return f"<Board {self.width}x{self.height} apples={len(self.apples)} blocked={len(self.blocked)}>"
