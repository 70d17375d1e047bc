"""
Read-only query contract the decision core consumes.

domain.Board, domain.Snake and domain.GameState satisfy these, but any
object with the same shape works (the core never imports the engine).
"""

from typing import Iterable, Optional, Protocol, Tuple

from domain.direction import Direction
from domain.position import Position


class BoardView(Protocol):
    def is_lethal(self, cell: Tuple[int, int]) -> bool: ...

    def has_goal(self, cell: Tuple[int, int]) -> bool: ...


class SnakeView(Protocol):
    snake_id: Optional[str]
    alive: bool

    @property
    def head(self) -> Position: ...

    @property
    def direction(self) -> Direction: ...


class StateView(Protocol):
    @property
    def board(self) -> BoardView: ...

    def entities(self) -> Iterable[SnakeView]: ...
