"""
Breadth-first traversal shared by the primary and secondary searches.

One routine, parameterised by the seed cells and an admission predicate,
so both searches expand, terminate and pick their terminal cell the same way.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, Iterable, List, Optional

from domain.direction import Direction
from domain.position import Position

from .contracts import BoardView

# admit(cell, direction_used_to_reach_it) -> bool
AdmitFn = Callable[[Position, Direction], bool]


@dataclass
class SearchResult:
    """
    Outcome of one traversal.

    visited maps every recorded cell to its predecessor (None for seeds) and
    keeps insertion order, so the first goal recorded is also the first key
    holding a goal. expanded is the dequeue order.
    """

    start: Position
    visited: Dict[Position, Optional[Position]]
    expanded: List[Position] = field(default_factory=list)
    goal: Optional[Position] = None

    @property
    def terminal(self) -> Position:
        """The goal if one was found, else the last (deepest) expanded cell."""
        if self.goal is not None:
            return self.goal
        return self.expanded[-1] if self.expanded else self.start

    def path_to(self, cell: Position) -> List[Position]:
        """Cells from the first step after start up to cell, in walking order."""
        path = []
        while cell is not None and cell != self.start:
            path.append(cell)
            cell = self.visited[cell]
        path.reverse()
        return path

    def first_step(self) -> Optional[Direction]:
        return first_step(self.visited, self.start, self.terminal)


def first_step(
    visited: Dict[Position, Optional[Position]],
    start: Position,
    terminal: Position,
) -> Optional[Direction]:
    """
    Walk predecessors back from terminal to the cell right after start and
    return the direction of that first move.

    Returns None when terminal is a seed cell (nothing past the seeds was
    reached), since there is no path to reconstruct.
    """
    cell = terminal
    previous = visited.get(cell)
    if previous is None:
        return None
    while previous != start:
        cell = previous
        previous = visited[cell]
    return Direction.between(start, cell)


def breadth_first_search(
    board: BoardView,
    start: Position,
    *,
    excluded: Iterable[Position] = (),
    admit: Optional[AdmitFn] = None,
) -> SearchResult:
    """
    Breadth-first traversal from start.

    Args:
        board: lethal/goal queries for the snapshot
        start: cell the search expands from
        excluded: extra cells marked visited up front and never entered
        admit: optional veto; a refused cell stays unvisited and can still be
            admitted later when reached from another cell

    The loop ends after the expansion that records the first goal cell, or
    when the frontier is empty. Seeds never count as goals.
    """
    start = Position(*start)
    visited: Dict[Position, Optional[Position]] = {start: None}
    for cell in excluded:
        visited.setdefault(Position(*cell), None)

    result = SearchResult(start=start, visited=visited)
    queue: Deque[Position] = deque([start])

    while queue and result.goal is None:
        current = queue.popleft()
        result.expanded.append(current)

        for direction in Direction:
            nxt = direction.step(current)
            if nxt in visited or board.is_lethal(nxt):
                continue
            if admit is not None and not admit(nxt, direction):
                continue
            visited[nxt] = current
            queue.append(nxt)
            if result.goal is None and board.has_goal(nxt):
                result.goal = nxt

    return result
