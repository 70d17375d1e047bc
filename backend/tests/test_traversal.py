"""
Tests for the shared breadth-first traversal and path reconstruction.
"""

import os
import sys

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from decision.traversal import breadth_first_search, first_step
from domain import Board, Direction, Position


OBSTACLE_COURSE = Board(
    6, 5,
    obstacles=[(1, 1), (1, 2), (1, 3), (3, 0), (3, 1), (3, 3), (4, 3)],
)


def distance(result, cell):
    return len(result.path_to(cell))


class TestBreadthFirstSearch:
    """Invariants of the traversal itself."""

    def test_every_reachable_cell_recorded_once(self):
        result = breadth_first_search(OBSTACLE_COURSE, Position(0, 0))
        free = [
            (x, y) for x in range(6) for y in range(5)
            if not OBSTACLE_COURSE.is_lethal((x, y))
        ]
        assert sorted(result.visited) == sorted(free)
        assert len(result.expanded) == len(set(result.expanded)) == len(free)

    def test_expansion_distance_never_decreases(self):
        result = breadth_first_search(OBSTACLE_COURSE, Position(0, 0))
        distances = [distance(result, cell) for cell in result.expanded]
        assert distances == sorted(distances)

    def test_terminal_is_deepest_cell_without_goal(self):
        result = breadth_first_search(OBSTACLE_COURSE, Position(0, 0))
        assert result.goal is None
        assert result.terminal == result.expanded[-1]
        deepest = max(distance(result, cell) for cell in result.visited)
        assert distance(result, result.terminal) == deepest

    def test_excluded_cells_are_never_entered(self):
        board = Board(3, 1)
        result = breadth_first_search(board, Position(1, 0), excluded=[Position(0, 0)])
        assert result.visited[Position(0, 0)] is None
        assert result.expanded == [(1, 0), (2, 0)]

    def test_stops_after_expansion_that_finds_goal(self):
        board = Board(5, 5, apples=[(2, 4)])
        result = breadth_first_search(board, Position(2, 2))
        assert result.goal == (2, 4)
        assert result.terminal == (2, 4)
        # (2, 3) found the goal; nothing after it was expanded
        assert result.expanded[-1] == (2, 3)

    def test_first_goal_recorded_wins_ties(self):
        """Two apples at the same distance: the one discovered first is kept."""
        board = Board(5, 5, apples=[(2, 4), (4, 2)])
        result = breadth_first_search(board, Position(2, 2))
        assert result.goal == (2, 4)
        goals = [cell for cell in result.visited if board.has_goal(cell)]
        assert goals[0] == result.goal

    def test_seed_cells_never_count_as_goals(self):
        board = Board(3, 1, apples=[(1, 0), (0, 0)])
        result = breadth_first_search(board, Position(1, 0), excluded=[Position(0, 0)])
        assert result.goal is None

    def test_admit_refusal_leaves_cell_unvisited(self):
        board = Board(3, 3)
        refused = []

        def admit(cell, direction):
            if cell == (2, 1) and direction is Direction.EAST:
                refused.append(cell)
                return False
            return True

        result = breadth_first_search(board, Position(1, 1), admit=admit)
        assert refused == [(2, 1)]
        # still reached later from another angle
        assert result.visited[Position(2, 1)] in {(2, 2), (2, 0)}

    def test_isolated_start(self):
        board = Board(1, 1)
        result = breadth_first_search(board, Position(0, 0))
        assert result.expanded == [(0, 0)]
        assert result.terminal == (0, 0)
        assert result.first_step() is None


class TestFirstStep:
    """Tests for walking the predecessor map back to the start."""

    def test_walks_back_to_first_move(self):
        start = Position(0, 0)
        visited = {
            start: None,
            Position(0, 1): start,
            Position(1, 1): Position(0, 1),
            Position(2, 1): Position(1, 1),
        }
        assert first_step(visited, start, Position(2, 1)) is Direction.NORTH

    def test_adjacent_terminal(self):
        start = Position(3, 3)
        visited = {start: None, Position(2, 3): start}
        assert first_step(visited, start, Position(2, 3)) is Direction.WEST

    def test_seed_terminal_has_no_step(self):
        start = Position(3, 3)
        assert first_step({start: None}, start, start) is None

    def test_path_to(self):
        board = Board(4, 1)
        result = breadth_first_search(board, Position(0, 0))
        assert result.path_to(Position(3, 0)) == [(1, 0), (2, 0), (3, 0)]
