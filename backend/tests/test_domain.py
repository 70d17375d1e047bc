"""
Tests for the domain value types and snapshot views.
"""

import os
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import Board, Direction, Position, Snake, UP, DOWN, LEFT, RIGHT, VALID_MOVES


class TestPosition:
    """Tests for the Position value type."""

    def test_equal_to_plain_tuple(self):
        """Position compares and hashes like the (x, y) tuples GameState stores."""
        assert Position(2, 3) == (2, 3)
        assert {(2, 3): "cell"}[Position(2, 3)] == "cell"

    def test_neighbors_in_direction_order(self):
        """neighbors() lists north, east, south, west."""
        assert Position(2, 2).neighbors() == [(2, 3), (3, 2), (2, 1), (1, 2)]
        assert Position(2, 2).neighbors() == [d.step((2, 2)) for d in Direction]

    def test_is_adjacent(self):
        assert Position(1, 1).is_adjacent((1, 2))
        assert not Position(1, 1).is_adjacent((2, 2))
        assert not Position(1, 1).is_adjacent((1, 1))


class TestDirection:
    """Tests for the Direction enum."""

    def test_iteration_order_is_fixed(self):
        assert list(Direction) == [Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST]

    def test_values_are_engine_moves(self):
        """Directions double as the engine's move strings."""
        assert Direction.NORTH == "UP"
        assert Direction.WEST == "LEFT"
        assert VALID_MOVES == {"UP", "DOWN", "LEFT", "RIGHT"}
        assert (UP, DOWN, LEFT, RIGHT) == (
            Direction.NORTH, Direction.SOUTH, Direction.WEST, Direction.EAST
        )

    def test_step_uses_bottom_left_origin(self):
        assert Direction.NORTH.step((3, 3)) == (3, 4)
        assert Direction.EAST.step((3, 3)) == (4, 3)
        assert Direction.SOUTH.step((3, 3)) == (3, 2)
        assert Direction.WEST.step((3, 3)) == (2, 3)

    def test_opposites(self):
        for direction in Direction:
            assert direction.opposite().opposite() is direction
            assert direction.opposite() is not direction
            assert direction.is_opposite(direction.opposite())
        assert Direction.NORTH.opposite() is Direction.SOUTH
        assert Direction.EAST.opposite() is Direction.WEST

    def test_between_adjacent_cells(self):
        assert Direction.between((1, 1), (1, 2)) is Direction.NORTH
        assert Direction.between((1, 1), (0, 1)) is Direction.WEST

    def test_between_rejects_distant_cells(self):
        with pytest.raises(ValueError):
            Direction.between((1, 1), (3, 1))

    def test_parse(self):
        assert Direction.parse("up") is Direction.NORTH
        assert Direction.parse(" Right ") is Direction.EAST
        assert Direction.parse("WEST") is Direction.WEST
        assert Direction.parse(Direction.SOUTH) is Direction.SOUTH

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            Direction.parse("sideways")
        with pytest.raises(ValueError):
            Direction.parse(None)


class TestBoard:
    """Tests for Board cell queries."""

    def test_out_of_bounds_is_lethal(self):
        board = Board(3, 3)
        assert board.is_lethal((-1, 0))
        assert board.is_lethal((3, 1))
        assert board.is_lethal((1, 3))
        assert not board.is_lethal((2, 2))

    def test_bodies_and_obstacles_are_lethal(self):
        board = Board(5, 5, bodies=[(1, 1), (1, 2)], obstacles=[(4, 4)])
        assert board.is_lethal((1, 1))
        assert board.is_lethal(Position(1, 2))
        assert board.is_lethal((4, 4))
        assert not board.is_lethal((0, 0))

    def test_has_goal(self):
        board = Board(5, 5, apples=[(2, 3)])
        assert board.has_goal((2, 3))
        assert board.has_goal(Position(2, 3))
        assert not board.has_goal((3, 2))


class TestSnake:
    """Tests for the Snake entity."""

    def test_head_is_position(self):
        snake = Snake([(5, 5), (4, 5)], direction="RIGHT", snake_id="0")
        assert snake.head == (5, 5)
        assert isinstance(snake.head, Position)
        assert snake.direction is Direction.EAST

    def test_default_direction(self):
        assert Snake([(0, 0)]).direction is Direction.NORTH


class TestGameStateViews:
    """Tests for the board and snake views of a GameState."""

    def test_board_ignores_dead_snakes(self, make_state):
        state = make_state(
            snakes={"0": [(1, 1), (1, 0)], "1": [(3, 3), (3, 4)]},
            alive={"1": False},
            obstacles=[(0, 4)],
            apples=[(2, 2)],
        )
        board = state.board
        assert board.is_lethal((1, 0))
        assert not board.is_lethal((3, 3))
        assert board.is_lethal((0, 4))
        assert board.has_goal((2, 2))

    def test_explicit_direction_wins(self, make_state):
        state = make_state(snakes={"0": [(2, 2), (2, 1)]}, directions={"0": "LEFT"})
        assert state.current_direction("0") is Direction.WEST

    def test_direction_inferred_from_neck(self, make_state):
        state = make_state(snakes={"0": [(2, 2), (1, 2), (0, 2)]})
        assert state.current_direction("0") is Direction.EAST

    def test_direction_inferred_from_move_history(self, make_state):
        state = make_state(snakes={"0": [(2, 2)]})
        state.move_history = [{"0": {"move": "DOWN"}}, {"1": {"move": "UP"}}]
        assert state.current_direction("0") is Direction.SOUTH

    def test_direction_defaults_to_north(self, make_state):
        state = make_state(snakes={"0": [(2, 2)]})
        assert state.current_direction("0") is Direction.NORTH

    def test_snake_view(self, make_state):
        state = make_state(snakes={"0": [(2, 2), (2, 1)]}, alive={"0": False})
        snake = state.snake("0")
        assert snake.snake_id == "0"
        assert snake.head == (2, 2)
        assert snake.direction is Direction.NORTH
        assert snake.alive is False

    def test_unknown_snake_raises(self, make_state):
        with pytest.raises(KeyError):
            make_state().snake("missing")

    def test_entities_are_fresh_copies(self, make_state):
        state = make_state(snakes={"0": [(2, 2)], "1": [(4, 4)]})
        entities = state.entities()
        assert [s.snake_id for s in entities] == ["0", "1"]
        entities[0].positions.appendleft((2, 3))
        assert state.snake_positions["0"] == [(2, 2)]

    def test_print_board_shows_obstacles(self, make_state):
        state = make_state(snakes={"0": [(1, 1)]}, obstacles=[(3, 3)], apples=[(0, 0)])
        rendered = state.print_board()
        assert "#" in rendered
        assert "A" in rendered
