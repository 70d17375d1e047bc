"""
Pytest configuration and fixtures for the search player tests.
"""

import os
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.direction import Direction  # noqa: E402
from domain.game_state import GameState  # noqa: E402


def parse_grid(rows):
    """
    Read a picture of the board, top row first.

    '#' is an obstacle, 'A' an apple, anything else is an empty cell.
    Returns (width, height, obstacles, apples) with (0, 0) at bottom left.
    """
    rows = [row.split() for row in rows]
    height = len(rows)
    width = len(rows[0])
    obstacles, apples = [], []
    for r, row in enumerate(rows):
        y = height - 1 - r
        for x, char in enumerate(row):
            if char == '#':
                obstacles.append((x, y))
            elif char == 'A':
                apples.append((x, y))
    return width, height, obstacles, apples


def build_state(
    width=5,
    height=5,
    snakes=None,
    apples=(),
    obstacles=(),
    directions=None,
    alive=None,
    grid=None,
):
    """GameState from explicit parts, or from a grid picture plus snakes."""
    if grid is not None:
        width, height, obstacles, grid_apples = parse_grid(grid)
        apples = list(apples) + grid_apples

    snakes = snakes or {}
    alive = alive or {}
    directions = {sid: Direction.parse(d) for sid, d in (directions or {}).items()}
    return GameState(
        round_number=0,
        snake_positions={sid: list(body) for sid, body in snakes.items()},
        alive={sid: alive.get(sid, True) for sid in snakes},
        scores={sid: 0 for sid in snakes},
        width=width,
        height=height,
        apples=list(apples),
        move_history=[],
        max_rounds=100,
        obstacles=list(obstacles),
        directions=directions,
    )


@pytest.fixture
def make_state():
    """Factory fixture building GameState snapshots for decision tests."""
    return build_state
