"""
Domain entities for the snake game and its search player.

This module contains the core game entities that are independent of
the engine loop and of the decision logic.
"""

from .position import Position
from .direction import Direction
from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, DEFAULT_DIRECTION
from .board import Board
from .snake import Snake
from .game_state import GameState

__all__ = [
    'Position',
    'Direction',
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'DEFAULT_DIRECTION',
    'Board',
    'Snake',
    'GameState',
]
