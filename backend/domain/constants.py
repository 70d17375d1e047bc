"""
Game constants for the local engine and the search player.
"""

from .direction import Direction

# Movement directions (engine move strings)
UP = Direction.NORTH
DOWN = Direction.SOUTH
LEFT = Direction.WEST
RIGHT = Direction.EAST
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Default direction for a snake that has never moved
DEFAULT_DIRECTION = Direction.NORTH

# Board defaults
DEFAULT_WIDTH = 10
DEFAULT_HEIGHT = 10
DEFAULT_MAX_ROUNDS = 100
DEFAULT_NUM_APPLES = 5
