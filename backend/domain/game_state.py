"""
GameState entity - a snapshot of the game at a point in time.
"""

from typing import Any, List, Tuple, Dict, Optional

from .board import Board
from .constants import DEFAULT_DIRECTION
from .direction import Direction
from .snake import Snake


class GameState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        round_number: which round we are in (0-based)
        snake_positions: dict of snake_id -> list of (x, y)
        alive: dict of snake_id -> bool
        scores: dict of snake_id -> int
        width, height: board dimensions
        apples: list of (x, y) positions of all apples on the board
        move_history: list of dicts (one per round), each mapping snake_id -> move
        max_rounds: optional upper limit on total rounds
        obstacles: list of (x, y) wall cells inside the board
        directions: dict of snake_id -> last moved Direction, when known
    """

    def __init__(
        self,
        round_number: int,
        snake_positions: Dict[str, List[Tuple[int, int]]],
        alive: Dict[str, bool],
        scores: Dict[str, int],
        width: int,
        height: int,
        apples: List[Tuple[int, int]],
        move_history: List[Dict[str, Any]],
        max_rounds: Optional[int] = None,
        obstacles: Optional[List[Tuple[int, int]]] = None,
        directions: Optional[Dict[str, Direction]] = None,
    ):
        self.round_number = round_number
        self.snake_positions = snake_positions
        self.alive = alive
        self.scores = scores
        self.width = width
        self.height = height
        self.apples = apples
        self.move_history = move_history
        self.max_rounds = max_rounds
        self.obstacles = obstacles or []
        self.directions = directions or {}

    @property
    def board(self) -> Board:
        """Cell queries for this snapshot. Only live snakes occupy cells."""
        bodies = [
            cell
            for sid, positions in self.snake_positions.items()
            if self.alive.get(sid, False)
            for cell in positions
        ]
        return Board(self.width, self.height, self.apples, bodies, self.obstacles)

    def current_direction(self, snake_id: str) -> Direction:
        """
        Last moved direction of a snake.

        Uses the explicit direction if the snapshot has one, then the
        head-minus-neck vector, then the last recorded move, then NORTH.
        """
        if snake_id in self.directions:
            return Direction.parse(self.directions[snake_id])

        positions = self.snake_positions[snake_id]
        if len(positions) > 1:
            try:
                return Direction.between(positions[1], positions[0])
            except ValueError:
                pass  # stacked or detached segments, fall through to the history

        for round_moves in reversed(self.move_history):
            move = round_moves.get(snake_id)
            if move is None:
                continue
            if isinstance(move, dict):
                move = move.get("move") or move.get("direction")
            if move:
                return Direction.parse(move)

        return DEFAULT_DIRECTION

    def snake(self, snake_id: str) -> Snake:
        """
        Fresh Snake view of one snake in this snapshot.

        Raises:
            KeyError: If the snake_id is not part of the game.
        """
        if snake_id not in self.snake_positions:
            raise KeyError(f"Unknown snake '{snake_id}'")
        snake = Snake(
            self.snake_positions[snake_id],
            direction=self.current_direction(snake_id),
            snake_id=snake_id,
        )
        snake.alive = self.alive.get(snake_id, False)
        return snake

    def entities(self) -> List[Snake]:
        """Snake views for every snake, dead ones included."""
        return [self.snake(sid) for sid in self.snake_positions]

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        A = apple
        # = obstacle
        T = snake tail
        0,1,2... = snake head (showing player number)
        Now with (0,0) at bottom left and x-axis labels at bottom
        """
        # Create empty board
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        for ox, oy in self.obstacles:
            board[oy][ox] = '#'

        # Place apples
        for ax, ay in self.apples:
            board[ay][ax] = 'A'

        # Place snakes
        for i, (snake_id, positions) in enumerate(self.snake_positions.items(), start=0):
            if not self.alive[snake_id]:
                continue

            # Place snake body
            for pos_idx, (x, y) in enumerate(positions):
                if pos_idx == 0:  # Head
                    board[y][x] = str(i)  # Use snake number (0, 1, 2...) for head
                else:  # Body/tail
                    board[y][x] = 'T'

        # Build the string representation
        result = []
        # Print rows in reverse order (bottom to top)
        for y in range(self.height - 1, -1, -1):
            result.append(f"{y:2d} {' '.join(board[y])}")

        # Add x-axis labels at the bottom
        result.append("   " + " ".join(str(i) for i in range(self.width)))

        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState round={self.round_number}, apples={self.apples}, "
            f"snakes={len(self.snake_positions)}, scores={self.scores}>"
        )
