"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List

from domain.constants import VALID_MOVES
from domain.direction import Direction
from domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a valid direction that avoids walls, obstacles
    and snake bodies.
    """

    def __init__(self, snake_id: str, rng: random.Random = None):
        super().__init__(snake_id)
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> str:
        snake_positions = game_state.snake_positions[self.snake_id]
        head = snake_positions[0]
        board = game_state.board
        own_tail = tuple(snake_positions[-1]) if len(snake_positions) > 1 else None

        # Filter out moves that:
        # 1. Hit walls or obstacles
        # 2. Hit a body (except our own tail, which will move)
        valid_moves: List[str] = []
        for direction in Direction:
            target = direction.step(head)
            if board.is_lethal(target) and target != own_tail:
                continue
            valid_moves.append(direction.value)

        # If no valid moves, just return a random move (we'll die anyway)
        if not valid_moves:
            return self.rng.choice(sorted(VALID_MOVES))

        return self.rng.choice(valid_moves)
