"""
Search player - drives a snake with the breadth-first decision core.
"""

import logging
from typing import Any, Dict

from decision import decide_next_move
from domain.game_state import GameState
from .base import Player

logger = logging.getLogger(__name__)


class SearchPlayer(Player):
    """
    Deterministic player: shortest safe path to the nearest apple, else the
    most open direction, corrected for likely head-on collisions.

    Holds no state between turns; everything is derived from the snapshot.
    """

    name = "bfs-search"

    def get_move(self, game_state: GameState) -> Dict[str, Any]:
        snake = game_state.snake(self.snake_id)
        direction = decide_next_move(snake, game_state)

        rationale = (
            f"Head at {tuple(snake.head)} moving {snake.direction.value}; "
            f"breadth-first search chose {direction.value}."
        )
        logger.debug("Player %s: %s", self.snake_id, rationale)

        return {
            "direction": direction.value,
            "rationale": rationale,
            "input_tokens": 0,
            "output_tokens": 0,
            "cost": 0.0,
        }
