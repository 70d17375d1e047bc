"""
Breadth-first decision core for a snake.

Entry point is decide_next_move(snake, game_state). The searches and the
collision check are exposed for players and tests that need them directly.
"""

from .traversal import SearchResult, breadth_first_search, first_step
from .search import primary_search, primary_search_result, secondary_search
from .collision import alternative_directions, predicts_head_collision, resolve_collision
from .engine import decide_next_move, fallback_direction

__all__ = [
    'SearchResult',
    'breadth_first_search',
    'first_step',
    'primary_search',
    'primary_search_result',
    'secondary_search',
    'alternative_directions',
    'predicts_head_collision',
    'resolve_collision',
    'decide_next_move',
    'fallback_direction',
]
