"""
Player implementations.

This module contains the player abstractions and implementations
that control snake movement decisions.
"""

from .base import Player
from .random_player import RandomPlayer
from .search_player import SearchPlayer
from .variant_registry import get_player_class, list_variants, AVAILABLE_VARIANTS

__all__ = [
    'Player',
    'RandomPlayer',
    'SearchPlayer',
    'get_player_class',
    'list_variants',
    'AVAILABLE_VARIANTS',
]
