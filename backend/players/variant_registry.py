"""
Registry for player variants.

Maps variant keys (e.g., 'search', 'random') to player classes.
To add a new variant, create a player module, import it lazily here and add
an entry to PLAYER_VARIANT_LOADERS and list_variants().
"""

from typing import Callable, Dict, Type, Optional
from .base import Player


# Lazy imports so the registry can be imported without the decision core
def _get_search_player() -> Type[Player]:
    from .search_player import SearchPlayer
    return SearchPlayer


def _get_random_player() -> Type[Player]:
    from .random_player import RandomPlayer
    return RandomPlayer


# Registry: maps variant key -> callable that returns the player class
PLAYER_VARIANT_LOADERS: Dict[str, Callable[[], Type[Player]]] = {
    "search": _get_search_player,
    "random": _get_random_player,
}

DEFAULT_VARIANT = "search"

# Canonical list of available variant keys
AVAILABLE_VARIANTS = list(PLAYER_VARIANT_LOADERS.keys())


def get_player_class(variant_key: Optional[str] = None) -> Type[Player]:
    """
    Get the player class for a given variant key.

    Args:
        variant_key: One of 'search' or 'random'. If None or empty, returns the default.

    Returns:
        The player class (subclass of Player).

    Raises:
        ValueError: If variant_key is not recognized.
    """
    if not variant_key or variant_key.strip() == "":
        variant_key = DEFAULT_VARIANT

    variant_key = variant_key.strip().lower()

    if variant_key not in PLAYER_VARIANT_LOADERS:
        available = ", ".join(AVAILABLE_VARIANTS)
        raise ValueError(
            f"Unknown player variant '{variant_key}'. Available variants: {available}"
        )

    return PLAYER_VARIANT_LOADERS[variant_key]()


def list_variants() -> list:
    """
    Return metadata about all available player variants.

    Returns:
        List of dicts with 'key' and 'description' for each variant.
    """
    return [
        {"key": "search", "description": "Breadth-first search to the nearest apple with head-on collision check"},
        {"key": "random", "description": "Random move among the non-lethal directions"},
    ]
