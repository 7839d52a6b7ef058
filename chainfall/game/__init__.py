"""
Game setup - builds the initial state a game starts from.
"""

from .setup import new_game, build_ordered_pool, POOL_COMPOSITION, DEFAULT_CONFIG

__all__ = [
    "new_game",
    "build_ordered_pool",
    "POOL_COMPOSITION",
    "DEFAULT_CONFIG",
]
