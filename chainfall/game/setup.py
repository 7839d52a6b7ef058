"""
Chainfall Game Setup - Creates initial game state.

This module handles:
- Building the draw pool (countdown values 1-4)
- Shuffling with seed for determinism
- Splitting the pool into queue and bag
- Merging config overrides onto the standard ruleset

The per-action engine never touches randomness: once the pool order is
fixed here, every later transition is a pure function of the actions.
"""

from __future__ import annotations
import random
from typing import Any, Mapping

from ..engine_core.state import (
    CardsState,
    GameConfig,
    GameState,
    InProgress,
    NextIds,
    Player,
    TurnEffects,
    empty_board,
)

# countdown value -> copies in the draw pool
POOL_COMPOSITION: dict[int, int] = {1: 8, 2: 10, 3: 10, 4: 8}

DEFAULT_CONFIG = GameConfig()


def new_game(
    seed: int,
    starting_player: Player = Player.BLUE,
    config: GameConfig | Mapping[str, Any] | None = None,
) -> GameState:
    """
    Set up a new Chainfall game.

    Args:
        seed: Seed for the deterministic draw-pool shuffle
        starting_player: Player who takes turn 1
        config: Full GameConfig, or a mapping of overrides merged onto
            the defaults (the mapping itself is never modified)

    Returns:
        Initial GameState ready for play
    """
    game_config = _resolve_config(config)
    pool = _shuffle_pool(seed)

    queue_size = min(game_config.queue_size, len(pool))
    queue, bag = pool[:queue_size], pool[queue_size:]

    return GameState(
        config=game_config,
        active_player=Player(starting_player),
        board=empty_board(game_config.board_size),
        bag=tuple(bag),
        queue=tuple(queue),
        scores={Player.BLUE: 0, Player.RED: 0},
        version=0,
        turn=1,
        seed=seed,
        next_ids=NextIds(tile=1, wall=1),
        last_placement_by=None,
        turn_effects=TurnEffects(),
        cards=CardsState(enabled=game_config.cards_enabled),
        status=InProgress(),
    )


def _resolve_config(config: GameConfig | Mapping[str, Any] | None) -> GameConfig:
    if isinstance(config, GameConfig):
        return config
    return DEFAULT_CONFIG.with_overrides(config)


def build_ordered_pool() -> list[int]:
    """The unshuffled draw pool: 36 countdown values."""
    pool: list[int] = []
    for countdown, copies in POOL_COMPOSITION.items():
        pool.extend([countdown] * copies)
    return pool


def _shuffle_pool(seed: int) -> list[int]:
    """Shuffle the pool with a seeded RNG so the same seed gives the same order."""
    rng = random.Random(seed)
    pool = build_ordered_pool()
    rng.shuffle(pool)
    return pool
