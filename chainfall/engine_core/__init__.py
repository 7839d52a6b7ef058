"""
Engine Core - Deterministic turn resolution.

The engine is the pure state-transition function that:
1. Validates a TakeTurn action against the current GameState
2. Resolves the optional card play
3. Places the next queued tile
4. Ticks every tile and wall
5. Resolves detonation cascades wave by wave
6. Scores, checks for game end, and assembles the next GameState
"""

from .state import (
    GameState,
    GameConfig,
    Player,
    CardId,
    EndReason,
    Coord,
    Tile,
    Wall,
    Empty,
    EMPTY,
    InProgress,
    Ended,
)
from .action import (
    TakeTurn,
    Placement,
    CardPlay,
    ActionResult,
    ErrorCode,
    GameError,
)
from .events import GameEvent, GameEventType
from .reducer import Reducer, apply_action

__all__ = [
    "GameState",
    "GameConfig",
    "Player",
    "CardId",
    "EndReason",
    "Coord",
    "Tile",
    "Wall",
    "Empty",
    "EMPTY",
    "InProgress",
    "Ended",
    "TakeTurn",
    "Placement",
    "CardPlay",
    "ActionResult",
    "ErrorCode",
    "GameError",
    "GameEvent",
    "GameEventType",
    "Reducer",
    "apply_action",
]
