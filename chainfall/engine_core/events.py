"""
Event types for the rules engine.

Every accepted action yields an ordered, append-only list of events:
TurnStarted, CardPlayed?, TilePlaced?, TickResolved, WaveResolved*,
ScoreChanged?, GameEnded?. Consumers use them for animation and logging;
the engine never reads them back.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union

from .state import Coord, EndReason, Player, Tile
from .action import CardPlay


class GameEventType(str, Enum):
    TURN_STARTED = "turn-started"
    CARD_PLAYED = "card-played"
    TILE_PLACED = "tile-placed"
    TICK_RESOLVED = "tick-resolved"
    WAVE_RESOLVED = "wave-resolved"
    SCORE_CHANGED = "score-changed"
    GAME_ENDED = "game-ended"


@dataclass(frozen=True)
class TileDelta:
    """A tile's countdown before and after the tick."""
    tile_id: int
    before: int
    after: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.tile_id, "from": self.before, "to": self.after}


@dataclass(frozen=True)
class WallDelta:
    """A wall's ttl before and after the tick; removed walls end at 0."""
    wall_id: int
    before: int
    after: int
    removed: bool

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.wall_id, "from": self.before, "to": self.after, "removed": self.removed}


@dataclass(frozen=True)
class TurnStarted:
    turn: int
    active_player: Player

    @property
    def event_type(self) -> GameEventType:
        return GameEventType.TURN_STARTED

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.event_type.value, "turn": self.turn, "active_player": self.active_player.value}


@dataclass(frozen=True)
class CardPlayed:
    player: Player
    card: CardPlay

    @property
    def event_type(self) -> GameEventType:
        return GameEventType.CARD_PLAYED

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.event_type.value, "player": self.player.value, "card": self.card.to_dict()}


@dataclass(frozen=True)
class TilePlaced:
    player: Player
    at: Coord
    tile: Tile

    @property
    def event_type(self) -> GameEventType:
        return GameEventType.TILE_PLACED

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.event_type.value,
            "player": self.player.value,
            "at": self.at.to_dict(),
            "tile": self.tile.to_dict()["tile"],
        }


@dataclass(frozen=True)
class TickResolved:
    """Emitted on every accepted action, even when nothing ticked."""
    tiles: tuple[TileDelta, ...]
    walls: tuple[WallDelta, ...]

    @property
    def event_type(self) -> GameEventType:
        return GameEventType.TICK_RESOLVED

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.event_type.value,
            "tiles": [d.to_dict() for d in self.tiles],
            "walls": [d.to_dict() for d in self.walls],
        }


@dataclass(frozen=True)
class WaveResolved:
    """One generation of the cascade. Waves are numbered from 1."""
    wave: int
    exploding_tile_ids: tuple[int, ...]
    removed_tile_ids: tuple[int, ...]
    triggered_tile_ids: tuple[int, ...]
    points_gained: int

    @property
    def event_type(self) -> GameEventType:
        return GameEventType.WAVE_RESOLVED

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.event_type.value,
            "wave": self.wave,
            "exploding_tile_ids": list(self.exploding_tile_ids),
            "removed_tile_ids": list(self.removed_tile_ids),
            "triggered_tile_ids": list(self.triggered_tile_ids),
            "points_gained": self.points_gained,
        }


@dataclass(frozen=True)
class ScoreChanged:
    player: Player
    before: int
    after: int
    delta: int

    @property
    def event_type(self) -> GameEventType:
        return GameEventType.SCORE_CHANGED

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.event_type.value,
            "player": self.player.value,
            "from": self.before,
            "to": self.after,
            "delta": self.delta,
        }


@dataclass(frozen=True)
class GameEnded:
    reason: EndReason
    winner: Player
    final_scores: Mapping[Player, int]

    @property
    def event_type(self) -> GameEventType:
        return GameEventType.GAME_ENDED

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.event_type.value,
            "reason": self.reason.value,
            "winner": self.winner.value,
            "final_scores": {p.value: s for p, s in self.final_scores.items()},
        }


GameEvent = Union[
    TurnStarted,
    CardPlayed,
    TilePlaced,
    TickResolved,
    WaveResolved,
    ScoreChanged,
    GameEnded,
]
