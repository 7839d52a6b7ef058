"""
Serialization - JSON-compatible dicts for states and events.

Output is deterministic: board rows in order, players in seat order,
used cards sorted. Two runs of the same replay therefore serialize to
byte-identical JSON.
"""

from __future__ import annotations
import json
from typing import Any, Iterable

from ..engine_core.state import GameState, Player
from ..engine_core.events import GameEvent

SEAT_ORDER = (Player.BLUE, Player.RED)


def _per_player(mapping, convert=lambda v: v) -> dict[str, Any]:
    return {p.value: convert(mapping.get(p)) for p in SEAT_ORDER if p in mapping}


def state_to_dict(state: GameState) -> dict[str, Any]:
    """Convert a GameState into plain JSON-compatible data."""
    return {
        "protocol_version": state.protocol_version,
        "version": state.version,
        "config": state.config.to_dict(),
        "seed": state.seed,
        "turn": state.turn,
        "active_player": state.active_player.value,
        "scores": _per_player(state.scores),
        "bag": list(state.bag),
        "queue": list(state.queue),
        "board": [[cell.to_dict() for cell in row] for row in state.board],
        "next_ids": {"tile": state.next_ids.tile, "wall": state.next_ids.wall},
        "last_placement_by": state.last_placement_by.value if state.last_placement_by else None,
        "turn_effects": {
            "shockwave": state.turn_effects.shockwave,
            "fortified_tile_ids": list(state.turn_effects.fortified_tile_ids),
        },
        "cards": {
            "enabled": state.cards.enabled,
            "card_played_this_turn": state.cards.card_played_this_turn,
            "played_count": _per_player(state.cards.played_count),
            "used": _per_player(state.cards.used, lambda ids: sorted(c.value for c in ids)),
        },
        "status": state.status.to_dict(),
    }


def event_to_dict(event: GameEvent) -> dict[str, Any]:
    return event.to_dict()


def events_to_dicts(events: Iterable[GameEvent]) -> list[dict[str, Any]]:
    return [event.to_dict() for event in events]


def to_json(data: Any, indent: int | None = 2) -> str:
    """Stable JSON encoding (sorted keys) for output and comparisons."""
    return json.dumps(data, indent=indent, sort_keys=True)
