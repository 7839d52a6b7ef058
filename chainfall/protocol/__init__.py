"""
Protocol - the boundary between raw client data and the engine.

Inbound: pydantic models validate action payloads and config overrides.
Outbound: states and events serialize to plain JSON-compatible dicts.
"""

from .schemas import (
    CoordModel,
    PlacementModel,
    CardPlayModel,
    GameActionModel,
    GameConfigOverrides,
    ReplayScript,
    parse_action,
)
from .serialize import state_to_dict, event_to_dict, events_to_dicts, to_json

__all__ = [
    "CoordModel",
    "PlacementModel",
    "CardPlayModel",
    "GameActionModel",
    "GameConfigOverrides",
    "ReplayScript",
    "parse_action",
    "state_to_dict",
    "event_to_dict",
    "events_to_dicts",
    "to_json",
]
