"""
Action System - Actions, card plays, and results.

The core accepts a single action shape, TakeTurn, carrying an optional
card play and an optional placement. Payloads arrive already validated
(see protocol.schemas); the reducer still enforces every game rule.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union, TYPE_CHECKING

from .state import CardId, Coord

if TYPE_CHECKING:
    from .events import GameEvent
    from .state import GameState


TAKE_TURN = "take-turn"


class ErrorCode(str, Enum):
    """Structured rejection codes."""
    GAME_ENDED = "GAME_ENDED"
    INVALID_ACTION = "INVALID_ACTION"
    ILLEGAL_ACTION = "ILLEGAL_ACTION"


@dataclass(frozen=True)
class GameError:
    """Why an action was rejected."""
    code: ErrorCode
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code.value}
        if self.message is not None:
            data["message"] = self.message
        return data


class ActionRejected(Exception):
    """
    Raised inside the core when a phase rejects the action.

    Never escapes the reducer: Reducer.apply converts it into a failed
    ActionResult.
    """

    def __init__(self, code: ErrorCode, message: str | None = None):
        self.error = GameError(code=code, message=message)
        super().__init__(message or code.value)

    @classmethod
    def illegal(cls, message: str) -> ActionRejected:
        return cls(ErrorCode.ILLEGAL_ACTION, message)

    @classmethod
    def invalid(cls, message: str | None = None) -> ActionRejected:
        return cls(ErrorCode.INVALID_ACTION, message)


# =============================================================================
# Card plays
# =============================================================================

@dataclass(frozen=True)
class Reinforce:
    """Own tile: countdown + 1."""
    target: Coord

    @property
    def card_id(self) -> CardId:
        return CardId.REINFORCE

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.card_id.value, "target": self.target.to_dict()}


@dataclass(frozen=True)
class Accelerate:
    """Own tile: countdown - 1, never below 1."""
    target: Coord

    @property
    def card_id(self) -> CardId:
        return CardId.ACCELERATE

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.card_id.value, "target": self.target.to_dict()}


@dataclass(frozen=True)
class Fortify:
    """Own tile: exempt from non-origin blast removal this turn."""
    target: Coord

    @property
    def card_id(self) -> CardId:
        return CardId.FORTIFY

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.card_id.value, "target": self.target.to_dict()}


@dataclass(frozen=True)
class Shockwave:
    """This turn's blasts also reach diagonal neighbours."""

    @property
    def card_id(self) -> CardId:
        return CardId.SHOCKWAVE

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.card_id.value}


@dataclass(frozen=True)
class Transplant:
    """Swap two of the player's own tiles."""
    a: Coord
    b: Coord

    @property
    def card_id(self) -> CardId:
        return CardId.TRANSPLANT

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.card_id.value, "a": self.a.to_dict(), "b": self.b.to_dict()}


@dataclass(frozen=True)
class Sabotage:
    """Enemy tile: countdown - 1, never below 1."""
    target: Coord

    @property
    def card_id(self) -> CardId:
        return CardId.SABOTAGE

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.card_id.value, "target": self.target.to_dict()}


@dataclass(frozen=True)
class Firewall:
    """Place a two-tick wall on an empty cell."""
    target: Coord

    @property
    def card_id(self) -> CardId:
        return CardId.FIREWALL

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.card_id.value, "target": self.target.to_dict()}


@dataclass(frozen=True)
class Scavenge:
    """Swap the first two queue entries."""

    @property
    def card_id(self) -> CardId:
        return CardId.SCAVENGE

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.card_id.value}


CardPlay = Union[Reinforce, Accelerate, Fortify, Shockwave, Transplant, Sabotage, Firewall, Scavenge]
CARD_PLAY_TYPES = (Reinforce, Accelerate, Fortify, Shockwave, Transplant, Sabotage, Firewall, Scavenge)


# =============================================================================
# Actions
# =============================================================================

@dataclass(frozen=True)
class Placement:
    """Place the front queue value as a new tile at a cell."""
    at: Coord

    def to_dict(self) -> dict[str, Any]:
        return {"at": self.at.to_dict()}


@dataclass(frozen=True)
class TakeTurn:
    """
    The one action a player submits per turn.

    A placement is required exactly when the queue (after the card
    phase) is non-empty.
    """
    card: CardPlay | None = None
    placement: Placement | None = None

    @property
    def action_type(self) -> str:
        return TAKE_TURN

    @classmethod
    def place(cls, row: int, col: int, card: CardPlay | None = None) -> TakeTurn:
        """Factory for a turn with a placement."""
        return cls(card=card, placement=Placement(at=Coord(row, col)))

    @classmethod
    def pass_turn(cls, card: CardPlay | None = None) -> TakeTurn:
        """Factory for a turn without placement (queue exhausted)."""
        return cls(card=card)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.action_type}
        if self.card is not None:
            data["card"] = self.card.to_dict()
        if self.placement is not None:
            data["placement"] = self.placement.to_dict()
        return data


# Every action shape the core accepts; anything else is INVALID_ACTION
GameAction = TakeTurn


@dataclass
class ActionResult:
    """
    Result of applying an action.

    Contains:
    - Whether the action was accepted
    - New state and ordered events (if accepted)
    - The rejection (if not)
    """
    success: bool
    new_state: GameState | None = None
    events: list[GameEvent] = field(default_factory=list)
    error: GameError | None = None

    @property
    def error_code(self) -> ErrorCode | None:
        return self.error.code if self.error else None

    @classmethod
    def failure(cls, code: ErrorCode, message: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=GameError(code=code, message=message))

    @classmethod
    def success_with_state(cls, state: GameState, events: list[GameEvent]) -> ActionResult:
        """Create a success result with new state."""
        return cls(success=True, new_state=state, events=events)
