"""
Pydantic Schemas for the wire protocol - action payloads and config overrides.

These models define the exact contract between clients and the engine.
Raw JSON is validated here, strictly (unknown fields are rejected), and
converted into the engine's own action types. The engine core never sees
unvalidated input.

Coordinates are bounds-checked against the board size passed in the
validation context ({"board_size": n}); the standard board size is used
when no context is given.
"""

from __future__ import annotations
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, model_validator

from ..engine_core.action import (
    Accelerate,
    CardPlay,
    Firewall,
    Fortify,
    Placement,
    Reinforce,
    Sabotage,
    Scavenge,
    Shockwave,
    TakeTurn,
    Transplant,
)
from ..engine_core.state import Coord, GameConfig, Player

DEFAULT_BOARD_SIZE = GameConfig().board_size


class _StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


# =============================================================================
# Shared Models
# =============================================================================

class CoordModel(_StrictModel):
    """A board coordinate."""
    row: int = Field(ge=0, strict=True)
    col: int = Field(ge=0, strict=True)

    @model_validator(mode="after")
    def _check_on_board(self, info: ValidationInfo) -> CoordModel:
        board_size = DEFAULT_BOARD_SIZE
        if info.context and info.context.get("board_size") is not None:
            board_size = info.context["board_size"]
        if self.row >= board_size or self.col >= board_size:
            raise ValueError("Coord out of board bounds")
        return self

    def to_coord(self) -> Coord:
        return Coord(row=self.row, col=self.col)


class PlacementModel(_StrictModel):
    at: CoordModel

    def to_placement(self) -> Placement:
        return Placement(at=self.at.to_coord())


# =============================================================================
# Card plays (discriminated on "id")
# =============================================================================

class ReinforceModel(_StrictModel):
    id: Literal["reinforce"]
    target: CoordModel

    def to_card(self) -> CardPlay:
        return Reinforce(target=self.target.to_coord())


class AccelerateModel(_StrictModel):
    id: Literal["accelerate"]
    target: CoordModel

    def to_card(self) -> CardPlay:
        return Accelerate(target=self.target.to_coord())


class FortifyModel(_StrictModel):
    id: Literal["fortify"]
    target: CoordModel

    def to_card(self) -> CardPlay:
        return Fortify(target=self.target.to_coord())


class ShockwaveModel(_StrictModel):
    id: Literal["shockwave"]

    def to_card(self) -> CardPlay:
        return Shockwave()


class TransplantModel(_StrictModel):
    id: Literal["transplant"]
    a: CoordModel
    b: CoordModel

    def to_card(self) -> CardPlay:
        return Transplant(a=self.a.to_coord(), b=self.b.to_coord())


class SabotageModel(_StrictModel):
    id: Literal["sabotage"]
    target: CoordModel

    def to_card(self) -> CardPlay:
        return Sabotage(target=self.target.to_coord())


class FirewallModel(_StrictModel):
    id: Literal["firewall"]
    target: CoordModel

    def to_card(self) -> CardPlay:
        return Firewall(target=self.target.to_coord())


class ScavengeModel(_StrictModel):
    id: Literal["scavenge"]

    def to_card(self) -> CardPlay:
        return Scavenge()


CardPlayModel = Annotated[
    Union[
        ReinforceModel,
        AccelerateModel,
        FortifyModel,
        ShockwaveModel,
        TransplantModel,
        SabotageModel,
        FirewallModel,
        ScavengeModel,
    ],
    Field(discriminator="id"),
]


# =============================================================================
# Actions
# =============================================================================

class GameActionModel(_StrictModel):
    """A take-turn action as submitted by a client."""
    type: Literal["take-turn"]
    card: Optional[CardPlayModel] = None
    placement: Optional[PlacementModel] = None

    def to_action(self) -> TakeTurn:
        return TakeTurn(
            card=self.card.to_card() if self.card is not None else None,
            placement=self.placement.to_placement() if self.placement is not None else None,
        )


def parse_action(data: Any, board_size: int | None = None) -> TakeTurn:
    """
    Validate a raw action payload and convert it to an engine action.

    Raises:
        pydantic.ValidationError: If the payload is malformed
    """
    model = GameActionModel.model_validate(data, context={"board_size": board_size})
    return model.to_action()


# =============================================================================
# Configuration
# =============================================================================

class GameConfigOverrides(_StrictModel):
    """Optional ruleset overrides; omitted fields keep their defaults."""
    board_size: Optional[int] = Field(None, ge=1, le=32)
    queue_size: Optional[int] = Field(None, ge=0)
    cards_enabled: Optional[bool] = None
    max_cards_per_turn: Optional[int] = Field(None, ge=0)
    max_cards_per_game: Optional[int] = Field(None, ge=0)
    mercy_rule: Optional[bool] = None
    mercy_lead: Optional[int] = Field(None, ge=1)
    diagonal_explosions: Optional[bool] = None

    def to_overrides(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ReplayScript(_StrictModel):
    """
    A replay file: how to build the game and which actions to apply.

    Actions stay raw here; they are validated with parse_action once the
    board size is known.
    """
    seed: int
    starting_player: Player = Player.BLUE
    config: Optional[GameConfigOverrides] = None
    actions: list[dict[str, Any]] = Field(default_factory=list)
