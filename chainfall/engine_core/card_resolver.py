"""
Card Resolver - Validates and applies the optional card play of a turn.

The card phase runs before placement and is all-or-nothing: every check
happens before anything is built, and a failed check raises
ActionRejected so the reducer can abort the whole action. Card
bookkeeping (used set, played count) is NOT touched here; the reducer
commits it only once the entire action has been accepted.

Targets are validated in order:
- out-of-bounds coordinates -> INVALID_ACTION
- wrong owner / wrong cell kind / countdown <= 0 -> ILLEGAL_ACTION
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Callable

from .state import (
    Board,
    Coord,
    GameState,
    NextIds,
    Player,
    Tile,
    TurnEffects,
    Wall,
    Empty,
    cell_at,
    in_bounds,
    tile_at,
    with_cell,
)
from .action import (
    ActionRejected,
    Accelerate,
    CardPlay,
    Firewall,
    Fortify,
    Reinforce,
    Sabotage,
    Scavenge,
    Shockwave,
    Transplant,
)

FIREWALL_TTL = 2


@dataclass(frozen=True)
class CardPhaseResult:
    """The slice of state a card may change."""
    board: Board
    queue: tuple[int, ...]
    next_ids: NextIds
    turn_effects: TurnEffects

    @classmethod
    def unchanged(cls, state: GameState) -> CardPhaseResult:
        return cls(
            board=state.board,
            queue=state.queue,
            next_ids=state.next_ids,
            turn_effects=state.turn_effects,
        )


def resolve_card(state: GameState, card: CardPlay) -> CardPhaseResult:
    """
    Apply a card play against the current state.

    Returns the modified board/queue/ids/effects, or raises
    ActionRejected if the card's target requirements are not met.
    """
    handler = _get_handler(card)
    if handler is None:
        raise ActionRejected.invalid(f"Unknown card: {card!r}")
    return handler(state, card)


def _get_handler(card: CardPlay) -> Callable[[GameState, CardPlay], CardPhaseResult] | None:
    handlers = {
        Reinforce: _resolve_reinforce,
        Accelerate: _resolve_accelerate,
        Fortify: _resolve_fortify,
        Shockwave: _resolve_shockwave,
        Transplant: _resolve_transplant,
        Sabotage: _resolve_sabotage,
        Firewall: _resolve_firewall,
        Scavenge: _resolve_scavenge,
    }
    return handlers.get(type(card))


def _require_in_bounds(state: GameState, coord: Coord) -> None:
    if not in_bounds(coord.row, coord.col, state.board_size):
        raise ActionRejected.invalid(f"Coordinate ({coord.row}, {coord.col}) is off the board")


def _require_live_tile(state: GameState, coord: Coord, owner: Player, what: str) -> Tile:
    """Bounds-check a target and return the live tile there owned by `owner`."""
    _require_in_bounds(state, coord)
    tile = tile_at(state.board, coord.row, coord.col)
    if tile is None or tile.owner != owner or tile.countdown <= 0:
        raise ActionRejected.illegal(f"{what} with countdown > 0 required")
    return tile


def _with_countdown(state: GameState, coord: Coord, tile: Tile, countdown: int) -> CardPhaseResult:
    board = with_cell(state.board, coord.row, coord.col, replace(tile, countdown=countdown))
    return replace(CardPhaseResult.unchanged(state), board=board)


def _resolve_reinforce(state: GameState, card: Reinforce) -> CardPhaseResult:
    tile = _require_live_tile(state, card.target, state.active_player, "Reinforce: own tile")
    return _with_countdown(state, card.target, tile, tile.countdown + 1)


def _resolve_accelerate(state: GameState, card: Accelerate) -> CardPhaseResult:
    tile = _require_live_tile(state, card.target, state.active_player, "Accelerate: own tile")
    # Cards never detonate a tile directly; only the tick can reach 0
    return _with_countdown(state, card.target, tile, max(1, tile.countdown - 1))


def _resolve_sabotage(state: GameState, card: Sabotage) -> CardPhaseResult:
    tile = _require_live_tile(state, card.target, state.active_player.other, "Sabotage: enemy tile")
    return _with_countdown(state, card.target, tile, max(1, tile.countdown - 1))


def _resolve_fortify(state: GameState, card: Fortify) -> CardPhaseResult:
    tile = _require_live_tile(state, card.target, state.active_player, "Fortify: own tile")
    effects = state.turn_effects
    if tile.id not in effects.fortified_tile_ids:
        effects = replace(effects, fortified_tile_ids=effects.fortified_tile_ids + (tile.id,))
    return replace(CardPhaseResult.unchanged(state), turn_effects=effects)


def _resolve_shockwave(state: GameState, card: Shockwave) -> CardPhaseResult:
    effects = replace(state.turn_effects, shockwave=True)
    return replace(CardPhaseResult.unchanged(state), turn_effects=effects)


def _resolve_transplant(state: GameState, card: Transplant) -> CardPhaseResult:
    a, b = card.a, card.b
    if a == b:
        raise ActionRejected.illegal("Transplant: a and b must differ")
    _require_in_bounds(state, a)
    _require_in_bounds(state, b)

    tile_a = tile_at(state.board, a.row, a.col)
    tile_b = tile_at(state.board, b.row, b.col)
    if tile_a is None or tile_b is None:
        raise ActionRejected.illegal("Transplant: both cells must be tiles")
    if tile_a.owner != state.active_player or tile_b.owner != state.active_player:
        raise ActionRejected.illegal("Transplant: both tiles must be owned by active player")
    if tile_a.countdown <= 0 or tile_b.countdown <= 0:
        raise ActionRejected.illegal("Transplant: both tiles must have countdown > 0")

    board = with_cell(state.board, a.row, a.col, tile_b)
    board = with_cell(board, b.row, b.col, tile_a)
    return replace(CardPhaseResult.unchanged(state), board=board)


def _resolve_firewall(state: GameState, card: Firewall) -> CardPhaseResult:
    _require_in_bounds(state, card.target)
    if not isinstance(cell_at(state.board, card.target.row, card.target.col), Empty):
        raise ActionRejected.illegal("Firewall: target cell must be empty")

    wall = Wall(id=state.next_ids.wall, owner=state.active_player, ttl=FIREWALL_TTL)
    return replace(
        CardPhaseResult.unchanged(state),
        board=with_cell(state.board, card.target.row, card.target.col, wall),
        next_ids=replace(state.next_ids, wall=state.next_ids.wall + 1),
    )


def _resolve_scavenge(state: GameState, card: Scavenge) -> CardPhaseResult:
    queue = state.queue
    if len(queue) < 2:
        raise ActionRejected.illegal("Scavenge: queue must have at least 2 items")
    return replace(CardPhaseResult.unchanged(state), queue=(queue[1], queue[0]) + queue[2:])
