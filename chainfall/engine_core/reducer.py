"""
Reducer - Applies actions to game state.

The reducer is the single point of state transition.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state + events
- Validates before applying; a rejection leaves the input untouched
- Returns ActionResult with success/failure, never raises to the caller
- Delegates each phase: card_resolver, tick, detonation, end_state

Phase order for an accepted TakeTurn:
    card -> placement -> tick -> cascade -> scoring -> end check -> advance
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, replace

from .state import Board, Coord, Ended, Empty, GameState, Tile, TurnEffects, in_bounds, with_cell
from .action import (
    CARD_PLAY_TYPES,
    GameAction,
    ActionRejected,
    ActionResult,
    CardPlay,
    ErrorCode,
    TakeTurn,
)
from .card_resolver import CardPhaseResult, resolve_card
from .tick import apply_tick
from .detonation import resolve_cascade
from .end_state import evaluate_end_state
from .events import (
    CardPlayed,
    GameEnded,
    GameEvent,
    ScoreChanged,
    TickResolved,
    TilePlaced,
    TurnStarted,
    WaveResolved,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlacementResult:
    """Board, queue, bag and ids after the optional placement."""
    board: Board
    queue: tuple[int, ...]
    bag: tuple[int, ...]
    next_tile_id: int
    tile: Tile | None = None
    at: Coord | None = None


class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState, all rules in GameState.config.
    """

    def apply(self, state: GameState, action: GameAction) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state and events, or the rejection.
        """
        try:
            self._validate_action(state, action)
            new_state, events = self._resolve_turn(state, action)
        except ActionRejected as rejected:
            logger.debug(
                "Rejected action for %s on turn %d: %s",
                state.active_player.value, state.turn, rejected.error,
            )
            return ActionResult.failure(rejected.error.code, rejected.error.message)

        return ActionResult.success_with_state(new_state, events)

    def _validate_action(self, state: GameState, action: GameAction) -> None:
        """Checks that need nothing but the input state, in rule order."""
        if state.is_ended:
            raise ActionRejected(ErrorCode.GAME_ENDED)

        if not isinstance(action, TakeTurn):
            raise ActionRejected.invalid(f"Unsupported action: {type(action).__name__}")

        if action.card is not None:
            if not isinstance(action.card, CARD_PLAY_TYPES):
                raise ActionRejected.invalid(f"Unsupported card: {action.card!r}")
            self._validate_card_allowed(state, action.card)

    def _validate_card_allowed(self, state: GameState, card: CardPlay) -> None:
        """Card gating: enabled, one per turn, per-game cap, single use."""
        player = state.active_player
        if not state.config.cards_enabled or not state.cards.enabled:
            raise ActionRejected.illegal("Cards not enabled")
        if state.cards.card_played_this_turn:
            raise ActionRejected.illegal("Already played a card this turn")
        if state.cards.played_count.get(player, 0) >= state.config.max_cards_per_game:
            raise ActionRejected.illegal("Max cards per game reached")
        if state.cards.has_used(player, card.card_id):
            raise ActionRejected.illegal("Card already used")

    def _resolve_turn(self, state: GameState, action: TakeTurn) -> tuple[GameState, list[GameEvent]]:
        player = state.active_player

        # Card and placement phases may still reject; nothing is committed yet
        if action.card is not None:
            card_phase = resolve_card(state, action.card)
        else:
            card_phase = CardPhaseResult.unchanged(state)
        placement = self._apply_placement(state, action, card_phase)

        tick = apply_tick(placement.board)
        cascade = resolve_cascade(
            tick.board,
            player,
            card_phase.turn_effects,
            include_diagonals=state.config.diagonal_explosions,
        )

        events: list[GameEvent] = [TurnStarted(turn=state.turn, active_player=player)]
        if action.card is not None:
            events.append(CardPlayed(player=player, card=action.card))
        if placement.tile is not None:
            events.append(TilePlaced(player=player, at=placement.at, tile=placement.tile))
        events.append(TickResolved(tiles=tick.tile_deltas, walls=tick.wall_deltas))
        for index, wave in enumerate(cascade.waves, start=1):
            events.append(WaveResolved(
                wave=index,
                exploding_tile_ids=wave.exploding_tile_ids,
                removed_tile_ids=wave.removed_tile_ids,
                triggered_tile_ids=wave.triggered_tile_ids,
                points_gained=wave.points_gained,
            ))

        scores = dict(state.scores)
        if cascade.points_gained > 0:
            before = state.score_of(player)
            scores[player] = before + cascade.points_gained
            events.append(ScoreChanged(
                player=player,
                before=before,
                after=scores[player],
                delta=cascade.points_gained,
            ))

        last_placement_by = player if placement.tile is not None else state.last_placement_by
        end = evaluate_end_state(
            cascade.board,
            placement.bag,
            placement.queue,
            scores,
            state.config,
            player,
            last_placement_by,
        )

        cards = state.cards
        if action.card is not None:
            cards = cards.record_play(player, action.card.card_id)

        new_state = state._copy_with(
            version=state.version + 1,
            board=cascade.board,
            queue=placement.queue,
            bag=placement.bag,
            next_ids=replace(card_phase.next_ids, tile=placement.next_tile_id),
            last_placement_by=last_placement_by,
            scores=scores,
            turn_effects=TurnEffects.cleared(),
            cards=replace(cards, card_played_this_turn=False),
        )

        if end is None:
            return new_state._copy_with(turn=state.turn + 1, active_player=player.other), events

        logger.debug(
            "Game ended on turn %d: %s, winner %s",
            state.turn, end.reason.value, end.winner.value,
        )
        events.append(GameEnded(reason=end.reason, winner=end.winner, final_scores=dict(scores)))
        return new_state._copy_with(status=Ended(reason=end.reason, winner=end.winner)), events

    def _apply_placement(
        self,
        state: GameState,
        action: TakeTurn,
        card_phase: CardPhaseResult,
    ) -> PlacementResult:
        """
        Enforce placement/queue coupling and place the front queue value.

        A placement is required exactly when the post-card queue is
        non-empty. The queue is refilled from the bag front afterwards.
        """
        queue = card_phase.queue
        if queue and action.placement is None:
            raise ActionRejected.illegal("Placement required when queue not empty")
        if not queue and action.placement is not None:
            raise ActionRejected.illegal("Placement not allowed when queue empty")

        if action.placement is None:
            return PlacementResult(
                board=card_phase.board,
                queue=queue,
                bag=state.bag,
                next_tile_id=card_phase.next_ids.tile,
            )

        at = action.placement.at
        if not in_bounds(at.row, at.col, state.board_size):
            raise ActionRejected.invalid(f"Placement ({at.row}, {at.col}) is off the board")
        if not isinstance(card_phase.board[at.row][at.col], Empty):
            raise ActionRejected.illegal("Cell is not empty")

        tile = Tile(id=card_phase.next_ids.tile, owner=state.active_player, countdown=queue[0])
        queue = queue[1:]
        refill = max(0, state.config.queue_size - len(queue))
        bag = state.bag
        queue, bag = queue + bag[:refill], bag[refill:]

        return PlacementResult(
            board=with_cell(card_phase.board, at.row, at.col, tile),
            queue=queue,
            bag=bag,
            next_tile_id=tile.id + 1,
            tile=tile,
            at=at,
        )


def apply_action(state: GameState, action: GameAction) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer()
    return reducer.apply(state, action)
