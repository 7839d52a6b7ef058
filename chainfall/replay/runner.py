"""
Replay Runner - Rebuilds a game from its seed and action log.

A replay is new_game(seed, starting_player, config) followed by
apply_action for each action, using only the public engine API.
Because the engine is deterministic, the same inputs always produce the
same final state and the same event log.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping

from ..engine_core.action import GameAction, GameError
from ..engine_core.events import GameEvent
from ..engine_core.reducer import Reducer
from ..engine_core.state import GameConfig, GameState, Player
from ..game.setup import new_game

logger = logging.getLogger(__name__)

StepHook = Callable[[GameState], None]


class ReplayError(Exception):
    """Raised when an action in the replay is rejected."""

    def __init__(self, step: int, error: GameError):
        self.step = step
        self.error = error
        detail = f" - {error.message}" if error.message else ""
        super().__init__(f"Replay action {step} failed: {error.code.value}{detail}")


@dataclass
class ReplayResult:
    final_state: GameState
    events_by_action: list[list[GameEvent]] = field(default_factory=list)


def run_replay(
    seed: int,
    starting_player: Player,
    actions: Iterable[GameAction],
    config: GameConfig | Mapping[str, Any] | None = None,
    on_after_step: StepHook | None = None,
) -> ReplayResult:
    """
    Run a full replay from seed.

    Args:
        seed: Seed passed to new_game
        starting_player: Player who takes turn 1
        actions: Actions to apply in order
        config: Config or overrides passed to new_game
        on_after_step: Called with the initial state and after every action

    Raises:
        ReplayError: If any action is rejected
    """
    state = new_game(seed, starting_player, config)
    if on_after_step:
        on_after_step(state)

    reducer = Reducer()
    events_by_action: list[list[GameEvent]] = []

    for step, action in enumerate(actions, start=1):
        result = reducer.apply(state, action)
        if not result.success:
            raise ReplayError(step, result.error)
        events_by_action.append(result.events)
        state = result.new_state
        if on_after_step:
            on_after_step(state)

    logger.info(
        "Replayed %d action(s) from seed %d: version %d, status %s",
        len(events_by_action), seed, state.version, state.status.to_dict()["type"],
    )
    return ReplayResult(final_state=state, events_by_action=events_by_action)
