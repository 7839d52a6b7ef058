"""
End-State Evaluator - Decides whether an action ended the game.

Rules, first match wins:
1. Mercy: the score gap reached config.mercy_lead (when enabled)
2. Exhaustion: bag, queue and board are all empty of tiles
   - different scores: standard win for the higher scorer
   - equal scores: tie, won by the player who did NOT place last
3. Otherwise the game continues
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Sequence

from .state import Board, EndReason, GameConfig, Player, has_any_tiles


@dataclass(frozen=True)
class EndState:
    reason: EndReason
    winner: Player


def _leader(scores: Mapping[Player, int]) -> Player:
    return Player.BLUE if scores.get(Player.BLUE, 0) > scores.get(Player.RED, 0) else Player.RED


def evaluate_end_state(
    board: Board,
    bag: Sequence[int],
    queue: Sequence[int],
    scores: Mapping[Player, int],
    config: GameConfig,
    active_player: Player,
    last_placement_by: Player | None,
) -> EndState | None:
    """Return how the game ended, or None if it continues."""
    blue = scores.get(Player.BLUE, 0)
    red = scores.get(Player.RED, 0)

    if config.mercy_rule and abs(blue - red) >= config.mercy_lead:
        return EndState(reason=EndReason.MERCY, winner=_leader(scores))

    if not bag and not queue and not has_any_tiles(board):
        if blue != red:
            return EndState(reason=EndReason.STANDARD, winner=_leader(scores))
        # No placement yet: fall back to the player who is not active
        last = last_placement_by if last_placement_by is not None else active_player
        return EndState(reason=EndReason.TIE, winner=last.other)

    return None
