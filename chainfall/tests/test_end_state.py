"""
Tests for end-of-game evaluation.
"""

import pytest

from ..engine_core.state import EndReason, GameConfig, Player, Tile, empty_board, with_cell
from ..engine_core.end_state import EndState, evaluate_end_state

EMPTY_BOARD = empty_board(6)
BUSY_BOARD = with_cell(empty_board(6), 3, 3, Tile(1, Player.RED, 2))


def evaluate(board=EMPTY_BOARD, bag=(), queue=(), blue=0, red=0, config=None,
             active=Player.BLUE, last=None):
    return evaluate_end_state(
        board, bag, queue, {Player.BLUE: blue, Player.RED: red},
        config or GameConfig(), active, last,
    )


class TestMercy:

    def test_mercy_lead_reached(self):
        assert evaluate(board=BUSY_BOARD, queue=(2,), blue=1, red=9) == EndState(EndReason.MERCY, Player.RED)

    def test_below_mercy_lead(self):
        assert evaluate(board=BUSY_BOARD, queue=(2,), blue=1, red=8) is None

    def test_custom_mercy_lead(self):
        config = GameConfig(mercy_lead=3)
        assert evaluate(board=BUSY_BOARD, blue=3, config=config) == EndState(EndReason.MERCY, Player.BLUE)

    def test_mercy_disabled(self):
        config = GameConfig(mercy_rule=False)
        assert evaluate(board=BUSY_BOARD, blue=20, config=config) is None

    def test_mercy_wins_over_exhaustion(self):
        """Mercy is checked first, even when everything is exhausted."""
        assert evaluate(blue=8) == EndState(EndReason.MERCY, Player.BLUE)


class TestExhaustion:

    @pytest.mark.parametrize("board,bag,queue", [
        (BUSY_BOARD, (), ()),
        (EMPTY_BOARD, (1,), ()),
        (EMPTY_BOARD, (), (3,)),
    ])
    def test_game_continues_while_anything_left(self, board, bag, queue):
        assert evaluate(board=board, bag=bag, queue=queue, blue=2) is None

    def test_standard_win(self):
        assert evaluate(blue=2, red=5) == EndState(EndReason.STANDARD, Player.RED)

    def test_tie_loses_for_last_placer(self):
        assert evaluate(blue=3, red=3, last=Player.BLUE) == EndState(EndReason.TIE, Player.RED)
        assert evaluate(blue=3, red=3, last=Player.RED) == EndState(EndReason.TIE, Player.BLUE)

    def test_tie_without_placements(self):
        """With no placement on record, the non-active player wins the tie."""
        assert evaluate(active=Player.RED) == EndState(EndReason.TIE, Player.BLUE)
