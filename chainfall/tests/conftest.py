"""
Pytest fixtures for Chainfall tests.
"""

import pytest
from typing import Callable

from ..engine_core.state import (
    CardsState,
    GameConfig,
    GameState,
    NextIds,
    Player,
    Tile,
    Wall,
    empty_board,
    with_cell,
)
from ..game.setup import new_game


@pytest.fixture
def fresh_state() -> GameState:
    """A new standard game, Blue to move."""
    return new_game(seed=1)


@pytest.fixture
def build_state() -> Callable[..., GameState]:
    """
    Factory for hand-built states.

    cells maps (row, col) to a Tile or Wall; everything else is empty.
    Id counters default to one past the highest id on the board.
    """

    def _build(
        cells=None,
        queue=(),
        bag=(),
        active_player=Player.BLUE,
        scores=None,
        config=None,
        **kwargs,
    ) -> GameState:
        config = config or GameConfig()
        board = empty_board(config.board_size)
        cells = cells or {}
        for (row, col), cell in cells.items():
            board = with_cell(board, row, col, cell)

        if "next_ids" not in kwargs:
            tile_ids = [c.id for c in cells.values() if isinstance(c, Tile)]
            wall_ids = [c.id for c in cells.values() if isinstance(c, Wall)]
            kwargs["next_ids"] = NextIds(
                tile=max(tile_ids, default=0) + 1,
                wall=max(wall_ids, default=0) + 1,
            )
        kwargs.setdefault("cards", CardsState(enabled=config.cards_enabled))

        return GameState(
            config=config,
            active_player=active_player,
            board=board,
            queue=tuple(queue),
            bag=tuple(bag),
            scores=scores or {Player.BLUE: 0, Player.RED: 0},
            **kwargs,
        )

    return _build
