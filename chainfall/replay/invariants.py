"""
Invariant checks - properties every state must satisfy between actions.

Checked after new_game and after every accepted action:
1. Board dimensions match config.board_size
2. No tile with countdown <= 0 (detonation must have removed it)
3. No duplicate tile ids, no duplicate wall ids
4. No wall with negative ttl
5. Queue and bag only hold countdown values 1-4
"""

from __future__ import annotations

from ..engine_core.state import COUNTDOWN_VALUES, GameState, Tile, Wall


class InvariantViolation(Exception):
    """Raised when a state breaks a core invariant."""

    def __init__(self, message: str, state_version: int | None = None):
        self.state_version = state_version
        super().__init__(f"Invariant: {message}")


def assert_core_invariants(state: GameState) -> None:
    """
    Check every core invariant.

    Raises:
        InvariantViolation: On the first violated invariant
    """
    board_size = state.config.board_size
    board = state.board

    def fail(message: str) -> InvariantViolation:
        return InvariantViolation(message, state_version=state.version)

    if len(board) != board_size:
        raise fail(f"board has {len(board)} rows, config.board_size is {board_size}")

    tile_ids: set[int] = set()
    wall_ids: set[int] = set()

    for r, row in enumerate(board):
        if len(row) != board_size:
            raise fail(f"board row {r} has {len(row)} cells, config.board_size is {board_size}")
        for cell in row:
            if isinstance(cell, Tile):
                if cell.countdown < 0:
                    raise fail(f"tile {cell.id} has negative countdown {cell.countdown}")
                if cell.countdown == 0:
                    raise fail(f"tile {cell.id} has countdown 0 (should be removed by detonation)")
                if cell.id in tile_ids:
                    raise fail(f"duplicate tile id {cell.id} on board")
                tile_ids.add(cell.id)
            elif isinstance(cell, Wall):
                if cell.ttl < 0:
                    raise fail(f"wall {cell.id} has negative ttl {cell.ttl}")
                if cell.id in wall_ids:
                    raise fail(f"duplicate wall id {cell.id} on board")
                wall_ids.add(cell.id)

    for name, values in (("queue", state.queue), ("bag", state.bag)):
        for value in values:
            if value not in COUNTDOWN_VALUES:
                raise fail(f"{name} contains invalid value {value} (expected 1..4)")
