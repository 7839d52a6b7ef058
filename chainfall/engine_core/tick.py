"""
Tick Phase - Synchronous countdown/ttl decrement.

One pass over the board per action:
- every tile's countdown drops by 1, floored at 0 (detonation removes it)
- every wall's ttl drops by 1; walls reaching 0 are removed
"""

from __future__ import annotations
from dataclasses import dataclass, replace

from .state import Board, EMPTY, Tile, Wall
from .events import TileDelta, WallDelta


@dataclass(frozen=True)
class TickResult:
    board: Board
    tile_deltas: tuple[TileDelta, ...]
    wall_deltas: tuple[WallDelta, ...]


def apply_tick(board: Board) -> TickResult:
    """Tick every tile and wall once. Rows without entities are shared."""
    tile_deltas: list[TileDelta] = []
    wall_deltas: list[WallDelta] = []
    new_rows = []

    for row in board:
        changed = False
        new_row = []
        for cell in row:
            if isinstance(cell, Tile):
                after = max(0, cell.countdown - 1)
                tile_deltas.append(TileDelta(tile_id=cell.id, before=cell.countdown, after=after))
                new_row.append(replace(cell, countdown=after))
                changed = True
            elif isinstance(cell, Wall):
                after = cell.ttl - 1
                if after <= 0:
                    wall_deltas.append(WallDelta(wall_id=cell.id, before=cell.ttl, after=0, removed=True))
                    new_row.append(EMPTY)
                else:
                    wall_deltas.append(WallDelta(wall_id=cell.id, before=cell.ttl, after=after, removed=False))
                    new_row.append(replace(cell, ttl=after))
                changed = True
            else:
                new_row.append(cell)
        new_rows.append(tuple(new_row) if changed else row)

    return TickResult(
        board=tuple(new_rows),
        tile_deltas=tuple(tile_deltas),
        wall_deltas=tuple(wall_deltas),
    )
