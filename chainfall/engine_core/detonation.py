"""
Detonation - Wave-by-wave cascade resolution.

The cascade is breadth-first, one generation per wave:

1. Wave 1 origins are the tiles sitting at countdown 0 after the tick.
2. The blast set is every origin plus its orthogonal neighbours (and
   diagonal neighbours under shockwave), deduplicated.
3. Every tile in the blast set is removed, except fortified tiles that
   are not themselves origins.
4. Removed tiles that had countdown 1 become the next wave's origins.
5. Repeat until a wave triggers nothing.

All removals within a wave are simultaneous, so the order in which the
blast set is visited never changes the outcome. Tile ids are reported in
row-major order.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import Board, EMPTY, Player, Tile, TurnEffects, in_bounds, iter_cells

ORTHOGONAL = ((-1, 0), (0, 1), (1, 0), (0, -1))
DIAGONAL = ((-1, -1), (-1, 1), (1, -1), (1, 1))


@dataclass(frozen=True)
class Origin:
    """A detonating tile and where it sat when the wave began."""
    row: int
    col: int
    tile: Tile


@dataclass(frozen=True)
class WaveSummary:
    exploding_tile_ids: tuple[int, ...]
    removed_tile_ids: tuple[int, ...]
    triggered_tile_ids: tuple[int, ...]
    points_gained: int


@dataclass(frozen=True)
class CascadeResult:
    board: Board
    waves: tuple[WaveSummary, ...]
    points_gained: int


def find_origins(board: Board) -> list[Origin]:
    """Tiles at countdown 0, in row-major order."""
    return [
        Origin(r, c, cell)
        for r, c, cell in iter_cells(board)
        if isinstance(cell, Tile) and cell.countdown == 0
    ]


def blast_positions(
    origins: list[Origin],
    board_size: int,
    include_diagonals: bool,
) -> set[tuple[int, int]]:
    """Cells hit by a wave. A cell hit by several origins appears once."""
    offsets = ORTHOGONAL + DIAGONAL if include_diagonals else ORTHOGONAL
    positions = set()
    for origin in origins:
        positions.add((origin.row, origin.col))
        for dr, dc in offsets:
            r, c = origin.row + dr, origin.col + dc
            if in_bounds(r, c, board_size):
                positions.add((r, c))
    return positions


def resolve_cascade(
    board: Board,
    active_player: Player,
    turn_effects: TurnEffects,
    include_diagonals: bool = False,
) -> CascadeResult:
    """
    Resolve every detonation wave on a post-tick board.

    Args:
        board: Board after the tick phase
        active_player: Player whose turn it is; only the other player's
            removed tiles score
        turn_effects: Shockwave flag and fortified tile ids for this turn
        include_diagonals: Ruleset-wide diagonal blasts, on top of shockwave

    Returns:
        CascadeResult with the final board, one summary per wave, and the
        total points gained by the active player
    """
    board_size = len(board)
    diagonals = include_diagonals or turn_effects.shockwave
    fortified = frozenset(turn_effects.fortified_tile_ids)

    waves: list[WaveSummary] = []
    total_points = 0
    origins = find_origins(board)

    while origins:
        origin_positions = {(o.row, o.col) for o in origins}
        blast = blast_positions(origins, board_size, diagonals)

        removed: list[Tile] = []
        triggered: list[Origin] = []
        new_rows = []
        for r, row in enumerate(board):
            new_row = list(row)
            changed = False
            for c, cell in enumerate(row):
                if (r, c) not in blast or not isinstance(cell, Tile):
                    continue
                if (r, c) not in origin_positions and cell.id in fortified:
                    continue
                removed.append(cell)
                if cell.countdown == 1:
                    triggered.append(Origin(r, c, cell))
                new_row[c] = EMPTY
                changed = True
            new_rows.append(tuple(new_row) if changed else row)

        points = sum(1 for tile in removed if tile.owner != active_player)
        waves.append(WaveSummary(
            exploding_tile_ids=tuple(o.tile.id for o in origins),
            removed_tile_ids=tuple(tile.id for tile in removed),
            triggered_tile_ids=tuple(o.tile.id for o in triggered),
            points_gained=points,
        ))
        total_points += points

        board = tuple(new_rows)
        origins = triggered

    return CascadeResult(board=board, waves=tuple(waves), points_gained=total_points)
