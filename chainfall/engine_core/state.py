"""
Game State - Immutable state container for a Chainfall game.

Design principles:
- Immutable: every transition returns a new state, inputs are never touched
- Copy-on-write: only the board rows that change are rebuilt
- Serializable: plain values only (see protocol.serialize)
- Deterministic: id counters live in the state, never in module globals
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Union


PROTOCOL_VERSION = 1

COUNTDOWN_VALUES = (1, 2, 3, 4)


class Player(str, Enum):
    """The two seats at the table."""
    BLUE = "blue"
    RED = "red"

    @property
    def other(self) -> Player:
        return Player.RED if self is Player.BLUE else Player.BLUE


class CardId(str, Enum):
    """One-time special effects a player can spend during a turn."""
    REINFORCE = "reinforce"
    ACCELERATE = "accelerate"
    FORTIFY = "fortify"
    SHOCKWAVE = "shockwave"
    TRANSPLANT = "transplant"
    SABOTAGE = "sabotage"
    FIREWALL = "firewall"
    SCAVENGE = "scavenge"


class EndReason(str, Enum):
    """Why a game ended."""
    STANDARD = "standard"
    MERCY = "mercy"
    TIE = "tie"


@dataclass(frozen=True)
class Coord:
    """A board coordinate (row-major, zero-based)."""
    row: int
    col: int

    def to_dict(self) -> dict[str, int]:
        return {"row": self.row, "col": self.col}


# =============================================================================
# Board cells
# =============================================================================

@dataclass(frozen=True)
class Empty:
    """An empty cell."""

    def to_dict(self) -> dict[str, Any]:
        return {"type": "empty"}


@dataclass(frozen=True)
class Tile:
    """
    A countdown-bearing tile.

    A tile detonates once its countdown reaches zero. Tiles with
    countdown 0 only exist transiently inside a single action.
    """
    id: int
    owner: Player
    countdown: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "tile",
            "tile": {"id": self.id, "owner": self.owner.value, "countdown": self.countdown},
        }


@dataclass(frozen=True)
class Wall:
    """A temporary wall placed by the Firewall card."""
    id: int
    owner: Player
    ttl: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "wall",
            "wall": {"id": self.id, "owner": self.owner.value, "ttl": self.ttl},
        }


Cell = Union[Empty, Tile, Wall]
Board = tuple[tuple[Cell, ...], ...]

EMPTY = Empty()


def empty_board(size: int) -> Board:
    """Create a size x size board of empty cells."""
    return tuple(tuple(EMPTY for _ in range(size)) for _ in range(size))


def in_bounds(row: int, col: int, size: int) -> bool:
    return 0 <= row < size and 0 <= col < size


def cell_at(board: Board, row: int, col: int) -> Cell:
    return board[row][col]


def tile_at(board: Board, row: int, col: int) -> Tile | None:
    """Get the tile at a cell, or None if the cell is out of bounds or holds no tile."""
    if not in_bounds(row, col, len(board)):
        return None
    cell = board[row][col]
    return cell if isinstance(cell, Tile) else None


def with_cell(board: Board, row: int, col: int, cell: Cell) -> Board:
    """Return new board with one cell replaced. Untouched rows are shared."""
    new_row = board[row][:col] + (cell,) + board[row][col + 1:]
    return board[:row] + (new_row,) + board[row + 1:]


def iter_cells(board: Board) -> Iterator[tuple[int, int, Cell]]:
    """Yield (row, col, cell) in row-major order."""
    for r, row in enumerate(board):
        for c, cell in enumerate(row):
            yield r, c, cell


def has_any_tiles(board: Board) -> bool:
    return any(isinstance(cell, Tile) for _, _, cell in iter_cells(board))


# =============================================================================
# Configuration and bookkeeping
# =============================================================================

@dataclass(frozen=True)
class GameConfig:
    """
    Fixed ruleset parameters for one game.

    Defaults are the standard ruleset; use with_overrides() to derive
    a variant without mutating the defaults.

    diagonal_explosions is a variant rule, off in the standard ruleset:
    when set, every blast of every turn reaches diagonal neighbours, as if
    Shockwave were always active. With it off, only a Shockwave card
    widens blasts.
    """
    board_size: int = 6
    queue_size: int = 8
    cards_enabled: bool = True
    max_cards_per_turn: int = 1
    max_cards_per_game: int = 4
    mercy_rule: bool = True
    mercy_lead: int = 8
    diagonal_explosions: bool = False

    def with_overrides(self, overrides: Mapping[str, Any] | None = None) -> GameConfig:
        """Return new config with the given fields replaced."""
        if not overrides:
            return self
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown config option(s): {', '.join(unknown)}")
        return replace(self, **dict(overrides))

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _read_only(mapping: Mapping) -> Mapping:
    """Snapshot a per-player mapping so a frozen state cannot be changed through it."""
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class NextIds:
    """Monotonic id counters. Ids are never reused within a game."""
    tile: int = 1
    wall: int = 1


@dataclass(frozen=True)
class TurnEffects:
    """Turn-scoped effects granted by the card played this turn."""
    shockwave: bool = False
    fortified_tile_ids: tuple[int, ...] = ()

    @classmethod
    def cleared(cls) -> TurnEffects:
        return cls()


@dataclass(frozen=True)
class CardsState:
    """Per-player card bookkeeping."""
    enabled: bool = True
    card_played_this_turn: bool = False
    played_count: Mapping[Player, int] = field(
        default_factory=lambda: {Player.BLUE: 0, Player.RED: 0}
    )
    used: Mapping[Player, frozenset[CardId]] = field(
        default_factory=lambda: {Player.BLUE: frozenset(), Player.RED: frozenset()}
    )

    def __post_init__(self):
        object.__setattr__(self, "played_count", _read_only(self.played_count))
        object.__setattr__(self, "used", _read_only(self.used))

    def has_used(self, player: Player, card_id: CardId) -> bool:
        return card_id in self.used.get(player, frozenset())

    def record_play(self, player: Player, card_id: CardId) -> CardsState:
        """Return new cards state with the card marked used for the player."""
        played_count = dict(self.played_count)
        played_count[player] = played_count.get(player, 0) + 1
        used = dict(self.used)
        used[player] = used.get(player, frozenset()) | {card_id}
        return replace(self, played_count=played_count, used=used)


@dataclass(frozen=True)
class InProgress:
    """The game accepts actions."""

    def to_dict(self) -> dict[str, Any]:
        return {"type": "in-progress"}


@dataclass(frozen=True)
class Ended:
    """Terminal status: no further actions are accepted."""
    reason: EndReason
    winner: Player

    def to_dict(self) -> dict[str, Any]:
        return {"type": "ended", "reason": self.reason.value, "winner": self.winner.value}


GameStatus = Union[InProgress, Ended]


# =============================================================================
# Game state
# =============================================================================

@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    Created once by game.setup.new_game and thereafter only replaced
    by the reducer, one replacement per accepted action.
    """
    config: GameConfig
    active_player: Player
    board: Board
    bag: tuple[int, ...] = ()
    queue: tuple[int, ...] = ()
    scores: Mapping[Player, int] = field(
        default_factory=lambda: {Player.BLUE: 0, Player.RED: 0}
    )
    version: int = 0
    turn: int = 1
    seed: int = 0
    next_ids: NextIds = field(default_factory=NextIds)
    last_placement_by: Player | None = None
    turn_effects: TurnEffects = field(default_factory=TurnEffects)
    cards: CardsState = field(default_factory=CardsState)
    status: GameStatus = field(default_factory=InProgress)
    protocol_version: int = PROTOCOL_VERSION

    def __post_init__(self):
        object.__setattr__(self, "scores", _read_only(self.scores))

    @property
    def is_ended(self) -> bool:
        return isinstance(self.status, Ended)

    @property
    def board_size(self) -> int:
        return self.config.board_size

    def score_of(self, player: Player) -> int:
        return self.scores.get(player, 0)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)
