"""
Grid snapshot records and the per-tick working grid.

The host supplies a fresh, fully populated snapshot every tick as a
row-major grid of ``Cell`` records. ``WorkingGrid`` wraps that snapshot in
``WorkingCell`` annotations (chain membership, connection lists, occupant
and ownership tallies) without ever touching the authoritative cells.

Coordinates are (row, col). Kind -1 marks an empty cell; team 0 means
unowned; a progress team of 0 means nobody (or a stalemate) is advancing
the cell.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator

import numpy as np

if TYPE_CHECKING:
    from seamuse.core.chains import Chain

logger = logging.getLogger(__name__)

EMPTY_KIND = -1
UNOWNED = 0
OFF_GRID = -1

# Offsets for the 8 neighbors as (d_row, d_col), clockwise from top-left.
NEIGHBOR_OFFSETS: list[tuple[int, int]] = [
    (-1, -1), (-1, 0), (-1, 1), (0, 1), (1, 1), (1, 0), (1, -1), (0, -1),
]


class SnapshotError(ValueError):
    """Raised when a host snapshot does not match the configured grid."""


class Ownership(str, Enum):
    """Ownership of a cell relative to the invoking team."""
    UNCLAIMED = "unclaimed"
    MINE = "mine"
    OTHER = "other"


class ProgressOwnership(str, Enum):
    """Who is advancing a cell's progress, relative to the invoking team."""
    STALEMATE = "stalemate"  # Nobody, or several teams cancelling out
    MINE = "mine"
    OTHER = "other"


def classify_owner(team: int, my_team: int) -> Ownership:
    if team == UNOWNED:
        return Ownership.UNCLAIMED
    if team == my_team:
        return Ownership.MINE
    return Ownership.OTHER


def classify_progress(tick_team: int, my_team: int) -> ProgressOwnership:
    if tick_team == UNOWNED:
        return ProgressOwnership.STALEMATE
    if tick_team == my_team:
        return ProgressOwnership.MINE
    return ProgressOwnership.OTHER


def _occupant_id(visitor: Any) -> int:
    if isinstance(visitor, dict):
        return int(visitor["id"])
    if hasattr(visitor, "id"):
        return int(visitor.id)
    return int(visitor)


@dataclass(frozen=True)
class Cell:
    """One authoritative grid cell as supplied by the host.

    Attributes:
        row: Row index (0 at the top).
        col: Column index.
        node_id: Unique id of the cell.
        kind: Region type (0-3), or -1 for an empty cell.
        team: Owning team id, 0 when unowned.
        strength: 1 when fortified, else 0.
        ticks: Progress toward the current operation.
        goal_ticks: Progress required for the operation to succeed.
        tick_team: Team currently advancing progress, 0 for nobody.
        occupants: Team ids of every unit standing on the cell.
    """

    row: int
    col: int
    node_id: int = 0
    kind: int = EMPTY_KIND
    team: int = UNOWNED
    strength: int = 0
    ticks: float = 0.0
    goal_ticks: float = 0.0
    tick_team: int = UNOWNED
    occupants: tuple[int, ...] = ()

    @property
    def coords(self) -> tuple[int, int]:
        return (self.row, self.col)

    @property
    def is_empty(self) -> bool:
        return self.kind == EMPTY_KIND

    @property
    def fortified(self) -> bool:
        return self.strength == 1

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Cell:
        """Build a cell from the host's tile record.

        ``visitors`` may be a list or a mapping of player records, or a
        plain list of team ids.
        """
        visitors = d.get("visitors") or ()
        if isinstance(visitors, dict):
            visitors = visitors.values()
        return cls(
            row=int(d["row"]),
            col=int(d["col"]),
            node_id=int(d.get("nodeId", d.get("node_id", 0))),
            kind=int(d.get("type", d.get("kind", EMPTY_KIND))),
            team=int(d.get("team", UNOWNED)),
            strength=int(d.get("strength", 0)),
            ticks=float(d.get("ticks", 0.0)),
            goal_ticks=float(d.get("goalTicks", d.get("goal_ticks", 0.0))),
            tick_team=int(d.get("tickTeam", d.get("tick_team", UNOWNED))),
            occupants=tuple(_occupant_id(v) for v in visitors),
        )


@dataclass(frozen=True)
class PlayerState:
    """A unit as reported by the host: team id, position and boost spend."""

    id: int
    col: int = OFF_GRID
    row: int = OFF_GRID
    boost: int = 0
    boost_used: int = 0

    @property
    def off_grid(self) -> bool:
        return self.row == OFF_GRID or self.col == OFF_GRID

    @property
    def coords(self) -> tuple[int, int]:
        return (self.row, self.col)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> PlayerState:
        return cls(
            id=int(d["id"]),
            col=int(d.get("col", OFF_GRID)),
            row=int(d.get("row", OFF_GRID)),
            boost=int(d.get("boost", 0)),
            boost_used=int(d.get("boostUsed", d.get("boost_used", 0))),
        )


def find_player(
    players: list[PlayerState], team_id: int, default: PlayerState | None = None,
) -> PlayerState | None:
    """Roster lookup by team id.

    Falls back to the first roster entry, then to ``default``, so a
    stale occupant id never fails the tick.
    """
    for p in players:
        if p.id == team_id:
            return p
    logger.debug("Team %d not in roster; falling back", team_id)
    if players:
        return players[0]
    return default


def snapshot_from_dicts(rows: list[list[dict[str, Any]]]) -> list[list[Cell]]:
    """Convert a host grid of tile dicts into ``Cell`` records."""
    return [[Cell.from_dict(d) for d in row] for row in rows]


@dataclass
class WorkingCell:
    """A snapshot cell plus the analysis fields derived for one tick."""

    cell: Cell
    chain_id: int = -1
    chain_length: int = -1  # -1 = unprocessed, 0 = empty cell
    connections: list[tuple[int, int]] = field(default_factory=list)
    occupant_ids: list[int] = field(default_factory=list)
    unclaimed_in_chain: int = 0
    mine_in_chain: int = 0
    other_in_chain: int = 0
    stage: int = 0

    @property
    def row(self) -> int:
        return self.cell.row

    @property
    def col(self) -> int:
        return self.cell.col

    @property
    def coords(self) -> tuple[int, int]:
        return self.cell.coords

    @property
    def kind(self) -> int:
        return self.cell.kind

    @property
    def is_empty(self) -> bool:
        return self.cell.is_empty

    @property
    def processed(self) -> bool:
        return self.chain_length != -1

    @property
    def num_connections(self) -> int:
        return len(self.connections)

    @property
    def num_occupants(self) -> int:
        return len(self.occupant_ids)

    def ownership(self, my_team: int) -> Ownership:
        return classify_owner(self.cell.team, my_team)

    def progress_ownership(self, my_team: int) -> ProgressOwnership:
        return classify_progress(self.cell.tick_team, my_team)

    def is_open_target(self, my_team: int) -> bool:
        """Non-empty, not already mine and nobody else standing on it."""
        return (
            not self.is_empty
            and self.ownership(my_team) is not Ownership.MINE
            and self.num_occupants < 1
        )


class WorkingGrid:
    """Mutable per-tick working copy of the snapshot.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        chains: Chains found by the analyzer, indexed by chain id.
    """

    def __init__(self, cells: list[list[WorkingCell]]) -> None:
        self._cells = cells
        self.rows: int = len(cells)
        self.cols: int = len(cells[0]) if cells else 0
        self.chains: list[Chain] = []

    @classmethod
    def from_snapshot(
        cls, snapshot: list[list[Cell]], rows: int, cols: int,
    ) -> WorkingGrid:
        """Wrap a host snapshot, validating its dimensions.

        Raises:
            SnapshotError: If the snapshot is not ``rows`` x ``cols``.
        """
        if len(snapshot) != rows or any(len(r) != cols for r in snapshot):
            raise SnapshotError(
                f"Expected a {rows}x{cols} snapshot, got "
                f"{len(snapshot)} rows with widths "
                f"{sorted({len(r) for r in snapshot})}"
            )
        return cls([[WorkingCell(cell=c) for c in row] for row in snapshot])

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def at(self, row: int, col: int) -> WorkingCell:
        return self._cells[row][col]

    def get(self, row: int, col: int) -> WorkingCell | None:
        """Bounds-checked lookup."""
        if not self.in_bounds(row, col):
            return None
        return self._cells[row][col]

    def __iter__(self) -> Iterator[WorkingCell]:
        """Row-major iteration."""
        for row in self._cells:
            yield from row

    def __len__(self) -> int:
        return self.rows * self.cols

    def neighbors(self, row: int, col: int) -> list[WorkingCell]:
        """In-bounds neighbors in ``NEIGHBOR_OFFSETS`` order."""
        result: list[WorkingCell] = []
        for dr, dc in NEIGHBOR_OFFSETS:
            nr, nc = row + dr, col + dc
            if self.in_bounds(nr, nc):
                result.append(self._cells[nr][nc])
        return result

    def chain_of(self, wc: WorkingCell) -> Chain | None:
        """The chain a cell belongs to, or None for empty cells."""
        if wc.chain_id < 0:
            return None
        return self.chains[wc.chain_id]

    def border_cells(self) -> list[tuple[int, int]]:
        """Coordinates along the grid edge: both edge columns, then both edge rows."""
        tiles: list[tuple[int, int]] = []
        for r in range(self.rows):
            tiles.append((r, self.cols - 1))
            tiles.append((r, 0))
        for c in range(1, self.cols - 1):
            tiles.append((self.rows - 1, c))
            tiles.append((0, c))
        return tiles

    def chain_map(self) -> np.ndarray:
        """Chain id per cell as a (rows, cols) array; -1 where there is none."""
        out = np.full((self.rows, self.cols), -1, dtype=int)
        for wc in self:
            out[wc.row, wc.col] = wc.chain_id
        return out

    def length_map(self) -> np.ndarray:
        """Chain length per cell as a (rows, cols) array."""
        out = np.full((self.rows, self.cols), -1, dtype=int)
        for wc in self:
            out[wc.row, wc.col] = wc.chain_length
        return out
