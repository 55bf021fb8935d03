"""
Snapshot generators for exercising the bot without a live host.

Each generator produces a fully populated row-major grid of ``Cell``
records. Random generators use a seeded numpy RNG for deterministic
reproduction.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable

import numpy as np

from seamuse.core.grid import EMPTY_KIND, UNOWNED, Cell


def generate_random_snapshot(
    rows: int = 16,
    cols: int = 20,
    seed: int | None = None,
    kinds: int = 4,
    empty_fraction: float = 0.1,
    teams: int = 0,
    owned_fraction: float = 0.0,
    goal_ticks: float = 10.0,
) -> list[list[Cell]]:
    """Random kinds with optional scattered ownership.

    Args:
        rows: Number of rows.
        cols: Number of columns.
        seed: Random seed for deterministic generation.
        kinds: Number of non-empty kinds (0 .. kinds-1).
        empty_fraction: Probability that a cell is empty.
        teams: Number of teams that may own cells (ids 1 .. teams).
        owned_fraction: Probability that a non-empty cell is owned.
        goal_ticks: Goal for every non-empty cell.

    Returns:
        A rows x cols snapshot.
    """
    rng = np.random.default_rng(seed)
    kind_grid = rng.integers(0, kinds, size=(rows, cols))
    empty = rng.random((rows, cols)) < empty_fraction
    owned = rng.random((rows, cols)) < owned_fraction
    owners = rng.integers(1, teams + 1, size=(rows, cols)) if teams > 0 else None

    snapshot: list[list[Cell]] = []
    for r in range(rows):
        row: list[Cell] = []
        for c in range(cols):
            kind = EMPTY_KIND if empty[r, c] else int(kind_grid[r, c])
            team = UNOWNED
            if owners is not None and kind != EMPTY_KIND and owned[r, c]:
                team = int(owners[r, c])
            row.append(Cell(
                row=r,
                col=c,
                node_id=r * cols + c,
                kind=kind,
                team=team,
                goal_ticks=0.0 if kind == EMPTY_KIND else goal_ticks,
            ))
        snapshot.append(row)
    return snapshot


def generate_uniform_snapshot(
    rows: int = 16, cols: int = 20, seed: int | None = None, kind: int = 0,
) -> list[list[Cell]]:
    """Every cell the same kind, unowned."""
    return [
        [Cell(row=r, col=c, node_id=r * cols + c, kind=kind) for c in range(cols)]
        for r in range(rows)
    ]


def generate_empty_snapshot(
    rows: int = 16, cols: int = 20, seed: int | None = None,
) -> list[list[Cell]]:
    """Every cell empty; nothing can be claimed."""
    return generate_uniform_snapshot(rows, cols, seed, kind=EMPTY_KIND)


def snapshot_from_layout(lines: list[str], goal_ticks: float = 0.0) -> list[list[Cell]]:
    """Snapshot whose kinds are drawn as text, one character per cell.

    Digits are kinds and ``.`` is an empty cell::

        snapshot_from_layout([
            "00.",
            "0.1",
        ])
    """
    cols = len(lines[0]) if lines else 0
    snapshot: list[list[Cell]] = []
    for r, line in enumerate(lines):
        if len(line) != cols:
            raise ValueError(f"Layout row {r} has width {len(line)}, expected {cols}")
        snapshot.append([
            Cell(
                row=r,
                col=c,
                node_id=r * cols + c,
                kind=EMPTY_KIND if ch == "." else int(ch),
                goal_ticks=0.0 if ch == "." else goal_ticks,
            )
            for c, ch in enumerate(line)
        ])
    return snapshot


def patch_snapshot(
    snapshot: list[list[Cell]], updates: dict[tuple[int, int], dict[str, Any]],
) -> list[list[Cell]]:
    """Copy of ``snapshot`` with field overrides applied per (row, col)."""
    patched = [list(row) for row in snapshot]
    for (r, c), fields in updates.items():
        if "occupants" in fields:
            fields = {**fields, "occupants": tuple(fields["occupants"])}
        patched[r][c] = replace(patched[r][c], **fields)
    return patched


# Registry of available snapshot generators.
SNAPSHOT_GENERATORS: dict[str, Callable[..., list[list[Cell]]]] = {
    "random": generate_random_snapshot,
    "uniform": generate_uniform_snapshot,
    "empty": generate_empty_snapshot,
}


def generate_snapshot(
    name: str, rows: int = 16, cols: int = 20, seed: int | None = None,
) -> list[list[Cell]]:
    """Factory function to generate a snapshot by name.

    Raises:
        KeyError: If the generator name is not found.
    """
    if name not in SNAPSHOT_GENERATORS:
        raise KeyError(
            f"Unknown snapshot generator '{name}'. "
            f"Available: {list(SNAPSHOT_GENERATORS.keys())}"
        )
    return SNAPSHOT_GENERATORS[name](rows=rows, cols=cols, seed=seed)
