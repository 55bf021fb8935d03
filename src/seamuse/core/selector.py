"""
Target selection cascade.

Tiers run in a fixed order and the first tier that produces a cell wins:

1. chain-follow: next cell along the chain the unit is standing on
2. best-unclaimed-chain: satisficing scan of a sample lattice for a chain
   worth claiming
3. border seed: random open cell on the grid edge
4. core seed: random open cell from the fixed interior anchors
5. same-kind neighbor: adjacent cell of the current kind, only when the
   unit has no chain to follow
6. uniform random: ``uniform_random``, called by the orchestrator when
   every other tier came up empty

Every lookup goes through the grid's bounds predicate and every random
tier has a fixed retry bound, so selection always terminates.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from seamuse.core.config import AgentConfig
from seamuse.core.diagnostics import DebugChannel, Diagnostics
from seamuse.core.grid import Ownership, PlayerState, WorkingCell, WorkingGrid
from seamuse.core.pace import EngagementStage
from seamuse.core.session import SessionMemory


class SelectionTier(str, Enum):
    CHAIN_FOLLOW = "chain_follow"
    BEST_CHAIN = "best_chain"
    BORDER_SEED = "border_seed"
    CORE_SEED = "core_seed"
    NEIGHBOR = "neighbor"
    RANDOM = "random"


@dataclass(frozen=True)
class Selection:
    row: int
    col: int
    tier: SelectionTier

    @property
    def coords(self) -> tuple[int, int]:
        return (self.row, self.col)


def build_core_seeds(rows: int, cols: int, offset: int = 2, spacing: int = 3) -> list[tuple[int, int]]:
    """Evenly spaced interior anchors, row-major."""
    return [
        (r, c)
        for r in range(offset, rows, spacing)
        for c in range(offset, cols, spacing)
    ]


class TargetSelector:
    """Runs the fallback cascade over an analyzed and annotated grid."""

    def __init__(
        self,
        config: AgentConfig,
        rng: np.random.Generator,
        diagnostics: Diagnostics | None = None,
    ):
        self.config = config
        self.rng = rng
        self.diagnostics = diagnostics

    def select(
        self,
        grid: WorkingGrid,
        player: PlayerState,
        session: SessionMemory,
        stage: EngagementStage,
    ) -> Selection | None:
        """Run tiers 1-5 for a unit standing on the grid.

        Returns:
            The first tier's pick, or None when all five come up empty.
        """
        current = grid.at(player.row, player.col)
        followable = self.chain_follow_applies(grid, current)

        if followable:
            hit = self.follow_chain(grid, current, player.id)
            if hit is not None:
                return self._pick(hit, SelectionTier.CHAIN_FOLLOW)

        hit = self.best_unclaimed_chain(grid, player.id, stage)
        if hit is not None:
            return self._pick(hit, SelectionTier.BEST_CHAIN)

        hit = self.random_seed(grid, session.move_tiles, player.id)
        if hit is not None:
            return self._pick(hit, SelectionTier.BORDER_SEED)

        hit = self.random_seed(grid, session.core_seeds, player.id)
        if hit is not None:
            return self._pick(hit, SelectionTier.CORE_SEED)

        if not followable:
            hit = self.same_kind_neighbor(grid, current, player.id)
            if hit is not None:
                return self._pick(hit, SelectionTier.NEIGHBOR)

        return None

    # ------------------------------------------------------------------
    # Tier 1: chain-follow
    # ------------------------------------------------------------------
    def chain_follow_applies(self, grid: WorkingGrid, current: WorkingCell) -> bool:
        """Whether the current cell sits on a chain worth following."""
        chain = grid.chain_of(current)
        if chain is None or current.is_empty:
            return False
        return (
            chain.length >= self.config.chain_follow_min_length
            and chain.peak_occupants < self.config.chain_follow_max_occupants
        )

    def follow_chain(
        self, grid: WorkingGrid, current: WorkingCell, my_team: int,
    ) -> tuple[int, int] | None:
        """Best-connected unowned member of the current chain.

        Connection tiers are tried from ``min(length, 8)`` down to 1,
        members from last collected to first. The chain root is never a
        candidate. Another unit on the current cell, or on any member
        inspected, abandons the chain for this tick.
        """
        chain = grid.chain_of(current)
        if chain is None:
            return None
        if current.num_occupants > 0:
            self._trace("Chain %d blocked at %s", chain.chain_id, current.coords)
            return None

        top = min(chain.length, self.config.max_connection_tier)
        for tier in range(top, 0, -1):
            for member in chain.members[:0:-1]:
                if member.num_connections != tier:
                    continue
                if member.ownership(my_team) is Ownership.MINE:
                    continue
                if member.num_occupants > 0:
                    self._trace("Chain %d blocked at %s", chain.chain_id, member.coords)
                    return None
                if member.coords == current.coords:
                    continue
                return member.coords
        return None

    # ------------------------------------------------------------------
    # Tier 2: best unclaimed chain
    # ------------------------------------------------------------------
    def lattice(self, stage: EngagementStage) -> tuple[list[int], list[int], int]:
        """Sample rows, sample columns and the length a chain must exceed."""
        cfg = self.config
        if stage is EngagementStage.EARLY:
            return cfg.early_lattice_rows, cfg.early_lattice_cols, cfg.early_min_chain_length
        return cfg.late_lattice_rows, cfg.late_lattice_cols, cfg.late_min_chain_length

    def best_unclaimed_chain(
        self, grid: WorkingGrid, my_team: int, stage: EngagementStage,
    ) -> tuple[int, int] | None:
        """First sampled chain that beats the running best and the minimum.

        A chain qualifies when it still has unclaimed cells and we own at
        least as much of it as everyone else combined.
        """
        rows, cols, minimum = self.lattice(stage)
        longest = 0
        for r in rows:
            for c in cols:
                wc = grid.get(r, c)
                if wc is None or wc.chain_length <= 0:
                    continue
                if wc.chain_length <= longest:
                    continue
                if wc.unclaimed_in_chain == 0:
                    continue
                if wc.mine_in_chain < wc.other_in_chain and wc.other_in_chain != 0:
                    continue
                longest = wc.chain_length
                if longest > minimum:
                    return wc.coords

        self._trace("No best chain found (longest sampled %d)", longest)
        return None

    # ------------------------------------------------------------------
    # Tiers 3 and 4: random seeds
    # ------------------------------------------------------------------
    def random_seed(
        self, grid: WorkingGrid, seeds: list[tuple[int, int]], my_team: int,
    ) -> tuple[int, int] | None:
        """Up to ``len(seeds)`` random draws; first open cell wins."""
        if not seeds:
            return None
        for _ in range(len(seeds)):
            r, c = seeds[int(self.rng.integers(len(seeds)))]
            wc = grid.get(r, c)
            if wc is not None and wc.is_open_target(my_team):
                return wc.coords
        return None

    # ------------------------------------------------------------------
    # Tier 5: same-kind neighbor
    # ------------------------------------------------------------------
    @staticmethod
    def same_kind_neighbor(
        grid: WorkingGrid, current: WorkingCell, my_team: int,
    ) -> tuple[int, int] | None:
        for n in grid.neighbors(current.row, current.col):
            if n.is_empty or n.kind != current.kind:
                continue
            if n.ownership(my_team) is Ownership.MINE:
                continue
            return n.coords
        return None

    # ------------------------------------------------------------------
    # Tier 6: uniform random
    # ------------------------------------------------------------------
    def uniform_random(self, grid: WorkingGrid) -> Selection:
        """Random non-empty cell; always returns an on-grid cell.

        Draws at most one random cell per grid cell, then sweeps the grid in
        row-major order. On a grid with no claimable cell the last draw is
        returned as is.
        """
        last = (0, 0)
        for _ in range(len(grid)):
            last = (int(self.rng.integers(grid.rows)), int(self.rng.integers(grid.cols)))
            if not grid.at(*last).is_empty:
                return self._pick(last, SelectionTier.RANDOM)
        for wc in grid:
            if not wc.is_empty:
                return self._pick(wc.coords, SelectionTier.RANDOM)
        return self._pick(last, SelectionTier.RANDOM)

    def recover(
        self, grid: WorkingGrid, core_seeds: list[tuple[int, int]], my_team: int,
    ) -> Selection:
        """Placement for a unit knocked off the grid: core seed, else random."""
        hit = self.random_seed(grid, core_seeds, my_team)
        if hit is not None:
            return self._pick(hit, SelectionTier.CORE_SEED)
        return self.uniform_random(grid)

    # ------------------------------------------------------------------
    def _pick(self, coords: tuple[int, int], tier: SelectionTier) -> Selection:
        self._trace("%s select [%d,%d]", tier.value, coords[0], coords[1])
        return Selection(row=coords[0], col=coords[1], tier=tier)

    def _trace(self, msg: str, *args) -> None:
        if self.diagnostics is not None:
            self.diagnostics.trace(DebugChannel.SELECTION, msg, *args)
