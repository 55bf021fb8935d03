"""
Per-tick metrics derived from the chain analysis and the roster.

Occupant lists exclude the invoking team, so ``num_occupants`` on a
working cell counts competitors only.
"""

from __future__ import annotations

from seamuse.core.grid import WorkingGrid
from seamuse.core.pace import PaceConfig, classify_stage


class MetricsAnnotator:
    """Adds occupant, stage and chain-pressure data to an analyzed grid."""

    def __init__(self, stage_ceiling: int = 8):
        self.stage_ceiling = stage_ceiling

    def annotate_occupants(self, grid: WorkingGrid, my_team: int) -> None:
        """Occupant-only pass; needs no chain analysis."""
        for wc in grid:
            wc.occupant_ids = [t for t in wc.cell.occupants if t != my_team]

    def annotate(self, grid: WorkingGrid, my_team: int, pace: PaceConfig) -> None:
        """Full pass. Must run after ``ChainAnalyzer.analyze`` on ``grid``."""
        self.annotate_occupants(grid, my_team)
        for wc in grid:
            wc.stage = classify_stage(
                self.stage_ceiling, wc.chain_length, pace.stage_fraction,
            )
        for chain in grid.chains:
            chain.peak_occupants = max(
                (m.num_occupants for m in chain.members), default=0,
            )
