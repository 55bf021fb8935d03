"""
Tick collector: per-tick decision statistics.

Records what the bot decided each tick (outcome, selection tier,
engagement reason, boost) together with a few grid-level chain
statistics, and aggregates them for reporting.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict, dataclass
from typing import Any

import numpy as np

from seamuse.core.agent import TickResult
from seamuse.core.grid import WorkingGrid


@dataclass
class TickMetrics:
    """Decision and grid statistics for a single tick."""

    tick: int
    outcome: str
    tier: str | None
    reason: str | None
    pace: str | None
    boost: int
    commit_budget: int
    target: tuple[int, int]

    # Grid statistics (zero when no analyzed grid was available)
    chain_count: int = 0
    longest_chain: int = 0
    mean_chain_length: float = 0.0
    unclaimed_cells: int = 0
    mine_cells: int = 0
    other_cells: int = 0


class TickCollector:
    """
    Collects and aggregates per-tick metrics for one game.

    Works alongside ``TerritoryAgent``: call ``collect`` with each tick's
    result and, optionally, the agent's ``last_grid``.
    """

    def __init__(self) -> None:
        self.metrics_history: list[TickMetrics] = []

    def collect(self, result: TickResult, grid: WorkingGrid | None = None) -> TickMetrics:
        """Record one tick."""
        metrics = TickMetrics(
            tick=len(self.metrics_history),
            outcome=result.outcome.value,
            tier=result.tier.value if result.tier is not None else None,
            reason=result.reason.value if result.reason is not None else None,
            pace=result.pace.value if result.pace is not None else None,
            boost=result.boost,
            commit_budget=result.commit_budget,
            target=result.coords,
        )

        if grid is not None and grid.chains:
            lengths = np.array([ch.length for ch in grid.chains])
            metrics.chain_count = len(grid.chains)
            metrics.longest_chain = int(lengths.max())
            metrics.mean_chain_length = float(lengths.mean())
            metrics.unclaimed_cells = sum(ch.unclaimed for ch in grid.chains)
            metrics.mine_cells = sum(ch.mine for ch in grid.chains)
            metrics.other_cells = sum(ch.other for ch in grid.chains)

        self.metrics_history.append(metrics)
        return metrics

    def get_time_series(self, field_name: str) -> list[Any]:
        """Extract a time series for a single field."""
        return [getattr(m, field_name) for m in self.metrics_history]

    def tier_counts(self) -> dict[str, int]:
        return dict(Counter(m.tier for m in self.metrics_history if m.tier is not None))

    def reason_counts(self) -> dict[str, int]:
        return dict(Counter(m.reason for m in self.metrics_history if m.reason is not None))

    def outcome_counts(self) -> dict[str, int]:
        return dict(Counter(m.outcome for m in self.metrics_history))

    def summary(self) -> dict[str, Any]:
        """Aggregate statistics over every collected tick."""
        if not self.metrics_history:
            return {"ticks": 0}
        boosts = np.array(self.get_time_series("boost"))
        return {
            "ticks": len(self.metrics_history),
            "outcomes": self.outcome_counts(),
            "tiers": self.tier_counts(),
            "reasons": self.reason_counts(),
            "mean_boost": float(boosts.mean()),
            "boosted_ticks": int((boosts > 0).sum()),
            "final_mine_cells": self.metrics_history[-1].mine_cells,
        }

    def export(self) -> list[dict[str, Any]]:
        """JSON-friendly list of per-tick records."""
        out = []
        for m in self.metrics_history:
            d = asdict(m)
            d["target"] = list(m.target)
            out.append(d)
        return out
