"""
Shared test configuration.

Pins the bot's random seed so cascade tiers that draw random cells are
reproducible across runs, and provides the analyze-and-annotate helper
most selector and engagement tests start from.
"""

import numpy as np
import pytest

from seamuse.core.annotator import MetricsAnnotator
from seamuse.core.chains import ChainAnalyzer
from seamuse.core.config import AgentConfig
from seamuse.core.grid import WorkingGrid
from seamuse.core.pace import PaceConfig
from seamuse.core.snapshot_generators import patch_snapshot, snapshot_from_layout


@pytest.fixture
def config():
    return AgentConfig(random_seed=7)


@pytest.fixture
def rng():
    return np.random.default_rng(7)


@pytest.fixture
def analyzed():
    """Factory: text layout (+ per-cell overrides) -> analyzed WorkingGrid."""

    def _build(lines, my_team=1, updates=None, pace=None):
        snapshot = snapshot_from_layout(lines)
        if updates:
            snapshot = patch_snapshot(snapshot, updates)
        grid = WorkingGrid.from_snapshot(snapshot, len(lines), len(lines[0]))
        ChainAnalyzer().analyze(grid, my_team)
        MetricsAnnotator().annotate(
            grid, my_team, pace or PaceConfig(fortify_threshold=4, commit_ceiling=14, stage_fraction=0.2),
        )
        return grid

    return _build
