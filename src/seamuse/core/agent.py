"""
Tick orchestrator for the Seamuse territory bot.

The host calls ``TerritoryAgent.tick`` once per frame with the unit's
state, the roster, a fresh grid snapshot, an optional operator message and
the frames remaining until the next bank. Each call:

1. initializes the session on the first tick (pace, core seeds, budget),
2. records frames remaining and detects bank events,
3. applies the operator message,
4. recovers a unit that was knocked off the grid with boost 0 (early
   return),
5. re-derives pace, then analyzes chains and annotates metrics,
6. returns the unit's position unchanged while paused,
7. asks the engagement controller whether to hold or re-select,
8. runs the selection cascade and the boost policy.

Pace is re-derived every tick from ``cycle_frames``, the frames remaining
recorded at the most recent bank, not from the current countdown. The
countdown only decides the tick stage (EARLY near the end of a cycle,
LATE while most of it remains).

The call never raises for grid content and always returns an on-grid
target with a boost in 0-3.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from seamuse.core.annotator import MetricsAnnotator
from seamuse.core.boost import BoostPolicy
from seamuse.core.chains import ChainAnalyzer
from seamuse.core.commands import apply_operator_message
from seamuse.core.config import AgentConfig
from seamuse.core.diagnostics import DebugChannel, Diagnostics
from seamuse.core.engagement import EngagementController, EngagementReason
from seamuse.core.grid import (
    Cell,
    PlayerState,
    WorkingGrid,
    snapshot_from_dicts,
)
from seamuse.core.pace import EngagementStage, Pace, classify_pace, classify_stage
from seamuse.core.selector import SelectionTier, TargetSelector, build_core_seeds
from seamuse.core.session import SessionMemory

logger = logging.getLogger(__name__)


class AgentState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    DISPLACED_RECOVERY = "displaced_recovery"
    STEADY = "steady"


class TickOutcome(str, Enum):
    RECOVERED = "recovered"  # Placed back on the grid after a knockoff
    PAUSED = "paused"
    HOLD = "hold"
    RESELECT = "reselect"


@dataclass
class TickResult:
    """The move for one tick plus what produced it."""
    col: int
    row: int
    boost: int
    outcome: TickOutcome
    tier: SelectionTier | None = None
    reason: EngagementReason | None = None
    pace: Pace | None = None
    stage: EngagementStage | None = None
    commit_budget: int = 0

    @property
    def coords(self) -> tuple[int, int]:
        return (self.row, self.col)

    def to_dict(self) -> dict[str, int]:
        """Host output contract."""
        return {"outX": self.col, "outY": self.row, "outB": self.boost}


class TerritoryAgent:
    """
    One bot controlling one unit for the lifetime of one game.

    Owns the session memory; create a new agent for every game.
    """

    def __init__(
        self,
        config: AgentConfig | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.config = config or AgentConfig()
        self.rng = rng or np.random.default_rng(self.config.random_seed)
        self.session = SessionMemory(debug_level=self.config.debug_level)
        self.state = AgentState.UNINITIALIZED
        self.diagnostics = Diagnostics(self.session)

        self.analyzer = ChainAnalyzer()
        self.annotator = MetricsAnnotator(self.config.stage_ceiling)
        self.selector = TargetSelector(self.config, self.rng, self.diagnostics)
        self.engagement = EngagementController()
        self.boost_policy = BoostPolicy(
            spend_threshold=self.config.boost_spend_threshold,
            cruise_boost=self.config.cruise_boost,
            max_boost=self.config.max_boost,
        )

        self.last_grid: WorkingGrid | None = None

    @property
    def name(self) -> str:
        return self.config.bot_name

    # ------------------------------------------------------------------
    # Host entry points
    # ------------------------------------------------------------------
    def tick(
        self,
        player: PlayerState,
        players: list[PlayerState],
        grid: list[list[Cell]],
        message: str | None = None,
        frames_left: int = 0,
    ) -> TickResult:
        """Choose this tick's target cell and boost."""
        session = self.session
        if not session.initialized:
            self._initialize(frames_left)

        if session.record_frames(frames_left):
            self.diagnostics.trace(
                DebugChannel.BANK, "Bank count is %d", session.bank_count,
            )

        was_paused = session.paused
        paused = apply_operator_message(
            message, session, self.config.pause_keyword, self.config.debug_keyword,
        )
        if paused != was_paused:
            logger.info("Bot %s is %s.", self.name, "PAUSED" if paused else "RESUMED")

        working = WorkingGrid.from_snapshot(
            grid, self.config.grid_rows, self.config.grid_cols,
        )
        self.last_grid = working

        if player.off_grid or not working.in_bounds(player.row, player.col):
            return self._recover(working, player)

        self.state = AgentState.STEADY
        return self._steady(working, player, players, frames_left)

    def do_behavior(
        self,
        player: dict[str, Any],
        players: list[dict[str, Any]],
        grid: list[list[dict[str, Any]]],
        message: str | None = None,
        frames_left: int = 0,
    ) -> dict[str, int]:
        """Dict-in, dict-out wrapper matching the host's bot contract."""
        result = self.tick(
            PlayerState.from_dict(player),
            [PlayerState.from_dict(p) for p in players],
            snapshot_from_dicts(grid),
            message=message,
            frames_left=frames_left,
        )
        return result.to_dict()

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------
    def _initialize(self, frames_left: int) -> None:
        self.state = AgentState.INITIALIZING
        session = self.session
        cfg = self.config

        session.pace = classify_pace(frames_left, cfg.pace_frame_bounds)
        session.core_seeds = build_core_seeds(
            cfg.grid_rows, cfg.grid_cols, cfg.seed_offset, cfg.seed_spacing,
        )
        session.commit_budget = cfg.pace_config(session.pace).commit_ceiling
        session.initialized = True
        logger.debug(
            "Initialized %s: pace=%s, %d core seeds",
            self.name, session.pace.value, len(session.core_seeds),
        )

    def _recover(self, working: WorkingGrid, player: PlayerState) -> TickResult:
        """The unit was knocked off the grid by a bank; put it back."""
        self.state = AgentState.DISPLACED_RECOVERY
        session = self.session
        pace = self.config.pace_config(session.pace)
        self.engagement.commit(session, pace)

        self.annotator.annotate_occupants(working, player.id)
        selection = self.selector.recover(working, session.core_seeds, player.id)
        self.diagnostics.trace(
            DebugChannel.DECISION, "RETURN %s PLAYER[%d,%d,B0]",
            selection.tier.value, selection.row, selection.col,
        )
        return TickResult(
            col=selection.col,
            row=selection.row,
            boost=0,
            outcome=TickOutcome.RECOVERED,
            tier=selection.tier,
            pace=session.pace,
            commit_budget=session.commit_budget,
        )

    def _steady(
        self,
        working: WorkingGrid,
        player: PlayerState,
        players: list[PlayerState],
        frames_left: int,
    ) -> TickResult:
        session = self.session
        cfg = self.config

        session.pace = classify_pace(session.cycle_frames, cfg.pace_frame_bounds)
        pace = cfg.pace_config(session.pace)

        self.analyzer.analyze(working, player.id)
        self.annotator.annotate(working, player.id, pace)
        session.move_tiles = working.border_cells()
        self.diagnostics.dump_grid(working)

        current = working.at(player.row, player.col)
        self.diagnostics.work_summary(
            "START SELECTION for Player: ", player, current, frames_left,
        )

        if session.paused:
            return TickResult(
                col=player.col,
                row=player.row,
                boost=player.boost,
                outcome=TickOutcome.PAUSED,
                pace=session.pace,
                commit_budget=session.commit_budget,
            )

        stage = classify_stage(session.cycle_frames, frames_left, pace.stage_fraction)
        verdict = self.engagement.evaluate(working, player, players, session, pace)
        self.diagnostics.trace(
            DebugChannel.DECISION,
            "getNewTile: reselect=%s reason=%s budget=%d visitors=%d connections=%d",
            verdict.reselect, verdict.reason.value, session.commit_budget,
            current.num_occupants, current.num_connections,
        )

        if verdict.reselect:
            selection = self.selector.select(working, player, session, stage)
            if selection is None:
                selection = self.selector.uniform_random(working)
            self.engagement.commit(session, pace)
            target = selection.coords
            outcome = TickOutcome.RESELECT
            tier: SelectionTier | None = selection.tier
        else:
            self.engagement.hold(session, pace, verdict)
            target = player.coords
            outcome = TickOutcome.HOLD
            tier = None

        boost = self.boost_policy.decide(working, target, player, players)
        self.diagnostics.trace(
            DebugChannel.DECISION, "RETURN PLAYER SELECTION [%d,%d,B%d]",
            target[0], target[1], boost,
        )
        return TickResult(
            col=target[1],
            row=target[0],
            boost=boost,
            outcome=outcome,
            tier=tier,
            reason=verdict.reason,
            pace=session.pace,
            stage=stage,
            commit_budget=session.commit_budget,
        )
