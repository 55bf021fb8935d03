"""
Engagement controller: decides each tick whether to keep working the
current cell or pick a new target.

The commit budget counts down while the unit holds a cell and is reset to
the pace ceiling every time a new target is chosen. Re-selection is forced
once the budget goes negative, so it never drops below -1.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from seamuse.core.grid import (
    Ownership,
    PlayerState,
    ProgressOwnership,
    WorkingCell,
    WorkingGrid,
    find_player,
)
from seamuse.core.pace import PaceConfig
from seamuse.core.session import SessionMemory


class EngagementReason(str, Enum):
    """Why the controller held or released the current cell."""
    BUDGET_EXHAUSTED = "budget_exhausted"
    WEAKLY_CONNECTED = "weakly_connected"    # Owned, idle, too few connections to fortify
    ALREADY_FORTIFIED = "already_fortified"
    CHAIN_CONTESTED = "chain_contested"      # Someone else is working the same chain
    PROGRESS_COMPLETE = "progress_complete"
    OPPONENT_PRIORITY = "opponent_priority"  # Another team is advancing this cell
    CROWDED = "crowded"
    OUTSPENT = "outspent"                    # Rival has more boost left than we do
    HOLDING = "holding"
    HOLDING_CONTEST = "holding_contest"


@dataclass(frozen=True)
class EngagementVerdict:
    reselect: bool
    reason: EngagementReason
    refresh_budget: bool = False  # Holding a cell worth fortifying


class EngagementController:
    """Evaluates the hold-current-cell test and owns the commit budget."""

    def evaluate(
        self,
        grid: WorkingGrid,
        player: PlayerState,
        players: list[PlayerState],
        session: SessionMemory,
        pace: PaceConfig,
    ) -> EngagementVerdict:
        """Decide whether the unit should pick a new target this tick."""
        if session.commit_budget < 0:
            return EngagementVerdict(True, EngagementReason.BUDGET_EXHAUSTED)

        wc = grid.at(player.row, player.col)
        if wc.num_occupants == 0:
            return self._evaluate_alone(grid, wc, player.id, pace)
        return self._evaluate_contest(wc, player, players)

    def _evaluate_alone(
        self, grid: WorkingGrid, wc: WorkingCell, my_team: int, pace: PaceConfig,
    ) -> EngagementVerdict:
        cell = wc.cell
        idle_and_mine = (
            wc.ownership(my_team) is Ownership.MINE
            and cell.goal_ticks == 0
            and wc.progress_ownership(my_team) is ProgressOwnership.STALEMATE
        )
        if idle_and_mine and wc.num_connections < pace.fortify_threshold:
            return EngagementVerdict(True, EngagementReason.WEAKLY_CONNECTED)
        if idle_and_mine and cell.fortified:
            return EngagementVerdict(True, EngagementReason.ALREADY_FORTIFIED)

        if cell.ticks < cell.goal_ticks or cell.goal_ticks == 0:
            chain = grid.chain_of(wc)
            if chain is not None and chain.peak_occupants > 0:
                return EngagementVerdict(True, EngagementReason.CHAIN_CONTESTED)
            refresh = (
                cell.goal_ticks == 0
                and wc.num_connections >= pace.fortify_threshold
            )
            return EngagementVerdict(
                False, EngagementReason.HOLDING, refresh_budget=refresh,
            )

        return EngagementVerdict(True, EngagementReason.PROGRESS_COMPLETE)

    def _evaluate_contest(
        self, wc: WorkingCell, player: PlayerState, players: list[PlayerState],
    ) -> EngagementVerdict:
        if wc.progress_ownership(player.id) is not ProgressOwnership.MINE:
            return EngagementVerdict(True, EngagementReason.OPPONENT_PRIORITY)
        if wc.num_occupants > 1:
            return EngagementVerdict(True, EngagementReason.CROWDED)

        rival = find_player(players, wc.occupant_ids[0], default=player)
        if player.boost_used > rival.boost_used:
            return EngagementVerdict(True, EngagementReason.OUTSPENT)
        return EngagementVerdict(False, EngagementReason.HOLDING_CONTEST)

    # ------------------------------------------------------------------
    # Budget
    # ------------------------------------------------------------------
    @staticmethod
    def hold(session: SessionMemory, pace: PaceConfig, verdict: EngagementVerdict) -> None:
        """Stay on the current cell for another tick."""
        if verdict.refresh_budget:
            session.commit_budget = pace.commit_ceiling
        session.commit_budget -= 1

    @staticmethod
    def commit(session: SessionMemory, pace: PaceConfig) -> None:
        """A new target was chosen."""
        session.commit_budget = pace.commit_ceiling
