"""
Tests for the engagement controller.

Covers every hold/re-select rule for a unit alone on its cell and in a
contest, plus the commit budget bookkeeping.
"""

import pytest

from seamuse.core.engagement import (
    EngagementController,
    EngagementReason,
    EngagementVerdict,
)
from seamuse.core.grid import PlayerState
from seamuse.core.pace import PaceConfig
from seamuse.core.session import SessionMemory


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

PACE = PaceConfig(fortify_threshold=4, commit_ceiling=14, stage_fraction=0.2)
SQUARE = ["000", "000", "000"]


def _make_session(budget=5):
    return SessionMemory(initialized=True, commit_budget=budget)


def _evaluate(grid, player, players=None, budget=5):
    return EngagementController().evaluate(
        grid, player, players or [player], _make_session(budget), PACE,
    )


ME = PlayerState(id=1, row=1, col=1, boost_used=3)


# ---------------------------------------------------------------------------
# Alone on the cell
# ---------------------------------------------------------------------------

class TestAlone:
    def test_budget_exhausted(self, analyzed):
        verdict = _evaluate(analyzed(SQUARE), ME, budget=-1)
        assert verdict.reselect
        assert verdict.reason is EngagementReason.BUDGET_EXHAUSTED

    def test_owned_idle_weakly_connected(self, analyzed):
        grid = analyzed(["...", ".0.", "..."], updates={(1, 1): {"team": 1}})
        verdict = _evaluate(grid, ME)
        assert verdict.reselect
        assert verdict.reason is EngagementReason.WEAKLY_CONNECTED

    def test_owned_idle_already_fortified(self, analyzed):
        grid = analyzed(SQUARE, updates={(1, 1): {"team": 1, "strength": 1}})
        verdict = _evaluate(grid, ME)
        assert verdict.reselect
        assert verdict.reason is EngagementReason.ALREADY_FORTIFIED

    def test_owned_idle_well_connected_holds_and_refreshes(self, analyzed):
        grid = analyzed(SQUARE, updates={(1, 1): {"team": 1}})
        verdict = _evaluate(grid, ME)
        assert not verdict.reselect
        assert verdict.reason is EngagementReason.HOLDING
        assert verdict.refresh_budget

    def test_unowned_open_cell_holds(self, analyzed):
        verdict = _evaluate(analyzed(SQUARE), ME)
        assert verdict == EngagementVerdict(False, EngagementReason.HOLDING, True)

    def test_in_progress_cell_holds_without_refresh(self, analyzed):
        grid = analyzed(SQUARE, updates={(1, 1): {"ticks": 2, "goal_ticks": 10}})
        verdict = _evaluate(grid, ME)
        assert not verdict.reselect
        assert not verdict.refresh_budget

    def test_chain_contested(self, analyzed):
        grid = analyzed(SQUARE, updates={
            (1, 1): {"ticks": 2, "goal_ticks": 10},
            (0, 0): {"occupants": [2]},
        })
        verdict = _evaluate(grid, ME)
        assert verdict.reselect
        assert verdict.reason is EngagementReason.CHAIN_CONTESTED

    def test_progress_complete(self, analyzed):
        grid = analyzed(SQUARE, updates={(1, 1): {"ticks": 10, "goal_ticks": 10}})
        verdict = _evaluate(grid, ME)
        assert verdict.reselect
        assert verdict.reason is EngagementReason.PROGRESS_COMPLETE

    def test_own_unit_does_not_count_as_occupant(self, analyzed):
        grid = analyzed(SQUARE, updates={(1, 1): {"occupants": [1]}})
        verdict = _evaluate(grid, ME)
        assert verdict.reason is EngagementReason.HOLDING


# ---------------------------------------------------------------------------
# Contested cell
# ---------------------------------------------------------------------------

class TestContest:
    def test_opponent_priority(self, analyzed):
        grid = analyzed(SQUARE, updates={(1, 1): {"occupants": [1, 2], "tick_team": 2}})
        verdict = _evaluate(grid, ME)
        assert verdict.reselect
        assert verdict.reason is EngagementReason.OPPONENT_PRIORITY

    def test_stalemate_is_not_priority(self, analyzed):
        grid = analyzed(SQUARE, updates={(1, 1): {"occupants": [1, 2], "tick_team": 0}})
        assert _evaluate(grid, ME).reason is EngagementReason.OPPONENT_PRIORITY

    def test_crowded(self, analyzed):
        grid = analyzed(SQUARE, updates={(1, 1): {"occupants": [1, 2, 3], "tick_team": 1}})
        verdict = _evaluate(grid, ME)
        assert verdict.reselect
        assert verdict.reason is EngagementReason.CROWDED

    def test_outspent(self, analyzed):
        grid = analyzed(SQUARE, updates={(1, 1): {"occupants": [1, 2], "tick_team": 1}})
        me = PlayerState(id=1, row=1, col=1, boost_used=10)
        rival = PlayerState(id=2, row=1, col=1, boost_used=5)
        verdict = _evaluate(grid, me, [me, rival])
        assert verdict.reselect
        assert verdict.reason is EngagementReason.OUTSPENT

    def test_holding_contest(self, analyzed):
        grid = analyzed(SQUARE, updates={(1, 1): {"occupants": [1, 2], "tick_team": 1}})
        me = PlayerState(id=1, row=1, col=1, boost_used=3)
        rival = PlayerState(id=2, row=1, col=1, boost_used=5)
        verdict = _evaluate(grid, me, [me, rival])
        assert not verdict.reselect
        assert verdict.reason is EngagementReason.HOLDING_CONTEST

    def test_unknown_occupant_falls_back_to_first_player(self, analyzed):
        grid = analyzed(SQUARE, updates={(1, 1): {"occupants": [1, 9], "tick_team": 1}})
        me = PlayerState(id=1, row=1, col=1, boost_used=3)
        verdict = _evaluate(grid, me, [me])
        # Compared against ourselves: not outspent.
        assert verdict.reason is EngagementReason.HOLDING_CONTEST


# ---------------------------------------------------------------------------
# Commit budget
# ---------------------------------------------------------------------------

class TestBudget:
    def test_commit_resets_to_ceiling(self):
        session = _make_session(budget=-1)
        EngagementController.commit(session, PACE)
        assert session.commit_budget == 14

    def test_hold_decrements(self):
        session = _make_session(budget=5)
        EngagementController.hold(
            session, PACE, EngagementVerdict(False, EngagementReason.HOLDING_CONTEST),
        )
        assert session.commit_budget == 4

    def test_hold_with_refresh(self):
        session = _make_session(budget=2)
        EngagementController.hold(
            session, PACE, EngagementVerdict(False, EngagementReason.HOLDING, True),
        )
        assert session.commit_budget == 13

    @pytest.mark.parametrize("start", [0, 3, 14])
    def test_budget_never_below_minus_one(self, analyzed, start):
        grid = analyzed(SQUARE, updates={(1, 1): {"ticks": 2, "goal_ticks": 10}})
        controller = EngagementController()
        session = _make_session(budget=start)
        seen = []
        for _ in range(40):
            verdict = controller.evaluate(grid, ME, [ME], session, PACE)
            if verdict.reselect:
                assert verdict.reason is EngagementReason.BUDGET_EXHAUSTED
                controller.commit(session, PACE)
            else:
                controller.hold(session, PACE, verdict)
            seen.append(session.commit_budget)
        assert min(seen) == -1
        assert max(seen) <= 14
