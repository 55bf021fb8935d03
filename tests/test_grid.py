"""Tests for snapshot records, the roster lookup and the working grid."""

import pytest

from seamuse.core.grid import (
    EMPTY_KIND,
    Cell,
    Ownership,
    PlayerState,
    ProgressOwnership,
    SnapshotError,
    WorkingGrid,
    classify_owner,
    classify_progress,
    find_player,
    snapshot_from_dicts,
)
from seamuse.core.snapshot_generators import generate_uniform_snapshot


class TestCell:
    def test_from_host_dict(self):
        cell = Cell.from_dict({
            "row": 3, "col": 4, "nodeId": 64, "type": 2, "team": 1,
            "strength": 1, "ticks": 2, "goalTicks": 10, "tickTeam": 2,
            "visitors": [{"id": 1}, {"id": 2}],
        })
        assert cell.coords == (3, 4)
        assert cell.node_id == 64
        assert cell.kind == 2
        assert cell.fortified
        assert cell.goal_ticks == 10.0
        assert cell.tick_team == 2
        assert cell.occupants == (1, 2)

    def test_visitors_as_mapping_or_ids(self):
        by_map = Cell.from_dict({"row": 0, "col": 0, "visitors": {"a": {"id": 5}}})
        by_ids = Cell.from_dict({"row": 0, "col": 0, "visitors": [5, 6]})
        assert by_map.occupants == (5,)
        assert by_ids.occupants == (5, 6)

    def test_missing_fields_default_to_empty(self):
        cell = Cell.from_dict({"row": 1, "col": 1})
        assert cell.kind == EMPTY_KIND
        assert cell.is_empty
        assert cell.occupants == ()


class TestPlayer:
    def test_from_host_dict(self):
        p = PlayerState.from_dict({"id": 2, "col": 5, "row": 7, "boost": 1, "boostUsed": 12})
        assert p.coords == (7, 5)
        assert p.boost_used == 12
        assert not p.off_grid

    def test_off_grid(self):
        assert PlayerState(id=1).off_grid
        assert PlayerState(id=1, row=3).off_grid
        assert PlayerState(id=1, row=-1, col=4).off_grid

    def test_find_player(self):
        roster = [PlayerState(id=1), PlayerState(id=2, boost_used=9)]
        assert find_player(roster, 2).boost_used == 9

    def test_find_player_falls_back_to_first(self):
        roster = [PlayerState(id=1), PlayerState(id=2)]
        assert find_player(roster, 9).id == 1

    def test_find_player_empty_roster_uses_default(self):
        me = PlayerState(id=1)
        assert find_player([], 9, default=me) is me
        assert find_player([], 9) is None


class TestOwnership:
    def test_classify_owner(self):
        assert classify_owner(0, 1) is Ownership.UNCLAIMED
        assert classify_owner(1, 1) is Ownership.MINE
        assert classify_owner(2, 1) is Ownership.OTHER

    def test_classify_progress(self):
        assert classify_progress(0, 1) is ProgressOwnership.STALEMATE
        assert classify_progress(1, 1) is ProgressOwnership.MINE
        assert classify_progress(3, 1) is ProgressOwnership.OTHER


class TestWorkingGrid:
    def test_rejects_wrong_row_count(self):
        with pytest.raises(SnapshotError):
            WorkingGrid.from_snapshot(generate_uniform_snapshot(15, 20), 16, 20)

    def test_rejects_ragged_rows(self):
        snapshot = generate_uniform_snapshot(16, 20)
        snapshot[4] = snapshot[4][:-1]
        with pytest.raises(SnapshotError):
            WorkingGrid.from_snapshot(snapshot, 16, 20)

    def test_snapshot_error_is_value_error(self):
        assert issubclass(SnapshotError, ValueError)

    def test_bounds(self):
        grid = WorkingGrid.from_snapshot(generate_uniform_snapshot(16, 20), 16, 20)
        assert grid.in_bounds(0, 0)
        assert grid.in_bounds(15, 19)
        assert not grid.in_bounds(16, 0)
        assert not grid.in_bounds(0, 20)
        assert not grid.in_bounds(-1, 3)
        assert grid.get(-1, 3) is None
        assert len(grid) == 320

    def test_row_major_iteration(self):
        grid = WorkingGrid.from_snapshot(generate_uniform_snapshot(2, 3), 2, 3)
        assert [wc.coords for wc in grid] == [
            (0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2),
        ]

    def test_neighbor_counts(self):
        grid = WorkingGrid.from_snapshot(generate_uniform_snapshot(4, 4), 4, 4)
        assert len(grid.neighbors(0, 0)) == 3
        assert len(grid.neighbors(0, 2)) == 5
        assert len(grid.neighbors(2, 2)) == 8

    def test_border_cells_cover_edge_once(self):
        grid = WorkingGrid.from_snapshot(generate_uniform_snapshot(16, 20), 16, 20)
        tiles = grid.border_cells()
        assert len(tiles) == 2 * 16 + 2 * 18
        assert len(set(tiles)) == len(tiles)
        for r, c in tiles:
            assert r in (0, 15) or c in (0, 19)

    def test_snapshot_does_not_change(self):
        snapshot = generate_uniform_snapshot(2, 2)
        grid = WorkingGrid.from_snapshot(snapshot, 2, 2)
        grid.at(0, 0).chain_length = 4
        assert grid.at(0, 0).cell is snapshot[0][0]

    def test_from_dicts(self):
        rows = [[{"row": r, "col": c, "type": 1} for c in range(3)] for r in range(2)]
        grid = WorkingGrid.from_snapshot(snapshot_from_dicts(rows), 2, 3)
        assert all(wc.kind == 1 for wc in grid)
