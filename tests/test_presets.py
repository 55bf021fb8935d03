"""Tests for bot presets."""

import pytest

from seamuse.core.agent import TerritoryAgent
from seamuse.core.config import AgentConfig
from seamuse.core.grid import PlayerState
from seamuse.core.pace import Pace
from seamuse.core.snapshot_generators import generate_uniform_snapshot
from seamuse.experiment.presets import (
    PRESETS,
    full_lattice,
    get_preset,
    list_presets,
    patient,
    seamuse2,
    thrifty,
)


class TestPresetRegistry:
    def test_four_presets_defined(self):
        assert len(PRESETS) == 4

    def test_list_presets(self):
        assert list_presets() == ["seamuse2", "full_lattice", "thrifty", "patient"]

    def test_get_preset(self):
        assert isinstance(get_preset("thrifty"), AgentConfig)

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="Unknown preset"):
            get_preset("nonexistent")

    def test_fresh_config_each_call(self):
        assert get_preset("seamuse2") is not get_preset("seamuse2")


class TestPresetValues:
    def test_seamuse2_is_default(self):
        assert seamuse2().diff(AgentConfig()) == {}

    def test_full_lattice_reaches_edges(self):
        c = full_lattice()
        assert 0 in c.late_lattice_rows and 15 in c.late_lattice_rows
        assert 0 in c.late_lattice_cols and 19 in c.late_lattice_cols

    def test_thrifty(self):
        c = thrifty()
        assert c.boost_spend_threshold < AgentConfig().boost_spend_threshold
        assert c.cruise_boost == 1

    def test_patient_doubles_ceilings(self):
        base, c = AgentConfig(), patient()
        for pace in Pace:
            assert c.pace_config(pace).commit_ceiling == 2 * base.pace_config(pace).commit_ceiling


class TestPresetsRun:
    @pytest.mark.parametrize("name", list(PRESETS))
    def test_each_preset_plays_a_tick(self, name):
        config = get_preset(name)
        config.random_seed = 1
        agent = TerritoryAgent(config)
        me = PlayerState(id=1)
        result = agent.tick(me, [me], generate_uniform_snapshot(), None, 250)
        assert 0 <= result.row < config.grid_rows
        assert 0 <= result.col < config.grid_cols
