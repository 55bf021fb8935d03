"""
Bot presets: pre-configured bot variants.

Each preset returns an AgentConfig tuned to test a different idea about
how aggressively to claim, hold and boost.
"""

from __future__ import annotations

from seamuse.core.config import AgentConfig


def seamuse2() -> AgentConfig:
    """Standard configuration with default parameters."""
    return AgentConfig(bot_name="Seamuse2")


def full_lattice() -> AgentConfig:
    """Late-stage chain scan samples every row and column, edges included."""
    return AgentConfig(
        bot_name="Seamuse2-full-lattice",
        late_lattice_rows=[15, 13, 11, 9, 7, 5, 1, 14, 12, 10, 8, 6, 4, 2, 0],
        late_lattice_cols=[19, 17, 15, 13, 11, 9, 7, 5, 1, 18, 16, 14, 12, 10, 8, 6, 4, 2, 0],
    )


def thrifty() -> AgentConfig:
    """Stops cruising early to keep boost in reserve for contested cells."""
    return AgentConfig(
        bot_name="Seamuse2-thrifty",
        boost_spend_threshold=10,
        cruise_boost=1,
    )


def patient() -> AgentConfig:
    """Longer commit budgets: re-selects only when the cell stops paying off."""
    return AgentConfig(
        bot_name="Seamuse2-patient",
        pace_settings={
            "mini": {"fortify_threshold": 5, "commit_ceiling": 20, "stage_fraction": 0.0},
            "short": {"fortify_threshold": 4, "commit_ceiling": 28, "stage_fraction": 0.2},
            "medium": {"fortify_threshold": 4, "commit_ceiling": 36, "stage_fraction": 0.3},
            "long": {"fortify_threshold": 4, "commit_ceiling": 40, "stage_fraction": 0.2},
            "very_long": {"fortify_threshold": 4, "commit_ceiling": 40, "stage_fraction": 0.2},
        },
    )


PRESETS: dict[str, callable] = {
    "seamuse2": seamuse2,
    "full_lattice": full_lattice,
    "thrifty": thrifty,
    "patient": patient,
}


def get_preset(name: str) -> AgentConfig:
    """Get a preset config by name."""
    if name not in PRESETS:
        raise KeyError(f"Unknown preset: '{name}'. Available: {list(PRESETS.keys())}")
    return PRESETS[name]()


def list_presets() -> list[str]:
    """Return list of available preset names."""
    return list(PRESETS.keys())
