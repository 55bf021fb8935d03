"""
Master configuration for the Seamuse territory bot.

Every threshold, ceiling, lattice and keyword the bot uses lives here.
Per-pace settings are keyed by ``Pace`` name so a single parameterized
decision path serves every bank-cycle length.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from seamuse.core.pace import Pace, PaceConfig


@dataclass
class AgentConfig:
    """
    Bot configuration with all parameters as tunable values.

    Use ``to_dict()`` / ``from_dict()`` for serialization and comparison.
    """

    # === Identity ===
    bot_name: str = "Seamuse2"
    random_seed: int | None = None

    # === Grid geometry ===
    grid_rows: int = 16
    grid_cols: int = 20

    # === Boost ===
    boost_spend_threshold: int = 20  # Cruise boost only while boost_used is below this
    cruise_boost: int = 2
    max_boost: int = 3

    # === Pace classification ===
    # Upper (exclusive) frames-remaining bound per pace. Anything above the
    # last bound is VERY_LONG.
    pace_frame_bounds: dict[str, int] = field(default_factory=lambda: {
        "mini": 100,
        "short": 200,
        "medium": 300,
        "long": 600,
    })
    pace_settings: dict[str, dict[str, float]] = field(default_factory=lambda: {
        "mini": {"fortify_threshold": 5, "commit_ceiling": 10, "stage_fraction": 0.0},
        "short": {"fortify_threshold": 4, "commit_ceiling": 14, "stage_fraction": 0.2},
        "medium": {"fortify_threshold": 4, "commit_ceiling": 18, "stage_fraction": 0.3},
        "long": {"fortify_threshold": 4, "commit_ceiling": 20, "stage_fraction": 0.2},
        "very_long": {"fortify_threshold": 4, "commit_ceiling": 20, "stage_fraction": 0.2},
    })

    # === Chain analysis ===
    stage_ceiling: int = 8  # Reference chain size for per-cell stage classification
    max_connection_tier: int = 8

    # === Chain-follow tier ===
    chain_follow_min_length: int = 3
    chain_follow_max_occupants: int = 3  # Chain is abandoned at this many occupants

    # === Best-unclaimed-chain tier ===
    early_lattice_rows: list[int] = field(default_factory=lambda: [
        13, 11, 9, 7, 5, 1, 14, 12, 10, 8, 6, 4, 2,
    ])
    early_lattice_cols: list[int] = field(default_factory=lambda: [
        17, 15, 13, 11, 9, 7, 5, 1, 18, 16, 14, 12, 10, 8, 6, 4, 2,
    ])
    late_lattice_rows: list[int] = field(default_factory=lambda: [
        13, 11, 9, 7, 5, 3, 12, 10, 8, 6, 4, 2,
    ])
    late_lattice_cols: list[int] = field(default_factory=lambda: [
        17, 15, 13, 11, 9, 7, 5, 3, 16, 14, 12, 10, 8, 6, 4, 2,
    ])
    early_min_chain_length: int = 2  # A chain must exceed this to end the scan
    late_min_chain_length: int = 3

    # === Core seeds ===
    seed_offset: int = 2
    seed_spacing: int = 3

    # === Operator messages ===
    pause_keyword: str = "pause"
    debug_keyword: str = "debug"
    debug_level: int = 0

    def __post_init__(self) -> None:
        if self.grid_rows <= 0 or self.grid_cols <= 0:
            raise ValueError(
                f"Grid dimensions must be positive, got "
                f"{self.grid_rows}x{self.grid_cols}"
            )
        missing = [p.value for p in Pace if p.value not in self.pace_settings]
        if missing:
            raise ValueError(f"Missing pace settings for: {missing}")
        unknown = [k for k in self.pace_frame_bounds if k not in self.pace_settings]
        if unknown:
            raise ValueError(f"Unknown pace names in pace_frame_bounds: {unknown}")

    # ------------------------------------------------------------------
    # Derived
    # ------------------------------------------------------------------
    def pace_config(self, pace: Pace) -> PaceConfig:
        """Build the parameter bundle for one pace bucket."""
        s = self.pace_settings[pace.value]
        return PaceConfig(
            fortify_threshold=int(s["fortify_threshold"]),
            commit_ceiling=int(s["commit_ceiling"]),
            stage_fraction=float(s["stage_fraction"]),
        )

    @property
    def cell_count(self) -> int:
        return self.grid_rows * self.grid_cols

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> AgentConfig:
        """Deserialize from a dict."""
        return cls(**{k: v for k, v in d.items() if not k.startswith("_")})

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    @classmethod
    def from_json(cls, s: str) -> AgentConfig:
        return cls.from_dict(json.loads(s))

    def diff(self, other: AgentConfig) -> dict[str, tuple[Any, Any]]:
        """Return parameters that differ between two configs."""
        diffs: dict[str, tuple[Any, Any]] = {}
        for k in self.to_dict():
            v1 = getattr(self, k)
            v2 = getattr(other, k)
            if v1 != v2:
                diffs[k] = (v1, v2)
        return diffs
