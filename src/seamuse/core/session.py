"""
Session memory: the only state that survives between ticks.

One ``SessionMemory`` is created per game, owned by a single
``TerritoryAgent``, mutated by the orchestrator and the engagement
controller, and discarded when the game ends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from seamuse.core.pace import Pace


@dataclass
class SessionMemory:
    """Cross-tick memory for one game."""

    initialized: bool = False
    pace: Pace = Pace.VERY_LONG
    frames_left: int = 0    # Frames remaining seen on the previous tick
    cycle_frames: int = 0   # Frames remaining seen at the most recent bank
    bank_count: int = 0
    core_seeds: list[tuple[int, int]] = field(default_factory=list)
    move_tiles: list[tuple[int, int]] = field(default_factory=list)
    commit_budget: int = 0
    paused: bool = False
    debug_level: int = 0

    def record_frames(self, frames_left: int) -> bool:
        """Record this tick's frames and detect a bank event.

        Returns True when ``frames_left`` jumped upward since the previous
        tick, in which case the cycle length and bank count are updated.
        The first tick of a game always counts as a bank.
        """
        banked = self.frames_left < frames_left
        if banked:
            self.cycle_frames = frames_left
            self.bank_count += 1
        self.frames_left = frames_left
        return banked

    def to_dict(self) -> dict[str, Any]:
        return {
            "initialized": self.initialized,
            "pace": self.pace.value,
            "frames_left": self.frames_left,
            "cycle_frames": self.cycle_frames,
            "bank_count": self.bank_count,
            "core_seeds": [list(c) for c in self.core_seeds],
            "move_tiles": [list(c) for c in self.move_tiles],
            "commit_budget": self.commit_budget,
            "paused": self.paused,
            "debug_level": self.debug_level,
        }
