"""
Pace and stage classification.

Pace buckets the length of the current bank cycle (how many frames there
were to work with when the cycle started). Stage splits a count against a
pace-dependent fraction of a ceiling into EARLY and LATE. Both drive the
thresholds used by the engagement controller and the target selector.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class Pace(str, Enum):
    """Bank-cycle length buckets, shortest first."""
    MINI = "mini"            # ~10 second rebank
    SHORT = "short"          # ~20 seconds
    MEDIUM = "medium"        # ~30 seconds
    LONG = "long"            # ~60 seconds
    VERY_LONG = "very_long"  # anything longer


class EngagementStage(IntEnum):
    """Coarse progress classification of a count against its ceiling."""
    EARLY = 1
    LATE = 2


@dataclass(frozen=True)
class PaceConfig:
    """Parameters selected once per tick from the pace bucket."""
    fortify_threshold: int  # Connections needed before an owned cell is worth fortifying
    commit_ceiling: int     # Commit budget after every re-selection
    stage_fraction: float   # Fraction of the ceiling above which a count is LATE


def classify_pace(frames: int, bounds: dict[str, int]) -> Pace:
    """Map a bank-cycle length in frames to its pace bucket.

    Args:
        frames: Frames remaining at the start of the cycle.
        bounds: Pace name -> exclusive upper frame bound.

    Returns:
        The first pace whose bound exceeds ``frames``, else VERY_LONG.
    """
    for name, bound in sorted(bounds.items(), key=lambda kv: kv[1]):
        if frames < bound:
            return Pace(name)
    return Pace.VERY_LONG


def classify_stage(ceiling: float, count: float, fraction: float) -> EngagementStage:
    """LATE once ``count`` exceeds ``fraction`` of ``ceiling``, else EARLY."""
    if count > fraction * ceiling:
        return EngagementStage.LATE
    return EngagementStage.EARLY
