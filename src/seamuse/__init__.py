"""Seamuse: a per-tick target selection bot for a territory-control grid game."""

from seamuse.core.agent import TerritoryAgent, TickOutcome, TickResult
from seamuse.core.config import AgentConfig

__all__ = [
    "AgentConfig",
    "TerritoryAgent",
    "TickOutcome",
    "TickResult",
]
