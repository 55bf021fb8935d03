"""
Debug channels and console diagnostics.

The operator chooses a debug level at runtime; each level enables a fixed
set of channels. Messages on an enabled channel are logged at INFO, every
other trace at DEBUG, so the host's logging configuration still decides
what reaches the console.

Level map:
    1, 3, 6 -> SELECTION
    2, 3, 7 -> DECISION
    4       -> GRID
    5       -> BANK
"""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from seamuse.core.grid import PlayerState, WorkingCell, WorkingGrid
    from seamuse.core.session import SessionMemory

logger = logging.getLogger(__name__)


class DebugChannel(IntEnum):
    SELECTION = 1  # Which tier picked which cell
    DECISION = 2   # Engagement verdicts and tick summaries
    GRID = 4       # Full grid dumps
    BANK = 5       # Bank events


CHANNEL_LEVELS: dict[DebugChannel, frozenset[int]] = {
    DebugChannel.SELECTION: frozenset({1, 3, 6}),
    DebugChannel.DECISION: frozenset({2, 3, 7}),
    DebugChannel.GRID: frozenset({4}),
    DebugChannel.BANK: frozenset({5}),
}


def channel_enabled(debug_level: int, channel: DebugChannel) -> bool:
    return debug_level in CHANNEL_LEVELS[channel]


class Diagnostics:
    """Channel-aware logging bound to one session's debug level."""

    def __init__(self, session: SessionMemory):
        self.session = session

    def enabled(self, channel: DebugChannel) -> bool:
        return channel_enabled(self.session.debug_level, channel)

    def trace(self, channel: DebugChannel, msg: str, *args: Any) -> None:
        level = logging.INFO if self.enabled(channel) else logging.DEBUG
        logger.log(level, msg, *args)

    def dump_grid(self, grid: WorkingGrid) -> None:
        """Log the snapshot and chain views of the grid on the GRID channel."""
        if not self.enabled(DebugChannel.GRID):
            return
        for line in render_grid(grid, with_chains=False):
            logger.info(line)
        for line in render_grid(grid, with_chains=True):
            logger.info(line)

    def work_summary(
        self, prefix: str, player: PlayerState, wc: WorkingCell, frames_left: int,
    ) -> None:
        """One-line state summary of the unit's cell on the DECISION channel."""
        if not self.enabled(DebugChannel.DECISION):
            return
        self.trace(DebugChannel.DECISION, describe_cell(
            prefix, player, wc, frames_left, self.session.commit_budget,
        ))


def render_grid(grid: WorkingGrid, with_chains: bool = False) -> list[str]:
    """One line per row of ``kind:team`` (or ``kind:team:chain_length``) cells."""
    lines: list[str] = []
    for r in range(grid.rows):
        parts = []
        for c in range(grid.cols):
            wc = grid.at(r, c)
            if with_chains:
                parts.append(f"{wc.kind}:{wc.cell.team}:{wc.chain_length}")
            else:
                parts.append(f"{wc.kind}:{wc.cell.team}")
        lines.append(f"Row{r}  " + "  ".join(parts))
    return lines


def describe_cell(
    prefix: str, player: PlayerState, wc: WorkingCell, frames_left: int,
    commit_budget: int,
) -> str:
    cell = wc.cell
    return (
        f"{prefix}{player.id}:CL{wc.chain_length}"
        f" [{player.row},{player.col}] {frames_left},{commit_budget}"
        f" B:{player.boost},{player.boost_used}"
        f" Team:{cell.team} Visitors:{wc.num_occupants}"
        f" Ticks/Goal/tickTeam: {int(cell.ticks)}/{cell.goal_ticks:g}/{cell.tick_team}"
        f" OwnedBy{{{wc.unclaimed_in_chain},{wc.mine_in_chain},{wc.other_in_chain}}}"
        f" Neighbors:{wc.num_connections} Stage:{int(wc.stage)}"
    )
