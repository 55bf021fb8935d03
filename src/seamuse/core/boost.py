"""Boost (move intensity) policy."""

from __future__ import annotations

from seamuse.core.grid import PlayerState, WorkingGrid, find_player


class BoostPolicy:
    """
    Maps contention on the target cell and boost spend to a boost level.

    Uncontested moves cruise while spend is under the threshold. A
    contested cell gets full boost only when we have more boost left than
    the leading rival and the cell's progress is still open. A unit being
    placed back on the grid never boosts, so only on-grid targets reach
    this policy.
    """

    def __init__(
        self, spend_threshold: int = 20, cruise_boost: int = 2, max_boost: int = 3,
    ):
        self.spend_threshold = spend_threshold
        self.cruise_boost = cruise_boost
        self.max_boost = max_boost

    def cruise(self, player: PlayerState) -> int:
        if player.boost_used < self.spend_threshold:
            return self.cruise_boost
        return 0

    def decide(
        self,
        grid: WorkingGrid,
        target: tuple[int, int],
        player: PlayerState,
        players: list[PlayerState],
    ) -> int:
        """Boost for moving to the on-grid cell ``target``."""
        wc = grid.at(*target)
        if wc.num_occupants == 0:
            return self.cruise(player)

        rival = find_player(players, wc.occupant_ids[0], default=player)
        if player.boost_used < rival.boost_used and wc.cell.ticks < wc.cell.goal_ticks:
            return self.max_boost
        return 0
