#!/usr/bin/env python3
"""Drive a Seamuse bot over generated snapshots and print what it decided."""

import logging

from seamuse.core.agent import TerritoryAgent
from seamuse.core.grid import PlayerState
from seamuse.core.snapshot_generators import generate_random_snapshot, patch_snapshot
from seamuse.experiment.presets import get_preset
from seamuse.metrics.collector import TickCollector


def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    config = get_preset("seamuse2")
    config.random_seed = 42
    agent = TerritoryAgent(config)
    collector = TickCollector()

    cycle = 250
    ticks = 600
    me = PlayerState(id=1)
    rival = PlayerState(id=2, row=8, col=10, boost_used=5)

    print(f"=== Seamuse demo: {config.bot_name} ===")
    print(f"Grid: {config.grid_rows}x{config.grid_cols}, bank every {cycle} frames")
    print()

    for t in range(ticks):
        frames_left = cycle - 1 - (t % cycle)
        snapshot = generate_random_snapshot(
            config.grid_rows, config.grid_cols, seed=t // cycle,
            teams=2, owned_fraction=0.2,
        )
        occupants = {rival.coords: {"occupants": [rival.id]}}
        if not me.off_grid:
            occupants[me.coords] = {"occupants": [me.id]}
            if me.coords == rival.coords:
                occupants[me.coords] = {"occupants": [me.id, rival.id]}
        snapshot = patch_snapshot(snapshot, occupants)

        message = "debug2" if t == 10 else ("debug0" if t == 12 else None)
        result = agent.tick(me, [me, rival], snapshot, message, frames_left)
        collector.collect(result, agent.last_grid)

        # Knock the unit off the grid right after every bank.
        if frames_left == 0:
            me = PlayerState(id=1, boost_used=me.boost_used)
        else:
            me = PlayerState(
                id=1, row=result.row, col=result.col, boost=result.boost,
                boost_used=me.boost_used + (1 if result.boost > 0 else 0),
            )

    summary = collector.summary()
    print(f"Ticks:       {summary['ticks']}")
    print(f"Outcomes:    {summary['outcomes']}")
    print(f"Tiers:       {summary['tiers']}")
    print(f"Reasons:     {summary['reasons']}")
    print(f"Mean boost:  {summary['mean_boost']:.2f}")
    print(f"Bank count:  {agent.session.bank_count}")


if __name__ == "__main__":
    main()
