"""
Connectivity analysis: partition the grid into chains.

A chain is a maximal set of non-empty cells of the same kind connected
through 8-adjacency. Chains are rooted at the first member found in
row-major order, collected with an explicit-stack depth-first traversal,
and their ownership tallies are copied onto every member so the selector
can read them in O(1).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from seamuse.core.grid import (
    NEIGHBOR_OFFSETS,
    Ownership,
    WorkingCell,
    WorkingGrid,
)


@dataclass
class Chain:
    """One connected same-kind region of the working grid."""
    chain_id: int
    kind: int
    root: tuple[int, int]
    members: list[WorkingCell] = field(default_factory=list)
    unclaimed: int = 0
    mine: int = 0
    other: int = 0
    peak_occupants: int = 0  # Filled in by the metrics annotator

    @property
    def length(self) -> int:
        return len(self.members)


class ChainAnalyzer:
    """Flood-fills the working grid and annotates chain membership.

    Each cell is popped exactly once. The connection list of a cell is
    filled the first time it is popped, from the same neighbor scan that
    feeds the stack; duplicates are pushed freely and discarded on pop.
    """

    def analyze(self, grid: WorkingGrid, my_team: int) -> list[Chain]:
        """Partition ``grid`` into chains for the team ``my_team``.

        Sets ``chain_id``, ``chain_length``, ``connections`` and the three
        ownership tallies on every working cell, and stores the chains on
        ``grid.chains``.

        Returns:
            The chains, indexed by chain id.
        """
        chains: list[Chain] = []
        for wc in grid:
            if wc.processed:
                continue
            if wc.is_empty:
                wc.chain_length = 0
                continue

            chain = Chain(chain_id=len(chains), kind=wc.kind, root=wc.coords)
            chain.members = self._collect(grid, wc)
            self._tally(chain, my_team)
            for member in chain.members:
                member.chain_id = chain.chain_id
                member.chain_length = chain.length
                member.unclaimed_in_chain = chain.unclaimed
                member.mine_in_chain = chain.mine
                member.other_in_chain = chain.other
            chains.append(chain)

        grid.chains = chains
        return chains

    @staticmethod
    def _collect(grid: WorkingGrid, root: WorkingCell) -> list[WorkingCell]:
        stack = [root]
        visited: set[tuple[int, int]] = set()
        members: list[WorkingCell] = []

        while stack:
            cell = stack.pop()
            if cell.coords in visited:
                continue
            visited.add(cell.coords)
            members.append(cell)

            populate = not cell.connections
            for dr, dc in NEIGHBOR_OFFSETS:
                nr, nc = cell.row + dr, cell.col + dc
                if not grid.in_bounds(nr, nc):
                    continue
                neighbor = grid.at(nr, nc)
                if neighbor.kind != cell.kind:
                    continue
                stack.append(neighbor)
                if populate:
                    cell.connections.append(neighbor.coords)

        return members

    @staticmethod
    def _tally(chain: Chain, my_team: int) -> None:
        for member in chain.members:
            owner = member.ownership(my_team)
            if owner is Ownership.UNCLAIMED:
                chain.unclaimed += 1
            elif owner is Ownership.MINE:
                chain.mine += 1
            else:
                chain.other += 1
