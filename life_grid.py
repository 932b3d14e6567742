"""
Sparse Game of Life engine.

Live cells are kept as a set of integer (x, y) pairs on an unbounded plane.
Each generation only looks at live cells and their Moore neighbourhood, so
the cost of a step scales with the population rather than with any grid area.
"""

from __future__ import annotations

import operator
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

Cell = tuple[int, int]

# ── Rule ────────────────────────────────────────────────────────────────
# B3/S23: born with exactly 3 neighbours, survives with 2 or 3
BIRTH: frozenset[int] = frozenset({3})
SURVIVE: frozenset[int] = frozenset({2, 3})

# ── Moore neighbourhood ─────────────────────────────────────────────────
NEIGHBOR_OFFSETS: tuple[Cell, ...] = (
    (1, 0), (-1, 0), (0, 1), (0, -1),
    (1, -1), (-1, 1), (1, 1), (-1, -1),
)


@dataclass(frozen=True)
class StepResult:
    """What changed in one generation."""
    generation: int
    births: frozenset[Cell]
    deaths: frozenset[Cell]


def _cell(pos: Iterable[int]) -> Cell:
    # Integers only (numpy ints included); floats raise TypeError
    x, y = pos
    return operator.index(x), operator.index(y)


def _scan(
    cells: set[Cell] | frozenset[Cell], pos: Cell
) -> tuple[int, list[Cell]]:
    x, y = pos
    count = 0
    dead: list[Cell] = []
    for dx, dy in NEIGHBOR_OFFSETS:
        n = (x + dx, y + dy)
        if n in cells:
            count += 1
        else:
            dead.append(n)
    return count, dead


class LifeGrid:
    """
    The set of live cells plus the generation step.

    A grid is one simulation session. It owns its live-cell set exclusively;
    every accessor that exposes cells hands back a frozen copy. Mutations
    (toggle, set_alive, clear, step) must be serialised by the caller.
    """

    def __init__(self, cells: Iterable[Iterable[int]] = ()) -> None:
        self._cells: set[Cell] = {_cell(c) for c in cells}
        self.generation: int = 0

    @classmethod
    def from_array(
        cls, arr: NDArray, x0: int = 0, y0: int = 0
    ) -> LifeGrid:
        """Build a grid from the nonzero entries of a (rows, cols) array."""
        if arr.ndim != 2:
            raise ValueError(f"expected a 2D array, got shape {arr.shape}")
        ys, xs = np.nonzero(arr)
        return cls(zip((xs + x0).tolist(), (ys + y0).tolist()))

    # ── Editing ─────────────────────────────────────────────────────

    def toggle(self, pos: Cell) -> bool:
        """Flip a cell. Returns True if the cell is now alive."""
        c = _cell(pos)
        if c in self._cells:
            self._cells.remove(c)
            return False
        self._cells.add(c)
        return True

    def set_alive(self, pos: Cell, alive: bool = True) -> None:
        c = _cell(pos)
        if alive:
            self._cells.add(c)
        else:
            self._cells.discard(c)

    def clear(self) -> None:
        self._cells = set()
        self.generation = 0

    # ── Queries ─────────────────────────────────────────────────────

    def is_alive(self, pos: Cell) -> bool:
        return _cell(pos) in self._cells

    def neighbors_of(self, pos: Cell) -> tuple[int, list[Cell]]:
        """
        Scan the 8 cells around ``pos``.

        Returns the number of live neighbours and the positions of the dead
        ones, in NEIGHBOR_OFFSETS order. Dead neighbours are the only cells
        that can be born next to ``pos``.
        """
        return _scan(self._cells, _cell(pos))

    @property
    def cells(self) -> frozenset[Cell]:
        return frozenset(self._cells)

    @property
    def population(self) -> int:
        return len(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, pos: object) -> bool:
        try:
            return _cell(pos) in self._cells  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return False

    def __iter__(self) -> Iterator[Cell]:
        return iter(tuple(self._cells))

    def __repr__(self) -> str:
        return f"LifeGrid(population={len(self._cells)}, generation={self.generation})"

    def bounding_box(self) -> tuple[int, int, int, int] | None:
        """(min_x, min_y, max_x, max_y) of the live cells, or None if empty."""
        if not self._cells:
            return None
        xs = [x for x, _ in self._cells]
        ys = [y for _, y in self._cells]
        return min(xs), min(ys), max(xs), max(ys)

    def viewport(
        self, x0: int, y0: int, width: int, height: int
    ) -> NDArray[np.int8]:
        """
        Liveness of a window as a (height, width) int8 array.

        ``arr[y - y0, x - x0]`` is 1 for every live (x, y) inside the window.
        This is the whole-window form of is_alive() for a render pass.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"viewport size must be positive, got {width}x{height}")
        out = np.zeros((height, width), dtype=np.int8)
        # Filter before converting: cell coordinates may not fit in int64
        rows: list[int] = []
        cols: list[int] = []
        for x, y in self._cells:
            if x0 <= x < x0 + width and y0 <= y < y0 + height:
                rows.append(y - y0)
                cols.append(x - x0)
        if rows:
            out[rows, cols] = 1
        return out

    # ── Simulation ──────────────────────────────────────────────────

    def step(self) -> StepResult:
        """
        Advance one generation.

        Every neighbour count is taken against a snapshot of the current
        generation; deaths and births are collected first and applied
        together, so the update is simultaneous.
        """
        snapshot = frozenset(self._cells)
        to_die: set[Cell] = set()
        to_spawn: set[Cell] = set()
        checked: set[Cell] = set()

        for pos in snapshot:
            alive, dead = _scan(snapshot, pos)
            if alive not in SURVIVE:
                to_die.add(pos)

            # Dead neighbours are the birth candidates; each is counted once
            for n in dead:
                if n in checked:
                    continue
                checked.add(n)
                if _scan(snapshot, n)[0] in BIRTH:
                    to_spawn.add(n)

        # Single rebind: observers see either the old or the new generation
        self._cells = (set(snapshot) - to_die) | to_spawn
        self.generation += 1
        return StepResult(
            generation=self.generation,
            births=frozenset(to_spawn),
            deaths=frozenset(to_die),
        )
