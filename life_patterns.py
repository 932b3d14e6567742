"""
Named seed patterns and random soups for a LifeGrid.

Patterns are written as (row, col) offsets from their top-left corner, the
way they usually appear in pattern catalogues. Placement converts them to the
engine's (x, y) cells, so row maps to y and col maps to x.
"""

from __future__ import annotations

import numpy as np

from life_grid import Cell, LifeGrid

# ── Pattern library ─────────────────────────────────────────────────────
PATTERNS: dict[str, list[tuple[int, int]]] = {
    "block": [(0, 0), (0, 1), (1, 0), (1, 1)],
    "beehive": [(0, 1), (0, 2), (1, 0), (1, 3), (2, 1), (2, 2)],
    "blinker": [(0, 0), (0, 1), (0, 2)],
    "toad": [(0, 1), (0, 2), (0, 3), (1, 0), (1, 1), (1, 2)],
    "glider": [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)],
    "lwss": [
        (0, 1), (0, 4), (1, 0), (2, 0), (2, 4),
        (3, 0), (3, 1), (3, 2), (3, 3),
    ],
    "r_pentomino": [(0, 1), (0, 2), (1, 0), (1, 1), (2, 1)],
    "acorn": [(0, 1), (1, 3), (2, 0), (2, 1), (2, 4), (2, 5), (2, 6)],
    "diehard": [(0, 6), (1, 0), (1, 1), (2, 1), (2, 5), (2, 6), (2, 7)],
    "gosper_gun": [
        (0, 24),
        (1, 22), (1, 24),
        (2, 12), (2, 13), (2, 20), (2, 21), (2, 34), (2, 35),
        (3, 11), (3, 15), (3, 20), (3, 21), (3, 34), (3, 35),
        (4, 0), (4, 1), (4, 10), (4, 16), (4, 20), (4, 21),
        (5, 0), (5, 1), (5, 10), (5, 14), (5, 16), (5, 17), (5, 22), (5, 24),
        (6, 10), (6, 16), (6, 24),
        (7, 11), (7, 15),
        (8, 12), (8, 13),
    ],
    "pulsar": [
        (0, 2), (0, 3), (0, 4), (0, 8), (0, 9), (0, 10),
        (2, 0), (2, 5), (2, 7), (2, 12),
        (3, 0), (3, 5), (3, 7), (3, 12),
        (4, 0), (4, 5), (4, 7), (4, 12),
        (5, 2), (5, 3), (5, 4), (5, 8), (5, 9), (5, 10),
        (7, 2), (7, 3), (7, 4), (7, 8), (7, 9), (7, 10),
        (8, 0), (8, 5), (8, 7), (8, 12),
        (9, 0), (9, 5), (9, 7), (9, 12),
        (10, 0), (10, 5), (10, 7), (10, 12),
        (12, 2), (12, 3), (12, 4), (12, 8), (12, 9), (12, 10),
    ],
    "pentadecathlon": [
        (0, 1), (1, 1), (2, 0), (2, 2), (3, 1), (4, 1),
        (5, 1), (6, 1), (7, 0), (7, 2), (8, 1), (9, 1),
    ],
}

STILL_LIFES = ["block", "beehive"]
OSCILLATORS = ["blinker", "toad", "pulsar", "pentadecathlon"]
TRAVELLERS = ["glider", "lwss"]
METHUSELAHS = ["r_pentomino", "acorn", "diehard"]


def pattern_cells(name: str, rotation: int = 0) -> list[Cell]:
    """(x, y) cells of a named pattern, turned ``rotation`` quarter turns."""
    cells: list[Cell] = []
    for dy, dx in PATTERNS[name]:
        for _ in range(rotation % 4):
            dy, dx = dx, -dy
        cells.append((dx, dy))
    return cells


def place(
    grid: LifeGrid, name: str, x: int, y: int, rotation: int = 0
) -> int:
    """Stamp a pattern with its origin at (x, y). Returns cells written."""
    cells = pattern_cells(name, rotation)
    for dx, dy in cells:
        grid.set_alive((x + dx, y + dy))
    return len(cells)


def seed_soup(
    grid: LifeGrid,
    x0: int,
    y0: int,
    width: int,
    height: int,
    density: float,
    rng: np.random.Generator | None = None,
) -> int:
    """
    Scatter live cells over a rectangle, each alive with probability ``density``.

    Existing cells in the rectangle are left alone; the soup only adds.
    Returns the number of cells drawn alive.
    """
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must be in [0, 1], got {density}")
    if width <= 0 or height <= 0:
        raise ValueError(f"soup size must be positive, got {width}x{height}")
    if rng is None:
        rng = np.random.default_rng()
    soup = rng.random((height, width)) < density
    ys, xs = np.nonzero(soup)
    for x, y in zip((xs + x0).tolist(), (ys + y0).tolist()):
        grid.set_alive((x, y))
    return len(xs)
