"""
Population tracking and CSV telemetry for a running LifeGrid.
"""

from __future__ import annotations

import time
from collections import deque
from pathlib import Path
from types import TracebackType
from typing import IO, ClassVar

from life_grid import LifeGrid, StepResult

MAX_CYCLE_PERIOD = 30


# ═══════════════════════════════════════════════════════════════════════
#  History
# ═══════════════════════════════════════════════════════════════════════

class PopulationHistory:
    """
    Rolling record of population and generation fingerprints.

    A fingerprint is the hash of the frozen live-cell set, so a repeat means
    the exact same cells are alive again: still lifes report period 1,
    blinkers period 2. Moving patterns such as gliders never repeat in place
    and report no cycle.
    """

    def __init__(self, maxlen: int = 500, hash_window: int = 60) -> None:
        self.pop_history: deque[int] = deque(maxlen=maxlen)
        self.hash_history: deque[int] = deque(maxlen=hash_window)

    def record(self, grid: LifeGrid) -> None:
        cells = grid.cells
        self.pop_history.append(len(cells))
        self.hash_history.append(hash(cells))

    def clear(self) -> None:
        self.pop_history.clear()
        self.hash_history.clear()

    @property
    def cycle_period(self) -> int:
        """Smallest period (1-30) whose fingerprint matches the latest, else 0."""
        hh_len = len(self.hash_history)
        if hh_len < 2:
            return 0
        latest = self.hash_history[-1]
        for period in range(1, min(MAX_CYCLE_PERIOD + 1, hh_len)):
            if self.hash_history[-(period + 1)] == latest:
                return period
        return 0

    def spread(self, window: int = 150) -> int:
        """Population max minus min over the last ``window`` samples."""
        ph_len = len(self.pop_history)
        if window <= 0 or ph_len < window:
            return 0
        window_min = window_max = self.pop_history[-1]
        for i in range(ph_len - window, ph_len):
            v = self.pop_history[i]
            if v < window_min:
                window_min = v
            if v > window_max:
                window_max = v
        return window_max - window_min


# ═══════════════════════════════════════════════════════════════════════
#  Stats logger
# ═══════════════════════════════════════════════════════════════════════

class StatsLogger:
    """Writes per-generation engine telemetry to CSV."""

    HEADER: ClassVar[str] = "gen,time_s,population,births,deaths,cycle_period,event\n"

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._fh: IO[str] | None = None
        self._t0: float = time.monotonic()

    @property
    def enabled(self) -> bool:
        return self._fh is not None

    def open(self) -> None:
        try:
            self._fh = open(self._path, "w")
            self._fh.write(self.HEADER)
            self._fh.flush()
        except OSError:
            self._fh = None
        self._t0 = time.monotonic()

    def log(
        self,
        gen: int,
        pop: int,
        births: int,
        deaths: int,
        cycle: int = 0,
        event: str = "",
    ) -> None:
        if self._fh is None:
            return
        t = time.monotonic() - self._t0
        self._fh.write(f"{gen},{t:.3f},{pop},{births},{deaths},{cycle},{event}\n")
        # Flush on events or periodically
        if event or gen % 50 == 0:
            try:
                self._fh.flush()
            except OSError:
                pass

    def log_step(
        self, result: StepResult, grid: LifeGrid, history: PopulationHistory | None = None
    ) -> None:
        cycle = history.cycle_period if history is not None else 0
        self.log(
            gen=result.generation,
            pop=grid.population,
            births=len(result.births),
            deaths=len(result.deaths),
            cycle=cycle,
            event="extinct" if grid.population == 0 and result.deaths else "",
        )

    def close(self) -> None:
        if self._fh is not None:
            try:
                self._fh.close()
            except OSError:
                pass
            self._fh = None

    def __enter__(self) -> StatsLogger:
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
