"""Timing and run configuration for the benchmark harness."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Tuple

ITERATIONS = 4000
DEFAULT_NUM_CONTEXTS = 1
FLAGS_STR = "-> default, see makefile"
COMPILER_FLAGS = FLAGS_STR
MEM_LOCATION = "STACK"
TICKS_PER_SECOND = 1_000_000

_U32 = 0xFFFFFFFF


def _microsecond_clock() -> int:
    return time.perf_counter_ns() // 1000


@dataclass
class Timer:
    """Measures the timed section of a run in 32-bit wrapping ticks."""

    clock: Callable[[], int] = _microsecond_clock
    ticks_per_second: int = TICKS_PER_SECOND
    _start: int = field(default=0, init=False, repr=False)
    _stop: int = field(default=0, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.ticks_per_second <= 0:
            raise ValueError("ticks_per_second must be positive")

    def start(self) -> None:
        """Record the start of the timed section."""
        self._start = self.clock() & _U32

    def stop(self) -> None:
        """Record the end of the timed section."""
        self._stop = self.clock() & _U32

    def get_time(self) -> int:
        """Ticks elapsed between start and stop, modulo 2**32."""
        return (self._stop - self._start) & _U32

    def time_in_secs(self, ticks: int) -> int:
        """Whole seconds contained in ``ticks``."""
        return (ticks & _U32) // self.ticks_per_second


class RunProfile(Enum):
    """Seed presets for the standard kinds of run."""

    PERFORMANCE = "performance"
    VALIDATION = "validation"
    PROFILE = "profile"


_SEEDS = {
    RunProfile.VALIDATION: (0x3415, 0x3415, 0x66),
    RunProfile.PERFORMANCE: (0x0, 0x0, 0x66),
    RunProfile.PROFILE: (0x8, 0x8, 0x8),
}


def default_profile(total_data_size: int) -> RunProfile:
    """Pick the run profile implied by the total data size."""
    if total_data_size == 1200:
        return RunProfile.PROFILE
    if total_data_size == 2000:
        return RunProfile.PERFORMANCE
    return RunProfile.VALIDATION


def default_seeds(profile: RunProfile) -> Tuple[int, int, int, int, int]:
    """Return (seed1, seed2, seed3, iterations, execs) for ``profile``."""
    seed1, seed2, seed3 = _SEEDS[profile]
    return seed1, seed2, seed3, ITERATIONS, 0