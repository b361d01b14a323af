# MIT License (see LICENSE)
"""
Per-phase timing for Simulation.step().

Attach a Profiler to a Simulation and every step records how long the
forces, relax, integrate and bounds phases took.

Example:
    profiler = Profiler()
    sim = Simulation(profiler=profiler)
    for _ in range(600):
        sim.step()
    profiler.log_summary()
"""
from __future__ import annotations
import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

logger = logging.getLogger(__name__)


@dataclass
class ProfileStats:
    """Raw timing samples per phase name, in seconds."""
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Summary statistics per phase.

        Returns:
            Dict mapping phase name to {'n', 'mean_ms', 'max_ms', 'total_ms'}.
        """
        out = {}
        for name, times in self.samples.items():
            n = len(times)
            total = sum(times)
            out[name] = {
                "n": n,
                "mean_ms": 1e3 * total / n,
                "max_ms": 1e3 * max(times),
                "total_ms": 1e3 * total,
            }
        return out


class Profiler:
    """Context-manager based timer for named phases."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)

    def log_summary(self, level: int = logging.INFO) -> None:
        """Write one line per phase to the package logger."""
        for name, s in sorted(self.stats.summary().items()):
            logger.log(
                level,
                "%-10s n=%d mean=%.3fms max=%.3fms total=%.1fms",
                name, s["n"], s["mean_ms"], s["max_ms"], s["total_ms"],
            )
