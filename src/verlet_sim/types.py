# MIT License (see LICENSE)
"""
Core type definitions for the particle simulation.

A particle carries no explicit velocity. Verlet integration derives it
from the difference between the current and the previous position:

    v ≈ x(t) - x(t - dt)
    x(t + dt) = x(t) + v + a·dt²
"""
from __future__ import annotations
from dataclasses import dataclass, field

import numpy as np

from .util import f64


@dataclass
class Particle:
    """
    A point mass simulated with position Verlet.

    Attributes:
        position: Current position [x, y].
        prev_position: Position one frame ago. Defaults to position
                       (zero initial velocity).
        mass: Mass used to split distance corrections. A particle created
              with mass ≤ 0 is treated as fixed.
        radius: Disk radius for collision and boundary clamping.
        fixed: Fixed particles are never moved by integration, constraints,
               collisions or boundaries.
        acceleration: Accumulated acceleration, cleared after integration.
        id: Dense index assigned by ParticleStore.add().
    """
    position: np.ndarray | tuple[float, float]
    radius: float = 0.0
    mass: float = 1.0
    fixed: bool = False
    prev_position: np.ndarray | tuple[float, float] | None = None

    # Runtime state (not user-specified)
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(2, dtype=np.float64))
    id: int = -1

    def __post_init__(self) -> None:
        if self.radius < 0:
            raise ValueError(f"Particle radius must be non-negative, got {self.radius}")
        self.position = f64(self.position)
        self.prev_position = (
            self.position.copy() if self.prev_position is None else f64(self.prev_position)
        )
        self.acceleration = f64(self.acceleration)
        if self.mass <= 0:
            self.fixed = True

    @property
    def inv_mass(self) -> float:
        """Inverse mass (1/m). Returns 0 for fixed particles."""
        return 0.0 if self.fixed or self.mass <= 0 else 1.0 / self.mass

    @property
    def velocity(self) -> np.ndarray:
        """Implicit per-frame displacement (position - prev_position)."""
        return self.position - self.prev_position

    def accelerate(self, a: np.ndarray | tuple[float, float]) -> None:
        """Add to the accumulated acceleration. The integrator ignores it for fixed particles."""
        self.acceleration += a

    def set_fixed(self, fixed: bool) -> None:
        """
        Pin or release the particle.

        prev_position is reset on every transition so that releasing a
        particle that was moved while pinned does not launch it.
        """
        if self.mass <= 0 and not fixed:
            raise ValueError("A particle with mass <= 0 cannot be released")
        self.fixed = bool(fixed)
        self.prev_position = self.position.copy()
        self.acceleration.fill(0.0)
