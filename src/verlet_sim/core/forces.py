# MIT License (see LICENSE)
"""
External force generators.

Forces are accumulated as accelerations on the particle before the
relaxation and integration phases of a step. Since the Verlet integrator
multiplies by dt², these are true accelerations (units/s²), not forces.
"""
from __future__ import annotations

import numpy as np

from ..types import Particle


def apply_gravity(particle: Particle, g: np.ndarray) -> None:
    """
    Apply a uniform gravitational acceleration.

    Mass-independent, as gravity is. Has no effect on fixed particles.
    """
    if not particle.fixed:
        particle.accelerate(g)
