# MIT License (see LICENSE)
"""
Diagnostics for verifying simulation correctness.

Verlet particles carry no velocity, so the kinetic quantities here are
derived from position - prev_position. The residual helpers report how far
each constraint currently is from its target, which is the measure of
solver convergence.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

import numpy as np

from ..types import Particle
from ..util import norm, signed_angle, wrap_angle

if TYPE_CHECKING:
    from ..constraints.solver import AngleConstraint, DistanceConstraint
    from .store import ParticleStore


def implicit_velocity(particle: Particle, dt: float) -> np.ndarray:
    """Velocity in units/s implied by the last frame's displacement."""
    return (particle.position - particle.prev_position) / dt


def kinetic_energy(particles, dt: float) -> float:
    """
    Total kinetic energy T = Σ 0.5 · m · |v|² over non-fixed particles.

    Args:
        particles: Iterable of particles (e.g. a ParticleStore).
        dt: Timestep used to convert displacement into velocity.
    """
    ke = 0.0
    for p in particles:
        if p.fixed:
            continue
        v = implicit_velocity(p, dt)
        ke += 0.5 * p.mass * float(np.dot(v, v))
    return ke


def distance_residuals(
    store: ParticleStore, constraints: list[DistanceConstraint]
) -> np.ndarray:
    """|current length - rest length| per distance constraint."""
    out = np.zeros(len(constraints), dtype=np.float64)
    for k, c in enumerate(constraints):
        a, b = store.borrow(c.a, c.b)
        out[k] = abs(norm(b.position - a.position) - c.rest_length)
    return out


def angle_residuals(
    store: ParticleStore, constraints: list[AngleConstraint]
) -> np.ndarray:
    """Absolute wrapped angle error per angle constraint, in [0, π]."""
    out = np.zeros(len(constraints), dtype=np.float64)
    for k, c in enumerate(constraints):
        a, b, cc = store.borrow(c.a, c.b, c.c)
        current = signed_angle(cc.position - b.position, a.position - b.position)
        out[k] = abs(wrap_angle(current - c.target_angle))
    return out
