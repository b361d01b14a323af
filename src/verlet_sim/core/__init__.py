# MIT License (see LICENSE)
"""
Core physics simulation components.

This subpackage provides:
    - ParticleStore: The append-only particle arena.
    - Integrator: Position Verlet with optional air friction.
    - Force generators: Uniform gravity.
    - Diagnostics: Kinetic energy and constraint residuals.

Typical usage:
    from verlet_sim.core import apply_gravity, verlet_step

    apply_gravity(particle, np.array([0.0, 150.0]))
    verlet_step(particle, dt=1/60, friction=0.99)
"""
from .store import ParticleStore
from .forces import apply_gravity
from .integrators import verlet_step
from .invariants import (
    implicit_velocity,
    kinetic_energy,
    distance_residuals,
    angle_residuals,
)

__all__ = [
    "ParticleStore",
    # Forces
    "apply_gravity",
    # Integrators
    "verlet_step",
    # Diagnostics
    "implicit_velocity",
    "kinetic_energy",
    "distance_residuals",
    "angle_residuals",
]
