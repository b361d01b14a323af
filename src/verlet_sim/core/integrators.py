# MIT License (see LICENSE)
"""
Position Verlet integration.

The particle stores its previous position instead of a velocity. One step:

    v      = (x - x_prev) · friction
    x_prev = x
    x      = x + v + a·dt²
    a      = 0

friction = 1 is the frictionless scheme; friction < 1 bleeds a fixed
fraction of the implicit velocity every frame (air drag).

Reference:
    https://en.wikipedia.org/wiki/Verlet_integration#Basic_St%C3%B6rmer%E2%80%93Verlet
"""
from __future__ import annotations

from ..types import Particle


def verlet_step(particle: Particle, dt: float, friction: float = 1.0) -> None:
    """
    Advance a particle by one fixed timestep.

    Fixed particles are skipped entirely; their prev_position keeps
    matching position, so they carry no hidden velocity.

    Args:
        particle: Particle to integrate (modified in-place).
        dt: Timestep in seconds.
        friction: Multiplier on the implicit velocity, in (0, 1].
    """
    if particle.fixed:
        particle.acceleration.fill(0.0)
        return

    velocity = (particle.position - particle.prev_position) * friction
    particle.prev_position = particle.position.copy()
    particle.position = particle.position + velocity + particle.acceleration * (dt * dt)
    particle.acceleration.fill(0.0)
