# MIT License (see LICENSE)
"""
Collision and containment subsystem.

This subpackage provides:
    - resolve_collisions: Exhaustive pairwise disk overlap correction.
    - CircleBoundary, RectBoundary: Position clamps into a region.

Typical usage:
    from verlet_sim.collision import resolve_collisions, CircleBoundary

    resolve_collisions(store, eps=1e-6)
    arena = CircleBoundary(center=(400, 400), radius=350)
    for p in store:
        arena.apply(p)
"""
from .resolver import resolve_collision, resolve_collisions
from .bounds import Boundary, CircleBoundary, RectBoundary

__all__ = [
    "resolve_collision",
    "resolve_collisions",
    "Boundary",
    "CircleBoundary",
    "RectBoundary",
]
