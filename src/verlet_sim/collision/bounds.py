# MIT License (see LICENSE)
"""
Containment regions.

Boundaries clamp particle positions once per frame, after integration.
They are position clamps only: prev_position is left alone, so a particle
pushed back from a wall loses the outward part of its implicit velocity on
the next step.
"""
from __future__ import annotations
from dataclasses import dataclass

import numpy as np

from ..types import Particle
from ..util import f64, norm2


@dataclass(frozen=True)
class CircleBoundary:
    """
    Keeps particles inside a circle.

    A particle whose center is farther than radius - particle.radius from
    center is projected back onto that distance along the
    center-to-particle direction.
    """
    center: tuple[float, float]
    radius: float

    def apply(self, particle: Particle) -> None:
        if particle.fixed:
            return
        c = f64(self.center)
        to_p = particle.position - c
        limit = self.radius - particle.radius
        dist2 = norm2(to_p)
        if dist2 <= max(limit, 0.0) ** 2:
            return
        dist = dist2 ** 0.5
        particle.position = c + to_p * (max(limit, 0.0) / dist)


@dataclass(frozen=True)
class RectBoundary:
    """
    Keeps particles inside an axis-aligned rectangle.

    Each axis is clamped independently into
    [min_corner + radius, max_corner - radius].
    """
    min_corner: tuple[float, float]
    max_corner: tuple[float, float]

    def __post_init__(self) -> None:
        if self.min_corner[0] > self.max_corner[0] or self.min_corner[1] > self.max_corner[1]:
            raise ValueError(
                f"RectBoundary min_corner {self.min_corner} exceeds max_corner {self.max_corner}"
            )

    def apply(self, particle: Particle) -> None:
        if particle.fixed:
            return
        r = particle.radius
        lo = f64(self.min_corner) + r
        hi = f64(self.max_corner) - r
        # A particle wider than the box sits on its center line.
        mid = 0.5 * (lo + hi)
        lo, hi = np.minimum(lo, mid), np.maximum(hi, mid)
        particle.position = np.clip(particle.position, lo, hi)


Boundary = CircleBoundary | RectBoundary
