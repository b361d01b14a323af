# MIT License (see LICENSE)
"""
Pairwise overlap resolution between particles treated as disks.

This is a pure positional correction (position-based dynamics): overlapping
disks are pushed apart along the center-to-center axis until they just
touch. No impulse or velocity is exchanged; the Verlet integrator picks up
the displacement as implicit velocity on the next step.

The pass is an exhaustive O(N²) scan over unordered pairs in index order.
"""
from __future__ import annotations
from typing import TYPE_CHECKING

from ..types import Particle
from ..util import norm2

if TYPE_CHECKING:
    from ..core.store import ParticleStore


def resolve_collision(a: Particle, b: Particle, eps: float) -> bool:
    """
    Separate two overlapping disks.

    The overlap delta = (r_a + r_b) - distance is split so that the larger
    disk moves less: a moves r_b / (r_a + r_b) · delta and b moves the rest.
    A fixed particle never moves; its partner takes the full delta.

    Returns:
        True if a correction was applied.
    """
    if a.fixed and b.fixed:
        return False

    r_sum = a.radius + b.radius
    d = a.position - b.position
    dist2 = norm2(d)
    if dist2 >= r_sum * r_sum:
        return False

    dist = dist2 ** 0.5
    if dist < eps:
        # Coincident centers: no separation axis.
        return False

    n = d / dist
    delta = r_sum - dist
    if a.fixed:
        share_a, share_b = 0.0, 1.0
    elif b.fixed:
        share_a, share_b = 1.0, 0.0
    else:
        share_a = b.radius / r_sum
        share_b = a.radius / r_sum

    a.position += n * (share_a * delta)
    b.position -= n * (share_b * delta)
    return True


def resolve_collisions(store: ParticleStore, eps: float) -> int:
    """
    Resolve every overlapping pair once.

    Returns:
        Number of pairs corrected in this pass.
    """
    particles = list(store)
    n = len(particles)
    hits = 0
    for i in range(n):
        pi = particles[i]
        for j in range(i + 1, n):
            if resolve_collision(pi, particles[j], eps):
                hits += 1
    return hits
