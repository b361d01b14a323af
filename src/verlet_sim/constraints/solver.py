# MIT License (see LICENSE)
"""
Position-based constraint relaxation.

Constraints are satisfied by moving particle positions directly, one
constraint at a time, in creation order (Gauss-Seidel). A single pass does
not converge when particles share constraints; the simulation repeats the
pass solver_iters times per frame.

Degenerate geometry (a zero-length distance, or a zero-length/anti-parallel
pair of arms at an angle vertex) has no defined correction direction. Such
a constraint is skipped for that pass and picked up again once the
particles move apart. Each solver returns the number of skips.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from ..util import cross2, norm, rotate, signed_angle, unit, wrap_angle

if TYPE_CHECKING:
    from ..types import Particle
    from ..core.store import ParticleStore


@dataclass(frozen=True)
class DistanceConstraint:
    """
    Holds particles a and b at rest_length from each other.

    Attributes:
        a: Index of the first particle.
        b: Index of the second particle.
        rest_length: Target separation (non-negative).
    """
    a: int
    b: int
    rest_length: float


@dataclass(frozen=True)
class AngleConstraint:
    """
    Holds the angle at vertex b between the arms b→a and b→c.

    target_angle is the signed angle rotating the direction b→c onto the
    direction b→a (counterclockwise positive), in (-π, π]. The arms keep their lengths; the solver decides whether
    the vertex b recoils or stays put.

    Attributes:
        a: Index of the first arm endpoint.
        b: Index of the vertex.
        c: Index of the second arm endpoint.
        target_angle: Rest angle in radians.
    """
    a: int
    b: int
    c: int
    target_angle: float


def solve_distance_constraints(
    store: ParticleStore,
    constraints: list[DistanceConstraint],
    eps: float,
) -> int:
    """
    Run one relaxation pass over all distance constraints.

    The error is split by inverse mass: a moves by w_a · error towards b and
    b moves by w_b · error towards a, where w_a = inv_m_a / (inv_m_a + inv_m_b).
    For two dynamic particles this is m_b / (m_a + m_b); a fixed particle has
    inverse mass 0, so its partner absorbs the whole error.

    Returns:
        Number of constraints skipped (zero length, or both ends fixed).
    """
    skipped = 0
    for c in constraints:
        a, b = store.borrow(c.a, c.b)
        w_sum = a.inv_mass + b.inv_mass
        if w_sum == 0.0:
            # Both fixed: cannot be satisfied, not an error.
            skipped += 1
            continue

        delta = b.position - a.position
        dist = norm(delta)
        if dist < eps:
            skipped += 1
            continue

        n = delta / dist
        error = dist - c.rest_length
        a.position += n * (error * a.inv_mass / w_sum)
        b.position -= n * (error * b.inv_mass / w_sum)
    return skipped


def _place_joint(joint: tuple[Particle, Particle, Particle], shape: list[np.ndarray]) -> None:
    """
    Move the joint's particles onto shape by the rigid motion that displaces
    them least (mass-weighted). Fixed particles stay put: one fixed particle
    becomes the pivot, two fixed particles determine the motion completely.
    """
    current = [p.position for p in joint]
    pinned = [k for k, p in enumerate(joint) if p.fixed]
    if pinned:
        k = pinned[0]
        shape_origin, origin = shape[k], current[k]
        matched = pinned[1:] or [j for j in range(3) if j != k]
        weights = [1.0 if joint[j].fixed else joint[j].mass for j in matched]
    else:
        matched = [0, 1, 2]
        weights = [p.mass for p in joint]
        total = sum(weights)
        shape_origin = sum(w * s for w, s in zip(weights, shape)) / total
        origin = sum(w * q for w, q in zip(weights, current)) / total

    num = 0.0
    den = 0.0
    for j, w in zip(matched, weights):
        s = shape[j] - shape_origin
        q = current[j] - origin
        num += w * cross2(s, q)
        den += w * float(np.dot(s, q))
    turn = float(np.arctan2(num, den))

    for p, s in zip(joint, shape):
        if not p.fixed:
            p.position = origin + rotate(s - shape_origin, turn)


def solve_angle_constraints(
    store: ParticleStore,
    constraints: list[AngleConstraint],
    eps: float,
    pin_vertex: bool = False,
) -> int:
    """
    Run one relaxation pass over all angle constraints.

    Both arms are re-aimed symmetrically about the bisector of their current
    directions: a goes to bisector rotated by +θ/2, c to bisector rotated by
    -θ/2. Arm lengths |b→a| and |b→c| are preserved, so the pass never fights
    the distance constraints along the arms.

    By default the re-aimed joint is then placed back with the rigid motion
    that moves its three particles least, which keeps their mass-weighted
    centroid and lets b recoil. Re-aiming alone (pin_vertex=True) never moves
    b, but in a chain every correction pushes the neighbouring joints further
    off target than it fixed its own, and the chain diverges. A joint already
    within eps of its target is left alone.

    Returns:
        Number of constraints skipped for degenerate geometry.
    """
    skipped = 0
    for con in constraints:
        a, b, c = store.borrow(con.a, con.b, con.c)
        if a.fixed and c.fixed:
            skipped += 1
            continue

        ba = a.position - b.position
        bc = c.position - b.position
        len_a = norm(ba)
        len_c = norm(bc)
        if len_a < eps or len_c < eps:
            skipped += 1
            continue
        if abs(wrap_angle(signed_angle(bc, ba) - con.target_angle)) < eps:
            continue

        bisector = unit(ba / len_a + bc / len_c, eps)
        if not bisector.any():
            # Arms anti-parallel: the bisector has no direction.
            skipped += 1
            continue

        half = 0.5 * con.target_angle
        new_a = b.position + rotate(bisector, half) * len_a
        new_c = b.position + rotate(bisector, -half) * len_c
        if pin_vertex:
            if not a.fixed:
                a.position = new_a
            if not c.fixed:
                c.position = new_c
        else:
            _place_joint((a, b, c), [new_a, b.position.copy(), new_c])
    return skipped
