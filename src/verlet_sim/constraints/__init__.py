# MIT License (see LICENSE)
"""
Constraint solvers for particle simulation.

This subpackage provides constraint types and solvers:
    - DistanceConstraint: Holds two particles at a rest length.
    - AngleConstraint: Holds the angle at a vertex particle.
    - solve_distance_constraints / solve_angle_constraints: One
      Gauss-Seidel relaxation pass each.

Typical usage:
    from verlet_sim.constraints import DistanceConstraint, solve_distance_constraints

    constraint = DistanceConstraint(a=0, b=1, rest_length=100.0)
    solve_distance_constraints(store, [constraint], eps=1e-6)
"""
from .solver import (
    DistanceConstraint,
    AngleConstraint,
    solve_distance_constraints,
    solve_angle_constraints,
)

__all__ = [
    "DistanceConstraint",
    "AngleConstraint",
    "solve_distance_constraints",
    "solve_angle_constraints",
]
