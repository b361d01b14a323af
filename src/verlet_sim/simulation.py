# MIT License (see LICENSE)
"""
The simulation world and frame loop.

The Simulation class owns every particle and constraint and advances them
with a fixed timestep. One call to step() runs:
    1. Force accumulation (gravity).
    2. solver_iters relaxation passes, each one:
         a. Pairwise collision resolution (optional).
         b. All distance constraints, in creation order.
         c. All angle constraints, in creation order.
    3. Verlet integration of every non-fixed particle.
    4. Boundary clamping.

Structure:
    - User creates a Simulation (or calls create_simulation()).
    - User adds particles and constraints; indices are dense and stable.
    - User calls sim.step() once per frame and reads positions back through
      particle_position() or snapshot().

step() is not reentrant. Nothing here is thread-safe: mutate and step from
one thread only.
"""
from __future__ import annotations
import logging
from contextlib import nullcontext
from dataclasses import dataclass, field
from typing import Iterator

import numpy as np

from .constants import DEFAULT_EPS, DEFAULT_SOLVER_ITERS, DELTA_TIME
from .types import Particle
from .util import f64, norm, signed_angle, wrap_angle
from .profiler import Profiler
from .core.store import ParticleStore
from .core.forces import apply_gravity
from .core.integrators import verlet_step
from .collision.resolver import resolve_collisions
from .collision.bounds import Boundary
from .constraints.solver import (
    AngleConstraint, solve_angle_constraints,
    DistanceConstraint, solve_distance_constraints,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationSnapshot:
    """
    Read-only copy of the state a renderer needs.

    All arrays are copies with the writeable flag cleared, so holding a
    snapshot never aliases live particle storage.

    Attributes:
        positions: (n, 2) particle positions.
        radii: (n,) particle radii.
        fixed: (n,) boolean mask of fixed particles.
        segments: (m, 2) particle index pairs of the distance constraints.
        frame: Number of completed steps.
        time: Simulated seconds (frame · dt).
    """
    positions: np.ndarray
    radii: np.ndarray
    fixed: np.ndarray
    segments: np.ndarray
    frame: int
    time: float


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


@dataclass
class Simulation:
    """
    Particle simulation world.

    Attributes:
        dt: Fixed timestep in seconds (default: 1/60).
        solver_iters: Relaxation passes per step. Higher = stiffer and more
                      accurate but slower. Default: 8.
        air_friction: Multiplier on the implicit velocity each step, in
                      (0, 1]. 1.0 is frictionless; AIR_FRICTION (0.99)
                      gives gentle damping.
        gravity: Uniform acceleration applied to non-fixed particles.
                 Screen coordinates: +y points down.
        enable_collisions: Run the pairwise disk overlap pass.
        eps: Vectors shorter than this count as zero length, and angle
             constraints within eps of their target are left alone.
        pin_angle_vertex: Angle constraints only swing the arm endpoints and
                          never move the vertex. Exact for a lone joint,
                          but chains of joints do not settle. Default off:
                          the whole joint recoils about its centroid.
        boundaries: Containment regions applied after integration.
        profiler: Optional Profiler for per-phase timing.
    """
    dt: float = DELTA_TIME
    solver_iters: int = DEFAULT_SOLVER_ITERS
    air_friction: float = 1.0
    gravity: tuple[float, float] = (0.0, 0.0)
    enable_collisions: bool = True
    eps: float = DEFAULT_EPS
    pin_angle_vertex: bool = False
    boundaries: list[Boundary] = field(default_factory=list)
    profiler: Profiler | None = None

    # Internal state
    particles: ParticleStore = field(default_factory=ParticleStore)
    distance_constraints: list[DistanceConstraint] = field(default_factory=list)
    angle_constraints: list[AngleConstraint] = field(default_factory=list)
    frame: int = 0
    time: float = 0.0

    def __post_init__(self) -> None:
        if not self.dt > 0:
            raise ValueError(f"dt must be positive, got {self.dt}")
        if int(self.solver_iters) < 1:
            raise ValueError(f"solver_iters must be >= 1, got {self.solver_iters}")
        if not 0.0 < self.air_friction <= 1.0:
            raise ValueError(f"air_friction must be in (0, 1], got {self.air_friction}")
        if not self.eps > 0:
            raise ValueError(f"eps must be positive, got {self.eps}")
        self.solver_iters = int(self.solver_iters)
        self._g = f64(self.gravity)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_particle(
        self,
        position: tuple[float, float] | np.ndarray,
        radius: float = 0.0,
        mass: float = 1.0,
        fixed: bool = False,
    ) -> int:
        """
        Add a particle at rest.

        Args:
            position: Initial position; previous position is set equal to it.
            radius: Disk radius (collision and boundary clamping).
            mass: Mass. mass ≤ 0 makes the particle fixed.
            fixed: Fixed particles never move.

        Returns:
            The new particle's index (0, 1, 2, ... in creation order).
        """
        return self.particles.add(
            Particle(position=position, radius=radius, mass=mass, fixed=fixed)
        )

    def create_distance_constraint(self, a: int, b: int, rest_length: float) -> None:
        """
        Hold particles a and b at rest_length apart.

        Raises:
            IndexError: a or b is not a particle index.
            ValueError: a == b, or rest_length is negative.
        """
        self.particles.borrow(a, b)
        rest_length = float(rest_length)
        if not np.isfinite(rest_length) or rest_length < 0:
            raise ValueError(f"rest_length must be finite and non-negative, got {rest_length}")
        self.distance_constraints.append(DistanceConstraint(a=int(a), b=int(b), rest_length=rest_length))

    def create_distance_constraint_in_place(self, a: int, b: int) -> float:
        """
        Hold particles a and b at their current distance.

        Returns:
            The rest length that was recorded.
        """
        pa, pb = self.particles.borrow(a, b)
        rest_length = norm(pb.position - pa.position)
        self.create_distance_constraint(a, b, rest_length)
        return rest_length

    def create_angle_constraint(self, a: int, b: int, c: int, target_angle: float) -> None:
        """
        Hold the angle at vertex b between b→a and b→c.

        target_angle is the signed angle from direction b→c to direction
        b→a (counterclockwise positive). It is wrapped into (-π, π].

        Raises:
            IndexError: an index is not a particle index.
            ValueError: the three indices are not pairwise distinct.
        """
        self.particles.borrow(a, b, c)
        target_angle = wrap_angle(target_angle)
        self.angle_constraints.append(
            AngleConstraint(a=int(a), b=int(b), c=int(c), target_angle=target_angle)
        )

    def create_angle_constraint_in_place(self, a: int, b: int, c: int) -> float:
        """
        Hold the angle at vertex b at its current value.

        If either arm has zero length the current angle is undefined and 0
        is recorded.

        Returns:
            The target angle that was recorded.
        """
        target_angle = self.measure_angle(a, b, c)
        self.create_angle_constraint(a, b, c, target_angle)
        return target_angle

    def measure_angle(self, a: int, b: int, c: int) -> float:
        """Current signed angle from b→c to b→a, using the same convention as AngleConstraint."""
        pa, pb, pc = self.particles.borrow(a, b, c)
        ba = pa.position - pb.position
        bc = pc.position - pb.position
        if norm(ba) < self.eps or norm(bc) < self.eps:
            return 0.0
        return signed_angle(bc, ba)

    # ------------------------------------------------------------------
    # Per-particle access (between steps)
    # ------------------------------------------------------------------

    def accelerate(self, index: int, acceleration: tuple[float, float] | np.ndarray) -> None:
        """Add to a particle's accumulated acceleration for the next step."""
        self.particles[index].accelerate(f64(acceleration))

    def move_particle(self, index: int, position: tuple[float, float] | np.ndarray) -> None:
        """
        Write a particle's position directly (e.g. mouse drag).

        The previous position is kept, so the move becomes implicit
        velocity: a particle let go after a drag keeps moving.
        """
        self.particles[index].position = f64(position)

    def set_fixed(self, index: int, fixed: bool) -> None:
        """Pin or release a particle without introducing velocity."""
        self.particles[index].set_fixed(fixed)

    def particle_position(self, index: int) -> np.ndarray:
        """Copy of one particle's position."""
        return self.particles[index].position.copy()

    def select_nearest_particle(
        self, point: tuple[float, float] | np.ndarray, epsilon: float
    ) -> int | None:
        """
        Find the particle closest to point.

        Only particles whose squared distance to point is at most epsilon
        qualify. Ties go to the lowest index.

        Args:
            point: Query point [x, y].
            epsilon: Threshold on squared distance.

        Returns:
            Index of the nearest qualifying particle, or None.
        """
        if len(self.particles) == 0:
            return None
        d2 = np.sum((self.particles.positions() - f64(point)) ** 2, axis=1)
        best = int(np.argmin(d2))
        if d2[best] > epsilon:
            return None
        return best

    def distance_constraint_endpoints(self) -> Iterator[tuple[int, int]]:
        """Particle index pairs of the distance constraints, for drawing segments."""
        for c in self.distance_constraints:
            yield c.a, c.b

    def snapshot(self) -> SimulationSnapshot:
        """Read-only copy of positions, radii, fixed flags and segments."""
        ps = list(self.particles)
        segments = np.array(
            [(c.a, c.b) for c in self.distance_constraints], dtype=np.int64
        ).reshape(-1, 2)
        return SimulationSnapshot(
            positions=_frozen(self.particles.positions()),
            radii=_frozen(np.array([p.radius for p in ps], dtype=np.float64)),
            fixed=_frozen(np.array([p.fixed for p in ps], dtype=bool)),
            segments=_frozen(segments),
            frame=self.frame,
            time=self.time,
        )

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def _section(self, name: str):
        return self.profiler.section(name) if self.profiler else nullcontext()

    def _apply_forces(self) -> None:
        if not np.any(self._g):
            return
        for p in self.particles:
            apply_gravity(p, self._g)

    def _relax(self) -> tuple[int, int]:
        """Run solver_iters relaxation passes. Returns (collision hits, skipped constraints)."""
        hits = 0
        skipped = 0
        for _ in range(self.solver_iters):
            if self.enable_collisions:
                hits += resolve_collisions(self.particles, self.eps)
            if self.distance_constraints:
                skipped += solve_distance_constraints(self.particles, self.distance_constraints, self.eps)
            if self.angle_constraints:
                skipped += solve_angle_constraints(
                    self.particles, self.angle_constraints, self.eps, self.pin_angle_vertex
                )
        return hits, skipped

    def _integrate(self) -> None:
        for p in self.particles:
            verlet_step(p, self.dt, self.air_friction)

    def _apply_boundaries(self) -> None:
        if not self.boundaries:
            return
        for p in self.particles:
            for boundary in self.boundaries:
                boundary.apply(p)

    def step(self) -> None:
        """Advance the simulation by one fixed timestep."""
        with self._section("forces"):
            self._apply_forces()
        with self._section("relax"):
            hits, skipped = self._relax()
        with self._section("integrate"):
            self._integrate()
        with self._section("bounds"):
            self._apply_boundaries()

        self.frame += 1
        self.time = self.frame * self.dt
        logger.debug(
            "frame %d: %d collision corrections, %d constraint skips",
            self.frame, hits, skipped,
        )


def create_simulation(**config) -> Simulation:
    """Build an empty Simulation; keyword arguments override the defaults."""
    return Simulation(**config)
