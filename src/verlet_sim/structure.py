# MIT License (see LICENSE)
"""
Procedural branching skeletons ("trees") built from particles and constraints.

The generator grows a stem segment by segment from a fixed root:

    GROW:    pick a stem length; for each segment, jitter the heading by a
             random angle, place a particle one step further along it, tie
             it to the previous particle with a distance constraint and to
             the previous segment with an angle constraint.
    BRANCH:  after each segment, with probability segment_index / stem_length
             (and only below max_depth), spawn two sub-stems rotated by
             ±branch_angle with scale divided by branch_scaling, and stop
             growing this stem.
    TERMINATE: a stem ends when it completes without branching, or on
             reaching max_depth.

Randomness is passed in explicitly as a numpy Generator, so a fixed seed
reproduces the same skeleton.

Headings are angles rotating the "up" vector (0, -1) of the y-down screen
counterclockwise in the math sense.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from .util import f64, rotate

if TYPE_CHECKING:
    from .simulation import Simulation

logger = logging.getLogger(__name__)

REST_ANGLE_MODES = ("measured", "straight")

# With the default angles sibling stems leave a branch point at least 40° apart,
# so their first particles are >= 2·sin(20°) ≈ 0.68 steps apart.
RADIUS_PER_STEP = 0.25


@dataclass(frozen=True)
class StructureConfig:
    """
    Parameters of the branching generator.

    Attributes:
        root_position: Where the fixed root particle goes.
        scale: Size of the trunk; each segment is scale / segments_per_scale long.
        segments_per_scale: Divisor turning scale into a step length.
        min_stem / max_stem: Inclusive range for the number of segments per stem.
        angle_variation: Maximum per-segment heading jitter (radians).
        branch_angle: Heading offset of each sub-stem (radians).
        branch_scaling: Sub-stems use scale / branch_scaling.
        max_depth: No branching at or beyond this recursion depth.
        initial_heading: Heading of the trunk (0 = straight up).
        particle_radius: Radius of every particle. None (default) gives each
                         stem step / 4, so that neighbours along a stem and the
                         first particles of two sibling stems never touch.
        particle_mass: Mass of every grown particle.
        rest_angle: "measured" records each joint's angle as created, so the
                    random curvature is the rest shape; "straight" uses π,
                    pulling every segment in line with its parent.
    """
    root_position: tuple[float, float] = (1280.0 / 2.0, 720.0 - 100.0)
    scale: float = 300.0
    segments_per_scale: float = 10.0
    min_stem: int = 4
    max_stem: int = 10
    angle_variation: float = np.deg2rad(10.0)
    branch_angle: float = np.deg2rad(30.0)
    branch_scaling: float = 1.4
    max_depth: int = 7
    initial_heading: float = 0.0
    particle_radius: float | None = None
    particle_mass: float = 1.0
    rest_angle: str = "measured"

    def __post_init__(self) -> None:
        if self.rest_angle not in REST_ANGLE_MODES:
            raise ValueError(
                f"rest_angle must be one of {REST_ANGLE_MODES}, got {self.rest_angle!r}"
            )
        if not 1 <= self.min_stem <= self.max_stem:
            raise ValueError(
                f"Need 1 <= min_stem <= max_stem, got {self.min_stem}..{self.max_stem}"
            )
        if self.scale <= 0 or self.segments_per_scale <= 0:
            raise ValueError("scale and segments_per_scale must be positive")
        if self.branch_scaling <= 0:
            raise ValueError(f"branch_scaling must be positive, got {self.branch_scaling}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.particle_radius is not None and self.particle_radius < 0:
            raise ValueError(f"particle_radius must be non-negative, got {self.particle_radius}")

    def radius_for(self, step: float) -> float:
        if self.particle_radius is None:
            return step * RADIUS_PER_STEP
        return self.particle_radius


@dataclass(frozen=True)
class StructureReport:
    """
    What generate_structure() added to the simulation.

    Attributes:
        root: Index of the fixed root particle.
        anchor: Index of the fixed heading anchor (a leaf hanging off the root).
        first_particle / last_particle: Index range [first, last] of all
                                        particles created, anchor and root included.
        distance_constraints / angle_constraints: Number of constraints added.
        max_depth_reached: Deepest recursion level that grew a stem.
        stems: Number of stems grown (trunk included).
    """
    root: int
    anchor: int
    first_particle: int
    last_particle: int
    distance_constraints: int
    angle_constraints: int
    max_depth_reached: int
    stems: int

    @property
    def particle_count(self) -> int:
        return self.last_particle - self.first_particle + 1


class _Grower:
    """Recursion state for one generate_structure() call."""

    def __init__(self, sim: Simulation, rng: np.random.Generator, config: StructureConfig) -> None:
        self.sim = sim
        self.rng = rng
        self.config = config
        self.max_depth_reached = 0
        self.stems = 0

    def link(self, prev_prev: int, prev: int, new: int, step: float) -> None:
        self.sim.create_distance_constraint(prev, new, step)
        if self.config.rest_angle == "measured":
            self.sim.create_angle_constraint_in_place(prev_prev, prev, new)
        else:
            self.sim.create_angle_constraint(prev_prev, prev, new, np.pi)

    def grow(
        self,
        prev: int,
        prev_prev: int,
        pos: np.ndarray,
        scale: float,
        heading: float,
        depth: int,
    ) -> None:
        cfg = self.config
        rng = self.rng
        step = scale / cfg.segments_per_scale
        radius = cfg.radius_for(step)
        stem_len = int(rng.integers(cfg.min_stem, cfg.max_stem + 1))
        self.stems += 1
        self.max_depth_reached = max(self.max_depth_reached, depth)

        for k in range(stem_len):
            heading += float(rng.uniform(-cfg.angle_variation, cfg.angle_variation))
            pos = pos + rotate(np.array([0.0, -step]), heading)
            new = self.sim.create_particle(
                pos, radius=radius, mass=cfg.particle_mass, fixed=False
            )
            self.link(prev_prev, prev, new, step)
            prev_prev, prev = prev, new

            if depth < cfg.max_depth and rng.random() < k / stem_len:
                sub_scale = scale / cfg.branch_scaling
                self.grow(prev, prev_prev, pos, sub_scale, heading + cfg.branch_angle, depth + 1)
                self.grow(prev, prev_prev, pos, sub_scale, heading - cfg.branch_angle, depth + 1)
                break


def generate_structure(
    simulation: Simulation,
    rng: np.random.Generator,
    config: StructureConfig | None = None,
) -> StructureReport:
    """
    Grow a branching skeleton into simulation.

    Creates a fixed root and a fixed heading anchor one step behind it (so
    the trunk's first joint has a reference direction), then grows the
    trunk and its branches as non-fixed particles. The anchor is tied to
    the root by a distance constraint; with both ends fixed that constraint
    never moves anything, but it keeps every particle reachable from the
    root through distance constraints.

    Args:
        simulation: Target simulation; particles and constraints are appended.
        rng: Source of randomness, e.g. np.random.default_rng(seed).
        config: Generator parameters (defaults to StructureConfig()).

    Returns:
        A StructureReport describing what was added.
    """
    cfg = config or StructureConfig()
    n_dist = len(simulation.distance_constraints)
    n_ang = len(simulation.angle_constraints)

    root_pos = f64(cfg.root_position)
    step = cfg.scale / cfg.segments_per_scale
    behind = rotate(np.array([0.0, step]), cfg.initial_heading)
    radius = cfg.radius_for(step)

    root = simulation.create_particle(root_pos, radius=radius, mass=cfg.particle_mass, fixed=True)
    anchor = simulation.create_particle(
        root_pos + behind, radius=radius, mass=cfg.particle_mass, fixed=True
    )
    simulation.create_distance_constraint(root, anchor, step)

    grower = _Grower(simulation, rng, cfg)
    grower.grow(root, anchor, root_pos, cfg.scale, cfg.initial_heading, 0)

    report = StructureReport(
        root=root,
        anchor=anchor,
        first_particle=root,
        last_particle=len(simulation.particles) - 1,
        distance_constraints=len(simulation.distance_constraints) - n_dist,
        angle_constraints=len(simulation.angle_constraints) - n_ang,
        max_depth_reached=grower.max_depth_reached,
        stems=grower.stems,
    )
    logger.info(
        "Generated structure: %d particles, %d stems, %d distance / %d angle constraints, depth %d",
        report.particle_count, report.stems, report.distance_constraints,
        report.angle_constraints, report.max_depth_reached,
    )
    return report
