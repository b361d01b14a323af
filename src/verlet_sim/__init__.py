# MIT License (see LICENSE)
"""
verlet_sim - A 2D constraint-based particle engine.

Point masses are integrated with position Verlet and held together by
distance and angle constraints solved with iterative relaxation, optionally
bounded by containment regions and pairwise disk collisions.

Main entry points:
    - Simulation: The world owning particles and constraints.
    - create_simulation: Build an empty Simulation.
    - generate_structure: Grow a branching particle skeleton into a Simulation.
    - CircleBoundary, RectBoundary: Containment regions.

Submodules:
    - core: Particle store, integrator, forces and diagnostics.
    - constraints: Distance and angle constraint solvers.
    - collision: Pairwise disk collisions and boundaries.
    - structure: Procedural branching skeletons.

Example:
    from verlet_sim import Simulation

    sim = Simulation(gravity=(0, 150))
    anchor = sim.create_particle((100, 100), radius=3, fixed=True)
    bob = sim.create_particle((200, 100), radius=3)
    sim.create_distance_constraint_in_place(anchor, bob)
    sim.step()
"""
from .simulation import Simulation, SimulationSnapshot, create_simulation
from .types import Particle
from .collision.bounds import CircleBoundary, RectBoundary
from .structure import StructureConfig, StructureReport, generate_structure
from .profiler import Profiler

__all__ = [
    # Core simulation
    "Simulation",
    "SimulationSnapshot",
    "create_simulation",
    "Particle",
    # Boundaries
    "CircleBoundary",
    "RectBoundary",
    # Structure generation
    "StructureConfig",
    "StructureReport",
    "generate_structure",
    # Diagnostics
    "Profiler",
]
