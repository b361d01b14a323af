import logging

import numpy as np

from verlet_sim import Simulation, StructureConfig, generate_structure
from verlet_sim.logging_config import setup_logging

setup_logging(logging.INFO)

sim = Simulation(gravity=(0.0, 60.0), air_friction=0.99, solver_iters=10, enable_collisions=False)
report = generate_structure(sim, np.random.default_rng(2024), StructureConfig(max_depth=5))

tip = report.last_particle
start = sim.particle_position(tip)
for _ in range(240):
    sim.step()

snap = sim.snapshot()
print("particles:", len(snap.positions), "segments:", len(snap.segments))
print("last tip moved by:", float(np.linalg.norm(snap.positions[tip] - start)))
