from verlet_sim import Simulation
from verlet_sim.constants import AIR_FRICTION
import numpy as np

sim = Simulation(gravity=(0.0, 150.0), air_friction=AIR_FRICTION, solver_iters=20)

links = 12
L = 15.0
prev = sim.create_particle((400.0, 100.0), radius=3.0, fixed=True)
for k in range(1, links + 1):
    p = sim.create_particle((400.0 + k * L, 100.0), radius=3.0)
    sim.create_distance_constraint(prev, p, L)
    prev = p

for _ in range(600):
    sim.step()

end = sim.particle_position(prev)
print("chain end:", end, "drop:", float(end[1] - 100.0))
print("anchor:", sim.particle_position(0))
