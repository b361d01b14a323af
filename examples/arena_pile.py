import numpy as np

from verlet_sim import Simulation, CircleBoundary

sim = Simulation(
    gravity=(0.0, 300.0),
    air_friction=0.99,
    solver_iters=4,
    boundaries=[CircleBoundary(center=(400.0, 400.0), radius=200.0)],
)

rng = np.random.default_rng(12345)
for y in range(5):
    for x in range(20):
        radius = 3.0 + 4.0 * float(rng.random())
        sim.create_particle((260.0 + x * 14.0, 300.0 + y * 14.0), radius=radius)

for _ in range(300):
    sim.step()

snap = sim.snapshot()
dist = np.linalg.norm(snap.positions - np.array([400.0, 400.0]), axis=1)
print("max distance from center:", float((dist + snap.radii).max()), "(arena radius 200)")
