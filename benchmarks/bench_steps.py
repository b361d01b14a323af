"""
Microbenchmark: time per step vs number of particles.

The collision pass is exhaustive O(N²), so it dominates quickly.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from verlet_sim import Simulation, RectBoundary, Profiler


def run(n: int, steps: int = 60, collisions: bool = True):
    prof = Profiler()
    sim = Simulation(
        gravity=(0.0, 300.0),
        solver_iters=4,
        air_friction=0.99,
        enable_collisions=collisions,
        boundaries=[RectBoundary(min_corner=(0.0, 0.0), max_corner=(800.0, 800.0))],
        profiler=prof,
    )

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)

    # spawn disks in a grid with small random jitter, chained in rows
    side = int(np.ceil(np.sqrt(n)))
    k = 0
    for iy in range(side):
        prev = None
        for ix in range(side):
            if k >= n:
                break
            x = 20.0 + 12.0 * ix + float(rng.normal())
            y = 20.0 + 12.0 * iy + float(rng.normal())
            i = sim.create_particle((x, y), radius=4.0)
            if prev is not None:
                sim.create_distance_constraint_in_place(prev, i)
            prev = i
            k += 1

    # warmup
    for _ in range(5):
        sim.step()

    t0 = time.perf_counter()
    for _ in range(steps):
        sim.step()
    t1 = time.perf_counter()

    per_step = (t1 - t0) / steps
    return per_step, prof.stats.summary()


if __name__ == "__main__":
    for collisions in (False, True):
        print("collisions:", collisions)
        for n in [10, 50, 100, 250]:
            per_step, summary = run(n, collisions=collisions)
            print(f"N={n:4d}  step={1e3*per_step:8.3f} ms  steps/s={1/per_step:8.1f}")
            for k in ["forces", "relax", "integrate", "bounds"]:
                if k in summary:
                    print(" ", k, summary[k])
            print()
