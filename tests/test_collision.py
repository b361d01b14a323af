import numpy as np
import pytest
from verlet_sim.simulation import Simulation
from verlet_sim.core.store import ParticleStore
from verlet_sim.types import Particle
from verlet_sim.collision.resolver import resolve_collision, resolve_collisions

EPS = 1e-6


def _gap(a, b):
    return float(np.linalg.norm(a.position - b.position))


def test_overlap_resolved_to_exact_contact():
    """Separation reaches r1 + r2 in one correction, without overshooting."""
    a = Particle(position=(0.0, 0.0), radius=5.0)
    b = Particle(position=(6.0, 0.0), radius=5.0)

    assert resolve_collision(a, b, EPS)

    assert _gap(a, b) == pytest.approx(10.0)
    # Equal radii: symmetric push
    assert np.allclose(a.position, [-2.0, 0.0])
    assert np.allclose(b.position, [8.0, 0.0])


def test_larger_particle_moves_less():
    small = Particle(position=(0.0, 0.0), radius=2.0)
    big = Particle(position=(0.0, 4.0), radius=6.0)

    resolve_collision(small, big, EPS)

    # overlap 4: small moves 6/8 of it, big 2/8
    assert np.allclose(small.position, [0.0, -3.0])
    assert np.allclose(big.position, [0.0, 5.0])
    assert _gap(small, big) == pytest.approx(8.0)


def test_fixed_particle_is_never_displaced():
    wall = Particle(position=(0.0, 0.0), radius=4.0, fixed=True)
    ball = Particle(position=(3.0, 4.0), radius=4.0)

    resolve_collision(wall, ball, EPS)

    assert np.array_equal(wall.position, [0.0, 0.0])
    assert _gap(wall, ball) == pytest.approx(8.0)


def test_separated_and_coincident_pairs_untouched():
    a = Particle(position=(0.0, 0.0), radius=1.0)
    b = Particle(position=(2.5, 0.0), radius=1.0)
    assert not resolve_collision(a, b, EPS)

    c = Particle(position=(1.0, 1.0), radius=1.0)
    d = Particle(position=(1.0, 1.0), radius=1.0)
    assert not resolve_collision(c, d, EPS)
    assert np.array_equal(c.position, d.position)


def test_exhaustive_pass_counts_pairs():
    store = ParticleStore()
    for x in (0.0, 1.0, 2.0, 50.0):
        store.add(Particle(position=(x, 0.0), radius=1.0))

    hits = resolve_collisions(store, EPS)

    # (0,1) overlaps; pushing it apart clears (0,2) but deepens (1,2).
    # The far particle is untouched.
    assert hits == 2
    assert np.array_equal(store[3].position, [50.0, 0.0])


def test_pile_settles_without_overlap():
    """Repeated passes inside a step separate a cluster of disks."""
    sim = Simulation(solver_iters=30, air_friction=0.9)
    rng = np.random.default_rng(7)
    for _ in range(12):
        sim.create_particle(rng.uniform(0.0, 10.0, size=2), radius=3.0)

    for _ in range(60):
        sim.step()

    pos = sim.snapshot().positions
    n = len(pos)
    worst = min(
        np.linalg.norm(pos[i] - pos[j]) for i in range(n) for j in range(i + 1, n)
    )
    print("closest pair", worst)
    assert worst >= 6.0 - 0.5


def test_collisions_can_be_disabled():
    sim = Simulation(enable_collisions=False)
    a = sim.create_particle((0.0, 0.0), radius=5.0)
    b = sim.create_particle((1.0, 0.0), radius=5.0)

    sim.step()

    assert np.array_equal(sim.particle_position(a), [0.0, 0.0])
    assert np.array_equal(sim.particle_position(b), [1.0, 0.0])
