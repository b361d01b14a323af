import logging

import numpy as np
import pytest
from verlet_sim import Simulation, create_simulation, Profiler
from verlet_sim.core.invariants import angle_residuals, distance_residuals


def _resting_chain(sim):
    """Zig-zag chain hanging off a fixed anchor, every constraint recorded in place."""
    pts = [(0.0, 0.0), (10.0, 5.0), (20.0, 0.0), (30.0, 6.0), (40.0, -2.0)]
    ids = [sim.create_particle(p, radius=1.0, fixed=(k == 0)) for k, p in enumerate(pts)]
    for a, b in zip(ids, ids[1:]):
        sim.create_distance_constraint_in_place(a, b)
    for a, b, c in zip(ids, ids[1:], ids[2:]):
        sim.create_angle_constraint_in_place(a, b, c)
    return ids


def test_indices_are_dense_and_ordered():
    sim = create_simulation()
    ids = [sim.create_particle((float(k), 0.0)) for k in range(5)]
    assert ids == [0, 1, 2, 3, 4]
    assert len(sim.particles) == 5


def test_constraint_preconditions():
    sim = Simulation()
    a = sim.create_particle((0.0, 0.0))
    b = sim.create_particle((1.0, 0.0))
    c = sim.create_particle((2.0, 0.0))

    with pytest.raises(IndexError):
        sim.create_distance_constraint(a, 7, 1.0)
    with pytest.raises(IndexError):
        sim.create_distance_constraint(-1, a, 1.0)
    with pytest.raises(ValueError):
        sim.create_distance_constraint(a, a, 1.0)
    with pytest.raises(ValueError):
        sim.create_distance_constraint(a, b, -1.0)
    with pytest.raises(IndexError):
        sim.create_angle_constraint_in_place(a, b, 3)
    with pytest.raises(ValueError):
        sim.create_angle_constraint(a, b, a, 0.5)
    with pytest.raises(IndexError):
        sim.particle_position(3)

    # nothing was recorded by the failed calls
    assert sim.distance_constraints == []
    assert sim.angle_constraints == []
    sim.create_angle_constraint(a, b, c, 0.5)
    assert len(sim.angle_constraints) == 1


@pytest.mark.parametrize(
    "config",
    [
        {"dt": 0.0},
        {"solver_iters": 0},
        {"air_friction": 0.0},
        {"air_friction": 1.5},
        {"eps": -1.0},
    ],
)
def test_invalid_config_rejected(config):
    with pytest.raises(ValueError):
        Simulation(**config)


def test_particle_position_is_a_copy():
    sim = Simulation()
    i = sim.create_particle((1.0, 2.0))

    pos = sim.particle_position(i)
    pos[0] = 99.0

    assert np.array_equal(sim.particle_position(i), [1.0, 2.0])


def test_snapshot_is_read_only():
    sim = Simulation()
    ids = _resting_chain(sim)

    snap = sim.snapshot()

    assert snap.positions.shape == (len(ids), 2)
    assert snap.segments.shape == (len(ids) - 1, 2)
    assert snap.fixed.tolist() == [True, False, False, False, False]
    assert list(map(tuple, snap.segments.tolist())) == list(sim.distance_constraint_endpoints())
    with pytest.raises(ValueError):
        snap.positions[0, 0] = 5.0


def test_snapshot_of_empty_simulation():
    snap = Simulation().snapshot()
    assert snap.positions.shape == (0, 2)
    assert snap.segments.shape == (0, 2)


def test_select_nearest_particle():
    sim = Simulation()
    sim.create_particle((0.0, 0.0))
    sim.create_particle((10.0, 0.0))
    sim.create_particle((10.0, 3.0))

    assert sim.select_nearest_particle((9.0, 1.0), epsilon=4.0) == 1
    assert sim.select_nearest_particle((10.0, 2.5), epsilon=4.0) == 2
    # squared distance 25 > 16: nothing selected
    assert sim.select_nearest_particle((5.0, 0.0), epsilon=16.0) is None
    assert Simulation().select_nearest_particle((0.0, 0.0), epsilon=1e9) is None


def test_drag_and_release_flings_particle():
    sim = Simulation(enable_collisions=False)
    i = sim.create_particle((0.0, 0.0))

    picked = sim.select_nearest_particle((0.5, 0.0), epsilon=1.0)
    sim.move_particle(picked, (2.0, 0.0))
    sim.step()

    assert picked == i
    assert sim.particle_position(i)[0] == pytest.approx(4.0)


def test_resting_structure_is_stable():
    """All constraints satisfied, no velocity, no force: step() changes nothing."""
    sim = Simulation(solver_iters=10)
    _resting_chain(sim)
    before = sim.snapshot().positions.copy()

    for _ in range(100):
        sim.step()

    assert np.allclose(sim.snapshot().positions, before, atol=1e-9)
    assert distance_residuals(sim.particles, sim.distance_constraints).max() < 1e-9
    assert angle_residuals(sim.particles, sim.angle_constraints).max() < 1e-9


def test_chain_under_gravity_stays_finite():
    sim = Simulation(gravity=(0.0, 150.0), solver_iters=20, air_friction=0.99)
    _resting_chain(sim)

    for _ in range(300):
        sim.step()

    snap = sim.snapshot()
    assert np.all(np.isfinite(snap.positions))
    assert np.array_equal(snap.positions[0], [0.0, 0.0])
    assert distance_residuals(sim.particles, sim.distance_constraints).max() < 1.0


def test_profiler_records_each_phase():
    prof = Profiler()
    sim = Simulation(profiler=prof)
    _resting_chain(sim)

    for _ in range(5):
        sim.step()

    summary = prof.stats.summary()
    assert set(summary) == {"forces", "relax", "integrate", "bounds"}
    assert all(s["n"] == 5 for s in summary.values())


def test_step_logs_debug_summary(caplog):
    caplog.set_level(logging.DEBUG, logger="verlet_sim")
    sim = Simulation()
    sim.create_particle((0.0, 0.0), radius=2.0)
    sim.create_particle((1.0, 0.0), radius=2.0)

    sim.step()

    assert any("frame 1" in r.getMessage() for r in caplog.records)


def test_pinned_vertex_option_reaches_the_solver():
    sim = Simulation(pin_angle_vertex=True, enable_collisions=False)
    a = sim.create_particle((10.0, 0.0))
    b = sim.create_particle((0.0, 0.0))
    c = sim.create_particle((0.0, 5.0))
    sim.create_angle_constraint(a, b, c, np.pi / 3)

    sim.step()

    assert np.array_equal(sim.particle_position(b), [0.0, 0.0])
    assert not np.array_equal(sim.particle_position(a), [10.0, 0.0])
