import numpy as np
import pytest
from verlet_sim.util import rotate, signed_angle, unit, wrap_angle


def test_unit_normalizes():
    assert np.allclose(unit(np.array([3.0, 4.0]), 1e-6), [0.6, 0.8])


def test_unit_below_eps_is_zero():
    v = unit(np.array([1e-8, 0.0]), 1e-6)
    assert np.array_equal(v, [0.0, 0.0])
    assert not v.any()


@pytest.mark.parametrize(
    "angle, wrapped",
    [(0.0, 0.0), (1.5 * np.pi, -0.5 * np.pi), (-1.5 * np.pi, 0.5 * np.pi), (np.pi, np.pi), (4.0, 4.0 - 2 * np.pi)],
)
def test_wrap_angle(angle, wrapped):
    assert wrap_angle(angle) == pytest.approx(wrapped)


def test_signed_angle_matches_rotate():
    v = np.array([2.0, 1.0])
    assert signed_angle(v, rotate(v, 0.7)) == pytest.approx(0.7)
    assert signed_angle(v, rotate(v, -2.0)) == pytest.approx(-2.0)
