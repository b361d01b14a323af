# MIT License (see LICENSE)
"""
Utility functions for 2D vector math.

All functions operate on 2D vectors represented as numpy arrays of shape (2,).
Angles are in radians, counterclockwise positive in the math convention
(visually clockwise on a y-down screen).
"""
from __future__ import annotations

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Always copies, so callers can hand in tuples, lists or arrays they
    keep using without aliasing particle state.
    """
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector. Avoids sqrt for performance."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return float(np.sqrt(norm2(v)))


def cross2(a: np.ndarray, b: np.ndarray) -> float:
    """
    2D cross product (scalar result): a × b = ax*by - ay*bx.

    Positive result means b is counterclockwise from a.
    """
    return float(a[0] * b[1] - a[1] * b[0])


def rotate(v: np.ndarray, angle: float) -> np.ndarray:
    """Rotate v counterclockwise by angle."""
    c, s = np.cos(angle), np.sin(angle)
    return np.array([v[0] * c - v[1] * s, v[0] * s + v[1] * c], dtype=np.float64)


def signed_angle(frm: np.ndarray, to: np.ndarray) -> float:
    """
    Signed angle rotating direction `frm` onto direction `to`, in (-π, π].

    Neither vector needs to be normalized. Returns 0 if either is zero.
    """
    return float(np.arctan2(cross2(frm, to), float(np.dot(frm, to))))


def unit(v: np.ndarray, eps: float) -> np.ndarray:
    """
    Normalized copy of v.

    Returns the zero vector if |v| < eps, so callers test the result with
    `.any()` instead of dividing by a near-zero length.
    """
    n = norm(v)
    if n < eps:
        return np.zeros(2, dtype=np.float64)
    return v / n


def wrap_angle(angle: float) -> float:
    """Wrap an angle into (-π, π]."""
    return float(np.arctan2(np.sin(angle), np.cos(angle)))
