# MIT License (see LICENSE)
"""
Simulation constants shared by the engine.

Units are screen units (pixels) and seconds; the y-axis points down, as in
window coordinates, so a "gravity" pointing to the floor is (0, +g).
"""
from __future__ import annotations

# Fixed timestep. The engine never varies dt; callers wanting frame-rate
# independence accumulate wall time and call step() a whole number of times.
DELTA_TIME: float = 1.0 / 60.0

# Damped integration multiplier applied to the implicit velocity each frame.
# 1.0 is the frictionless variant.
AIR_FRICTION: float = 0.99

# Outer relaxation passes per frame (collisions, distances, angles).
DEFAULT_SOLVER_ITERS: int = 8

# Vectors shorter than this are treated as zero length: the correction
# direction is undefined and the constraint is skipped for the pass.
DEFAULT_EPS: float = 1e-6
