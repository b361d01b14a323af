# MIT License (see LICENSE)
"""
Append-only arena of particles.

Particles are addressed by dense integer indices handed out in creation
order. Indices are never reused: there is no removal.

Solvers touch two or three particles at a time. They fetch them through
borrow(), which validates the indices up front so that a bad constraint
fails at its source rather than silently aliasing one particle.
"""
from __future__ import annotations
from typing import Iterator

import numpy as np

from ..types import Particle


class ParticleStore:
    """
    Owner of all particle state in a simulation.

    Example:
        store = ParticleStore()
        i = store.add(Particle(position=(0, 0), radius=2.0))
        j = store.add(Particle(position=(5, 0), radius=2.0))
        a, b = store.borrow(i, j)
    """

    def __init__(self) -> None:
        self._particles: list[Particle] = []

    def add(self, particle: Particle) -> int:
        """Append a particle, assign its id and return the new index."""
        particle.id = len(self._particles)
        self._particles.append(particle)
        return particle.id

    def __len__(self) -> int:
        return len(self._particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles)

    def __getitem__(self, index: int) -> Particle:
        self.check_index(index)
        return self._particles[index]

    def check_index(self, index: int) -> None:
        """Raise IndexError unless index addresses an existing particle."""
        # bool is an int subclass; True is never a meaningful particle index
        if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
            raise IndexError(f"Particle index must be an integer, got {index!r}")
        if not 0 <= index < len(self._particles):
            raise IndexError(
                f"Particle index {index} out of range (store holds {len(self._particles)})"
            )

    def borrow(self, *indices: int) -> tuple[Particle, ...]:
        """
        Fetch several distinct particles at once.

        Raises:
            IndexError: an index is out of range.
            ValueError: the same index appears more than once.
        """
        for index in indices:
            self.check_index(index)
        if len(set(int(i) for i in indices)) != len(indices):
            raise ValueError(f"Particle indices must be distinct, got {indices}")
        return tuple(self._particles[i] for i in indices)

    def positions(self) -> np.ndarray:
        """Copy of all positions as an (n, 2) float64 array."""
        if not self._particles:
            return np.zeros((0, 2), dtype=np.float64)
        return np.stack([p.position for p in self._particles])
