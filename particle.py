# particle.py
"""
Per-species particle storage.

This module defines the ParticleSet class, which holds the positions
and velocities of every particle of one species in NumPy arrays, and
the Particle value handed out when a single particle is read.
"""
import logging
import numpy as np
from typing import Iterator, NamedTuple, Optional
from vector import Vector2

# --- Data Contracts ---
#
# class ParticleSet:
#   - __init__(self, species: str, positions: np.ndarray, velocities: Optional[np.ndarray] = None):
#     - Inputs:
#       - species: name of the species every particle in the set belongs to.
#       - positions: array-like of shape (N, 2).
#       - velocities: array-like of shape (N, 2); zeros when omitted.
#     - Outputs: None
#     - Side Effects: Copies the inputs into float32 arrays owned by the set.
#     - Invariants:
#       - self.positions and self.velocities have shape (N, 2), dtype float32.
#       - N never changes after construction.
#
#   - random(species, count, width, height, rng) -> ParticleSet:
#     - Uniform positions in [0, width) x [0, height), zero velocities.

DTYPE = np.float32


class Particle(NamedTuple):
    pos: Vector2
    vel: Vector2


class ParticleSet:
    """
    An ordered, fixed-length collection of particles of a single species.
    """
    def __init__(self, species: str, positions, velocities=None):
        self.species = species
        self.positions = np.array(positions, dtype=DTYPE).reshape(-1, 2)
        if velocities is None:
            self.velocities = np.zeros_like(self.positions)
        else:
            self.velocities = np.array(velocities, dtype=DTYPE).reshape(-1, 2)
        if self.velocities.shape != self.positions.shape:
            raise ValueError(
                f"Velocity shape {self.velocities.shape} does not match "
                f"position shape {self.positions.shape} for species '{species}'."
            )

    @classmethod
    def random(cls, species: str, count: int, width: float, height: float,
               rng: Optional[np.random.Generator] = None) -> "ParticleSet":
        """
        Creates `count` particles scattered uniformly over the world, at rest.
        """
        rng = rng if rng is not None else np.random.default_rng()
        positions = [
            Vector2.random(rng, 0, width, 0, height).as_tuple()
            for _ in range(count)
        ]
        particle_set = cls(species, np.array(positions, dtype=DTYPE).reshape(-1, 2))
        logging.debug(
            f"ParticleSet '{species}' created with {count} particles. "
            f"Positions shape: {particle_set.positions.shape}"
        )
        return particle_set

    def __len__(self) -> int:
        return self.positions.shape[0]

    def __getitem__(self, index: int) -> Particle:
        pos = self.positions[index]
        vel = self.velocities[index]
        return Particle(Vector2(pos[0], pos[1]), Vector2(vel[0], vel[1]))

    def __iter__(self) -> Iterator[Particle]:
        for i in range(len(self)):
            yield self[i]

    def __repr__(self):
        return f"ParticleSet(species={self.species!r}, count={len(self)})"
