"""Unit tests for ParticleSet."""

import numpy as np
import pytest
from particle import Particle, ParticleSet
from vector import Vector2


class TestParticleSet:
    """Tests for per-species particle storage."""

    def test_random_within_bounds_at_rest(self):
        """Random sets lie inside the world with zero velocity."""
        particle_set = ParticleSet.random("A", 50, 200, 100, np.random.default_rng(0))
        assert len(particle_set) == 50
        assert particle_set.positions.dtype == np.float32
        assert (particle_set.positions[:, 0] >= 0).all() and (particle_set.positions[:, 0] <= 200).all()
        assert (particle_set.positions[:, 1] >= 0).all() and (particle_set.positions[:, 1] <= 100).all()
        assert not particle_set.velocities.any()

    def test_indexing_returns_particle(self):
        """Indexing yields a Particle value."""
        particle_set = ParticleSet("A", [[1, 2], [3, 4]], [[0.5, 0], [0, -0.5]])
        assert particle_set[1] == Particle(Vector2(3, 4), Vector2(0, -0.5))
        assert [p.pos for p in particle_set] == [Vector2(1, 2), Vector2(3, 4)]

    def test_empty(self):
        """A species may have no particles."""
        particle_set = ParticleSet("A", np.zeros((0, 2)))
        assert len(particle_set) == 0
        assert particle_set.positions.shape == (0, 2)

    def test_shape_mismatch(self):
        """Velocities must match positions."""
        with pytest.raises(ValueError):
            ParticleSet("A", [[1, 2]], [[0, 0], [1, 1]])
