# simulation.py
"""
Handles the core simulation logic.

This module defines SimulationConfig, the per-run physics parameters,
and SimulationState, which owns every species' particles together with
the rule matrix and advances them one frame at a time. Forces for a
frame are computed from a snapshot of the positions taken before any
particle moves, so the result does not depend on the order in which
species pairs or particles are visited.
"""
import logging
import math
import numbers
import numpy as np
from typing import Any, Dict, List, Mapping, Optional, Tuple
from constants import (
    WORLD_WIDTH, WORLD_HEIGHT, PARTICLE_RADIUS, DELTA_TIME, DAMPING,
    INTERACTION_CUTOFF
)
from errors import ConfigurationError
from forces import accumulate_forces
from integrator import check_finite, integrate
from particle import ParticleSet
from rules import RuleMatrix
from vector import Vector2

# --- Data Contracts ---
#
# class SimulationConfig:
#   - Fields: width, height, radius, dt, damping, cutoff, seed.
#   - from_dict(params: Dict[str, Any]) -> SimulationConfig:
#     - Inputs: the "simulation_parameters" section of config.json.
#       - "width", "height": float, world bounds.
#       - "radius": float, particle radius and hard-core threshold.
#       - "delta_time": float
#       - "damping": float in [0, 1]
#       - "cutoff": float
#       - "seed": Optional[int]
#   - validate() -> None: raises ConfigurationError on invalid values.
#
# class SimulationState:
#   - initialize(config, per_species_counts, rule_matrix) -> SimulationState:
#     - Side Effects: Draws initial positions from a generator seeded with
#       config.seed. Velocities start at zero.
#     - Errors: ConfigurationError for invalid config, negative counts or
#       rules naming an unknown species.
#
#   - step(self, dt: Optional[float] = None) -> None:
#     - Side Effects: Replaces every species' position and velocity arrays.
#     - Invariants: Particle counts never change. Either every species is
#       advanced or, if a NumericInvariantViolation is raised, none is.
#
#   - particles(self, species: str) -> List[Tuple[Vector2, str]]:
#     - Outputs: copies of every position, tagged with the species, for drawing.


class SimulationConfig:
    """
    Physics parameters for one run. Read-only once constructed.
    """
    __slots__ = ("width", "height", "radius", "dt", "damping", "cutoff", "seed")

    def __init__(self, width=WORLD_WIDTH, height=WORLD_HEIGHT, radius=PARTICLE_RADIUS,
                 dt=DELTA_TIME, damping=DAMPING, cutoff=INTERACTION_CUTOFF, seed=None):
        object.__setattr__(self, "width", width)
        object.__setattr__(self, "height", height)
        object.__setattr__(self, "radius", radius)
        object.__setattr__(self, "dt", dt)
        object.__setattr__(self, "damping", damping)
        object.__setattr__(self, "cutoff", cutoff)
        object.__setattr__(self, "seed", seed)

    def __setattr__(self, name, value):
        raise AttributeError("SimulationConfig is immutable")

    def __delattr__(self, name):
        raise AttributeError("SimulationConfig is immutable")

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "SimulationConfig":
        return cls(
            width=params.get('width', WORLD_WIDTH),
            height=params.get('height', WORLD_HEIGHT),
            radius=params.get('radius', PARTICLE_RADIUS),
            dt=params.get('delta_time', DELTA_TIME),
            damping=params.get('damping', DAMPING),
            cutoff=params.get('cutoff', INTERACTION_CUTOFF),
            seed=params.get('seed'),
        )

    def validate(self) -> None:
        _require(_is_positive(self.width) and _is_positive(self.height),
                 f"World bounds must be positive, got {self.width}x{self.height}.")
        _require(_is_positive(self.dt), f"Time step must be positive, got {self.dt}.")
        _require(_is_real(self.damping) and 0.0 <= self.damping <= 1.0,
                 f"Damping must lie in [0, 1], got {self.damping}.")
        _require(_is_positive(self.radius), f"Particle radius must be positive, got {self.radius}.")
        _require(_is_positive(self.cutoff), f"Interaction cutoff must be positive, got {self.cutoff}.")
        _require(self.seed is None or _is_count(self.seed),
                 f"Seed must be a non-negative integer, got {self.seed!r}.")

    def __repr__(self):
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.__slots__)
        return f"SimulationConfig({fields})"


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _is_positive(value) -> bool:
    return _is_real(value) and value > 0


def _is_count(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool) and value >= 0


def _require(condition: bool, msg: str) -> None:
    if not condition:
        msg = f"Configuration error: {msg}"
        logging.critical(msg)
        raise ConfigurationError(msg)


class SimulationState:
    """
    Owns all particles, the rule matrix and the physics parameters.
    """
    def __init__(self, config: SimulationConfig, particle_sets: Mapping[str, ParticleSet],
                 rule_matrix: RuleMatrix):
        """
        Wraps already-built particle sets. Prefer `initialize` or `from_arrays`.

        Args:
            config (SimulationConfig): Physics parameters.
            particle_sets (Mapping[str, ParticleSet]): One set per species,
                in the order species are processed.
            rule_matrix (RuleMatrix): Interaction coefficients.
        """
        config.validate()
        _require(len(particle_sets) > 0, "At least one species is required.")
        unknown = rule_matrix.species() - set(particle_sets)
        _require(not unknown, f"Rule matrix refers to unknown species {sorted(unknown)}.")
        for name, particle_set in particle_sets.items():
            _require(bool(np.isfinite(particle_set.positions).all() and np.isfinite(particle_set.velocities).all()),
                     f"Initial state of species '{name}' is not finite.")

        self.config = config
        self.rule_matrix = rule_matrix
        self._sets: Dict[str, ParticleSet] = dict(particle_sets)
        self.species: Tuple[str, ...] = tuple(self._sets)
        self.step_count = 0

        logging.info(
            f"Simulation initialized with {len(self.species)} species "
            f"({', '.join(f'{name}: {len(s)}' for name, s in self._sets.items())})."
        )
        logging.debug(f"Simulation parameters: {config}")

    @classmethod
    def initialize(cls, config: SimulationConfig, per_species_counts: Mapping[str, int],
                   rule_matrix: RuleMatrix) -> "SimulationState":
        """
        Scatters the requested number of particles of each species over the world.
        """
        config.validate()
        _require(len(per_species_counts) > 0, "At least one species is required.")
        for name, count in per_species_counts.items():
            _require(_is_count(count),
                     f"Particle count for species '{name}' must be a non-negative integer, got {count!r}.")

        # All randomness comes from the single seed in the config.
        rng = np.random.default_rng(config.seed)
        particle_sets = {
            name: ParticleSet.random(name, int(count), config.width, config.height, rng)
            for name, count in per_species_counts.items()
        }
        return cls(config, particle_sets, rule_matrix)

    @classmethod
    def from_arrays(cls, config: SimulationConfig, species_arrays: Mapping[str, Any],
                    rule_matrix: RuleMatrix) -> "SimulationState":
        """
        Builds a state from explicit positions.

        Each value of `species_arrays` is either an (N, 2) array of positions
        or a (positions, velocities) pair.
        """
        particle_sets = {}
        for name, arrays in species_arrays.items():
            if isinstance(arrays, tuple):
                positions, velocities = arrays
            else:
                positions, velocities = arrays, None
            try:
                particle_sets[name] = ParticleSet(name, positions, velocities)
            except ValueError as e:
                _require(False, str(e))
        return cls(config, particle_sets, rule_matrix)

    def step(self, dt: Optional[float] = None) -> None:
        """
        Executes one time step of the simulation.
        """
        if dt is None:
            dt = self.config.dt
        _require(_is_positive(dt), f"Time step must be positive, got {dt}.")
        radius = self.config.radius
        cutoff = self.config.cutoff

        # 1. Snapshot every species before anything moves.
        snapshot = {name: s.positions.copy() for name, s in self._sets.items()}

        # 2. Accumulate forces for each ordered species pair with a rule.
        forces = {name: np.zeros_like(positions) for name, positions in snapshot.items()}
        for target, source, g in self.rule_matrix.active_pairs(self.species):
            accumulate_forces(snapshot[target], snapshot[source], g, radius, cutoff, forces[target])

        # 3. Integrate every species, then commit them all at once.
        updated = {}
        for name, particle_set in self._sets.items():
            positions, velocities = integrate(
                snapshot[name], particle_set.velocities, forces[name],
                dt, self.config.damping, self.config.width, self.config.height
            )
            check_finite(name, positions, velocities, step=self.step_count + 1)
            updated[name] = (positions, velocities)

        for name, (positions, velocities) in updated.items():
            self._sets[name].positions = positions
            self._sets[name].velocities = velocities
        self.step_count += 1

    def _get_set(self, species: str) -> ParticleSet:
        try:
            return self._sets[species]
        except KeyError:
            raise KeyError(f"Unknown species '{species}'") from None

    def particles(self, species: str) -> List[Tuple[Vector2, str]]:
        """Positions of one species, tagged with the species, for the renderer."""
        positions = self._get_set(species).positions
        return [(Vector2(x, y), species) for x, y in positions.tolist()]

    def positions(self, species: str) -> np.ndarray:
        """Read-only view of one species' positions, valid until the next step()."""
        view = self._get_set(species).positions.view()
        view.flags.writeable = False
        return view

    def velocities(self, species: str) -> np.ndarray:
        """Read-only view of one species' velocities, valid until the next step()."""
        view = self._get_set(species).velocities.view()
        view.flags.writeable = False
        return view

    def count(self, species: str) -> int:
        return len(self._get_set(species))

    def mean_speed(self) -> float:
        """Average speed over every particle of every species."""
        speeds = [np.linalg.norm(s.velocities, axis=1) for s in self._sets.values() if len(s)]
        if not speeds:
            return 0.0
        return float(np.mean(np.concatenate(speeds)))


def initialize(config: SimulationConfig, per_species_counts: Mapping[str, int],
               rule_matrix: RuleMatrix) -> SimulationState:
    return SimulationState.initialize(config, per_species_counts, rule_matrix)


def step(state: SimulationState, dt: Optional[float] = None) -> None:
    state.step(dt)


def particles(state: SimulationState, species: str) -> List[Tuple[Vector2, str]]:
    return state.particles(species)
