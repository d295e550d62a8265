# forces.py
"""
Pairwise force evaluation.

Every target particle is compared against every particle of a source
species snapshot, and the piecewise force law below decides the
contribution of each pair. The kernels are compiled with Numba; the
bulk variant spreads target particles across threads with `prange`.
"""
import numpy as np
from numba import jit, prange
from typing import Union
from particle import Particle
from vector import Vector2

# --- Data Contracts ---
#
# net_force(target, source_positions, g, radius, cutoff) -> Vector2:
#   - Inputs:
#     - target: a Particle, a Vector2, or an (x, y) pair giving the position.
#     - source_positions: array of shape (M, 2), the source species snapshot.
#     - g: rule coefficient for (target species, source species).
#     - radius: particle radius, also the hard-core zone threshold.
#     - cutoff: distance at and beyond which pairs do not interact.
#   - Outputs: the net force on the target.
#   - Side Effects: None.
#
# accumulate_forces(target_positions, source_positions, g, radius, cutoff, out) -> np.ndarray:
#   - Inputs: as above, with target_positions of shape (N, 2) and an
#     accumulator `out` of shape (N, 2).
#   - Outputs: `out`, with the net force on target i added to out[i].
#   - Side Effects: Writes only `out`. Row i is written by exactly one
#     parallel iteration, so no locking is needed.
#
# Force law, with df = target - source and d = |df|:
#   d == 0 or d >= cutoff      -> nothing
#   0 < d <= radius            -> df * 1 / max(100, d^2)
#   radius < d <= 2 * radius   -> df * 10 / max(100, (d - radius)^2)
#   2 * radius < d < cutoff    -> df * g / d^1.5
# A positive g pushes the target away from the source, a negative g
# pulls it in.

# Floor of the repulsive-zone denominators.
MIN_REPULSION_DENOMINATOR = 100.0
NEAR_FIELD_STRENGTH = 10.0


@jit(nopython=True)
def _pair_scale(d, g, radius, cutoff):
    """Scalar the separation vector is multiplied by for a pair at distance d."""
    if d == 0.0 or d >= cutoff:
        return 0.0
    if d <= radius:
        return 1.0 / max(MIN_REPULSION_DENOMINATOR, d * d)
    if d <= 2.0 * radius:
        return NEAR_FIELD_STRENGTH / max(MIN_REPULSION_DENOMINATOR, (d - radius) ** 2)
    return g / d ** 1.5


@jit(nopython=True)
def _net_force_numba(px, py, source_positions, g, radius, cutoff):
    fx = 0.0
    fy = 0.0
    for j in range(source_positions.shape[0]):
        dx = px - source_positions[j, 0]
        dy = py - source_positions[j, 1]
        d = np.sqrt(dx * dx + dy * dy)
        scale = _pair_scale(d, g, radius, cutoff)
        fx += dx * scale
        fy += dy * scale
    return fx, fy


@jit(nopython=True, parallel=True)
def _accumulate_forces_numba(target_positions, source_positions, g, radius, cutoff, out):
    for i in prange(target_positions.shape[0]):
        fx, fy = _net_force_numba(
            target_positions[i, 0], target_positions[i, 1],
            source_positions, g, radius, cutoff
        )
        out[i, 0] += fx
        out[i, 1] += fy
    return out


def net_force(target: Union[Particle, Vector2, tuple], source_positions, g: float,
              radius: float, cutoff: float) -> Vector2:
    """
    Net force on a single target from one source species snapshot.
    """
    if isinstance(target, Particle):
        target = target.pos
    px, py = target
    sources = np.ascontiguousarray(source_positions, dtype=np.float64).reshape(-1, 2)
    fx, fy = _net_force_numba(float(px), float(py), sources, float(g), float(radius), float(cutoff))
    return Vector2(fx, fy)


def accumulate_forces(target_positions: np.ndarray, source_positions: np.ndarray, g: float,
                      radius: float, cutoff: float, out: np.ndarray) -> np.ndarray:
    """
    Adds the force from `source_positions` onto every row of `out`.
    """
    if target_positions.shape[0] == 0 or source_positions.shape[0] == 0:
        return out
    return _accumulate_forces_numba(
        target_positions, source_positions,
        float(g), float(radius), float(cutoff), out
    )
