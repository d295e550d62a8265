# integrator.py
"""
Velocity and position integration with boundary reflection.
"""
import logging
import numpy as np
from typing import Optional, Tuple
from errors import NumericInvariantViolation

# --- Data Contracts ---
#
# integrate(positions, velocities, forces, dt, damping, width, height) -> (positions, velocities):
#   - Inputs: (N, 2) arrays for positions, velocities and accumulated forces,
#     the time step, the damping factor in [0, 1] and the world bounds.
#   - Outputs: new position and velocity arrays; the inputs are not modified.
#   - Order:
#     1. vel = vel * damping + force * dt
#     2. pos = pos + vel * dt
#     3. A velocity component is inverted when the matching position
#        component is at or beyond a world edge. Positions are not clamped,
#        so a particle may sit one step outside the world before the
#        inverted velocity brings it back.


def integrate(positions: np.ndarray, velocities: np.ndarray, forces: np.ndarray,
              dt: float, damping: float, width: float, height: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Advances one species by one time step.
    """
    dtype = velocities.dtype
    new_velocities = velocities * dtype.type(damping) + forces.astype(dtype, copy=False) * dtype.type(dt)
    new_positions = positions + new_velocities * dtype.type(dt)

    outside_x = (new_positions[:, 0] <= 0) | (new_positions[:, 0] >= width)
    outside_y = (new_positions[:, 1] <= 0) | (new_positions[:, 1] >= height)
    new_velocities[outside_x, 0] *= -1
    new_velocities[outside_y, 1] *= -1

    return new_positions, new_velocities


def check_finite(species: str, positions: np.ndarray, velocities: np.ndarray,
                 step: Optional[int] = None) -> None:
    """
    Raises NumericInvariantViolation if any component is NaN or infinite.
    """
    bad = ~(np.isfinite(positions).all(axis=1) & np.isfinite(velocities).all(axis=1))
    if bad.any():
        msg = (
            f"Non-finite position or velocity in species '{species}' "
            f"for {int(bad.sum())} of {bad.shape[0]} particles"
        )
        if step is not None:
            msg += f" at step {step}"
        logging.critical(msg)
        raise NumericInvariantViolation(msg, species=species, step=step)
