# errors.py
"""
Exception types raised by the simulation engine.

Both errors are fatal to the caller: the engine never retries or
repairs particle state on its own.
"""
from typing import Optional


class ConfigurationError(ValueError):
    """Raised when the simulation cannot be built from the given parameters."""


class NumericInvariantViolation(ArithmeticError):
    """
    Raised when a position or velocity component becomes NaN or infinite.

    The frame that produced the bad values is not committed, so the
    state still holds the last valid frame when this is raised.
    """
    def __init__(self, message: str, species: Optional[str] = None, step: Optional[int] = None):
        super().__init__(message)
        self.species = species
        self.step = step
