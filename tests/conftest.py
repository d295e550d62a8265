"""Pytest fixtures for all tests."""

import logging
import logging.handlers
import pytest

from rules import RuleMatrix
from simulation import SimulationConfig


@pytest.fixture
def sim_config():
    """Small world with the reference physics parameters."""
    return SimulationConfig(
        width=1000,
        height=1000,
        radius=5.0,
        dt=2.0,
        damping=0.5,
        cutoff=100.0,
        seed=7
    )


@pytest.fixture
def three_species_rules():
    """Rules where only A and B interact, and C only with itself."""
    return RuleMatrix({
        ("A", "B"): 0.3,
        ("B", "B"): -0.2,
        ("C", "C"): -0.3,
    })


@pytest.fixture
def restore_logging():
    """Puts the root logger back the way it was after a test reconfigures it."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.handlers.RotatingFileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
