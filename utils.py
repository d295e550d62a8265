# utils.py
"""
Utility functions for the simulation framework.

This module provides helpers used by the entry point: logging setup,
config file loading and turning a loaded config into a ready-to-run
SimulationState.
"""
import logging
import logging.handlers
import json
import os
import numpy as np
from typing import Dict, Any
from constants import PARTICLES_PER_SPECIES, SPECIES
from errors import ConfigurationError
from rules import REFERENCE_RULES, RuleMatrix
from simulation import SimulationConfig, SimulationState

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: A dictionary containing a "logging" key with "level",
#       "format", and "log_file" sub-keys.
#   - Side Effects: Configures the root Python logger with a console
#     handler and a rotating file handler. Creates the log directory.
#
# build_simulation(config: Dict[str, Any]) -> SimulationState:
#   - Inputs: the full loaded config. Reads "simulation_parameters":
#     - "particle_counts": {species: int}, defaults to the reference setup.
#     - "rules": {target: {source: float}} or the string "random";
#       defaults to the reference rules.
#   - Errors: ConfigurationError for malformed sections.

DEFAULT_LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(config: Dict[str, Any]) -> None:
    """
    Configures the logging system from a configuration dictionary.

    Sets up logging to both the console and a rotating file.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', DEFAULT_LOG_FORMAT)
    log_file_path = log_config.get('log_file', 'logs/particle_life.log')

    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # Drop handlers from a previous setup so records are not duplicated.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # Rotates at 1MB, keeps 5 backups.
    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path, maxBytes=1024*1024, backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logging.info("Logging system initialized.")
    logging.debug(f"Log level set to {log_level}, writing to {log_file_path}.")


def load_config(path: str) -> Dict[str, Any]:
    """Loads a JSON configuration file."""
    logging.info(f"Loading configuration from {path}...")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"Configuration file not found at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Error decoding JSON from {path}.")
        raise
    logging.info("Configuration loaded successfully.")
    return config


def build_simulation(config: Dict[str, Any]) -> SimulationState:
    """Creates the initial SimulationState described by a loaded config."""
    sim_params = config.get('simulation_parameters', {})
    sim_config = SimulationConfig.from_dict(sim_params)

    counts = sim_params.get('particle_counts')
    if counts is None:
        counts = {name: PARTICLES_PER_SPECIES for name in SPECIES}
    if not isinstance(counts, dict):
        msg = f"Configuration error: 'particle_counts' must map species to counts, got {counts!r}."
        logging.critical(msg)
        raise ConfigurationError(msg)

    rules = sim_params.get('rules')
    if rules is None:
        rule_matrix = REFERENCE_RULES
    elif rules == 'random':
        # Offset the seed so the matrix is not drawn from the position stream.
        seed = sim_config.seed + 1 if sim_config.seed is not None else None
        rule_matrix = RuleMatrix.random(list(counts), np.random.default_rng(seed))
    elif isinstance(rules, dict):
        rule_matrix = RuleMatrix.from_nested(rules)
    else:
        msg = f"Configuration error: 'rules' must be a nested mapping or \"random\", got {rules!r}."
        logging.critical(msg)
        raise ConfigurationError(msg)

    return SimulationState.initialize(sim_config, counts, rule_matrix)
