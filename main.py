# main.py
"""
Main entry point for the Particle Life simulation.

This script orchestrates the entire simulation lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Builds the simulation state and, unless headless, the window.
4. Runs the frame loop until the window closes or max_steps is reached.
5. Handles clean shutdown.
"""
import logging
import sys
from utils import setup_logging, load_config, build_simulation
from errors import ConfigurationError, NumericInvariantViolation
import cProfile
import pstats
import io

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_NUMERIC_ERROR = 2


def main(config_path: str = 'config.json') -> int:
    """
    Runs the simulation and returns a process exit code.
    """
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config(config_path)
    except Exception as e:
        print(f"FATAL: Could not load {config_path}. Error: {e}")
        return EXIT_CONFIG_ERROR

    setup_logging(config)

    logging.info("--- Particle Life Simulation Starting ---")

    run_params = config.get('run_control', {})
    vis_params = config.get('visualization', {})

    try:
        state = build_simulation(config)
    except ConfigurationError:
        logging.critical("Simulation could not be built. Exiting.")
        return EXIT_CONFIG_ERROR

    visualizer = None
    if not run_params.get('headless', False):
        from visualization import Visualizer
        visualizer = Visualizer(
            state.config.width, state.config.height, state.species, state.config.radius,
            colors=vis_params.get('particle_colors'),
            fps=vis_params.get('fps', 60),
        )

    log_throttle = run_params.get('log_throttle_steps', 100)
    max_steps = run_params.get('max_steps', 5000)
    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    exit_code = EXIT_OK
    if profiler:
        profiler.enable()
    try:
        while state.step_count < max_steps:
            state.step()

            if visualizer and not visualizer.draw(state):
                break

            # Hot loop: throttle logs.
            if state.step_count % log_throttle == 0:
                logging.info(f"Simulation step {state.step_count}/{max_steps}")
                logging.debug(f"Step {state.step_count} | Average Speed: {state.mean_speed():.4f}")
        else:
            logging.info(f"Reached max_steps ({max_steps}). Stopping simulation.")
    except NumericInvariantViolation as e:
        logging.error(f"Simulation halted: {e}")
        exit_code = EXIT_NUMERIC_ERROR
    finally:
        if profiler:
            profiler.disable()
        if visualizer:
            visualizer.close()

    logging.info("Simulation loop finished.")

    if profiler:
        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Particle Life Simulation Shutting Down ---")
    return exit_code


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
