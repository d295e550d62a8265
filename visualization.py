# visualization.py
"""
Handles the visualization of the particle simulation using Pygame.

The Visualizer only reads what SimulationState.particles returns; it
never touches particle arrays or the rule matrix.
"""
import logging
import pygame
from constants import (
    BACKGROUND_COLOR, FPS, OUTLINE_COLOR, OUTLINE_RATIO, SPECIES_COLORS,
    VIBRANT_COLORS
)
from typing import Dict, Optional, Sequence

from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from simulation import SimulationState


# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, width, height, species, radius, colors=None, fps=FPS):
#     - Inputs:
#       - width, height: size of the window, equal to the world bounds.
#       - species: species names in draw order.
#       - radius: particle radius in pixels.
#       - colors: Optional {species: [r, g, b]} from the configuration.
#     - Side Effects: Initializes Pygame and opens the display window.
#
#   - draw(self, state: "SimulationState") -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Renders every particle and handles Pygame events.


def resolve_colors(species: Sequence[str], config_colors: Optional[Dict[str, list]] = None) -> Dict[str, tuple]:
    """
    Picks a color per species: config first, then the named palette, then
    the vibrant palette in order.
    """
    config_colors = config_colors or {}
    colors = {}
    fallback = 0
    for name in species:
        rgb = config_colors.get(name)
        if rgb is not None:
            try:
                colors[name] = tuple(pygame.Color(*rgb))[:3]
                continue
            except (ValueError, TypeError) as e:
                logging.error(f"Invalid color {rgb!r} for species '{name}': {e}. Using default palette.")
        if name in SPECIES_COLORS:
            colors[name] = SPECIES_COLORS[name]
        else:
            colors[name] = VIBRANT_COLORS[fallback % len(VIBRANT_COLORS)]
            fallback += 1
    return colors


class Visualizer:
    """
    Draws each species' particles as outlined circles.
    """
    def __init__(self, width: int, height: int, species: Sequence[str], radius: float,
                 colors: Optional[Dict[str, list]] = None, fps: int = FPS):
        pygame.init()
        self.screen = pygame.display.set_mode((int(width), int(height)))
        pygame.display.set_caption("Particle Life")
        self.clock = pygame.time.Clock()
        self.fps = fps
        self.species = list(species)
        self.radius = radius
        self.outline_radius = OUTLINE_RATIO * radius
        self.colors = resolve_colors(self.species, colors)

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def draw(self, state: "SimulationState") -> bool:
        """
        Draws all particles and handles events.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down visualizer.")
                return False

        self.screen.fill(BACKGROUND_COLOR)
        for name in self.species:
            color = self.colors[name]
            for position, _ in state.particles(name):
                center = position.as_tuple()
                pygame.draw.circle(self.screen, OUTLINE_COLOR, center, self.outline_radius)
                pygame.draw.circle(self.screen, color, center, self.radius)

        pygame.display.flip()
        if self.fps:
            self.clock.tick(self.fps)
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
