# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
The physics defaults describe the reference setup and are used whenever
the configuration file leaves a parameter out; the rest are rendering
properties of the window.
"""

# --- Physics defaults (reference setup) ---
WORLD_WIDTH = 2000
WORLD_HEIGHT = 1500
PARTICLE_RADIUS = 5.0
DELTA_TIME = 2.0
# Fraction of the previous velocity kept each step.
DAMPING = 0.5
# Pairs this far apart or farther do not interact.
INTERACTION_CUTOFF = 100.0
PARTICLES_PER_SPECIES = 1000
SPECIES = ("red", "green", "yellow")

# --- Visualization settings ---
FPS = 60
BACKGROUND_COLOR = (23, 0, 23) # Dark Purple
OUTLINE_COLOR = (0, 0, 0)
# Ratio of the outline circle to the particle radius.
OUTLINE_RATIO = 1.2

# Named species colors; any other species falls back to VIBRANT_COLORS.
SPECIES_COLORS = {
    "red": (255, 0, 0),
    "green": (0, 255, 0),
    "yellow": (255, 255, 0),
}

VIBRANT_COLORS = [
    (255, 0, 102),   # Hot Pink
    (0, 255, 255),   # Cyan
    (255, 204, 0),   # Gold
    (0, 255, 102),   # Bright Green
    (204, 0, 255),   # Purple
    (255, 102, 0)    # Orange
]
