"""
Board constants.

All values are in SI-like units: the playfield is 80 x 80 "meters" with the
origin at the bottom-left corner. These are fixed for the build; nothing
reads them from a config file.
"""

import math

# Playfield (upper-right corner; the lower-left corner is the origin)
MAX_X = 80.0
MAX_Y = 80.0

# Peg lattice
N_ROWS = 11
ROW_SPACING = 3.6
COL_SPACING = 3.5
PEG_RADIUS = 0.5

# Funnel walls and floor
WALL_ANGLE = math.atan2(ROW_SPACING, COL_SPACING / 2)
WALL_LENGTH = math.hypot(MAX_X / 2, MAX_Y)
WALL_WIDTH = 1.0

# Balls
BALL_RADIUS = 1.0
BALL_MASS = 2.0
DROP_INTERVAL = 1.0  # s
DELTA_X = 1.0  # Width of the horizontal jitter window at the drop point
DROP_Y = MAX_Y - 3.0
START_VELOCITY = (0.0, -8.0)

# Restitution per pair type
PEG_ELASTICITY = 0.3
BALL_ELASTICITY = 0.7

# Colors (RGB in [0, 1])
BALL_COLOR = (1.0, 0.0, 0.0)
PEG_COLOR = (0.0, 1.0, 0.0)
WALL_COLOR = (0.0, 0.0, 1.0)

# Gravity source: an Earth-like mass placed R below the board so that
# G * M / R^2 == g at the floor
G = 6.67e-11  # N m^2 / kg^2
M = 6e24  # kg
SURFACE_GRAVITY = 9.8  # m / s^2
