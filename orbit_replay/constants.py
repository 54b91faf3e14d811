"""
Physical and analysis constants for orbit_replay.

This module contains the constants used throughout the rollout replay and
analysis framework.
"""

# Gravitational parameters
MU_CANONICAL = 1.0  # dimensionless units used by recorded rollouts
MU_SUN_AU_DAY = 0.0002959122082855911  # AU^3/day^2 (heliocentric planetary motion)

# Numerical guards
EPS = 1e-9  # added to |r| and used as a floor on the target radius

# Kepler solver
KEPLER_ITERATIONS = 8  # fixed Newton-Raphson budget

# Rollout analytics defaults
TARGET_RADIUS = 1.0
POSITION_TOLERANCE = 0.05
VELOCITY_TOLERANCE = 0.05
THRUST_SPIKE_THRESHOLD = 0.02
DEBOUNCE_WINDOW = 30
TOO_CLOSE_RADIUS = 0.2
ESCAPE_RADIUS = 5.0

# Visualization
MAX_VISUAL_ECCENTRICITY = 0.9
ORBIT_PATH_POINTS = 360
