"""Module constants of leedcompare.

Defines default values and tolerances used throughout the package.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

# Energy step used for R-factor comparison is never larger than this
DEFAULT_MAX_STEP = 0.5

# Steps closer than this are considered identical: no interpolation
STEP_TOLERANCE = 1e-6

# Tolerance (in units of the step) when rounding energies to a grid
GRID_EPS = 1e-8

# Curves with fewer defined points are useless for averaging
MIN_DEFINED_POINTS = 3

# Shortest stretch of common data considered an overlap
MIN_OVERLAP_POINTS = 3

# Prevents division by zero in the logarithmic derivative
TINY_INTENSITY = 1e-100
