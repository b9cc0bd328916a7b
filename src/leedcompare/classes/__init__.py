"""Package classes of leedcompare.

Defines the data containers used throughout leedcompare.

Modules
-------
dataset
    IVDataset, a set of I(V) curves on a common energy axis.
energy_grid
    EnergyGrid, an evenly spaced energy axis.
metric
    Containers for the results of a comparison, and the selector
    of the type of R factor.
settings
    ComparisonSettings, the parameters of a comparison.
spot_pattern
    SpotPattern, the beams of a LEED pattern and their symmetry.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'
