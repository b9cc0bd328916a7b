"""Package comparison of leedcompare.

Contains the functionality for comparing two sets of I(V) curves.
Functions are typically called in this order: average_symmetric
(optional), build_correspondence, align_grids, compare. The function
prepare_datasets runs the first three steps.

Modules
-------
aggregate
    Evaluation of R factors for all beams at one energy shift,
    and overall statistics.
averaging
    Averaging of symmetry-equivalent beams.
compare
    Top-level functions.
correspondence
    Selection of the beams common to two data sets.
grid
    Interpolation of two data sets to a common energy step.
shift
    Search of the energy shift with the lowest R factor.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'
