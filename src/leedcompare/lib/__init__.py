"""Package lib of leedcompare.

Defines generic functionality used throughout the leedcompare package.

Modules
-------
curve_utils
    Functions for handling curves with undefined (NaN) samples.
dataclass_utils
    Extension of the dataclasses standard-library module.
interpolation
    Cubic-spline resampling of I(V) curves with ragged edges.
log_utils
    Functions useful to handle the logging standard-library
    module and its `Logger`s.
rfactor
    The per-beam R-factor primitive and related functions.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'
