"""Module errors of leedcompare.

Defines the exceptions raised while comparing two sets of I(V) curves.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'


class LEEDCompareError(Exception):
    """Base exception for all errors of leedcompare."""


class IrregularGridError(LEEDCompareError, ValueError):
    """An energy axis is not ascending and evenly spaced."""


class NoCommonBeamsError(LEEDCompareError):
    """Two data sets have no beams in common."""


class NoValidDataError(NoCommonBeamsError):
    """A data set contains no defined intensity at all."""


class NoMinimumFoundError(LEEDCompareError, RuntimeError):
    """The R factor does not have a minimum within the allowed shifts."""

    def __init__(self, max_shift, step):
        """Initialize exception instance.

        Parameters
        ----------
        max_shift : int
            The largest shift (in grid steps) that was tried.
        step : float
            The energy step of the grid.

        Returns
        -------
        None.
        """
        self.max_shift = max_shift
        self.step = step
        super().__init__('No minimum of R vs. shift found within '
                         f'{(max_shift - 1) * step:.2f} eV')


class InternalInconsistencyError(LEEDCompareError, RuntimeError):
    """Two data sets that should have the same beams do not."""
