"""Module energy_grid of leedcompare.classes.

Defines the EnergyGrid class, a description of an evenly spaced,
ascending energy axis.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

from math import ceil, floor, isfinite

import numpy as np

from leedcompare.constants import GRID_EPS
from leedcompare.errors import IrregularGridError
from leedcompare.lib.dataclass_utils import frozen


@frozen
class EnergyGrid:
    """An evenly spaced energy axis.

    Attributes
    ----------
    first : float
        The lowest energy.
    step : float
        The (strictly positive) spacing between successive energies.
    n_energies : int
        How many energies are on the grid.
    """

    first: float
    step: float
    n_energies: int

    def __post_init__(self):
        """Check initialization values."""
        if not (isfinite(self.step) and self.step > 0):
            raise IrregularGridError(f'Energy step {self.step} is not '
                                     'a positive number')
        if not isfinite(self.first):
            raise IrregularGridError(f'Invalid first energy {self.first}')
        if self.n_energies < 1:
            raise IrregularGridError('An energy grid needs at least '
                                     'one energy')

    @property
    def last(self):
        """Return the highest energy of this grid."""
        return self.first + self.step * (self.n_energies - 1)

    @property
    def energies(self):
        """Return a numpy array of the energies of this grid."""
        return self.first + self.step * np.arange(self.n_energies)

    @classmethod
    def from_energies(cls, energies):
        """Return an EnergyGrid from an ascending, evenly spaced array.

        Parameters
        ----------
        energies : Sequence of float
            The energies. Any energy may deviate from the linear grid
            by at most half of the average step.

        Returns
        -------
        grid : EnergyGrid
            The grid with first energy and average step of `energies`.

        Raises
        ------
        IrregularGridError
            If there are fewer than two energies, if they are not
            ascending, or if they are not evenly spaced.
        """
        energies = np.asarray(energies, dtype=float)
        n_energies = len(energies)
        if n_energies < 2:
            raise IrregularGridError('Not enough energies. Need at '
                                     f'least 2, found {n_energies}')
        if not np.all(np.isfinite(energies)):
            raise IrregularGridError('Energies must be finite numbers')
        step = (energies[-1] - energies[0]) / (n_energies - 1)
        if not (np.isfinite(step) and step > 0):
            raise IrregularGridError('Energies are not ascending')
        linear = energies[0] + step * np.arange(n_energies)
        if np.any(np.abs(energies - linear) > 0.5 * step):
            raise IrregularGridError('Energies are not evenly spaced')
        return cls(float(energies[0]), float(step), n_energies)

    def is_compatible(self, other, tolerance):
        """Return whether `other` has the same step within `tolerance`."""
        return abs(self.step - other.step) <= tolerance

    def resampled(self, new_step):
        """Return a grid with `new_step` spanning the same energies.

        The first and last energies of the new grid are integer
        multiples of `new_step` and lie within the range of this
        grid (except for floating-point round-off).

        Parameters
        ----------
        new_step : float
            The energy step of the new grid.

        Returns
        -------
        new_grid : EnergyGrid
            The resampled grid.

        Raises
        ------
        IrregularGridError
            If `new_step` is not positive, or if no multiple of
            `new_step` falls within the range of this grid.
        """
        if not new_step > 0:
            raise IrregularGridError(f'Step {new_step} not positive')
        new_first = ceil(self.first / new_step - GRID_EPS) * new_step
        new_last = floor(self.last / new_step + GRID_EPS) * new_step
        n_energies = round((new_last - new_first) / new_step) + 1
        if n_energies < 1:
            raise IrregularGridError(
                f'No energy in {self.first}-{self.last} eV is a '
                f'multiple of {new_step} eV'
                )
        return EnergyGrid(new_first, new_step, n_energies)
