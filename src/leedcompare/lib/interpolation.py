"""Module interpolation of leedcompare.lib.

Helper functions for the interpolation of ragged curves, i.e., curves
that contain NaN values, to a different energy grid. Each stretch of
defined values is interpolated separately with a not-a-knot cubic
spline from scipy. Interpolated values are never extrapolated beyond
the stretch they come from.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

import logging
from math import ceil, floor

import numpy as np
from scipy.interpolate import CubicSpline

from leedcompare.lib.curve_utils import defined_ranges

logger = logging.getLogger(__name__)

_INDEX_EPS = 1e-10


def interpolate_curve(old_energies, new_energies, curve,
                      bc_type='not-a-knot'):
    """Return `curve` interpolated from `old_energies` to `new_energies`.

    Parameters
    ----------
    old_energies : numpy.ndarray
        The energies at which `curve` is sampled. Ascending.
    new_energies : numpy.ndarray
        The evenly spaced, ascending energies of the output.
    curve : numpy.ndarray
        The intensities. May contain NaN values.
    bc_type : str, optional
        The boundary condition of the cubic splines. Default is
        'not-a-knot'.

    Returns
    -------
    new_curve : numpy.ndarray
        Same shape as `new_energies`. Points that are outside all
        of the stretches where `curve` is defined are NaN. Stretches
        consisting of a single point are spread as constant over
        the new energies that fall on that point.
    """
    new_curve = np.full(len(new_energies), np.nan)
    if not len(new_energies):
        return new_curve
    new_first = new_energies[0]
    if len(new_energies) > 1:
        new_step = ((new_energies[-1] - new_first)
                    / (len(new_energies) - 1))
    else:
        new_step = 1.0
    for start, stop in defined_ranges(~np.isnan(curve)):
        new_start = ceil((old_energies[start] - new_first) / new_step
                         - _INDEX_EPS)
        new_stop = floor((old_energies[stop - 1] - new_first) / new_step
                         + _INDEX_EPS) + 1
        new_start, new_stop = max(new_start, 0), min(new_stop, len(new_curve))
        if new_stop <= new_start:
            continue
        if stop - start < 2:
            new_curve[new_start:new_stop] = curve[start]
            continue
        spline = CubicSpline(old_energies[start:stop], curve[start:stop],
                             bc_type=bc_type, extrapolate=True)
        new_curve[new_start:new_stop] = spline(
            new_energies[new_start:new_stop]
            )
    return new_curve


def interpolate_dataset(dataset, new_step):
    """Return a copy of `dataset` interpolated to a grid with `new_step`.

    Parameters
    ----------
    dataset : IVDataset
        The data to be interpolated. Its energies need to be
        ascending and evenly spaced.
    new_step : float
        The step of the new energy grid. The energies of the new
        grid are integer multiples of `new_step` within the range
        of energies of `dataset`.

    Returns
    -------
    interpolated : IVDataset
        The interpolated data. Beam indices and names are kept.

    Raises
    ------
    IrregularGridError
        If the energies of `dataset` are not evenly spaced, if
        `new_step` is not positive, or if there is no multiple
        of `new_step` in the range of energies of `dataset`.
    """
    old_energies = np.asarray(dataset.energies)
    new_grid = dataset.grid.resampled(new_step)
    new_energies = new_grid.energies
    logger.debug(f'{dataset.title}: interpolating {dataset.n_beams} beams '
                 f'to {new_grid.n_energies} energies, step={new_step:.4g}')
    new_intensities = np.column_stack([
        interpolate_curve(old_energies, new_energies, curve)
        for curve in dataset.intensities.T
        ]) if dataset.n_beams else np.empty((len(new_energies), 0))
    return dataset.replaced(energies=new_energies,
                            intensities=new_intensities)
