"""Module rfactor of leedcompare.lib.

Defines functions for the calculation of R factors between pairs of
I(V) curves sampled on the same, evenly spaced energy grid. Curves
are 1D numpy arrays in which undefined intensities are NaN.

Derivatives are taken as the difference between the intensities at
the two neighbours of each point. Hence, a point contributes only if
both its neighbours are defined in both curves.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

import numpy as np

from leedcompare.classes.metric import MetricField
from leedcompare.classes.metric import N_FIELDS
from leedcompare.constants import MIN_OVERLAP_POINTS
from leedcompare.constants import TINY_INTENSITY
from leedcompare.lib.curve_utils import defined_ranges
from leedcompare.lib.curve_utils import shifted_pair

_Y_CURVE_MAX = 0.99


def pendry_y(left, mid, right, v0i_over_step):
    """Return the Pendry Y function from three successive intensities.

    Parameters
    ----------
    left, mid, right : float or numpy.ndarray
        Intensities at three successive, evenly spaced energies.
    v0i_over_step : float
        The imaginary part of the inner potential in units of the
        energy step.

    Returns
    -------
    y_func : float or numpy.ndarray
        The Y function at the energy of `mid`, up to a factor two
        that cancels out in R factors.
    """
    two_l = (right - left) / (mid + TINY_INTENSITY)  # 2 * log derivative
    return two_l / (1 + (0.5 * v0i_over_step * two_l)**2)


def nonnegative_offset(curve):
    """Return the offset that makes all defined values non-negative."""
    if not curve.size or np.all(np.isnan(curve)):
        return 0.0
    return max(0.0, -float(np.nanmin(curve)))


def _three_point_mask(defined):
    """Return which points have themselves and neighbours `defined`."""
    return defined[:-2] & defined[1:-1] & defined[2:]


def r_factor_row(data_1, data_2, shift, v0i_over_step):
    """Return R factors and statistics for a pair of curves.

    Parameters
    ----------
    data_1, data_2 : numpy.ndarray
        The two curves to be compared. Their energy steps must be
        the same. They may have different length.
    shift : int
        Point i of `data_1` is compared with point i + `shift`
        of `data_2`.
    v0i_over_step : float
        The imaginary part of the inner potential divided by the
        energy step.

    Returns
    -------
    row : numpy.ndarray
        Shape (N_FIELDS,), ordered as MetricField. OVERLAP is the
        number of points that were compared. All other fields are
        NaN if no point could be compared.

    Notes
    -----
    If a curve has negative values in the region where both curves
    are defined, its most negative value there is subtracted from
    the whole curve before comparing.
    """
    part_1, part_2 = shifted_pair(np.asarray(data_1, dtype=float),
                                  np.asarray(data_2, dtype=float),
                                  shift)
    row = np.full(N_FIELDS, np.nan)
    row[MetricField.OVERLAP] = 0
    both_defined = ~np.isnan(part_1) & ~np.isnan(part_2)
    if np.count_nonzero(both_defined) < MIN_OVERLAP_POINTS:
        return row
    part_1 = part_1 + nonnegative_offset(part_1[both_defined])
    part_2 = part_2 + nonnegative_offset(part_2[both_defined])

    use = _three_point_mask(both_defined)
    n_points = np.count_nonzero(use)
    if not n_points:
        return row
    left_1, mid_1, right_1 = (part_1[:-2][use], part_1[1:-1][use],
                              part_1[2:][use])
    left_2, mid_2, right_2 = (part_2[:-2][use], part_2[1:-1][use],
                              part_2[2:][use])
    y_1 = pendry_y(left_1, mid_1, right_1, v0i_over_step)
    y_2 = pendry_y(left_2, mid_2, right_2, v0i_over_step)
    sum_1, sum_2 = mid_1.sum(), mid_2.sum()
    with np.errstate(divide='ignore', invalid='ignore'):
        row[MetricField.R_PENDRY] = (np.sum((y_2 - y_1)**2)
                                     / np.sum(y_1**2 + y_2**2))
        scale = sum_1 / sum_2
        row[MetricField.R_2] = (np.sum((mid_1 - scale * mid_2)**2)
                                / np.sum(mid_1**2))
        row[MetricField.RATIO] = sum_2 / sum_1
        row[MetricField.AVG_INTENSITY] = np.sqrt(sum_1 * sum_2) / n_points
    row[MetricField.MAX_1] = max(0.0, mid_1.max())
    row[MetricField.MAX_2] = max(0.0, mid_2.max())
    row[MetricField.OVERLAP] = n_points
    return row


def overlap_ranges(data_1, data_2, min_points=MIN_OVERLAP_POINTS):
    """Return the ranges where two curves are both defined.

    Parameters
    ----------
    data_1, data_2 : numpy.ndarray
        The curves. Only the first min(len(data_1), len(data_2))
        points are considered.
    min_points : int, optional
        Shorter ranges are not considered as overlapping. Default
        is MIN_OVERLAP_POINTS.

    Returns
    -------
    ranges : list of tuple
        (start, stop) indices of the regions of overlap.
    n_overlap : int
        Total number of points in `ranges`.
    """
    n_common = min(len(data_1), len(data_2))
    defined = (~np.isnan(np.asarray(data_1[:n_common], dtype=float))
               & ~np.isnan(np.asarray(data_2[:n_common], dtype=float)))
    ranges = defined_ranges(defined, min_points)
    return ranges, sum(stop - start for start, stop in ranges)


def y_curve(data, v0i_over_step):
    """Return the Y function of a curve, scaled to within +/-0.99.

    Parameters
    ----------
    data : numpy.ndarray
        The I(V) curve. If it has negative values, an offset is
        added to make it non-negative.
    v0i_over_step : float
        The imaginary part of the inner potential divided by the
        energy step.

    Returns
    -------
    y_func : numpy.ndarray
        Same shape as `data`. NaN where the Y function cannot be
        computed, i.e., at points with an undefined neighbour.
    """
    data = np.asarray(data, dtype=float)
    y_func = np.full(data.shape, np.nan)
    if data.size < 3:
        return y_func
    data = data + nonnegative_offset(data)
    use = np.flatnonzero(_three_point_mask(~np.isnan(data)))
    if not use.size:
        return y_func
    y_func[use + 1] = pendry_y(data[use], data[use + 1], data[use + 2],
                               v0i_over_step)
    largest = np.max(np.abs(y_func[use + 1]))
    if largest > 0:
        y_func *= _Y_CURVE_MAX / largest
    return y_func
