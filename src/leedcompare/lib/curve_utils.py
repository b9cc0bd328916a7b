"""Module curve_utils of leedcompare.lib.

Defines functions useful to handle curves, i.e., 1D arrays of
intensities in which undefined samples are marked as NaN.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

import numpy as np


def count_defined(curve):
    """Return the number of non-NaN values in `curve`."""
    return int(np.count_nonzero(~np.isnan(curve)))


def defined_ranges(mask, min_points=1):
    """Return the ranges where `mask` is True without interruption.

    Parameters
    ----------
    mask : Sequence of bool
        True where a sample is considered defined.
    min_points : int, optional
        Ranges containing fewer than this many points are discarded.
        Default is 1, i.e., all ranges are returned.

    Returns
    -------
    ranges : list of tuple
        Each element is a (start, stop) pair of indices. As for
        slices, `start` is included and `stop` is excluded.
    """
    mask = np.asarray(mask, dtype=bool)
    padded = np.concatenate(([False], mask, [False])).astype(np.int8)
    edges = np.flatnonzero(np.diff(padded))
    return [(int(start), int(stop))
            for start, stop in zip(edges[::2], edges[1::2])
            if stop - start >= min_points]


def defined_span(curve):
    """Return first and one-past-last indices of non-NaN values.

    Parameters
    ----------
    curve : numpy.ndarray
        The 1D array of values.

    Returns
    -------
    start, stop : int
        Slice bounds containing all the defined values of `curve`.
        Both are zero if `curve` has no defined values.
    """
    defined = np.flatnonzero(~np.isnan(curve))
    if not defined.size:
        return 0, 0
    return int(defined[0]), int(defined[-1]) + 1


def shifted_pair(curve_1, curve_2, shift):
    """Return the parts of two curves that face each other after shifting.

    Parameters
    ----------
    curve_1, curve_2 : numpy.ndarray
        The curves to be compared. Index i of `curve_1` faces
        index i + `shift` of `curve_2`.
    shift : int
        By how many points `curve_2` is shifted to the left.

    Returns
    -------
    part_1, part_2 : numpy.ndarray
        Views of the two curves with equal length. They are empty
        if the curves do not face each other at all.
    """
    start = max(0, -shift)
    stop = min(len(curve_1), len(curve_2) - shift)
    if stop <= start:
        return curve_1[:0], curve_2[:0]
    return curve_1[start:stop], curve_2[start+shift:stop+shift]
