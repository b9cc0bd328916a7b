"""Module averaging of leedcompare.comparison.

Defines functions for averaging the I(V) curves of beams that are
equivalent by symmetry. Curves are accreted one by one, starting
from the one with most data, always picking the one that overlaps
most with the current average. Curves that would shrink the range
of usable data too much are ignored.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

import logging

import numpy as np

from leedcompare.classes.spot_pattern import UNKNOWN_GROUP
from leedcompare.constants import MIN_DEFINED_POINTS
from leedcompare.lib.curve_utils import count_defined
from leedcompare.lib.curve_utils import defined_span
from leedcompare.lib.rfactor import overlap_ranges

logger = logging.getLogger(__name__)


def average_curves(curves):
    """Return the average of some I(V) curves.

    Parameters
    ----------
    curves : Sequence of numpy.ndarray
        The curves to be averaged. All must have the same length.
        Undefined values are NaN.

    Returns
    -------
    average : numpy.ndarray or None
        None if no curve has at least MIN_DEFINED_POINTS defined
        values. If only one curve is usable, or if no other curve
        overlaps enough with it, that curve itself (not a copy).
        Otherwise a new array. The average is never defined outside
        the range of the curve with the largest number of defined
        points, i.e., the seed of the average.

    Raises
    ------
    ValueError
        If the curves have different lengths.
    """
    curves = [np.asarray(curve, dtype=float) for curve in curves]
    if len({len(curve) for curve in curves}) > 1:
        raise ValueError('Curves for averaging have different lengths: '
                         f'{sorted({len(curve) for curve in curves})}')
    candidates = [curve for curve in curves
                  if count_defined(curve) >= MIN_DEFINED_POINTS]
    if len(candidates) <= 1:
        return candidates[0] if candidates else None

    n_defined = [count_defined(curve) for curve in candidates]
    seed = candidates.pop(n_defined.index(max(n_defined)))
    seed_defined = max(n_defined)
    in_seed_range = np.zeros(len(seed), dtype=bool)
    in_seed_range[slice(*defined_span(seed))] = True

    total = np.where(np.isnan(seed), 0.0, seed)
    n_contributions = (~np.isnan(seed)).astype(int)
    n_averaged = 1
    while candidates:
        running = np.where(n_contributions > 0, 0.0, np.nan)
        overlaps = [overlap_ranges(curve, running)[1] for curve in candidates]
        # Drop those that would reduce the usable range too much
        kept = [(curve, n_overlap)
                for curve, n_overlap in zip(candidates, overlaps)
                if 2 * n_overlap >= seed_defined]
        if not kept:
            break
        best_index = max(range(len(kept)), key=lambda i: kept[i][1])
        best, _ = kept.pop(best_index)
        candidates = [curve for curve, _ in kept]
        use = ~np.isnan(best) & in_seed_range
        total[use] += best[use]
        n_contributions += use
        n_averaged += 1

    if n_averaged == 1:
        return seed
    with np.errstate(divide='ignore', invalid='ignore'):
        average = total / n_contributions
    average[n_contributions == 0] = np.nan
    return average


def average_symmetric(dataset, spot_pattern):
    """Return a data set in which symmetry-equivalent beams are averaged.

    For each group of symmetry-equivalent beams, the curve of the
    beam of the group that comes first in `dataset` is replaced by
    the average of all the beams of the group. The other beams are
    removed. Beams whose group is not known are not averaged.

    Parameters
    ----------
    dataset : IVDataset
        The data to be averaged. Not modified.
    spot_pattern : SpotPattern
        The pattern that the beam indices of `dataset` refer to.

    Returns
    -------
    averaged : IVDataset
        The data after averaging. A group of beams that has no
        usable curve is removed altogether. This is `dataset` itself
        if there is nothing to average.
    """
    intensities = np.array(dataset.intensities)
    used, keep = set(), []
    for column, beam_id in enumerate(dataset.beam_ids):
        if column in used:
            continue
        group = spot_pattern.group(beam_id)
        members = (spot_pattern.beams_in_group(group)
                   if group is not UNKNOWN_GROUP else ())
        member_columns = [c for c, b in enumerate(dataset.beam_ids)
                          if b in members and c not in used]
        if len(members) <= 1 or len(member_columns) <= 1:
            keep.append(column)
            continue
        used.update(member_columns)
        average = average_curves(intensities[:, member_columns].T)
        logger.debug(f'{dataset.title}: averaged {len(member_columns)} beams '
                     f'of group {group}'
                     + (' (no usable data)' if average is None else ''))
        if average is None:
            continue
        intensities[:, column] = average
        keep.append(column)
    if not used:
        return dataset
    return dataset.replaced(intensities=intensities).select(keep)
