"""Module aggregate of leedcompare.comparison.

Defines functions that evaluate R factors for all pairs of beams of
two sets of I(V) curves at a given energy shift, and that combine
the per-beam results into overall statistics.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

import logging

import numpy as np

from leedcompare.classes.metric import CategorySummary
from leedcompare.classes.metric import MetricField
from leedcompare.classes.metric import MetricRow
from leedcompare.classes.metric import N_FIELDS
from leedcompare.lib.rfactor import r_factor_row

logger = logging.getLogger(__name__)

_OVERLAP = MetricField.OVERLAP
_RATIO = MetricField.RATIO


def evaluate_at_shift(data_1, data_2, v0i, step, shift, summary_only=False):
    """Return R factors for each pair of beams and their average.

    Parameters
    ----------
    data_1, data_2 : numpy.ndarray
        Shape (n_energies, n_beams). The intensities of the two
        data sets. Columns with the same index are compared. The
        number of energies of the two may differ.
    v0i : float
        The imaginary part of the inner potential (eV).
    step : float
        The energy step common to both data sets.
    shift : int
        Energy i of `data_1` is compared with energy i + `shift`
        of `data_2`.
    summary_only : bool, optional
        If True, do not return the per-beam results. Default is
        False.

    Returns
    -------
    rows : numpy.ndarray or None
        Shape (n_beams, N_FIELDS), ordered as MetricField. The
        OVERLAP column is in energy units. None if `summary_only`.
    summary : numpy.ndarray
        Shape (N_FIELDS,). The overlap-weighted average over the beams
        that overlap, except for OVERLAP, which is the sum over all
        beams. All but OVERLAP are NaN if no beam overlaps.
    """
    n_beams = data_1.shape[1]
    rows = np.empty((n_beams, N_FIELDS))
    for column in range(n_beams):
        rows[column] = r_factor_row(data_1[:, column], data_2[:, column],
                                    shift, v0i / step)
    rows[:, _OVERLAP] *= step
    summary = weighted_summary(rows)
    if summary_only:
        return None, summary
    return rows, summary


def weighted_summary(rows):
    """Return the overlap-weighted average of `rows`.

    Parameters
    ----------
    rows : numpy.ndarray
        Shape (n_beams, N_FIELDS). Per-beam results.

    Returns
    -------
    summary : numpy.ndarray
        Shape (N_FIELDS,). Beams without overlap are ignored. The
        OVERLAP field is the total overlap. All other fields are NaN
        if the total overlap is zero.
    """
    overlapping = rows[rows[:, _OVERLAP] > 0]
    summary = np.full(N_FIELDS, np.nan)
    total_overlap = overlapping[:, _OVERLAP].sum()
    summary[_OVERLAP] = total_overlap
    if not total_overlap > 0:
        logger.debug('No overlap between any pair of beams')
        return summary
    weighted = overlapping * overlapping[:, _OVERLAP, np.newaxis]
    others = np.arange(N_FIELDS) != _OVERLAP
    summary[others] = weighted[:, others].sum(axis=0) / total_overlap
    return summary


def normalize_ratios(rows, summary):
    """Scale intensity ratios to an overlap-weighted average of one.

    Parameters
    ----------
    rows : numpy.ndarray
        Shape (n_beams, N_FIELDS). Per-beam results. Beams with a
        positive RATIO define the normalization.
    summary : numpy.ndarray
        Shape (N_FIELDS,). The summary of `rows`.

    Returns
    -------
    rows, summary : numpy.ndarray
        New arrays with normalized RATIO. The inputs are returned
        unchanged if no beam has a positive ratio.
    """
    ratio = rows[:, _RATIO]
    positive = ratio > 0
    sum_ratio = np.sum(ratio[positive] * rows[positive, _OVERLAP])
    sum_range = np.sum(rows[positive, _OVERLAP])
    if not sum_ratio > 0:
        logger.warning('Cannot normalize intensity ratios: '
                       'no beam with positive intensities')
        return rows, summary
    rows, summary = rows.copy(), summary.copy()
    rows[:, _RATIO] *= sum_range / sum_ratio
    summary[_RATIO] *= sum_range / sum_ratio
    return rows, summary


def category_summaries(rows, beam_ids, spot_pattern):
    """Return statistics for integer and superstructure beams.

    Parameters
    ----------
    rows : numpy.ndarray
        Shape (n_beams, N_FIELDS). Per-beam results.
    beam_ids : Sequence of int
        The indices of the beams in `rows`, as in `spot_pattern`.
    spot_pattern : SpotPattern
        Tells which beams are superstructure beams.

    Returns
    -------
    integer, superstructure : CategorySummary or None
        Plain (unweighted) averages over the beams of each kind
        that overlap, except for the overlap, which is the sum.
        Both are None unless there are overlapping beams of both
        kinds.
    """
    if not spot_pattern.has_superstructure:
        return None, None
    is_super = np.array([spot_pattern.is_superstructure(beam_id)
                         for beam_id in beam_ids], dtype=bool)
    overlapping = rows[:, _OVERLAP] > 0
    summaries = []
    for selected in (~is_super & overlapping, is_super & overlapping):
        n_beams = int(np.count_nonzero(selected))
        if not n_beams:
            return None, None
        values = rows[selected].sum(axis=0)
        others = np.arange(N_FIELDS) != _OVERLAP
        values[others] /= n_beams
        summaries.append(CategorySummary(MetricRow.from_array(values),
                                         n_beams))
    return tuple(summaries)
