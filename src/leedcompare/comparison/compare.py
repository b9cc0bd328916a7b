"""Module compare of leedcompare.comparison.

Defines the top-level functions for comparing two sets of I(V)
curves: preparation of the data sets (averaging of equivalent beams,
selection of common beams, common energy step), and calculation of
the R factors, optionally optimizing the energy shift between the
data sets.

Typical use:
    common_1, common_2 = prepare_datasets(dataset_1, dataset_2,
                                          spot_pattern)
    result = compare(common_1, common_2, v0i=5.0,
                     spot_pattern=spot_pattern)
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

import logging
import math

import numpy as np

from leedcompare.classes.metric import ComparisonResult
from leedcompare.classes.metric import MetricField
from leedcompare.classes.metric import MetricRow
from leedcompare.classes.metric import RFactorType
from leedcompare.classes.metric import SummaryRow
from leedcompare.comparison.aggregate import category_summaries
from leedcompare.comparison.aggregate import evaluate_at_shift
from leedcompare.comparison.aggregate import normalize_ratios
from leedcompare.comparison.averaging import average_symmetric
from leedcompare.comparison.correspondence import build_correspondence
from leedcompare.comparison.grid import align_grids
from leedcompare.comparison.shift import find_best_shift
from leedcompare.constants import DEFAULT_MAX_STEP
from leedcompare.constants import STEP_TOLERANCE
from leedcompare.errors import InternalInconsistencyError
from leedcompare.errors import IrregularGridError
from leedcompare.lib.curve_utils import count_defined
from leedcompare.lib.curve_utils import defined_span

logger = logging.getLogger(__name__)


def _common_step_and_shift(dataset_1, dataset_2):
    """Return the energy step and index shift of two aligned data sets."""
    if dataset_1.beam_ids != dataset_2.beam_ids:
        raise InternalInconsistencyError(
            'Data sets to compare must have the same beams: '
            f'{dataset_1.beam_ids} vs. {dataset_2.beam_ids}'
            )
    grid_1, grid_2 = dataset_1.grid, dataset_2.grid
    if not grid_1.is_compatible(grid_2, STEP_TOLERANCE):
        raise IrregularGridError(
            f'Data sets have different energy steps ({grid_1.step:.4g} '
            f'vs. {grid_2.step:.4g}). Use align_grids first'
            )
    step = grid_1.step
    return step, math.floor((grid_1.first - grid_2.first) / step + 0.5)


def _evaluate(dataset_1, dataset_2, v0i, r_factor_type, allow_shift,
              summary_only):
    """Return rows, summary and energy shift for two aligned data sets."""
    if not v0i > 0:
        raise ValueError(f'v0i must be positive. Found {v0i}')
    step, e_shift = _common_step_and_shift(dataset_1, dataset_2)
    data_1, data_2 = dataset_1.intensities, dataset_2.intensities
    if allow_shift:
        return find_best_shift(data_1, data_2, v0i, step, e_shift,
                               r_factor_type, summary_only)
    rows, summary = evaluate_at_shift(data_1, data_2, v0i, step, e_shift,
                                      summary_only)
    return rows, summary, np.nan


def compare(dataset_1, dataset_2, v0i, r_factor_type='pendry',
            allow_shift=True, spot_pattern=None):
    """Return the R factors between two sets of I(V) curves.

    Parameters
    ----------
    dataset_1, dataset_2 : IVDataset
        The data sets to be compared. They must have the same beams
        in the same order and the same energy step, as returned by
        build_correspondence followed by align_grids (or simply by
        prepare_datasets). Their first energies may differ.
    v0i : float
        The imaginary part of the inner potential (eV).
    r_factor_type : RFactorType or int or str, optional
        Which R factor is reported and, if `allow_shift`, minimized.
        Default is 'pendry'.
    allow_shift : bool, optional
        Whether the energy shift between the data sets should be
        optimized. Default is True.
    spot_pattern : SpotPattern, optional
        The spot pattern of the beams. If given, separate statistics
        for integer and superstructure beams are collected.

    Returns
    -------
    result : ComparisonResult
        Per-beam and overall results. Intensity ratios are
        normalized to an overall value of one.

    Raises
    ------
    ValueError
        If `v0i` is not positive.
    RFactorTypeError
        If `r_factor_type` is not a known type of R factor.
    InternalInconsistencyError
        If the data sets do not have the same beams.
    IrregularGridError
        If the energies of the data sets are not evenly spaced, or
        if they have different energy steps.
    NoMinimumFoundError
        If `allow_shift` and the R factor has no minimum.
    """
    r_factor_type = RFactorType(r_factor_type)
    rows, summary, energy_shift = _evaluate(dataset_1, dataset_2, v0i,
                                            r_factor_type, allow_shift,
                                            summary_only=False)
    rows, summary = normalize_ratios(rows, summary)
    integer, superstructure = (
        category_summaries(rows, dataset_1.beam_ids, spot_pattern)
        if spot_pattern is not None else (None, None)
        )
    valid = bool(summary[MetricField.OVERLAP] > 0)
    if not valid:
        logger.warning(f'{dataset_1.title!r} and {dataset_2.title!r} '
                       'do not overlap. R factors are undefined')
    return ComparisonResult(
        beam_ids=dataset_1.beam_ids,
        beam_names=dataset_1.beam_names,
        rows=tuple(MetricRow.from_array(row) for row in rows),
        summary=SummaryRow.from_array(summary, shift=float(energy_shift),
                                      valid=valid),
        integer=integer,
        superstructure=superstructure,
        energy_step=dataset_1.grid.step,
        r_factor_type=r_factor_type,
        )


def get_r_factor(dataset_1, dataset_2, v0i, r_factor_type='pendry',
                 allow_shift=True):
    """Return the overall R factor between two data sets.

    This is a faster version of compare(...).r_factor that does
    not collect per-beam results. See compare for the meaning of
    parameters and for the exceptions raised.

    Returns
    -------
    r_factor : float
        The overall R factor. NaN if the data sets do not overlap.
    """
    r_factor_type = RFactorType(r_factor_type)
    _, summary, _ = _evaluate(dataset_1, dataset_2, v0i, r_factor_type,
                              allow_shift, summary_only=True)
    return float(summary[r_factor_type.field])


def prepare_datasets(dataset_1, dataset_2, spot_pattern,
                     average_equivalent=True, max_step=DEFAULT_MAX_STEP):
    """Return two data sets ready to be compared.

    Parameters
    ----------
    dataset_1, dataset_2 : IVDataset
        The data sets. Not modified.
    spot_pattern : SpotPattern
        The spot pattern that the beam indices of both data
        sets refer to.
    average_equivalent : bool, optional
        Whether symmetry-equivalent beams should be averaged
        first. Default is True.
    max_step : float, optional
        The largest energy step used for comparing. Default is
        DEFAULT_MAX_STEP.

    Returns
    -------
    common_1, common_2 : IVDataset
        The data sets with the same beams, in the same order, and
        with the same energy step.

    Raises
    ------
    NoValidDataError
        If either data set contains no data.
    NoCommonBeamsError
        If the data sets have no beams in common.
    IrregularGridError
        If the energies of either data set are not evenly spaced.
    """
    if average_equivalent and spot_pattern.has_equivalent_beams:
        dataset_1 = average_symmetric(dataset_1, spot_pattern)
        dataset_2 = average_symmetric(dataset_2, spot_pattern)
    common_1, common_2 = build_correspondence(dataset_1, dataset_2,
                                              spot_pattern)
    return align_grids(common_1, common_2, max_step=max_step)


def compare_with_settings(dataset_1, dataset_2, spot_pattern, settings):
    """Prepare and compare two data sets with ComparisonSettings.

    Parameters
    ----------
    dataset_1, dataset_2 : IVDataset
        The data sets, as read from file. Not modified.
    spot_pattern : SpotPattern
        The spot pattern of both data sets.
    settings : ComparisonSettings
        The parameters of the comparison.

    Returns
    -------
    result : ComparisonResult
    """
    common_1, common_2 = prepare_datasets(
        dataset_1, dataset_2, spot_pattern,
        average_equivalent=settings.average_equivalent,
        max_step=settings.max_step,
        )
    return compare(common_1, common_2, settings.v0i,
                   r_factor_type=settings.r_factor_type,
                   allow_shift=settings.allow_shift,
                   spot_pattern=spot_pattern)


def normalize_to_overlap_max(dataset_1, dataset_2):
    """Return copies of two data sets with curves scaled for display.

    Each curve is scaled such that its maximum in the energy range
    where both curves of the same beam are defined becomes one.

    Parameters
    ----------
    dataset_1, dataset_2 : IVDataset
        The data sets, with the same beams in the same order and
        the same energy step.

    Returns
    -------
    scaled_1, scaled_2 : IVDataset
        The scaled data sets.
    """
    _, e_shift = _common_step_and_shift(dataset_1, dataset_2)
    scaled = [np.array(dataset_1.intensities),
              np.array(dataset_2.intensities)]
    for column in range(dataset_1.n_beams):
        curve_1, curve_2 = (data[:, column] for data in scaled)
        if not (count_defined(curve_1) and count_defined(curve_2)):
            continue
        start_1, stop_1 = defined_span(curve_1)
        start_2, stop_2 = defined_span(curve_2)
        start = max(start_1, start_2 - e_shift)
        stop = min(stop_1, stop_2 - e_shift)
        if stop <= start:
            continue
        for curve, offset in ((curve_1, 0), (curve_2, e_shift)):
            segment = curve[start+offset:stop+offset]
            if not count_defined(segment):
                continue
            maximum = np.nanmax(segment)
            if maximum > 0:
                curve /= maximum
    return (dataset_1.replaced(intensities=scaled[0]),
            dataset_2.replaced(intensities=scaled[1]))
