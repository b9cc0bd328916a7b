"""Module shift of leedcompare.comparison.

Defines the find_best_shift function, which looks for the energy
shift between two sets of I(V) curves that minimizes the R factor.
The search proceeds in steps of the energy grid, and the minimum
is then refined by fitting a parabola through the best shift and
its two neighbours.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

import logging
import math

import numpy as np

from leedcompare.classes.metric import MetricField
from leedcompare.classes.metric import RFactorType
from leedcompare.comparison.aggregate import evaluate_at_shift
from leedcompare.errors import NoMinimumFoundError
from leedcompare.lib.log_utils import debug_or_lower

logger = logging.getLogger(__name__)


def max_shift_steps(v0i, step):
    """Return the largest shift (in steps) worth exploring.

    Exact halves are rounded up.
    """
    return math.floor(2 * v0i / step + 0.5)


def parabola_vertex(r_left, r_mid, r_right):
    """Return the offset of the minimum of a parabola through 3 points.

    Parameters
    ----------
    r_left, r_mid, r_right : float
        Values at -1, 0, and +1.

    Returns
    -------
    dx : float
        Position of the vertex relative to the middle point. Zero
        if the parabola has no minimum (i.e., is not convex).
    """
    twob = r_right - r_left
    c = 0.5 * (r_right + r_left) - r_mid
    if not (math.isfinite(c) and c > 0):
        logger.debug('R factor vs. shift not convex. Using best '
                     'integer shift without refinement')
        return 0.0
    return -0.25 * twob / c


def interpolate_on_parabola(left, mid, right, dx):
    """Return values at `dx` of parabolas through left, mid, right.

    The arrays `left`, `mid`, and `right` are at -1, 0, +1. Every
    field but OVERLAP is interpolated. OVERLAP is taken from `mid`.
    """
    values = mid + 0.5 * dx * (right - left) + dx**2 * (0.5*(right + left)
                                                      - mid)
    values[..., MetricField.OVERLAP] = mid[..., MetricField.OVERLAP]
    return values


def find_best_shift(data_1, data_2, v0i, step, e_shift, r_factor_type,
                    summary_only=False):
    """Return R factors at the energy shift that minimizes them.

    Parameters
    ----------
    data_1, data_2 : numpy.ndarray
        Shape (n_energies, n_beams). The intensities of the two data
        sets. Columns with the same index are compared.
    v0i : float
        The imaginary part of the inner potential (eV). The search
        extends up to twice this value.
    step : float
        The energy step common to both data sets.
    e_shift : int
        Index shift corresponding to the different first energies of
        the data sets, i.e., the shift at zero energy offset.
    r_factor_type : RFactorType or int or str
        Which R factor should be minimized.
    summary_only : bool, optional
        If True, do not return per-beam results. Default is False.

    Returns
    -------
    rows : numpy.ndarray or None
        Shape (n_beams, N_FIELDS). Per-beam results interpolated at
        the minimum. None if `summary_only`.
    summary : numpy.ndarray
        Shape (N_FIELDS,). The overall results at the minimum.
    energy_shift : float
        The energy (in eV) by which the second data set should be
        shifted to best match the first one. NaN if the R
        factor is undefined (e.g., the curves never overlap).

    Raises
    ------
    NoMinimumFoundError
        If the R factor keeps decreasing up to the largest shift.
    """
    field = RFactorType(r_factor_type).field
    max_shift = max_shift_steps(v0i, step)
    log_shifts = debug_or_lower(logger)
    evaluated = {}

    def _evaluate(shift):
        rows, summary = evaluate_at_shift(data_1, data_2, v0i, step,
                                          shift + e_shift, summary_only)
        evaluated[shift] = rows, summary
        if log_shifts:
            logger.debug(f'shift {shift}: R={summary[field]:.7f}')
        return summary[field]

    direction, shift, first = 1, 0, True
    best_r, best_shift = _evaluate(shift), shift
    while True:
        shift += direction
        if abs(shift) > max_shift:
            error = NoMinimumFoundError(max_shift, step)
            logger.error(str(error))
            raise error
        r_factor = _evaluate(shift)
        if r_factor < best_r:
            best_r, best_shift = r_factor, shift
        elif first:
            # Wrong direction or shift zero is best: try the other way
            direction, shift = -direction, 0
        else:
            break
        first = False

    (rows_left, left), (rows_mid, mid), (rows_right, right) = (
        evaluated[best_shift + i] for i in (-1, 0, 1)
        )
    dx = parabola_vertex(left[field], mid[field], right[field])
    summary = interpolate_on_parabola(left, mid, right, dx)
    rows = (None if summary_only
            else interpolate_on_parabola(rows_left, rows_mid, rows_right, dx))
    if not math.isfinite(best_r):
        logger.debug('R factor undefined at all shifts explored')
        return rows, summary, math.nan
    energy_shift = (best_shift + dx) * step
    logger.debug(f'Best shift: {energy_shift:.3f} eV, '
                 f'R={summary[field]:.4f}')
    return rows, summary, energy_shift
