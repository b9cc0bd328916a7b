"""Module grid of leedcompare.comparison.

Defines the align_grids function, which brings two sets of I(V)
curves to a common energy step.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

import logging

from leedcompare.constants import DEFAULT_MAX_STEP
from leedcompare.constants import STEP_TOLERANCE
from leedcompare.lib.interpolation import interpolate_dataset

logger = logging.getLogger(__name__)


def align_grids(dataset_1, dataset_2, max_step=DEFAULT_MAX_STEP):
    """Return two data sets with the same energy step.

    The common step is the smallest among the steps of the two
    data sets and `max_step`. Data sets whose step differs from
    the common one are interpolated with cubic splines. The first
    energies of the two grids may still differ.

    Parameters
    ----------
    dataset_1, dataset_2 : IVDataset
        The data sets. Their energies must be evenly spaced.
    max_step : float, optional
        The largest acceptable energy step. Default is
        DEFAULT_MAX_STEP.

    Returns
    -------
    aligned_1, aligned_2 : IVDataset
        The data sets with the common step. A data set that already
        has the common step is returned unchanged.

    Raises
    ------
    ValueError
        If `max_step` is not positive.
    IrregularGridError
        If the energies of either data set are not evenly spaced.
    """
    if not max_step > 0:
        raise ValueError(f'max_step must be positive. Found {max_step}')
    step_1, step_2 = dataset_1.grid.step, dataset_2.grid.step
    step = min(step_1, step_2, max_step)
    aligned = []
    for dataset, old_step in ((dataset_1, step_1), (dataset_2, step_2)):
        if abs(old_step - step) > STEP_TOLERANCE:
            logger.debug(f'{dataset.title}: step {old_step:.4g} -> '
                         f'{step:.4g}, interpolating')
            dataset = interpolate_dataset(dataset, step)
        aligned.append(dataset)
    logger.debug(f'Common energy step: {step:.4g} eV')
    return tuple(aligned)
