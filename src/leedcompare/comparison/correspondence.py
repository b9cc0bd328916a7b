"""Module correspondence of leedcompare.comparison.

Defines the build_correspondence function, which reduces two sets of
I(V) curves to the beams they have in common, in the same order.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

from collections import Counter
import logging

from leedcompare.classes.spot_pattern import UNKNOWN_GROUP
from leedcompare.errors import InternalInconsistencyError
from leedcompare.errors import NoCommonBeamsError

logger = logging.getLogger(__name__)


def has_equivalent_beams(dataset, spot_pattern):
    """Return whether `dataset` has two beams of the same group."""
    groups = Counter(spot_pattern.group(beam_id)
                     for beam_id in dataset.beam_ids)
    groups.pop(UNKNOWN_GROUP, None)
    return any(count > 1 for count in groups.values())


def _use_first_beam_of_group(dataset, spot_pattern):
    """Return a copy of `dataset` with the first index of each group."""
    beam_ids = []
    for beam_id in dataset.beam_ids:
        group = spot_pattern.group(beam_id)
        if group is not UNKNOWN_GROUP:
            beam_id = spot_pattern.beams_in_group(group)[0]
        beam_ids.append(beam_id)
    return dataset.with_beam_ids(beam_ids)


def _match_columns(beam_ids_1, beam_ids_2):
    """Return the columns of beams present in both sequences.

    Each beam of `beam_ids_1` is matched with the first beam of
    `beam_ids_2` that has the same index and was not matched yet.

    Returns
    -------
    columns_1, columns_2 : list of int
        Matched columns, in the order of `beam_ids_1`.
    """
    available = {}
    for column, beam_id in enumerate(beam_ids_2):
        available.setdefault(beam_id, []).append(column)
    columns_1, columns_2 = [], []
    for column, beam_id in enumerate(beam_ids_1):
        if available.get(beam_id):
            columns_1.append(column)
            columns_2.append(available[beam_id].pop(0))
    return columns_1, columns_2


def build_correspondence(dataset_1, dataset_2, spot_pattern):
    """Return two data sets with only their common beams, in order.

    Parameters
    ----------
    dataset_1, dataset_2 : IVDataset
        The data sets. Their beam indices refer to `spot_pattern`.
        They are not modified.
    spot_pattern : SpotPattern
        The spot pattern of both data sets. When it has information
        on groups of symmetry-equivalent beams and neither data set
        contains two beams of the same group, beams are compared
        by group rather than by index. Beams then take the index
        of the first beam of their group.

    Returns
    -------
    common_1, common_2 : IVDataset
        The data sets, reduced to the beams they have in common
        and to the range of energies where they have data. Beams
        are sorted by index and named as in `spot_pattern`.

    Raises
    ------
    NoValidDataError
        If either data set has no defined intensity.
    NoCommonBeamsError
        If the data sets have no beam in common.
    InternalInconsistencyError
        If the beams of the two resulting data sets differ.
    """
    group_mode = (spot_pattern.has_groups
                  and not has_equivalent_beams(dataset_1, spot_pattern)
                  and not has_equivalent_beams(dataset_2, spot_pattern))
    dataset_1, dataset_2 = dataset_1.trimmed(), dataset_2.trimmed()
    if group_mode:
        logger.debug('One beam per group: comparing groups of '
                     'symmetry-equivalent beams')
        dataset_1 = _use_first_beam_of_group(dataset_1, spot_pattern)
        dataset_2 = _use_first_beam_of_group(dataset_2, spot_pattern)

    columns_1, columns_2 = _match_columns(dataset_1.beam_ids,
                                          dataset_2.beam_ids)
    if not columns_1:
        logger.error('Data sets have no common beams')
        raise NoCommonBeamsError(f'{dataset_1.title!r} and '
                                 f'{dataset_2.title!r} have no common beams')
    n_removed = dataset_1.n_beams + dataset_2.n_beams - 2 * len(columns_1)
    if n_removed:
        logger.debug(f'Removed {n_removed} beam(s) not present '
                     'in both data sets')
    common = []
    for dataset, columns in ((dataset_1, columns_1), (dataset_2, columns_2)):
        dataset = dataset.select(columns).sorted_by_id()
        common.append(dataset.with_canonical_names(spot_pattern))
    common_1, common_2 = common
    if common_1.beam_ids != common_2.beam_ids:
        raise InternalInconsistencyError(
            'Data sets should have the same beams now, but they do not: '
            f'{common_1.beam_ids} vs. {common_2.beam_ids}'
            )
    return common_1, common_2
