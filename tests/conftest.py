"""Test configuration for leedcompare.tests.

Defines fixtures used in multiple tests.

Fixtures
--------
pattern_with_groups
    A SpotPattern with groups of symmetry-equivalent beams.
pattern_no_groups
    A SpotPattern without information on symmetry.
two_datasets
    Two identical IVDatasets of three beams.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

from pytest_cases import fixture

from leedcompare.classes.spot_pattern import SpotPattern

from .helpers import make_dataset


@fixture(name='pattern_with_groups')
def fixture_pattern_with_groups():
    """Return a SpotPattern with two integer and one fractional group."""
    return SpotPattern.from_labels(('(1|0) [1]', '(0|1) [1]', '(1|1) [2]',
                                    '(1/2|0) [3]', '(0|1/2) [3]'),
                                   groups_required=True)


@fixture(name='pattern_no_groups')
def fixture_pattern_no_groups():
    """Return a SpotPattern of four beams without groups."""
    return SpotPattern.from_labels(('1,0', '0,1', '1,1', '1/2,0'))


@fixture(name='two_datasets')
def fixture_two_datasets():
    """Return two identical data sets with beams 0, 1, 2."""
    return (make_dataset('first', beam_ids=(0, 1, 2)),
            make_dataset('second', beam_ids=(0, 1, 2)))
