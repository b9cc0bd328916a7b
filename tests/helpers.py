"""Module helpers of leedcompare.tests.

Contains some useful general definitions that can be used when creating
or running tests, mostly synthetic I(V) curves.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

from contextlib import contextmanager

import numpy as np
import pytest

from leedcompare.classes.dataset import IVDataset

E_FIRST, E_LAST, E_STEP = 50.0, 200.0, 0.5
V0I = 4.0

# (position, height, half width) of peaks of synthetic I(V) curves
PEAKS = {
    0: ((70.0, 1.0, 4.0), (105.0, 0.6, 5.0), (160.0, 0.8, 6.0)),
    1: ((62.0, 0.4, 3.5), (120.0, 1.0, 5.0), (185.0, 0.5, 4.0)),
    2: ((90.0, 0.7, 4.5), (140.0, 0.9, 4.0), (175.0, 0.3, 5.0)),
    3: ((80.0, 0.5, 4.0), (130.0, 0.4, 6.0), (150.0, 1.0, 3.5)),
    }


def make_energies(first=E_FIRST, last=E_LAST, step=E_STEP):
    """Return an evenly spaced energy axis, including `last`."""
    return first + step * np.arange(round((last - first) / step) + 1)


def peaked_curve(energies, peaks=PEAKS[0], shift=0.0, baseline=0.02):
    """Return a sum of Lorentzian peaks, moved up by `shift`."""
    energies = np.asarray(energies, dtype=float) - shift
    curve = np.full(energies.shape, baseline)
    for position, height, width in peaks:
        curve += height / (1 + ((energies - position) / width)**2)
    return curve


def make_dataset(title='synthetic', energies=None, beam_ids=(0, 1),
                 shift=0.0, scale=1.0):
    """Return an IVDataset with one peaked curve for each beam."""
    if energies is None:
        energies = make_energies()
    curves = {beam_id: scale * peaked_curve(energies,
                                            PEAKS[beam_id % len(PEAKS)],
                                            shift=shift)
              for beam_id in beam_ids}
    return IVDataset.from_curves(title, energies, curves)


@contextmanager
def not_raises(exc):
    """Fail a test if a specific exception is raised."""
    # Exclude this function when reporting the exception trace
    __tracebackhide__ = True  # pylint: disable=unused-variable
    try:
        yield
    except exc:
        pytest.fail(f'DID RAISE {exc.__name__}')
