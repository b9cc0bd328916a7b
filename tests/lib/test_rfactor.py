"""Tests for module rfactor of leedcompare.lib."""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

import numpy as np
import pytest
from pytest_cases import case
from pytest_cases import parametrize
from pytest_cases import parametrize_with_cases

from leedcompare.classes.metric import MetricField
from leedcompare.classes.metric import N_FIELDS
from leedcompare.lib.rfactor import nonnegative_offset
from leedcompare.lib.rfactor import overlap_ranges
from leedcompare.lib.rfactor import pendry_y
from leedcompare.lib.rfactor import r_factor_row
from leedcompare.lib.rfactor import y_curve

from ..helpers import E_STEP
from ..helpers import V0I
from ..helpers import make_energies
from ..helpers import peaked_curve

NAN = np.nan
_CURVE = peaked_curve(make_energies())
_V0I_OVER_STEP = V0I / E_STEP


class IdenticalCurves:
    """Pairs of curves that are the same up to shifts and scaling."""

    @case(tags='identity')
    def case_same(self):
        return _CURVE, _CURVE.copy(), 0, 1.0

    def case_nan_padded(self):
        padded = np.concatenate((np.full(3, NAN), _CURVE))
        return _CURVE, padded, 3, 1.0

    def case_shorter_second(self):
        return _CURVE, _CURVE[10:], -10, 1.0

    def case_scaled(self):
        return _CURVE, 3 * _CURVE, 0, 3.0

    def case_negative_offset(self):
        lowest = _CURVE.min()
        return _CURVE - lowest - 1, _CURVE - lowest, 0, 1.0


class TestRFactorRow:
    """Tests for the r_factor_row function."""

    @parametrize_with_cases('data_1,data_2,shift,ratio',
                            cases=IdenticalCurves)
    def test_identical(self, data_1, data_2, shift, ratio):
        """Check that identical curves give vanishing R factors."""
        row = r_factor_row(data_1, data_2, shift, _V0I_OVER_STEP)
        assert row[MetricField.R_PENDRY] == pytest.approx(0, abs=1e-12)
        assert row[MetricField.R_2] == pytest.approx(0, abs=1e-12)
        assert row[MetricField.RATIO] == pytest.approx(ratio)

    @parametrize_with_cases('data_1,data_2,shift,ratio',
                            cases=IdenticalCurves, has_tag='identity')
    def test_overlap_full(self, data_1, data_2, shift, ratio):
        """Check that all but the two edge points are compared."""
        row = r_factor_row(data_1, data_2, shift, _V0I_OVER_STEP)
        assert row[MetricField.OVERLAP] == len(_CURVE) - 2
        assert row[MetricField.MAX_1] == pytest.approx(_CURVE[1:-1].max())

    def test_exact_values(self):
        """Check R factors for two curves with opposite slope."""
        row = r_factor_row((1, 2, 3), (3, 2, 1), 0, 1)
        expect = {
            MetricField.R_PENDRY: 2.0,
            MetricField.R_2: 0.0,
            MetricField.MAX_1: 2.0,
            MetricField.MAX_2: 2.0,
            MetricField.AVG_INTENSITY: 2.0,
            MetricField.OVERLAP: 1,
            MetricField.RATIO: 1.0,
            }
        assert row.shape == (N_FIELDS,)
        for field, value in expect.items():
            assert row[field] == pytest.approx(value)

    def test_gap_reduces_overlap(self):
        """Check that an undefined point removes three points."""
        with_gap = _CURVE.copy()
        with_gap[100] = NAN
        row = r_factor_row(_CURVE, with_gap, 0, _V0I_OVER_STEP)
        assert row[MetricField.OVERLAP] == len(_CURVE) - 5
        assert row[MetricField.R_PENDRY] == pytest.approx(0, abs=1e-12)

    def test_different_curves(self):
        """Check that different curves give a finite, positive R."""
        other = peaked_curve(make_energies(), shift=3.0)
        row = r_factor_row(_CURVE, other, 0, _V0I_OVER_STEP)
        assert 0 < row[MetricField.R_PENDRY] < 2
        assert row[MetricField.R_2] > 0

    _no_overlap = {
        'all nan': (np.full(10, NAN), np.ones(10), 0),
        'too short': ((1.0, 2.0), (1.0, 2.0), 0),
        'shifted away': (np.ones(10), np.ones(10), 20),
        'alternating gaps': ((1, NAN, 1, NAN, 1, NAN, 1), np.ones(7), 0),
        }

    @parametrize('data_1,data_2,shift', _no_overlap.values(),
                 ids=_no_overlap)
    def test_no_overlap(self, data_1, data_2, shift):
        """Check undefined results when no point can be compared."""
        row = r_factor_row(data_1, data_2, shift, _V0I_OVER_STEP)
        assert row[MetricField.OVERLAP] == 0
        others = [f for f in MetricField if f is not MetricField.OVERLAP]
        assert np.isnan(row[others]).all()


class TestPendryY:
    """Tests for the pendry_y and y_curve functions."""

    _values = {
        'flat': ((1, 1, 1), 1, 0.0),
        'rising': ((1, 2, 3), 1, 0.8),
        'falling': ((3, 2, 1), 1, -0.8),
        'no damping': ((1, 2, 3), 0, 1.0),
        }

    @parametrize('intensities,v0i_over_step,expect', _values.values(),
                 ids=_values)
    def test_pendry_y(self, intensities, v0i_over_step, expect):
        """Check the value of the Y function at a point."""
        assert pendry_y(*intensities, v0i_over_step) == pytest.approx(expect)

    def test_y_curve(self):
        """Check the scaled Y function of a whole curve."""
        y_func = y_curve(_CURVE, _V0I_OVER_STEP)
        assert y_func.shape == _CURVE.shape
        assert np.isnan(y_func[[0, -1]]).all()
        assert np.nanmax(np.abs(y_func)) == pytest.approx(0.99)

    def test_y_curve_gap(self):
        """Check that Y is undefined next to undefined intensities."""
        with_gap = _CURVE.copy()
        with_gap[50] = NAN
        y_func = y_curve(with_gap, _V0I_OVER_STEP)
        assert np.isnan(y_func[49:52]).all()
        assert not np.isnan(y_func[48])

    _undefined = {
        'short': (1.0, 2.0),
        'all nan': (NAN,) * 5,
        }

    @parametrize(data=_undefined.values(), ids=_undefined)
    def test_y_curve_undefined(self, data):
        """Check a curve without any Y value."""
        assert np.isnan(y_curve(data, _V0I_OVER_STEP)).all()

    def test_y_curve_flat(self):
        """Check that a constant curve has a vanishing Y function."""
        y_func = y_curve(np.ones(5), _V0I_OVER_STEP)
        assert y_func[1:-1] == pytest.approx(0)


_offsets = {
    'positive': ((1.0, 2.0), 0.0),
    'negative': ((-3.0, 2.0, NAN), 3.0),
    'all nan': ((NAN, NAN), 0.0),
    'empty': ((), 0.0),
    }


@parametrize('curve,expect', _offsets.values(), ids=_offsets)
def test_nonnegative_offset(curve, expect):
    """Check the offset that removes negative intensities."""
    assert nonnegative_offset(np.array(curve, dtype=float)) == expect


class TestOverlapRanges:
    """Tests for the overlap_ranges function."""

    data_1 = np.array((1, 1, 1, NAN, 1, 1, 1, 1, NAN, 1))

    def test_ranges(self):
        """Check regions where both curves are defined."""
        ranges, n_overlap = overlap_ranges(self.data_1, np.ones(10))
        assert ranges == [(0, 3), (4, 8)]
        assert n_overlap == 7

    def test_different_length(self):
        """Check that only the common length is considered."""
        ranges, n_overlap = overlap_ranges(self.data_1, np.ones(6))
        assert ranges == [(0, 3)]
        assert n_overlap == 3

    def test_min_points(self):
        """Check that short regions can be accepted."""
        _, n_overlap = overlap_ranges(self.data_1, np.ones(10), min_points=1)
        assert n_overlap == 8
