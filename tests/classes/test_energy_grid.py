"""Tests for module energy_grid of leedcompare.classes."""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

import numpy as np
import pytest
from pytest_cases import parametrize

from leedcompare.classes.energy_grid import EnergyGrid
from leedcompare.errors import IrregularGridError


class TestFromEnergies:
    """Tests for the EnergyGrid.from_energies class method."""

    _valid = {
        'regular': (np.arange(10, 20, 0.5), (10, 0.5, 20)),
        'two energies': ((3.0, 4.5), (3.0, 1.5, 2)),
        'jitter': ((0.0, 1.1, 2.0, 3.0), (0.0, 1.0, 4)),
        }

    @parametrize('energies,expect', _valid.values(), ids=_valid)
    def test_valid(self, energies, expect):
        """Check attributes of a grid from acceptable energies."""
        grid = EnergyGrid.from_energies(energies)
        first, step, n_energies = expect
        assert grid.first == pytest.approx(first)
        assert grid.step == pytest.approx(step)
        assert grid.n_energies == n_energies

    _invalid = {
        'empty': (),
        'one energy': (5.0,),
        'descending': (3.0, 2.0, 1.0),
        'constant': (1.0, 1.0, 1.0),
        'irregular': (0.0, 1.0, 2.0, 5.0),
        'nan': (0.0, np.nan, 2.0),
        }

    @parametrize(energies=_invalid.values(), ids=_invalid)
    def test_invalid(self, energies):
        """Check complaints for energies that are not a linear grid."""
        with pytest.raises(IrregularGridError):
            EnergyGrid.from_energies(energies)

    def test_is_value_error(self):
        """Check that an irregular grid can be caught as ValueError."""
        with pytest.raises(ValueError):
            EnergyGrid.from_energies((1.0,))


class TestEnergyGrid:
    """Tests for attributes and methods of EnergyGrid."""

    def test_energies(self):
        """Check the energies of a grid."""
        grid = EnergyGrid(10.0, 0.5, 5)
        assert grid.energies == pytest.approx((10, 10.5, 11, 11.5, 12))
        assert grid.last == pytest.approx(12)

    _invalid = {
        'negative step': (0.0, -1.0, 3),
        'zero step': (0.0, 0.0, 3),
        'nan step': (0.0, np.nan, 3),
        'inf first': (np.inf, 1.0, 3),
        'no energies': (0.0, 1.0, 0),
        }

    @parametrize(args=_invalid.values(), ids=_invalid)
    def test_invalid(self, args):
        """Check complaints for invalid initialization values."""
        with pytest.raises(IrregularGridError):
            EnergyGrid(*args)

    def test_frozen(self):
        """Check that attributes cannot be modified."""
        grid = EnergyGrid(10.0, 0.5, 5)
        with pytest.raises(AttributeError):
            grid.step = 1.0

    _compatible = {
        'same': (0.5, True),
        'within tolerance': (0.5 + 1e-8, True),
        'different': (0.3, False),
        }

    @parametrize('step,expect', _compatible.values(), ids=_compatible)
    def test_is_compatible(self, step, expect):
        """Check comparison of grid steps."""
        grid = EnergyGrid(10.0, 0.5, 5)
        other = EnergyGrid(33.0, step, 12)
        assert grid.is_compatible(other, 1e-6) is expect


class TestResampled:
    """Tests for the EnergyGrid.resampled method."""

    def test_finer(self):
        """Check the range of a finer grid."""
        grid = EnergyGrid(10.3, 1.0, 11)
        resampled = grid.resampled(0.5)
        assert resampled.first == pytest.approx(10.5)
        assert resampled.last == pytest.approx(20.0)
        assert resampled.n_energies == 20
        assert resampled.step == 0.5

    def test_exact_multiples_kept(self):
        """Check that first and last energies are kept if multiples."""
        grid = EnergyGrid(0.0, 1.0, 31)
        resampled = grid.resampled(0.3)
        assert resampled.first == 0
        assert resampled.last == pytest.approx(30.0)
        assert resampled.n_energies == 101

    def test_within_original_range(self):
        """Check that the new grid does not exceed the old one."""
        grid = EnergyGrid(12.7, 0.9, 40)
        resampled = grid.resampled(0.4)
        assert resampled.first >= grid.first
        assert resampled.last <= grid.last + 1e-9

    _invalid = {
        'negative step': (EnergyGrid(0.0, 1.0, 10), -0.5),
        'zero step': (EnergyGrid(0.0, 1.0, 10), 0),
        'no multiple': (EnergyGrid(10.1, 0.1, 2), 1.0),
        }

    @parametrize('grid,step', _invalid.values(), ids=_invalid)
    def test_invalid(self, grid, step):
        """Check complaints for impossible resampling."""
        with pytest.raises(IrregularGridError):
            grid.resampled(step)
