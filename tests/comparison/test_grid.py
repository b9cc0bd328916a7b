"""Tests for module grid of leedcompare.comparison."""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

import numpy as np
import pytest
from pytest_cases import fixture
from pytest_cases import parametrize

from leedcompare.classes.dataset import IVDataset
from leedcompare.comparison import grid
from leedcompare.comparison.grid import align_grids
from leedcompare.errors import IrregularGridError

from ..helpers import make_dataset
from ..helpers import make_energies


def _dataset_with_step(step, title='dataset'):
    """Return a synthetic data set with a given energy step."""
    return make_dataset(title, energies=make_energies(step=step))


@fixture(name='count_interpolations')
def fixture_count_interpolations(monkeypatch):
    """Count the data sets that are interpolated."""
    interpolated = []
    original = grid.interpolate_dataset

    def _interpolate(dataset, new_step):
        interpolated.append(dataset.title)
        return original(dataset, new_step)

    monkeypatch.setattr(grid, 'interpolate_dataset', _interpolate)
    return interpolated


class TestAlignGrids:
    """Tests for the align_grids function."""

    def test_finer_kept(self, count_interpolations):
        """Check that only the coarser data set is interpolated."""
        coarse = _dataset_with_step(1.0, 'coarse')
        fine = _dataset_with_step(0.3, 'fine')
        aligned_coarse, aligned_fine = align_grids(coarse, fine)
        assert aligned_fine is fine
        assert aligned_coarse.grid.step == pytest.approx(0.3)
        assert aligned_coarse.energies[0] == pytest.approx(50.1)
        assert count_interpolations == ['coarse']

    def test_max_step(self, count_interpolations):
        """Check that no step is larger than the maximum allowed."""
        aligned = align_grids(_dataset_with_step(1.0, 'first'),
                              _dataset_with_step(1.0, 'second'))
        for dataset in aligned:
            assert dataset.grid.step == pytest.approx(0.5)
        assert count_interpolations == ['first', 'second']

    def test_nothing_to_do(self, count_interpolations):
        """Check that data sets with the right step are returned as is."""
        datasets = _dataset_with_step(0.5), _dataset_with_step(0.5)
        aligned = align_grids(*datasets)
        assert all(a is d for a, d in zip(aligned, datasets))
        assert not count_interpolations

    def test_custom_max_step(self):
        """Check alignment to a user-given maximum step."""
        aligned = align_grids(_dataset_with_step(0.5),
                              _dataset_with_step(0.5),
                              max_step=0.25)
        for dataset in aligned:
            assert dataset.grid.step == pytest.approx(0.25)

    def test_beams_kept(self):
        """Check that beams are not altered by interpolation."""
        dataset = make_dataset(energies=make_energies(step=1.0),
                               beam_ids=(3, 1))
        aligned, _ = align_grids(dataset, dataset)
        assert aligned.beam_ids == (3, 1)
        assert not np.isnan(aligned.intensities).any()

    @parametrize(max_step=(0, -0.5))
    def test_invalid_max_step(self, max_step):
        """Check complaints for a non-positive maximum step."""
        dataset = _dataset_with_step(0.5)
        with pytest.raises(ValueError):
            align_grids(dataset, dataset, max_step=max_step)

    def test_irregular(self):
        """Check complaints for energies that are not evenly spaced."""
        irregular = IVDataset('irregular', (1, 2, 10), np.ones(3), (0,))
        with pytest.raises(IrregularGridError):
            align_grids(irregular, _dataset_with_step(0.5))
