"""Module dataset of leedcompare.classes.

Defines the IVDataset class, a container of I(V) curves of several
beams sharing the same energy axis.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

import logging

import numpy as np

from leedcompare.classes.energy_grid import EnergyGrid
from leedcompare.errors import NoValidDataError
from leedcompare.lib.curve_utils import defined_span
from leedcompare.lib.dataclass_utils import frozen
from leedcompare.lib.dataclass_utils import set_frozen_attr

logger = logging.getLogger(__name__)


@frozen(eq=False)
class IVDataset:
    """A set of I(V) curves on a common energy axis.

    Instances are never modified in place. All methods that change
    the beams or the energies return a new IVDataset. The arrays are
    copied upon creation and made read-only.

    Attributes
    ----------
    title : str
        A name for this data set.
    energies : numpy.ndarray
        Shape (n_energies,). The energies of all curves.
    intensities : numpy.ndarray
        Shape (n_energies, n_beams). Column i is the curve of beam
        i. Undefined intensities are NaN.
    beam_ids : tuple of int
        For each column, the index of the beam in a SpotPattern.
    beam_names : tuple of str
        For each column, the label of the beam. If not given,
        labels are created from `beam_ids`.
    """

    title: str
    energies: np.ndarray
    intensities: np.ndarray
    beam_ids: tuple
    beam_names: tuple = ()

    def __post_init__(self):
        """Check and process initialization values."""
        energies = np.array(self.energies, dtype=float)
        intensities = np.array(self.intensities, dtype=float)
        if intensities.ndim == 1:
            intensities = intensities.reshape(-1, 1)
        if energies.ndim != 1 or intensities.ndim != 2:
            raise ValueError('energies must be 1D and intensities 2D')
        if intensities.shape[0] != energies.shape[0]:
            raise ValueError(f'{intensities.shape[0]} intensities for '
                             f'{energies.shape[0]} energies')
        beam_ids = tuple(int(i) for i in self.beam_ids)
        if len(beam_ids) != intensities.shape[1]:
            raise ValueError(f'{len(beam_ids)} beam indices for '
                             f'{intensities.shape[1]} beams')
        beam_names = tuple(self.beam_names) or tuple(str(i) for i in beam_ids)
        if len(beam_names) != len(beam_ids):
            raise ValueError(f'{len(beam_names)} beam names for '
                             f'{len(beam_ids)} beams')
        energies.setflags(write=False)
        intensities.setflags(write=False)
        set_frozen_attr(self, 'energies', energies)
        set_frozen_attr(self, 'intensities', intensities)
        set_frozen_attr(self, 'beam_ids', beam_ids)
        set_frozen_attr(self, 'beam_names', beam_names)

    def __len__(self):
        """Return the number of beams."""
        return len(self.beam_ids)

    @property
    def grid(self):
        """Return the EnergyGrid of this data set. May IrregularGridError."""
        return EnergyGrid.from_energies(self.energies)

    @property
    def n_beams(self):
        """Return the number of beams in this data set."""
        return len(self.beam_ids)

    @property
    def n_energies(self):
        """Return the number of energies in this data set."""
        return len(self.energies)

    @classmethod
    def from_curves(cls, title, energies, curves, beam_names=()):
        """Return an IVDataset from a {beam_id: curve} mapping.

        Parameters
        ----------
        title : str
            The name of the data set.
        energies : Sequence of float
            The common energy axis.
        curves : dict
            Keys are beam indices, values are sequences of intensities,
            one per energy. Use NaN for undefined intensities.
        beam_names : Sequence of str, optional
            Labels of the beams, in the same order as `curves`.

        Returns
        -------
        dataset : IVDataset
        """
        beam_ids = tuple(curves)
        if curves:
            intensities = np.column_stack([np.asarray(c, dtype=float)
                                           for c in curves.values()])
        else:
            intensities = np.empty((len(energies), 0))
        return cls(title, energies, intensities, beam_ids, beam_names)

    def curve(self, beam_id):
        """Return the curve of the first beam with `beam_id`."""
        return self.intensities[:, self.index_of(beam_id)]

    def index_of(self, beam_id):
        """Return the column index of the first beam with `beam_id`."""
        try:
            return self.beam_ids.index(beam_id)
        except ValueError:
            raise KeyError(f'No beam with index {beam_id} '
                           f'in {self.title!r}') from None

    def replaced(self, **changes):
        """Return a copy of this data set with some attributes changed."""
        values = {'title': self.title,
                  'energies': self.energies,
                  'intensities': self.intensities,
                  'beam_ids': self.beam_ids,
                  'beam_names': self.beam_names}
        if 'beam_ids' in changes and 'beam_names' not in changes:
            changes['beam_names'] = ()
        values.update(changes)
        return IVDataset(**values)

    def select(self, columns):
        """Return a new data set with only the beams at `columns`."""
        columns = list(columns)
        return self.replaced(
            intensities=self.intensities[:, columns],
            beam_ids=tuple(self.beam_ids[i] for i in columns),
            beam_names=tuple(self.beam_names[i] for i in columns),
            )

    def sorted_by_id(self):
        """Return a new data set with beams in ascending-index order."""
        order = np.argsort(self.beam_ids, kind='stable')
        if np.all(order == np.arange(self.n_beams)):
            return self
        return self.select(order)

    def trimmed(self):
        """Return a copy without empty beams and undefined energies.

        Beams that contain no defined intensity are removed. The
        energy range is reduced to the one in which at least one
        of the remaining beams has data.

        Returns
        -------
        trimmed : IVDataset
            The trimmed data set. This is self if there is nothing
            to trim.

        Raises
        ------
        NoValidDataError
            If there is no defined intensity at all.
        """
        has_data = ~np.all(np.isnan(self.intensities), axis=0)
        if not has_data.any():
            raise NoValidDataError(f'No valid data in {self.title!r}')
        start, stop = defined_span(
            np.where(np.isnan(self.intensities).all(axis=1), np.nan, 0.)
            )
        if has_data.all() and (start, stop) == (0, self.n_energies):
            return self
        n_removed = self.n_beams - np.count_nonzero(has_data)
        if n_removed:
            logger.debug(f'{self.title}: removing {n_removed} '
                         'beam(s) without data')
        dataset = self.select(np.flatnonzero(has_data))
        return dataset.replaced(energies=dataset.energies[start:stop],
                                intensities=dataset.intensities[start:stop])

    def with_beam_ids(self, beam_ids):
        """Return a copy with new beam indices, keeping the names."""
        return self.replaced(beam_ids=beam_ids, beam_names=self.beam_names)

    def with_canonical_names(self, spot_pattern):
        """Return a copy with beam names taken from `spot_pattern`."""
        names = tuple(spot_pattern.canonical_name(i) for i in self.beam_ids)
        return self.replaced(beam_names=names)
