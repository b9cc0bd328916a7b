"""Module metric of leedcompare.classes.

Defines classes that hold the outcome of the comparison of two sets
of I(V) curves: the per-beam R-factor rows, the overall summary, the
integer/superstructure statistics, and the selection of the R factor
that drives the search for the best energy shift.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

from enum import IntEnum
import math

import numpy as np

from leedcompare.errors import LEEDCompareError
from leedcompare.lib.dataclass_utils import frozen


class RFactorTypeError(LEEDCompareError, ValueError):
    """Exception for RFactorType-related errors."""


class MetricField(IntEnum):
    """Columns of the arrays of R-factor results."""

    R_PENDRY = 0
    R_2 = 1
    MAX_1 = 2
    MAX_2 = 3
    AVG_INTENSITY = 4
    OVERLAP = 5
    RATIO = 6


N_FIELDS = len(MetricField)


class RFactorType:
    """Enum-like selector of the R factor to be minimized.

    It accepts both integer codes and a range of string identifiers.

    Canonical mapping:
        1 -> 'pendry'
        2 -> 'r2'

    Attributes
    ----------
    id : int
        Integer code identifying the selected R-factor type.
    name : str
        Canonical string name of the selected R-factor type.
    """

    _ALIASES = {
        'pendry': ['pendry_r', 'rp', 'r_p', 'pendry', 'pend', 'p'],
        'r2': ['r2', 'r_2', 'r squared'],
        }

    _CODE_TO_NAME = {
        1: 'pendry',
        2: 'r2',
        }

    _CODE_TO_FIELD = {
        1: MetricField.R_PENDRY,
        2: MetricField.R_2,
        }

    # Constant integer codes
    PENDRY = 1
    R2 = 2

    _NAME_TO_CODE = None  # filled on first use

    def __init__(self, value):
        """Initialize from an int, a str, or another RFactorType."""
        r_fac_id, name = self._coerce(value)
        self.id = r_fac_id
        self.name = name

    def __eq__(self, other):
        """Compare with int, str, or RFactorType."""
        try:
            r_fac_id, _ = self._coerce(other)
        except (TypeError, ValueError):
            return NotImplemented
        return self.id == r_fac_id

    def __hash__(self):
        """Return a hash value for this RFactorType."""
        return hash(self.id)

    def __int__(self):
        """Return the integer code of this RFactorType."""
        return self.id

    def __repr__(self):
        """Return a representation string of this RFactorType."""
        return f"RFactorType(code={self.id}, name='{self.name}')"

    def __str__(self):
        """Return a string version of this RFactorType."""
        return self.name

    @property
    def field(self):
        """Return the MetricField holding this type of R factor."""
        return self._CODE_TO_FIELD[self.id]

    @classmethod
    def _build_reverse_maps(cls):
        """Build the normalized name->code map including aliases."""
        name_code = {cls._norm_name(name): code
                     for code, name in cls._CODE_TO_NAME.items()}
        for canon, aliases in cls._ALIASES.items():
            code = next(k for k, v in cls._CODE_TO_NAME.items()
                        if v == canon)
            name_code.update((cls._norm_name(a), code) for a in aliases)
        cls._NAME_TO_CODE = name_code

    @classmethod
    def _coerce(cls, value):
        """Parse input into (code, name)."""
        if cls._NAME_TO_CODE is None:
            cls._build_reverse_maps()
        if isinstance(value, cls):
            return value.id, value.name
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        if isinstance(value, bool):
            raise TypeError('Cannot parse R-factor type from bool')
        if isinstance(value, int):
            try:
                return value, cls._CODE_TO_NAME[value]
            except KeyError:
                raise RFactorTypeError(
                    f'Invalid R-factor type code: {value}'
                    ) from None
        if isinstance(value, str):
            try:
                code = cls._NAME_TO_CODE[cls._norm_name(value)]
            except KeyError:
                allowed = ', '.join(cls._CODE_TO_NAME.values())
                raise RFactorTypeError(
                    f'Invalid R-factor type name: {value!r}. '
                    f'Allowed: {allowed}'
                    ) from None
            return code, cls._CODE_TO_NAME[code]
        raise TypeError('Cannot parse R-factor type from '
                        f'{type(value).__name__}: {value!r}')

    @staticmethod
    def _norm_name(input_str):
        """Normalize a name for robust matching."""
        output_str = input_str.strip().casefold()
        return (output_str.replace('²', '2')
                .replace('^', '')
                .replace('_', '')
                .replace('-', '')
                .replace(' ', ''))


@frozen
class MetricRow:
    """The comparison of one pair of curves (or its average).

    Attributes
    ----------
    r_pendry : float
        The Pendry R factor.
    r_2 : float
        The R2 factor, after scaling the second curve to the same
        average intensity as the first one.
    max_1, max_2 : float
        The largest intensity of each curve in the overlap region.
    avg_intensity : float
        Geometric mean of the average intensities of the two curves.
    overlap : float
        The energy range in which both curves are defined.
    ratio : float
        Ratio of the integrated intensities, second over first.
    """

    r_pendry: float
    r_2: float
    max_1: float
    max_2: float
    avg_intensity: float
    overlap: float
    ratio: float

    @classmethod
    def from_array(cls, values, **kwargs):
        """Return an instance from a 1D array ordered as MetricField."""
        values = np.asarray(values, dtype=float)
        return cls(*(float(values[f]) for f in MetricField), **kwargs)

    def r_factor(self, r_factor_type):
        """Return the value of the R factor of `r_factor_type`."""
        field = RFactorType(r_factor_type).field
        return getattr(self, field.name.lower())

    def to_array(self):
        """Return a 1D numpy array of values ordered as MetricField."""
        return np.array([getattr(self, f.name.lower()) for f in MetricField])


@frozen
class SummaryRow(MetricRow):
    """The overall comparison of all pairs of curves.

    Attributes
    ----------
    shift : float
        The energy shift (in eV) between the two data sets at the
        minimum of the R factor. NaN unless the shift was optimized.
    valid : bool
        Whether the two data sets overlap at all. If False, all
        fields but `overlap` are NaN.
    """

    shift: float = math.nan
    valid: bool = True


@frozen
class CategorySummary:
    """Unweighted statistics over integer or superstructure beams."""

    row: MetricRow
    n_beams: int


@frozen(eq=False)
class ComparisonResult:
    """The full outcome of the comparison of two sets of I(V) curves.

    Attributes
    ----------
    beam_ids : tuple of int
        The indices of the common beams.
    beam_names : tuple of str
        The labels of the common beams.
    rows : tuple of MetricRow
        One for each beam.
    summary : SummaryRow
        The overlap-weighted average over all beams.
    integer, superstructure : CategorySummary or None
        Statistics over integer-order and fractional-order beams.
        None unless both kinds of beams are present.
    energy_step : float
        The step of the common energy grid.
    r_factor_type : RFactorType
        The R factor that was minimized.
    """

    beam_ids: tuple
    beam_names: tuple
    rows: tuple
    summary: SummaryRow
    integer: CategorySummary = None
    superstructure: CategorySummary = None
    energy_step: float = math.nan
    r_factor_type: RFactorType = RFactorType.PENDRY

    @property
    def r_factor(self):
        """Return the overall value of the selected R factor."""
        return self.summary.r_factor(self.r_factor_type)

    def as_table(self):
        """Return a list of (label, r_factor, overlap, ratio) tuples.

        Beams that do not overlap at all are skipped. The last
        rows are the overall result, labeled 'OVERALL', and, if
        available, the statistics of integer ('Integer') and
        superstructure ('Superstr.') beams.
        """
        def _entry(label, row):
            return (label, row.r_factor(self.r_factor_type),
                    row.overlap, row.ratio)

        table = [_entry(name, row)
                 for name, row in zip(self.beam_names, self.rows)
                 if row.overlap > 0]
        table.append(_entry('OVERALL', self.summary))
        for label, category in (('Integer', self.integer),
                                ('Superstr.', self.superstructure)):
            if category is not None:
                table.append(_entry(label, category.row))
        return table
