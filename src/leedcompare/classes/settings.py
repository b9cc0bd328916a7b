"""Module settings of leedcompare.classes.

Defines the ComparisonSettings class, a container for the parameters
that control the comparison of two sets of I(V) curves.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

from numbers import Real

from leedcompare.classes.metric import RFactorType
from leedcompare.constants import DEFAULT_MAX_STEP
from leedcompare.lib.dataclass_utils import check_types
from leedcompare.lib.dataclass_utils import frozen
from leedcompare.lib.dataclass_utils import set_frozen_attr


@frozen
class ComparisonSettings:
    """Parameters for comparing two sets of I(V) curves.

    Attributes
    ----------
    v0i : Real
        The imaginary part of the inner potential (eV). Positive.
    r_factor_type : RFactorType
        Which R factor should be minimized. Also accepts the values
        understood by RFactorType. Default is Pendry's R factor.
    allow_shift : bool
        Whether the energy shift between the data sets should be
        optimized. Default is True.
    average_equivalent : bool
        Whether symmetry-equivalent beams should be averaged before
        comparing. Default is True.
    max_step : Real
        The largest energy step used for comparing. Default is
        DEFAULT_MAX_STEP.
    """

    v0i: Real
    r_factor_type: RFactorType = RFactorType.PENDRY
    allow_shift: bool = True
    average_equivalent: bool = True
    max_step: Real = DEFAULT_MAX_STEP

    def __post_init__(self):
        """Check and convert initialization values."""
        set_frozen_attr(self, 'r_factor_type',
                        RFactorType(self.r_factor_type))
        check_types(self)
        if not self.v0i > 0:
            raise ValueError(f'v0i must be positive. Found {self.v0i}')
        if not self.max_step > 0:
            raise ValueError('max_step must be positive. '
                             f'Found {self.max_step}')
