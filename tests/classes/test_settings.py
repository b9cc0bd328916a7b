"""Tests for module settings of leedcompare.classes."""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

import numpy as np
import pytest
from pytest_cases import parametrize

from leedcompare.classes.metric import RFactorType
from leedcompare.classes.metric import RFactorTypeError
from leedcompare.classes.settings import ComparisonSettings
from leedcompare.constants import DEFAULT_MAX_STEP


class TestComparisonSettings:
    """Tests for the ComparisonSettings class."""

    def test_defaults(self):
        """Check default values of settings."""
        settings = ComparisonSettings(5)
        assert settings.r_factor_type == RFactorType.PENDRY
        assert isinstance(settings.r_factor_type, RFactorType)
        assert settings.allow_shift
        assert settings.average_equivalent
        assert settings.max_step == DEFAULT_MAX_STEP

    def test_r_factor_type_converted(self):
        """Check that the R-factor type is made an RFactorType."""
        settings = ComparisonSettings(np.float64(4.0), r_factor_type='R2')
        assert settings.r_factor_type.name == 'r2'

    _type_errors = {
        'v0i str': {'v0i': '5'},
        'allow_shift int': {'v0i': 5, 'allow_shift': 1},
        'average_equivalent none': {'v0i': 5, 'average_equivalent': None},
        'max_step str': {'v0i': 5, 'max_step': '1'},
        }

    @parametrize(kwargs=_type_errors.values(), ids=_type_errors)
    def test_invalid_type(self, kwargs):
        """Check complaints for values of the wrong type."""
        with pytest.raises(TypeError):
            ComparisonSettings(**kwargs)

    _value_errors = {
        'v0i zero': {'v0i': 0},
        'v0i negative': {'v0i': -4.0},
        'v0i nan': {'v0i': float('nan')},
        'max_step zero': {'v0i': 5, 'max_step': 0},
        'r_factor_type': {'v0i': 5, 'r_factor_type': 'unknown'},
        }

    @parametrize(kwargs=_value_errors.values(), ids=_value_errors)
    def test_invalid_value(self, kwargs):
        """Check complaints for out-of-range values."""
        with pytest.raises(ValueError):
            ComparisonSettings(**kwargs)

    def test_unknown_r_factor_type(self):
        """Check the exception for an unknown R factor."""
        with pytest.raises(RFactorTypeError):
            ComparisonSettings(5, r_factor_type=7)
