"""Module dataclass_utils of leedcompare.lib.

Collects useful functions that add up on top of the dataclasses
stdlib module.
"""

__authors__ = ('ViPErLEED developers',)
__copyright__ = 'Copyright (c) 2019-2026 ViPErLEED developers'
__created__ = '2026-10-18'
__license__ = 'GPLv3+'

from dataclasses import FrozenInstanceError
from dataclasses import dataclass
from dataclasses import fields as data_fields
from dataclasses import is_dataclass
import functools
import sys
import typing

if sys.version_info < (3, 12):  # No frozen_default keyword in py3.11
    from typing_extensions import dataclass_transform
else:
    from typing import dataclass_transform


frozen = dataclass_transform(frozen_default=True)(
    functools.partial(dataclass, frozen=True)
    )


def check_types(self, init_only=False):
    """Raise TypeError if fields don't match their type hints.

    Parameters
    ----------
    init_only : bool, optional
        Whether only the fields used for initialization should be
        checked. Default is False, corresponding to checking all
        fields.

    Notes
    -----
    Only the type of the fields is checked: The types of the items of
    collection fields are not checked. Fields annotated with a string
    or with typing.Any are never checked.

    Raises
    ------
    TypeError
        If any of the field types do not fit their type hints.
    """
    for field in data_fields(self):
        if init_only and not field.init:
            continue
        attr = field.name
        value = getattr(self, attr)
        actual_types = tuple(_find_type_origin(field.type))
        if actual_types and not isinstance(value, actual_types):
            raise TypeError(
                f'Expected type {field.type} for argument {attr!r} '
                f'but received type {type(value).__name__!r} instead'
                )


_SpecialType = tuple({  # These types are not pubic API
    type(typing.Optional),
    type(typing.Any),   # In Py3.12 they are different
    })


def _find_type_origin(type_hint):
    """Yield nested type origins from a `type_hint`."""
    # Adapted from https://stackoverflow.com/questions/50563546
    if isinstance(type_hint, (str, _SpecialType)) or type_hint is typing.Any:
        # Forward references and special types without parameters
        return

    actual_type = typing.get_origin(type_hint) or type_hint
    if isinstance(actual_type, _SpecialType):
        # Case of typing.Union[...] or typing.ClassVar[...] or ...
        for arg in typing.get_args(type_hint):
            yield from _find_type_origin(arg)
    else:
        yield actual_type


def set_frozen_attr(self, attr_name, attr_value):
    """Set `attr_name` to `attr_value`, even if `self` is frozen.

    This makes a frozen dataclass not actually frozen. Use it only
    inside the implementation of a dataclass, typically while
    normalizing initialization values in __post_init__.

    Parameters
    ----------
    self : dataclass
        The dataclass whose attribute should be set.
    attr_name : str
        The name of the attribute to set.
    attr_value : object
        The value of the attribute.

    Raises
    ------
    TypeError
        If `self` is not a dataclass.
    """
    if not is_dataclass(self):
        raise TypeError('Cannot use set_frozen_attr on non-dataclass objects')
    try:
        setattr(self, attr_name, attr_value)
    except FrozenInstanceError:
        object.__setattr__(self, attr_name, attr_value)
