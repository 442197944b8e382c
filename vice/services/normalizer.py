"""
Value normalizer — raw recorded value to canonical comparable form.

Every field type collapses into one of three shapes:

  unsigned_int / unsigned_decimal / decimal  -> float
  duration                                   -> float (minutes)
  time                                       -> float (minutes since midnight)
  boolean                                    -> bool
  text                                       -> str

This is the only place where the loosely-typed input is interpreted.
"""
from __future__ import annotations

import math
from datetime import datetime, time
from decimal import Decimal
from typing import Any, Union

from vice.core.errors import (
    DurationParseError,
    TimeParseError,
    UnsupportedFieldTypeError,
    ValueConversionError,
    ValueRequiredError,
)
from vice.models.habit import FieldType
from vice.services.parsers import parse_decimal, parse_duration_minutes, parse_time_minutes

CanonicalValue = Union[float, bool, str]

_TRUE_TOKENS = frozenset({"1", "t", "T", "true", "TRUE", "True"})
_FALSE_TOKENS = frozenset({"0", "f", "F", "false", "FALSE", "False"})


def _ft_name(field_type: Any) -> str:
    return field_type.value if hasattr(field_type, "value") else str(field_type)


def _type_name(value: Any) -> str:
    return type(value).__name__


def _native_number(value: Any, field_type: str) -> float:
    """int / float / Decimal to a finite float."""
    try:
        number = float(value)
    except (OverflowError, ValueError):
        number = math.nan
    if not math.isfinite(number):
        raise ValueConversionError(
            f"invalid {field_type} value: {_type_name(value)} is out of range or not finite",
            field_type=field_type, raw=value,
        )
    return number


def to_float(value: Any, field_type: FieldType) -> float:
    # bool is an int subclass but has no numeric meaning here
    if isinstance(value, bool):
        raise ValueConversionError(
            f"cannot convert {_type_name(value)} to number",
            field_type=_ft_name(field_type), raw=value,
        )
    if isinstance(value, (int, float, Decimal)):
        return _native_number(value, _ft_name(field_type))
    if isinstance(value, str):
        number = parse_decimal(value.strip())
        if number is None:
            raise ValueConversionError(
                f"invalid {_ft_name(field_type)} value: {value!r} is not a number",
                field_type=_ft_name(field_type), raw=value,
            )
        return number
    raise ValueConversionError(
        f"cannot convert {_type_name(value)} to number",
        field_type=_ft_name(field_type), raw=value,
    )


def to_duration_minutes(value: Any) -> float:
    if isinstance(value, str):
        try:
            return parse_duration_minutes(value)
        except DurationParseError as exc:
            raise ValueConversionError(
                f"invalid duration value: {exc.message}",
                field_type=FieldType.duration.value, raw=value,
            ) from exc
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return _native_number(value, FieldType.duration.value)
    raise ValueConversionError(
        f"cannot convert {_type_name(value)} to duration in minutes",
        field_type=FieldType.duration.value, raw=value,
    )


def to_time_minutes(value: Any) -> float:
    if isinstance(value, str):
        try:
            return parse_time_minutes(value)
        except TimeParseError as exc:
            raise ValueConversionError(
                f"invalid time value: {exc.message}",
                field_type=FieldType.time.value, raw=value,
            ) from exc
    if isinstance(value, (datetime, time)):
        return float(value.hour * 60 + value.minute)
    raise ValueConversionError(
        f"cannot convert {_type_name(value)} to time in minutes",
        field_type=FieldType.time.value, raw=value,
    )


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value in _TRUE_TOKENS:
            return True
        if value in _FALSE_TOKENS:
            return False
        raise ValueConversionError(
            f"invalid boolean value: {value!r}",
            field_type=FieldType.boolean.value, raw=value,
        )
    raise ValueConversionError(
        f"cannot convert {_type_name(value)} to boolean",
        field_type=FieldType.boolean.value, raw=value,
    )


def to_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def normalize(value: Any, field_type: FieldType | str) -> CanonicalValue:
    """
    Convert `value` into the canonical representation for `field_type`.

    Raises ValueRequiredError for None, UnsupportedFieldTypeError for an
    unknown or unscoreable field type, ValueConversionError otherwise.
    """
    if value is None:
        raise ValueRequiredError()

    try:
        ft = FieldType(field_type)
    except ValueError:
        raise UnsupportedFieldTypeError(_ft_name(field_type)) from None

    if ft in (FieldType.unsigned_int, FieldType.unsigned_decimal, FieldType.decimal):
        return to_float(value, ft)
    if ft == FieldType.duration:
        return to_duration_minutes(value)
    if ft == FieldType.time:
        return to_time_minutes(value)
    if ft == FieldType.boolean:
        return to_bool(value)
    if ft == FieldType.text:
        return to_text(value)
    raise UnsupportedFieldTypeError(ft.value)
