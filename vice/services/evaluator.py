"""
Condition evaluator — does a canonical value satisfy one condition?

Dispatch is by field-type category first, then by condition variant:

  numeric / duration : GT, GTE, LT, LTE, Range
  time               : Before, After, else numeric rules
  boolean            : Equals
  text               : GT, GTE, LT, LTE on len(text), else non-blank check
"""
from __future__ import annotations

from typing import Optional

from vice.core.errors import (
    ConditionEvaluationError,
    MissingConditionError,
    TimeParseError,
    UnsupportedFieldTypeError,
)
from vice.models.condition import (
    After,
    Before,
    Condition,
    Equals,
    GreaterThan,
    GreaterThanOrEqual,
    LessThan,
    LessThanOrEqual,
    Range,
)
from vice.models.habit import Criteria, FieldType, NUMERIC_FIELD_TYPES
from vice.services.normalizer import CanonicalValue
from vice.services.parsers import parse_time_minutes


def _compare(value: float, condition: Condition) -> Optional[bool]:
    """Apply an ordering form; None if `condition` is not one."""
    if isinstance(condition, GreaterThan):
        return value > condition.value
    if isinstance(condition, GreaterThanOrEqual):
        return value >= condition.value
    if isinstance(condition, LessThan):
        return value < condition.value
    if isinstance(condition, LessThanOrEqual):
        return value <= condition.value
    return None


def _in_range(value: float, condition: Range) -> bool:
    if condition.min_inclusive:
        min_met = value >= condition.min
    else:
        min_met = value > condition.min
    if condition.max_inclusive:
        max_met = value <= condition.max
    else:
        max_met = value < condition.max
    return min_met and max_met


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def evaluate_numeric(value: CanonicalValue, condition: Condition) -> bool:
    if not _is_number(value):
        raise ConditionEvaluationError(
            f"expected numeric value, got {type(value).__name__}"
        )
    result = _compare(value, condition)
    if result is not None:
        return result
    if isinstance(condition, Range):
        return _in_range(value, condition)
    raise ConditionEvaluationError("no valid numeric condition found")


def _bound_minutes(label: str, text: str) -> float:
    try:
        return parse_time_minutes(text)
    except TimeParseError as exc:
        raise ConditionEvaluationError(
            f"invalid {label} time: {exc.message}",
            details={"bound": label, "raw": text},
        ) from exc


def evaluate_time(value: CanonicalValue, condition: Condition) -> bool:
    if not _is_number(value):
        raise ConditionEvaluationError(
            f"expected time value as minutes, got {type(value).__name__}"
        )
    if isinstance(condition, Before):
        return value < _bound_minutes("before", condition.time)
    if isinstance(condition, After):
        return value > _bound_minutes("after", condition.time)
    # minutes since midnight compare like any other number
    return evaluate_numeric(value, condition)


def evaluate_boolean(value: CanonicalValue, condition: Condition) -> bool:
    if not isinstance(value, bool):
        raise ConditionEvaluationError(
            f"expected boolean value, got {type(value).__name__}"
        )
    if isinstance(condition, Equals):
        return value == condition.value
    raise ConditionEvaluationError("no valid boolean condition found")


def evaluate_text(value: CanonicalValue, condition: Condition) -> bool:
    if not isinstance(value, str):
        raise ConditionEvaluationError(
            f"expected string value, got {type(value).__name__}"
        )
    result = _compare(float(len(value)), condition)
    if result is not None:
        return result
    return bool(value.strip())


def evaluate(
    value: CanonicalValue,
    condition: Optional[Condition],
    field_type: FieldType,
) -> bool:
    """Evaluate one condition against a value already passed through normalize()."""
    if condition is None:
        raise MissingConditionError()

    if field_type in NUMERIC_FIELD_TYPES:
        return evaluate_numeric(value, condition)
    if field_type == FieldType.time:
        return evaluate_time(value, condition)
    if field_type == FieldType.boolean:
        return evaluate_boolean(value, condition)
    if field_type == FieldType.text:
        return evaluate_text(value, condition)
    raise UnsupportedFieldTypeError(
        field_type.value if hasattr(field_type, "value") else str(field_type),
        purpose="criteria evaluation",
    )


def evaluate_criteria(
    value: CanonicalValue,
    criteria: Optional[Criteria],
    field_type: FieldType,
) -> bool:
    if criteria is None:
        raise MissingConditionError()
    return evaluate(value, criteria.condition, field_type)
