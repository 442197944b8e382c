"""
Habit definition wire schema.

Mirrors the keys of the habit definition file (habit_type, field_type,
criteria, mini_criteria, ...) and converts into the engine's domain
records via `HabitIn.to_model()`.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator

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
from vice.models.habit import Criteria, FieldSpec, FieldType, Habit, HabitType, ScoringType

_FORM_KEYS = (
    "greater_than",
    "greater_than_or_equal",
    "less_than",
    "less_than_or_equal",
    "range",
    "before",
    "after",
    "equals",
)


class RangeIn(BaseModel):
    min: float
    max: float
    min_inclusive: Optional[bool] = Field(default=None, description="Defaults to true.")
    max_inclusive: Optional[bool] = Field(default=None, description="Defaults to true.")


class ConditionIn(BaseModel):
    """One comparison form. At most one key may be set."""
    greater_than: Optional[float] = None
    greater_than_or_equal: Optional[float] = None
    less_than: Optional[float] = None
    less_than_or_equal: Optional[float] = None
    range: Optional[RangeIn] = None
    before: Optional[str] = Field(default=None, examples=["07:00"])
    after: Optional[str] = Field(default=None, examples=["21:30"])
    equals: Optional[bool] = None

    @model_validator(mode="after")
    def check_single_form(self) -> "ConditionIn":
        populated = [k for k in _FORM_KEYS if getattr(self, k) not in (None, "")]
        if len(populated) > 1:
            raise ValueError(
                f"condition must set exactly one comparison, got: {', '.join(populated)}"
            )
        return self

    def to_condition(self) -> Optional[Condition]:
        if self.greater_than is not None:
            return GreaterThan(self.greater_than)
        if self.greater_than_or_equal is not None:
            return GreaterThanOrEqual(self.greater_than_or_equal)
        if self.less_than is not None:
            return LessThan(self.less_than)
        if self.less_than_or_equal is not None:
            return LessThanOrEqual(self.less_than_or_equal)
        if self.range is not None:
            return Range(
                min=self.range.min,
                max=self.range.max,
                min_inclusive=True if self.range.min_inclusive is None else self.range.min_inclusive,
                max_inclusive=True if self.range.max_inclusive is None else self.range.max_inclusive,
            )
        if self.before:
            return Before(self.before)
        if self.after:
            return After(self.after)
        if self.equals is not None:
            return Equals(self.equals)
        return None


class CriteriaIn(BaseModel):
    description: str = ""
    condition: Optional[ConditionIn] = None

    def to_model(self) -> Criteria:
        return Criteria(
            description=self.description,
            condition=self.condition.to_condition() if self.condition else None,
        )


class FieldTypeIn(BaseModel):
    type: FieldType
    unit: Optional[str] = Field(default=None, examples=["steps", "km"])


def _criteria(c: Optional[CriteriaIn]) -> Optional[Criteria]:
    return c.to_model() if c is not None else None


class HabitIn(BaseModel):
    """A validated habit definition as supplied by the caller."""
    id: str = Field(min_length=1, examples=["daily_steps"])
    title: str = ""
    habit_type: HabitType
    scoring_type: ScoringType = ScoringType.automatic
    field_type: FieldTypeIn
    criteria: Optional[CriteriaIn] = None
    mini_criteria: Optional[CriteriaIn] = None
    midi_criteria: Optional[CriteriaIn] = None
    maxi_criteria: Optional[CriteriaIn] = None

    def to_model(self) -> Habit:
        return Habit(
            id=self.id,
            title=self.title,
            habit_type=self.habit_type,
            scoring_type=self.scoring_type,
            field_type=FieldSpec(type=self.field_type.type, unit=self.field_type.unit),
            criteria=_criteria(self.criteria),
            mini_criteria=_criteria(self.mini_criteria),
            midi_criteria=_criteria(self.midi_criteria),
            maxi_criteria=_criteria(self.maxi_criteria),
        )
