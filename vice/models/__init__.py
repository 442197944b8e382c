from .condition import (
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
from .habit import (
    AchievementLevel,
    Criteria,
    FieldSpec,
    FieldType,
    Habit,
    HabitType,
    ScoreResult,
    ScoringType,
)

__all__ = [
    "After",
    "Before",
    "Condition",
    "Equals",
    "GreaterThan",
    "GreaterThanOrEqual",
    "LessThan",
    "LessThanOrEqual",
    "Range",
    "AchievementLevel",
    "Criteria",
    "FieldSpec",
    "FieldType",
    "Habit",
    "HabitType",
    "ScoreResult",
    "ScoringType",
]
