"""
Habit domain records as seen by the scoring engine.

These are plain dataclasses: the habit definition is parsed and validated
elsewhere and handed to the engine fully formed.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional

from vice.models.condition import Condition


class FieldType(str, enum.Enum):
    unsigned_int = "unsigned_int"
    unsigned_decimal = "unsigned_decimal"
    decimal = "decimal"
    duration = "duration"
    time = "time"
    boolean = "boolean"
    text = "text"
    checklist = "checklist"


NUMERIC_FIELD_TYPES = frozenset({
    FieldType.unsigned_int,
    FieldType.unsigned_decimal,
    FieldType.decimal,
    FieldType.duration,
})


class HabitType(str, enum.Enum):
    simple = "simple"
    elastic = "elastic"
    informational = "informational"
    checklist = "checklist"


class ScoringType(str, enum.Enum):
    automatic = "automatic"
    manual = "manual"


class AchievementLevel(str, enum.Enum):
    """Ordered outcome of scoring: none < mini < midi < maxi."""
    none = "none"
    mini = "mini"
    midi = "midi"
    maxi = "maxi"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)

    def __lt__(self, other):
        if not isinstance(other, AchievementLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        if not isinstance(other, AchievementLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        if not isinstance(other, AchievementLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        if not isinstance(other, AchievementLevel):
            return NotImplemented
        return self.rank >= other.rank


_LEVEL_ORDER = (
    AchievementLevel.none,
    AchievementLevel.mini,
    AchievementLevel.midi,
    AchievementLevel.maxi,
)


@dataclass
class FieldSpec:
    type: FieldType
    unit: Optional[str] = None


@dataclass
class Criteria:
    # None means the definition carried no usable condition.
    condition: Optional[Condition]
    description: str = ""


@dataclass
class Habit:
    id: str
    habit_type: HabitType
    field_type: FieldSpec
    scoring_type: ScoringType = ScoringType.automatic
    title: str = ""
    criteria: Optional[Criteria] = None          # simple habits
    mini_criteria: Optional[Criteria] = None     # elastic habits
    midi_criteria: Optional[Criteria] = None
    maxi_criteria: Optional[Criteria] = None

    @property
    def is_simple(self) -> bool:
        return self.habit_type == HabitType.simple

    @property
    def is_elastic(self) -> bool:
        return self.habit_type == HabitType.elastic

    @property
    def requires_automatic_scoring(self) -> bool:
        return self.scoring_type == ScoringType.automatic


@dataclass
class ScoreResult:
    achievement_level: AchievementLevel = AchievementLevel.none
    met_mini: bool = False
    met_midi: bool = False
    met_maxi: bool = False
