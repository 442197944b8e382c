"""
Scoring engine — habit + recorded value -> achievement level.

Simple habits
-------------
  One criterion. Met -> mini, otherwise none.

Elastic habits
--------------
  Up to three criteria (mini, midi, maxi), each optional and evaluated
  independently in that order. Every tier sets its own met_* flag; the
  achievement level is the last tier that was met. Thresholds are not
  checked for monotonicity, so met_maxi=True with met_mini=False is a
  legal outcome and reports "maxi".

Pure computation: no I/O, no logging, no state between calls.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from vice.core.errors import (
    HabitRequiredError,
    ManualScoringError,
    MissingCriteriaError,
    ScoringError,
    UnscoreableHabitError,
    ValueRequiredError,
    WrongHabitTypeError,
)
from vice.models.habit import AchievementLevel, Habit, HabitType, ScoreResult
from vice.services.evaluator import evaluate_criteria
from vice.services.normalizer import normalize


def _ev(v) -> str:
    return v.value if hasattr(v, "value") else str(v)


def score_simple(habit: Optional[Habit], value: Any) -> ScoreResult:
    """Score a simple habit: pass (mini) or fail (none)."""
    if habit is None:
        raise HabitRequiredError()
    if not habit.is_simple:
        raise WrongHabitTypeError(habit.id, expected="simple", actual=_ev(habit.habit_type))
    if not habit.requires_automatic_scoring:
        raise ManualScoringError(habit.id)
    if habit.criteria is None:
        raise MissingCriteriaError(habit.id)

    field_type = habit.field_type.type
    canonical = normalize(value, field_type)

    result = ScoreResult()
    if evaluate_criteria(canonical, habit.criteria, field_type):
        result.achievement_level = AchievementLevel.mini
        result.met_mini = True
    return result


def score_elastic(habit: Optional[Habit], value: Any) -> ScoreResult:
    """Score an elastic habit against its mini/midi/maxi criteria."""
    if habit is None:
        raise HabitRequiredError()
    if not habit.is_elastic:
        raise WrongHabitTypeError(habit.id, expected="elastic", actual=_ev(habit.habit_type))
    if not habit.requires_automatic_scoring:
        raise ManualScoringError(habit.id)
    if value is None:
        raise ValueRequiredError()

    field_type = habit.field_type.type
    canonical = normalize(value, field_type)

    result = ScoreResult()
    if habit.mini_criteria is not None:
        result.met_mini = evaluate_criteria(canonical, habit.mini_criteria, field_type)
        if result.met_mini:
            result.achievement_level = AchievementLevel.mini
    if habit.midi_criteria is not None:
        result.met_midi = evaluate_criteria(canonical, habit.midi_criteria, field_type)
        if result.met_midi:
            result.achievement_level = AchievementLevel.midi
    if habit.maxi_criteria is not None:
        result.met_maxi = evaluate_criteria(canonical, habit.maxi_criteria, field_type)
        if result.met_maxi:
            result.achievement_level = AchievementLevel.maxi
    return result


def score_habit(habit: Optional[Habit], value: Any) -> ScoreResult:
    """Route to score_simple / score_elastic by habit type."""
    if habit is None:
        raise HabitRequiredError()
    if habit.habit_type == HabitType.simple:
        return score_simple(habit, value)
    if habit.habit_type == HabitType.elastic:
        return score_elastic(habit, value)
    raise UnscoreableHabitError(habit.id, _ev(habit.habit_type))


# ---------------------------------------------------------------------------
# Batch
# ---------------------------------------------------------------------------

@dataclass
class EntryScore:
    """Outcome for one value in a batch."""
    index: int
    result: Optional[ScoreResult] = None
    error: Optional[ScoringError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def score_entries(habit: Habit, values: Sequence[Any]) -> list[EntryScore]:
    """
    Score each value independently. A failing value records its error and
    does not stop the rest. Errors about the habit itself are raised since
    they would fail every item alike.
    """
    if habit is None:
        raise HabitRequiredError()

    outcomes: list[EntryScore] = []
    for index, value in enumerate(values):
        try:
            outcomes.append(EntryScore(index=index, result=score_habit(habit, value)))
        except (HabitRequiredError, WrongHabitTypeError, UnscoreableHabitError,
                ManualScoringError, MissingCriteriaError):
            raise
        except ScoringError as exc:
            outcomes.append(EntryScore(index=index, error=exc))
    return outcomes

