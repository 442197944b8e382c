"""
Shared pytest fixtures.

The scoring service has no database, so the client talks to the app directly.
"""
import pytest
from fastapi.testclient import TestClient

from vice.main import app
from vice.models import (
    Criteria,
    FieldSpec,
    FieldType,
    GreaterThanOrEqual,
    Habit,
    HabitType,
    ScoringType,
)


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def steps_habit() -> Habit:
    """Elastic step counter: 5000 / 10000 / 15000."""
    return Habit(
        id="daily_steps",
        title="Daily steps",
        habit_type=HabitType.elastic,
        scoring_type=ScoringType.automatic,
        field_type=FieldSpec(type=FieldType.unsigned_int, unit="steps"),
        mini_criteria=Criteria(GreaterThanOrEqual(5000), "5k steps"),
        midi_criteria=Criteria(GreaterThanOrEqual(10000), "10k steps"),
        maxi_criteria=Criteria(GreaterThanOrEqual(15000), "15k steps"),
    )


@pytest.fixture()
def steps_payload() -> dict:
    """Wire form of `steps_habit`."""
    return {
        "id": "daily_steps",
        "title": "Daily steps",
        "habit_type": "elastic",
        "scoring_type": "automatic",
        "field_type": {"type": "unsigned_int", "unit": "steps"},
        "mini_criteria": {"condition": {"greater_than_or_equal": 5000}},
        "midi_criteria": {"condition": {"greater_than_or_equal": 10000}},
        "maxi_criteria": {"condition": {"greater_than_or_equal": 15000}},
    }
