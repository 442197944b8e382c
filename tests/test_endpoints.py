"""
Integration tests for the HTTP layer.
"""
import pytest

from vice.core.config import settings


def _simple_payload(**overrides) -> dict:
    habit = {
        "id": "pushups",
        "habit_type": "simple",
        "scoring_type": "automatic",
        "field_type": {"type": "unsigned_int"},
        "criteria": {"description": "more than 10", "condition": {"greater_than": 10}},
    }
    habit.update(overrides)
    return habit


class TestHealth:
    def test_health(self, client):
        r = client.get("/health")
        assert r.status_code == 200
        assert r.json()["status"] == "ok"


class TestScoreElastic:
    @pytest.mark.parametrize("value, level", [
        (3000, "none"), (5000, "mini"), (10000, "midi"), (20000, "maxi"),
    ])
    def test_levels(self, client, steps_payload, value, level):
        r = client.post("/scoring/elastic", json={"habit": steps_payload, "value": value})
        assert r.status_code == 200
        body = r.json()
        assert body["habit_id"] == "daily_steps"
        assert body["achievement_level"] == level

    def test_flags(self, client, steps_payload):
        r = client.post("/scoring/elastic", json={"habit": steps_payload, "value": "12000"})
        body = r.json()
        assert (body["met_mini"], body["met_midi"], body["met_maxi"]) == (True, True, False)

    def test_null_value(self, client, steps_payload):
        r = client.post("/scoring/elastic", json={"habit": steps_payload, "value": None})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALUE_REQUIRED"
        assert "value cannot be nil" in body["message"]

    def test_simple_habit_rejected(self, client):
        r = client.post("/scoring/elastic", json={"habit": _simple_payload(), "value": 1})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "WRONG_HABIT_TYPE"
        assert "is not an elastic habit" in body["message"]
        assert body["details"]["habit_id"] == "pushups"

    def test_integer_too_large(self, client, steps_payload):
        r = client.post("/scoring/elastic", json={"habit": steps_payload, "value": 10**400})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "INVALID_VALUE"
        assert body["details"]["field_type"] == "unsigned_int"

    def test_time_range(self, client):
        habit = {
            "id": "wake_up",
            "habit_type": "elastic",
            "field_type": {"type": "time"},
            "mini_criteria": {"condition": {"before": "08:00"}},
            "maxi_criteria": {"condition": {"range": {"min": 300, "max": 360}}},
        }
        r = client.post("/scoring/elastic", json={"habit": habit, "value": "05:30"})
        body = r.json()
        assert body["achievement_level"] == "maxi"
        assert body["met_midi"] is False


class TestScoreSimple:
    @pytest.mark.parametrize("value, level", [(5, "none"), (10, "none"), (15, "mini")])
    def test_levels(self, client, value, level):
        r = client.post("/scoring/simple", json={"habit": _simple_payload(), "value": value})
        assert r.status_code == 200
        assert r.json()["achievement_level"] == level

    def test_manual_scoring(self, client):
        r = client.post(
            "/scoring/simple",
            json={"habit": _simple_payload(scoring_type="manual"), "value": 1},
        )
        assert r.status_code == 422
        assert r.json()["code"] == "MANUAL_SCORING"
        assert "does not require automatic scoring" in r.json()["message"]

    def test_missing_criteria(self, client):
        r = client.post("/scoring/simple", json={"habit": _simple_payload(criteria=None), "value": 1})
        assert r.json()["code"] == "MISSING_CRITERIA"

    def test_empty_condition(self, client):
        habit = _simple_payload(criteria={"description": "?", "condition": {}})
        r = client.post("/scoring/simple", json={"habit": habit, "value": 1})
        assert r.status_code == 422
        assert r.json()["code"] == "MISSING_CONDITION"

    def test_bad_value(self, client):
        r = client.post("/scoring/simple", json={"habit": _simple_payload(), "value": "many"})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "INVALID_VALUE"
        assert body["details"]["field_type"] == "unsigned_int"


class TestScoreDispatch:
    def test_simple(self, client):
        r = client.post("/scoring", json={"habit": _simple_payload(), "value": 11})
        assert r.json()["achievement_level"] == "mini"

    def test_elastic(self, client, steps_payload):
        r = client.post("/scoring", json={"habit": steps_payload, "value": 15000})
        assert r.json()["achievement_level"] == "maxi"

    def test_informational(self, client):
        r = client.post(
            "/scoring",
            json={"habit": _simple_payload(habit_type="informational"), "value": 1},
        )
        assert r.status_code == 422
        assert r.json()["code"] == "WRONG_HABIT_TYPE"


class TestSchemaValidation:
    def test_two_forms_rejected(self, client):
        habit = _simple_payload(
            criteria={"condition": {"greater_than": 1, "less_than": 5}},
        )
        r = client.post("/scoring/simple", json={"habit": habit, "value": 3})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert isinstance(body["details"]["errors"], list)

    def test_unknown_field_type(self, client):
        habit = _simple_payload(field_type={"type": "currency"})
        r = client.post("/scoring/simple", json={"habit": habit, "value": 3})
        assert r.status_code == 422
        fields = [e["field"] for e in r.json()["details"]["errors"]]
        assert any("field_type" in f for f in fields)

    def test_missing_habit(self, client):
        r = client.post("/scoring/simple", json={"value": 3})
        assert r.status_code == 422
        assert r.json()["code"] == "VALIDATION_ERROR"


class TestBatch:
    def test_partial_failure(self, client, steps_payload):
        r = client.post(
            "/scoring/batch",
            json={"habit": steps_payload, "values": [3000, "nope", 16000]},
        )
        assert r.status_code == 207
        body = r.json()
        assert body["total"] == 3
        assert body["succeeded"] == 2
        assert body["failed"] == 1
        items = body["items"]
        assert [i["index"] for i in items] == [0, 1, 2]
        assert items[0]["result"]["achievement_level"] == "none"
        assert items[1]["ok"] is False
        assert items[1]["code"] == "INVALID_VALUE"
        assert items[1]["result"] is None
        assert items[2]["result"]["achievement_level"] == "maxi"

    def test_oversized_number_fails_only_its_item(self, client, steps_payload):
        r = client.post("/scoring/batch", json={"habit": steps_payload, "values": [5000, 10**400]})
        assert r.status_code == 207
        items = r.json()["items"]
        assert items[0]["result"]["achievement_level"] == "mini"
        assert items[1]["ok"] is False
        assert items[1]["code"] == "INVALID_VALUE"

    def test_empty_batch(self, client, steps_payload):
        r = client.post("/scoring/batch", json={"habit": steps_payload, "values": []})
        assert r.status_code == 422
        assert r.json()["code"] == "EMPTY_BATCH"

    def test_batch_too_large(self, client, steps_payload):
        values = [1] * (settings.BATCH_MAX_ITEMS + 1)
        r = client.post("/scoring/batch", json={"habit": steps_payload, "values": values})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "BATCH_TOO_LARGE"
        assert body["details"]["received"] == settings.BATCH_MAX_ITEMS + 1

    def test_manual_habit_fails_whole_batch(self, client, steps_payload):
        steps_payload["scoring_type"] = "manual"
        r = client.post("/scoring/batch", json={"habit": steps_payload, "values": [1]})
        assert r.status_code == 422
        assert r.json()["code"] == "MANUAL_SCORING"


class TestParsers:
    def test_duration(self, client):
        r = client.post("/scoring/parse/duration", json={"text": "2h15m30s"})
        assert r.status_code == 200
        assert r.json()["minutes"] == pytest.approx(135.5)

    def test_duration_invalid(self, client):
        r = client.post("/scoring/parse/duration", json={"text": "soon"})
        assert r.status_code == 422
        assert r.json()["code"] == "INVALID_DURATION"

    @pytest.mark.parametrize("text", ["nan", "inf", "1e999"])
    def test_duration_non_finite(self, client, text):
        r = client.post("/scoring/parse/duration", json={"text": text})
        assert r.status_code == 422
        assert r.json()["code"] == "INVALID_DURATION"

    def test_time(self, client):
        r = client.post("/scoring/parse/time", json={"text": "09:00"})
        assert r.json()["minutes"] == 540.0

    def test_time_invalid(self, client):
        r = client.post("/scoring/parse/time", json={"text": "12:30:45"})
        assert r.status_code == 422
        body = r.json()
        assert body["code"] == "INVALID_TIME"
        assert "expected HH:MM format" in body["message"]
