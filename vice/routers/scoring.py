"""
Scoring router.

POST /scoring                 — score by habit type
POST /scoring/simple          — simple habit (pass/fail)
POST /scoring/elastic         — elastic habit (mini/midi/maxi)
POST /scoring/batch           — several values for one habit
POST /scoring/parse/duration  — duration text → minutes
POST /scoring/parse/time      — HH:MM → minutes since midnight
"""
from __future__ import annotations

import logging
from typing import Any, Callable

from fastapi import APIRouter, status

from vice.core.config import settings
from vice.core.errors import BatchTooLargeError, EmptyBatchError
from vice.models.habit import Habit, ScoreResult
from vice.schemas.scoring import (
    BatchItemResult,
    BatchScoreRequest,
    BatchScoreResponse,
    ParseRequest,
    ParseResponse,
    ScoreRequest,
    ScoreResponse,
)
from vice.services.parsers import parse_duration_minutes, parse_time_minutes
from vice.services.scoring_engine import (
    score_elastic,
    score_entries,
    score_habit,
    score_simple,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scoring", tags=["scoring"])

_ERROR_RESPONSES = {
    422: {"description": "Validation, precondition, conversion or condition error."},
}


def _to_response(habit: Habit, result: ScoreResult) -> ScoreResponse:
    return ScoreResponse(
        habit_id=habit.id,
        achievement_level=result.achievement_level,
        met_mini=result.met_mini,
        met_midi=result.met_midi,
        met_maxi=result.met_maxi,
    )


def _run(scorer: Callable[[Habit, Any], ScoreResult], payload: ScoreRequest) -> ScoreResponse:
    habit = payload.habit.to_model()
    logger.debug("Scoring habit %s (%s) with value %r", habit.id, scorer.__name__, payload.value)
    result = scorer(habit, payload.value)
    return _to_response(habit, result)


# ---------------------------------------------------------------------------
# Single value
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=ScoreResponse,
    summary="Score a value for a simple or elastic habit",
    responses=_ERROR_RESPONSES,
)
def score(payload: ScoreRequest):
    """Dispatch on `habit.habit_type`; informational and checklist habits are rejected."""
    return _run(score_habit, payload)


@router.post(
    "/simple",
    response_model=ScoreResponse,
    summary="Score a value for a simple habit",
    responses=_ERROR_RESPONSES,
)
def score_simple_endpoint(payload: ScoreRequest):
    """Criteria met → `mini`, otherwise `none`. Midi/maxi flags are always false."""
    return _run(score_simple, payload)


@router.post(
    "/elastic",
    response_model=ScoreResponse,
    summary="Score a value for an elastic habit",
    responses=_ERROR_RESPONSES,
)
def score_elastic_endpoint(payload: ScoreRequest):
    """
    Evaluate each configured tier independently. The level is the highest
    tier whose own criterion is met.
    """
    return _run(score_elastic, payload)


# ---------------------------------------------------------------------------
# Batch
# ---------------------------------------------------------------------------

@router.post(
    "/batch",
    response_model=BatchScoreResponse,
    status_code=status.HTTP_207_MULTI_STATUS,
    summary="Score several values for one habit",
    responses={
        207: {"description": "Multi-status: check each item's `ok` field."},
        422: {"description": "Batch-level error (empty list, too many values, bad habit)."},
    },
)
def score_batch(payload: BatchScoreRequest):
    """
    Each value is scored on its own; a value that cannot be converted or
    evaluated is reported in its item and does not affect the others.
    Errors about the habit itself (wrong type, manual scoring) fail the
    whole request.
    """
    if not payload.values:
        raise EmptyBatchError()
    if len(payload.values) > settings.BATCH_MAX_ITEMS:
        raise BatchTooLargeError(max_items=settings.BATCH_MAX_ITEMS, received=len(payload.values))

    habit = payload.habit.to_model()
    logger.debug("Batch scoring %d values for habit %s", len(payload.values), habit.id)

    items = [
        BatchItemResult(
            index=o.index,
            ok=o.ok,
            result=_to_response(habit, o.result) if o.result is not None else None,
            code=o.error.code if o.error is not None else None,
            error=o.error.message if o.error is not None else None,
        )
        for o in score_entries(habit, payload.values)
    ]
    succeeded = sum(1 for i in items if i.ok)
    return BatchScoreResponse(
        total=len(items),
        succeeded=succeeded,
        failed=len(items) - succeeded,
        items=items,
    )


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

@router.post("/parse/duration", response_model=ParseResponse, summary="Parse a duration")
def parse_duration(payload: ParseRequest):
    """Accepts `90`, `1h30m`, `2h15m30s` or `H:MM:SS`."""
    return ParseResponse(text=payload.text, minutes=parse_duration_minutes(payload.text))


@router.post("/parse/time", response_model=ParseResponse, summary="Parse a clock time")
def parse_time(payload: ParseRequest):
    """Accepts `HH:MM` (24h)."""
    return ParseResponse(text=payload.text, minutes=parse_time_minutes(payload.text))
