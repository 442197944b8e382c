"""
Scoring request / response schemas.

Single value:  POST /scoring[/simple|/elastic] → ScoreRequest      → ScoreResponse
Batch:         POST /scoring/batch             → BatchScoreRequest → BatchScoreResponse
Parsers:       POST /scoring/parse/{duration,time} → ParseRequest  → ParseResponse
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from vice.models.habit import AchievementLevel
from vice.schemas.habit import HabitIn


class ScoreRequest(BaseModel):
    habit: HabitIn
    value: Any = Field(
        default=None,
        description="Recorded value: number, numeric/duration/time text, boolean or free text.",
        examples=[7500, "1h30m", "06:45", True],
    )


class ScoreResponse(BaseModel):
    habit_id: str
    achievement_level: AchievementLevel
    met_mini: bool
    met_midi: bool
    met_maxi: bool


# ---------------------------------------------------------------------------
# Batch schemas
# ---------------------------------------------------------------------------

class BatchScoreRequest(BaseModel):
    """Several recorded values for one habit, scored independently and in order."""
    habit: HabitIn
    values: list[Any] = Field(description="Recorded values to score.")


class BatchItemResult(BaseModel):
    """Outcome for a single value in a batch request."""
    index: int = Field(description="Zero-based position in the request values list.")
    ok: bool = Field(description="True if the value was scored.")
    result: Optional[ScoreResponse] = Field(
        default=None,
        description="Populated when ok=True.",
    )
    code: Optional[str] = Field(default=None, description="Error code when ok=False.")
    error: Optional[str] = Field(default=None, description="Error message when ok=False.")


class BatchScoreResponse(BaseModel):
    total: int = Field(description="Total values received.")
    succeeded: int = Field(description="Values scored successfully.")
    failed: int = Field(description="Values that failed.")
    items: list[BatchItemResult] = Field(description="Per-value results in input order.")


# ---------------------------------------------------------------------------
# Parser helpers
# ---------------------------------------------------------------------------

class ParseRequest(BaseModel):
    text: str = Field(examples=["1h30m", "07:15"])


class ParseResponse(BaseModel):
    text: str
    minutes: float
