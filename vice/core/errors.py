"""
Custom exception hierarchy for the Vice scoring service.

Rule: every error has a machine-readable `code` string so clients
can branch on it without parsing English messages. Message fragments
("is not an elastic habit", "value cannot be nil", ...) are stable too.
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


def _display(raw: Any) -> str:
    try:
        return str(raw)
    except ValueError:
        # int too large for str() under the interpreter digit limit
        return f"<{type(raw).__name__} too large to display>"


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class ViceException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ScoringError(ViceException):
    """A scoring call failed; no partial result is available."""
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "SCORING_ERROR"


# --- Preconditions ---------------------------------------------------------

class PreconditionError(ScoringError):
    code = "PRECONDITION_FAILED"


class HabitRequiredError(PreconditionError):
    code = "HABIT_REQUIRED"

    def __init__(self):
        super().__init__(message="habit cannot be nil")


class WrongHabitTypeError(PreconditionError):
    code = "WRONG_HABIT_TYPE"

    def __init__(self, habit_id: str, expected: str, actual: str):
        article = "an" if expected == "elastic" else "a"
        super().__init__(
            message=f"habit {habit_id} is not {article} {expected} habit",
            details={"habit_id": habit_id, "expected": expected, "actual": actual},
        )


class UnscoreableHabitError(PreconditionError):
    code = "WRONG_HABIT_TYPE"

    def __init__(self, habit_id: str, habit_type: str):
        super().__init__(
            message=f"habit {habit_id} does not support automatic scoring (type: {habit_type})",
            details={"habit_id": habit_id, "actual": habit_type},
        )


class ManualScoringError(PreconditionError):
    code = "MANUAL_SCORING"

    def __init__(self, habit_id: str):
        super().__init__(
            message=f"habit {habit_id} does not require automatic scoring",
            details={"habit_id": habit_id},
        )


class MissingCriteriaError(PreconditionError):
    code = "MISSING_CRITERIA"

    def __init__(self, habit_id: str):
        super().__init__(
            message=f"habit {habit_id} has no criteria for automatic scoring",
            details={"habit_id": habit_id},
        )


class ValueRequiredError(PreconditionError):
    code = "VALUE_REQUIRED"

    def __init__(self):
        super().__init__(message="value cannot be nil")


# --- Normalization ---------------------------------------------------------

class NormalizationError(ScoringError):
    code = "INVALID_VALUE"


class UnsupportedFieldTypeError(NormalizationError):
    code = "UNSUPPORTED_FIELD_TYPE"

    def __init__(self, field_type: str, purpose: str = "scoring"):
        super().__init__(
            message=f"unsupported field type for {purpose}: {field_type}",
            details={"field_type": field_type},
        )


class ValueConversionError(NormalizationError):
    code = "INVALID_VALUE"

    def __init__(self, message: str, field_type: str | None = None, raw: Any = None):
        details: dict[str, Any] = {}
        if field_type is not None:
            details["field_type"] = field_type
        if raw is not None:
            details["raw"] = _display(raw)
        super().__init__(message=message, details=details)


class DurationParseError(NormalizationError):
    code = "INVALID_DURATION"

    def __init__(self, text: str):
        super().__init__(
            message=f"cannot parse duration: {text}",
            details={"raw": text},
        )


class TimeParseError(NormalizationError):
    code = "INVALID_TIME"

    def __init__(self, text: str):
        super().__init__(
            message=f"cannot parse time: {text} (expected HH:MM format)",
            details={"raw": text},
        )


# --- Evaluation ------------------------------------------------------------

class EvaluationError(ScoringError):
    code = "INVALID_CONDITION"


class MissingConditionError(EvaluationError):
    code = "MISSING_CONDITION"

    def __init__(self):
        super().__init__(message="criteria or condition cannot be nil")


class ConditionEvaluationError(EvaluationError):
    code = "INVALID_CONDITION"


# --- HTTP-only -------------------------------------------------------------

class BatchTooLargeError(ViceException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "BATCH_TOO_LARGE"

    def __init__(self, max_items: int, received: int):
        super().__init__(
            message=f"Batch exceeds maximum size of {max_items} items. Received {received}.",
            details={"max_items": max_items, "received": received},
        )


class EmptyBatchError(ViceException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "EMPTY_BATCH"

    def __init__(self):
        super().__init__(message="Batch must contain at least one item.")


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def vice_exception_handler(request: Request, exc: ViceException) -> JSONResponse:
    logger.warning("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.code)
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
