"""
Text grammars for numbers, durations and clock times.

parse_decimal("12.5")            -> 12.5
parse_duration_minutes("1h30m")  -> 90.0
parse_duration_minutes("45")     -> 45.0
parse_duration_minutes("1:30:30") -> 90.5
parse_time_minutes("09:00")      -> 540.0

Digits are ASCII only; results are always finite.
"""
from __future__ import annotations

import math
import re
from typing import Optional

from vice.core.errors import DurationParseError, TimeParseError

_UNIT_SECONDS = {"h": 3600.0, "m": 60.0, "s": 1.0}

_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_DURATION_TERM = r"(?:\d+(?:\.\d*)?|\.\d+)[hms]"
_DURATION_RE = re.compile(rf"[+-]?(?:{_DURATION_TERM})+", re.ASCII)
_TERM_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)([hms])", re.ASCII)
_CLOCK_RE = re.compile(r"(\d+):(\d+)", re.ASCII)


def parse_decimal(text: str) -> Optional[float]:
    """Parse plain decimal text ("42", "-3.5", "1e3"); None if it is anything else."""
    if not _DECIMAL_RE.fullmatch(text):
        return None
    number = float(text)
    return number if math.isfinite(number) else None


def _parse_compound(text: str) -> Optional[float]:
    """Parse "2h15m30s"-style text; None when it does not match."""
    if not _DURATION_RE.fullmatch(text):
        return None
    sign = -1.0 if text.startswith("-") else 1.0
    seconds = 0.0
    for number, unit in _TERM_RE.findall(text):
        seconds += float(number) * _UNIT_SECONDS[unit]
    return sign * seconds / 60


def _parse_clock_duration(text: str) -> Optional[float]:
    """H:MM:SS with decimal fields."""
    if text.count(":") != 2:
        return None
    fields = [parse_decimal(part) for part in text.split(":")]
    if any(f is None for f in fields):
        return None
    hours, minutes, seconds = fields
    return hours * 60 + minutes + seconds / 60


def parse_duration_minutes(text: str) -> float:
    """Parse a free-form duration into minutes."""
    text = text.strip()

    minutes: Optional[float] = None
    if any(c in text for c in "hms"):
        minutes = _parse_compound(text)
    if minutes is None:
        minutes = parse_decimal(text)
    if minutes is None:
        minutes = _parse_clock_duration(text)

    if minutes is None or not math.isfinite(minutes):
        raise DurationParseError(text)
    return minutes


def parse_time_minutes(text: str) -> float:
    """Parse an HH:MM clock time into minutes since midnight."""
    text = text.strip()

    match = _CLOCK_RE.fullmatch(text)
    if match:
        h, m = int(match.group(1)), int(match.group(2))
        if 0 <= h < 24 and 0 <= m < 60:
            return float(h * 60 + m)

    raise TimeParseError(text)
