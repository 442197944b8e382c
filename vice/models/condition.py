"""
Condition variants — one dataclass per comparison form.

A habit's criteria holds exactly one of these. The evaluator dispatches on
the variant type instead of probing a bag of optional fields.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class GreaterThan:
    value: float


@dataclass(frozen=True)
class GreaterThanOrEqual:
    value: float


@dataclass(frozen=True)
class LessThan:
    value: float


@dataclass(frozen=True)
class LessThanOrEqual:
    value: float


@dataclass(frozen=True)
class Range:
    """Bounds are inclusive unless flagged otherwise."""
    min: float
    max: float
    min_inclusive: bool = True
    max_inclusive: bool = True


@dataclass(frozen=True)
class Before:
    time: str   # HH:MM


@dataclass(frozen=True)
class After:
    time: str   # HH:MM


@dataclass(frozen=True)
class Equals:
    value: bool


Condition = Union[
    GreaterThan,
    GreaterThanOrEqual,
    LessThan,
    LessThanOrEqual,
    Range,
    Before,
    After,
    Equals,
]
