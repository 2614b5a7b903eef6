"""Value objects shared by the scheduling engine and its collaborators."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Iterable


class UnderstandingLevel(str, Enum):
    """Learner's self-rated grasp of a problem."""

    FULL = "full"
    PARTIAL = "partial"
    NONE = "none"

    @classmethod
    def parse(cls, value: "UnderstandingLevel | str") -> "UnderstandingLevel":
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


@dataclass(frozen=True, slots=True)
class Schedule:
    """Review schedule for a single problem."""

    problem_id: str
    next_review_date: date
    current_interval: int
    review_count: int
    last_review_date: datetime


@dataclass(frozen=True, slots=True)
class ReviewHistoryEntry:
    """A single recorded answer. Entries are append-only."""

    id: str
    problem_id: str
    date: datetime
    is_correct: bool
    understanding_level: UnderstandingLevel


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (3.5 -> 4)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def sorted_history(history: Iterable[ReviewHistoryEntry]) -> list[ReviewHistoryEntry]:
    """Return entries ordered by date; ties keep their insertion order."""
    return sorted(history, key=lambda entry: entry.date)


def group_history(history: Iterable[ReviewHistoryEntry]) -> dict[str, list[ReviewHistoryEntry]]:
    """Bucket entries by problem id, preserving insertion order inside each bucket."""
    grouped: dict[str, list[ReviewHistoryEntry]] = {}
    for entry in history:
        grouped.setdefault(entry.problem_id, []).append(entry)
    return grouped


def correct_count(history: Iterable[ReviewHistoryEntry]) -> int:
    return sum(1 for entry in history if entry.is_correct)
