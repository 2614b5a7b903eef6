"""Trend analysis over a problem's review history."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from src.scheduling.models import (
    ReviewHistoryEntry,
    UnderstandingLevel,
    correct_count,
    sorted_history,
)


MIN_ENTRIES_FOR_TREND = 3
RECENT_WINDOW = 3

BOOST_MULTIPLIER = 1.2
DECLINE_MULTIPLIER = 0.8
STRUGGLING_MULTIPLIER = 0.5
NEUTRAL_MULTIPLIER = 1.0
BOOST_CORRECT_RATE = 0.8

_RANK = {
    UnderstandingLevel.NONE: 0,
    UnderstandingLevel.PARTIAL: 1,
    UnderstandingLevel.FULL: 2,
}


class Trend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"
    MIXED = "mixed"


@dataclass(frozen=True, slots=True)
class TransitionCounts:
    improvements: int = 0
    declines: int = 0
    neutral: int = 0

    @property
    def total(self) -> int:
        return self.improvements + self.declines + self.neutral


@dataclass(frozen=True, slots=True)
class TrendAnalysis:
    """Trend classification plus the multiplier used for scheduling."""

    trend: Trend
    multiplier: float
    transitions: TransitionCounts
    correct_rate: float


def count_transitions(history: Sequence[ReviewHistoryEntry]) -> TransitionCounts:
    """Classify each consecutive pair of answers (by date) as better, worse or unchanged."""
    ordered = sorted_history(history)
    improvements = declines = neutral = 0
    for previous, current in zip(ordered, ordered[1:]):
        delta = _RANK[current.understanding_level] - _RANK[previous.understanding_level]
        if delta > 0:
            improvements += 1
        elif delta < 0:
            declines += 1
        else:
            neutral += 1
    return TransitionCounts(improvements=improvements, declines=declines, neutral=neutral)


def classify_trend(transitions: TransitionCounts) -> Trend:
    """Presentation-facing trend label derived from transition counts."""
    if transitions.total == 0:
        return Trend.STABLE
    if transitions.improvements > 2 * transitions.declines:
        return Trend.IMPROVING
    if transitions.declines > 2 * transitions.improvements:
        return Trend.DECLINING
    if transitions.neutral > transitions.improvements + transitions.declines:
        return Trend.STABLE
    return Trend.MIXED


def analyze_trend(history: Sequence[ReviewHistoryEntry]) -> TrendAnalysis:
    """Return the trend and the interval multiplier for a problem's history."""
    if len(history) < MIN_ENTRIES_FOR_TREND:
        return TrendAnalysis(
            trend=Trend.STABLE,
            multiplier=NEUTRAL_MULTIPLIER,
            transitions=TransitionCounts(),
            correct_rate=correct_count(history) / len(history) if history else 0.0,
        )

    ordered = sorted_history(history)
    transitions = count_transitions(ordered)
    correct_rate = correct_count(ordered) / len(ordered)

    recent = ordered[-RECENT_WINDOW:]
    if all(entry.understanding_level is UnderstandingLevel.NONE for entry in recent):
        multiplier = STRUGGLING_MULTIPLIER
    elif correct_rate > BOOST_CORRECT_RATE and transitions.improvements > transitions.declines:
        multiplier = BOOST_MULTIPLIER
    elif transitions.declines > transitions.improvements:
        multiplier = DECLINE_MULTIPLIER
    else:
        multiplier = NEUTRAL_MULTIPLIER

    return TrendAnalysis(
        trend=classify_trend(transitions),
        multiplier=multiplier,
        transitions=transitions,
        correct_rate=correct_rate,
    )
