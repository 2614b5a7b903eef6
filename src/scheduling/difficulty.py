"""Per-problem difficulty heuristics.

Two separate notions of difficulty live here and are intentionally not merged:

* ``estimate_difficulty`` scores the incorrect-answer share and feeds the
  interval personalization pass of the scheduler.
* ``report_difficulty`` is derived from the correct rate and is only used for
  progress reports and study-time estimates.
"""

from __future__ import annotations

from typing import Sequence

from src.scheduling.models import ReviewHistoryEntry, clamp, round_half_up


DIFFICULTY_WEIGHT = 0.5
MAX_GROWTH = 1.2
MIN_REPORT_DIFFICULTY = 0.1
MAX_REPORT_DIFFICULTY = 1.0


def estimate_difficulty(history: Sequence[ReviewHistoryEntry]) -> float:
    """Share of incorrect answers, smoothed by one so empty history scores zero."""
    incorrect = sum(1 for entry in history if not entry.is_correct)
    return incorrect / (len(history) + 1)


def adjust_interval_for_difficulty(base_interval: int, history: Sequence[ReviewHistoryEntry]) -> int:
    """Shrink ``base_interval`` for problems the learner keeps getting wrong."""
    score = estimate_difficulty(history)
    adjusted = round_half_up(base_interval * (1 - score * DIFFICULTY_WEIGHT))
    upper = max(1, round_half_up(base_interval * MAX_GROWTH))
    return int(clamp(adjusted, 1, upper))


def report_difficulty(correct_rate: float) -> float:
    """Difficulty shown to the learner; ``correct_rate`` is a fraction in 0..1."""
    return clamp(1 - correct_rate, MIN_REPORT_DIFFICULTY, MAX_REPORT_DIFFICULTY)
