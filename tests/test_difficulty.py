from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from src.scheduling.difficulty import (
    adjust_interval_for_difficulty,
    estimate_difficulty,
    report_difficulty,
)
from src.scheduling.models import ReviewHistoryEntry, UnderstandingLevel


START = datetime(2026, 9, 1, 8, 0, tzinfo=timezone.utc)


def _answers(*correct: bool) -> list[ReviewHistoryEntry]:
    return [
        ReviewHistoryEntry(
            id=f"d{index}",
            problem_id="p1",
            date=START + timedelta(days=index),
            is_correct=is_correct,
            understanding_level=UnderstandingLevel.PARTIAL,
        )
        for index, is_correct in enumerate(correct)
    ]


def test_empty_history_has_zero_difficulty() -> None:
    assert estimate_difficulty([]) == 0.0


def test_difficulty_counts_incorrect_answers_with_smoothing() -> None:
    assert estimate_difficulty(_answers(True, True, True)) == 0.0
    assert estimate_difficulty(_answers(False, False, True)) == 0.5


def test_adjusted_interval_unchanged_without_mistakes() -> None:
    assert adjust_interval_for_difficulty(14, []) == 14
    assert adjust_interval_for_difficulty(14, _answers(True, True)) == 14


def test_adjusted_interval_shrinks_for_hard_problems() -> None:
    # score 3/4 -> factor 0.625 -> 6.25 days
    assert adjust_interval_for_difficulty(10, _answers(False, False, False)) == 6


def test_adjusted_interval_is_at_least_one_day() -> None:
    assert adjust_interval_for_difficulty(1, _answers(False, False, False)) == 1
    assert adjust_interval_for_difficulty(0, []) == 1


@pytest.mark.parametrize(
    ("correct_rate", "expected"),
    [(1.0, 0.1), (0.95, 0.1), (0.0, 1.0), (0.25, 0.75), (0.5, 0.5)],
)
def test_report_difficulty_is_clamped(correct_rate: float, expected: float) -> None:
    assert report_difficulty(correct_rate) == pytest.approx(expected)
