"""Learner-facing summaries of review history."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Iterable, Optional, Sequence

from src.scheduling.difficulty import report_difficulty
from src.scheduling.models import (
    ReviewHistoryEntry,
    Schedule,
    UnderstandingLevel,
    correct_count,
    group_history,
    sorted_history,
)
from src.scheduling.trend import Trend, classify_trend, count_transitions


ACTION_START = "学習を開始してください"
ACTION_CHANGE_APPROACH = "学習方法を見直してください"
ACTION_DIFFERENT_ANGLE = "別の角度から理解を深めてみましょう"
ACTION_KEEP_GOING = "この調子で続けましょう"
ACTION_MORE_TIME = "もう少し時間をかけて取り組みましょう"
ACTION_CONTINUE = "通常通り復習を続けてください"

EMPTY_REPORT_DIFFICULTY = 0.5
LOW_CORRECT_RATE = 50.0

# Weights of the recommended review ranking.
VAGUE_WEIGHT = 5
NONE_WEIGHT = 3
VAGUE_AGE_DIVISOR = 10
DUE_SOON_WEIGHT = 2

UNDERSTANDING_PROGRESS = {
    UnderstandingLevel.FULL: 100,
    UnderstandingLevel.PARTIAL: 50,
    UnderstandingLevel.NONE: 0,
}


@dataclass(frozen=True, slots=True)
class ProgressReport:
    """Summary of one problem's review history."""

    trend: Trend
    correct_rate: float  # percent, 0..100
    understanding_progress: int  # percent, from the latest answer
    recommended_action: str
    difficulty: float


@dataclass(frozen=True, slots=True)
class SubjectPerformance:
    subject_id: str
    correct_rate: float
    problem_count: int


@dataclass(frozen=True, slots=True)
class StudyStatistics:
    """Aggregate figures across all tracked problems."""

    total_problems: int
    completed_problems: int
    correct_rate: float
    problems_by_understanding: dict[UnderstandingLevel, int]
    subject_performance: list[SubjectPerformance] = field(default_factory=list)


def recommend_action(trend: Trend, latest_level: UnderstandingLevel, correct_rate: float) -> str:
    if trend is Trend.DECLINING:
        return ACTION_CHANGE_APPROACH
    if trend is Trend.STABLE and latest_level is not UnderstandingLevel.FULL:
        return ACTION_DIFFERENT_ANGLE
    if trend is Trend.IMPROVING:
        return ACTION_KEEP_GOING
    if correct_rate < LOW_CORRECT_RATE:
        return ACTION_MORE_TIME
    return ACTION_CONTINUE


def generate_progress_report(history: Sequence[ReviewHistoryEntry]) -> ProgressReport:
    """Build the report shown next to a problem."""
    if not history:
        return ProgressReport(
            trend=Trend.STABLE,
            correct_rate=0.0,
            understanding_progress=0,
            recommended_action=ACTION_START,
            difficulty=EMPTY_REPORT_DIFFICULTY,
        )

    ordered = sorted_history(history)
    correct_rate = 100 * correct_count(ordered) / len(ordered)
    trend = classify_trend(count_transitions(ordered))
    latest_level = ordered[-1].understanding_level

    return ProgressReport(
        trend=trend,
        correct_rate=correct_rate,
        understanding_progress=UNDERSTANDING_PROGRESS[latest_level],
        recommended_action=recommend_action(trend, latest_level, correct_rate),
        difficulty=report_difficulty(correct_rate / 100),
    )


def summarize_statistics(
    problem_ids: Iterable[str],
    history: Iterable[ReviewHistoryEntry],
    subject_of: Optional[Callable[[str], Optional[str]]] = None,
) -> StudyStatistics:
    """Totals, overall correct rate and per-subject performance.

    A problem counts as completed once it has at least one answer.
    ``subject_of`` maps a problem id to its subject; problems it maps to
    ``None`` are left out of the subject breakdown.
    """
    grouped = group_history(history)
    problem_ids = list(dict.fromkeys(problem_ids))

    completed = 0
    correct_answers = 0
    total_answers = 0
    by_level: Counter[UnderstandingLevel] = Counter()
    subjects: dict[str, list[int]] = {}

    for problem_id in problem_ids:
        entries = grouped.get(problem_id, [])
        correct = correct_count(entries)
        correct_answers += correct
        total_answers += len(entries)
        if entries:
            completed += 1
            by_level[sorted_history(entries)[-1].understanding_level] += 1

        subject_id = subject_of(problem_id) if subject_of is not None else None
        if subject_id is not None:
            stats = subjects.setdefault(subject_id, [0, 0, 0])
            stats[0] += correct
            stats[1] += len(entries)
            stats[2] += 1

    return StudyStatistics(
        total_problems=len(problem_ids),
        completed_problems=completed,
        correct_rate=100 * correct_answers / total_answers if total_answers else 0.0,
        problems_by_understanding={level: by_level.get(level, 0) for level in UnderstandingLevel},
        subject_performance=[
            SubjectPerformance(
                subject_id=subject_id,
                correct_rate=100 * correct / total if total else 0.0,
                problem_count=count,
            )
            for subject_id, (correct, total, count) in subjects.items()
        ],
    )


def vague_problem_ids(history: Iterable[ReviewHistoryEntry]) -> list[str]:
    """Problems whose most recent answer was rated as partially understood."""
    return [
        problem_id
        for problem_id, entries in group_history(history).items()
        if sorted_history(entries)[-1].understanding_level is UnderstandingLevel.PARTIAL
    ]


def describe_interval(days: int) -> str:
    """Human-readable Japanese label for an interval length."""
    labels = {0: "初回", 1: "翌日", 3: "3日後", 7: "1週間後", 14: "2週間後", 30: "1ヶ月後", 60: "2ヶ月後"}
    if days in labels:
        return labels[days]
    if days < 7:
        return f"{days}日後"
    if days < 30:
        return f"{days // 7}週間後"
    if days < 365:
        return f"{days // 30}ヶ月後"
    return f"{days // 365}年後"


@dataclass(frozen=True, slots=True)
class ReviewPriority:
    """A vague problem ranked for extra review; higher scores come first."""

    problem_id: str
    vague_count: int
    none_count: int
    days_since_first_vague: int
    days_to_next_review: int  # negative when the review is overdue
    score: float


def recommended_review_list(
    history: Iterable[ReviewHistoryEntry],
    schedules: Iterable[Schedule],
    today: date,
) -> list[ReviewPriority]:
    """Rank the vague problems by how urgently they need another look.

    The score grows with the number of partial and failed ratings and with how
    long the problem has been vague, and shrinks the further away its next
    review is. A problem without a schedule counts as due today.
    """
    next_review = {schedule.problem_id: schedule.next_review_date for schedule in schedules}
    ranked = []
    for problem_id, entries in group_history(history).items():
        ordered = sorted_history(entries)
        if ordered[-1].understanding_level is not UnderstandingLevel.PARTIAL:
            continue

        vague = [entry for entry in ordered if entry.understanding_level is UnderstandingLevel.PARTIAL]
        none_count = sum(1 for entry in ordered if entry.understanding_level is UnderstandingLevel.NONE)
        days_since_first_vague = abs((today - vague[0].date.date()).days)
        due = next_review.get(problem_id)
        days_to_next_review = (due - today).days if due is not None else 0

        ranked.append(
            ReviewPriority(
                problem_id=problem_id,
                vague_count=len(vague),
                none_count=none_count,
                days_since_first_vague=days_since_first_vague,
                days_to_next_review=days_to_next_review,
                score=(
                    VAGUE_WEIGHT * len(vague)
                    + NONE_WEIGHT * none_count
                    + days_since_first_vague / VAGUE_AGE_DIVISOR
                    - DUE_SOON_WEIGHT * days_to_next_review
                ),
            )
        )

    return sorted(ranked, key=lambda item: item.score, reverse=True)
