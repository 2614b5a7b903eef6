"""Upcoming review workload."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Sequence

from src.scheduling.models import ReviewHistoryEntry, Schedule, group_history, round_half_up
from src.scheduling.reports import generate_progress_report


BASE_MINUTES_PER_PROBLEM = 2
DIFFICULTY_MINUTES = 8


@dataclass(frozen=True, slots=True)
class StudyPlanDay:
    date: date
    problem_ids: tuple[str, ...]
    estimated_minutes: int


def estimate_minutes(history: Sequence[ReviewHistoryEntry]) -> int:
    """Expected study time for one problem based on its reported difficulty."""
    difficulty = generate_progress_report(history).difficulty
    return BASE_MINUTES_PER_PROBLEM + round_half_up(DIFFICULTY_MINUTES * difficulty)


def due_schedules(schedules: Iterable[Schedule], today: date) -> list[Schedule]:
    """Schedules due today or overdue."""
    return [schedule for schedule in schedules if schedule.next_review_date <= today]


def schedules_for_date(schedules: Iterable[Schedule], day: date) -> list[Schedule]:
    return [schedule for schedule in schedules if schedule.next_review_date == day]


def schedules_in_range(schedules: Iterable[Schedule], start: date, end: date) -> list[Schedule]:
    """Schedules falling due between ``start`` and ``end`` inclusive."""
    return [schedule for schedule in schedules if start <= schedule.next_review_date <= end]


def generate_study_plan(
    schedules: Sequence[Schedule],
    history: Iterable[ReviewHistoryEntry],
    days_ahead: int,
    today: date,
) -> list[StudyPlanDay]:
    """Project the next ``days_ahead`` days of reviews, starting with ``today``."""
    grouped = group_history(history)
    minutes_cache: dict[str, int] = {}
    plan: list[StudyPlanDay] = []

    for offset in range(max(0, days_ahead)):
        day = today + timedelta(days=offset)
        problem_ids = tuple(schedule.problem_id for schedule in schedules_for_date(schedules, day))
        total = 0
        for problem_id in problem_ids:
            if problem_id not in minutes_cache:
                minutes_cache[problem_id] = estimate_minutes(grouped.get(problem_id, []))
            total += minutes_cache[problem_id]
        plan.append(StudyPlanDay(date=day, problem_ids=problem_ids, estimated_minutes=total))

    return plan
