"""Applying one due date to many problems at once."""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Sequence

from src.scheduling.models import Schedule


def apply_bulk_schedule(
    problem_ids: Iterable[str],
    target_date: date,
    interval: int,
    schedules: Sequence[Schedule],
    *,
    now: datetime,
) -> list[Schedule]:
    """Set ``target_date``/``interval`` on every listed problem.

    Existing schedules keep their review count and last review date; missing
    ones are created. The input sequence is left untouched and the result
    holds at most one schedule per problem, in input order with new problems
    appended.
    """
    interval = max(0, interval)
    by_problem: dict[str, Schedule] = {}
    for schedule in schedules:
        by_problem[schedule.problem_id] = schedule

    for problem_id in problem_ids:
        existing = by_problem.get(problem_id)
        if existing is not None:
            by_problem[problem_id] = replace(
                existing,
                next_review_date=target_date,
                current_interval=interval,
            )
        else:
            by_problem[problem_id] = Schedule(
                problem_id=problem_id,
                next_review_date=target_date,
                current_interval=interval,
                review_count=0,
                last_review_date=now,
            )

    return list(by_problem.values())


def reschedule(schedule: Schedule, target_date: date) -> Schedule:
    """Move a single problem to a new due date, keeping everything else."""
    return replace(schedule, next_review_date=target_date)
