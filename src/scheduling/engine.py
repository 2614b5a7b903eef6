"""Next-review computation for a single problem."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timedelta
from typing import Optional, Sequence

from src.scheduling.config import SchedulingConfig
from src.scheduling.curve import next_stage
from src.scheduling.difficulty import adjust_interval_for_difficulty
from src.scheduling.models import (
    ReviewHistoryEntry,
    Schedule,
    UnderstandingLevel,
    round_half_up,
)
from src.scheduling.modifiers import apply_understanding
from src.scheduling.trend import analyze_trend


LOGGER = logging.getLogger(__name__)


def initial_schedule(problem_id: str, now: datetime) -> Schedule:
    """Schedule for a problem that has never been scheduled; due today."""
    return Schedule(
        problem_id=problem_id,
        next_review_date=now.date(),
        current_interval=0,
        review_count=0,
        last_review_date=now,
    )


def compute_next(
    current: Schedule,
    is_correct: bool,
    understanding: UnderstandingLevel,
    history: Sequence[ReviewHistoryEntry],
    config: SchedulingConfig,
    *,
    now: datetime,
) -> Schedule:
    """Return the schedule that follows an answer.

    ``history`` holds the problem's earlier answers, not the one being
    recorded. Wrong answers and ``NONE`` understanding always fall back to the
    configured wrong-answer interval; otherwise the ladder stage is reduced for
    partial understanding and then scaled by the history trend and the
    personal difficulty estimate.
    """
    level = UnderstandingLevel.parse(understanding)
    review_count = max(0, current.review_count) + 1

    if not is_correct or level is UnderstandingLevel.NONE:
        interval = config.modifiers.wrong_answer_interval
    else:
        base = next_stage(current.current_interval, config.ladder)
        interval = apply_understanding(base, level, config.modifiers)
        if history:
            analysis = analyze_trend(history)
            after_trend = max(1, round_half_up(interval * analysis.multiplier))
            interval = adjust_interval_for_difficulty(after_trend, history)
            LOGGER.debug(
                "Problem %s: base %s, trend %s (x%s), adjusted to %s days.",
                current.problem_id,
                base,
                analysis.trend.value,
                analysis.multiplier,
                interval,
            )

    return Schedule(
        problem_id=current.problem_id,
        next_review_date=now.date() + timedelta(days=interval),
        current_interval=interval,
        review_count=review_count,
        last_review_date=now,
    )


def record_answer(
    problem_id: str,
    schedule: Optional[Schedule],
    is_correct: bool,
    understanding: UnderstandingLevel,
    history: Sequence[ReviewHistoryEntry],
    config: SchedulingConfig,
    *,
    now: datetime,
    entry_id: Optional[str] = None,
) -> tuple[ReviewHistoryEntry, Schedule]:
    """Build the history entry for an answer and the resulting schedule.

    A problem without a schedule starts from ``initial_schedule``.
    """
    level = UnderstandingLevel.parse(understanding)
    entry = ReviewHistoryEntry(
        id=entry_id or uuid.uuid4().hex,
        problem_id=problem_id,
        date=now,
        is_correct=is_correct,
        understanding_level=level,
    )
    current = schedule if schedule is not None else initial_schedule(problem_id, now)
    updated = compute_next(current, is_correct, level, history, config, now=now)
    return entry, updated
