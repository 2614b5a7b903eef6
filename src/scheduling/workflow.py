"""Workflow tying the scheduling engine to the record store."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.db.schedules import (
    add_history_entry,
    get_schedule,
    list_history,
    list_schedules,
    save_schedule,
    save_schedules,
)
from src.scheduling.bulk import apply_bulk_schedule, reschedule
from src.scheduling.config import SchedulingConfig
from src.scheduling.engine import record_answer
from src.scheduling.models import ReviewHistoryEntry, Schedule, UnderstandingLevel
from src.scheduling.planner import StudyPlanDay, due_schedules, generate_study_plan
from src.scheduling.reports import (
    ProgressReport,
    ReviewPriority,
    generate_progress_report,
    recommended_review_list,
)


LOGGER = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReviewWorkflow:
    """Loads what the engine needs, runs it and stores the outcome."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        config: Optional[SchedulingConfig] = None,
    ) -> None:
        self._session_factory = session_factory
        self._config = config or SchedulingConfig()

    @property
    def config(self) -> SchedulingConfig:
        return self._config

    async def record_answer(
        self,
        problem_id: str,
        is_correct: bool,
        understanding: UnderstandingLevel | str,
        now: Optional[datetime] = None,
    ) -> tuple[ReviewHistoryEntry, Schedule]:
        """Append the answer to the history and move the problem's schedule."""
        if now is None:
            now = _utcnow()
        level = UnderstandingLevel.parse(understanding)

        async with self._session_factory() as session:
            async with session.begin():
                current = await get_schedule(session, problem_id)
                history = await list_history(session, problem_id)
                entry, schedule = record_answer(
                    problem_id,
                    current,
                    is_correct,
                    level,
                    history,
                    self._config,
                    now=now,
                )
                await add_history_entry(session, entry)
                await save_schedule(session, schedule)

        LOGGER.info(
            "Recorded %s answer (%s) for problem %s; next review on %s.",
            "correct" if is_correct else "incorrect",
            level.value,
            problem_id,
            schedule.next_review_date.isoformat(),
        )
        return entry, schedule

    async def bulk_schedule(
        self,
        problem_ids: Iterable[str],
        target_date: date,
        interval: int,
        now: Optional[datetime] = None,
    ) -> list[Schedule]:
        """Give every listed problem the same due date and interval."""
        if now is None:
            now = _utcnow()
        problem_ids = list(problem_ids)

        async with self._session_factory() as session:
            async with session.begin():
                current = await list_schedules(session)
                updated = apply_bulk_schedule(problem_ids, target_date, interval, current, now=now)
                wanted = set(problem_ids)
                await save_schedules(session, (s for s in updated if s.problem_id in wanted))

        LOGGER.info(
            "Scheduled %d problems for %s with a %d day interval.",
            len(set(problem_ids)),
            target_date.isoformat(),
            interval,
        )
        return updated

    async def reschedule(self, problem_id: str, target_date: date) -> Optional[Schedule]:
        """Move one problem to ``target_date``; returns ``None`` when it has no schedule."""
        async with self._session_factory() as session:
            async with session.begin():
                current = await get_schedule(session, problem_id)
                if current is None:
                    LOGGER.debug("No schedule to move for problem %s.", problem_id)
                    return None
                updated = reschedule(current, target_date)
                await save_schedule(session, updated)
        return updated

    async def progress_report(self, problem_id: str) -> ProgressReport:
        async with self._session_factory() as session:
            history = await list_history(session, problem_id)
        return generate_progress_report(history)

    async def due_today(self, today: Optional[date] = None) -> list[Schedule]:
        """Schedules due today or earlier."""
        if today is None:
            today = _utcnow().date()
        async with self._session_factory() as session:
            schedules = await list_schedules(session)
        return due_schedules(schedules, today)

    async def study_plan(self, days_ahead: int, today: Optional[date] = None) -> list[StudyPlanDay]:
        """Project review workload for the coming ``days_ahead`` days."""
        if today is None:
            today = _utcnow().date()
        async with self._session_factory() as session:
            schedules = await list_schedules(session)
            history = await list_history(session)
        return generate_study_plan(schedules, history, days_ahead, today)

    async def recommended_reviews(self, today: Optional[date] = None) -> list[ReviewPriority]:
        """Vague problems ranked by how urgently they need another look."""
        if today is None:
            today = _utcnow().date()
        async with self._session_factory() as session:
            schedules = await list_schedules(session)
            history = await list_history(session)
        return recommended_review_list(history, schedules, today)
