"""Helpers for persisting schedules and review history."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.scheduling.models import ReviewHistoryEntry, Schedule, UnderstandingLevel

from . import ReviewHistoryRecord, ScheduleRecord


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _as_utc(value: datetime) -> datetime:
    # Stored as UTC wall-clock time; SQLite drops the offset.
    return _as_aware(value).astimezone(timezone.utc)


def schedule_from_record(record: ScheduleRecord) -> Schedule:
    return Schedule(
        problem_id=record.problem_id,
        next_review_date=record.next_review_date,
        current_interval=record.current_interval,
        review_count=record.review_count,
        last_review_date=_as_aware(record.last_review_date),
    )


def entry_from_record(record: ReviewHistoryRecord) -> ReviewHistoryEntry:
    return ReviewHistoryEntry(
        id=record.id,
        problem_id=record.problem_id,
        date=_as_aware(record.reviewed_at),
        is_correct=record.is_correct,
        understanding_level=UnderstandingLevel.parse(record.understanding_level),
    )


async def get_schedule(session: AsyncSession, problem_id: str) -> Optional[Schedule]:
    """Return the stored schedule for a problem, if any."""
    record = await session.get(ScheduleRecord, problem_id)
    if record is None:
        return None
    return schedule_from_record(record)


async def list_schedules(session: AsyncSession) -> list[Schedule]:
    """Return every stored schedule ordered by due date."""
    stmt = select(ScheduleRecord).order_by(ScheduleRecord.next_review_date, ScheduleRecord.problem_id)
    result = await session.execute(stmt)
    return [schedule_from_record(record) for record in result.scalars().all()]


async def save_schedule(session: AsyncSession, schedule: Schedule) -> ScheduleRecord:
    """Insert or update the schedule for ``schedule.problem_id``."""
    record = await session.get(ScheduleRecord, schedule.problem_id)

    if record is None:
        record = ScheduleRecord(
            problem_id=schedule.problem_id,
            next_review_date=schedule.next_review_date,
            current_interval=schedule.current_interval,
            review_count=schedule.review_count,
            last_review_date=_as_utc(schedule.last_review_date),
        )
        session.add(record)
    else:
        record.next_review_date = schedule.next_review_date
        record.current_interval = schedule.current_interval
        record.review_count = schedule.review_count
        record.last_review_date = _as_utc(schedule.last_review_date)

    await session.flush()
    return record


async def save_schedules(session: AsyncSession, schedules: Iterable[Schedule]) -> int:
    """Upsert several schedules; returns how many were written."""
    count = 0
    for schedule in schedules:
        await save_schedule(session, schedule)
        count += 1
    return count


async def delete_problem_schedule(session: AsyncSession, problem_id: str) -> bool:
    """Remove a problem's schedule when the problem itself is deleted."""
    result = await session.execute(delete(ScheduleRecord).where(ScheduleRecord.problem_id == problem_id))
    return bool(result.rowcount)


async def add_history_entry(session: AsyncSession, entry: ReviewHistoryEntry) -> ReviewHistoryRecord:
    """Append an answer to the review history."""
    record = ReviewHistoryRecord(
        id=entry.id,
        problem_id=entry.problem_id,
        reviewed_at=_as_utc(entry.date),
        is_correct=entry.is_correct,
        understanding_level=entry.understanding_level.value,
    )
    session.add(record)
    await session.flush()
    return record


async def list_history(
    session: AsyncSession,
    problem_id: Optional[str] = None,
) -> list[ReviewHistoryEntry]:
    """Return history entries by date, ties in insertion order."""
    stmt = select(ReviewHistoryRecord).order_by(ReviewHistoryRecord.reviewed_at, ReviewHistoryRecord.seq)
    if problem_id is not None:
        stmt = stmt.where(ReviewHistoryRecord.problem_id == problem_id)
    result = await session.execute(stmt)
    return [entry_from_record(record) for record in result.scalars().all()]
