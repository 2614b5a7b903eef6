from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.db.schedules import (
    add_history_entry,
    delete_problem_schedule,
    get_schedule,
    list_history,
    list_schedules,
    save_schedule,
    save_schedules,
)
from src.scheduling.models import ReviewHistoryEntry, Schedule, UnderstandingLevel


NOW = datetime(2026, 10, 17, 9, 30, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_save_schedule_round_trips_and_updates(session_factory) -> None:
    schedule = Schedule("p1", date(2026, 10, 20), 3, 1, NOW)

    async with session_factory() as session:
        async with session.begin():
            await save_schedule(session, schedule)
        async with session.begin():
            loaded = await get_schedule(session, "p1")
            await save_schedule(session, Schedule("p1", date(2026, 10, 27), 7, 2, NOW))
        async with session.begin():
            updated = await get_schedule(session, "p1")
            missing = await get_schedule(session, "p2")

    assert loaded == schedule
    assert loaded.last_review_date.tzinfo is not None
    assert updated.current_interval == 7
    assert updated.review_count == 2
    assert missing is None


@pytest.mark.asyncio
async def test_list_schedules_orders_by_due_date(session_factory) -> None:
    async with session_factory() as session:
        async with session.begin():
            written = await save_schedules(
                session,
                [
                    Schedule("late", date(2026, 11, 1), 14, 3, NOW),
                    Schedule("soon", date(2026, 10, 18), 1, 5, NOW),
                ],
            )
        schedules = await list_schedules(session)

    assert written == 2
    assert [schedule.problem_id for schedule in schedules] == ["soon", "late"]


@pytest.mark.asyncio
async def test_history_is_ordered_by_date_then_insertion(session_factory) -> None:
    entries = [
        ReviewHistoryEntry("e3", "p1", NOW, True, UnderstandingLevel.FULL),
        ReviewHistoryEntry("e1", "p1", NOW - timedelta(days=3), False, UnderstandingLevel.NONE),
        ReviewHistoryEntry("e2", "p1", NOW, True, UnderstandingLevel.PARTIAL),
        ReviewHistoryEntry("x1", "p2", NOW, True, UnderstandingLevel.FULL),
    ]

    async with session_factory() as session:
        async with session.begin():
            for entry in entries:
                await add_history_entry(session, entry)
        problem_history = await list_history(session, "p1")
        everything = await list_history(session)

    assert [entry.id for entry in problem_history] == ["e1", "e3", "e2"]
    assert problem_history[1].understanding_level is UnderstandingLevel.FULL
    assert problem_history[1].date == NOW
    assert len(everything) == 4


@pytest.mark.asyncio
async def test_delete_problem_schedule(session_factory) -> None:
    async with session_factory() as session:
        async with session.begin():
            await save_schedule(session, Schedule("p1", date(2026, 10, 20), 3, 1, NOW))
        async with session.begin():
            deleted = await delete_problem_schedule(session, "p1")
            deleted_again = await delete_problem_schedule(session, "p1")
        remaining = await list_schedules(session)

    assert deleted is True
    assert deleted_again is False
    assert remaining == []


@pytest.mark.asyncio
async def test_offset_timestamps_are_stored_as_utc(session_factory) -> None:
    tokyo = timezone(timedelta(hours=9))
    evening_answer = datetime(2026, 10, 17, 8, 0, tzinfo=tokyo)  # 23:00 UTC on the 16th
    morning_answer = datetime(2026, 10, 17, 0, 30, tzinfo=timezone.utc)

    async with session_factory() as session:
        async with session.begin():
            await add_history_entry(
                session, ReviewHistoryEntry("a", "p1", evening_answer, False, UnderstandingLevel.NONE)
            )
            await add_history_entry(
                session, ReviewHistoryEntry("b", "p1", morning_answer, True, UnderstandingLevel.FULL)
            )
            await save_schedule(session, Schedule("p1", date(2026, 10, 18), 1, 2, evening_answer))

    async with session_factory() as session:
        history = await list_history(session, "p1")
        schedule = await get_schedule(session, "p1")

    assert [entry.id for entry in history] == ["a", "b"]
    assert history[0].date == evening_answer
    assert history[0].date.utcoffset() == timedelta(0)
    assert schedule.last_review_date == evening_answer
