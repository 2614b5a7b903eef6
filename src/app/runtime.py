"""Bootstrap logic for printing the upcoming study plan."""

from __future__ import annotations

import asyncio
import logging

from src.app.settings import AppSettings
from src.db import get_session_factory, run_migrations_if_needed
from src.scheduling.reports import describe_interval
from src.scheduling.workflow import ReviewWorkflow


LOGGER = logging.getLogger(__name__)


def _configure_logging(log_level: str) -> None:
    """Set up project-wide logging configuration."""
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        level=log_level,
    )


async def _print_plan(workflow: ReviewWorkflow, days: int) -> None:
    due = await workflow.due_today()
    print(f"Due today: {len(due)} problem(s).")
    for schedule in due:
        print(
            f"  {schedule.problem_id} (reviewed {schedule.review_count}x, "
            f"interval {describe_interval(schedule.current_interval)})"
        )

    plan = await workflow.study_plan(days)
    for day in plan:
        print(f"{day.date.isoformat()}: {len(day.problem_ids)} problem(s), ~{day.estimated_minutes} min")


def run_planner(settings: AppSettings) -> None:
    """Apply migrations and print the study plan using the provided settings."""
    _configure_logging(settings.log_level)
    print(f"{settings.app_name} is running in {settings.app_env} mode.")

    try:
        run_migrations_if_needed()
    except Exception:
        LOGGER.exception("Database migrations failed. Aborting startup.")
        raise

    workflow = ReviewWorkflow(get_session_factory(), settings.scheduling)

    LOGGER.info("Building a %d day study plan for %s.", settings.plan_days, settings.app_name)
    asyncio.run(_print_plan(workflow, settings.plan_days))
