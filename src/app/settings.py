"""Configuration helpers for the study review scheduler runtime."""

from __future__ import annotations

import os
from dataclasses import dataclass

from src.scheduling.config import IntervalLadder, ModifierConfig, SchedulingConfig


DEFAULT_PLAN_DAYS = 7


@dataclass(frozen=True)
class AppSettings:
    """Strongly typed application settings loaded from environment variables."""

    app_name: str
    app_env: str
    log_level: str
    database_url: str
    plan_days: int
    scheduling: SchedulingConfig

    @classmethod
    def from_env(cls) -> AppSettings:
        """Construct settings directly from environment variables."""
        app_name = os.getenv("APP_NAME", "Study Review Scheduler")
        app_env = os.getenv("APP_ENV", "development")
        log_level = os.getenv("LOG_LEVEL", "INFO")
        database_url = os.getenv("DATABASE_URL")

        if not database_url:
            raise RuntimeError("DATABASE_URL environment variable is required to load schedules.")

        try:
            plan_days = int(os.getenv("STUDY_PLAN_DAYS", str(DEFAULT_PLAN_DAYS)))
        except ValueError as exc:  # pragma: no cover - defensive parsing
            raise RuntimeError("STUDY_PLAN_DAYS must be an integer.") from exc

        if plan_days < 1:
            raise RuntimeError("STUDY_PLAN_DAYS must be a positive integer.")

        return cls(
            app_name=app_name,
            app_env=app_env,
            log_level=log_level,
            database_url=database_url,
            plan_days=plan_days,
            scheduling=scheduling_config_from_env(),
        )


def scheduling_config_from_env() -> SchedulingConfig:
    """Read ladder and modifier overrides; malformed values fall back to defaults."""
    raw_ladder = os.getenv("INTERVAL_LADDER")
    ladder = IntervalLadder() if not raw_ladder else IntervalLadder.from_values(raw_ladder)
    modifiers = ModifierConfig.from_values(
        os.getenv("PARTIAL_UNDERSTANDING_FACTOR"),
        os.getenv("WRONG_ANSWER_INTERVAL"),
    )
    return SchedulingConfig(ladder=ladder, modifiers=modifiers)
