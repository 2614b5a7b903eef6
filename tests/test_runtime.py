import logging
from datetime import datetime, timezone
from typing import List, Tuple

import pytest
from sqlalchemy import create_engine, inspect

from src.app import runtime
from src.app.settings import AppSettings
from src.db import run_migrations_if_needed
from src.scheduling.config import SchedulingConfig
from src.scheduling.models import UnderstandingLevel
from src.scheduling.workflow import ReviewWorkflow


def test_run_migrations_if_needed_invokes_upgrade(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: List[Tuple[object, str]] = []

    def fake_upgrade(config: object, target: str) -> None:
        calls.append((config, target))

    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("RUN_MIGRATIONS_ON_STARTUP", "true")
    monkeypatch.setattr("src.db.command.upgrade", fake_upgrade)

    run_migrations_if_needed()

    assert calls and calls[0][1] == "head"


def test_run_migrations_if_needed_skips_when_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RUN_MIGRATIONS_ON_STARTUP", "false")
    calls: List[str] = []
    monkeypatch.setattr("src.db.command.upgrade", lambda _config, target: calls.append(target))

    run_migrations_if_needed()

    assert not calls


@pytest.mark.asyncio
async def test_print_plan_lists_due_problems(session_factory, capsys) -> None:
    workflow = ReviewWorkflow(session_factory)
    now = datetime.now(timezone.utc)
    await workflow.bulk_schedule(["p1", "p2"], now.date(), 0, now=now)
    await workflow.record_answer("p2", True, UnderstandingLevel.FULL, now=now)

    await runtime._print_plan(workflow, 3)

    output = capsys.readouterr().out
    assert "Due today: 1 problem(s)." in output
    assert "p1 (reviewed 0x, interval 初回)" in output
    assert output.count("problem(s), ~") == 3


def test_run_planner_aborts_when_migrations_fail(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_migrations() -> None:
        raise RuntimeError("boom")

    monkeypatch.setattr(runtime, "run_migrations_if_needed", failing_migrations)
    settings = AppSettings(
        app_name="Study Review Scheduler",
        app_env="test",
        log_level="INFO",
        database_url="sqlite+aiosqlite:///:memory:",
        plan_days=7,
        scheduling=SchedulingConfig(),
    )

    with pytest.raises(RuntimeError, match="boom"):
        runtime.run_planner(settings)


def test_migrations_keep_application_logging(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    database = tmp_path / "study.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{database}")
    monkeypatch.setenv("RUN_MIGRATIONS_ON_STARTUP", "true")
    root = logging.getLogger()
    previous_level = root.level
    root.setLevel(logging.INFO)
    handlers = list(root.handlers)

    try:
        run_migrations_if_needed()

        assert root.level == logging.INFO
        assert root.handlers == handlers
        assert logging.getLogger("src.app.runtime").isEnabledFor(logging.INFO)
    finally:
        root.setLevel(previous_level)

    engine = create_engine(f"sqlite:///{database}")
    try:
        tables = set(inspect(engine).get_table_names())
    finally:
        engine.dispose()
    assert {"schedules", "review_history"} <= tables
