"""Interval adjustment for the learner's self-rated understanding."""

from __future__ import annotations

from src.scheduling.config import ModifierConfig
from src.scheduling.models import UnderstandingLevel, round_half_up


def apply_understanding(
    base_interval: int,
    level: UnderstandingLevel,
    modifiers: ModifierConfig,
) -> int:
    """Shorten the interval for partial understanding; never below one day.

    ``NONE`` never reaches this point in normal scheduling because the engine
    short-circuits to the wrong-answer interval first.
    """
    if level is UnderstandingLevel.FULL:
        interval = base_interval
    elif level is UnderstandingLevel.PARTIAL:
        interval = round_half_up(base_interval * modifiers.partial_factor)
    elif level is UnderstandingLevel.NONE:
        interval = base_interval
    else:  # pragma: no cover - closed enumeration
        raise ValueError(f"Unknown understanding level: {level!r}")
    return max(1, interval)
