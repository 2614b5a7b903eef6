"""Interval ladder and modifier configuration for the scheduling engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence


LOGGER = logging.getLogger(__name__)


DEFAULT_STAGES: tuple[int, ...] = (0, 3, 7, 14, 30, 60)
DEFAULT_PARTIAL_FACTOR = 0.5
DEFAULT_WRONG_ANSWER_INTERVAL = 1

# Key order of the persisted ``intervals`` object.
STAGE_NAMES = ("INITIAL", "FIRST", "SECOND", "THIRD", "FOURTH", "FIFTH")


@dataclass(frozen=True, slots=True)
class IntervalLadder:
    """Ordered review stages in days; the last stage is the plateau."""

    stages: tuple[int, ...] = DEFAULT_STAGES

    def __post_init__(self) -> None:
        try:
            stages = tuple(int(stage) for stage in self.stages)
        except (TypeError, ValueError):
            LOGGER.warning("Malformed interval ladder %r; using defaults.", self.stages)
            stages = DEFAULT_STAGES
        if not self.is_valid(stages):
            LOGGER.warning("Interval ladder %r is not increasing from 0; using defaults.", stages)
            stages = DEFAULT_STAGES
        object.__setattr__(self, "stages", stages)

    @property
    def plateau(self) -> int:
        return self.stages[-1]

    @staticmethod
    def is_valid(stages: Sequence[int]) -> bool:
        if len(stages) < 2 or stages[0] != 0:
            return False
        return all(later > earlier for earlier, later in zip(stages, stages[1:]))

    @classmethod
    def from_values(cls, raw: Any) -> IntervalLadder:
        """Build a ladder from a list or a named-stage mapping, falling back to defaults."""
        try:
            if isinstance(raw, Mapping):
                values = [raw[name] for name in STAGE_NAMES]
            elif isinstance(raw, str):
                values = [part for part in raw.split(",") if part.strip()]
            else:
                values = list(raw)
            stages = tuple(int(value) for value in values)
        except (KeyError, TypeError, ValueError):
            LOGGER.warning("Malformed interval ladder %r; using defaults.", raw)
            return cls()
        return cls(stages=stages)


@dataclass(frozen=True, slots=True)
class ModifierConfig:
    """Coefficients applied on top of the ladder."""

    partial_factor: float = DEFAULT_PARTIAL_FACTOR
    wrong_answer_interval: int = DEFAULT_WRONG_ANSWER_INTERVAL

    def __post_init__(self) -> None:
        object.__setattr__(self, "partial_factor", _parse_partial_factor(self.partial_factor))
        object.__setattr__(
            self, "wrong_answer_interval", _parse_wrong_answer_interval(self.wrong_answer_interval)
        )

    @classmethod
    def from_values(
        cls,
        partial_factor: Any = None,
        wrong_answer_interval: Any = None,
    ) -> ModifierConfig:
        """Build modifiers from raw settings values; ``None`` means the default."""
        return cls(
            partial_factor=DEFAULT_PARTIAL_FACTOR if partial_factor is None else partial_factor,
            wrong_answer_interval=(
                DEFAULT_WRONG_ANSWER_INTERVAL if wrong_answer_interval is None else wrong_answer_interval
            ),
        )


@dataclass(frozen=True, slots=True)
class SchedulingConfig:
    """Everything the engine needs besides the item's own data."""

    ladder: IntervalLadder = field(default_factory=IntervalLadder)
    modifiers: ModifierConfig = field(default_factory=ModifierConfig)

    @classmethod
    def from_settings(cls, settings: Optional[Mapping[str, Any]]) -> SchedulingConfig:
        """Read the persisted settings shape; anything missing or malformed uses defaults."""
        if not isinstance(settings, Mapping):
            if settings is not None:
                LOGGER.warning("Scheduling settings must be a mapping, got %s.", type(settings).__name__)
            return cls()

        raw_intervals = settings.get("intervals")
        ladder = IntervalLadder() if raw_intervals is None else IntervalLadder.from_values(raw_intervals)
        modifiers = ModifierConfig.from_values(
            settings.get("partialUnderstandingModifier"),
            settings.get("wrongAnswerInterval"),
        )
        return cls(ladder=ladder, modifiers=modifiers)


def _parse_partial_factor(raw: Any) -> float:
    if raw is None:
        return DEFAULT_PARTIAL_FACTOR
    try:
        value = float(raw)
    except (TypeError, ValueError):
        LOGGER.warning("Malformed partial understanding factor %r; using default.", raw)
        return DEFAULT_PARTIAL_FACTOR
    if not 0 < value <= 1:
        LOGGER.warning("Partial understanding factor %s outside (0, 1]; using default.", value)
        return DEFAULT_PARTIAL_FACTOR
    return value


def _parse_wrong_answer_interval(raw: Any) -> int:
    if raw is None:
        return DEFAULT_WRONG_ANSWER_INTERVAL
    try:
        value = float(raw)
    except (TypeError, ValueError):
        LOGGER.warning("Malformed wrong answer interval %r; using default.", raw)
        return DEFAULT_WRONG_ANSWER_INTERVAL
    if value < 1 or not value.is_integer():
        LOGGER.warning("Wrong answer interval %s must be a whole number >= 1; using default.", value)
        return DEFAULT_WRONG_ANSWER_INTERVAL
    return int(value)
