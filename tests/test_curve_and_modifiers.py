from __future__ import annotations

import pytest

from src.scheduling.config import IntervalLadder, ModifierConfig
from src.scheduling.curve import next_stage
from src.scheduling.models import UnderstandingLevel, round_half_up
from src.scheduling.modifiers import apply_understanding


LADDER = IntervalLadder()


@pytest.mark.parametrize(
    ("current", "expected"),
    [(0, 3), (3, 7), (7, 14), (14, 30), (30, 60), (60, 60), (120, 60)],
)
def test_next_stage_walks_the_default_ladder(current: int, expected: int) -> None:
    assert next_stage(current, LADDER) == expected


def test_next_stage_steps_off_ladder_values_from_the_stage_below() -> None:
    assert next_stage(4, LADDER) == 7
    assert next_stage(12, LADDER) == 14
    assert next_stage(29, LADDER) == 30
    assert next_stage(36, LADDER) == 60


def test_next_stage_sends_small_values_to_the_first_stage() -> None:
    assert next_stage(1, LADDER) == 3
    assert next_stage(2, LADDER) == 3
    assert next_stage(-5, LADDER) == 3  # negative input treated as zero


def test_next_stage_never_goes_below_its_input() -> None:
    for current in range(0, LADDER.plateau):
        assert next_stage(current, LADDER) > current


def test_next_stage_is_total_for_non_negative_inputs() -> None:
    for current in range(0, 200):
        assert next_stage(current, LADDER) in LADDER.stages


def test_next_stage_uses_custom_ladder() -> None:
    ladder = IntervalLadder(stages=(0, 1, 2, 4))
    assert next_stage(0, ladder) == 1
    assert next_stage(2, ladder) == 4
    assert next_stage(3, ladder) == 4
    assert next_stage(10, ladder) == 4


def test_full_understanding_keeps_interval() -> None:
    assert apply_understanding(7, UnderstandingLevel.FULL, ModifierConfig()) == 7


def test_partial_understanding_rounds_half_up() -> None:
    assert apply_understanding(7, UnderstandingLevel.PARTIAL, ModifierConfig()) == 4
    assert apply_understanding(5, UnderstandingLevel.PARTIAL, ModifierConfig()) == 3
    assert apply_understanding(14, UnderstandingLevel.PARTIAL, ModifierConfig()) == 7


def test_partial_understanding_never_goes_below_one_day() -> None:
    modifiers = ModifierConfig(partial_factor=0.2)
    assert apply_understanding(1, UnderstandingLevel.PARTIAL, modifiers) == 1
    assert apply_understanding(2, UnderstandingLevel.PARTIAL, modifiers) == 1


def test_none_understanding_is_left_to_the_engine() -> None:
    assert apply_understanding(14, UnderstandingLevel.NONE, ModifierConfig()) == 14


def test_round_half_up_differs_from_bankers_rounding() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
