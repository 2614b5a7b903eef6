"""Stepping along the review interval ladder."""

from __future__ import annotations

from src.scheduling.config import IntervalLadder


def next_stage(current_interval: int, ladder: IntervalLadder) -> int:
    """Return the interval that follows ``current_interval`` on the ladder.

    Intervals at or beyond the plateau stay on the plateau. Values that do not
    sit on the ladder (after a partial-understanding reduction or a history
    adjustment) step from the largest stage below them, so a value between 0
    and the first non-zero stage lands on that first stage.
    """
    current = max(0, current_interval)
    if current >= ladder.plateau:
        return ladder.plateau

    # Valid ladders start at 0, so some stage always sits at or below ``current``.
    below = max(index for index, stage in enumerate(ladder.stages) if stage <= current)
    return ladder.stages[below + 1]
