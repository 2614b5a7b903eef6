"""Spaced-repetition scheduling engine for study problems."""

from .bulk import apply_bulk_schedule, reschedule
from .config import IntervalLadder, ModifierConfig, SchedulingConfig
from .engine import compute_next, initial_schedule, record_answer
from .models import ReviewHistoryEntry, Schedule, UnderstandingLevel
from .planner import StudyPlanDay, generate_study_plan
from .reports import ProgressReport, generate_progress_report
from .trend import Trend, TrendAnalysis, analyze_trend

__all__ = [
    "IntervalLadder",
    "ModifierConfig",
    "ProgressReport",
    "ReviewHistoryEntry",
    "Schedule",
    "SchedulingConfig",
    "StudyPlanDay",
    "Trend",
    "TrendAnalysis",
    "UnderstandingLevel",
    "analyze_trend",
    "apply_bulk_schedule",
    "compute_next",
    "generate_progress_report",
    "generate_study_plan",
    "initial_schedule",
    "record_answer",
    "reschedule",
]
