"""Application bootstrap helpers for the study review scheduler."""

from .runtime import run_planner
from .settings import AppSettings

__all__ = ["run_planner", "AppSettings"]
