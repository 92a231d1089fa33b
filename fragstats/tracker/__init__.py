"""Tracker service and view models."""

from fragstats.tracker.errors import DayNotFoundError, EntryNotFoundError, TrackerError
from fragstats.tracker.service import StatsTracker
from fragstats.tracker.view import build_history_view, build_rating_view

__all__ = [
    "DayNotFoundError",
    "EntryNotFoundError",
    "TrackerError",
    "StatsTracker",
    "build_history_view",
    "build_rating_view",
]
