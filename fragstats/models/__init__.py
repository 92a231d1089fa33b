"""Data models for fragstats."""

from fragstats.models.aggregate import DailyAggregate, DailyTotals
from fragstats.models.entry import LEGACY_ENTRY_ID, LogEntry, coerce_count, coerce_rate
from fragstats.models.metric import METRIC_PROFILES, MetricProfile, MetricType, get_profile
from fragstats.models.settings import RatingSettings
from fragstats.models.snapshot import RatingSnapshot

__all__ = [
    "DailyAggregate",
    "DailyTotals",
    "LEGACY_ENTRY_ID",
    "LogEntry",
    "coerce_count",
    "coerce_rate",
    "METRIC_PROFILES",
    "MetricProfile",
    "MetricType",
    "get_profile",
    "RatingSettings",
    "RatingSnapshot",
]
