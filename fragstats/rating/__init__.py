"""Rating engine and daily total recomputation."""

from fragstats.rating.engine import (
    calculate_risk,
    coerce_multiplier,
    compute_rating,
    reset_snapshot,
    risk_level,
)
from fragstats.rating.totals import daily_value, kda_ratio, recompute_daily_totals

__all__ = [
    "calculate_risk",
    "coerce_multiplier",
    "compute_rating",
    "reset_snapshot",
    "risk_level",
    "daily_value",
    "kda_ratio",
    "recompute_daily_totals",
]
