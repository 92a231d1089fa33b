"""Rating engine: replays daily performance into a skill rating.

The rating is a day-over-day momentum accumulator. Starting from the
base rating, each day adds (value - previous day's value) times the
conversion factor; only the first day is compared to the metric's
global average. Baseline, target, momentum and risk are display
figures computed alongside the replay.
"""

import math
from datetime import date, datetime
from typing import Any, Optional, Sequence

from fragstats.models import DailyAggregate, MetricType, RatingSettings, RatingSnapshot
from fragstats.rating.totals import daily_value

# Risk percentage thresholds for the low/medium buckets
RISK_LOW_THRESHOLD = 30.0
RISK_MEDIUM_THRESHOLD = 60.0


def coerce_multiplier(multiplier: Any, default: float = 1.5) -> float:
    """Coerce a target multiplier to a finite float >= 1.0.

    Unparseable or non-finite input falls back to the default; values
    below 1.0 are clamped to 1.0.
    """
    try:
        value = float(multiplier)
    except (TypeError, ValueError):
        return max(default, 1.0)
    if not math.isfinite(value):
        return max(default, 1.0)
    return max(value, 1.0)


def risk_level(risk: float) -> str:
    """Bucket a risk percentage into low, medium or high."""
    if risk < RISK_LOW_THRESHOLD:
        return "low"
    if risk < RISK_MEDIUM_THRESHOLD:
        return "medium"
    return "high"


def calculate_risk(values: Sequence[float], window: int = 10) -> float:
    """Percentage of recent values that fell below their running average.

    Each of the last `window` values is compared with the mean of every
    value strictly before it in the full sequence, not just the window.
    The first value of the sequence has no history and is never a risk
    event, but it still counts toward the denominator.

    Args:
        values: Daily values in ascending date order.
        window: Number of most recent values to inspect.

    Returns:
        Risk percentage in [0, 100].
    """
    if not values:
        return 0.0

    start = max(0, len(values) - window)
    events = 0
    running_sum = sum(values[:start])

    for i in range(start, len(values)):
        if i > 0 and values[i] < running_sum / i:
            events += 1
        running_sum += values[i]

    return events / min(window, len(values)) * 100


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _as_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def reset_snapshot(
    metric: MetricType | str,
    multiplier: float = 1.5,
    settings: Optional[RatingSettings] = None,
) -> RatingSnapshot:
    """Snapshot for a metric with no rated history."""
    settings = settings or RatingSettings()
    return RatingSnapshot(
        metric=MetricType(metric),
        rating=_round_half_up(settings.base_rating),
        multiplier=coerce_multiplier(multiplier, settings.default_multiplier),
    )


def compute_rating(
    series: Sequence[DailyAggregate],
    today: date | datetime | str,
    multiplier: float,
    metric: MetricType | str,
    settings: Optional[RatingSettings] = None,
) -> RatingSnapshot:
    """Compute the rating snapshot for one metric.

    Args:
        series: Daily aggregates for the metric, ascending by date.
        today: Today's calendar date (date, datetime or ISO string).
        multiplier: Target multiplier (>= 1.0).
        metric: Metric type of the series.
        settings: Replay constants. Defaults to RatingSettings().

    Returns:
        RatingSnapshot. Empty history (after dropping future-dated days)
        yields the reset snapshot.
    """
    settings = settings or RatingSettings()
    metric = MetricType(metric)
    today = _as_date(today)
    multiplier = coerce_multiplier(multiplier, settings.default_multiplier)

    # Future-dated days stay visible in history but are never rated
    rated = sorted(
        (agg for agg in series if agg.date <= today),
        key=lambda agg: agg.date,
    )
    if not rated:
        return reset_snapshot(metric, multiplier, settings)

    global_average = settings.global_average(metric)
    values = [daily_value(agg) for agg in rated]

    running_rating = settings.base_rating
    prior_value = global_average
    for perf in values:
        running_rating += (perf - prior_value) * settings.conversion_factor
        prior_value = perf

    # A lone day is never compared with itself
    current: Optional[float]
    if rated[-1].date == today:
        current = values[-1]
        baseline = values[-2] if len(values) > 1 else global_average
    else:
        current = None
        baseline = values[-1] if len(values) > 1 else global_average

    if current is None or baseline == 0:
        momentum = 0.0
    else:
        momentum = ((current / baseline) - 1) * 100

    risk = calculate_risk(values, settings.risk_window)

    games_per_day = {agg.date.isoformat(): agg.entry_count for agg in rated}

    return RatingSnapshot(
        metric=metric,
        rating=_round_half_up(running_rating),
        baseline=baseline,
        current=current,
        target=baseline * multiplier,
        multiplier=multiplier,
        momentum=momentum,
        risk=risk,
        risk_level=risk_level(risk),
        games_per_day=games_per_day,
        total_games=sum(games_per_day.values()),
        days_tracked=len(rated),
    )
