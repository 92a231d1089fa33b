"""View models for history and rating displays.

Builders here are pure: they take stored aggregates or a snapshot and
return immutable display values. Renderers only format these values.
"""

from datetime import date as date_type
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from fragstats.models import DailyAggregate, MetricType, RatingSnapshot, get_profile
from fragstats.rating import daily_value, kda_ratio

SPARK_CHARS = "▁▂▃▄▅▆▇█"


class HistoryRow(BaseModel):
    """One day in the history list."""

    date: date_type
    score: str = Field(..., description="Score text, e.g. '12/4/3' or '25.00%'")
    value: str = Field(..., description="Formatted daily value")
    entry_count: int = Field(..., ge=0)
    is_future: bool = Field(default=False, description="Dated after today, excluded from rating")

    model_config = {"frozen": True}


class ChartPoint(BaseModel):
    """One point of the history chart."""

    date: date_type
    value: float

    model_config = {"frozen": True}


class HistoryView(BaseModel):
    """Everything the history screen shows for one metric."""

    metric: MetricType
    label: str
    rows: list[HistoryRow] = Field(default_factory=list, description="Newest first")
    points: list[ChartPoint] = Field(default_factory=list, description="Oldest first")
    overall: str = Field(..., description="Career figure across all days")
    sparkline: str = Field(default="")

    model_config = {"frozen": True}


class RatingView(BaseModel):
    """Display strings for a rating snapshot."""

    metric: MetricType
    label: str
    rating: str
    current: str
    baseline: str
    target: str
    multiplier: str
    momentum: str
    risk: str
    risk_level: str
    games: int
    days: int
    time_invested: str

    model_config = {"frozen": True}


def format_value(metric: MetricType | str, value: float) -> str:
    """Format a daily value for display."""
    profile = get_profile(metric)
    return f"{value:.{profile.decimals}f}{profile.unit}"


def format_score(aggregate: DailyAggregate) -> str:
    """Score text for a day: K/D/A for kda, the daily value otherwise."""
    if aggregate.metric == MetricType.KDA:
        return f"{aggregate.kills}/{aggregate.deaths}/{aggregate.assists}"
    return format_value(aggregate.metric, aggregate.value)


def format_duration(minutes: float) -> str:
    """Format minutes as 'Xh Ym'."""
    total = int(round(minutes))
    hours, mins = divmod(total, 60)
    return f"{hours}h {mins:02d}m"


def overall_value(series: Sequence[DailyAggregate], metric: MetricType | str) -> float:
    """Career figure for a metric.

    KDA uses the ratio of the summed career totals; rate metrics use the
    mean of the daily values.
    """
    metric = MetricType(metric)
    if not series:
        return 0.0

    if metric == MetricType.KDA:
        kills = sum(agg.kills for agg in series)
        deaths = sum(agg.deaths for agg in series)
        assists = sum(agg.assists for agg in series)
        return kda_ratio(kills, deaths, assists)

    return sum(agg.value for agg in series) / len(series)


def sparkline(values: Sequence[float]) -> str:
    """Render values as a unicode block sparkline."""
    if not values:
        return ""

    low, high = min(values), max(values)
    if high == low:
        return SPARK_CHARS[len(SPARK_CHARS) // 2] * len(values)

    scale = (len(SPARK_CHARS) - 1) / (high - low)
    return "".join(SPARK_CHARS[int(round((v - low) * scale))] for v in values)


def build_history_view(
    series: Sequence[DailyAggregate],
    metric: MetricType | str,
    today: Optional[date_type] = None,
) -> HistoryView:
    """Build the history view for a metric.

    Args:
        series: All stored days for the metric, in any order.
        metric: Metric type.
        today: Days after this date are flagged as future-dated.

    Returns:
        HistoryView with rows newest first and chart points oldest first.
    """
    metric = MetricType(metric)
    profile = get_profile(metric)
    ascending = sorted(series, key=lambda agg: agg.date)

    points = [ChartPoint(date=agg.date, value=daily_value(agg)) for agg in ascending]
    rows = [
        HistoryRow(
            date=agg.date,
            score=format_score(agg),
            value=format_value(metric, daily_value(agg)),
            entry_count=agg.entry_count,
            is_future=today is not None and agg.date > today,
        )
        for agg in reversed(ascending)
    ]

    return HistoryView(
        metric=metric,
        label=profile.label,
        rows=rows,
        points=points,
        overall=format_value(metric, overall_value(ascending, metric)),
        sparkline=sparkline([point.value for point in points]),
    )


def build_rating_view(snapshot: RatingSnapshot, minutes_per_game: float) -> RatingView:
    """Build display strings for a rating snapshot."""
    metric = snapshot.metric
    current = (
        format_value(metric, snapshot.current) if snapshot.current is not None else "No data yet"
    )

    return RatingView(
        metric=metric,
        label=get_profile(metric).label,
        rating=str(snapshot.rating),
        current=current,
        baseline=format_value(metric, snapshot.baseline),
        target=format_value(metric, snapshot.target),
        multiplier=f"x{snapshot.multiplier:.2f}",
        momentum=f"{snapshot.momentum:+.1f}%",
        risk=f"{snapshot.risk:.0f}%",
        risk_level=snapshot.risk_level,
        games=snapshot.total_games,
        days=snapshot.days_tracked,
        time_invested=format_duration(snapshot.total_games * minutes_per_game),
    )
