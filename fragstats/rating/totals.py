"""Daily total recomputation from individual log entries.

A day's stored totals are always derived from its entry list: counts are
summed for KDA, values are averaged for rate metrics.
"""

from typing import Iterable

from fragstats.models import DailyAggregate, DailyTotals, LogEntry, MetricType, get_profile


def kda_ratio(kills: int, deaths: int, assists: int) -> float:
    """Calculate (kills + assists) / deaths.

    Zero deaths carries no denominator penalty: the ratio is then
    kills + assists.
    """
    if deaths == 0:
        return float(kills + assists)
    return (kills + assists) / deaths


def daily_value(aggregate: DailyAggregate) -> float:
    """Per-day performance value of an aggregate.

    KDA is computed from the stored totals, or taken from the stored ratio
    when the day carries no counts and no entries. Rate metrics use the
    stored daily value directly.
    """
    if aggregate.metric == MetricType.KDA:
        has_counts = any((aggregate.kills, aggregate.deaths, aggregate.assists))
        if not has_counts and not aggregate.entries:
            return aggregate.ratio
        return kda_ratio(aggregate.kills, aggregate.deaths, aggregate.assists)
    return aggregate.value


def recompute_daily_totals(entries: Iterable[LogEntry], metric: MetricType | str) -> DailyTotals:
    """Recompute a day's totals from its entries.

    Args:
        entries: The day's entries after an add, edit or delete.
        metric: Metric the entries belong to.

    Returns:
        DailyTotals. An empty entry list yields zero totals and a zero
        entry count.
    """
    entries = list(entries)
    profile = get_profile(metric)

    if profile.aggregation == "sum":
        kills = sum(entry.kills for entry in entries)
        deaths = sum(entry.deaths for entry in entries)
        assists = sum(entry.assists for entry in entries)
        return DailyTotals(
            kills=kills,
            deaths=deaths,
            assists=assists,
            ratio=kda_ratio(kills, deaths, assists),
            entry_count=len(entries),
        )

    if not entries:
        return DailyTotals()

    mean = sum(entry.value for entry in entries) / len(entries)
    return DailyTotals(value=mean, entry_count=len(entries))
