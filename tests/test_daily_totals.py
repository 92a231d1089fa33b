"""Property-based tests for daily total recomputation and entry models.

**Feature: daily-aggregates**
"""

from datetime import date

from hypothesis import given, settings
from hypothesis import strategies as st

from fragstats.models import DailyAggregate, LogEntry, MetricType
from fragstats.rating import daily_value, kda_ratio, recompute_daily_totals


kda_entries = st.lists(
    st.builds(
        LogEntry,
        id=st.uuids().map(lambda u: u.hex),
        kills=st.integers(min_value=0, max_value=60),
        deaths=st.integers(min_value=0, max_value=60),
        assists=st.integers(min_value=0, max_value=60),
    ),
    max_size=20,
)

rate_entries = st.lists(
    st.builds(
        LogEntry,
        id=st.uuids().map(lambda u: u.hex),
        value=st.floats(min_value=0.0, max_value=100.0, allow_nan=False, allow_infinity=False),
    ),
    max_size=20,
)


class TestKdaRatio:
    """
    **Feature: daily-aggregates, Property 4: Zero-death Guard**

    *For any* counts with zero deaths, the ratio is kills + assists.
    """

    @given(kills=st.integers(min_value=0, max_value=1000), assists=st.integers(min_value=0, max_value=1000))
    @settings(max_examples=50)
    def test_zero_deaths(self, kills: int, assists: int):
        assert kda_ratio(kills, 0, assists) == kills + assists

    def test_regular_ratio(self):
        assert kda_ratio(10, 4, 2) == 3.0


class TestKdaTotals:
    """
    **Feature: daily-aggregates, Property 5: Summed KDA Totals**

    *For any* list of KDA entries, totals are elementwise sums and the
    ratio is derived from the summed totals.
    """

    @given(entries=kda_entries)
    @settings(max_examples=100)
    def test_totals_are_sums(self, entries: list[LogEntry]):
        totals = recompute_daily_totals(entries, MetricType.KDA)

        assert totals.kills == sum(e.kills for e in entries)
        assert totals.deaths == sum(e.deaths for e in entries)
        assert totals.assists == sum(e.assists for e in entries)
        assert totals.ratio == kda_ratio(totals.kills, totals.deaths, totals.assists)
        assert totals.entry_count == len(entries)

    @given(entries=kda_entries)
    @settings(max_examples=50)
    def test_idempotent(self, entries: list[LogEntry]):
        assert recompute_daily_totals(entries, "kda") == recompute_daily_totals(entries, "kda")

    def test_example_day(self):
        entries = [
            LogEntry(id="a", kills=10, deaths=5, assists=2),
            LogEntry(id="b", kills=8, deaths=3, assists=4),
        ]

        totals = recompute_daily_totals(entries, MetricType.KDA)

        assert (totals.kills, totals.deaths, totals.assists) == (18, 8, 6)
        assert totals.ratio == 3.0
        assert totals.entry_count == 2


class TestRateTotals:
    """
    **Feature: daily-aggregates, Property 6: Averaged Rate Totals**

    *For any* list of rate entries, the daily value is their mean.
    """

    @given(entries=rate_entries.filter(lambda e: len(e) > 0))
    @settings(max_examples=100)
    def test_value_is_mean(self, entries: list[LogEntry]):
        totals = recompute_daily_totals(entries, MetricType.HSR)

        expected = sum(e.value for e in entries) / len(entries)
        assert abs(totals.value - expected) < 1e-9
        assert totals.entry_count == len(entries)

    @given(entries=rate_entries)
    @settings(max_examples=50)
    def test_idempotent(self, entries: list[LogEntry]):
        first = recompute_daily_totals(entries, MetricType.ADR)
        second = recompute_daily_totals(entries, MetricType.ADR)

        assert first == second

    def test_example_day(self):
        entries = [LogEntry(id="a", value=80.0), LogEntry(id="b", value=100.0)]

        totals = recompute_daily_totals(entries, MetricType.ADR)

        assert totals.value == 90.0
        assert totals.entry_count == 2


class TestEmptyDay:
    """Deleting every entry leaves zero totals, not an error."""

    def test_empty_kda(self):
        totals = recompute_daily_totals([], MetricType.KDA)

        assert totals.kills == totals.deaths == totals.assists == 0
        assert totals.ratio == 0.0
        assert totals.entry_count == 0

    def test_empty_rate(self):
        for metric in (MetricType.HSR, MetricType.ADR):
            totals = recompute_daily_totals([], metric)

            assert totals.value == 0.0
            assert totals.entry_count == 0


class TestLenientInput:
    """Invalid numbers are coerced to 0 instead of raising."""

    def test_entry_coercion(self):
        entry = LogEntry(kills="abc", deaths=-3, assists=2.9, value=float("nan"))

        assert entry.kills == 0
        assert entry.deaths == 0
        assert entry.assists == 2
        assert entry.value == 0.0

    def test_infinite_value(self):
        assert LogEntry(value=float("inf")).value == 0.0
        assert LogEntry(value="27.5").value == 27.5

    def test_aggregate_coercion(self):
        aggregate = DailyAggregate(
            metric="hsr", date="2025-01-01", value=-4.0, entry_count=None
        )

        assert aggregate.value == 0.0
        assert aggregate.entry_count == 0


class TestLegacyEntries:
    """Days stored with totals only expose one synthetic legacy entry."""

    def test_missing_id_uses_legacy_address(self):
        assert LogEntry(kills=1).entry_id == "legacy"
        assert LogEntry(id="abc").entry_id == "abc"

    def test_totals_only_day(self):
        aggregate = DailyAggregate(
            metric=MetricType.KDA, date=date(2025, 1, 1), kills=12, deaths=6, assists=3, ratio=2.5
        )

        entries = aggregate.effective_entries()

        assert len(entries) == 1
        assert entries[0].entry_id == "legacy"
        assert (entries[0].kills, entries[0].deaths, entries[0].assists) == (12, 6, 3)
        assert recompute_daily_totals(entries, MetricType.KDA).ratio == 2.5

    def test_empty_day_has_no_entries(self):
        aggregate = DailyAggregate(metric=MetricType.HSR, date=date(2025, 1, 1))

        assert aggregate.effective_entries() == []

    def test_stored_entries_win(self):
        entry = LogEntry(id="x", value=30.0)
        aggregate = DailyAggregate(
            metric=MetricType.HSR, date=date(2025, 1, 1), value=30.0, entry_count=1, entries=[entry]
        )

        assert aggregate.effective_entries() == [entry]


class TestDailyValue:
    """Per-day value extraction by metric."""

    def test_kda_uses_totals(self):
        aggregate = DailyAggregate(metric=MetricType.KDA, date=date(2025, 1, 1), kills=9, deaths=3, assists=3)

        assert daily_value(aggregate) == 4.0

    def test_kda_without_counts_uses_stored_ratio(self):
        aggregate = DailyAggregate(metric=MetricType.KDA, date=date(2025, 1, 1), ratio=1.75)

        assert daily_value(aggregate) == 1.75

    def test_kda_counts_win_over_stored_ratio(self):
        aggregate = DailyAggregate(
            metric=MetricType.KDA, date=date(2025, 1, 1), kills=6, deaths=2, ratio=9.0
        )

        assert daily_value(aggregate) == 3.0

    def test_rate_uses_value(self):
        aggregate = DailyAggregate(metric=MetricType.ADR, date=date(2025, 1, 1), value=77.5)

        assert daily_value(aggregate) == 77.5
