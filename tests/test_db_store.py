"""Property-based tests for the database store.

**Feature: daily-aggregates**
"""

import tempfile
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from fragstats.db.store import DataStore
from fragstats.models import DailyAggregate, LogEntry, MetricType, RatingSnapshot


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield DataStore(db_path)


def sample_day(day: date = date(2025, 1, 1)) -> DailyAggregate:
    entries = [
        LogEntry(id="a1", timestamp=datetime(2025, 1, 1, 20, 15), kills=10, deaths=5, assists=2),
        LogEntry(id="b2", timestamp=datetime(2025, 1, 1, 21, 0), kills=6, deaths=3, assists=1),
    ]
    return DailyAggregate(
        metric=MetricType.KDA,
        date=day,
        kills=16,
        deaths=8,
        assists=3,
        ratio=19 / 8,
        entry_count=2,
        entries=entries,
    )


class TestDatabaseSchemaCompleteness:
    """
    **Feature: daily-aggregates, Property 7: Database Schema Completeness**

    *For any* fresh database, all required tables should exist.
    """

    def test_schema_completeness(self, temp_db: DataStore):
        tables = temp_db.get_tables()

        for table in DataStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    def test_reopen_keeps_data(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "test.db"
            DataStore(db_path).save_day(sample_day())

            reopened = DataStore(db_path)

            assert reopened.get_day(MetricType.KDA, date(2025, 1, 1)) == sample_day()


class TestDailyDocuments:
    """Day documents are keyed by metric and date."""

    def test_round_trip(self, temp_db: DataStore):
        temp_db.save_day(sample_day())

        loaded = temp_db.get_day(MetricType.KDA, date(2025, 1, 1))

        assert loaded == sample_day()
        assert [e.id for e in loaded.entries] == ["a1", "b2"]

    def test_missing_day(self, temp_db: DataStore):
        assert temp_db.get_day(MetricType.KDA, date(2025, 1, 1)) is None

    def test_metrics_are_independent(self, temp_db: DataStore):
        temp_db.save_day(sample_day())

        assert temp_db.get_day(MetricType.HSR, date(2025, 1, 1)) is None
        assert temp_db.get_series(MetricType.HSR) == []

    def test_save_replaces(self, temp_db: DataStore):
        temp_db.save_day(sample_day())
        replacement = DailyAggregate(metric=MetricType.KDA, date=date(2025, 1, 1), kills=1, entry_count=0)

        temp_db.save_day(replacement)

        assert temp_db.get_day(MetricType.KDA, date(2025, 1, 1)) == replacement
        assert len(temp_db.get_series(MetricType.KDA)) == 1

    @given(
        offsets=st.lists(st.integers(min_value=0, max_value=365), min_size=1, max_size=15, unique=True)
    )
    @settings(max_examples=25, deadline=None)
    def test_series_is_ascending(self, offsets: list[int]):
        """
        *For any* set of saved days, the series comes back in ascending
        date order.
        """
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")
            for offset in offsets:
                store.save_day(
                    DailyAggregate(
                        metric=MetricType.ADR,
                        date=date(2025, 1, 1) + timedelta(days=offset),
                        value=float(offset),
                        entry_count=1,
                    )
                )

            dates = [agg.date for agg in store.get_series(MetricType.ADR)]

            assert dates == sorted(dates)
            assert len(dates) == len(offsets)

    def test_series_until(self, temp_db: DataStore):
        for offset in range(5):
            temp_db.save_day(sample_day(date(2025, 1, 1) + timedelta(days=offset)))

        series = temp_db.get_series(MetricType.KDA, until=date(2025, 1, 3))

        assert [agg.date.day for agg in series] == [1, 2, 3]

    def test_delete_day(self, temp_db: DataStore):
        temp_db.save_day(sample_day())

        assert temp_db.delete_day(MetricType.KDA, date(2025, 1, 1)) is True
        assert temp_db.get_day(MetricType.KDA, date(2025, 1, 1)) is None
        assert temp_db.delete_day(MetricType.KDA, date(2025, 1, 1)) is False


class TestUpdateDay:
    """Read-modify-write runs as one transaction."""

    def test_creates_missing_day(self, temp_db: DataStore):
        seen = []

        def mutate(existing):
            seen.append(existing)
            return sample_day()

        stored = temp_db.update_day(MetricType.KDA, date(2025, 1, 1), mutate)

        assert seen == [None]
        assert stored == sample_day()
        assert temp_db.get_day(MetricType.KDA, date(2025, 1, 1)) == sample_day()

    def test_mutates_existing_day(self, temp_db: DataStore):
        temp_db.save_day(sample_day())

        stored = temp_db.update_day(
            MetricType.KDA,
            date(2025, 1, 1),
            lambda existing: existing.model_copy(update={"entry_count": 5}),
        )

        assert stored.entry_count == 5
        assert temp_db.get_day(MetricType.KDA, date(2025, 1, 1)).entry_count == 5

    def test_failed_mutation_rolls_back(self, temp_db: DataStore):
        temp_db.save_day(sample_day())

        def mutate(existing):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            temp_db.update_day(MetricType.KDA, date(2025, 1, 1), mutate)

        assert temp_db.get_day(MetricType.KDA, date(2025, 1, 1)) == sample_day()
        # The store stays writable after a rollback
        temp_db.save_day(sample_day(date(2025, 1, 2)))
        assert len(temp_db.get_series(MetricType.KDA)) == 2


class TestSnapshotsAndSettings:
    """Snapshot cache and the persisted multiplier."""

    def test_snapshot_round_trip(self, temp_db: DataStore):
        snapshot = RatingSnapshot(
            metric=MetricType.HSR,
            rating=1620,
            baseline=22.0,
            current=25.0,
            target=33.0,
            momentum=13.6,
            risk=40.0,
            risk_level="medium",
            games_per_day={"2025-01-01": 3},
            total_games=3,
            days_tracked=1,
        )

        temp_db.save_snapshot(snapshot)

        assert temp_db.get_snapshot(MetricType.HSR) == snapshot
        assert temp_db.get_snapshot(MetricType.KDA) is None

    def test_snapshot_is_replaced(self, temp_db: DataStore):
        temp_db.save_snapshot(RatingSnapshot(metric=MetricType.KDA, rating=1500))
        temp_db.save_snapshot(RatingSnapshot(metric=MetricType.KDA, rating=1550))

        assert temp_db.get_snapshot(MetricType.KDA).rating == 1550
        assert temp_db.get_stats()["rating_snapshots"] == 1

    def test_multiplier_default_and_update(self, temp_db: DataStore):
        assert temp_db.get_multiplier() == 1.5
        assert temp_db.get_multiplier(default=2.0) == 2.0

        temp_db.set_multiplier(1.25)

        assert temp_db.get_multiplier() == 1.25

    def test_corrupt_multiplier_falls_back(self, temp_db: DataStore):
        temp_db.set_setting("target_multiplier", "not-a-number")

        assert temp_db.get_multiplier() == 1.5

    def test_stats(self, temp_db: DataStore):
        temp_db.save_day(sample_day())

        stats = temp_db.get_stats()

        assert stats["daily_aggregates"] == 1
        assert stats["settings"] == 0
