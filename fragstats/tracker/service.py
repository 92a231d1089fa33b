"""Stats tracker service: logs entries and keeps ratings current."""

import logging
import uuid
from datetime import date, datetime
from typing import Any, Callable, Optional

from fragstats.db.store import DataStore
from fragstats.models import (
    DailyAggregate,
    LogEntry,
    MetricType,
    RatingSettings,
    RatingSnapshot,
)
from fragstats.rating import coerce_multiplier, compute_rating, recompute_daily_totals
from fragstats.tracker.errors import DayNotFoundError, EntryNotFoundError

logger = logging.getLogger(__name__)


def _entry_fields(
    metric: MetricType,
    kills: Any = None,
    deaths: Any = None,
    assists: Any = None,
    value: Any = None,
) -> dict[str, Any]:
    """Pick the raw values relevant to a metric, skipping unset ones."""
    if metric == MetricType.KDA:
        candidates = {"kills": kills, "deaths": deaths, "assists": assists}
    else:
        candidates = {"value": value}
    return {key: val for key, val in candidates.items() if val is not None}


class StatsTracker:
    """Logs, edits and deletes entries and refreshes rating snapshots.

    Every change to a day's entry list goes through a single atomic
    store update that recomputes the day's totals from the entries,
    followed by a full rating recomputation for that metric.
    """

    def __init__(
        self,
        data_store: DataStore,
        settings: Optional[RatingSettings] = None,
        clock: Callable[[], date] = date.today,
    ):
        """Initialize the tracker.

        Args:
            data_store: DataStore instance for persistence.
            settings: Rating constants. Defaults to RatingSettings().
            clock: Returns today's date.
        """
        self._data_store = data_store
        self._settings = settings or RatingSettings()
        self._clock = clock

    @property
    def settings(self) -> RatingSettings:
        return self._settings

    def today(self) -> date:
        """Today's date according to the tracker clock."""
        return self._clock()

    # ==================== Entries ====================

    def _apply(
        self,
        metric: MetricType,
        day: date,
        change: Callable[[list[LogEntry]], list[LogEntry]],
        require_existing: bool,
    ) -> DailyAggregate:
        """Run an entry-list change as one read-modify-write of the day."""

        def mutate(existing: Optional[DailyAggregate]) -> DailyAggregate:
            if existing is None:
                if require_existing:
                    raise DayNotFoundError(metric.value, day.isoformat())
                existing = DailyAggregate(metric=metric, date=day)
            entries = change(existing.effective_entries())
            totals = recompute_daily_totals(entries, metric)
            return existing.with_entries(entries, totals)

        aggregate = self._data_store.update_day(metric, day, mutate)
        self.refresh_rating(metric)
        return aggregate

    def log_entry(
        self,
        metric: MetricType | str,
        day: date,
        kills: Any = 0,
        deaths: Any = 0,
        assists: Any = 0,
        value: Any = 0.0,
    ) -> DailyAggregate:
        """Append a new entry to a day, creating the day if needed.

        Args:
            metric: Metric to log.
            day: Calendar date the game belongs to.
            kills: Kills (kda).
            deaths: Deaths (kda).
            assists: Assists (kda).
            value: Headshot rate or damage value (hsr/adr).

        Returns:
            The updated daily aggregate.
        """
        metric = MetricType(metric)
        entry = LogEntry(
            id=uuid.uuid4().hex,
            timestamp=datetime.now(),
            **_entry_fields(metric, kills, deaths, assists, value),
        )

        aggregate = self._apply(
            metric, day, lambda entries: entries + [entry], require_existing=False
        )
        logger.info("Logged %s entry %s for %s", metric.value, entry.id, day.isoformat())
        return aggregate

    def edit_entry(
        self,
        metric: MetricType | str,
        day: date,
        entry_id: str,
        kills: Any = None,
        deaths: Any = None,
        assists: Any = None,
        value: Any = None,
    ) -> DailyAggregate:
        """Change the values of one entry, keeping its id and timestamp.

        Values left as None are unchanged.

        Raises:
            DayNotFoundError: The day does not exist.
            EntryNotFoundError: No entry with that id on the day.
        """
        metric = MetricType(metric)
        updates = _entry_fields(metric, kills, deaths, assists, value)

        def change(entries: list[LogEntry]) -> list[LogEntry]:
            for i, entry in enumerate(entries):
                if entry.entry_id == entry_id:
                    edited = LogEntry.model_validate({**entry.model_dump(), **updates})
                    return entries[:i] + [edited] + entries[i + 1:]
            raise EntryNotFoundError(metric.value, day.isoformat(), entry_id)

        aggregate = self._apply(metric, day, change, require_existing=True)
        logger.info("Edited %s entry %s on %s", metric.value, entry_id, day.isoformat())
        return aggregate

    def delete_entry(self, metric: MetricType | str, day: date, entry_id: str) -> DailyAggregate:
        """Remove one entry from a day.

        Removing the last entry leaves the day in place with zero totals.

        Raises:
            DayNotFoundError: The day does not exist.
            EntryNotFoundError: No entry with that id on the day.
        """
        metric = MetricType(metric)

        def change(entries: list[LogEntry]) -> list[LogEntry]:
            remaining = [entry for entry in entries if entry.entry_id != entry_id]
            if len(remaining) == len(entries):
                raise EntryNotFoundError(metric.value, day.isoformat(), entry_id)
            return remaining

        aggregate = self._apply(metric, day, change, require_existing=True)
        logger.info("Deleted %s entry %s on %s", metric.value, entry_id, day.isoformat())
        return aggregate

    def replace_day(
        self,
        metric: MetricType | str,
        day: date,
        kills: Any = 0,
        deaths: Any = 0,
        assists: Any = 0,
        value: Any = 0.0,
    ) -> DailyAggregate:
        """Replace a day's whole entry list with one entry holding the given totals."""
        metric = MetricType(metric)
        entry = LogEntry(
            id=uuid.uuid4().hex,
            timestamp=datetime.now(),
            **_entry_fields(metric, kills, deaths, assists, value),
        )

        aggregate = self._apply(metric, day, lambda entries: [entry], require_existing=False)
        logger.info("Replaced %s totals for %s", metric.value, day.isoformat())
        return aggregate

    def delete_day(self, metric: MetricType | str, day: date) -> None:
        """Remove a whole day document.

        Raises:
            DayNotFoundError: The day does not exist.
        """
        metric = MetricType(metric)
        if not self._data_store.delete_day(metric, day):
            raise DayNotFoundError(metric.value, day.isoformat())
        logger.info("Deleted %s day %s", metric.value, day.isoformat())
        self.refresh_rating(metric)

    def get_day(self, metric: MetricType | str, day: date) -> Optional[DailyAggregate]:
        """Get one day's aggregate, or None."""
        return self._data_store.get_day(MetricType(metric), day)

    def get_history(self, metric: MetricType | str) -> list[DailyAggregate]:
        """All days for a metric in ascending order, future-dated ones included."""
        return self._data_store.get_series(MetricType(metric))

    # ==================== Rating ====================

    def get_multiplier(self) -> float:
        """The persisted global target multiplier."""
        stored = self._data_store.get_multiplier(self._settings.default_multiplier)
        return coerce_multiplier(stored, self._settings.default_multiplier)

    def set_multiplier(self, multiplier: Any) -> float:
        """Persist a new target multiplier and refresh every metric.

        Returns:
            The multiplier actually stored after coercion.
        """
        coerced = coerce_multiplier(multiplier, self._settings.default_multiplier)
        self._data_store.set_multiplier(coerced)
        logger.info("Target multiplier set to %.2f", coerced)
        self.refresh_all()
        return coerced

    def refresh_rating(
        self, metric: MetricType | str, today: Optional[date] = None
    ) -> RatingSnapshot:
        """Recompute and cache the rating snapshot for a metric."""
        metric = MetricType(metric)
        today = today or self.today()

        snapshot = compute_rating(
            self._data_store.get_series(metric),
            today,
            self.get_multiplier(),
            metric,
            self._settings,
        )
        self._data_store.save_snapshot(snapshot)
        logger.debug(
            "Rating for %s: %d (risk %.1f%%)", metric.value, snapshot.rating, snapshot.risk
        )
        return snapshot

    def refresh_all(self, today: Optional[date] = None) -> dict[MetricType, RatingSnapshot]:
        """Recompute and cache snapshots for every metric."""
        return {metric: self.refresh_rating(metric, today) for metric in MetricType}

    def get_cached_rating(self, metric: MetricType | str) -> RatingSnapshot:
        """The cached snapshot for a metric, computing it if none is stored."""
        metric = MetricType(metric)
        snapshot = self._data_store.get_snapshot(metric)
        if snapshot is None:
            snapshot = self.refresh_rating(metric)
        return snapshot
