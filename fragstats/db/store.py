"""SQLite data store for fragstats."""

import json
import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Optional

from fragstats.models import DailyAggregate, LogEntry, MetricType, RatingSnapshot

logger = logging.getLogger(__name__)

MULTIPLIER_KEY = "target_multiplier"


class DataStore:
    """SQLite-based document store for daily aggregates.

    Each (metric, date) pair is one document row holding the day's
    totals and its embedded entry list as JSON.
    """

    REQUIRED_TABLES = [
        "daily_aggregates",
        "rating_snapshots",
        "settings",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # One document per metric and calendar date
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS daily_aggregates (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    metric TEXT NOT NULL,
                    date TEXT NOT NULL,
                    kills INTEGER NOT NULL DEFAULT 0,
                    deaths INTEGER NOT NULL DEFAULT 0,
                    assists INTEGER NOT NULL DEFAULT 0,
                    ratio REAL NOT NULL DEFAULT 0,
                    value REAL NOT NULL DEFAULT 0,
                    entry_count INTEGER NOT NULL DEFAULT 0,
                    entries TEXT NOT NULL DEFAULT '[]',
                    updated_at TEXT NOT NULL,
                    UNIQUE(metric, date)
                )
            """)

            # Cached rating snapshots, always recomputable
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS rating_snapshots (
                    metric TEXT PRIMARY KEY,
                    payload TEXT NOT NULL,
                    computed_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS settings (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Daily aggregates ====================

    @staticmethod
    def _row_to_aggregate(row: sqlite3.Row) -> DailyAggregate:
        entries = [LogEntry.model_validate(item) for item in json.loads(row["entries"] or "[]")]
        return DailyAggregate(
            metric=MetricType(row["metric"]),
            date=date.fromisoformat(row["date"]),
            kills=row["kills"],
            deaths=row["deaths"],
            assists=row["assists"],
            ratio=row["ratio"],
            value=row["value"],
            entry_count=row["entry_count"],
            entries=entries,
        )

    @staticmethod
    def _write_aggregate(cursor: sqlite3.Cursor, aggregate: DailyAggregate) -> None:
        entries = json.dumps([entry.model_dump(mode="json") for entry in aggregate.entries])
        cursor.execute(
            """
            INSERT OR REPLACE INTO daily_aggregates
            (metric, date, kills, deaths, assists, ratio, value, entry_count, entries, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                aggregate.metric.value,
                aggregate.date.isoformat(),
                aggregate.kills,
                aggregate.deaths,
                aggregate.assists,
                aggregate.ratio,
                aggregate.value,
                aggregate.entry_count,
                entries,
                datetime.now().isoformat(),
            ),
        )

    def save_day(self, aggregate: DailyAggregate) -> None:
        """Save or replace a daily aggregate document.

        Args:
            aggregate: Aggregate to save.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            self._write_aggregate(cursor, aggregate)
            conn.commit()
        finally:
            conn.close()

    def get_day(self, metric: MetricType, day: date) -> Optional[DailyAggregate]:
        """Get a single day's aggregate.

        Args:
            metric: Metric type.
            day: Calendar date.

        Returns:
            DailyAggregate if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT * FROM daily_aggregates WHERE metric = ? AND date = ?",
                (MetricType(metric).value, day.isoformat()),
            )
            row = cursor.fetchone()
            if row:
                return self._row_to_aggregate(row)
            return None
        finally:
            conn.close()

    def get_series(
        self, metric: MetricType, until: Optional[date] = None
    ) -> list[DailyAggregate]:
        """Get a metric's daily aggregates in ascending date order.

        Args:
            metric: Metric type.
            until: Optional inclusive upper date bound.

        Returns:
            List of daily aggregates.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if until:
                cursor.execute(
                    """
                    SELECT * FROM daily_aggregates
                    WHERE metric = ? AND date <= ?
                    ORDER BY date
                    """,
                    (MetricType(metric).value, until.isoformat()),
                )
            else:
                cursor.execute(
                    """
                    SELECT * FROM daily_aggregates
                    WHERE metric = ?
                    ORDER BY date
                    """,
                    (MetricType(metric).value,),
                )
            return [self._row_to_aggregate(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def update_day(
        self,
        metric: MetricType,
        day: date,
        mutate: Callable[[Optional[DailyAggregate]], DailyAggregate],
    ) -> DailyAggregate:
        """Atomically read, mutate and write one day's document.

        The read and the write happen inside a single IMMEDIATE
        transaction, so concurrent writers serialize on the database
        lock instead of overwriting each other.

        Args:
            metric: Metric type.
            day: Calendar date.
            mutate: Receives the current aggregate (None if the day does
                not exist yet) and returns the aggregate to store.

        Returns:
            The stored aggregate.
        """
        metric = MetricType(metric)
        conn = self._get_connection()
        conn.isolation_level = None
        try:
            cursor = conn.cursor()
            cursor.execute("BEGIN IMMEDIATE")
            try:
                cursor.execute(
                    "SELECT * FROM daily_aggregates WHERE metric = ? AND date = ?",
                    (metric.value, day.isoformat()),
                )
                row = cursor.fetchone()
                existing = self._row_to_aggregate(row) if row else None

                updated = mutate(existing)
                self._write_aggregate(cursor, updated)
                cursor.execute("COMMIT")
            except Exception:
                cursor.execute("ROLLBACK")
                raise

            logger.debug(
                "Updated %s day %s: %d entries", metric.value, day.isoformat(), updated.entry_count
            )
            return updated
        finally:
            conn.close()

    def delete_day(self, metric: MetricType, day: date) -> bool:
        """Delete a whole day document.

        Args:
            metric: Metric type.
            day: Calendar date.

        Returns:
            True if a document was removed.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "DELETE FROM daily_aggregates WHERE metric = ? AND date = ?",
                (MetricType(metric).value, day.isoformat()),
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    # ==================== Rating snapshots ====================

    def save_snapshot(self, snapshot: RatingSnapshot) -> None:
        """Cache a rating snapshot, replacing any previous one.

        Args:
            snapshot: Snapshot to cache.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO rating_snapshots (metric, payload, computed_at)
                VALUES (?, ?, ?)
                """,
                (
                    snapshot.metric.value,
                    snapshot.model_dump_json(),
                    datetime.now().isoformat(),
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def get_snapshot(self, metric: MetricType) -> Optional[RatingSnapshot]:
        """Get the cached snapshot for a metric.

        Args:
            metric: Metric type.

        Returns:
            RatingSnapshot if cached, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT payload FROM rating_snapshots WHERE metric = ?",
                (MetricType(metric).value,),
            )
            row = cursor.fetchone()
            if row:
                return RatingSnapshot.model_validate_json(row["payload"])
            return None
        finally:
            conn.close()

    # ==================== Settings ====================

    def get_setting(self, key: str) -> Optional[str]:
        """Get a raw setting value.

        Args:
            key: Setting key.

        Returns:
            Stored string value, or None if unset.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM settings WHERE key = ?", (key,))
            row = cursor.fetchone()
            return row["value"] if row else None
        finally:
            conn.close()

    def set_setting(self, key: str, value: str) -> None:
        """Store a raw setting value.

        Args:
            key: Setting key.
            value: Value to store.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "INSERT OR REPLACE INTO settings (key, value) VALUES (?, ?)",
                (key, value),
            )
            conn.commit()
        finally:
            conn.close()

    def get_multiplier(self, default: float = 1.5) -> float:
        """Get the persisted global target multiplier."""
        stored = self.get_setting(MULTIPLIER_KEY)
        if stored is None:
            return default
        try:
            return float(stored)
        except ValueError:
            return default

    def set_multiplier(self, multiplier: float) -> None:
        """Persist the global target multiplier."""
        self.set_setting(MULTIPLIER_KEY, repr(float(multiplier)))

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
