"""DailyAggregate and DailyTotals data models."""

from datetime import date as date_type
from typing import Any

from pydantic import BaseModel, Field, field_validator

from fragstats.models.entry import LEGACY_ENTRY_ID, LogEntry, coerce_count, coerce_rate
from fragstats.models.metric import MetricType


class DailyTotals(BaseModel):
    """Totals derived from one day's entries."""

    kills: int = Field(default=0, ge=0, description="Summed kills")
    deaths: int = Field(default=0, ge=0, description="Summed deaths")
    assists: int = Field(default=0, ge=0, description="Summed assists")
    ratio: float = Field(default=0.0, ge=0, description="KDA ratio of the summed totals")
    value: float = Field(default=0.0, ge=0, description="Mean entry value (hsr/adr)")
    entry_count: int = Field(default=0, ge=0, description="Number of entries")

    model_config = {"frozen": True}


class DailyAggregate(BaseModel):
    """One calendar day of accumulated totals for one metric."""

    metric: MetricType = Field(..., description="Metric the day belongs to")
    date: date_type = Field(..., description="Calendar date, unique per metric")
    kills: int = Field(default=0, ge=0, description="Total kills")
    deaths: int = Field(default=0, ge=0, description="Total deaths")
    assists: int = Field(default=0, ge=0, description="Total assists")
    ratio: float = Field(default=0.0, ge=0, description="Daily KDA ratio")
    value: float = Field(default=0.0, ge=0, description="Daily rate or damage value")
    entry_count: int = Field(default=0, ge=0, description="Entries logged for the day")
    entries: list[LogEntry] = Field(default_factory=list, description="Individual entries")

    model_config = {"frozen": True}

    @field_validator("kills", "deaths", "assists", "entry_count", mode="before")
    @classmethod
    def _lenient_count(cls, v: Any) -> int:
        return coerce_count(v)

    @field_validator("ratio", "value", mode="before")
    @classmethod
    def _lenient_value(cls, v: Any) -> float:
        return coerce_rate(v)

    @property
    def totals(self) -> DailyTotals:
        """The stored totals as a DailyTotals value."""
        return DailyTotals(
            kills=self.kills,
            deaths=self.deaths,
            assists=self.assists,
            ratio=self.ratio,
            value=self.value,
            entry_count=self.entry_count,
        )

    def effective_entries(self) -> list[LogEntry]:
        """Entries to edit against, including a synthetic legacy entry.

        Days written before per-entry logging only carry totals. Such a day
        is presented as a single legacy entry equal to those totals.
        """
        if self.entries:
            return list(self.entries)

        has_totals = any((self.kills, self.deaths, self.assists, self.value))
        if not has_totals and self.entry_count == 0:
            return []

        return [
            LogEntry(
                id=LEGACY_ENTRY_ID,
                kills=self.kills,
                deaths=self.deaths,
                assists=self.assists,
                value=self.value,
            )
        ]

    def with_entries(self, entries: list[LogEntry], totals: DailyTotals) -> "DailyAggregate":
        """Return a copy holding the given entries and totals."""
        return self.model_copy(
            update={
                "kills": totals.kills,
                "deaths": totals.deaths,
                "assists": totals.assists,
                "ratio": totals.ratio,
                "value": totals.value,
                "entry_count": totals.entry_count,
                "entries": list(entries),
            }
        )
