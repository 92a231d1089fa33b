"""LogEntry data model and lenient numeric coercion."""

import math
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

# Address used for entries stored without an id
LEGACY_ENTRY_ID = "legacy"


def coerce_count(value: Any) -> int:
    """Coerce form input to a non-negative whole count.

    Anything unparseable, non-finite or negative becomes 0. Fractional
    values are truncated.
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number) or number < 0:
        return 0
    return int(number)


def coerce_rate(value: Any) -> float:
    """Coerce form input to a non-negative finite float (0.0 otherwise)."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


class LogEntry(BaseModel):
    """A single logged game contributing to a daily aggregate."""

    id: Optional[str] = Field(default=None, description="Entry id, unique within a day")
    timestamp: Optional[datetime] = Field(default=None, description="When the entry was logged")
    kills: int = Field(default=0, ge=0, description="Kills (kda only)")
    deaths: int = Field(default=0, ge=0, description="Deaths (kda only)")
    assists: int = Field(default=0, ge=0, description="Assists (kda only)")
    value: float = Field(default=0.0, ge=0, description="Rate or damage value (hsr/adr)")

    model_config = {"frozen": True}

    @field_validator("kills", "deaths", "assists", mode="before")
    @classmethod
    def _lenient_count(cls, v: Any) -> int:
        return coerce_count(v)

    @field_validator("value", mode="before")
    @classmethod
    def _lenient_value(cls, v: Any) -> float:
        return coerce_rate(v)

    @property
    def entry_id(self) -> str:
        """Id used to address this entry for edit and delete."""
        return self.id or LEGACY_ENTRY_ID
