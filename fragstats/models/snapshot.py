"""RatingSnapshot data model."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from fragstats.models.metric import MetricType


class RatingSnapshot(BaseModel):
    """Derived rating, trend and risk figures for one metric.

    Always recomputable from the daily aggregate series. Stored copies
    are a cache and never a source of truth.
    """

    metric: MetricType = Field(..., description="Metric the snapshot describes")
    rating: int = Field(..., description="Replayed cumulative rating")
    baseline: float = Field(default=0.0, description="Reference value used as 'yesterday'")
    current: Optional[float] = Field(
        default=None, description="Today's value, None when nothing is logged today"
    )
    target: float = Field(default=0.0, description="Baseline scaled by the multiplier")
    multiplier: float = Field(default=1.5, ge=1.0, description="Target multiplier used")
    momentum: float = Field(default=0.0, description="Percent change of current vs. baseline")
    risk: float = Field(default=0.0, ge=0, le=100, description="Percent of recent days below their running average")
    risk_level: Literal["low", "medium", "high"] = Field(default="low", description="Bucketed risk")
    games_per_day: dict[str, int] = Field(default_factory=dict, description="Entry count per ISO date")
    total_games: int = Field(default=0, ge=0, description="Entries across all rated days")
    days_tracked: int = Field(default=0, ge=0, description="Number of rated days")

    model_config = {"frozen": True}

    @property
    def has_current(self) -> bool:
        """Whether anything was logged for today."""
        return self.current is not None
