"""Rating engine settings model."""

from pydantic import BaseModel, Field

from fragstats.models.metric import MetricType

DEFAULT_GLOBAL_AVERAGES = {
    MetricType.KDA: 1.0,
    MetricType.HSR: 20.0,
    MetricType.ADR: 75.0,
}


class RatingSettings(BaseModel):
    """Tunable constants for the rating replay."""

    base_rating: float = Field(default=1500.0, description="Rating seed and reset value")
    conversion_factor: float = Field(
        default=50.0, description="Rating points per unit of day-over-day change"
    )
    risk_window: int = Field(default=10, ge=1, description="Recent days inspected for risk")
    default_multiplier: float = Field(default=1.5, ge=1.0, description="Target multiplier until one is saved")
    minutes_per_game: float = Field(default=35.0, ge=0, description="Assumed length of one game")
    global_averages: dict[MetricType, float] = Field(
        default_factory=lambda: dict(DEFAULT_GLOBAL_AVERAGES),
        description="Per-metric seed value for the first day of the replay",
    )

    model_config = {"frozen": True}

    def global_average(self, metric: MetricType) -> float:
        """Seed value for a metric, falling back to the built-in default."""
        metric = MetricType(metric)
        return self.global_averages.get(metric, DEFAULT_GLOBAL_AVERAGES[metric])
