"""Metric type and per-metric profile data model."""

from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field


class MetricType(str, Enum):
    """The closed set of tracked metrics."""

    KDA = "kda"
    HSR = "hsr"
    ADR = "adr"


class MetricProfile(BaseModel):
    """Static description of how a metric is aggregated and displayed."""

    metric: MetricType = Field(..., description="Metric this profile describes")
    label: str = Field(..., description="Human readable metric name")
    aggregation: Literal["sum", "mean"] = Field(
        ..., description="How entries combine into daily totals"
    )
    unit: str = Field(default="", description="Display suffix for values")
    decimals: int = Field(default=2, ge=0, description="Decimal places shown for values")
    max_value: Optional[float] = Field(
        default=None, description="Upper bound accepted by input forms"
    )

    model_config = {"frozen": True}


METRIC_PROFILES: dict[MetricType, MetricProfile] = {
    MetricType.KDA: MetricProfile(
        metric=MetricType.KDA,
        label="KDA Ratio",
        aggregation="sum",
    ),
    MetricType.HSR: MetricProfile(
        metric=MetricType.HSR,
        label="Headshot Rate",
        aggregation="mean",
        unit="%",
        max_value=100.0,
    ),
    MetricType.ADR: MetricProfile(
        metric=MetricType.ADR,
        label="Average Damage per Round",
        decimals=1,
        aggregation="mean",
    ),
}


def get_profile(metric: MetricType | str) -> MetricProfile:
    """Look up the profile for a metric.

    Args:
        metric: MetricType or its string value (e.g. 'kda').

    Returns:
        The matching MetricProfile.

    Raises:
        ValueError: If the metric is unknown.
    """
    return METRIC_PROFILES[MetricType(metric)]
