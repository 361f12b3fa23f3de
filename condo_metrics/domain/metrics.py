"""MetricsSnapshot: the immutable output of the dashboard aggregator.

This is a pure data structure.  It is produced fresh on every call,
never mutated, and holds no reference back to the input records.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from condo_metrics.domain.incident import IncidentStatusCounts


class VisitorCount(BaseModel):
    name: str
    count: int = Field(..., ge=0)

    model_config = {"frozen": True}


class HourlyCount(BaseModel):
    hour: int = Field(..., ge=0, le=23)
    count: int = Field(..., ge=0)

    model_config = {"frozen": True}


class DailyTrend(BaseModel):
    date: str = Field(..., description="Local calendar date, YYYY-MM-DD")
    entries: int = Field(default=0, ge=0)
    exits: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class MetricsSnapshot(BaseModel):
    """Dashboard metrics for one organization at one anchor instant."""

    window_anchor: datetime = Field(..., description="Instant the windows were measured from")
    timezone: str = Field(..., description="IANA zone used for hour and date bucketing")

    total_entries: int = Field(..., ge=0, description="ENTRY records in the month window")
    total_exits: int = Field(..., ge=0, description="EXIT records in the month window")
    total_visitors_today: int = Field(..., ge=0)
    total_visitors_week: int = Field(..., ge=0)
    total_visitors_month: int = Field(..., ge=0)
    average_stay_minutes: int = Field(..., ge=0)

    visits_by_block: dict[str, int] = Field(default_factory=dict)
    incident_stats: IncidentStatusCounts = Field(default_factory=IncidentStatusCounts)
    top_visitors: list[VisitorCount] = Field(default_factory=list)
    entries_by_hour: list[HourlyCount] = Field(default_factory=list)
    entry_exit_trend: list[DailyTrend] = Field(default_factory=list)

    skipped_records: int = Field(
        default=0, ge=0, description="Records without a usable timestamp, left out of every metric"
    )
    is_demo: bool = Field(default=False, description="True for the placeholder dataset")

    model_config = {"frozen": True}
