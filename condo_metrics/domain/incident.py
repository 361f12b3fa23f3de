"""Incident models and the pre-aggregated status counts fed to the dashboard."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from condo_metrics.domain.enums import IncidentPriority, IncidentStatus
from condo_metrics.foundation.clock import utc_now


class Incident(BaseModel):
    """An incident reported inside a condominium."""

    incident_id: str = Field(..., min_length=1, max_length=128)
    company_id: str = Field(..., min_length=1, max_length=128)
    title: str = Field(..., min_length=1, max_length=256)
    description: str = Field(default="", max_length=4096)
    status: IncidentStatus = IncidentStatus.OPEN
    priority: IncidentPriority = IncidentPriority.MEDIUM
    reported_by: str = Field(default="", max_length=256)
    reported_at: datetime = Field(default_factory=utc_now)


class IncidentStatusCounts(BaseModel):
    """Number of incidents per status, counted upstream."""

    open: int = Field(default=0, ge=0)
    in_progress: int = Field(default=0, ge=0)
    resolved: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def total(self) -> int:
        return self.open + self.in_progress + self.resolved
