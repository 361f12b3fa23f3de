"""Pydantic models for request bodies accepted by the HTTP API."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from condo_metrics.domain.enums import IncidentPriority, IncidentStatus, MovementType
from condo_metrics.domain.incident import Incident
from condo_metrics.domain.movement import MovementRecord
from condo_metrics.foundation.identifiers import new_id


class MovementIn(BaseModel):
    """A vehicle entry or exit as posted by the gate application."""

    record_id: Optional[str] = Field(
        default=None, max_length=128, description="Client-side id; assigned if absent"
    )
    driver_name: str = Field(..., max_length=256)
    movement_type: MovementType
    block: str = Field(..., max_length=64)
    unit: str = Field(default="", max_length=64)
    license_plate: Optional[str] = Field(default=None, max_length=32)
    vehicle_type: Optional[str] = Field(default=None, max_length=64)
    occurred_at: Any = Field(default=None, description="When the vehicle passed")
    recorded_at: Any = Field(default=None, description="Storage time; defaults to now")

    def to_record(self, company_id: str, now: datetime) -> MovementRecord:
        return MovementRecord(
            record_id=self.record_id or new_id(),
            company_id=company_id,
            driver_name=self.driver_name,
            movement_type=self.movement_type,
            block=self.block,
            unit=self.unit,
            license_plate=self.license_plate,
            vehicle_type=self.vehicle_type,
            occurred_at=self.occurred_at,
            recorded_at=now if self.recorded_at is None else self.recorded_at,
        )


class IncidentIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=256)
    description: str = Field(default="", max_length=4096)
    status: IncidentStatus = IncidentStatus.OPEN
    priority: IncidentPriority = IncidentPriority.MEDIUM
    reported_by: str = Field(default="", max_length=256)

    def to_incident(self, company_id: str, now: datetime) -> Incident:
        return Incident(
            incident_id=new_id(),
            company_id=company_id,
            title=self.title,
            description=self.description,
            status=self.status,
            priority=self.priority,
            reported_by=self.reported_by,
            reported_at=now,
        )


class IncidentStatusUpdate(BaseModel):
    status: IncidentStatus
