"""Canonical MovementRecord model: one vehicle entry or exit event.

Timestamps are coerced leniently at the boundary: anything that cannot be
turned into a valid instant becomes ``None`` rather than rejecting the
record.  The aggregator treats such records as malformed and skips them,
so one bad document never breaks a dashboard.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from condo_metrics.domain.enums import MovementType
from condo_metrics.foundation.clock import as_aware

logger = logging.getLogger(__name__)


def coerce_timestamp(value: Any) -> datetime | None:
    """Turn a raw timestamp into a timezone-aware datetime, or None.

    Accepts datetimes, ISO-8601 strings, epoch seconds and document-store
    timestamp objects (``{"seconds": ..., "nanoseconds": ...}``).  Naive
    datetimes are taken as UTC.
    """
    if value is None:
        return None

    try:
        if isinstance(value, datetime):
            ts = value
        elif isinstance(value, bool):
            return None
        elif isinstance(value, (int, float)):
            ts = datetime.fromtimestamp(value, tz=timezone.utc)
        elif isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            ts = datetime.fromisoformat(text)
        elif isinstance(value, dict) and "seconds" in value:
            seconds = int(value["seconds"])
            nanos = int(value.get("nanoseconds", 0))
            ts = datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(
                microseconds=nanos // 1000
            )
        else:
            return None
    except (ValueError, TypeError, OverflowError, OSError) as exc:
        logger.debug("Unparseable timestamp %r: %s", value, exc)
        return None

    return as_aware(ts)


class MovementRecord(BaseModel):
    """A vehicle passing the gate, scoped to one organization.

    Immutable after creation.
    """

    record_id: str = Field(..., min_length=1, max_length=128)
    company_id: str = Field(..., min_length=1, max_length=128)
    driver_name: str = Field(..., max_length=256)
    movement_type: MovementType
    block: str = Field(..., max_length=64, description="Building or zone label")
    unit: str = Field(default="", max_length=64, description="House or apartment number")
    license_plate: Optional[str] = Field(default=None, max_length=32)
    vehicle_type: Optional[str] = Field(default=None, max_length=64)
    occurred_at: Optional[datetime] = Field(default=None, description="When the vehicle passed")
    recorded_at: Optional[datetime] = Field(default=None, description="When the system stored it")

    model_config = {"frozen": True}

    @field_validator("occurred_at", "recorded_at", mode="before")
    @classmethod
    def lenient_timestamp(cls, v: Any) -> datetime | None:
        return coerce_timestamp(v)

    @property
    def canonical_time(self) -> datetime | None:
        """The instant used for window membership and bucketing."""
        return self.recorded_at or self.occurred_at

    @property
    def is_malformed(self) -> bool:
        return self.canonical_time is None
