"""Read contract between the dashboard and the document store.

The dashboard service depends on this protocol; swap implementations to
change where records come from without touching aggregation logic.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from condo_metrics.domain.enums import IncidentStatus
from condo_metrics.domain.movement import MovementRecord


class MovementRepository(Protocol):
    """Protocol for window-scoped reads."""

    async def fetch_movements(
        self,
        company_id: str,
        start: datetime,
        end: datetime,
    ) -> list[MovementRecord]:
        """Records whose canonical time lies in [start, end], newest first."""
        ...

    async def count_incidents(self, company_id: str, status: IncidentStatus) -> int:
        """Number of incidents in *status* for *company_id*."""
        ...

    async def count_malformed(self, company_id: str) -> int:
        """Stored records with no usable timestamp, which no fetch returns."""
        ...
