"""In-memory movement and incident store with async-safe access.

Design notes:
    - An asyncio.Lock guards all mutations and reads so concurrent request
      handlers never observe a half-applied change.
    - Records are partitioned per company; nothing crosses organizations.
    - Records without a usable timestamp are kept (they are real documents)
      but never match a time-range fetch; count_malformed() reports them.
    - The store does NOT compute metrics.  It only answers the reads the
      dashboard service needs.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from datetime import datetime

from condo_metrics.domain.enums import IncidentStatus
from condo_metrics.domain.incident import Incident
from condo_metrics.domain.movement import MovementRecord

logger = logging.getLogger(__name__)


class IncidentNotFoundError(Exception):
    """Raised when an incident id is unknown for the given company."""

    def __init__(self, company_id: str, incident_id: str) -> None:
        self.company_id = company_id
        self.incident_id = incident_id
        super().__init__(f"Incident {incident_id} not found in company {company_id}")


class InMemoryCondoStore:
    """Async-safe, in-memory store implementing MovementRepository."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._movements: dict[str, list[MovementRecord]] = defaultdict(list)
        self._incidents: dict[str, dict[str, Incident]] = defaultdict(dict)

    # ── Writes ───────────────────────────────────────────────────────────

    async def add_movement(self, record: MovementRecord) -> MovementRecord:
        async with self._lock:
            self._movements[record.company_id].append(record)
            logger.debug(
                "Stored %s record %s for company %s (block=%s)",
                record.movement_type.value,
                record.record_id,
                record.company_id,
                record.block,
            )
            return record

    async def add_incident(self, incident: Incident) -> Incident:
        async with self._lock:
            self._incidents[incident.company_id][incident.incident_id] = incident
            logger.debug("Stored incident %s for company %s", incident.incident_id, incident.company_id)
            return incident

    async def set_incident_status(
        self,
        company_id: str,
        incident_id: str,
        status: IncidentStatus,
    ) -> Incident:
        """Change an incident's status and return the updated incident.

        Raises:
            IncidentNotFoundError: If the incident does not exist.
        """
        async with self._lock:
            incident = self._incidents.get(company_id, {}).get(incident_id)
            if incident is None:
                raise IncidentNotFoundError(company_id, incident_id)
            updated = incident.model_copy(update={"status": status})
            self._incidents[company_id][incident_id] = updated
            logger.info(
                "Incident %s: %s -> %s", incident_id, incident.status.value, status.value
            )
            return updated

    # ── Reads ────────────────────────────────────────────────────────────

    async def fetch_movements(
        self,
        company_id: str,
        start: datetime,
        end: datetime,
    ) -> list[MovementRecord]:
        async with self._lock:
            matched = [
                r for r in self._movements.get(company_id, [])
                if r.canonical_time is not None and start <= r.canonical_time <= end
            ]
        matched.sort(key=lambda r: r.canonical_time, reverse=True)
        return matched

    async def count_incidents(self, company_id: str, status: IncidentStatus) -> int:
        async with self._lock:
            return sum(
                1 for inc in self._incidents.get(company_id, {}).values()
                if inc.status == status
            )

    async def count_malformed(self, company_id: str) -> int:
        async with self._lock:
            return sum(1 for r in self._movements.get(company_id, []) if r.is_malformed)

    async def list_movements(self, company_id: str, limit: int = 100) -> list[MovementRecord]:
        """Most recent records first; malformed records sort last."""
        async with self._lock:
            records = list(self._movements.get(company_id, []))
        records.sort(
            key=lambda r: (r.canonical_time is not None, r.canonical_time or datetime.min),
            reverse=True,
        )
        return records[:limit]

    async def movement_count(self) -> int:
        async with self._lock:
            return sum(len(v) for v in self._movements.values())

    async def incident_count(self) -> int:
        async with self._lock:
            return sum(len(v) for v in self._incidents.values())
