"""REST endpoints that feed the dashboard: movements and incidents.

Paths:
    POST  /api/companies/{company_id}/movements
    GET   /api/companies/{company_id}/movements
    POST  /api/companies/{company_id}/incidents
    PATCH /api/companies/{company_id}/incidents/{incident_id}

A stored movement triggers a background push of fresh metrics to the
company's connected dashboards.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query

from condo_metrics.api.dependencies import CompanyId, current_profile, enforce
from condo_metrics.domain.access import (
    UserProfile,
    can_manage_incidents,
    can_record_movement,
    can_view_dashboard,
)
from condo_metrics.foundation.clock import utc_now
from condo_metrics.models.requests import IncidentIn, IncidentStatusUpdate, MovementIn
from condo_metrics.services.connection_manager import DashboardConnectionManager
from condo_metrics.store.condo_store import IncidentNotFoundError, InMemoryCondoStore

logger = logging.getLogger(__name__)


def create_records_router(
    store: InMemoryCondoStore,
    dashboard_manager: DashboardConnectionManager | None = None,
) -> APIRouter:
    """Factory that wires the record endpoints to a concrete store."""

    router = APIRouter(prefix="/api/companies/{company_id}", tags=["records"])

    @router.post("/movements", status_code=201)
    async def record_movement(
        company_id: CompanyId,
        body: MovementIn,
        profile: UserProfile = Depends(current_profile),
    ) -> dict[str, Any]:
        enforce(can_record_movement, profile, company_id)

        record = await store.add_movement(body.to_record(company_id, utc_now()))
        if record.is_malformed:
            logger.warning("Movement %s stored without a usable timestamp", record.record_id)

        if dashboard_manager is not None:
            dashboard_manager.schedule_push(company_id)

        return record.model_dump(mode="json")

    @router.get("/movements")
    async def list_movements(
        company_id: CompanyId,
        limit: int = Query(default=100, ge=1, le=1000),
        profile: UserProfile = Depends(current_profile),
    ) -> dict[str, Any]:
        enforce(can_view_dashboard, profile, company_id)
        records = await store.list_movements(company_id, limit=limit)
        return {
            "movements": [r.model_dump(mode="json") for r in records],
            "count": len(records),
        }

    @router.post("/incidents", status_code=201)
    async def report_incident(
        company_id: CompanyId,
        body: IncidentIn,
        profile: UserProfile = Depends(current_profile),
    ) -> dict[str, Any]:
        enforce(can_view_dashboard, profile, company_id)
        incident = await store.add_incident(body.to_incident(company_id, utc_now()))
        return incident.model_dump(mode="json")

    @router.patch("/incidents/{incident_id}")
    async def update_incident_status(
        company_id: CompanyId,
        incident_id: str,
        body: IncidentStatusUpdate,
        profile: UserProfile = Depends(current_profile),
    ) -> dict[str, Any]:
        enforce(can_manage_incidents, profile, company_id)
        try:
            incident = await store.set_incident_status(company_id, incident_id, body.status)
        except IncidentNotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return incident.model_dump(mode="json")

    return router
