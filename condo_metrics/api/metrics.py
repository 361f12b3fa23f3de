"""REST endpoints for dashboard metrics.

Paths:
    GET /api/companies/{company_id}/metrics
    GET /api/companies/{company_id}/metrics/report

Query params:
    anchor: ISO-8601 instant to measure windows from (default: now)
    demo:   return the placeholder dataset instead of live figures

When the store cannot be read the placeholder dataset is served (flagged
``is_demo``) unless demo fallback is disabled, in which case 503.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from condo_metrics.api.dependencies import CompanyId, current_profile, enforce
from condo_metrics.domain.access import UserProfile, can_view_dashboard
from condo_metrics.domain.metrics import MetricsSnapshot
from condo_metrics.report.formatter import MetricsFormatter
from condo_metrics.services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)


def create_metrics_router(service: DashboardService, demo_on_error: bool = True) -> APIRouter:
    """Factory that wires the metrics endpoints to a DashboardService."""

    router = APIRouter(prefix="/api/companies/{company_id}", tags=["metrics"])

    async def _snapshot(company_id: str, anchor: datetime | None, demo: bool) -> MetricsSnapshot:
        if demo:
            return service.get_demo(anchor)
        if demo_on_error:
            return await service.get_metrics_or_demo(company_id, anchor)
        try:
            return await service.get_metrics(company_id, anchor)
        except Exception as exc:
            logger.error("Dashboard fetch failed for company %s: %s", company_id, exc)
            raise HTTPException(status_code=503, detail="Metrics temporarily unavailable") from exc

    @router.get("/metrics")
    async def get_metrics(
        company_id: CompanyId,
        anchor: Optional[datetime] = None,
        demo: bool = False,
        profile: UserProfile = Depends(current_profile),
    ) -> dict[str, Any]:
        enforce(can_view_dashboard, profile, company_id)
        snapshot = await _snapshot(company_id, anchor, demo)
        return snapshot.model_dump(mode="json")

    @router.get("/metrics/report", response_class=PlainTextResponse)
    async def get_report(
        company_id: CompanyId,
        anchor: Optional[datetime] = None,
        demo: bool = False,
        profile: UserProfile = Depends(current_profile),
    ) -> str:
        enforce(can_view_dashboard, profile, company_id)
        snapshot = await _snapshot(company_id, anchor, demo)
        return MetricsFormatter.format_plain(snapshot, title=f"Dashboard for {company_id}")

    return router
