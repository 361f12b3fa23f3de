"""condo-metrics: dashboard metrics for condominium gate records.

This is the application entry point.  It wires the store, aggregator,
dashboard service, and HTTP/WebSocket endpoints together.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from fastapi import FastAPI

from condo_metrics.api.metrics import create_metrics_router
from condo_metrics.api.records import create_records_router
from condo_metrics.api.ws_dashboard import create_dashboard_ws_router
from condo_metrics.config import Settings, settings
from condo_metrics.core.aggregator import MetricsAggregator
from condo_metrics.core.stay import PairedStay, PlaceholderStay, StayEstimator
from condo_metrics.services.connection_manager import DashboardConnectionManager
from condo_metrics.services.dashboard_service import DashboardService
from condo_metrics.store.condo_store import InMemoryCondoStore

# ── Logging ──────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)

logger = logging.getLogger(__name__)


def build_stay_estimator(cfg: Settings) -> StayEstimator:
    if cfg.stay_strategy == "paired":
        return PairedStay(
            max_stay=timedelta(hours=cfg.stay_max_hours),
            fallback_minutes=cfg.stay_placeholder_minutes,
        )
    return PlaceholderStay(minutes=cfg.stay_placeholder_minutes)


def build_aggregator(cfg: Settings) -> MetricsAggregator:
    return MetricsAggregator(
        tz=cfg.timezone,
        week_days=cfg.week_days,
        month_days=cfg.month_days,
        trend_days=cfg.trend_days,
        top_visitors_limit=cfg.top_visitors_limit,
        stay_estimator=build_stay_estimator(cfg),
    )


def create_app(
    cfg: Settings = settings,
    store: InMemoryCondoStore | None = None,
) -> FastAPI:
    """Build a fully wired application (tests pass their own store/config)."""
    store = store or InMemoryCondoStore()
    service = DashboardService(store, build_aggregator(cfg))
    dashboard_manager = DashboardConnectionManager(service, demo_on_error=cfg.demo_on_error)

    app = FastAPI(
        title=cfg.app_name,
        description="Dashboard metrics for condominium vehicle and incident records",
        version="0.2.0",
        debug=cfg.debug,
    )

    # ── Routes ───────────────────────────────────────────────────────────

    app.include_router(create_records_router(store, dashboard_manager))
    app.include_router(create_metrics_router(service, demo_on_error=cfg.demo_on_error))
    app.include_router(create_dashboard_ws_router(dashboard_manager))

    # ── Health ───────────────────────────────────────────────────────────

    @app.get("/health")
    async def health() -> dict:
        return {
            "status": "ok",
            "timezone": cfg.timezone,
            "stay_strategy": cfg.stay_strategy,
            "movements": await store.movement_count(),
            "incidents": await store.incident_count(),
            "dashboard_clients": dashboard_manager.client_count,
        }

    logger.info("Application wired (timezone=%s, stay=%s)", cfg.timezone, cfg.stay_strategy)
    return app


app = create_app()
