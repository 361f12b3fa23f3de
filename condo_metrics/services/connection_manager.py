"""Tracks dashboard WebSocket clients per company and pushes snapshots."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict

from fastapi import WebSocket

from condo_metrics.services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)


class DashboardConnectionManager:
    """Async-safe registry of frontend WebSocket connections."""

    def __init__(self, service: DashboardService, demo_on_error: bool = True) -> None:
        self._service = service
        self._demo_on_error = demo_on_error
        self._clients: dict[str, set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()
        self._pushes: set[asyncio.Task] = set()

    # ── Client management ────────────────────────────────────────────

    async def connect(self, company_id: str, ws: WebSocket) -> None:
        await ws.accept()
        async with self._lock:
            self._clients[company_id].add(ws)
        logger.info("Dashboard client connected to %s (%d total)", company_id, self.client_count)

    async def disconnect(self, company_id: str, ws: WebSocket) -> None:
        async with self._lock:
            clients = self._clients.get(company_id)
            if clients is not None:
                clients.discard(ws)
                if not clients:
                    del self._clients[company_id]
        logger.info("Dashboard client disconnected from %s (%d remaining)", company_id, self.client_count)

    @property
    def client_count(self) -> int:
        return sum(len(c) for c in self._clients.values())

    # ── Snapshot + broadcast ─────────────────────────────────────────

    async def snapshot_payload(self, company_id: str) -> dict:
        if self._demo_on_error:
            snapshot = await self._service.get_metrics_or_demo(company_id)
        else:
            snapshot = await self._service.get_metrics(company_id)
        return {"type": "metrics", "company_id": company_id, "metrics": snapshot.model_dump(mode="json")}

    def schedule_push(self, company_id: str) -> asyncio.Task:
        """Start on_movement_recorded() in the background.

        The task is held until it finishes so the event loop cannot
        collect it mid-push.
        """
        task = asyncio.create_task(self.on_movement_recorded(company_id))
        self._pushes.add(task)
        task.add_done_callback(self._pushes.discard)
        return task

    @property
    def pending_pushes(self) -> int:
        return len(self._pushes)

    async def on_movement_recorded(self, company_id: str) -> None:
        """Called after a movement is stored.  Pushes a fresh snapshot.

        Runs in a background task so it doesn't block ingestion.
        """
        async with self._lock:
            clients = list(self._clients.get(company_id, ()))
        if not clients:
            return

        try:
            payload = await self.snapshot_payload(company_id)
        except Exception as exc:
            logger.error("Dashboard snapshot for %s failed: %s", company_id, exc, exc_info=True)
            return

        stale: list[WebSocket] = []
        for ws in clients:
            try:
                await ws.send_json(payload)
            except Exception as exc:
                logger.warning("Dropping dashboard client after send failure: %s", exc)
                stale.append(ws)
        for ws in stale:
            await self.disconnect(company_id, ws)
