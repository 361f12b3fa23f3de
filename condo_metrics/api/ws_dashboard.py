"""Dashboard WebSocket: pushes live metrics to connected frontends.

Path: /ws/dashboard/{company_id}

On connect the client receives the current snapshot; after that a fresh
snapshot is pushed whenever a movement is recorded for the company.
Clients may send "refresh" to request a snapshot on demand.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from condo_metrics.api.dependencies import websocket_profile
from condo_metrics.domain.access import can_view_dashboard
from condo_metrics.services.connection_manager import DashboardConnectionManager

logger = logging.getLogger(__name__)

_POLICY_VIOLATION = 1008
_INTERNAL_ERROR = 1011


def create_dashboard_ws_router(manager: DashboardConnectionManager) -> APIRouter:
    """Factory that wires the dashboard socket to a connection manager."""

    router = APIRouter()

    @router.websocket("/ws/dashboard/{company_id}")
    async def dashboard_socket(websocket: WebSocket, company_id: str) -> None:
        profile = websocket_profile(websocket)
        if not can_view_dashboard(profile, company_id):
            logger.info("Rejected dashboard socket for company %s", company_id)
            await websocket.close(code=_POLICY_VIOLATION)
            return

        await manager.connect(company_id, websocket)
        try:
            await websocket.send_json(await manager.snapshot_payload(company_id))
            while True:
                message = await websocket.receive_text()
                if message.strip().lower() == "refresh":
                    await websocket.send_json(await manager.snapshot_payload(company_id))
        except WebSocketDisconnect:
            pass
        except Exception as exc:
            logger.error("Dashboard socket for %s failed: %s", company_id, exc, exc_info=True)
            await websocket.close(code=_INTERNAL_ERROR)
        finally:
            await manager.disconnect(company_id, websocket)

    return router
