"""Tests for the dashboard WebSocket connection manager."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest

from condo_metrics.core.aggregator import MetricsAggregator
from condo_metrics.domain.movement import MovementRecord
from condo_metrics.services.connection_manager import DashboardConnectionManager
from condo_metrics.services.dashboard_service import DashboardService
from condo_metrics.store.condo_store import InMemoryCondoStore

from tests.test_movement import _valid_movement


class _FakeSocket:
    def __init__(self, fail: bool = False) -> None:
        self.accepted = False
        self.sent: list[dict] = []
        self._fail = fail

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, data: dict) -> None:
        if self._fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)


@pytest.fixture
def store() -> InMemoryCondoStore:
    return InMemoryCondoStore()


@pytest.fixture
def manager(store: InMemoryCondoStore) -> DashboardConnectionManager:
    return DashboardConnectionManager(DashboardService(store, MetricsAggregator(tz="UTC")))


class TestDashboardConnectionManager:
    @pytest.mark.asyncio
    async def test_connect_and_disconnect(self, manager: DashboardConnectionManager) -> None:
        ws = _FakeSocket()
        await manager.connect("acme", ws)
        assert ws.accepted
        assert manager.client_count == 1
        await manager.disconnect("acme", ws)
        assert manager.client_count == 0

    @pytest.mark.asyncio
    async def test_push_goes_to_company_clients_only(
        self, manager: DashboardConnectionManager, store: InMemoryCondoStore
    ) -> None:
        acme, other = _FakeSocket(), _FakeSocket()
        await manager.connect("acme", acme)
        await manager.connect("other", other)

        now = datetime.now(timezone.utc).isoformat()
        await store.add_movement(MovementRecord.model_validate(_valid_movement(occurred_at=now)))
        await manager.on_movement_recorded("acme")

        assert len(acme.sent) == 1
        assert acme.sent[0]["type"] == "metrics"
        assert acme.sent[0]["company_id"] == "acme"
        assert acme.sent[0]["metrics"]["total_visitors_today"] == 1
        assert other.sent == []

    @pytest.mark.asyncio
    async def test_failed_client_is_dropped(self, manager: DashboardConnectionManager) -> None:
        good, bad = _FakeSocket(), _FakeSocket(fail=True)
        await manager.connect("acme", good)
        await manager.connect("acme", bad)

        await manager.on_movement_recorded("acme")

        assert len(good.sent) == 1
        assert manager.client_count == 1

    @pytest.mark.asyncio
    async def test_no_clients_no_work(self, manager: DashboardConnectionManager) -> None:
        await manager.on_movement_recorded("acme")
        assert manager.client_count == 0

    @pytest.mark.asyncio
    async def test_scheduled_push_is_held_until_done(
        self, manager: DashboardConnectionManager, store: InMemoryCondoStore
    ) -> None:
        ws = _FakeSocket()
        await manager.connect("acme", ws)
        now = datetime.now(timezone.utc).isoformat()
        await store.add_movement(MovementRecord.model_validate(_valid_movement(occurred_at=now)))

        task = manager.schedule_push("acme")
        assert manager.pending_pushes == 1

        await task
        await asyncio.sleep(0)  # let the done callback run
        assert manager.pending_pushes == 0
        assert ws.sent[0]["metrics"]["total_visitors_today"] == 1
