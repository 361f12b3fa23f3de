"""DashboardService: fetch per window, aggregate, fall back on failure.

The three movement windows and the three incident status counts are read
concurrently (fan-out) and all must complete before a snapshot is built
(fan-in).  The branches share no mutable state; records that arrive
between two reads may make the week count lag the today count, which is
accepted.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from condo_metrics.core.aggregator import MetricsAggregator
from condo_metrics.core.demo import demo_snapshot
from condo_metrics.domain.enums import IncidentStatus
from condo_metrics.domain.incident import IncidentStatusCounts
from condo_metrics.domain.metrics import MetricsSnapshot
from condo_metrics.store.repository import MovementRepository

logger = logging.getLogger(__name__)


class DashboardService:
    """Wires a MovementRepository to a MetricsAggregator.

    Args:
        repository: Source of window-scoped records and incident counts.
        aggregator: Configured aggregator (timezone, window lengths).
    """

    def __init__(self, repository: MovementRepository, aggregator: MetricsAggregator) -> None:
        self._repository = repository
        self._aggregator = aggregator

    async def get_metrics(
        self,
        company_id: str,
        window_anchor: datetime | None = None,
    ) -> MetricsSnapshot:
        """Compute a live snapshot.  Store errors propagate to the caller."""
        windows = self._aggregator.windows(window_anchor)

        today, week, month, incidents, held_back = await asyncio.gather(
            self._repository.fetch_movements(company_id, windows.today.start, windows.today.end),
            self._repository.fetch_movements(company_id, windows.week.start, windows.week.end),
            self._repository.fetch_movements(company_id, windows.month.start, windows.month.end),
            self.get_incident_counts(company_id),
            self._repository.count_malformed(company_id),
        )
        logger.debug(
            "Fetched company %s: today=%d week=%d month=%d malformed=%d",
            company_id, len(today), len(week), len(month), held_back,
        )

        return self._aggregator.compute_from_windows(
            windows.anchor, today, week, month, incidents, held_back
        )

    async def get_metrics_or_demo(
        self,
        company_id: str,
        window_anchor: datetime | None = None,
    ) -> MetricsSnapshot:
        """Like get_metrics(), but serves the demo snapshot if the store fails."""
        try:
            return await self.get_metrics(company_id, window_anchor)
        except Exception as exc:
            logger.error(
                "Dashboard fetch failed for company %s, serving demo data: %s",
                company_id, exc, exc_info=True,
            )
            return self.get_demo(window_anchor)

    def get_demo(self, window_anchor: datetime | None = None) -> MetricsSnapshot:
        return demo_snapshot(
            window_anchor, self._aggregator.timezone, self._aggregator.trend_days
        )

    async def get_incident_counts(self, company_id: str) -> IncidentStatusCounts:
        open_, in_progress, resolved = await asyncio.gather(
            self._repository.count_incidents(company_id, IncidentStatus.OPEN),
            self._repository.count_incidents(company_id, IncidentStatus.IN_PROGRESS),
            self._repository.count_incidents(company_id, IncidentStatus.RESOLVED),
        )
        return IncidentStatusCounts(open=open_, in_progress=in_progress, resolved=resolved)
