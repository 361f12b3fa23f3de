"""MetricsAggregator: deterministic dashboard metrics computation.

Design principles:
    1. Pure function: accepts an anchor, records and incident counts,
       returns a MetricsSnapshot.
    2. No side effects, no I/O, no hidden clock reads beyond the default
       anchor when none is supplied.
    3. Hour-of-day and calendar-date bucketing use an explicit timezone,
       never the host's.
    4. A record without a usable timestamp is skipped, not fatal.

Sub-metrics:
    totals           ENTRY / EXIT counts in the month window
    visitors         record count per window (repeat visits count)
    entries_by_hour  24 buckets of ENTRY records in the today window
    entry_exit_trend one bucket per local day for the last trend_days days,
                     fed by the week window
    top_visitors     most frequent drivers in the month window
    visits_by_block  per-block counts in the month window, first-seen order
    average_stay     delegated to a StayEstimator
"""

from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime
from typing import Sequence
from zoneinfo import ZoneInfo

from condo_metrics.core.stay import PlaceholderStay, StayEstimator
from condo_metrics.domain.enums import MovementType
from condo_metrics.domain.incident import IncidentStatusCounts
from condo_metrics.domain.metrics import (
    DailyTrend,
    HourlyCount,
    MetricsSnapshot,
    VisitorCount,
)
from condo_metrics.domain.movement import MovementRecord
from condo_metrics.domain.windows import (
    DashboardWindows,
    build_windows,
    local_date,
    to_local,
    trend_dates,
)
from condo_metrics.foundation.clock import as_aware, utc_now

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24


class MetricsAggregator:
    """Stateless dashboard aggregator.

    Args:
        tz: Timezone for local-day bucketing (ZoneInfo or IANA name).
        week_days: Length of the week window in days.
        month_days: Length of the month window in days.
        trend_days: Number of daily buckets in the entry/exit trend.
        top_visitors_limit: Maximum length of the top visitors list.
        stay_estimator: Strategy for average_stay_minutes.
    """

    def __init__(
        self,
        tz: ZoneInfo | str = "UTC",
        week_days: int = 7,
        month_days: int = 30,
        trend_days: int = 7,
        top_visitors_limit: int = 5,
        stay_estimator: StayEstimator | None = None,
    ) -> None:
        self._tz = ZoneInfo(tz) if isinstance(tz, str) else tz
        self._week_days = week_days
        self._month_days = month_days
        self._trend_days = trend_days
        self._top_visitors_limit = top_visitors_limit
        self._stay_estimator = stay_estimator or PlaceholderStay()

    @property
    def timezone(self) -> ZoneInfo:
        return self._tz

    @property
    def trend_days(self) -> int:
        return self._trend_days

    # ── Public API ───────────────────────────────────────────────────────

    def windows(self, window_anchor: datetime | None = None) -> DashboardWindows:
        """The today/week/month windows for *window_anchor* (default: now)."""
        return build_windows(
            self._resolve_anchor(window_anchor),
            self._tz,
            week_days=self._week_days,
            month_days=self._month_days,
        )

    def compute(
        self,
        window_anchor: datetime | None,
        records: Sequence[MovementRecord],
        incident_counts: IncidentStatusCounts | None = None,
    ) -> MetricsSnapshot:
        """Produce a snapshot from one flat record set.

        Each window is filtered independently from *records*; malformed
        records are left out of every window.
        """
        windows = self.windows(window_anchor)
        valid, skipped = self._partition(records)

        today = [r for r in valid if windows.today.contains(r.canonical_time)]
        week = [r for r in valid if windows.week.contains(r.canonical_time)]
        month = [r for r in valid if windows.month.contains(r.canonical_time)]

        return self._assemble(windows, today, week, month, incident_counts, skipped)

    def compute_from_windows(
        self,
        window_anchor: datetime | None,
        today: Sequence[MovementRecord],
        week: Sequence[MovementRecord],
        month: Sequence[MovementRecord],
        incident_counts: IncidentStatusCounts | None = None,
        held_back: int = 0,
    ) -> MetricsSnapshot:
        """Produce a snapshot from three record sets fetched per window.

        The sets are trusted to belong to their windows.  They may have been
        read at slightly different moments, so week is not required to
        contain today.  *held_back* counts malformed records the store kept
        out of every fetch; it is added to skipped_records.
        """
        windows = self.windows(window_anchor)
        today_ok, skipped_today = self._partition(today)
        week_ok, skipped_week = self._partition(week)
        month_ok, skipped_month = self._partition(month)
        skipped = max(skipped_today, skipped_week, skipped_month) + held_back

        return self._assemble(windows, today_ok, week_ok, month_ok, incident_counts, skipped)

    # ── Assembly ─────────────────────────────────────────────────────────

    def _assemble(
        self,
        windows: DashboardWindows,
        today: list[MovementRecord],
        week: list[MovementRecord],
        month: list[MovementRecord],
        incident_counts: IncidentStatusCounts | None,
        skipped: int,
    ) -> MetricsSnapshot:
        entries = sum(1 for r in month if r.movement_type == MovementType.ENTRY)
        exits = sum(1 for r in month if r.movement_type == MovementType.EXIT)

        return MetricsSnapshot(
            window_anchor=windows.anchor,
            timezone=self._tz.key,
            total_entries=entries,
            total_exits=exits,
            total_visitors_today=len(today),
            total_visitors_week=len(week),
            total_visitors_month=len(month),
            average_stay_minutes=self._stay_estimator.estimate(month),
            visits_by_block=self._visits_by_block(month),
            incident_stats=incident_counts or IncidentStatusCounts(),
            top_visitors=self._top_visitors(month),
            entries_by_hour=self._entries_by_hour(today),
            entry_exit_trend=self._entry_exit_trend(windows.anchor, week),
            skipped_records=skipped,
        )

    # ── Sub-metrics ──────────────────────────────────────────────────────

    def _entries_by_hour(self, today: list[MovementRecord]) -> list[HourlyCount]:
        counts = [0] * HOURS_PER_DAY
        for record in today:
            if record.movement_type == MovementType.ENTRY:
                counts[to_local(record.canonical_time, self._tz).hour] += 1
        return [HourlyCount(hour=h, count=c) for h, c in enumerate(counts)]

    def _entry_exit_trend(
        self,
        anchor: datetime,
        week: list[MovementRecord],
    ) -> list[DailyTrend]:
        buckets: dict[str, dict[str, int]] = {
            day.isoformat(): {"entries": 0, "exits": 0}
            for day in trend_dates(anchor, self._tz, self._trend_days)
        }

        dropped = 0
        for record in week:
            bucket = buckets.get(local_date(record.canonical_time, self._tz).isoformat())
            if bucket is None:
                dropped += 1
                continue
            if record.movement_type == MovementType.ENTRY:
                bucket["entries"] += 1
            else:
                bucket["exits"] += 1

        if dropped:
            logger.debug("Trend: %d week record(s) fell outside the daily buckets", dropped)

        return [DailyTrend(date=day, **counts) for day, counts in buckets.items()]

    def _top_visitors(self, month: list[MovementRecord]) -> list[VisitorCount]:
        # most_common() sorts stably, so ties keep first-seen order
        counts = Counter(r.driver_name for r in month)
        return [
            VisitorCount(name=name, count=count)
            for name, count in counts.most_common(self._top_visitors_limit)
        ]

    @staticmethod
    def _visits_by_block(month: list[MovementRecord]) -> dict[str, int]:
        return dict(Counter(r.block for r in month))

    # ── Helpers ──────────────────────────────────────────────────────────

    @staticmethod
    def _resolve_anchor(window_anchor: datetime | None) -> datetime:
        return as_aware(window_anchor or utc_now())

    @staticmethod
    def _partition(
        records: Sequence[MovementRecord],
    ) -> tuple[list[MovementRecord], int]:
        """Split into records with a usable timestamp and a skipped count."""
        valid: list[MovementRecord] = []
        skipped = 0
        for record in records:
            if record.is_malformed:
                skipped += 1
                logger.debug("Skipping record %s: no usable timestamp", record.record_id)
                continue
            valid.append(record)
        return valid, skipped


def compute_metrics(
    window_anchor: datetime | None,
    records: Sequence[MovementRecord],
    incident_counts: IncidentStatusCounts | None = None,
    *,
    tz: ZoneInfo | str = "UTC",
) -> MetricsSnapshot:
    """Compute a snapshot with default window lengths and placeholder stay."""
    return MetricsAggregator(tz=tz).compute(window_anchor, records, incident_counts)
