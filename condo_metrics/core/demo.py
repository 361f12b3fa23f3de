"""Placeholder dashboard dataset.

Served when the store cannot be read so the dashboard shows a plausible
layout instead of an error.  Trend dates follow the anchor; every other
figure is fixed.
"""

from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

from condo_metrics.domain.incident import IncidentStatusCounts
from condo_metrics.domain.metrics import (
    DailyTrend,
    HourlyCount,
    MetricsSnapshot,
    VisitorCount,
)
from condo_metrics.domain.windows import to_local, trend_dates
from condo_metrics.foundation.clock import as_aware, utc_now

_HOURLY_ENTRIES = (
    2, 1, 0, 0, 0, 0, 3, 5, 12, 8, 7, 6,
    9, 11, 8, 7, 10, 15, 14, 12, 9, 6, 4, 3,
)

_DAILY_TREND = ((32, 30), (35, 33), (38, 36), (42, 40), (28, 27), (30, 28), (45, 40))

_TOP_VISITORS = (
    ("Juan Pérez", 15),
    ("María Gómez", 12),
    ("Carlos López", 10),
    ("Ana Martínez", 8),
    ("David Rodríguez", 7),
)

_VISITS_BY_BLOCK = {"A": 145, "B": 98, "C": 210, "D": 120, "E": 69}


def demo_snapshot(
    window_anchor: datetime | None = None,
    tz: ZoneInfo | str = "UTC",
    trend_days: int = len(_DAILY_TREND),
) -> MetricsSnapshot:
    """Build the placeholder snapshot for *window_anchor* (default: now).

    The weekly trend pattern repeats to fill *trend_days* buckets and always
    ends on the anchor day with the pattern's last figures.
    """
    zone = ZoneInfo(tz) if isinstance(tz, str) else tz
    anchor = to_local(as_aware(window_anchor or utc_now()), zone)
    days = trend_dates(anchor, zone, trend_days)
    # Index so the last bucket (the anchor day) takes the pattern's last figures
    offset = -trend_days % len(_DAILY_TREND)
    figures = [_DAILY_TREND[(offset + i) % len(_DAILY_TREND)] for i in range(trend_days)]

    return MetricsSnapshot(
        window_anchor=anchor,
        timezone=zone.key,
        total_entries=250,
        total_exits=220,
        total_visitors_today=35,
        total_visitors_week=178,
        total_visitors_month=642,
        average_stay_minutes=45,
        visits_by_block=dict(_VISITS_BY_BLOCK),
        incident_stats=IncidentStatusCounts(open=5, in_progress=3, resolved=12),
        top_visitors=[VisitorCount(name=n, count=c) for n, c in _TOP_VISITORS],
        entries_by_hour=[HourlyCount(hour=h, count=c) for h, c in enumerate(_HOURLY_ENTRIES)],
        entry_exit_trend=[
            DailyTrend(date=day.isoformat(), entries=entries, exits=exits)
            for day, (entries, exits) in zip(days, figures)
        ],
        is_demo=True,
    )
