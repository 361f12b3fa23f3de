"""Time windows anchored at the moment a dashboard is computed.

Three windows are used, each evaluated independently:

    today:  local midnight .. local end-of-day of the anchor's day
    week:   anchor - week_days .. anchor
    month:  anchor - month_days .. anchor

Day arithmetic happens on local wall-clock time, so "7 days ago" stays at
the same local hour across a DST change.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from pydantic import BaseModel


class TimeWindow(BaseModel):
    """Closed interval [start, end] of timezone-aware instants."""

    start: datetime
    end: datetime

    model_config = {"frozen": True}

    def contains(self, ts: datetime) -> bool:
        return self.start <= ts <= self.end


class DashboardWindows(BaseModel):
    anchor: datetime
    today: TimeWindow
    week: TimeWindow
    month: TimeWindow

    model_config = {"frozen": True}


def to_local(ts: datetime, tz: ZoneInfo) -> datetime:
    """Convert an instant to local wall-clock time in *tz*."""
    return ts.astimezone(tz)


def local_date(ts: datetime, tz: ZoneInfo) -> date:
    return ts.astimezone(tz).date()


def build_windows(
    anchor: datetime,
    tz: ZoneInfo,
    week_days: int = 7,
    month_days: int = 30,
) -> DashboardWindows:
    """Compute the today/week/month windows for *anchor* in *tz*."""
    local_anchor = to_local(anchor, tz)
    day = local_anchor.date()

    today = TimeWindow(
        start=datetime.combine(day, time.min, tzinfo=tz),
        end=datetime.combine(day, time.max, tzinfo=tz),
    )
    week = TimeWindow(start=local_anchor - timedelta(days=week_days), end=local_anchor)
    month = TimeWindow(start=local_anchor - timedelta(days=month_days), end=local_anchor)

    return DashboardWindows(anchor=local_anchor, today=today, week=week, month=month)


def trend_dates(anchor: datetime, tz: ZoneInfo, days: int = 7) -> list[date]:
    """The *days* local calendar dates ending at the anchor's day, oldest first."""
    last = local_date(anchor, tz)
    return [last - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
