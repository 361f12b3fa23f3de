"""Clock and timestamp normalisation.

Gate records arrive from several writers, some of which omit the offset.
Naive values are read as UTC; everything past this module is aware.
`utc_now` is the single source of "now" so tests can patch it.
"""

from __future__ import annotations

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def as_aware(ts: datetime) -> datetime:
    """Attach UTC to a naive datetime; aware values pass through."""
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts
