"""Average stay estimation.

Entry and exit events arrive as independent records; nothing links an
EXIT to the ENTRY that opened the visit.  Two strategies are offered:

    PlaceholderStay: a fixed number of minutes (the historical behaviour).
    PairedStay:      pairs each EXIT with the most recent unpaired ENTRY of
                     the same vehicle within a maximum stay, then averages.

The aggregator depends on the StayEstimator protocol only.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timedelta
from typing import Protocol, Sequence

from condo_metrics.domain.enums import MovementType
from condo_metrics.domain.movement import MovementRecord


class StayEstimator(Protocol):
    """Protocol for turning movement records into an average stay."""

    def estimate(self, records: Sequence[MovementRecord]) -> int:
        """Return the average stay in whole minutes."""
        ...


class PlaceholderStay:
    """Always reports the same number of minutes."""

    def __init__(self, minutes: int = 45) -> None:
        if minutes < 0:
            raise ValueError("minutes must be non-negative")
        self._minutes = minutes

    def estimate(self, records: Sequence[MovementRecord]) -> int:
        return self._minutes


class PairedStay:
    """Correlates ENTRY/EXIT records by vehicle.

    The vehicle key is the license plate when present, otherwise the driver
    name, both upper-cased with whitespace removed.  Entries older than
    *max_stay* at the time of an exit are considered abandoned (missed exit
    scan) and never paired.
    """

    def __init__(
        self,
        max_stay: timedelta = timedelta(hours=12),
        fallback_minutes: int = 45,
    ) -> None:
        if max_stay <= timedelta(0):
            raise ValueError("max_stay must be positive")
        self._max_stay = max_stay
        self._fallback_minutes = fallback_minutes

    @staticmethod
    def vehicle_key(record: MovementRecord) -> str:
        raw = record.license_plate or record.driver_name or ""
        return "".join(raw.split()).upper()

    def pair_durations(self, records: Sequence[MovementRecord]) -> list[timedelta]:
        """Durations of every ENTRY-to-EXIT pair found in *records*."""
        timed = sorted(
            (r for r in records if r.canonical_time is not None),
            key=lambda r: r.canonical_time,
        )
        pending: dict[str, list[datetime]] = defaultdict(list)
        durations: list[timedelta] = []

        for record in timed:
            key = self.vehicle_key(record)
            if not key:
                continue
            ts = record.canonical_time
            if record.movement_type == MovementType.ENTRY:
                pending[key].append(ts)
                continue

            entries = [e for e in pending[key] if ts - e <= self._max_stay]
            if entries:
                durations.append(ts - entries.pop())
            pending[key] = entries

        return durations

    def estimate(self, records: Sequence[MovementRecord]) -> int:
        durations = self.pair_durations(records)
        if not durations:
            return self._fallback_minutes
        total_minutes = sum(d.total_seconds() for d in durations) / 60.0
        return int(round(total_minutes / len(durations)))
