"""MetricsFormatter: plain-text rendering of a MetricsSnapshot.

Deterministic and structured: suitable for logs, e-mail digests, or a
quick look at the dashboard from a terminal.
"""

from __future__ import annotations

from condo_metrics.domain.metrics import MetricsSnapshot

_BAR_WIDTH = 30


class MetricsFormatter:
    """Formats snapshots for humans.  Never alters the figures."""

    @staticmethod
    def format_plain(snapshot: MetricsSnapshot, title: str = "Condominium dashboard") -> str:
        lines = [f"{title} at {snapshot.window_anchor.isoformat()} ({snapshot.timezone})"]
        lines.append("=" * 50)
        if snapshot.is_demo:
            lines.append("DATA: DEMO (live data unavailable)")

        lines.append(f"Entries (month): {snapshot.total_entries}")
        lines.append(f"Exits (month): {snapshot.total_exits}")
        lines.append(
            f"Visitors: today {snapshot.total_visitors_today}"
            f" / week {snapshot.total_visitors_week}"
            f" / month {snapshot.total_visitors_month}"
        )
        lines.append(f"Average stay: {snapshot.average_stay_minutes} min")
        if snapshot.skipped_records:
            lines.append(f"Skipped records: {snapshot.skipped_records}")
        lines.append("")

        stats = snapshot.incident_stats
        lines.append("--- Incidents ---")
        lines.append(f"  open {stats.open} | in progress {stats.in_progress} | resolved {stats.resolved}")
        lines.append("")

        lines.append("--- Top visitors ---")
        if not snapshot.top_visitors:
            lines.append("  (none)")
        for rank, visitor in enumerate(snapshot.top_visitors, start=1):
            lines.append(f"  {rank}. {visitor.name}: {visitor.count}")
        lines.append("")

        lines.append("--- Visits by block ---")
        if not snapshot.visits_by_block:
            lines.append("  (none)")
        for block, count in snapshot.visits_by_block.items():
            lines.append(f"  {block}: {count}")
        lines.append("")

        lines.append("--- Entries by hour (today) ---")
        peak = max((h.count for h in snapshot.entries_by_hour), default=0)
        for item in snapshot.entries_by_hour:
            bar = "#" * (round(item.count / peak * _BAR_WIDTH) if peak else 0)
            lines.append(f"  {item.hour:02d}:00 {item.count:>4} {bar}")
        lines.append("")

        lines.append("--- Entry/exit trend ---")
        for day in snapshot.entry_exit_trend:
            lines.append(f"  {day.date}: in {day.entries} / out {day.exits}")

        return "\n".join(lines)
