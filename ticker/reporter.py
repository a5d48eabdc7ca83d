from __future__ import annotations

import math
from datetime import date, datetime, tzinfo

from .models import DayGroup, TimeEntry
from .session import SessionController

MESSAGE_LIMIT = 2000
OMITTED_LINE = "_Older entries omitted._"


def format_seconds(total_seconds: float) -> str:
    """Render a duration as HH:MM:SS; hours keep growing past 24."""
    try:
        if math.isnan(total_seconds) or math.isinf(total_seconds):
            return "00:00:00"
        safe_seconds = max(0, int(total_seconds))
    except (TypeError, ValueError):
        return "00:00:00"
    hours, remainder = divmod(safe_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02}:{minutes:02}:{seconds:02}"


def format_day_header(day: date) -> str:
    """Medium-style date without a time, e.g. ``Oct 18, 2026``."""
    return f"{day:%b} {day.day}, {day.year}"


def format_entry_time(moment: datetime, tz: tzinfo | None = None) -> str:
    """Short-style time without a date, e.g. ``14:05``."""
    return f"{moment.astimezone(tz):%H:%M}"


class Reporter:
    def __init__(self, session: SessionController) -> None:
        self.session = session

    def build_status_content(self) -> str:
        state = "running" if self.session.running else "paused"
        return f"Stopwatch is {state}.\nElapsed: `{format_seconds(self.session.elapsed)}`"

    def build_log_content(self, groups: list[DayGroup] | None = None) -> str:
        if groups is None:
            groups = self.session.entries_by_day()

        if not groups:
            return "No recorded entries yet."

        # Groups are newest first, so trimming from the end drops the oldest lines.
        budget = MESSAGE_LIMIT - len(OMITTED_LINE) - 1
        kept: list[str] = []
        used = 0

        def fits(*new_lines: str) -> bool:
            cost = sum(len(line) for line in new_lines) + len(new_lines) - (0 if kept else 1)
            return used + cost <= budget

        for group in groups:
            header = f"**{format_day_header(group.day)}** | `{format_seconds(group.total_duration)}`"
            rows = [
                f"- {format_entry_time(entry.date, self.session.tz)}: `{format_seconds(entry.duration)}`"
                for entry in group.entries
            ]
            # A header is only shown together with at least one of its entries.
            if not fits(header, rows[0]):
                kept.append(OMITTED_LINE)
                return "\n".join(kept)

            for line in [header, *rows]:
                if not fits(line):
                    kept.append(OMITTED_LINE)
                    return "\n".join(kept)
                used += len(line) + (1 if kept else 0)
                kept.append(line)

        return "\n".join(kept)

    def build_toggle_content(self, recorded: TimeEntry | None) -> str:
        if self.session.running:
            return "Stopwatch started."
        if recorded is None:
            return "Stopwatch paused. Nothing to record."
        return f"Stopwatch paused. Recorded `{format_seconds(recorded.duration)}`."
