from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Iterable

from .models import DayGroup, TimeEntry


def local_day(moment: datetime, tz: tzinfo | None = None) -> date:
    """Calendar day of ``moment`` in ``tz`` (the host's local zone when None)."""
    return moment.astimezone(tz).date()


def group_by_day(entries: Iterable[TimeEntry], tz: tzinfo | None = None) -> list[DayGroup]:
    # Each entry gets its own day key; there is no shared "today" boundary.
    grouped: dict[date, list[TimeEntry]] = {}
    for entry in entries:
        grouped.setdefault(local_day(entry.date, tz), []).append(entry)

    return [
        DayGroup(
            day=day,
            total_duration=sum(item.duration for item in grouped[day]),
            entries=tuple(grouped[day]),
        )
        for day in sorted(grouped, reverse=True)
    ]
