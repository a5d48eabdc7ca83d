from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime


def new_entry_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True, slots=True)
class TimeEntry:
    date: datetime
    duration: float
    # Display identity only; equality still compares it as a plain field.
    id: str = field(default_factory=new_entry_id)


@dataclass(frozen=True, slots=True)
class DayGroup:
    day: date
    total_duration: float
    entries: tuple[TimeEntry, ...]
