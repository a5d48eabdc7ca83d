from __future__ import annotations

import json
import logging
import math
from datetime import datetime

from .db import Database
from .models import TimeEntry

ENTRIES_META_KEY = "TimeEntries"


def parse_iso_local(value: str) -> datetime:
    """Parse an ISO timestamp; naive values are taken as host-local time."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        return parsed.astimezone()
    return parsed


def encode_entries(entries: list[TimeEntry] | tuple[TimeEntry, ...]) -> bytes | None:
    """Serialize the whole collection, or return None when it cannot be encoded."""
    try:
        records = []
        for entry in entries:
            if entry.date.tzinfo is None:
                raise ValueError(f"Entry {entry.id} has a timezone-naive date")
            records.append(
                {
                    "id": entry.id,
                    "date": entry.date.isoformat(),
                    "duration": entry.duration,
                }
            )
        # allow_nan=False: NaN/inf durations are not valid JSON for other readers.
        return json.dumps(records, allow_nan=False).encode("utf-8")
    except (AttributeError, TypeError, ValueError):
        return None


def decode_entries(blob: bytes | None) -> list[TimeEntry] | None:
    """Decode a stored blob; None means absent or unreadable data."""
    if not blob:
        return None

    try:
        raw = json.loads(blob.decode("utf-8"))
        if not isinstance(raw, list):
            return None

        entries: list[TimeEntry] = []
        for item in raw:
            entry_id = item["id"]
            duration = item["duration"]
            if not isinstance(entry_id, str):
                return None
            if isinstance(duration, bool) or not isinstance(duration, (int, float)):
                return None
            # Only what encode_entries can write back: finite, positive seconds.
            if not math.isfinite(duration) or duration <= 0:
                return None
            entries.append(
                TimeEntry(id=entry_id, date=parse_iso_local(item["date"]), duration=float(duration))
            )
        return entries
    except (UnicodeDecodeError, TypeError, KeyError, ValueError, OverflowError, RecursionError):
        return None


class EntryStore:
    """In-memory entry log (newest first) mirrored to one key/value blob."""

    def __init__(
        self,
        db: Database,
        key: str = ENTRIES_META_KEY,
        logger: logging.Logger | None = None,
    ) -> None:
        self.db = db
        self.key = key
        self.logger = logger or logging.getLogger(__name__)
        self._entries: list[TimeEntry] = []

    @property
    def entries(self) -> tuple[TimeEntry, ...]:
        return tuple(self._entries)

    def load(self) -> list[TimeEntry]:
        blob = self.db.get_meta(self.key)
        decoded = decode_entries(blob)
        if decoded is None:
            # Absent and corrupt data both start an empty log; nothing is surfaced.
            if blob:
                self.logger.warning("Stored entries under %r are unreadable; starting empty", self.key)
            decoded = []

        self._entries = decoded
        self.logger.info("Loaded %d time entries", len(self._entries))
        return list(self._entries)

    def prepend(self, entry: TimeEntry) -> None:
        self._entries.insert(0, entry)
        self.persist()

    def persist(self) -> bool:
        blob = encode_entries(self._entries)
        if blob is None:
            self.logger.warning("Could not encode %d time entries; skipping write", len(self._entries))
            return False

        self.db.set_meta(self.key, blob)
        return True
