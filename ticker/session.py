from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Callable, Protocol

from .days import group_by_day
from .models import DayGroup, TimeEntry
from .store import EntryStore


class Ticker(Protocol):
    def start(self, *args, **kwargs): ...

    def cancel(self) -> None: ...


TickerFactory = Callable[[Callable[[], None]], Ticker]


def local_now(tz: tzinfo | None = None) -> datetime:
    if tz is None:
        return datetime.now().astimezone()
    return datetime.now(tz)


class SessionController:
    """Start/pause state machine that turns each finished run into a TimeEntry.

    The controller owns at most one ticker at a time. Starting builds a fresh
    one through ``ticker_factory`` and pausing cancels that same instance.
    """

    def __init__(
        self,
        store: EntryStore,
        ticker_factory: TickerFactory,
        *,
        tz: tzinfo | None = None,
        clock: Callable[[], datetime] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.ticker_factory = ticker_factory
        self.tz = tz
        self.clock = clock or (lambda: local_now(tz))
        self.logger = logger or logging.getLogger(__name__)

        self.elapsed = 0
        self._ticker: Ticker | None = None

    @property
    def running(self) -> bool:
        return self._ticker is not None

    def toggle(self) -> TimeEntry | None:
        if self.running:
            return self.pause()
        self.start()
        return None

    def start(self) -> None:
        if self.running:
            self.logger.debug("Ignoring start while already running")
            return

        self._ticker = self.ticker_factory(self.tick)
        self._ticker.start()
        self.logger.info("Stopwatch started")

    def tick(self) -> None:
        if not self.running:
            return
        self.elapsed += 1

    def pause(self) -> TimeEntry | None:
        ticker, self._ticker = self._ticker, None
        if ticker is not None:
            ticker.cancel()

        entry = None
        if self.elapsed > 0:
            entry = TimeEntry(date=self.clock(), duration=self.elapsed)
            self.store.prepend(entry)
            self.logger.info("Recorded entry %s: %ss", entry.id, self.elapsed)
        else:
            self.logger.debug("Paused with nothing elapsed; no entry recorded")

        self.elapsed = 0
        return entry

    def entries_by_day(self) -> list[DayGroup]:
        return group_by_day(self.store.entries, self.tz)
