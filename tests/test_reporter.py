from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from ticker.db import Database
from ticker.models import DayGroup, TimeEntry
from ticker.reporter import (
    MESSAGE_LIMIT,
    OMITTED_LINE,
    Reporter,
    format_day_header,
    format_entry_time,
    format_seconds,
)
from ticker.session import SessionController
from ticker.store import EntryStore


class IdleTicker:
    def start(self) -> None:
        pass

    def cancel(self) -> None:
        pass


def make_reporter() -> Reporter:
    db = Database(":memory:")
    db.initialize()
    session = SessionController(EntryStore(db), lambda on_tick: IdleTicker(), tz=timezone.utc)
    return Reporter(session)


def test_format_seconds_hh_mm_ss() -> None:
    assert format_seconds(0) == "00:00:00"
    assert format_seconds(3661) == "01:01:01"
    assert format_seconds(59.9) == "00:00:59"


def test_format_seconds_hours_do_not_wrap() -> None:
    assert format_seconds(90000) == "25:00:00"
    assert format_seconds(100 * 3600 + 5) == "100:00:05"


def test_format_seconds_decodes_back_to_input() -> None:
    for value in (0, 1, 59, 60, 3599, 3600, 86399, 86400, 123456):
        hours, minutes, seconds = (int(part) for part in format_seconds(value).split(":"))
        assert hours * 3600 + minutes * 60 + seconds == value


def test_format_seconds_fallback() -> None:
    assert format_seconds(-5) == "00:00:00"
    assert format_seconds(float("nan")) == "00:00:00"
    assert format_seconds(float("inf")) == "00:00:00"


def test_format_day_header_and_entry_time() -> None:
    assert format_day_header(date(2026, 10, 8)) == "Oct 8, 2026"

    moment = datetime(2026, 10, 18, 14, 5, tzinfo=timezone.utc)
    assert format_entry_time(moment, timezone.utc) == "14:05"
    assert format_entry_time(moment, ZoneInfo("Europe/Berlin")) == "16:05"


def test_status_content() -> None:
    reporter = make_reporter()

    assert reporter.build_status_content() == "Stopwatch is paused.\nElapsed: `00:00:00`"

    reporter.session.start()
    reporter.session.tick()

    assert reporter.build_status_content() == "Stopwatch is running.\nElapsed: `00:00:01`"


def test_toggle_content() -> None:
    reporter = make_reporter()

    reporter.session.start()
    assert reporter.build_toggle_content(None) == "Stopwatch started."

    reporter.session.tick()
    recorded = reporter.session.pause()
    assert reporter.build_toggle_content(recorded) == "Stopwatch paused. Recorded `00:00:01`."
    assert reporter.build_toggle_content(None) == "Stopwatch paused. Nothing to record."


def test_log_content_groups_newest_day_first() -> None:
    reporter = make_reporter()
    groups = [
        DayGroup(
            day=date(2026, 2, 2),
            total_duration=90,
            entries=(TimeEntry(date=datetime(2026, 2, 2, 9, 30, tzinfo=timezone.utc), duration=90),),
        ),
        DayGroup(
            day=date(2026, 2, 1),
            total_duration=3661,
            entries=(TimeEntry(date=datetime(2026, 2, 1, 18, 0, tzinfo=timezone.utc), duration=3661),),
        ),
    ]

    content = reporter.build_log_content(groups)

    assert content.splitlines() == [
        "**Feb 2, 2026** | `00:01:30`",
        "- 09:30: `00:01:30`",
        "**Feb 1, 2026** | `01:01:01`",
        "- 18:00: `01:01:01`",
    ]


def test_log_content_without_entries() -> None:
    assert make_reporter().build_log_content() == "No recorded entries yet."


def test_log_content_fits_message_limit() -> None:
    reporter = make_reporter()
    moment = datetime(2026, 2, 1, 9, 0, tzinfo=timezone.utc)
    entries = tuple(TimeEntry(date=moment, duration=60) for _ in range(300))
    groups = [DayGroup(day=moment.date(), total_duration=60 * 300, entries=entries)]

    content = reporter.build_log_content(groups)

    assert len(content) <= MESSAGE_LIMIT
    assert content.endswith(OMITTED_LINE)


def test_log_content_never_ends_a_day_without_entries() -> None:
    reporter = make_reporter()

    for per_day in range(1, 8):
        groups = []
        for offset in range(120):
            moment = datetime(2026, 6, 1, 9, 0, tzinfo=timezone.utc) - timedelta(days=offset)
            entries = tuple(TimeEntry(date=moment, duration=60) for _ in range(per_day))
            groups.append(DayGroup(day=moment.date(), total_duration=60 * per_day, entries=entries))

        lines = reporter.build_log_content(groups).splitlines()

        assert len("\n".join(lines)) <= MESSAGE_LIMIT
        assert lines[-1] == OMITTED_LINE
        for index, line in enumerate(lines):
            if line.startswith("**"):
                assert lines[index + 1].startswith("- ")
