from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_DB_PATH = Path("ticker.db")


@dataclass(frozen=True, slots=True)
class Config:
    discord_token: str
    guild_id: int
    # None means the host's local zone.
    timezone: ZoneInfo | None
    database_path: Path


def _required_env(name: str) -> str:
    value = os.getenv(name)
    if not value or not value.strip():
        raise ValueError(f"Missing required environment variable: {name}")
    return value.strip()


def _required_int_env(name: str) -> int:
    value = _required_env(name)
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer") from exc

    if parsed <= 0:
        raise ValueError(f"Environment variable {name} must be positive")
    return parsed


def _optional_timezone_env(name: str) -> ZoneInfo | None:
    tz_name = os.getenv(name, "").strip()
    if not tz_name:
        return None
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Invalid timezone in {name}: {tz_name}") from exc


def load_config() -> Config:
    db_path_raw = os.getenv("DATABASE_PATH", "").strip()

    return Config(
        discord_token=_required_env("DISCORD_TOKEN"),
        guild_id=_required_int_env("GUILD_ID"),
        timezone=_optional_timezone_env("TIMEZONE"),
        database_path=Path(db_path_raw) if db_path_raw else DEFAULT_DB_PATH,
    )
