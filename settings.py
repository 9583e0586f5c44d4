from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


DEFAULT_TELEMETRY_URL = "https://d8f9bf316cfd.ngrok-free.app/api/dados"

_TELEMETRY_URL_ENV = "TELEMETRY_API_URL"
_REFRESH_INTERVAL_ENV = "TELEMETRY_REFRESH_INTERVAL"
_REQUEST_TIMEOUT_ENV = "TELEMETRY_REQUEST_TIMEOUT"
_TIMEZONE_ENV = "DASHBOARD_TIMEZONE"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    telemetry_url: str
    refresh_interval: float
    request_timeout: float
    display_timezone: str
    log_level: str

    @property
    def tzinfo(self) -> ZoneInfo:
        return ZoneInfo(self.display_timezone)


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_positive_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_timezone(default: str) -> str:
    candidate = _read_str_env(_TIMEZONE_ENV, default)
    try:
        ZoneInfo(candidate)
    except (ZoneInfoNotFoundError, ValueError):
        return default
    return candidate


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        telemetry_url=_read_str_env(_TELEMETRY_URL_ENV, DEFAULT_TELEMETRY_URL),
        refresh_interval=_read_positive_float(_REFRESH_INTERVAL_ENV, 5.0),
        request_timeout=_read_positive_float(_REQUEST_TIMEOUT_ENV, 10.0),
        display_timezone=_read_timezone("UTC"),
        log_level=_read_log_level("INFO"),
    )
