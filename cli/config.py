from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from settings import get_settings


@dataclass(frozen=True)
class CLIConfig:
    url: str
    interval: float
    timeout: float
    tz: Optional[tzinfo] = None


def _positive_or(value: Optional[float], default: float) -> float:
    if value is None or value <= 0:
        return default
    return value


def load_config(
    url: Optional[str] = None,
    interval: Optional[float] = None,
    timeout: Optional[float] = None,
) -> CLIConfig:
    """Layer command-line overrides on top of the environment settings."""
    settings = get_settings()
    candidate = (url or "").strip()
    return CLIConfig(
        url=candidate or settings.telemetry_url,
        interval=_positive_or(interval, settings.refresh_interval),
        timeout=_positive_or(timeout, settings.request_timeout),
        tz=settings.tzinfo,
    )
