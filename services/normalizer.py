"""Shape validation for telemetry payloads."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from models.records import DashboardState, ReadingSeries

logger = logging.getLogger(__name__)

HISTORY_FIELD = "historico"
HIGHEST_FIELD = "maiores"
LOWEST_FIELD = "menores"


def _as_series(value: Any) -> ReadingSeries | None:
    # Only JSON arrays count; strings and objects are sequences in Python but
    # not in the payload contract.
    if isinstance(value, (list, tuple)):
        return tuple(value)
    return None


def normalize_payload(payload: Any) -> DashboardState:
    """Build a state triple from any decoded payload without raising.

    Each field falls back to an empty sequence on its own, so a malformed
    ``maiores`` never discards a valid ``historico``.
    """
    fields = payload if isinstance(payload, Mapping) else {}
    series: dict[str, ReadingSeries] = {}
    fallback: list[str] = []
    for name in (HISTORY_FIELD, HIGHEST_FIELD, LOWEST_FIELD):
        value = _as_series(fields.get(name))
        if value is None:
            fallback.append(name)
            value = ()
        series[name] = value

    if fallback:
        logger.debug(
            "Payload fields replaced with empty sequences",
            extra={"fallback_fields": fallback},
        )

    return DashboardState(
        history=series[HISTORY_FIELD],
        highest=series[HIGHEST_FIELD],
        lowest=series[LOWEST_FIELD],
    )
