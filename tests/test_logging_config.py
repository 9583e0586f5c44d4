from __future__ import annotations

import logging

from logging_config import ContextualFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "services.scheduler", logging.WARNING, __file__, 1, "refresh failed", None, None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_appends_known_extra_keys() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    line = formatter.format(_record(status_code=503, url="http://x", unrelated="skip"))

    assert line == "refresh failed | url=http://x status_code=503"


def test_formatter_joins_sequences_and_skips_none() -> None:
    formatter = ContextualFormatter(fmt="%(message)s")

    line = formatter.format(_record(fallback_fields=["maiores", "menores"], reason=None))

    assert line == "refresh failed | fallback_fields=maiores,menores"


def test_formatter_without_context_returns_message() -> None:
    formatter = ContextualFormatter(fmt="%(levelname)s %(message)s")

    assert formatter.format(_record()) == "WARNING refresh failed"
