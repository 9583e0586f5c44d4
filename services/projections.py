"""Pure view projections derived from :class:`DashboardState`."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from numbers import Real
from typing import Any, Iterable, Literal, Optional, Tuple

from models.records import DashboardState, Reading
from services.errors import ReadingFormatError

CHART_LABEL = "Temperature (°C)"
INVALID_DATE = "Invalid Date"
TIME_FORMAT = "%H:%M:%S"
DATETIME_FORMAT = "%d/%m/%Y %H:%M:%S"

Band = Literal["even", "odd"]


@dataclass(frozen=True)
class ChartSeries:
    """Parallel label/value sequences for the temperature line chart."""

    labels: Tuple[str, ...]
    values: Tuple[Any, ...]
    label: str = CHART_LABEL


@dataclass(frozen=True)
class TableRow:
    temperature: str
    recorded_at: str
    band: Band


@dataclass(frozen=True)
class DashboardView:
    chart: ChartSeries
    history: Tuple[TableRow, ...]
    highest: Tuple[TableRow, ...]
    lowest: Tuple[TableRow, ...]


def _field(reading: Reading, name: str) -> Any:
    try:
        return reading.get(name)
    except AttributeError:
        return None


def parse_timestamp(value: str) -> datetime:
    candidate = value.strip()
    if not candidate:
        raise ValueError("Timestamp is empty.")

    if candidate.endswith("Z"):
        candidate = candidate[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(candidate)
    except ValueError as exc:
        raise ValueError("Invalid timestamp format") from exc

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)

    return parsed


def format_timestamp(value: Any, fmt: str, tz: Optional[tzinfo] = None) -> str:
    """Render a serialized timestamp, or ``Invalid Date`` when unparseable."""
    if not isinstance(value, str):
        return INVALID_DATE
    try:
        parsed = parse_timestamp(value)
    except ValueError:
        return INVALID_DATE
    return parsed.astimezone(tz or timezone.utc).strftime(fmt)


def format_temperature(value: Any, index: Optional[int] = None) -> str:
    # bool is a Real subclass but never a temperature.
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise ReadingFormatError(value, index)
    # Ties round away from zero, as the browser dashboard did.
    rounded = Decimal(float(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{rounded:f}"


def project_chart(history: Iterable[Reading], tz: Optional[tzinfo] = None) -> ChartSeries:
    readings = tuple(history)
    return ChartSeries(
        labels=tuple(
            format_timestamp(_field(reading, "timestamp"), TIME_FORMAT, tz)
            for reading in readings
        ),
        values=tuple(_field(reading, "temperatura") for reading in readings),
    )


def project_table(readings: Iterable[Reading], tz: Optional[tzinfo] = None) -> Tuple[TableRow, ...]:
    """Map readings to display rows, banded by position.

    Raises :class:`ReadingFormatError` on the first reading whose temperature
    is not a finite number.
    """
    return tuple(
        TableRow(
            temperature=format_temperature(_field(reading, "temperatura"), index),
            recorded_at=format_timestamp(_field(reading, "timestamp"), DATETIME_FORMAT, tz),
            band="even" if index % 2 == 0 else "odd",
        )
        for index, reading in enumerate(readings)
    )


def project_dashboard(state: DashboardState, tz: Optional[tzinfo] = None) -> DashboardView:
    return DashboardView(
        chart=project_chart(state.history, tz),
        history=project_table(state.history, tz),
        highest=project_table(state.highest, tz),
        lowest=project_table(state.lowest, tz),
    )
