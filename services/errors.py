"""Failure taxonomy for the refresh pipeline."""

from __future__ import annotations

from typing import Optional


class TelemetryError(Exception):
    """Base class for every failure raised by the dashboard pipeline."""


class TelemetryFetchError(TelemetryError):
    """A refresh cycle could not obtain a payload from the telemetry source."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class TelemetryTransportError(TelemetryFetchError):
    """DNS failure, timeout, refused connection and other transport errors."""


class TelemetryProtocolError(TelemetryFetchError):
    """The source answered with a non-success HTTP status."""

    def __init__(self, message: str, url: str, status_code: int) -> None:
        super().__init__(message, url)
        self.status_code = status_code


class TelemetryDecodeError(TelemetryFetchError):
    """The response body was not valid JSON."""


class StateStoreBusyError(TelemetryError):
    """A state replacement was attempted while listeners were being notified."""


class ReadingFormatError(TelemetryError, ValueError):
    """A reading could not be rendered because its temperature is not numeric."""

    def __init__(self, value: object, index: Optional[int] = None) -> None:
        position = "" if index is None else f" at position {index}"
        super().__init__(f"Reading{position} has a non-numeric temperature: {value!r}")
        self.value = value
        self.index = index
