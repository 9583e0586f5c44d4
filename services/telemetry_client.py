"""HTTP access to the remote telemetry source."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from services.errors import (
    TelemetryDecodeError,
    TelemetryProtocolError,
    TelemetryTransportError,
)

logger = logging.getLogger(__name__)

# Tunnelling proxies (ngrok) serve an interstitial HTML page unless told not to.
SKIP_BROWSER_WARNING_HEADER = "ngrok-skip-browser-warning"


class TelemetryClient:
    """Issues single GET requests against the telemetry endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={SKIP_BROWSER_WARNING_HEADER: "true"},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch(self) -> Any:
        """Return the decoded JSON body of one request to the endpoint."""
        try:
            response = await self._client.get(self.url)
        except httpx.HTTPError as exc:
            # Transport failures plus body decoding and redirect loops.
            raise TelemetryTransportError(
                f"Request to {self.url} failed: {exc.__class__.__name__}: {exc}",
                url=self.url,
            ) from exc

        if not response.is_success:
            raise TelemetryProtocolError(
                f"Request to {self.url} failed with status {response.status_code}",
                url=self.url,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise TelemetryDecodeError(
                f"Response from {self.url} is not valid JSON",
                url=self.url,
            ) from exc
