from __future__ import annotations

from typing import List

import httpx
import pytest

from services.errors import (
    TelemetryDecodeError,
    TelemetryProtocolError,
    TelemetryTransportError,
)
from services.telemetry_client import SKIP_BROWSER_WARNING_HEADER, TelemetryClient

URL = "https://telemetry.test/api/dados"


@pytest.mark.asyncio
async def test_fetch_sends_skip_warning_header_and_decodes_json() -> None:
    requests: List[httpx.Request] = []
    payload = {"historico": [], "maiores": [], "menores": []}

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=payload)

    client = TelemetryClient(URL, transport=httpx.MockTransport(handler))
    try:
        result = await client.fetch()
    finally:
        await client.aclose()

    assert result == payload
    assert len(requests) == 1
    assert requests[0].method == "GET"
    assert str(requests[0].url) == URL
    assert requests[0].headers[SKIP_BROWSER_WARNING_HEADER] == "true"


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [301, 404, 500, 503])
async def test_non_success_status_is_a_protocol_failure(status_code: int) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json={"historico": []})

    client = TelemetryClient(URL, transport=httpx.MockTransport(handler))
    try:
        with pytest.raises(TelemetryProtocolError) as excinfo:
            await client.fetch()
    finally:
        await client.aclose()

    assert excinfo.value.status_code == status_code
    assert excinfo.value.url == URL
    assert str(status_code) in str(excinfo.value)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc_type",
    [
        httpx.ConnectError,
        httpx.ReadTimeout,
        httpx.ConnectTimeout,
        httpx.DecodingError,
        httpx.TooManyRedirects,
    ],
)
async def test_transport_errors_are_wrapped(exc_type) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type("boom", request=request)

    client = TelemetryClient(URL, transport=httpx.MockTransport(handler))
    try:
        with pytest.raises(TelemetryTransportError) as excinfo:
            await client.fetch()
    finally:
        await client.aclose()

    assert isinstance(excinfo.value.__cause__, exc_type)


@pytest.mark.asyncio
async def test_interstitial_html_page_is_a_decode_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>You are about to visit...</html>")

    client = TelemetryClient(URL, transport=httpx.MockTransport(handler))
    try:
        with pytest.raises(TelemetryDecodeError):
            await client.fetch()
    finally:
        await client.aclose()
