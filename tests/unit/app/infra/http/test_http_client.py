"""Testes do cliente HTTP base (retry e backoff)."""

from __future__ import annotations

import httpx
import pytest

from app.infra.http import HttpClient, HttpClientConfig, HttpError

URL = "https://example.test/endpoint"


def _config(max_retries: int = 2) -> HttpClientConfig:
    return HttpClientConfig(max_retries=max_retries, backoff_base_seconds=0.0)


def _sequence_transport(responses: list[httpx.Response | Exception], seen: list[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        result = responses[min(len(seen) - 1, len(responses) - 1)]
        if isinstance(result, Exception):
            raise result
        return result

    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_success_returns_response_and_merges_headers() -> None:
    seen: list[httpx.Request] = []
    config = HttpClientConfig(default_headers={"X-Default": "1"})
    client = HttpClient(config, transport=_sequence_transport([httpx.Response(200, json={})], seen))

    response = await client.post(URL, json={"a": 1}, headers={"X-Call": "2"})

    assert response.status_code == 200
    assert seen[0].headers["X-Default"] == "1"
    assert seen[0].headers["X-Call"] == "2"


@pytest.mark.asyncio
async def test_retries_5xx_then_succeeds() -> None:
    seen: list[httpx.Request] = []
    transport = _sequence_transport([httpx.Response(503), httpx.Response(200, json={})], seen)

    response = await HttpClient(_config(), transport=transport).post(URL, json={})

    assert response.status_code == 200
    assert len(seen) == 2


@pytest.mark.asyncio
async def test_429_exhausts_retries() -> None:
    seen: list[httpx.Request] = []
    transport = _sequence_transport([httpx.Response(429)], seen)

    with pytest.raises(HttpError) as exc_info:
        await HttpClient(_config(max_retries=2), transport=transport).post(URL, json={})

    assert exc_info.value.status_code == 429
    assert exc_info.value.is_retryable
    assert len(seen) == 3


@pytest.mark.asyncio
async def test_4xx_is_returned_without_retry() -> None:
    seen: list[httpx.Request] = []
    transport = _sequence_transport([httpx.Response(400, json={})], seen)

    response = await HttpClient(_config(), transport=transport).post(URL, json={})

    assert response.status_code == 400
    assert len(seen) == 1


@pytest.mark.asyncio
async def test_connection_error_becomes_http_error() -> None:
    seen: list[httpx.Request] = []
    transport = _sequence_transport([httpx.ConnectError("refused")], seen)

    with pytest.raises(HttpError, match="http_connection_error"):
        await HttpClient(_config(max_retries=1), transport=transport).post(URL, json={})

    assert len(seen) == 2
