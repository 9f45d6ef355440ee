from __future__ import annotations

import asyncio
from typing import Callable

import httpx
import pytest

from address_finder.clients.positioning import (
    IPPositionProvider,
    PositionOptions,
    StaticPositionProvider,
)
from address_finder.errors import PositionError
from address_finder.models import Coordinates

URL = "http://geo.test/json/"


def _fetch(handler: Callable[[httpx.Request], httpx.Response], options=None) -> Coordinates:
    async def _run() -> Coordinates:
        provider = IPPositionProvider(URL, transport=httpx.MockTransport(handler))
        try:
            return await provider.get_current_position(options or PositionOptions())
        finally:
            await provider.aclose()

    return asyncio.run(_run())


def test_static_provider_returns_configured_fix() -> None:
    coords = Coordinates(latitude=1.0, longitude=2.0)
    result = asyncio.run(StaticPositionProvider(coords).get_current_position(PositionOptions()))
    assert result is coords


def test_ip_provider_parses_success_payload() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == URL
        return httpx.Response(200, json={"status": "success", "lat": 35.6892, "lon": 51.389})

    coords = _fetch(handler)

    assert coords == Coordinates(latitude=35.6892, longitude=51.389)
    assert coords.accuracy is None


def test_ip_provider_accepts_latitude_longitude_keys() -> None:
    coords = _fetch(lambda request: httpx.Response(200, json={"latitude": 1, "longitude": 2}))
    assert coords == Coordinates(latitude=1.0, longitude=2.0)


@pytest.mark.parametrize("status_code", [401, 403])
def test_ip_provider_maps_refusal_to_permission_denied(status_code: int) -> None:
    with pytest.raises(PositionError) as excinfo:
        _fetch(lambda request: httpx.Response(status_code))
    assert excinfo.value.code == PositionError.PERMISSION_DENIED


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500),
        httpx.Response(200, json={"status": "fail", "message": "reserved range"}),
        httpx.Response(200, json={"status": "success"}),
        httpx.Response(200, json={"lat": 123.0, "lon": 0.0}),
        httpx.Response(200, json=["not", "a", "mapping"]),
        httpx.Response(200, content=b"<html>"),
    ],
)
def test_ip_provider_maps_bad_responses_to_unavailable(response: httpx.Response) -> None:
    with pytest.raises(PositionError) as excinfo:
        _fetch(lambda request: response)
    assert excinfo.value.code == PositionError.POSITION_UNAVAILABLE


def test_ip_provider_maps_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(PositionError) as excinfo:
        _fetch(handler)
    assert excinfo.value.code == PositionError.TIMEOUT


def test_ip_provider_maps_connection_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(PositionError) as excinfo:
        _fetch(handler)
    assert excinfo.value.code == PositionError.POSITION_UNAVAILABLE


def test_ip_provider_maps_invalid_url() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.InvalidURL("Invalid port")

    with pytest.raises(PositionError) as excinfo:
        _fetch(handler)
    assert excinfo.value.code == PositionError.POSITION_UNAVAILABLE


def test_ip_provider_rejects_malformed_configured_url() -> None:
    async def _run() -> Coordinates:
        provider = IPPositionProvider("http://[::1")
        try:
            return await provider.get_current_position(PositionOptions())
        finally:
            await provider.aclose()

    with pytest.raises(PositionError) as excinfo:
        asyncio.run(_run())
    assert excinfo.value.code == PositionError.POSITION_UNAVAILABLE
