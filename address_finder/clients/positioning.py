"""Positioning providers that yield a single coordinate fix."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import httpx

from address_finder.errors import PositionError
from address_finder.models import Coordinates

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PositionOptions:
    high_accuracy: bool = True
    timeout_ms: int = 10_000

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


class PositioningProvider(Protocol):
    async def get_current_position(self, options: PositionOptions) -> Coordinates:
        """Return one position fix or raise :class:`PositionError`."""


class StaticPositionProvider:
    """Provider reporting fixed coordinates, e.g. supplied on the command line."""

    def __init__(self, coordinates: Coordinates) -> None:
        self.coordinates = coordinates

    async def get_current_position(self, options: PositionOptions) -> Coordinates:
        return self.coordinates


class IPPositionProvider:
    """
    Approximate the device position from its public IP address.

    The endpoint is expected to answer with an ip-api.com style payload:
    ``{"status": "success", "lat": ..., "lon": ...}``. High accuracy cannot be
    honoured by this provider and is ignored.
    """

    def __init__(
        self,
        url: str = "http://ip-api.com/json/",
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self._client = httpx.AsyncClient(transport=transport)

    async def get_current_position(self, options: PositionOptions) -> Coordinates:
        try:
            response = await self._client.get(self.url, timeout=options.timeout_seconds)
        except httpx.TimeoutException as exc:
            raise PositionError(PositionError.TIMEOUT, "Position request timed out") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise PositionError(PositionError.POSITION_UNAVAILABLE, str(exc)) from exc

        if response.status_code in (401, 403):
            raise PositionError(
                PositionError.PERMISSION_DENIED,
                f"Positioning endpoint refused access ({response.status_code})",
            )
        if response.is_error:
            raise PositionError(
                PositionError.POSITION_UNAVAILABLE,
                f"Positioning endpoint returned HTTP {response.status_code}",
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise PositionError(PositionError.POSITION_UNAVAILABLE, "Malformed payload") from exc
        return _coordinates_from_payload(payload)

    async def aclose(self) -> None:
        await self._client.aclose()


def _coordinates_from_payload(payload: Dict[str, Any]) -> Coordinates:
    if not isinstance(payload, dict):
        raise PositionError(PositionError.POSITION_UNAVAILABLE, "Malformed payload")
    status = payload.get("status", "success")
    if status != "success":
        raise PositionError(
            PositionError.POSITION_UNAVAILABLE,
            str(payload.get("message") or f"Lookup status {status!r}"),
        )
    latitude = payload.get("lat", payload.get("latitude"))
    longitude = payload.get("lon", payload.get("longitude"))
    if latitude is None or longitude is None:
        raise PositionError(PositionError.POSITION_UNAVAILABLE, "Payload has no coordinates")
    try:
        return Coordinates(latitude=float(latitude), longitude=float(longitude))
    except (TypeError, ValueError) as exc:
        raise PositionError(PositionError.POSITION_UNAVAILABLE, str(exc)) from exc


__all__ = [
    "IPPositionProvider",
    "PositionOptions",
    "PositioningProvider",
    "StaticPositionProvider",
]
