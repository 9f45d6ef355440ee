"""Acquire a single coordinate fix from the configured positioning provider."""

from __future__ import annotations

import logging
from typing import Optional

from address_finder.clients.positioning import PositionOptions, PositioningProvider
from address_finder.errors import (
    CapabilityMissing,
    PermissionDenied,
    PositionError,
    PositionUnavailable,
)
from address_finder.models import Coordinates

logger = logging.getLogger(__name__)


class Locator:
    """Request one best-effort position fix per call, without retrying."""

    def __init__(
        self,
        provider: Optional[PositioningProvider],
        options: Optional[PositionOptions] = None,
    ) -> None:
        self.provider = provider
        self.options = options or PositionOptions()

    async def acquire(self) -> Coordinates:
        if self.provider is None:
            logger.warning("No positioning capability available")
            raise CapabilityMissing()

        logger.debug(
            "Requesting position fix",
            extra={
                "high_accuracy": self.options.high_accuracy,
                "timeout_ms": self.options.timeout_ms,
            },
        )
        try:
            coordinates = await self.provider.get_current_position(self.options)
        except PositionError as exc:
            logger.warning("Position fix failed (code %s): %s", exc.code, exc)
            if exc.code == PositionError.PERMISSION_DENIED:
                raise PermissionDenied() from exc
            raise PositionUnavailable() from exc
        except Exception as exc:
            logger.exception("Positioning provider failed unexpectedly")
            raise PositionUnavailable() from exc

        logger.info(
            "Position fix acquired: %.6f, %.6f (accuracy %s)",
            coordinates.latitude,
            coordinates.longitude,
            "unknown" if coordinates.accuracy is None else f"{coordinates.accuracy:.0f} m",
        )
        return coordinates


__all__ = ["Locator"]
