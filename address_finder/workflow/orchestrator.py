"""Orchestrator driving one locate cycle through the resolution state machine."""

from __future__ import annotations

import inspect
import logging
from typing import Callable, List, Optional

from address_finder.clients.geocoding import GroundedInferenceClient
from address_finder.clients.positioning import (
    IPPositionProvider,
    PositionOptions,
    PositioningProvider,
    StaticPositionProvider,
)
from address_finder.config import PositioningProviderName, Settings
from address_finder.errors import (
    ERROR_MESSAGES,
    CycleInProgress,
    LocationResolutionError,
)
from address_finder.models import (
    AddressResolved,
    Coordinates,
    CoordinatesAcquired,
    ErrorKind,
    Idle,
    LocateFailed,
    PipelineEvent,
    ResolutionState,
    ResolveFailed,
    StartRequested,
    is_busy,
    transition,
)
from address_finder.services.logging import console_kwargs
from address_finder.workflow.locator import Locator
from address_finder.workflow.resolver import AddressResolver

logger = logging.getLogger(__name__)

StateListener = Callable[[ResolutionState], None]


class LocationPipeline:
    """Hold the single ResolutionState and run locate cycles against it."""

    def __init__(
        self,
        locator: Locator,
        resolver: AddressResolver,
        *,
        on_close: Optional[List[Callable[[], object]]] = None,
    ) -> None:
        self.locator = locator
        self.resolver = resolver
        self._state: ResolutionState = Idle()
        self._listeners: List[StateListener] = []
        self._on_close = list(on_close or [])

    @property
    def state(self) -> ResolutionState:
        return self._state

    @property
    def is_busy(self) -> bool:
        return is_busy(self._state)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Call ``listener`` with every new state; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _dispatch(self, event: PipelineEvent) -> ResolutionState:
        previous = self._state
        self._state = transition(previous, event)
        logger.debug("State %s -> %s", previous.status, self._state.status)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    async def start(self) -> ResolutionState:
        """Run one full cycle and return its terminal state."""
        if self.is_busy:
            raise CycleInProgress(
                f"A locate cycle is already running (state {self._state.status!r})"
            )

        self._dispatch(StartRequested())
        logger.info("Acquiring coordinates", extra=console_kwargs())
        try:
            coordinates = await self.locator.acquire()
        except LocationResolutionError as exc:
            logger.error("Locating failed: %s", exc.message)
            return self._dispatch(LocateFailed(kind=exc.kind, message=exc.message))
        except Exception:
            logger.exception("Locating failed unexpectedly")
            return self._dispatch(
                LocateFailed(
                    kind=ErrorKind.POSITION_UNAVAILABLE,
                    message=ERROR_MESSAGES[ErrorKind.POSITION_UNAVAILABLE],
                )
            )

        self._dispatch(CoordinatesAcquired(coordinates=coordinates))
        logger.info("Resolving address", extra=console_kwargs())
        try:
            address = await self.resolver.resolve(coordinates)
        except Exception as exc:
            logger.exception("Address inference failed: %s", exc.__cause__ or exc)
            return self._dispatch(
                ResolveFailed(message=ERROR_MESSAGES[ErrorKind.INFERENCE_CALL_FAILED])
            )

        return self._dispatch(AddressResolved(address=address))

    async def aclose(self) -> None:
        for closer in self._on_close:
            result = closer()
            if inspect.isawaitable(result):
                await result
        self._on_close.clear()


def build_provider(settings: Settings) -> Optional[PositioningProvider]:
    """Positioning provider selected in ``settings``; ``None`` when disabled."""
    name = PositioningProviderName(settings.positioning_provider)
    if name is PositioningProviderName.NONE:
        return None
    if name is PositioningProviderName.STATIC:
        if settings.static_latitude is None or settings.static_longitude is None:
            raise ValueError(
                "The static positioning provider needs static_latitude and static_longitude."
            )
        return StaticPositionProvider(
            Coordinates(
                latitude=settings.static_latitude,
                longitude=settings.static_longitude,
            )
        )
    return IPPositionProvider(settings.ip_geolocation_url)


def build_pipeline(
    settings: Settings,
    *,
    provider: Optional[PositioningProvider] = None,
) -> LocationPipeline:
    """Wire the default collaborators described by ``settings``."""
    inference = GroundedInferenceClient(settings)
    resolved_provider = provider if provider is not None else build_provider(settings)
    options = PositionOptions(
        high_accuracy=settings.position_high_accuracy,
        timeout_ms=settings.position_timeout_ms,
    )
    closers: List[Callable[[], object]] = [inference.aclose]
    provider_close = getattr(resolved_provider, "aclose", None)
    if provider_close is not None:
        closers.append(provider_close)
    return LocationPipeline(
        Locator(resolved_provider, options),
        AddressResolver(inference),
        on_close=closers,
    )


__all__ = ["LocationPipeline", "build_pipeline", "build_provider"]
