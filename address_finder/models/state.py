"""Resolution state machine for one locate cycle."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from .location import AddressDetails, Coordinates, ErrorKind


class InvalidTransition(RuntimeError):
    """Raised when an event is not accepted by the current state."""

    def __init__(self, state: "ResolutionState", event: "PipelineEvent") -> None:
        super().__init__(
            f"Event {type(event).__name__} is not valid in state {state.status!r}"
        )
        self.state = state
        self.event = event


# ===== States =====


@dataclass(frozen=True)
class Idle:
    status: ClassVar[str] = "idle"


@dataclass(frozen=True)
class AcquiringCoordinates:
    status: ClassVar[str] = "acquiring_coordinates"


@dataclass(frozen=True)
class ResolvingAddress:
    status: ClassVar[str] = "resolving_address"

    coordinates: Coordinates


@dataclass(frozen=True)
class Resolved:
    status: ClassVar[str] = "resolved"

    coordinates: Coordinates
    address: AddressDetails


@dataclass(frozen=True)
class Failed:
    status: ClassVar[str] = "failed"

    kind: ErrorKind
    message: str


ResolutionState = Union[Idle, AcquiringCoordinates, ResolvingAddress, Resolved, Failed]

BUSY_STATES = (AcquiringCoordinates, ResolvingAddress)
TERMINAL_STATES = (Resolved, Failed)


def is_busy(state: ResolutionState) -> bool:
    """True while a cycle is outstanding and a new start must be refused."""
    return isinstance(state, BUSY_STATES)


def is_terminal(state: ResolutionState) -> bool:
    return isinstance(state, TERMINAL_STATES)


# ===== Events =====


@dataclass(frozen=True)
class StartRequested:
    pass


@dataclass(frozen=True)
class CoordinatesAcquired:
    coordinates: Coordinates


@dataclass(frozen=True)
class LocateFailed:
    kind: ErrorKind
    message: str


@dataclass(frozen=True)
class AddressResolved:
    address: AddressDetails


@dataclass(frozen=True)
class ResolveFailed:
    message: str


PipelineEvent = Union[
    StartRequested,
    CoordinatesAcquired,
    LocateFailed,
    AddressResolved,
    ResolveFailed,
]


def transition(state: ResolutionState, event: PipelineEvent) -> ResolutionState:
    """
    Return the state that follows ``state`` after ``event``.

    Parameters
    ----------
    state : ResolutionState
        Current pipeline state.
    event : PipelineEvent
        Event produced by the user or by one of the pipeline stages.

    Returns
    -------
    ResolutionState
        The next state. Previous coordinates, address and error are never
        carried into a new cycle.

    Raises
    ------
    InvalidTransition
        If the event is not accepted in the current state.
    """
    if isinstance(event, StartRequested):
        if isinstance(state, (Idle, Resolved, Failed)):
            return AcquiringCoordinates()
    elif isinstance(state, AcquiringCoordinates):
        if isinstance(event, CoordinatesAcquired):
            return ResolvingAddress(coordinates=event.coordinates)
        if isinstance(event, LocateFailed):
            return Failed(kind=event.kind, message=event.message)
    elif isinstance(state, ResolvingAddress):
        if isinstance(event, AddressResolved):
            return Resolved(coordinates=state.coordinates, address=event.address)
        if isinstance(event, ResolveFailed):
            return Failed(kind=ErrorKind.INFERENCE_CALL_FAILED, message=event.message)
    raise InvalidTransition(state, event)


__all__ = [
    "AcquiringCoordinates",
    "AddressResolved",
    "CoordinatesAcquired",
    "Failed",
    "Idle",
    "InvalidTransition",
    "LocateFailed",
    "PipelineEvent",
    "ResolutionState",
    "ResolveFailed",
    "Resolved",
    "ResolvingAddress",
    "StartRequested",
    "is_busy",
    "is_terminal",
    "transition",
]
