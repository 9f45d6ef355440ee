"""Convenience re-exports for core pipeline data models."""

from .location import AddressDetails, Coordinates, ErrorKind
from .state import (
    AcquiringCoordinates,
    AddressResolved,
    CoordinatesAcquired,
    Failed,
    Idle,
    InvalidTransition,
    LocateFailed,
    PipelineEvent,
    ResolutionState,
    ResolveFailed,
    Resolved,
    ResolvingAddress,
    StartRequested,
    is_busy,
    is_terminal,
    transition,
)

__all__ = [
    "AcquiringCoordinates",
    "AddressDetails",
    "AddressResolved",
    "Coordinates",
    "CoordinatesAcquired",
    "ErrorKind",
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
