"""Exception taxonomy for the location-resolution pipeline."""
from __future__ import annotations

from typing import ClassVar, Dict, Optional

from address_finder.models.location import ErrorKind

ERROR_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.CAPABILITY_MISSING: "This device does not provide a positioning capability.",
    ErrorKind.PERMISSION_DENIED: "Access to your location was denied.",
    ErrorKind.POSITION_UNAVAILABLE: "Could not obtain GPS coordinates.",
    ErrorKind.INFERENCE_CALL_FAILED: "The AI service failed to analyse the address.",
}


class LocationResolutionError(RuntimeError):
    """Base class for failures that end a locate cycle."""

    kind: ClassVar[ErrorKind]

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or ERROR_MESSAGES[self.kind]
        super().__init__(self.message)


class CapabilityMissing(LocationResolutionError):
    """Raised when no positioning capability is available at all."""

    kind = ErrorKind.CAPABILITY_MISSING


class PermissionDenied(LocationResolutionError):
    """Raised when the user declined access to their position."""

    kind = ErrorKind.PERMISSION_DENIED


class PositionUnavailable(LocationResolutionError):
    """Raised for timeouts, signal failures and other acquisition errors."""

    kind = ErrorKind.POSITION_UNAVAILABLE


class InferenceCallFailed(LocationResolutionError):
    """Raised when the inference service errors or returns no usable text."""

    kind = ErrorKind.INFERENCE_CALL_FAILED


class PositionError(RuntimeError):
    """Failure reported by a positioning provider, using W3C error codes."""

    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3

    def __init__(self, code: int, message: str = "") -> None:
        super().__init__(message or f"Positioning failed with code {code}")
        self.code = code


class CycleInProgress(RuntimeError):
    """Raised when a locate cycle is started while another is outstanding."""


__all__ = [
    "CapabilityMissing",
    "CycleInProgress",
    "ERROR_MESSAGES",
    "InferenceCallFailed",
    "LocationResolutionError",
    "PermissionDenied",
    "PositionError",
    "PositionUnavailable",
]
