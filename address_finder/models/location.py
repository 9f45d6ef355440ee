"""Location and address records produced by the resolution pipeline."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, Optional


class ErrorKind(str, Enum):
    """Classified failures that end a locate cycle."""

    CAPABILITY_MISSING = "capability_missing"
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    INFERENCE_CALL_FAILED = "inference_call_failed"


@dataclass(frozen=True)
class Coordinates:
    """A single position fix in WGS84 degrees."""

    latitude: float
    longitude: float
    accuracy: Optional[float] = None  # metres

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")
        if self.accuracy is not None and self.accuracy < 0:
            raise ValueError(f"Accuracy must be non-negative: {self.accuracy}")

    def to_dict(self) -> Dict[str, Optional[float]]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "accuracy": self.accuracy,
        }


@dataclass(frozen=True)
class AddressDetails:
    """
    Structured postal address extracted from one model reply.

    ``None`` means the field is unknown (its label never appeared), while an
    empty string means the label was present with nothing after it.
    """

    full_address: str
    road: Optional[str] = None
    neighbourhood: Optional[str] = None
    district: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postcode: Optional[str] = None
    building: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.full_address:
            raise ValueError("AddressDetails.full_address must not be empty")

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)


__all__ = ["AddressDetails", "Coordinates", "ErrorKind"]
