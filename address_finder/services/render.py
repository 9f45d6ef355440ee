"""Plain-text and JSON renderings of pipeline results."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from address_finder.models import (
    AcquiringCoordinates,
    AddressDetails,
    Coordinates,
    Failed,
    ResolutionState,
    Resolved,
    ResolvingAddress,
)

PLACEHOLDER = "-"
UNKNOWN_POSTCODE = "unknown"
MAP_URL_TEMPLATE = "https://www.google.com/maps?q={lat},{lng}"
PROGRESS_MESSAGE = "Fetching location details..."


def _or_placeholder(value: Optional[str], placeholder: str = PLACEHOLDER) -> str:
    return value if value else placeholder


def clipboard_text(address: AddressDetails) -> str:
    return f"Address: {address.full_address}\nPostal code: {_or_placeholder(address.postcode)}"


def map_url(coordinates: Coordinates) -> str:
    return MAP_URL_TEMPLATE.format(lat=coordinates.latitude, lng=coordinates.longitude)


def progress_line(state: ResolutionState) -> Optional[str]:
    """Line shown while a cycle is outstanding, ``None`` otherwise."""
    if isinstance(state, (AcquiringCoordinates, ResolvingAddress)):
        return PROGRESS_MESSAGE
    return None


def render_summary(coordinates: Coordinates, address: AddressDetails) -> str:
    """Result card for a resolved cycle. ``country`` is not shown."""
    lines: List[str] = [
        f"LAT: {coordinates.latitude:.6f}  LNG: {coordinates.longitude:.6f}",
        "",
        "Postal address:",
        f"  {address.full_address}",
        "",
        "Area details:",
        f"  State / City: {_or_placeholder(address.state)} / {_or_placeholder(address.city)}",
        f"  District / Neighbourhood: {_or_placeholder(address.district)} / "
        f"{_or_placeholder(address.neighbourhood)}",
        f"  Street / Building: {_or_placeholder(address.road)} / "
        f"{_or_placeholder(address.building)}",
        f"  10-digit postal code: {_or_placeholder(address.postcode, UNKNOWN_POSTCODE)}",
    ]
    return "\n".join(lines)


def render_state(state: ResolutionState) -> str:
    if isinstance(state, Resolved):
        return render_summary(state.coordinates, state.address)
    if isinstance(state, Failed):
        return state.message
    return progress_line(state) or ""


def state_payload(state: ResolutionState) -> Dict[str, Any]:
    """JSON-friendly view of a pipeline state."""
    payload: Dict[str, Any] = {"status": state.status}
    if isinstance(state, (ResolvingAddress, Resolved)):
        payload["coordinates"] = state.coordinates.to_dict()
    if isinstance(state, Resolved):
        payload["address"] = state.address.to_dict()
        payload["map_url"] = map_url(state.coordinates)
    if isinstance(state, Failed):
        payload["error"] = {"kind": state.kind.value, "message": state.message}
    return payload


__all__ = [
    "MAP_URL_TEMPLATE",
    "PLACEHOLDER",
    "clipboard_text",
    "map_url",
    "progress_line",
    "render_state",
    "render_summary",
    "state_payload",
]
