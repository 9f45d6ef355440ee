"""Reverse geocoding through a grounded language model."""

from __future__ import annotations

import logging
import re
from typing import Dict, Optional, Pattern, Tuple

from address_finder.clients.geocoding import (
    InferenceService,
    InferenceTools,
    LocationBias,
)
from address_finder.errors import InferenceCallFailed
from address_finder.models import AddressDetails, Coordinates

logger = logging.getLogger(__name__)

FULL_ADDRESS_LABEL = "آدرس کامل"

# Ordered as they are requested in the prompt.
ADDRESS_LABELS: Tuple[Tuple[str, str], ...] = (
    ("استان", "state"),
    ("شهر", "city"),
    ("منطقه", "district"),
    ("محله", "neighbourhood"),
    ("خیابان", "road"),
    ("پلاک", "building"),
    ("کدپستی", "postcode"),
    (FULL_ADDRESS_LABEL, "full_address"),
)

PROMPT_TEMPLATE = """آدرس دقیق این مختصات را استخراج کن: {lat}, {lng}.
پاسخ را دقیقاً با این برچسب‌ها بده:
{labels}"""


def _label_pattern(label: str) -> Pattern[str]:
    # [ \t]* keeps the match on one line so a blank value never captures the next line.
    return re.compile(rf"{re.escape(label)}:[ \t]*([^\r\n]*)", re.IGNORECASE)


_LABEL_PATTERNS: Tuple[Tuple[str, Pattern[str]], ...] = tuple(
    (field, _label_pattern(label)) for label, field in ADDRESS_LABELS
)


def build_prompt(coordinates: Coordinates) -> str:
    """Fixed-format prompt asking for every address label as ``<label>: <value>``."""
    labels = "\n".join(f"{label}: " for label, _ in ADDRESS_LABELS)
    return PROMPT_TEMPLATE.format(
        lat=coordinates.latitude,
        lng=coordinates.longitude,
        labels=labels,
    )


def _first_line(text: str) -> str:
    for line in text.splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return ""


def extract_address(text: str) -> AddressDetails:
    """
    Extract a structured address from a free-text model reply.

    Each label is matched independently and case-insensitively; the first
    line carrying ``<label>:`` wins and the rest of that line, stripped, is
    the value. Labels that never appear yield ``None``. When the full-address
    label is missing or blank, the first non-blank line of the reply is used.

    Parameters
    ----------
    text : str
        Raw reply text. Must contain at least one non-whitespace character.

    Returns
    -------
    AddressDetails
        The extracted record.
    """
    values: Dict[str, Optional[str]] = {}
    for field, pattern in _LABEL_PATTERNS:
        match = pattern.search(text)
        values[field] = match.group(1).strip() if match else None

    full_address = values.pop("full_address") or _first_line(text)
    if not full_address:
        raise ValueError("Cannot extract an address from an empty reply")
    return AddressDetails(full_address=full_address, **values)


class AddressResolver:
    """Turn coordinates into an :class:`AddressDetails` with one inference call."""

    def __init__(
        self,
        service: InferenceService,
        tools: Optional[InferenceTools] = None,
    ) -> None:
        self.service = service
        self.tools = tools or InferenceTools(geo_grounding=True, web_search=True)

    async def resolve(self, coordinates: Coordinates) -> AddressDetails:
        prompt = build_prompt(coordinates)
        bias = LocationBias(lat=coordinates.latitude, lng=coordinates.longitude)
        try:
            reply = await self.service.generate(
                prompt,
                tools=self.tools,
                location_bias=bias,
            )
        except InferenceCallFailed:
            raise
        except Exception as exc:  # noqa: BLE001
            raise InferenceCallFailed() from exc

        text = getattr(reply, "text", None)
        if not isinstance(text, str) or not text.strip():
            raise InferenceCallFailed()

        address = extract_address(text)
        logger.debug("Extracted address fields", extra={"address": address.to_dict()})
        return address


__all__ = [
    "ADDRESS_LABELS",
    "AddressResolver",
    "FULL_ADDRESS_LABEL",
    "build_prompt",
    "extract_address",
]
