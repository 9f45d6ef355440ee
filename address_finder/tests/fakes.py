"""In-process fakes for the positioning and inference collaborators."""
from __future__ import annotations

from typing import List, Optional

from address_finder.clients.geocoding import InferenceReply, InferenceTools, LocationBias
from address_finder.clients.positioning import PositionOptions
from address_finder.models import Coordinates

TEHRAN = Coordinates(latitude=35.6892, longitude=51.3890, accuracy=12.0)

SCENARIO_B_REPLY = "خیابان: آزادی\nکدپستی: 1234567890\nآدرس کامل: تهران، خیابان آزادی"


class FakePositionProvider:
    """Positioning provider returning a fixed fix or raising a fixed error."""

    def __init__(
        self,
        coordinates: Optional[Coordinates] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.coordinates = coordinates or TEHRAN
        self.error = error
        self.calls: List[PositionOptions] = []

    async def get_current_position(self, options: PositionOptions) -> Coordinates:
        self.calls.append(options)
        if self.error is not None:
            raise self.error
        return self.coordinates


class FakeInferenceService:
    """Inference service recording requests and replaying a canned reply."""

    def __init__(self, text: Optional[str] = SCENARIO_B_REPLY, error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.requests: list[dict] = []

    async def generate(
        self,
        prompt: str,
        *,
        tools: InferenceTools,
        location_bias: LocationBias,
    ) -> InferenceReply:
        self.requests.append(
            {"prompt": prompt, "tools": tools, "location_bias": location_bias}
        )
        if self.error is not None:
            raise self.error
        return InferenceReply(text=self.text)
