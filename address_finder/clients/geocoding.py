"""Grounded inference client used for reverse geocoding."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from address_finder.clients.llm import GenericLLMClient
from address_finder.errors import InferenceCallFailed


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InferenceTools:
    """Augmentation capabilities enabled for one inference call."""

    geo_grounding: bool = True
    web_search: bool = True


@dataclass(frozen=True)
class LocationBias:
    lat: float
    lng: float


@dataclass(frozen=True)
class InferenceReply:
    text: str


class InferenceService(Protocol):
    async def generate(
        self,
        prompt: str,
        *,
        tools: InferenceTools,
        location_bias: LocationBias,
    ) -> InferenceReply:
        """Return the free-text reply of the service for ``prompt``."""


class GroundedInferenceClient(GenericLLMClient):
    """
    Inference service adapter for an OpenAI-compatible chat endpoint.

    Grounding tools and the location bias are not part of the OpenAI schema,
    so they are sent in the request body next to the standard fields.
    """

    async def generate(
        self,
        prompt: str,
        *,
        tools: InferenceTools,
        location_bias: LocationBias,
        model: Optional[str] = None,
    ) -> InferenceReply:
        resolved_model = model or self.default_model
        extra_body = build_grounding_body(tools, location_bias)
        logger.debug(
            "Requesting grounded completion",
            extra={"model": resolved_model, "tools": list(extra_body.get("tools", []))},
        )
        try:
            completion = await self.client.chat.completions.create(
                model=resolved_model,
                messages=[{"role": "user", "content": prompt}],
                extra_body=extra_body,
            )
        except Exception as exc:  # noqa: BLE001
            raise InferenceCallFailed() from exc

        text = _extract_message_text(completion)
        if not text or not text.strip():
            logger.warning("Inference service returned no usable text")
            raise InferenceCallFailed()
        return InferenceReply(text=text)


def build_grounding_body(tools: InferenceTools, location_bias: LocationBias) -> Dict[str, Any]:
    """Request-body extension enabling grounding tools and the location bias."""
    tool_specs: List[Dict[str, Any]] = []
    if tools.geo_grounding:
        tool_specs.append({"google_maps": {}})
    if tools.web_search:
        tool_specs.append({"google_search": {}})
    body: Dict[str, Any] = {
        "tool_config": {
            "retrieval_config": {
                "lat_lng": {
                    "latitude": location_bias.lat,
                    "longitude": location_bias.lng,
                }
            }
        }
    }
    if tool_specs:
        body["tools"] = tool_specs
    return body


def _extract_message_text(completion: Any) -> Optional[str]:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    if isinstance(content, list):
        # Some compatible endpoints return content parts instead of a string.
        parts = [
            part.get("text", "") if isinstance(part, dict) else getattr(part, "text", "")
            for part in content
        ]
        return "".join(part for part in parts if part)
    return content


__all__ = [
    "GroundedInferenceClient",
    "InferenceReply",
    "InferenceService",
    "InferenceTools",
    "LocationBias",
    "build_grounding_body",
]
