"""External service clients: inference service and positioning providers."""

from .geocoding import (
    GroundedInferenceClient,
    InferenceReply,
    InferenceService,
    InferenceTools,
    LocationBias,
)
from .llm import GenericLLMClient
from .positioning import (
    IPPositionProvider,
    PositionOptions,
    PositioningProvider,
    StaticPositionProvider,
)

__all__ = [
    "GenericLLMClient",
    "GroundedInferenceClient",
    "IPPositionProvider",
    "InferenceReply",
    "InferenceService",
    "InferenceTools",
    "LocationBias",
    "PositionOptions",
    "PositioningProvider",
    "StaticPositionProvider",
]
