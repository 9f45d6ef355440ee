"""Location-resolution workflow: locate, resolve, orchestrate."""

from .locator import Locator
from .orchestrator import LocationPipeline, build_pipeline, build_provider
from .resolver import AddressResolver, build_prompt, extract_address

__all__ = [
    "AddressResolver",
    "LocationPipeline",
    "Locator",
    "build_pipeline",
    "build_prompt",
    "build_provider",
    "extract_address",
]
