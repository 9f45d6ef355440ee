"""Generic LLM client utilities."""

from __future__ import annotations

import os
from typing import Optional

from openai import AsyncOpenAI

from address_finder.config import Settings

DEFAULT_MODEL = "gemini-2.5-flash"


class GenericLLMClient:
    """Generic helper around the async OpenAI client with Settings integration."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        default_model: Optional[str] = None,
    ) -> None:
        self.settings = settings
        self.api_key = self._resolve_api_key(api_key)
        self.base_url = base_url or (
            settings.llm_api_base if settings and settings.llm_api_base else None
        )
        if not self.api_key:
            raise ValueError(
                "LLM API key must be provided via arguments, "
                "settings.llm_api_key, or environment variables.",
            )
        self.client = AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)
        if default_model:
            self.default_model = default_model
        elif settings and settings.llm_model:
            self.default_model = settings.llm_model
        else:
            self.default_model = DEFAULT_MODEL

    def _resolve_api_key(self, override: Optional[str]) -> Optional[str]:
        if override:
            return override
        if self.settings and self.settings.llm_api_key:
            return self.settings.llm_api_key
        for env_var in ("LLM_API_KEY", "GEMINI_API_KEY", "OPENAI_API_KEY"):
            candidate = os.getenv(env_var)
            if candidate:
                return candidate
        return None

    async def aclose(self) -> None:
        await self.client.close()


__all__ = ["GenericLLMClient"]
