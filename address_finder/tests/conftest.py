from __future__ import annotations

import pytest

from address_finder.models import Coordinates
from address_finder.tests.fakes import TEHRAN, FakeInferenceService, FakePositionProvider


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep developer credentials and local .env files out of the tests."""
    for name in (
        "LLM_API_KEY",
        "GEMINI_API_KEY",
        "OPENAI_API_KEY",
        "POSITIONING_PROVIDER",
        "STATIC_LATITUDE",
        "STATIC_LONGITUDE",
        "LLM_MODEL",
        "LLM_API_BASE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def tehran() -> Coordinates:
    return TEHRAN


@pytest.fixture
def fake_provider() -> FakePositionProvider:
    return FakePositionProvider()


@pytest.fixture
def fake_inference() -> FakeInferenceService:
    return FakeInferenceService()
