"""
Pytest configuration and shared fixtures.

Provider selection reads the process environment on every call, so each test
starts from a clean slate with the simulator's artificial delay disabled.
"""

import asyncio
from typing import Dict, List, Optional

import pytest

from models.model_types import (
    ImageData,
    ModelAvailability,
    ModelConfig,
    ModelMessage,
    ModelResponse,
)
from services.providers.base_provider import BaseModelProvider

PROVIDER_ENV_VARS = (
    "MODEL_PROVIDER",
    "OLLAMA_API_URL",
    "OLLAMA_HOST",
    "OLLAMA_TEXT_MODEL",
    "OLLAMA_VISION_MODEL",
    "VERCEL",
    "NETLIFY",
    "APP_ENV",
    "ENVIRONMENT",
)


@pytest.fixture(autouse=True)
def clean_provider_env(monkeypatch):
    for name in PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MOCK_LATENCY_SCALE", "0")


class FakeProvider(BaseModelProvider):
    """In-memory provider recording every call it receives."""

    def __init__(
        self,
        availability: Optional[ModelAvailability] = None,
        text_reply: str = "Generated answer",
        failing_images: Optional[List[str]] = None,
        image_delays: Optional[Dict[str, float]] = None,
        text_error: Optional[str] = None,
    ) -> None:
        super().__init__(
            ModelConfig(
                provider="fake",
                text_model="fake-text",
                vision_model="fake-vision",
                description="Fake provider",
            )
        )
        self.availability = availability or ModelAvailability(text_model=True, vision_model=True)
        self.text_reply = text_reply
        self.failing_images = set(failing_images or [])
        self.image_delays = image_delays or {}
        self.text_error = text_error
        self.analyzed: List[str] = []
        self.image_prompts: List[str] = []
        self.completed: List[str] = []
        self.text_calls: List[List[ModelMessage]] = []
        self.closed = False

    async def check_availability(self) -> ModelAvailability:
        return self.availability

    async def generate_text(self, messages: List[ModelMessage]) -> ModelResponse:
        self.text_calls.append(messages)
        if self.text_error:
            return ModelResponse.fail(self.text_error, model_used="fake-text")
        return ModelResponse.ok(self.text_reply, model_used="fake-text")

    async def analyze_image(self, image: ImageData, prompt: str) -> ModelResponse:
        self.analyzed.append(image.file_name)
        self.image_prompts.append(prompt)
        await asyncio.sleep(self.image_delays.get(image.file_name, 0))
        self.completed.append(image.file_name)
        if image.file_name in self.failing_images:
            return ModelResponse.fail("vision backend unreachable", model_used="fake-vision")
        return ModelResponse.ok(f"analysis of {image.file_name}", model_used="fake-vision")

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def make_provider():
    """Return a factory building FakeProvider instances."""
    return FakeProvider


def make_image(file_name: str, mime_type: str = "image/png") -> ImageData:
    return ImageData(file_name=file_name, mime_type=mime_type, base64="aGVsbG8=")


@pytest.fixture
def image_factory():
    return make_image
