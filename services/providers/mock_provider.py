"""Offline provider returning canned legal guidance for demos and UI testing."""

import asyncio
import logging
import random
from typing import List, Tuple

from models.model_types import ImageData, ModelAvailability, ModelMessage, ModelResponse
from services.providers.base_provider import BaseModelProvider
from services.providers.mock_responses import build_mock_image_analysis, build_mock_response

LOGGER = logging.getLogger(__name__)

TEXT_DELAY_SECONDS = (1.0, 3.0)
IMAGE_DELAY_SECONDS = (2.0, 5.0)


class MockProvider(BaseModelProvider):
    """Simulate a model runtime without any network I/O.

    Only the artificial delay is randomized; the returned text depends on the
    input alone.
    """

    @property
    def name(self) -> str:
        return "Mock AI (Demo Mode)"

    async def check_availability(self) -> ModelAvailability:
        return ModelAvailability(text_model=True, vision_model=True, errors=[])

    async def generate_text(self, messages: List[ModelMessage]) -> ModelResponse:
        LOGGER.info("Mock provider generating text for %d message(s)", len(messages))
        await self._simulate_latency(TEXT_DELAY_SECONDS)

        user_messages = [message.content for message in messages if message.role == "user"]
        user_input = user_messages[-1] if user_messages else ""
        content = build_mock_response(user_input)
        LOGGER.debug("Mock provider response length: %d", len(content))
        return ModelResponse.ok(content, model_used=f"{self.config.text_model} (Mock Demo)")

    async def analyze_image(self, image: ImageData, prompt: str) -> ModelResponse:
        await self._simulate_latency(IMAGE_DELAY_SECONDS)
        content = build_mock_image_analysis(image.file_name)
        return ModelResponse.ok(content, model_used=f"{self.config.vision_model} (Mock Demo)")

    async def _simulate_latency(self, bounds: Tuple[float, float]) -> None:
        scale = self.config.latency_scale
        if scale <= 0:
            return
        await asyncio.sleep(random.uniform(*bounds) * scale)
