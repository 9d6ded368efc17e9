"""Capability contract shared by every model provider."""

from abc import ABC, abstractmethod
from typing import List

from models.model_types import ImageData, ModelAvailability, ModelConfig, ModelMessage, ModelResponse
from services.providers.media_inputs import to_image_data_url


class BaseModelProvider(ABC):
    """Answer text and vision requests for one resolved configuration.

    Implementations report failures through `ModelResponse.fail` instead of
    raising, so callers only need to inspect `success`.
    """

    def __init__(self, config: ModelConfig) -> None:
        if config is None:
            raise ValueError("Model configuration is required.")
        self.config = config

    @property
    def name(self) -> str:
        return self.config.description

    @abstractmethod
    async def check_availability(self) -> ModelAvailability:
        """Report whether the text and vision models can be used."""

    @abstractmethod
    async def generate_text(self, messages: List[ModelMessage]) -> ModelResponse:
        """Generate one assistant reply for the conversation."""

    @abstractmethod
    async def analyze_image(self, image: ImageData, prompt: str) -> ModelResponse:
        """Describe an image, using `prompt` as context from the user."""

    def format_image_for_provider(self, image: ImageData) -> str:
        return to_image_data_url(image.base64, image.mime_type)

    async def aclose(self) -> None:
        """Release network resources held by the provider, if any."""
