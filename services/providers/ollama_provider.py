"""Model provider backed by an Ollama runtime through its OpenAI-compatible API."""

import logging
from typing import Any, Iterable, List, Optional

from openai import AsyncOpenAI

from models.model_types import ImageData, ModelAvailability, ModelConfig, ModelMessage, ModelResponse
from services.model_config import DEFAULT_OLLAMA_HOST, OLLAMA_LOCAL
from services.prompts import build_image_analysis_prompt
from services.providers.base_provider import BaseModelProvider
from services.providers.media_inputs import build_chat_messages

LOGGER = logging.getLogger(__name__)

# Ollama ignores the key, but the OpenAI client refuses to start without one.
OLLAMA_API_KEY = "ollama"


def _openai_base_url(api_url: Optional[str]) -> str:
    base = (api_url or DEFAULT_OLLAMA_HOST).rstrip("/")
    if base.endswith("/v1"):
        return base
    return f"{base}/v1"


def model_installed(required: str, installed: Iterable[str]) -> bool:
    """Return True if any installed model name contains every part of `required`.

    `llava:7b` matches `llava:7b`, `llava:7b-v1.6`, and similar tags.
    """
    parts = [part for part in required.lower().split(":") if part]
    return any(all(part in name.lower() for part in parts) for name in installed)


class OllamaProvider(BaseModelProvider):
    """Delegate text generation and image analysis to a local or remote Ollama runtime."""

    def __init__(self, config: ModelConfig, client: Optional[AsyncOpenAI] = None) -> None:
        """Initialize the provider.

        Args:
            config: Resolved configuration naming the models and runtime URL.
            client: Optional preconfigured async OpenAI client for dependency injection.
        """
        super().__init__(config)
        self._owns_client = client is None
        self.client = client or AsyncOpenAI(base_url=_openai_base_url(config.api_url), api_key=OLLAMA_API_KEY)

    @property
    def is_local(self) -> bool:
        return self.config.provider == OLLAMA_LOCAL

    def _pull_hint(self, model: str) -> str:
        if self.is_local:
            return f"Run: ollama pull {model}"
        return f"Pull {model} on your remote Ollama instance"

    async def check_availability(self) -> ModelAvailability:
        """List installed models and report which required ones are missing."""
        try:
            page = await self.client.models.list()
            installed = [model.id for model in page.data]
        except Exception as exc:  # pylint: disable=broad-exception-caught
            location = "local" if self.is_local else f"remote ({self.config.api_url})"
            LOGGER.error("Failed to list models on %s Ollama instance: %s", location, exc)
            return ModelAvailability(
                text_model=False,
                vision_model=False,
                errors=[f"Failed to connect to {location} Ollama instance: {exc}"],
            )

        vision_ok = model_installed(self.config.vision_model, installed)
        text_ok = model_installed(self.config.text_model, installed)

        errors: List[str] = []
        if not vision_ok:
            errors.append(f"{self.config.vision_model} model not found. {self._pull_hint(self.config.vision_model)}")
        if not text_ok:
            errors.append(f"{self.config.text_model} model not found. {self._pull_hint(self.config.text_model)}")
        return ModelAvailability(text_model=text_ok, vision_model=vision_ok, errors=errors)

    async def generate_text(self, messages: List[ModelMessage]) -> ModelResponse:
        model = self.config.text_model
        try:
            content = await self._chat(model, messages)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOGGER.error("Ollama text generation with %s failed: %s", model, exc)
            return ModelResponse.fail(f"Ollama text generation failed: {exc}", model_used=model)
        return ModelResponse.ok(content, model_used=f"{model} ({self.name})")

    async def analyze_image(self, image: ImageData, prompt: str) -> ModelResponse:
        model = self.config.vision_model
        try:
            message = ModelMessage(
                role="user",
                content=build_image_analysis_prompt(prompt),
                images=[self.format_image_for_provider(image)],
            )
            content = await self._chat(model, [message])
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOGGER.error("Ollama image analysis of %s with %s failed: %s", image.file_name, model, exc)
            return ModelResponse.fail(f"Ollama image analysis failed: {exc}", model_used=model)
        return ModelResponse.ok(content, model_used=f"{model} ({self.name})")

    async def _chat(self, model: str, messages: List[ModelMessage]) -> str:
        """Send one chat-completions request and return the assistant text."""
        response: Any = await self.client.chat.completions.create(
            model=model,
            messages=build_chat_messages(messages),
        )
        choices = getattr(response, "choices", None) or []
        content = choices[0].message.content if choices else None
        if not content or not content.strip():
            raise RuntimeError(f"Model {model} returned an empty response.")
        return content.strip()

    async def aclose(self) -> None:
        """Close the HTTP client when this provider created it."""
        if self._owns_client:
            await self.client.close()
