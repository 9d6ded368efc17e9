"""Two-stage response pipeline: optional image analysis, then one text generation.

Images are analyzed concurrently and joined all-or-nothing; a single failed
analysis cancels the others and fails the whole request before any text is
generated.
"""

import asyncio
import logging
import time
from typing import List, Optional, Tuple

from models.model_types import AttachmentInfo, ImageData, ModelMessage, ModelResponse
from services.prompts import build_system_prompt, build_user_message
from services.providers.base_provider import BaseModelProvider

LOGGER = logging.getLogger(__name__)


class OrchestrationError(RuntimeError):
    """A pipeline stage failed; the message names the stage and the cause."""


class ResponseOrchestrator:
    """Sequence vision analysis and text generation on a single provider."""

    def __init__(self, provider: BaseModelProvider) -> None:
        if provider is None:
            raise ValueError("A model provider is required.")
        self.provider = provider

    async def orchestrate(
        self,
        user_input: str,
        images: List[ImageData],
        other_attachments: Optional[List[AttachmentInfo]] = None,
    ) -> ModelResponse:
        """Produce the final assistant reply for one chat request.

        Args:
            user_input: The user's question.
            images: Validated images, analyzed in this order.
            other_attachments: Non-image uploads mentioned by name in the prompt.

        Returns:
            A successful ModelResponse with the combined `model_used` label, or a
            failed one carrying the first stage failure.

        Raises:
            Exception: Anything other than a reported stage failure propagates
                unchanged so the caller decides what reaches the user.
        """
        start = time.time()
        try:
            image_analysis: Optional[str] = None
            vision_model: Optional[str] = None
            if images:
                LOGGER.info("Processing %d image(s) with %s", len(images), self.provider.config.vision_model)
                image_analysis, vision_model = await self._analyze_images(user_input, images)

            LOGGER.info("Generating response with %s", self.provider.config.text_model)
            messages = [
                ModelMessage(role="system", content=build_system_prompt(with_image_analysis=bool(image_analysis))),
                ModelMessage(role="user", content=build_user_message(user_input, image_analysis, other_attachments)),
            ]
            result = await self.provider.generate_text(messages)
            if not result.success:
                raise OrchestrationError(f"Text generation failed: {result.error}")
        except OrchestrationError as exc:
            LOGGER.error("Error in model orchestration: %s", exc)
            return ModelResponse.fail(str(exc))

        text_model = result.model_used or self.provider.config.text_model
        model_used = f"{vision_model} + {text_model}" if vision_model else text_model
        LOGGER.info("Orchestration finished in %.3fs using %s", time.time() - start, model_used)
        return ModelResponse.ok(result.content, model_used=model_used)

    async def _analyze_images(self, user_input: str, images: List[ImageData]) -> Tuple[str, str]:
        """Analyze every image concurrently and return (aggregate text, vision model label).

        The first failure cancels the analyses still running; no task outlives this call.
        """

        async def analyze(image: ImageData) -> ModelResponse:
            response = await self.provider.analyze_image(image, user_input)
            if not response.success:
                raise OrchestrationError(f"Image analysis failed for {image.file_name}: {response.error}")
            return response

        tasks = [asyncio.ensure_future(analyze(image)) for image in images]
        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        for task in tasks:
            if not task.cancelled() and task.exception() is not None:
                raise task.exception()
        responses = [task.result() for task in tasks]

        entries = [
            f"Image {index} ({image.file_name}): {response.content}"
            for index, (image, response) in enumerate(zip(images, responses), start=1)
        ]
        vision_model = responses[0].model_used or self.provider.config.vision_model
        return "\n\n".join(entries), vision_model
