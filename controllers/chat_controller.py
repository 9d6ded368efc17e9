"""Controller for legal-assistant chat requests.

All user-facing error text is decided here; routes only serialize it.
"""

import logging
from typing import Any, Dict

from fastapi import HTTPException
from pydantic import ValidationError

from models.chat_payloads import ChatPayload
from services.model_config import is_provider_configured, resolve_config
from services.orchestrator import ResponseOrchestrator
from services.providers.provider_factory import create_fallback_provider, create_provider
from utils.media_validation import filter_valid_images

LOGGER = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to generate AI response"


def parse_chat_payload(body: Any) -> ChatPayload:
    """Validate the request body and the presence of text input.

    Raises:
        HTTPException(400): If the body is malformed or `userInput` is missing, blank, or not text.
    """
    if not isinstance(body, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object.")
    try:
        payload = ChatPayload.model_validate(body)
    except ValidationError as exc:
        LOGGER.warning("Rejected malformed chat payload: %s", exc)
        raise HTTPException(status_code=400, detail="Invalid request payload.") from exc

    if not isinstance(payload.user_input, str) or not payload.user_input.strip():
        raise HTTPException(status_code=400, detail="User input is required and must be a string.")
    return payload


async def handle_chat_request(body: Any) -> Dict[str, Any]:
    """Validate a chat request, select a provider, and run the response pipeline.

    Args:
        body: Decoded JSON request body.

    Returns:
        `{"success": True, "response": ..., "model_used": ...}`.

    Raises:
        HTTPException: 400 for invalid input, 503 when the provider or a required
            model is unavailable, 500 when generation fails.
    """
    payload = parse_chat_payload(body)
    user_input = payload.user_input.strip()
    images = filter_valid_images(image.to_image_data() for image in payload.images or [])
    attachments = [attachment.to_attachment_info() for attachment in payload.attachments or []]

    config = resolve_config()
    if not is_provider_configured(config):
        raise HTTPException(
            status_code=503,
            detail=f"Model provider '{config.provider}' is not properly configured.",
        )

    provider = await create_fallback_provider(config)
    try:
        availability = await provider.check_availability()
        if images and not availability.vision_model:
            raise HTTPException(
                status_code=503,
                detail="Vision model not available: " + "; ".join(availability.errors),
            )
        if not availability.text_model:
            raise HTTPException(
                status_code=503,
                detail="Text model not available: " + "; ".join(availability.errors),
            )

        try:
            result = await ResponseOrchestrator(provider).orchestrate(user_input, images, attachments)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOGGER.exception("Unexpected failure while generating a response")
            raise HTTPException(status_code=500, detail=GENERIC_FAILURE) from exc

        if not result.success:
            raise HTTPException(status_code=500, detail=result.error or GENERIC_FAILURE)

        return {"success": True, "response": result.content, "model_used": result.model_used}
    finally:
        await provider.aclose()


async def get_model_status() -> Dict[str, Any]:
    """Report the resolved provider and a fresh availability check, without fallback."""
    config = resolve_config()
    configured = is_provider_configured(config)
    status: Dict[str, Any] = {
        "provider": config.provider,
        "description": config.description,
        "text_model": config.text_model,
        "vision_model": config.vision_model,
        "api_url": config.api_url,
        "configured": configured,
    }
    if not configured:
        status.update({"text_model_available": False, "vision_model_available": False, "errors": []})
        return status

    provider = create_provider(config)
    try:
        availability = await provider.check_availability()
    finally:
        await provider.aclose()
    status.update(
        {
            "text_model_available": availability.text_model,
            "vision_model_available": availability.vision_model,
            "errors": availability.errors,
        }
    )
    return status
