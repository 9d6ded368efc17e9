"""Utilities to build chat-completion message payloads with inline images."""

from typing import Any, Dict, List

from models.model_types import ModelMessage

DEFAULT_IMAGE_MIME = "image/jpeg"


def to_image_data_url(image_b64: str, mime_type: str = DEFAULT_IMAGE_MIME) -> str:
    """Convert a base64 image payload into a data URL suitable for vision input.

    Payloads that already are data URLs are returned unchanged.
    """
    if not image_b64:
        raise ValueError("Image payload must not be empty.")
    if image_b64.startswith("data:"):
        return image_b64
    mime = (mime_type or DEFAULT_IMAGE_MIME).split(";", 1)[0].strip().lower()
    return f"data:{mime};base64,{image_b64}"


def build_chat_message(message: ModelMessage) -> Dict[str, Any]:
    """Map a ModelMessage onto the chat-completions message shape."""
    if not message.images:
        return {"role": message.role, "content": message.content}

    content: List[Dict[str, Any]] = [{"type": "text", "text": message.content}]
    for image in message.images:
        content.append({"type": "image_url", "image_url": {"url": to_image_data_url(image)}})
    return {"role": message.role, "content": content}


def build_chat_messages(messages: List[ModelMessage]) -> List[Dict[str, Any]]:
    """Build the chat-completions `messages` array, one entry per message."""
    return [build_chat_message(message) for message in messages]
