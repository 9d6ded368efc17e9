"""Prompt builders for legal-assistant text generation and image analysis."""

from typing import List, Optional

from models.model_types import AttachmentInfo


def build_system_prompt(with_image_analysis: bool = False) -> str:
    """Return the assistant persona and response-length constraint."""
    prompt = (
        "You are a helpful legal assistant AI. Provide general legal information and guidance, "
        "but always remind users to consult with a qualified attorney for specific legal advice. "
        "Be helpful, accurate, and professional. Please limit your responses to 2 or 3 paragraphs."
    )
    if with_image_analysis:
        prompt += (
            " You will receive image analysis from a vision model to help you provide more "
            "comprehensive responses."
        )
    return prompt


def build_user_message(
    user_input: str,
    image_analysis: Optional[str] = None,
    attachments: Optional[List[AttachmentInfo]] = None,
) -> str:
    """Return the user turn, folding in image analysis and an attachment note when present."""
    if image_analysis:
        message = (
            f"User query: {user_input}\n\n"
            f"Image Analysis: {image_analysis}\n\n"
            "Please provide a comprehensive response considering both the user's text query "
            "and the image analysis."
        )
    else:
        message = user_input

    if attachments:
        names = ", ".join(attachment.name for attachment in attachments)
        message += f"\n\nNote: The user has also uploaded {len(attachments)} file(s): {names}"
    return message


def build_image_analysis_prompt(user_context: str) -> str:
    """Return the instruction sent to the vision model for one image."""
    return (
        "Please analyze this image and provide a detailed description. "
        f"Context from user: {user_context}"
    )
