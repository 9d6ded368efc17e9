"""Validation helpers for images attached to chat requests."""

import logging
from typing import Iterable, List, Optional

from models.model_types import ImageData

LOGGER = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/webp",
}


def is_valid_image_format(mime_type: Optional[str]) -> bool:
    """Return True when the MIME type names a supported image encoding.

    Parameters such as `image/png; charset=binary` are ignored and the
    comparison is case-insensitive. Missing or non-string values are rejected.
    """
    if not isinstance(mime_type, str):
        return False
    content_type = mime_type.lower().split(";", 1)[0].strip()
    return content_type in ALLOWED_IMAGE_TYPES


def filter_valid_images(images: Iterable[ImageData]) -> List[ImageData]:
    """Keep supported, non-empty images in their original order, logging each one dropped."""
    accepted: List[ImageData] = []
    for image in images:
        if not is_valid_image_format(image.mime_type):
            LOGGER.warning(
                "Skipping attachment %r with unsupported image type %r",
                image.file_name,
                image.mime_type,
            )
        elif not image.base64:
            LOGGER.warning("Skipping image %r with an empty payload", image.file_name)
        else:
            accepted.append(image)
    return accepted
