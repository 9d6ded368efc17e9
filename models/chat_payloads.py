"""Pydantic schemas for the chat endpoint's JSON body."""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.model_types import AttachmentInfo, ImageData


class ImagePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_name: str = Field("image", alias="fileName")
    mime_type: Optional[str] = Field(None, alias="mimeType")
    base64: str = ""

    def to_image_data(self) -> ImageData:
        return ImageData(file_name=self.file_name, mime_type=self.mime_type or "", base64=self.base64)


class AttachmentPayload(BaseModel):
    name: str
    size: int = 0
    type: str = ""

    def to_attachment_info(self) -> AttachmentInfo:
        return AttachmentInfo(name=self.name, size=self.size, type=self.type)


class ChatPayload(BaseModel):
    """Inbound chat request. `user_input` is left untyped so the controller can
    report a missing or non-text value with its own message."""

    model_config = ConfigDict(populate_by_name=True)

    user_input: Any = Field(None, alias="userInput")
    images: Optional[List[ImagePayload]] = None
    attachments: Optional[List[AttachmentPayload]] = None
