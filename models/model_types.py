"""Value objects passed between the chat boundary, orchestrator, and providers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

VALID_ROLES = {"system", "user", "assistant"}


@dataclass
class ModelMessage:
    """Single chat message sent to a model provider.

    Attributes:
        role: One of `system`, `user`, or `assistant`.
        content: Message text.
        images: Optional encoded images (raw base64 or data URLs) for user messages.
    """

    role: str
    content: str
    images: Optional[List[str]] = None

    def __post_init__(self) -> None:
        if self.role not in VALID_ROLES:
            raise ValueError(f"Unsupported message role '{self.role}'.")


@dataclass
class ImageData:
    """Image uploaded alongside a chat message."""

    file_name: str
    mime_type: str
    base64: str


@dataclass
class AttachmentInfo:
    """Metadata for a non-image upload; only its name reaches the prompt."""

    name: str
    size: int = 0
    type: str = ""


@dataclass(frozen=True)
class ModelConfig:
    """Resolved provider settings for one request.

    Attributes:
        provider: Provider identity (`ollama-local`, `ollama-remote`, or `mock`).
        text_model: Model used for the final text generation.
        vision_model: Model used for image analysis.
        description: Human readable provider description.
        api_url: Runtime base URL, required for the remote provider.
        latency_scale: Multiplier for the simulator's artificial delay.
    """

    provider: str
    text_model: str
    vision_model: str
    description: str
    api_url: Optional[str] = None
    latency_scale: float = 1.0


@dataclass
class ModelAvailability:
    """Result of probing a provider for its required models."""

    text_model: bool
    vision_model: bool
    errors: List[str] = field(default_factory=list)

    @property
    def is_ready(self) -> bool:
        return not self.errors


@dataclass
class ModelResponse:
    """Outcome of a provider call or of the whole orchestration.

    A successful response always carries `content`; a failed one always
    carries `error`.
    """

    success: bool
    content: Optional[str] = None
    error: Optional[str] = None
    model_used: Optional[str] = None

    def __post_init__(self) -> None:
        if self.success and self.content is None:
            raise ValueError("Successful responses require content.")
        if not self.success and not self.error:
            raise ValueError("Failed responses require an error message.")

    @classmethod
    def ok(cls, content: str, model_used: Optional[str] = None) -> "ModelResponse":
        return cls(success=True, content=content, model_used=model_used)

    @classmethod
    def fail(cls, error: str, model_used: Optional[str] = None) -> "ModelResponse":
        return cls(success=False, error=error, model_used=model_used)
