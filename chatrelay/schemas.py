"""
Inbound request and outbound result models.

The front-end sends camelCase JSON (``apiKey``, ``systemPrompt``, ``hasAudio``,
and ``messages`` for the prior turns). The models accept that shape as well as
plain snake_case field names.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HistoryMessage(_WireModel):
    """A prior conversation turn, as stored by the caller."""
    role: str
    content: str


class ImageAttachment(_WireModel):
    id: str
    name: str
    size: int
    url: str


class FileAttachment(_WireModel):
    # Accepted but not forwarded to any provider yet
    id: str
    name: str
    size: int
    type: str


class Attachments(_WireModel):
    images: List[ImageAttachment] = Field(default_factory=list)
    files: List[FileAttachment] = Field(default_factory=list)
    has_audio: bool = False


class ChatRequest(_WireModel):
    """
    A single chat request coming from the UI.

    ``history`` is optional: ``None`` (no history sent) and ``[]`` produce the
    same normalized conversation.
    """
    provider: str
    model: str
    api_key: str
    system_prompt: str = ""
    message: str
    history: Optional[List[HistoryMessage]] = Field(default=None, alias="messages")
    attachments: Attachments = Field(default_factory=Attachments)


class ChatResult(BaseModel):
    """
    Outcome of one chat request: either the reply text or a diagnostic.
    """
    text: Optional[str] = None
    error: Optional[str] = None
    provider: Optional[str] = None

    @classmethod
    def success(cls, text: str, provider: Optional[str] = None) -> "ChatResult":
        return cls(text=text, provider=provider)

    @classmethod
    def failure(cls, error: str, provider: Optional[str] = None) -> "ChatResult":
        return cls(error=error, provider=provider)

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_payload(self) -> Dict[str, Any]:
        """Render the result the way the front-end consumes it."""
        if self.ok:
            return {"text": self.text}
        return {"error": self.error}
