from .client import ChatRelay
from .config import Config, configure_logging
from .errors import (
    ChatError, UnsupportedProviderError, TransportError, ProviderResponseError,
    MalformedResponseError, EmptyResponseError, MissingApiKeyError,
)
from .normalizer import normalize_messages
from .providers import BaseLLMProvider, OpenAIProvider
from .rich_llm_printer import RichPrinter
from .schemas import ChatRequest, ChatResult, Attachments, ImageAttachment, FileAttachment, HistoryMessage
from .types import Message, ContentPart, ImageContent, TextContent, Provider

__all__ = [
    "ChatRelay",
    "Config",
    "configure_logging",
    "ChatError",
    "UnsupportedProviderError",
    "TransportError",
    "ProviderResponseError",
    "MalformedResponseError",
    "EmptyResponseError",
    "MissingApiKeyError",
    "normalize_messages",
    "BaseLLMProvider",
    "OpenAIProvider",
    "RichPrinter",
    "ChatRequest",
    "ChatResult",
    "Attachments",
    "ImageAttachment",
    "FileAttachment",
    "HistoryMessage",
    "Message",
    "ContentPart",
    "ImageContent",
    "TextContent",
    "Provider",
]
