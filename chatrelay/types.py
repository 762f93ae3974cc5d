from typing import Literal, List, Union, TypedDict

# =============================================================================
# Type Definitions
# =============================================================================

# Providers with an implementation behind them
Provider = Literal["openai"]


class TextContent(TypedDict):
    """
    Text content part for multimodal messages.
    """
    type: Literal["text"]
    text: str


class ImageUrlDetail(TypedDict):
    """
    Image URL specification.
    """
    url: str


class ImageContent(TypedDict):
    """
    Image content part for multimodal messages (OpenAI format).
    """
    type: Literal["image_url"]
    image_url: ImageUrlDetail


# Content can be a simple string or a list of content parts (text + images)
ContentPart = Union[TextContent, ImageContent]
MessageContent = Union[str, List[ContentPart]]


# =============================================================================
# Message Type
# =============================================================================

class Message(TypedDict):
    """
    Normalized chat message, ready to be serialized for a provider.

    Roles:
    - "system": System prompt / instructions
    - "user": User message
    - "assistant": Model response

    Roles coming from caller-supplied history are carried through as-is,
    so any other string is possible too.
    """
    role: str
    content: MessageContent
