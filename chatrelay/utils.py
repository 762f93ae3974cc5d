from typing import Iterable, List, Union

from .schemas import ImageAttachment
from .types import Message, ContentPart, TextContent, ImageContent

# =============================================================================
# Content Helpers
# =============================================================================

def create_text_content(text: str) -> TextContent:
    """
    Create a standardized simple text content part.

    Args:
        text (str): The text message content.

    Returns:
        TextContent: A dictionary {"type": "text", "text": text}.
    """
    return {"type": "text", "text": text}


def create_image_content(url: str) -> ImageContent:
    """
    Create an image reference part for multimodal messages.

    The URL is forwarded untouched: data URIs produced by the front-end and
    remote URLs are both accepted by the provider as-is.

    Args:
        url (str): HTTP(S) URL or data URI of the image.

    Returns:
        ImageContent: {"type": "image_url", "image_url": {"url": url}}.
    """
    return {"type": "image_url", "image_url": {"url": url}}


def create_message(
    role: str,
    content: Union[str, List[Union[str, ContentPart]]],
) -> Message:
    """
    Create a standardized Message object.

    Handles both simple string content and lists of content parts (multimodal).
    Automatically normalizes string elements within a list to TextContent objects.

    Args:
        role (str): The role of the message sender ('system', 'user', 'assistant', ...).
        content (Union[str, List]): The content of the message.

    Returns:
        Message: A dictionary matching the Message type definition.
    """
    # Simple text content - no transformation needed
    if isinstance(content, str):
        return {"role": role, "content": content}

    # List content - normalize strings to TextContent dicts
    normalized: List[ContentPart] = []
    for item in content:
        if isinstance(item, str):
            normalized.append(create_text_content(item))
        else:
            normalized.append(item)

    return {"role": role, "content": normalized}


def build_current_user_message(message: str, images: Iterable[ImageAttachment]) -> Message:
    """
    Build the message carrying the user's current input.

    Without images this is a plain text user message. With images the content
    becomes a part list: the text first, then one image part per attachment
    in attachment order.

    Args:
        message (str): The current user text.
        images: Image attachments of the request.

    Returns:
        Message: A user message.
    """
    images = list(images)
    if not images:
        return create_message("user", message)

    parts: List[Union[str, ContentPart]] = [message]
    parts.extend(create_image_content(img.url) for img in images)
    return create_message("user", parts)
