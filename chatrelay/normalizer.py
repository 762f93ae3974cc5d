"""
Conversation assembly: turns a ChatRequest into the ordered message list a
provider receives.
"""
from typing import List

from .schemas import ChatRequest
from .types import Message
from .utils import build_current_user_message, create_message


def normalize_messages(request: ChatRequest) -> List[Message]:
    """
    Assemble the outbound conversation for a request.

    Order of the result:
    1. The system prompt, when it is not blank. The untrimmed prompt is sent.
    2. The prior turns, as plain text with their original roles. When the last
       turn is a user turn and the request carries images, that slot is
       replaced by the current message with its images; the turn's own text
       is dropped in favor of ``request.message``.
    3. Without history, the current message alone.

    A history ending on a non-user turn while images are attached leaves the
    current message out entirely.

    Pure: the request is not modified and the same request always yields an
    equal list.

    Args:
        request (ChatRequest): The incoming request.

    Returns:
        List[Message]: Never empty.
    """
    images = request.attachments.images
    has_images = len(images) > 0
    messages: List[Message] = []

    if request.system_prompt.strip():
        messages.append(create_message("system", request.system_prompt))

    history = request.history
    if not history:
        messages.append(build_current_user_message(request.message, images))
    else:
        last_index = len(history) - 1
        for i, entry in enumerate(history):
            if i == last_index and entry.role == "user" and has_images:
                messages.append(build_current_user_message(request.message, images))
            else:
                messages.append(create_message(entry.role, entry.content))

    # Never hand an empty conversation to a provider
    if not messages:
        messages.append(build_current_user_message(request.message, images))

    return messages
