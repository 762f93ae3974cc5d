from abc import ABC, abstractmethod
from typing import List

from ..normalizer import normalize_messages
from ..schemas import ChatRequest
from ..types import Message

class BaseLLMProvider(ABC):
    """
    Abstract base class for LLM providers.

    A provider turns a request into its own message list (``normalize``) and
    performs the network call (``send``).
    """

    provider_name: str = ""
    display_name: str = ""

    def normalize(self, request: ChatRequest) -> List[Message]:
        """
        Build the provider message list for a request.

        Args:
            request (ChatRequest): The incoming request.

        Returns:
            List[Message]: Ordered, never-empty conversation.
        """
        return normalize_messages(request)

    @abstractmethod
    async def send(
        self,
        messages: List[Message],
        model: str,
        api_key: str,
    ) -> str:
        """
        Send a chat request to the provider.

        Args:
            messages (List[Message]): Normalized conversation.
            model (str): The model identifier.
            api_key (str): Credential used for this call only.

        Returns:
            str: The reply text.

        Raises:
            ChatError: Transport, status or response-shape failures.
        """
        pass

    async def chat(self, request: ChatRequest) -> str:
        """
        Normalize the request and send it.

        Args:
            request (ChatRequest): The incoming request.

        Returns:
            str: The reply text.
        """
        messages = self.normalize(request)
        return await self.send(messages, request.model, request.api_key)
