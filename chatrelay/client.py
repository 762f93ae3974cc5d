import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from .errors import ChatError, UnsupportedProviderError
from .providers import BaseLLMProvider, default_providers
from .schemas import Attachments, ChatRequest, ChatResult, HistoryMessage
from .settings import SettingsStore, build_request, load_general_settings

logger = logging.getLogger(__name__)


class ChatRelay:
    """
    Entry point the front-end talks to.

    Routes each request to the provider registered under its name and turns
    every outcome into a ChatResult.
    """

    def __init__(
        self,
        providers: Optional[Dict[str, BaseLLMProvider]] = None,
        settings_store: Optional[SettingsStore] = None,
    ):
        """
        Initialize the ChatRelay.

        Args:
            providers: Provider registry keyed by provider name. Defaults to
                       every implemented provider.
            settings_store: Persistence for user settings, needed only by
                            ``chat_with_settings``.
        """
        self.providers: Dict[str, BaseLLMProvider] = (
            providers if providers is not None else default_providers()
        )
        self.settings_store = settings_store

    async def chat_completion(
        self,
        request: Union[ChatRequest, Dict[str, Any]],
    ) -> ChatResult:
        """
        Send one chat request to its provider.

        Unknown provider names fail straight away, before any message
        assembly or network traffic. A payload that does not validate
        fails the same way.

        Args:
            request: A ChatRequest, or the front-end's JSON payload as a dict.

        Returns:
            ChatResult: The reply text, or a diagnostic string on failure.
        """
        if not isinstance(request, ChatRequest):
            try:
                request = ChatRequest.model_validate(request)
            except ValidationError as e:
                logger.warning("Rejected invalid chat request payload")
                return ChatResult.failure(f"Invalid chat request: {e}")

        provider = self.providers.get(request.provider)
        try:
            if provider is None:
                raise UnsupportedProviderError(request.provider)

            logger.debug("Dispatching chat request to %s (model %s)", request.provider, request.model)
            text = await provider.chat(request)
        except ChatError as e:
            logger.warning("Chat request to %s failed: %s", request.provider, type(e).__name__)
            return ChatResult.failure(str(e), provider=request.provider)

        return ChatResult.success(text, provider=request.provider)

    async def chat_with_settings(
        self,
        message: str,
        history: Optional[List[Union[HistoryMessage, Dict[str, str]]]] = None,
        attachments: Optional[Union[Attachments, Dict[str, Any]]] = None,
    ) -> ChatResult:
        """
        Send a message using the provider, model, key and system prompt the
        user saved in their general settings.

        Args:
            message (str): Current user text.
            history (list, optional): Prior turns.
            attachments (optional): Attachments of the current message.

        Returns:
            ChatResult: Same contract as ``chat_completion``.
        """
        if self.settings_store is None:
            return ChatResult.failure("No settings store configured")

        settings = await load_general_settings(self.settings_store)
        try:
            request = build_request(settings, message, history, attachments)
        except (ChatError, ValidationError) as e:
            logger.warning("Cannot build chat request from settings: %s", type(e).__name__)
            return ChatResult.failure(str(e), provider=settings.get("primary_ai"))

        return await self.chat_completion(request)
