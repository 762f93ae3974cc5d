import pytest
from unittest.mock import AsyncMock, MagicMock

from chatrelay.client import ChatRelay
from chatrelay.errors import TransportError
from chatrelay.providers.openai import OpenAIProvider
from chatrelay.schemas import ChatResult
from chatrelay.settings import DEFAULT_GENERAL_SETTINGS

from conftest import InMemorySettingsStore, RecordingHandler, completion_body

FRONTEND_PAYLOAD = {
    "provider": "openai",
    "model": "gpt-4o",
    "apiKey": "sk-test",
    "systemPrompt": "Be concise",
    "message": "Describe",
    "messages": [{"role": "user", "content": "Describe"}],
    "attachments": {
        "images": [{"id": "1", "name": "a.png", "size": 3, "url": "data:img1"}],
        "files": [{"id": "2", "name": "notes.txt", "size": 5, "type": "text/plain"}],
        "hasAudio": False,
    },
}


class TestChatRelay:

    def test_init_registers_openai(self, mock_env):
        relay = ChatRelay()
        assert set(relay.providers) == {"openai"}
        assert isinstance(relay.providers["openai"], OpenAIProvider)

    @pytest.mark.asyncio
    async def test_chat_delegation(self, make_request):
        """chat_completion() hands the request to the matching provider."""
        mock_provider = AsyncMock()
        mock_provider.chat.return_value = "mock response"
        relay = ChatRelay(providers={"openai": mock_provider})

        request = make_request()
        result = await relay.chat_completion(request)

        mock_provider.chat.assert_called_once_with(request)
        assert result.ok
        assert result.text == "mock response"
        assert result.to_payload() == {"text": "mock response"}

    @pytest.mark.asyncio
    async def test_unsupported_provider_fails_fast(self, make_request):
        mock_provider = MagicMock()
        mock_provider.chat = AsyncMock()
        relay = ChatRelay(providers={"openai": mock_provider})

        result = await relay.chat_completion(make_request(provider="anthropic"))

        assert not result.ok
        assert result.error == "Provider 'anthropic' not supported"
        assert result.to_payload() == {"error": "Provider 'anthropic' not supported"}
        mock_provider.chat.assert_not_called()
        mock_provider.normalize.assert_not_called()

    @pytest.mark.asyncio
    async def test_provider_error_becomes_failure(self, make_request):
        mock_provider = AsyncMock()
        mock_provider.chat.side_effect = TransportError("OpenAI request failed: timed out")
        relay = ChatRelay(providers={"openai": mock_provider})

        result = await relay.chat_completion(make_request())

        assert result == ChatResult.failure("OpenAI request failed: timed out", provider="openai")

    @pytest.mark.asyncio
    async def test_accepts_frontend_payload(self, make_provider):
        handler = RecordingHandler(body=completion_body("An image."))
        relay = ChatRelay(providers={"openai": make_provider(handler)})

        result = await relay.chat_completion(FRONTEND_PAYLOAD)

        assert result.text == "An image."
        assert handler.last_body["messages"] == [
            {"role": "system", "content": "Be concise"},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "Describe"},
                    {"type": "image_url", "image_url": {"url": "data:img1"}},
                ],
            },
        ]

    @pytest.mark.asyncio
    async def test_unauthorized_end_to_end(self, make_provider, make_request):
        handler = RecordingHandler(status_code=401, text='{"error":"invalid key"}')
        relay = ChatRelay(providers={"openai": make_provider(handler)})

        result = await relay.chat_completion(make_request())

        assert not result.ok
        assert "401" in result.error
        assert '{"error":"invalid key"}' in result.error

    @pytest.mark.asyncio
    async def test_empty_response_end_to_end(self, make_provider, make_request):
        relay = ChatRelay(providers={"openai": make_provider(RecordingHandler(body={"choices": []}))})

        result = await relay.chat_completion(make_request())

        assert not result.ok
        assert "Empty" in result.error
        assert "Malformed" not in result.error

    @pytest.mark.asyncio
    async def test_invalid_payload_becomes_failure(self):
        mock_provider = AsyncMock()
        relay = ChatRelay(providers={"openai": mock_provider})

        result = await relay.chat_completion({"provider": "openai", "model": "gpt-4o"})

        assert not result.ok
        assert result.error.startswith("Invalid chat request")
        assert "apiKey" in result.error
        assert "message" in result.error
        mock_provider.chat.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("api_key", ["", "sk-\u00e9"])
    async def test_unusable_api_key_becomes_failure(self, make_provider, make_request, api_key):
        handler = RecordingHandler(status_code=401, text='{"error":"invalid key"}')
        relay = ChatRelay(providers={"openai": make_provider(handler)})

        result = await relay.chat_completion(make_request().model_copy(update={"api_key": api_key}))

        assert not result.ok
        assert "OpenAI" in result.error


class TestChatWithSettings:

    @pytest.mark.asyncio
    async def test_uses_stored_settings(self, make_provider):
        handler = RecordingHandler(body=completion_body("Olá"))
        settings = {
            **DEFAULT_GENERAL_SETTINGS,
            "api_keys": {"openai": "sk-stored"},
            "selected_models": {"openai": "gpt-4o-mini"},
        }
        relay = ChatRelay(
            providers={"openai": make_provider(handler)},
            settings_store=InMemorySettingsStore({"general": settings}),
        )

        result = await relay.chat_with_settings("Oi")

        assert result.text == "Olá"
        assert handler.requests[0].headers["Authorization"] == "Bearer sk-stored"
        assert handler.last_body["model"] == "gpt-4o-mini"
        assert handler.last_body["messages"] == [
            {"role": "system", "content": "Você é um assistente útil. Responda em pt-BR."},
            {"role": "user", "content": "Oi"},
        ]

    @pytest.mark.asyncio
    async def test_missing_key_with_default_settings(self):
        mock_provider = AsyncMock()
        relay = ChatRelay(providers={"openai": mock_provider}, settings_store=InMemorySettingsStore())

        result = await relay.chat_with_settings("Oi")

        assert not result.ok
        assert "openai" in result.error
        mock_provider.chat.assert_not_called()

    @pytest.mark.asyncio
    async def test_without_store(self):
        relay = ChatRelay(providers={})
        result = await relay.chat_with_settings("Oi")
        assert result.error == "No settings store configured"

    @pytest.mark.asyncio
    async def test_stored_system_turns_are_replaced(self, make_provider):
        handler = RecordingHandler(body=completion_body("ok"))
        settings = {**DEFAULT_GENERAL_SETTINGS, "api_keys": {"openai": "sk-stored"}}
        relay = ChatRelay(
            providers={"openai": make_provider(handler)},
            settings_store=InMemorySettingsStore({"general": settings}),
        )

        await relay.chat_with_settings(
            "hi",
            history=[{"role": "system", "content": "old"}, {"role": "user", "content": "hi"}],
        )

        assert handler.last_body["messages"] == [
            {"role": "system", "content": "Você é um assistente útil. Responda em pt-BR."},
            {"role": "user", "content": "hi"},
        ]

    @pytest.mark.asyncio
    async def test_invalid_history_becomes_failure(self):
        mock_provider = AsyncMock()
        settings = {**DEFAULT_GENERAL_SETTINGS, "api_keys": {"openai": "sk-stored"}}
        relay = ChatRelay(
            providers={"openai": mock_provider},
            settings_store=InMemorySettingsStore({"general": settings}),
        )

        result = await relay.chat_with_settings("hi", history=[{"role": "user"}])

        assert not result.ok
        mock_provider.chat.assert_not_called()
