import json
import pytest
import httpx

from chatrelay.config import Config
from chatrelay.providers.openai import OpenAIProvider
from chatrelay.schemas import ChatRequest


@pytest.fixture
def mock_env(monkeypatch):
    """Mock environment variables read by the package."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test-openai")
    monkeypatch.delenv("OPENAI_BASE_URL", raising=False)
    monkeypatch.delenv("CHATRELAY_TIMEOUT", raising=False)
    monkeypatch.delenv("CHATRELAY_LOG_LEVEL", raising=False)


def image(url, index=0):
    return {"id": f"img-{index}", "name": f"image-{index}.png", "size": 1024, "url": url}


@pytest.fixture
def make_request():
    """Factory for ChatRequest objects with sensible defaults."""
    def _make(message="Hi", system_prompt="", history=None, image_urls=(), provider="openai"):
        return ChatRequest(
            provider=provider,
            model="gpt-4o",
            api_key="sk-test",
            system_prompt=system_prompt,
            message=message,
            history=history,
            attachments={
                "images": [image(url, i) for i, url in enumerate(image_urls)],
                "files": [],
                "has_audio": False,
            },
        )
    return _make


class RecordingHandler:
    """httpx.MockTransport handler that answers with a canned response."""

    def __init__(self, status_code=200, body=None, text=None, error=None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(body or {})
        self.error = error
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, text=self.text)

    @property
    def last_body(self):
        return json.loads(self.requests[-1].content)


def completion_body(content="Hello, world!"):
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "model": "gpt-4o",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


@pytest.fixture
def make_provider():
    """Build an OpenAIProvider whose traffic goes to the given handler."""
    def _make(handler):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return OpenAIProvider(config=Config(), http_client=http_client)
    return _make


class InMemorySettingsStore:
    def __init__(self, initial=None):
        self.data = dict(initial or {})

    async def load_setting(self, key, fallback):
        return self.data.get(key, fallback)

    async def save_setting(self, key, value):
        self.data[key] = value
