"""
Error taxonomy for chat requests.

Every error is turned into a failure ``ChatResult`` by ``ChatRelay``; the
string form of the exception is the diagnostic the caller gets to see.
"""
from typing import Optional


class ChatError(Exception):
    """Base class for every failure a chat request can end with."""


class UnsupportedProviderError(ChatError):
    def __init__(self, provider: str):
        super().__init__(f"Provider '{provider}' not supported")
        self.provider = provider


class TransportError(ChatError):
    """The request never produced an HTTP response (connection, TLS, timeout)."""


class ProviderResponseError(ChatError):
    """The provider answered with a non-success status."""

    def __init__(self, provider_title: str, status_code: int, body: str, reason: Optional[str] = None):
        status = f"{status_code} {reason}" if reason else str(status_code)
        super().__init__(f"{provider_title} error {status}: {body}")
        self.status_code = status_code
        self.body = body


class MalformedResponseError(ChatError):
    """Success status, but the body does not match the expected schema."""


class EmptyResponseError(ChatError):
    """The body parsed fine but carries no completion choices."""


class MissingApiKeyError(ChatError):
    def __init__(self, provider: str):
        super().__init__(f"No API key configured for provider '{provider}'")
        self.provider = provider
