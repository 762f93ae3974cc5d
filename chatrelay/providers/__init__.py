from typing import Dict

from .base import BaseLLMProvider
from .openai import OpenAIProvider


def default_providers() -> Dict[str, BaseLLMProvider]:
    """Registry of the providers that have an implementation."""
    return {OpenAIProvider.provider_name: OpenAIProvider()}


__all__ = ["BaseLLMProvider", "OpenAIProvider", "default_providers"]
