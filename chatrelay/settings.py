"""
General settings as saved by the desktop front-end, and how a chat request is
built from them.

Persistence itself lives outside this package; callers inject anything that
satisfies ``SettingsStore``.
"""
import copy
from typing import Any, Dict, List, Optional, Protocol, TypedDict, Union

from .errors import MissingApiKeyError
from .schemas import Attachments, ChatRequest, HistoryMessage

GENERAL_SETTINGS_KEY = "general"
FALLBACK_MODEL = "gpt-4o"


class GeneralSettings(TypedDict):
    system_prompt: str
    app_language: str
    api_keys: Dict[str, str]
    primary_ai: str
    selected_models: Dict[str, str]


DEFAULT_GENERAL_SETTINGS: GeneralSettings = {
    "system_prompt": "",
    "app_language": "pt-BR",
    "api_keys": {"openai": "", "copilot": "", "anthropic": ""},
    "primary_ai": "openai",
    "selected_models": {
        "openai": "gpt-4",
        "copilot": "copilot-code-x",
        "anthropic": "claude-2",
    },
}


class SettingsStore(Protocol):
    """Key/value persistence for user settings."""

    async def load_setting(self, key: str, fallback: Any) -> Any:
        ...

    async def save_setting(self, key: str, value: Any) -> None:
        ...


def default_system_prompt(app_language: str) -> str:
    return f"Você é um assistente útil. Responda em {app_language}."


def _without_system_turns(
    history: Optional[List[Union[HistoryMessage, Dict[str, str]]]],
) -> Optional[List[Union[HistoryMessage, Dict[str, str]]]]:
    if history is None:
        return None
    return [
        turn for turn in history
        if (turn.role if isinstance(turn, HistoryMessage) else turn.get("role")) != "system"
    ]


async def load_general_settings(store: SettingsStore) -> GeneralSettings:
    """
    Read the general settings, falling back to the defaults when nothing is stored.
    """
    fallback = copy.deepcopy(DEFAULT_GENERAL_SETTINGS)
    return await store.load_setting(GENERAL_SETTINGS_KEY, fallback)


def build_request(
    settings: GeneralSettings,
    message: str,
    history: Optional[List[Union[HistoryMessage, Dict[str, str]]]] = None,
    attachments: Optional[Union[Attachments, Dict[str, Any]]] = None,
) -> ChatRequest:
    """
    Build a ChatRequest for the user's primary provider.

    Args:
        settings (GeneralSettings): Stored preferences.
        message (str): Current user text.
        history (list, optional): Prior turns. Turns with role "system" are
            dropped; the stored (or default) system prompt replaces them.
        attachments (optional): Attachments of the current message.

    Returns:
        ChatRequest: Ready to dispatch.

    Raises:
        MissingApiKeyError: No key is stored for the primary provider.
    """
    provider = settings.get("primary_ai") or DEFAULT_GENERAL_SETTINGS["primary_ai"]
    api_key = (settings.get("api_keys") or {}).get(provider) or ""
    if not api_key.strip():
        raise MissingApiKeyError(provider)

    model = (settings.get("selected_models") or {}).get(provider) or FALLBACK_MODEL
    system_prompt = settings.get("system_prompt") or default_system_prompt(
        settings.get("app_language") or DEFAULT_GENERAL_SETTINGS["app_language"]
    )

    return ChatRequest.model_validate({
        "provider": provider,
        "model": model,
        "api_key": api_key,
        "system_prompt": system_prompt,
        "message": message,
        "history": _without_system_turns(history),
        "attachments": attachments if attachments is not None else Attachments(),
    })
