import json
import logging
import time
from typing import Dict, Any, List, Optional

import httpx
import openai
from openai import AsyncOpenAI

from .base import BaseLLMProvider
from ..config import Config
from ..errors import (
    EmptyResponseError, MalformedResponseError, ProviderResponseError, TransportError,
)
from ..types import Message, Provider

logger = logging.getLogger(__name__)

class OpenAIProvider(BaseLLMProvider):
    """
    Provider for the OpenAI chat completions API.
    """

    provider_name: Provider = "openai"
    display_name = "OpenAI"

    def __init__(
        self,
        config: Optional[Config] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            config: Endpoint and timeout settings. Defaults to the environment.
            http_client: Optional httpx client to send requests through. It is
                         left open after each call; the owner closes it.
        """
        self.config = config or Config.from_env()
        self.http_client = http_client

    def _create_client(self, api_key: str) -> AsyncOpenAI:
        # One client per call: the key belongs to the request, not the provider
        return AsyncOpenAI(
            api_key=api_key,
            base_url=self.config.openai_base_url,
            timeout=self.config.timeout,
            max_retries=0,
            http_client=self.http_client,
        )

    async def send(
        self,
        messages: List[Message],
        model: str,
        api_key: str,
    ) -> str:
        """
        POST the conversation to ``/chat/completions`` and extract the reply.

        Handles:
        - Message serialization to OpenAI's wire format.
        - Status errors (the raw body is kept verbatim in the diagnostic).
        - Response shape validation.

        Args:
            messages (List[Message]): Normalized conversation.
            model (str): The model identifier.
            api_key (str): Bearer token for this call.

        Returns:
            str: ``choices[0].message.content``.

        Raises:
            TransportError: No response was obtained.
            ProviderResponseError: Non-success HTTP status.
            MalformedResponseError: Body is not the expected JSON shape.
            EmptyResponseError: ``choices`` is empty.
        """
        converted_messages = self._convert_messages(messages)
        client: Optional[AsyncOpenAI] = None

        start = time.perf_counter()
        try:
            client = self._create_client(api_key)
            raw = await client.chat.completions.with_raw_response.create(
                model=model,
                messages=converted_messages,
            )
        except openai.APIStatusError as e:
            raise ProviderResponseError(
                self.display_name,
                e.status_code,
                e.response.text,
                reason=e.response.reason_phrase,
            ) from e
        except openai.APIConnectionError as e:
            cause = e.__cause__ or e
            raise TransportError(f"{self.display_name} request failed: {cause}") from e
        except (openai.OpenAIError, ValueError) as e:
            # Rejected while building the request: missing credentials, non-ASCII header values
            raise TransportError(f"{self.display_name} request failed: {e}") from e
        finally:
            if client is not None and self.http_client is None:
                await client.close()

        latency_ms = (time.perf_counter() - start) * 1000.0
        logger.debug(
            "%s responded %s in %.1f ms",
            self.provider_name, raw.http_response.status_code, latency_ms,
        )

        return self._parse_reply(raw.http_response.text)

    @staticmethod
    def _convert_messages(messages: List[Message]) -> List[Dict[str, Any]]:
        """
        Convert normalized messages to OpenAI's expected format.

        String content goes out as-is; part lists are rebuilt part by part so
        only the fields OpenAI expects are sent.

        Args:
            messages (List[Message]): Normalized message list.

        Returns:
            List[Dict]: OpenAI-compatible message list.
        """
        converted = []
        for msg in messages:
            content = msg["content"]
            if isinstance(content, str):
                converted.append({"role": msg["role"], "content": content})
                continue

            openai_content = []
            for part in content:
                if part["type"] == "text":
                    openai_content.append({"type": "text", "text": part["text"]})
                elif part["type"] == "image_url":
                    openai_content.append({
                        "type": "image_url",
                        "image_url": {"url": part["image_url"]["url"]},
                    })
            converted.append({"role": msg["role"], "content": openai_content})

        return converted

    def _parse_reply(self, raw: str) -> str:
        """
        Extract the first choice's text from a success body.

        Every choice must carry a ``message`` with string ``role`` and
        ``content``; anything else is reported as malformed.
        """
        try:
            data = json.loads(raw)
            choices = data["choices"]
            if not isinstance(choices, list):
                raise TypeError("'choices' is not a list")
            contents = [self._choice_content(choice) for choice in choices]
        except KeyError as e:
            raise MalformedResponseError(
                f"Malformed {self.display_name} response: missing field {e}"
            ) from e
        except (ValueError, TypeError) as e:
            raise MalformedResponseError(f"Malformed {self.display_name} response: {e}") from e

        if not contents:
            raise EmptyResponseError(f"Empty {self.display_name} response")

        return contents[0]

    @staticmethod
    def _choice_content(choice: Any) -> str:
        message = choice["message"]
        for field in ("role", "content"):
            if not isinstance(message[field], str):
                raise TypeError(f"'message.{field}' is not a string")
        return message["content"]
