"""OpenAI Chat Completions provider."""

import logging
from dataclasses import dataclass
from typing import ClassVar

import httpx
import openai
from openai import AsyncOpenAI

from gut_tracker.adapters.ai_http import (
    error_for_status,
    missing_text_error,
    require_api_key,
)
from gut_tracker.domain.ai_settings import ProviderId
from gut_tracker.domain.errors import AiError, AiErrorKind
from gut_tracker.services.ai_gateway import AiProvider
from gut_tracker.services.ai_settings import AiSettingsService

MAX_TOKENS = 1000
MAX_ATTEMPTS = 2

_logger = logging.getLogger(__name__)


@dataclass
class OpenAIProvider(AiProvider):
    """Provider backed by the OpenAI SDK with SDK-level retries disabled."""

    id: ClassVar[ProviderId] = ProviderId.OPENAI
    display_name: ClassVar[str] = "OpenAI"
    supports_vision: ClassVar[bool] = True
    is_free: ClassVar[bool] = False

    settings_service: AiSettingsService
    http_client: httpx.AsyncClient
    timeout_seconds: float = 60.0
    base_url: str | None = None

    @classmethod
    def create(
        cls, settings_service: AiSettingsService, timeout_seconds: float = 60.0
    ) -> "OpenAIProvider":
        """Create an OpenAI provider with a managed httpx session."""
        return cls(
            settings_service=settings_service,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def complete(self, prompt: str, system_prompt: str | None = None) -> str:
        """Send a chat completion with an optional system message."""
        messages: list[dict[str, object]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return await self._chat(messages)

    async def analyze_image(
        self, image_base64: str, prompt: str, mime_type: str = "image/jpeg"
    ) -> str:
        """Send an image as a data URL followed by the text prompt."""
        messages: list[dict[str, object]] = [
            {
                "role": "user",
                "content": [
                    {
                        "type": "image_url",
                        "image_url": {"url": f"data:{mime_type};base64,{image_base64}"},
                    },
                    {"type": "text", "text": prompt},
                ],
            }
        ]
        return await self._chat(messages)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _chat(self, messages: list[dict[str, object]]) -> str:
        config = self.settings_service.get_provider_config(ProviderId.OPENAI)
        require_api_key(
            config.api_key, provider=self.id, display_name=self.display_name
        )
        client = AsyncOpenAI(
            api_key=config.api_key,
            base_url=self.base_url,
            http_client=self.http_client,
            max_retries=0,
            timeout=self.timeout_seconds,
        )
        attempt = 0
        while True:
            attempt += 1
            try:
                response = await client.chat.completions.create(
                    model=config.model, messages=messages, max_tokens=MAX_TOKENS
                )
                break
            except openai.APIConnectionError as exc:
                _logger.warning(
                    "OpenAI request failed (attempt %s/%s): %s",
                    attempt,
                    MAX_ATTEMPTS,
                    exc,
                )
                if attempt >= MAX_ATTEMPTS:
                    raise AiError(
                        "OpenAI network error",
                        provider=self.id,
                        kind=AiErrorKind.NETWORK,
                    ) from exc
            except openai.APIStatusError as exc:
                error = error_for_status(
                    exc.status_code, provider=self.id, display_name=self.display_name
                )
                raise error or missing_text_error(
                    provider=self.id, display_name=self.display_name
                ) from exc
            except (openai.APIError, ValueError) as exc:
                raise AiError(
                    "OpenAI request failed",
                    provider=self.id,
                    kind=AiErrorKind.PROVIDER,
                ) from exc

        if not response.choices or response.choices[0].message.content is None:
            raise missing_text_error(provider=self.id, display_name=self.display_name)
        return response.choices[0].message.content
