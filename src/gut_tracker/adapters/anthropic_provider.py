"""Anthropic Messages API provider."""

from dataclasses import dataclass
from typing import ClassVar

import httpx

from gut_tracker.adapters.ai_http import missing_text_error, post_json, require_api_key
from gut_tracker.domain.ai_settings import ProviderId
from gut_tracker.services.ai_gateway import AiProvider
from gut_tracker.services.ai_settings import AiSettingsService

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
MAX_TOKENS = 1000


@dataclass
class AnthropicProvider(AiProvider):
    """Provider calling the Anthropic Messages API over httpx."""

    id: ClassVar[ProviderId] = ProviderId.ANTHROPIC
    display_name: ClassVar[str] = "Anthropic (Claude)"
    supports_vision: ClassVar[bool] = True
    is_free: ClassVar[bool] = False

    settings_service: AiSettingsService
    http_client: httpx.AsyncClient
    timeout_seconds: float = 60.0

    @classmethod
    def create(
        cls, settings_service: AiSettingsService, timeout_seconds: float = 60.0
    ) -> "AnthropicProvider":
        """Create an Anthropic provider with a managed httpx session."""
        return cls(
            settings_service=settings_service,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def complete(self, prompt: str, system_prompt: str | None = None) -> str:
        """Send a single user message with an optional system prompt."""
        config = self.settings_service.get_provider_config(ProviderId.ANTHROPIC)
        payload: dict[str, object] = {
            "model": config.model,
            "max_tokens": MAX_TOKENS,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system_prompt:
            payload["system"] = system_prompt
        return await self._request(config.api_key, payload)

    async def analyze_image(
        self, image_base64: str, prompt: str, mime_type: str = "image/jpeg"
    ) -> str:
        """Send an image block followed by a text block."""
        config = self.settings_service.get_provider_config(ProviderId.ANTHROPIC)
        content = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": mime_type,
                    "data": image_base64,
                },
            },
            {"type": "text", "text": prompt},
        ]
        payload: dict[str, object] = {
            "model": config.model,
            "max_tokens": MAX_TOKENS,
            "messages": [{"role": "user", "content": content}],
        }
        return await self._request(config.api_key, payload)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(self, api_key: str, payload: dict[str, object]) -> str:
        require_api_key(api_key, provider=self.id, display_name=self.display_name)
        data = await post_json(
            self.http_client,
            ANTHROPIC_URL,
            payload,
            provider=self.id,
            display_name=self.display_name,
            headers={
                "x-api-key": api_key,
                "anthropic-version": ANTHROPIC_VERSION,
            },
            timeout=self.timeout_seconds,
        )
        try:
            return data["content"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise missing_text_error(
                provider=self.id, display_name=self.display_name
            ) from exc
