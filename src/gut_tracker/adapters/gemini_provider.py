"""Google Gemini generateContent provider."""

from dataclasses import dataclass
from typing import ClassVar

import httpx

from gut_tracker.adapters.ai_http import missing_text_error, post_json, require_api_key
from gut_tracker.domain.ai_settings import ProviderId
from gut_tracker.services.ai_gateway import AiProvider
from gut_tracker.services.ai_settings import AiSettingsService

GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


@dataclass
class GeminiProvider(AiProvider):
    """Provider calling the Gemini REST API over httpx."""

    id: ClassVar[ProviderId] = ProviderId.GEMINI
    display_name: ClassVar[str] = "Google Gemini"
    supports_vision: ClassVar[bool] = True
    is_free: ClassVar[bool] = False

    settings_service: AiSettingsService
    http_client: httpx.AsyncClient
    timeout_seconds: float = 60.0

    @classmethod
    def create(
        cls, settings_service: AiSettingsService, timeout_seconds: float = 60.0
    ) -> "GeminiProvider":
        """Create a Gemini provider with a managed httpx session."""
        return cls(
            settings_service=settings_service,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def complete(self, prompt: str, system_prompt: str | None = None) -> str:
        """Send a text prompt with an optional system instruction."""
        payload: dict[str, object] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
        }
        if system_prompt:
            payload["system_instruction"] = {"parts": [{"text": system_prompt}]}
        return await self._request(payload)

    async def analyze_image(
        self, image_base64: str, prompt: str, mime_type: str = "image/jpeg"
    ) -> str:
        """Send an inline image part followed by a text part."""
        parts = [
            {"inline_data": {"mime_type": mime_type, "data": image_base64}},
            {"text": prompt},
        ]
        return await self._request({"contents": [{"role": "user", "parts": parts}]})

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(self, payload: dict[str, object]) -> str:
        config = self.settings_service.get_provider_config(ProviderId.GEMINI)
        require_api_key(
            config.api_key, provider=self.id, display_name=self.display_name
        )
        data = await post_json(
            self.http_client,
            f"{GEMINI_BASE_URL}/{config.model}:generateContent",
            payload,
            provider=self.id,
            display_name=self.display_name,
            params={"key": config.api_key},
            timeout=self.timeout_seconds,
        )
        try:
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise missing_text_error(
                provider=self.id, display_name=self.display_name
            ) from exc
