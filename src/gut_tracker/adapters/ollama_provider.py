"""Local Ollama chat provider."""

from dataclasses import dataclass
from typing import ClassVar

import httpx

from gut_tracker.adapters.ai_http import missing_text_error, post_json
from gut_tracker.domain.ai_settings import ProviderId
from gut_tracker.services.ai_gateway import AiProvider
from gut_tracker.services.ai_settings import AiSettingsService

UNREACHABLE_MESSAGE = (
    "Ollama server unreachable, check that Ollama is running locally"
)


@dataclass
class OllamaProvider(AiProvider):
    """Provider calling a local Ollama server.

    Connection failures are not retried: a local server that refuses a
    connection is a setup problem, not a transient network blip.
    """

    id: ClassVar[ProviderId] = ProviderId.OLLAMA
    display_name: ClassVar[str] = "Ollama (local)"
    supports_vision: ClassVar[bool] = True
    is_free: ClassVar[bool] = True

    settings_service: AiSettingsService
    http_client: httpx.AsyncClient
    timeout_seconds: float = 120.0

    @classmethod
    def create(
        cls, settings_service: AiSettingsService, timeout_seconds: float = 120.0
    ) -> "OllamaProvider":
        """Create an Ollama provider with a managed httpx session."""
        return cls(
            settings_service=settings_service,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def complete(self, prompt: str, system_prompt: str | None = None) -> str:
        """Send a chat with an optional system message."""
        messages: list[dict[str, object]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        return await self._chat(messages)

    async def analyze_image(
        self, image_base64: str, prompt: str, mime_type: str = "image/jpeg"
    ) -> str:
        """Send the prompt with the image attached as raw base64."""
        return await self._chat(
            [{"role": "user", "content": prompt, "images": [image_base64]}]
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _chat(self, messages: list[dict[str, object]]) -> str:
        config = self.settings_service.get_provider_config(ProviderId.OLLAMA)
        data = await post_json(
            self.http_client,
            f"{config.base_url.rstrip('/')}/api/chat",
            {"model": config.model, "messages": messages, "stream": False},
            provider=self.id,
            display_name=self.display_name,
            timeout=self.timeout_seconds,
            retry_transport_errors=False,
            network_error_message=UNREACHABLE_MESSAGE,
        )
        try:
            return data["message"]["content"]
        except (KeyError, TypeError) as exc:
            raise missing_text_error(
                provider=self.id, display_name=self.display_name
            ) from exc
