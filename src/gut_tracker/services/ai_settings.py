"""AI provider settings service."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from pydantic import ValidationError

from gut_tracker.config import Settings
from gut_tracker.domain.ai_settings import (
    AiSettings,
    ApiKeyProviderConfig,
    LocalProviderConfig,
    ProviderId,
    ProvidersConfig,
)

_logger = logging.getLogger(__name__)


class AiSettingsRepository(Protocol):
    """Persistence interface for AI settings."""

    def load(self) -> dict[str, object] | None:
        """Return the stored settings payload, if any."""

    def store(self, payload: dict[str, object]) -> None:
        """Persist the settings payload."""


@dataclass
class AiSettingsService:
    """Holds the active AI settings, falling back to environment defaults."""

    repository: AiSettingsRepository
    defaults: AiSettings = field(default_factory=AiSettings)
    _settings: AiSettings | None = field(default=None, init=False, repr=False)

    @property
    def settings(self) -> AiSettings:
        """Return the current settings, loading them on first access."""
        if self._settings is None:
            self._settings = self._load()
        return self._settings

    def save(self, settings: AiSettings) -> None:
        """Persist new settings and make them active."""
        self.repository.store(settings.model_dump(mode="json", by_alias=True))
        self._settings = settings

    def get_provider_config(
        self, provider_id: ProviderId
    ) -> ApiKeyProviderConfig | LocalProviderConfig:
        """Return the configuration block of a provider."""
        return getattr(self.settings.providers, provider_id.value)

    def get_selected_provider(self) -> str:
        """Return the id of the provider chosen by the user."""
        return self.settings.selected_provider

    def is_configured(self, provider_id: ProviderId) -> bool:
        """Return True when the provider has the credentials it needs."""
        config = self.get_provider_config(provider_id)
        if isinstance(config, ApiKeyProviderConfig):
            return bool(config.api_key)
        return bool(config.base_url)

    def _load(self) -> AiSettings:
        raw = self.repository.load()
        if raw is None:
            return self.defaults.model_copy(deep=True)
        try:
            return AiSettings.model_validate(raw)
        except ValidationError:
            _logger.warning("Stored AI settings are invalid, using defaults")
            return self.defaults.model_copy(deep=True)


def default_ai_settings(settings: Settings) -> AiSettings:
    """Build default AI settings from environment configuration."""
    return AiSettings(
        selected_provider=settings.ai_provider,
        providers=ProvidersConfig(
            openai=ApiKeyProviderConfig(
                api_key=settings.openai_api_key, model=settings.openai_model
            ),
            anthropic=ApiKeyProviderConfig(
                api_key=settings.anthropic_api_key, model=settings.anthropic_model
            ),
            gemini=ApiKeyProviderConfig(
                api_key=settings.gemini_api_key, model=settings.gemini_model
            ),
            ollama=LocalProviderConfig(
                base_url=settings.ollama_base_url, model=settings.ollama_model
            ),
        ),
    )
