"""AI provider settings models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ProviderId(StrEnum):
    """Known AI providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    OLLAMA = "ollama"


class _SettingsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiKeyProviderConfig(_SettingsModel):
    """Settings for a hosted provider authenticated by API key."""

    api_key: str = ""
    model: str


class LocalProviderConfig(_SettingsModel):
    """Settings for a locally running model server."""

    base_url: str = "http://localhost:11434"
    model: str


class ProvidersConfig(_SettingsModel):
    openai: ApiKeyProviderConfig = Field(
        default_factory=lambda: ApiKeyProviderConfig(model="gpt-4o")
    )
    anthropic: ApiKeyProviderConfig = Field(
        default_factory=lambda: ApiKeyProviderConfig(model="claude-sonnet-4-5")
    )
    gemini: ApiKeyProviderConfig = Field(
        default_factory=lambda: ApiKeyProviderConfig(model="gemini-1.5-pro")
    )
    ollama: LocalProviderConfig = Field(
        default_factory=lambda: LocalProviderConfig(model="llava")
    )


class AiSettings(_SettingsModel):
    """Selected provider and per-provider configuration."""

    # Kept as a plain string: unknown ids are rejected when dispatching.
    selected_provider: str = ProviderId.OPENAI.value
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
