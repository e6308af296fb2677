"""AI provider settings endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from gut_tracker.api.schemas import AiSettingsView, ProviderInfo
from gut_tracker.domain.ai_settings import (
    AiSettings,
    ApiKeyProviderConfig,
    ProviderId,
)

if TYPE_CHECKING:
    from gut_tracker.containers import AppContainer

router = APIRouter(prefix="/settings", tags=["settings"])

MASK_PREFIX = "****"
MASK_VISIBLE_CHARS = 4


def mask_api_key(api_key: str) -> str:
    """Return a display form of a key that only reveals its last characters."""
    if not api_key:
        return ""
    if len(api_key) <= MASK_VISIBLE_CHARS * 2:
        return MASK_PREFIX
    return MASK_PREFIX + api_key[-MASK_VISIBLE_CHARS:]


@router.get("/ai")
async def get_ai_settings(request: Request) -> AiSettingsView:
    """Return the selected provider and every provider with masked keys."""
    container: AppContainer = request.app.state.container
    return _view(container)


@router.put("/ai")
async def update_ai_settings(body: AiSettings, request: Request) -> AiSettingsView:
    """Store new AI settings; masked keys sent back unchanged are kept."""
    container: AppContainer = request.app.state.container
    if body.selected_provider not in set(ProviderId):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown provider: {body.selected_provider}",
        )
    service = container.ai_settings_service
    current = service.settings
    providers = body.providers
    for provider_id in ProviderId:
        incoming = getattr(providers, provider_id.value)
        existing = getattr(current.providers, provider_id.value)
        if (
            isinstance(incoming, ApiKeyProviderConfig)
            and incoming.api_key.startswith(MASK_PREFIX)
            and incoming.api_key == mask_api_key(existing.api_key)
        ):
            providers = providers.model_copy(
                update={
                    provider_id.value: incoming.model_copy(
                        update={"api_key": existing.api_key}
                    )
                }
            )
    service.save(body.model_copy(update={"providers": providers}))
    return _view(container)


def _view(container: AppContainer) -> AiSettingsView:
    service = container.ai_settings_service
    providers = []
    for provider_id in ProviderId:
        provider = container.ai_gateway.provider(provider_id)
        config = service.get_provider_config(provider_id)
        info = ProviderInfo(
            id=provider_id.value,
            display_name=provider.display_name,
            supports_vision=provider.supports_vision,
            is_free=provider.is_free,
            configured=service.is_configured(provider_id),
            model=config.model,
        )
        if isinstance(config, ApiKeyProviderConfig):
            info.api_key = mask_api_key(config.api_key)
        else:
            info.base_url = config.base_url
        providers.append(info)
    return AiSettingsView(
        selected_provider=service.get_selected_provider(), providers=providers
    )
