"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from gut_tracker.adapters.anthropic_provider import AnthropicProvider
from gut_tracker.adapters.gemini_provider import GeminiProvider
from gut_tracker.adapters.ollama_provider import OllamaProvider
from gut_tracker.adapters.openai_provider import OpenAIProvider
from gut_tracker.adapters.supabase_ai_settings_repository import (
    SupabaseAiSettingsRepository,
)
from gut_tracker.adapters.supabase_entry_repository import (
    food_entry_repository,
    medication_entry_repository,
    symptom_entry_repository,
)
from gut_tracker.config import Settings
from gut_tracker.domain.entries import FoodEntry, MedicationEntry, SymptomEntry
from gut_tracker.services.ai_gateway import AiGateway
from gut_tracker.services.ai_settings import AiSettingsService, default_ai_settings
from gut_tracker.services.analysis import AnalysisService
from gut_tracker.services.food_entries import FoodEntryService
from gut_tracker.services.stores import EntryStore
from gut_tracker.services.voice import VoiceEntryParser


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    ai_settings_service: AiSettingsService
    ai_gateway: AiGateway
    food_store: EntryStore[FoodEntry]
    symptom_store: EntryStore[SymptomEntry]
    medication_store: EntryStore[MedicationEntry]
    food_entry_service: FoodEntryService
    voice_parser: VoiceEntryParser
    analysis_service: AnalysisService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    ai_settings_service = AiSettingsService(
        repository=SupabaseAiSettingsRepository(supabase_client),
        defaults=default_ai_settings(resolved_settings),
    )
    timeout = resolved_settings.ai_timeout_seconds
    openai_provider = OpenAIProvider.create(ai_settings_service, timeout)
    anthropic_provider = AnthropicProvider.create(ai_settings_service, timeout)
    gemini_provider = GeminiProvider.create(ai_settings_service, timeout)
    ollama_provider = OllamaProvider.create(ai_settings_service)
    ai_gateway = AiGateway(
        settings_service=ai_settings_service,
        openai=openai_provider,
        anthropic=anthropic_provider,
        gemini=gemini_provider,
        ollama=ollama_provider,
    )
    food_store = EntryStore(food_entry_repository(supabase_client))
    symptom_store = EntryStore(symptom_entry_repository(supabase_client))
    medication_store = EntryStore(medication_entry_repository(supabase_client))

    async def close_resources() -> None:
        await openai_provider.close()
        await anthropic_provider.close()
        await gemini_provider.close()
        await ollama_provider.close()

    return AppContainer(
        settings=resolved_settings,
        ai_settings_service=ai_settings_service,
        ai_gateway=ai_gateway,
        food_store=food_store,
        symptom_store=symptom_store,
        medication_store=medication_store,
        food_entry_service=FoodEntryService(store=food_store, gateway=ai_gateway),
        voice_parser=VoiceEntryParser(ai_gateway),
        analysis_service=AnalysisService(
            food_store=food_store,
            symptom_store=symptom_store,
            medication_store=medication_store,
            gateway=ai_gateway,
            timezone_name=resolved_settings.timezone,
        ),
        close_resources=close_resources,
    )
