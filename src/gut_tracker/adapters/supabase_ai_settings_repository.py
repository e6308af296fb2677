"""Supabase repository for AI provider settings."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from gut_tracker.services.ai_settings import AiSettingsRepository

SETTINGS_ROW_ID = "default"


@dataclass
class SupabaseAiSettingsRepository(AiSettingsRepository):
    """Keeps the AI settings document in a single ``ai_settings`` row."""

    client: Client

    def load(self) -> dict[str, object] | None:
        """Return the stored settings document."""
        response = (
            self.client.table("ai_settings")
            .select("settings")
            .eq("id", SETTINGS_ROW_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("settings")

    def store(self, payload: dict[str, object]) -> None:
        """Upsert the settings document."""
        self.client.table("ai_settings").upsert(
            {
                "id": SETTINGS_ROW_ID,
                "settings": payload,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
