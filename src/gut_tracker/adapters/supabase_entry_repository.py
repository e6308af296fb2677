"""Supabase repositories for tracked entries."""

from dataclasses import dataclass

from supabase import Client

from gut_tracker.domain.entries import FoodEntry, MedicationEntry, SymptomEntry
from gut_tracker.services.stores import EntryT, Repository

FOOD_ENTRIES_TABLE = "food_entries"
SYMPTOM_ENTRIES_TABLE = "symptom_entries"
MEDICATION_ENTRIES_TABLE = "medication_entries"


@dataclass
class SupabaseEntryRepository(Repository[EntryT]):
    """Stores one kind of entry as ``{id, timestamp, data}`` rows.

    ``data`` holds the camelCase JSON document of the whole entry; the
    ``timestamp`` column only exists for ordering.
    """

    client: Client
    table: str
    model: type[EntryT]

    def find_all(self) -> list[EntryT]:
        """Return all entries ordered by timestamp."""
        response = (
            self.client.table(self.table)
            .select("id, timestamp, data")
            .order("timestamp")
            .execute()
        )
        return [self.model.model_validate(row["data"]) for row in response.data or []]

    def find_by_id(self, entry_id: str) -> EntryT | None:
        """Return an entry by id."""
        response = (
            self.client.table(self.table)
            .select("id, timestamp, data")
            .eq("id", entry_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return self.model.model_validate(response.data[0]["data"])

    def save(self, entity: EntryT) -> EntryT:
        """Insert or replace the entry row."""
        self.client.table(self.table).upsert(
            {
                "id": entity.id,
                "timestamp": entity.timestamp.isoformat(),
                "data": entity.model_dump(mode="json", by_alias=True),
            }
        ).execute()
        return entity

    def delete(self, entry_id: str) -> None:
        """Delete the entry row."""
        self.client.table(self.table).delete().eq("id", entry_id).execute()


def food_entry_repository(client: Client) -> SupabaseEntryRepository[FoodEntry]:
    """Return the food entry repository."""
    return SupabaseEntryRepository(client, FOOD_ENTRIES_TABLE, FoodEntry)


def symptom_entry_repository(client: Client) -> SupabaseEntryRepository[SymptomEntry]:
    """Return the symptom entry repository."""
    return SupabaseEntryRepository(client, SYMPTOM_ENTRIES_TABLE, SymptomEntry)


def medication_entry_repository(
    client: Client,
) -> SupabaseEntryRepository[MedicationEntry]:
    """Return the medication entry repository."""
    return SupabaseEntryRepository(client, MEDICATION_ENTRIES_TABLE, MedicationEntry)
