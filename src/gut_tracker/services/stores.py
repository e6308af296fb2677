"""Repository contract and in-memory snapshots of tracked entries."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Generic, Protocol, TypeVar
from zoneinfo import ZoneInfo

from gut_tracker.domain.entries import FoodEntry, MedicationEntry, SymptomEntry

EntryT = TypeVar("EntryT", FoodEntry, SymptomEntry, MedicationEntry)


class Repository(Protocol[EntryT]):
    """Persistence interface for one kind of tracked entry."""

    def find_all(self) -> list[EntryT]:
        """Return every stored entry."""

    def find_by_id(self, entry_id: str) -> EntryT | None:
        """Return an entry by id, if present."""

    def save(self, entity: EntryT) -> EntryT:
        """Insert or fully replace an entry by id and return it."""

    def delete(self, entry_id: str) -> None:
        """Delete an entry by id."""


@dataclass
class EntryStore(Generic[EntryT]):
    """Loaded snapshot of a repository, kept in sync on every write."""

    repository: Repository[EntryT]
    _entries: list[EntryT] | None = field(default=None, init=False, repr=False)

    @property
    def entries(self) -> list[EntryT]:
        """Return the current snapshot, loading it on first access."""
        if self._entries is None:
            return self.load_all()
        return self._entries

    def load_all(self) -> list[EntryT]:
        """Reload the snapshot from the repository."""
        self._entries = self.repository.find_all()
        return self._entries

    def get(self, entry_id: str) -> EntryT | None:
        """Return an entry from the snapshot by id."""
        for entry in self.entries:
            if entry.id == entry_id:
                return entry
        return None

    def add(self, entry: EntryT) -> EntryT:
        """Persist a new entry."""
        entries = self.entries
        saved = self.repository.save(entry)
        self._entries = [*entries, saved]
        return saved

    def update(self, entry: EntryT) -> EntryT:
        """Replace an existing entry."""
        entries = self.entries
        saved = self.repository.save(entry)
        self._entries = [saved if e.id == saved.id else e for e in entries]
        return saved

    def remove(self, entry_id: str) -> None:
        """Delete an entry by id."""
        entries = self.entries
        self.repository.delete(entry_id)
        self._entries = [e for e in entries if e.id != entry_id]

    def today_entries(self, timezone_name: str | None = None) -> list[EntryT]:
        """Return entries logged today in the given (or system) timezone."""
        tz = ZoneInfo(timezone_name) if timezone_name else None
        today = datetime.now(tz=UTC).astimezone(tz).date()
        return [e for e in self.entries if e.timestamp.astimezone(tz).date() == today]
