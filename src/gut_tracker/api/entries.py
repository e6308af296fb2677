"""CRUD endpoints for food, symptom and medication entries."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from fastapi import APIRouter, HTTPException, Request, status

from gut_tracker.api.schemas import (
    FoodEntryCreate,
    FrequentFoods,
    MedicationEntryCreate,
    SymptomEntryCreate,
)
from gut_tracker.domain.entries import FoodEntry, MedicationEntry, SymptomEntry
from gut_tracker.services.food_entries import frequent_foods

if TYPE_CHECKING:
    from gut_tracker.containers import AppContainer
    from gut_tracker.services.stores import EntryStore, EntryT

router = APIRouter(tags=["entries"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _list(store: EntryStore[EntryT], today: bool, timezone_name: str | None):
    if today:
        return store.today_entries(timezone_name)
    return store.load_all()


def _replace(store: EntryStore[EntryT], entry_id: str, entry: EntryT) -> EntryT:
    if store.get(entry_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return store.update(entry.model_copy(update={"id": entry_id}))


def _remove(store: EntryStore[EntryT], entry_id: str) -> None:
    if store.get(entry_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    store.remove(entry_id)


@router.get("/food-entries")
async def list_food_entries(request: Request, today: bool = False) -> list[FoodEntry]:
    """Return food entries, optionally only today's."""
    container = _container(request)
    return _list(container.food_store, today, container.settings.timezone)


@router.post("/food-entries", status_code=status.HTTP_201_CREATED)
async def create_food_entry(body: FoodEntryCreate, request: Request) -> FoodEntry:
    """Score the pending foods and store the meal."""
    service = _container(request).food_entry_service
    foods = [service.new_food(food.name, food.quantity) for food in body.foods]
    return await service.save_entry(
        body.meal_type,
        foods,
        timestamp=body.timestamp,
        notes=body.notes,
        photo_url=body.photo_url,
    )


@router.get("/food-entries/frequent")
async def list_frequent_foods(request: Request) -> FrequentFoods:
    """Return food names logged at least three times."""
    return FrequentFoods(foods=frequent_foods(_container(request).food_store.entries))


@router.put("/food-entries/{entry_id}")
async def update_food_entry(
    entry_id: str, entry: FoodEntry, request: Request
) -> FoodEntry:
    """Replace a food entry."""
    return _replace(_container(request).food_store, entry_id, entry)


@router.delete("/food-entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food_entry(entry_id: str, request: Request) -> None:
    """Delete a food entry."""
    _remove(_container(request).food_store, entry_id)


@router.get("/symptom-entries")
async def list_symptom_entries(
    request: Request, today: bool = False
) -> list[SymptomEntry]:
    """Return symptom entries, optionally only today's."""
    container = _container(request)
    return _list(container.symptom_store, today, container.settings.timezone)


@router.post("/symptom-entries", status_code=status.HTTP_201_CREATED)
async def create_symptom_entry(
    body: SymptomEntryCreate, request: Request
) -> SymptomEntry:
    """Store a symptom entry."""
    entry = SymptomEntry(
        id=str(uuid4()),
        timestamp=body.timestamp or datetime.now(tz=UTC),
        symptoms=body.symptoms,
    )
    return _container(request).symptom_store.add(entry)


@router.put("/symptom-entries/{entry_id}")
async def update_symptom_entry(
    entry_id: str, entry: SymptomEntry, request: Request
) -> SymptomEntry:
    """Replace a symptom entry."""
    return _replace(_container(request).symptom_store, entry_id, entry)


@router.delete("/symptom-entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_symptom_entry(entry_id: str, request: Request) -> None:
    """Delete a symptom entry."""
    _remove(_container(request).symptom_store, entry_id)


@router.get("/medication-entries")
async def list_medication_entries(
    request: Request, today: bool = False
) -> list[MedicationEntry]:
    """Return medication entries, optionally only today's."""
    container = _container(request)
    return _list(container.medication_store, today, container.settings.timezone)


@router.post("/medication-entries", status_code=status.HTTP_201_CREATED)
async def create_medication_entry(
    body: MedicationEntryCreate, request: Request
) -> MedicationEntry:
    """Store a medication entry."""
    entry = MedicationEntry(
        id=str(uuid4()),
        timestamp=body.timestamp or datetime.now(tz=UTC),
        medications=body.medications,
    )
    return _container(request).medication_store.add(entry)


@router.put("/medication-entries/{entry_id}")
async def update_medication_entry(
    entry_id: str, entry: MedicationEntry, request: Request
) -> MedicationEntry:
    """Replace a medication entry."""
    return _replace(_container(request).medication_store, entry_id, entry)


@router.delete(
    "/medication-entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_medication_entry(entry_id: str, request: Request) -> None:
    """Delete a medication entry."""
    _remove(_container(request).medication_store, entry_id)
