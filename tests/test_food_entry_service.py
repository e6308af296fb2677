"""Tests for food entry creation and FODMAP scoring."""

import asyncio
import itertools

import pytest

from gut_tracker.domain.errors import AiError, AiErrorKind
from gut_tracker.services.food_entries import FoodEntryService, frequent_foods
from tests.conftest import at, food_entry

LEEK_ANALYSIS = (
    '{"foods": ['
    '{"name": "leek", "fodmapLevel": "high", "score": 8, '
    '"mainFodmaps": ["fructans", "GOS"], "notes": "Green tops are low"},'
    '{"name": "Leek", "fodmapLevel": "low", "score": 1, "mainFodmaps": []}'
    '], "globalScore": 7, "globalLevel": "high", "advice": "Go easy on leek"}'
)


@pytest.fixture
def service(food_store, gateway) -> FoodEntryService:
    ids = itertools.count(1)
    return FoodEntryService(
        store=food_store,
        gateway=gateway,
        clock=lambda: at(10),
        id_factory=lambda: f"id-{next(ids)}",
    )


def test_save_entry_applies_fodmap_scores(service, fake_provider, food_store) -> None:
    fake_provider.queue(LEEK_ANALYSIS)
    foods = [service.new_food("Leek", "1 stalk"), service.new_food("Rice")]

    entry = asyncio.run(service.save_entry("dinner", foods, notes="soup"))

    leek, rice = entry.foods
    assert leek.fodmap_score is not None
    assert leek.fodmap_score.level == "high"
    assert leek.fodmap_score.score == 8
    assert leek.fodmap_score.details == "fructans, GOS; Green tops are low"
    assert leek.quantity == "1 stalk"
    assert rice.fodmap_score is None
    assert entry.global_fodmap_score is not None
    assert entry.global_fodmap_score.score == 7
    assert entry.global_fodmap_score.details == "Go easy on leek"
    assert entry.timestamp == at(10)
    assert food_store.entries == [entry]
    assert fake_provider.calls[0]["prompt"] == "Foods to analyze: Leek, Rice"


def test_save_entry_keeps_foods_when_scoring_fails(
    service, fake_provider, food_store
) -> None:
    fake_provider.queue(
        AiError(
            "Anthropic network error",
            provider="anthropic",
            kind=AiErrorKind.NETWORK,
        )
    )

    entry = asyncio.run(
        service.save_entry("lunch", [service.new_food("Bread")], timestamp=at(3))
    )

    assert entry.foods[0].fodmap_score is None
    assert entry.global_fodmap_score is None
    assert entry.timestamp == at(3)
    assert food_store.entries == [entry]


def test_save_entry_survives_unexpected_scoring_failure(
    service, fake_provider, food_store
) -> None:
    fake_provider.queue(RuntimeError("boom"))

    entry = asyncio.run(service.save_entry("lunch", [service.new_food("Bread")]))

    assert entry.foods[0].fodmap_score is None
    assert entry.global_fodmap_score is None
    assert food_store.entries == [entry]


def test_save_entry_without_usable_json_has_no_global_score(
    service, fake_provider
) -> None:
    fake_provider.queue("Bread contains fructans.")

    entry = asyncio.run(service.save_entry("snack", [service.new_food("Bread")]))

    assert entry.foods[0].fodmap_score is None
    assert entry.global_fodmap_score is None


def test_save_entry_without_foods_skips_scoring(service, fake_provider) -> None:
    entry = asyncio.run(service.save_entry("drink", [], notes="water"))

    assert entry.foods == []
    assert fake_provider.calls == []


def test_score_food_returns_scored_copy(service, fake_provider) -> None:
    fake_provider.queue(LEEK_ANALYSIS)
    food = service.new_food("Leek")

    scored = asyncio.run(service.score_food(food))

    assert scored.fodmap_score is not None
    assert scored.fodmap_score.analyzed_at == at(10)
    assert food.fodmap_score is None


def test_score_food_returns_food_unchanged_on_error(service, fake_provider) -> None:
    fake_provider.queue(AiError("quota", provider="openai", kind=AiErrorKind.QUOTA))
    food = service.new_food("Leek")

    assert asyncio.run(service.score_food(food)) is food


def test_score_food_returns_food_unchanged_on_unexpected_error(
    service, fake_provider
) -> None:
    fake_provider.queue(RuntimeError("boom"))
    food = service.new_food("Leek")

    assert asyncio.run(service.score_food(food)) is food


def test_frequent_foods_counts_names() -> None:
    entries = [
        food_entry(at(1), "Rice", "Leek"),
        food_entry(at(2), "Rice"),
        food_entry(at(3), "Rice", "Leek"),
        food_entry(at(4), "Leek"),
        food_entry(at(5), "Apple"),
    ]

    assert frequent_foods(entries) == ["Rice", "Leek"]
    assert frequent_foods(entries, min_count=1) == ["Rice", "Leek", "Apple"]
