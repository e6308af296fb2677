"""Tests for the correlation analysis service."""

import asyncio
import json
from datetime import UTC, datetime, timedelta

import pytest

from gut_tracker.domain.errors import AiError, AiErrorKind
from gut_tracker.services.analysis import GENERIC_ERROR_MESSAGE, AnalysisService
from gut_tracker.services.prompts import ANALYSIS_SYSTEM_PROMPT
from tests.conftest import at, food_entry, medication_entry, symptom_entry


@pytest.mark.parametrize(
    ("delay", "emitted"),
    [
        (timedelta(0), True),
        (timedelta(hours=6), True),
        (timedelta(hours=6, minutes=1), False),
        (timedelta(minutes=-1), False),
    ],
)
def test_correlation_window_boundaries(
    analysis_service, food_store, symptom_store, delay: timedelta, emitted: bool
) -> None:
    food_store.add(food_entry(at(1, 12), "Bread"))
    symptom_store.add(symptom_entry(at(1, 12) + delay, ("pain", 4)))

    points = analysis_service.compute_correlations()

    assert (len(points) == 1) is emitted
    if emitted:
        assert 0 <= points[0].delay_hours <= 6


def test_poireau_scenario(analysis_service, food_store, symptom_store) -> None:
    food_store.add(
        food_entry(datetime(2024, 6, 1, 12, tzinfo=UTC), "Poireau", entry_id="f1")
    )
    symptom_store.add(
        symptom_entry(
            datetime(2024, 6, 1, 15, tzinfo=UTC), ("bloating", 7), entry_id="s1"
        )
    )

    points = analysis_service.compute_correlations()

    assert len(points) == 1
    point = points[0]
    assert point.food_name == "Poireau"
    assert point.symptom_type == "bloating"
    assert point.severity == 7
    assert point.delay_hours == 3
    assert point.food_time == datetime(2024, 6, 1, 12, tzinfo=UTC)
    assert point.symptom_time == datetime(2024, 6, 1, 15, tzinfo=UTC)


def test_every_food_item_yields_a_point(
    analysis_service, food_store, symptom_store
) -> None:
    food_store.add(food_entry(at(1, 12), "Leek", "Onion", "Rice"))
    symptom_store.add(symptom_entry(at(1, 14), ("gas", 5), ("pain", 3)))

    points = analysis_service.compute_correlations()

    assert len(points) == 6
    assert [(p.symptom_type, p.food_name) for p in points] == [
        ("gas", "Leek"),
        ("gas", "Onion"),
        ("gas", "Rice"),
        ("pain", "Leek"),
        ("pain", "Onion"),
        ("pain", "Rice"),
    ]


def test_overlapping_meals_each_produce_points(
    analysis_service, food_store, symptom_store
) -> None:
    food_store.add(food_entry(at(1, 8), "Coffee"))
    food_store.add(food_entry(at(1, 12), "Leek"))
    symptom_store.add(symptom_entry(at(1, 13), ("bloating", 6)))

    points = analysis_service.compute_correlations()

    assert [(p.food_name, p.delay_hours) for p in points] == [
        ("Coffee", 5.0),
        ("Leek", 1.0),
    ]


def test_delay_is_rounded_half_up_to_one_decimal(
    analysis_service, food_store, symptom_store
) -> None:
    food_store.add(food_entry(at(1, 12), "Leek"))
    symptom_store.add(symptom_entry(at(1, 12, 3), ("pain", 2)))

    points = analysis_service.compute_correlations()

    # 3 minutes is 0.05 hours.
    assert points[0].delay_hours == 0.1


def test_days_available_combines_all_collections(
    analysis_service, food_store, symptom_store, medication_store
) -> None:
    for day in (1, 2):
        food_store.add(food_entry(at(day), "Rice"))
    for day in (2, 3, 4):
        symptom_store.add(symptom_entry(at(day), ("pain", 3)))
    medication_store.add(medication_entry(at(5)))
    medication_store.add(medication_entry(at(6)))

    assert analysis_service.days_available() == 6
    assert analysis_service.can_analyze() is False

    medication_store.add(medication_entry(at(7)))

    assert analysis_service.days_available() == 7
    assert analysis_service.can_analyze() is True


def test_days_available_uses_local_dates(
    analysis_service, food_store, symptom_store
) -> None:
    food_store.add(food_entry(at(1, 23, 30), "Rice"))
    symptom_store.add(symptom_entry(at(2, 0, 30), ("pain", 3)))

    assert analysis_service.days_available() == 2

    analysis_service.timezone_name = "Europe/Paris"

    assert analysis_service.days_available() == 1


def test_build_payload_keeps_last_thirty_days(
    analysis_service, food_store, symptom_store
) -> None:
    food_store.add(food_entry(at(1, 11), "Old bread"))
    food_store.add(food_entry(at(20), "Leek"))
    symptom_store.add(symptom_entry(at(21), ("bloating", 6)))

    payload = json.loads(analysis_service.build_payload())

    assert list(payload) == ["food", "medication", "symptom"]
    assert [entry["foods"][0]["name"] for entry in payload["food"]] == ["Leek"]
    assert payload["food"][0]["mealType"] == "lunch"
    assert payload["medication"] == []
    assert payload["symptom"][0]["symptoms"][0]["type"] == "bloating"


def test_analyze_returns_report(analysis_service, fake_provider) -> None:
    fake_provider.queue("Leek is a likely trigger.")

    result = asyncio.run(analysis_service.analyze())

    assert result.report == "Leek is a likely trigger."
    assert result.generated_at == at(31)
    assert fake_provider.calls[0]["system_prompt"] == ANALYSIS_SYSTEM_PROMPT
    assert fake_provider.calls[0]["prompt"].startswith("Provided data:\n{")
    assert analysis_service.error is None


def test_analyze_records_provider_error(analysis_service, fake_provider) -> None:
    fake_provider.queue(
        AiError("OpenAI quota exceeded", provider="openai", kind=AiErrorKind.QUOTA)
    )

    with pytest.raises(AiError):
        asyncio.run(analysis_service.analyze())

    assert analysis_service.error == "[openai] OpenAI quota exceeded"
    assert analysis_service.analyzing is False


def test_analyze_records_generic_error(analysis_service, fake_provider) -> None:
    fake_provider.queue(RuntimeError("boom"))

    with pytest.raises(RuntimeError):
        asyncio.run(analysis_service.analyze())

    assert analysis_service.error == GENERIC_ERROR_MESSAGE


def test_analyze_clears_previous_error(analysis_service, fake_provider) -> None:
    analysis_service.error = "[openai] stale"
    fake_provider.queue("ok")

    asyncio.run(analysis_service.analyze())

    assert analysis_service.error is None


def test_analyze_busy_only_while_running(
    analysis_service: AnalysisService, fake_provider
) -> None:
    fake_provider.busy_check = lambda: analysis_service.analyzing
    fake_provider.queue("ok", AiError("down", provider="openai"))

    asyncio.run(analysis_service.analyze())
    with pytest.raises(AiError):
        asyncio.run(analysis_service.analyze())

    assert fake_provider.busy_seen == [True, True]
    assert analysis_service.analyzing is False
