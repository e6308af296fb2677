"""Tests for voice transcript parsing."""

import asyncio

from gut_tracker.domain.voice import (
    VoiceFoodResult,
    VoiceMedicationResult,
    VoiceSymptomResult,
)
from gut_tracker.services.voice import VoiceEntryParser


def test_parse_food_transcript(gateway, fake_provider) -> None:
    fake_provider.queue(
        '{"mealType": "breakfast", '
        '"foods": [{"name": "Toast", "quantity": "2 slices"}]}'
    )

    result = asyncio.run(
        VoiceEntryParser(gateway).parse("two slices of toast for breakfast", "food")
    )

    assert result.context == "food"
    assert result.transcript == "two slices of toast for breakfast"
    assert isinstance(result.data, VoiceFoodResult)
    assert result.data.meal_type == "breakfast"
    assert result.data.foods[0].quantity == "2 slices"


def test_parse_symptom_transcript_defaults_severity(gateway, fake_provider) -> None:
    fake_provider.queue('{"symptoms": [{"type": "bloating", "locationHint": "lower"}]}')

    result = asyncio.run(VoiceEntryParser(gateway).parse("a bit bloated", "symptom"))

    assert isinstance(result.data, VoiceSymptomResult)
    assert result.data.symptoms[0].severity == 5
    assert result.data.symptoms[0].location_hint == "lower"


def test_parse_falls_back_to_empty_result(gateway, fake_provider) -> None:
    fake_provider.queue("Sorry, I did not understand.")

    result = asyncio.run(VoiceEntryParser(gateway).parse("mumble", "medication"))

    assert isinstance(result.data, VoiceMedicationResult)
    assert result.data.medications == []
