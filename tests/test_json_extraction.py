"""Tests for JSON extraction from model output."""

from gut_tracker.domain.ai import ImageRecognitionResult
from gut_tracker.services.json_extraction import (
    extract_json_object,
    parse_model_output,
)


def test_extracts_object_wrapped_in_prose() -> None:
    text = 'Sure! ```json\n{"a": {"b": [1, 2]}}\n``` Anything else?'

    assert extract_json_object(text) == {"a": {"b": [1, 2]}}


def test_skips_braces_that_are_not_json() -> None:
    text = 'Use {curly} notes, then {"ok": true}'

    assert extract_json_object(text) == {"ok": True}


def test_returns_none_without_object() -> None:
    assert extract_json_object("no json here") is None
    assert extract_json_object('{"unterminated": ') is None


def test_parse_model_output_validates_shape() -> None:
    assert parse_model_output('{"foods": "rice"}', ImageRecognitionResult) is None

    parsed = parse_model_output(
        'x {"foods": [{"name": "Rice", "confidence": 1}]} y', ImageRecognitionResult
    )

    assert parsed is not None
    assert parsed.foods[0].name == "Rice"
    assert parsed.uncertain == []
