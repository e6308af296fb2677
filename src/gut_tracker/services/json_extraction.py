"""Best-effort extraction of JSON objects from free-form model text."""

import json
import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

_DECODER = json.JSONDecoder()
_logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def extract_json_object(text: str) -> dict[str, object] | None:
    """Return the first balanced JSON object found in the text, or None.

    Models often wrap their JSON in prose or markdown fences, so every ``{`` is
    tried as a starting point until one decodes into a complete object.
    """
    start = text.find("{")
    while start != -1:
        try:
            value, _ = _DECODER.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        return value
    return None


def parse_model_output(text: str, model: type[ModelT]) -> ModelT | None:
    """Extract and validate a JSON object, returning None when either step fails."""
    payload = extract_json_object(text)
    if payload is None:
        return None
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        _logger.debug("Model output did not match %s: %s", model.__name__, exc)
        return None
