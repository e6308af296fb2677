"""Structured parsing of dictated transcripts."""

import logging
from dataclasses import dataclass

from gut_tracker.domain.voice import (
    VoiceContext,
    VoiceFoodResult,
    VoiceMedicationResult,
    VoiceParseResult,
    VoiceSymptomResult,
)
from gut_tracker.services.ai_gateway import AiGateway
from gut_tracker.services.json_extraction import parse_model_output

_RESULT_MODELS: dict[
    str, type[VoiceFoodResult] | type[VoiceSymptomResult] | type[VoiceMedicationResult]
] = {
    "food": VoiceFoodResult,
    "symptom": VoiceSymptomResult,
    "medication": VoiceMedicationResult,
}

_logger = logging.getLogger(__name__)


@dataclass
class VoiceEntryParser:
    """Turns a transcript into form data; unusable model output yields empty data."""

    gateway: AiGateway

    async def parse(self, transcript: str, context: VoiceContext) -> VoiceParseResult:
        """Send the transcript to the AI and return the structured result."""
        raw = await self.gateway.parse_voice_transcript(transcript, context)
        model = _RESULT_MODELS[context]
        data = parse_model_output(raw, model)
        if data is None:
            _logger.warning("Voice transcript (%s) returned no usable JSON", context)
            data = model()
        return VoiceParseResult(context=context, transcript=transcript, data=data)
