"""Provider-agnostic AI operations."""

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Protocol, assert_never

from gut_tracker.domain.ai import FodmapAnalysisResult, ImageRecognitionResult
from gut_tracker.domain.ai_settings import ProviderId
from gut_tracker.domain.errors import AiError, AiErrorKind
from gut_tracker.domain.voice import VoiceContext
from gut_tracker.services.ai_settings import AiSettingsService
from gut_tracker.services.busy import BusyTracker
from gut_tracker.services.json_extraction import parse_model_output
from gut_tracker.services.prompts import (
    ANALYSIS_SYSTEM_PROMPT,
    FODMAP_SYSTEM_PROMPT,
    FOOD_RECOGNITION_PROMPT,
    VOICE_PROMPTS,
)

_logger = logging.getLogger(__name__)


class AiProvider(Protocol):
    """Interface implemented by every AI provider adapter."""

    id: ClassVar[ProviderId]
    display_name: ClassVar[str]
    supports_vision: ClassVar[bool]
    is_free: ClassVar[bool]

    async def complete(self, prompt: str, system_prompt: str | None = None) -> str:
        """Send a single-turn chat request and return the raw answer text."""

    async def analyze_image(
        self, image_base64: str, prompt: str, mime_type: str = "image/jpeg"
    ) -> str:
        """Send one image and one text prompt and return the raw answer text."""


@dataclass
class AiGateway:
    """Domain AI operations routed to the provider selected in settings."""

    settings_service: AiSettingsService
    openai: AiProvider
    anthropic: AiProvider
    gemini: AiProvider
    ollama: AiProvider
    busy: BusyTracker = field(default_factory=BusyTracker)

    @property
    def analyzing(self) -> bool:
        """Return True while an AI operation is in flight."""
        return self.busy.active

    def provider(self, provider_id: ProviderId) -> AiProvider:
        """Return the adapter for a provider id."""
        match provider_id:
            case ProviderId.OPENAI:
                return self.openai
            case ProviderId.ANTHROPIC:
                return self.anthropic
            case ProviderId.GEMINI:
                return self.gemini
            case ProviderId.OLLAMA:
                return self.ollama
            case _:
                assert_never(provider_id)

    def active_provider(self) -> AiProvider:
        """Return the adapter selected in settings."""
        selected = self.settings_service.get_selected_provider()
        try:
            provider_id = ProviderId(selected)
        except ValueError:
            raise AiError(
                f'Provider "{selected}" is not available',
                provider=selected,
                kind=AiErrorKind.CONFIGURATION,
            ) from None
        return self.provider(provider_id)

    async def recognize_food(
        self, image_base64: str, mime_type: str = "image/jpeg"
    ) -> ImageRecognitionResult:
        """Recognize foods on a photo, returning an empty result on unusable output."""
        with self.busy.track():
            raw = await self.active_provider().analyze_image(
                image_base64, FOOD_RECOGNITION_PROMPT, mime_type
            )
            result = parse_model_output(raw, ImageRecognitionResult)
            if result is None:
                _logger.warning("Food recognition returned no usable JSON")
                return ImageRecognitionResult()
            return result

    async def analyze_fodmap(self, food_names: list[str]) -> FodmapAnalysisResult:
        """Score foods on the FODMAP scale."""
        with self.busy.track():
            prompt = f"Foods to analyze: {', '.join(food_names)}"
            raw = await self.active_provider().complete(prompt, FODMAP_SYSTEM_PROMPT)
            result = parse_model_output(raw, FodmapAnalysisResult)
            if result is None:
                _logger.warning("FODMAP analysis returned no usable JSON")
                return FodmapAnalysisResult(advice=raw)
            return result

    async def parse_voice_transcript(
        self, transcript: str, context: VoiceContext
    ) -> str:
        """Ask the model to structure a dictated transcript; returns raw text."""
        system_prompt = VOICE_PROMPTS.get(context)
        if system_prompt is None:
            raise ValueError(f"Unknown voice context: {context}")
        with self.busy.track():
            return await self.active_provider().complete(transcript, system_prompt)

    async def analyze_correlations(self, data_json: str) -> str:
        """Return the narrative correlation report for the tracking data."""
        with self.busy.track():
            prompt = f"Provided data:\n{data_json}"
            return await self.active_provider().complete(
                prompt, ANALYSIS_SYSTEM_PROMPT
            )
