"""Endpoints exposing the AI gateway operations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from gut_tracker.api.schemas import (
    AiStatus,
    FodmapRequest,
    RecognizeFoodRequest,
    VoiceRequest,
)
from gut_tracker.domain.ai import FodmapAnalysisResult, ImageRecognitionResult
from gut_tracker.domain.voice import VoiceParseResult

if TYPE_CHECKING:
    from gut_tracker.containers import AppContainer

router = APIRouter(prefix="/ai", tags=["ai"])


@router.get("/status")
async def ai_status(request: Request) -> AiStatus:
    """Return whether an AI call is in flight and which provider is selected."""
    container: AppContainer = request.app.state.container
    return AiStatus(
        analyzing=container.ai_gateway.analyzing,
        selected_provider=container.ai_settings_service.get_selected_provider(),
    )


@router.post("/recognize-food")
async def recognize_food(
    body: RecognizeFoodRequest, request: Request
) -> ImageRecognitionResult:
    """Recognize the foods on a base64-encoded photo."""
    container: AppContainer = request.app.state.container
    return await container.ai_gateway.recognize_food(body.image_base64, body.mime_type)


@router.post("/fodmap")
async def analyze_fodmap(body: FodmapRequest, request: Request) -> FodmapAnalysisResult:
    """Score a list of foods on the FODMAP scale."""
    container: AppContainer = request.app.state.container
    return await container.ai_gateway.analyze_fodmap(body.foods)


@router.post("/voice")
async def parse_voice(body: VoiceRequest, request: Request) -> VoiceParseResult:
    """Turn a dictated transcript into form data."""
    container: AppContainer = request.app.state.container
    return await container.voice_parser.parse(body.transcript, body.context)
