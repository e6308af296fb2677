"""Models for AI recognition and FODMAP scoring results."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from gut_tracker.domain.entries import FodmapLevel


class AiResultModel(BaseModel):
    """Base for AI payloads using camelCase JSON keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecognizedFood(AiResultModel):
    """Single food detected on a photo."""

    name: str
    confidence: float = Field(ge=0.0, le=1.0)
    quantity: str | None = None


class ImageRecognitionResult(AiResultModel):
    """Structured output for food photo recognition."""

    foods: list[RecognizedFood] = Field(default_factory=list)
    uncertain: list[str] = Field(default_factory=list)


class FodmapAnalysisFood(AiResultModel):
    """FODMAP classification of one food."""

    name: str
    fodmap_level: FodmapLevel
    score: int = Field(ge=0, le=10)
    main_fodmaps: list[str] = Field(default_factory=list)
    notes: str = ""


class FodmapAnalysisResult(AiResultModel):
    """FODMAP classification of a whole meal."""

    foods: list[FodmapAnalysisFood] = Field(default_factory=list)
    global_score: int = Field(default=0, ge=0, le=10)
    global_level: FodmapLevel = "low"
    advice: str = ""
