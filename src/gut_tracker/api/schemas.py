"""Request and response bodies of the HTTP API."""

from datetime import datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from gut_tracker.domain.analysis import CorrelationPoint
from gut_tracker.domain.entries import MealType, Medication, Symptom
from gut_tracker.domain.voice import VoiceContext


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NewFood(ApiModel):
    name: str = Field(min_length=1)
    quantity: str | None = None


class FoodEntryCreate(ApiModel):
    """Pending meal to score and store."""

    meal_type: MealType
    foods: list[NewFood] = Field(default_factory=list)
    timestamp: AwareDatetime | None = None
    notes: str | None = None
    photo_url: str | None = None


class SymptomEntryCreate(ApiModel):
    timestamp: AwareDatetime | None = None
    symptoms: list[Symptom] = Field(default_factory=list)


class MedicationEntryCreate(ApiModel):
    timestamp: AwareDatetime | None = None
    medications: list[Medication] = Field(default_factory=list)


class FrequentFoods(ApiModel):
    foods: list[str]


class RecognizeFoodRequest(ApiModel):
    image_base64: str = Field(min_length=1)
    mime_type: str = "image/jpeg"


class FodmapRequest(ApiModel):
    foods: list[str] = Field(min_length=1)


class VoiceRequest(ApiModel):
    transcript: str = Field(min_length=1)
    context: VoiceContext


class AiStatus(ApiModel):
    analyzing: bool
    selected_provider: str


class AnalysisStatus(ApiModel):
    """Readiness and progress of the correlation analysis."""

    can_analyze: bool
    days_available: int
    min_days_required: int
    analyzing: bool
    error: str | None = None


class CorrelationPointOut(ApiModel):
    food_name: str
    food_time: datetime
    symptom_type: str
    symptom_time: datetime
    severity: int
    delay_hours: float

    @classmethod
    def from_point(cls, point: CorrelationPoint) -> "CorrelationPointOut":
        return cls(
            food_name=point.food_name,
            food_time=point.food_time,
            symptom_type=point.symptom_type,
            symptom_time=point.symptom_time,
            severity=point.severity,
            delay_hours=point.delay_hours,
        )


class AnalysisReport(ApiModel):
    report: str
    generated_at: datetime


class ProviderInfo(ApiModel):
    """Provider metadata with its masked configuration."""

    id: str
    display_name: str
    supports_vision: bool
    is_free: bool
    configured: bool
    model: str
    api_key: str | None = None
    base_url: str | None = None


class AiSettingsView(ApiModel):
    selected_provider: str
    providers: list[ProviderInfo]


class ErrorBody(ApiModel):
    detail: str
    provider: str
    kind: str
    is_quota_error: bool
