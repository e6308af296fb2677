"""Models for structured voice dictation results."""

from typing import Annotated, Literal

from pydantic import Field

from gut_tracker.domain.ai import AiResultModel
from gut_tracker.domain.entries import MealType, MedicationType, SymptomType

VoiceContext = Literal["food", "symptom", "medication"]


class VoiceFood(AiResultModel):
    name: str
    quantity: str | None = None


class VoiceFoodResult(AiResultModel):
    """Meal details extracted from a dictated transcript."""

    context: Literal["food"] = "food"
    meal_type: MealType | None = None
    foods: list[VoiceFood] = Field(default_factory=list)
    notes: str | None = None


class VoiceSymptom(AiResultModel):
    type: SymptomType
    severity: int = Field(default=5, ge=1, le=10)
    location_hint: str | None = None
    note: str | None = None
    bristol_scale: int | None = Field(default=None, ge=1, le=7)


class VoiceSymptomResult(AiResultModel):
    """Symptoms extracted from a dictated transcript."""

    context: Literal["symptom"] = "symptom"
    symptoms: list[VoiceSymptom] = Field(default_factory=list)


class VoiceMedication(AiResultModel):
    name: str
    type: MedicationType = "other"
    dose: str | None = None


class VoiceMedicationResult(AiResultModel):
    """Medications extracted from a dictated transcript."""

    context: Literal["medication"] = "medication"
    medications: list[VoiceMedication] = Field(default_factory=list)


class VoiceParseResult(AiResultModel):
    """Transcript together with its structured interpretation."""

    context: VoiceContext
    transcript: str
    data: Annotated[
        VoiceFoodResult | VoiceSymptomResult | VoiceMedicationResult,
        Field(discriminator="context"),
    ]
