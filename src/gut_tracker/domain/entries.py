"""Domain models for tracked food, symptom and medication entries."""

from typing import Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MealType = Literal["breakfast", "lunch", "dinner", "snack", "drink"]
FodmapLevel = Literal["low", "medium", "high"]
SymptomType = Literal[
    "pain", "bloating", "gas", "belching", "stool", "headache", "other"
]
MedicationType = Literal["enzyme", "probiotic", "antibiotic", "antispasmodic", "other"]


class EntryModel(BaseModel):
    """Base for immutable records serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )


class FodmapScore(EntryModel):
    """FODMAP classification produced by an AI scoring call."""

    level: FodmapLevel
    score: int = Field(ge=0, le=10)
    details: str
    analyzed_at: AwareDatetime


class Food(EntryModel):
    """A single food item within a meal."""

    id: str
    name: str
    fodmap_score: FodmapScore | None = None
    quantity: str | None = None


class FoodEntry(EntryModel):
    """A logged meal or drink."""

    id: str
    timestamp: AwareDatetime
    meal_type: MealType
    foods: list[Food] = Field(default_factory=list)
    photo_url: str | None = None
    global_fodmap_score: FodmapScore | None = None
    notes: str | None = None


class BodyLocation(EntryModel):
    """Position on the body map, in percent of the drawing."""

    x: float
    y: float
    region: str


class Symptom(EntryModel):
    """A single symptom occurrence."""

    type: SymptomType
    severity: int = Field(ge=1, le=10)
    location: BodyLocation | None = None
    note: str | None = None
    # Only meaningful for stool symptoms.
    bristol_scale: int | None = Field(default=None, ge=1, le=7)


class SymptomEntry(EntryModel):
    """Symptoms recorded at one point in time."""

    id: str
    timestamp: AwareDatetime
    symptoms: list[Symptom] = Field(default_factory=list)


class Medication(EntryModel):
    """A medication or supplement intake."""

    name: str
    type: MedicationType
    dose: str | None = None


class MedicationEntry(EntryModel):
    """Medications taken at one point in time."""

    id: str
    timestamp: AwareDatetime
    medications: list[Medication] = Field(default_factory=list)


TrackedEntry = FoodEntry | SymptomEntry | MedicationEntry
