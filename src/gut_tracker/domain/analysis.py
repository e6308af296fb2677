"""Domain models for correlation analysis."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CorrelationPoint:
    """A food item followed by a symptom within the correlation window."""

    food_name: str
    food_time: datetime
    symptom_type: str
    symptom_time: datetime
    severity: int
    delay_hours: float


@dataclass(frozen=True)
class AnalysisResult:
    """Narrative AI report over recent tracking data."""

    report: str
    generated_at: datetime
