"""Food to symptom correlation analysis."""

import json
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

from gut_tracker.domain.analysis import AnalysisResult, CorrelationPoint
from gut_tracker.domain.entries import FoodEntry, MedicationEntry, SymptomEntry
from gut_tracker.domain.errors import AiError
from gut_tracker.services.ai_gateway import AiGateway
from gut_tracker.services.busy import BusyTracker
from gut_tracker.services.stores import EntryStore

CORRELATION_WINDOW = timedelta(hours=6)
MIN_DAYS_REQUIRED = 7
PAYLOAD_PERIOD = timedelta(days=30)
GENERIC_ERROR_MESSAGE = "Analysis failed. Check your AI settings."

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class AnalysisService:
    """Computes food/symptom correlations and requests the AI narrative report.

    Everything is derived from the current store snapshots on each call; the
    service only keeps a busy signal and the last error message.
    """

    food_store: EntryStore[FoodEntry]
    symptom_store: EntryStore[SymptomEntry]
    medication_store: EntryStore[MedicationEntry]
    gateway: AiGateway
    timezone_name: str | None = None
    clock: Callable[[], datetime] = _utc_now
    busy: BusyTracker = field(default_factory=BusyTracker)
    error: str | None = None

    @property
    def analyzing(self) -> bool:
        """Return True while an analysis request is in flight."""
        return self.busy.active

    def days_available(self) -> int:
        """Return the number of distinct local days with any tracked data."""
        tz = ZoneInfo(self.timezone_name) if self.timezone_name else None
        timestamps = [
            *(e.timestamp for e in self.food_store.entries),
            *(e.timestamp for e in self.medication_store.entries),
            *(e.timestamp for e in self.symptom_store.entries),
        ]
        return len({ts.astimezone(tz).date() for ts in timestamps})

    def can_analyze(self) -> bool:
        """Return True once at least a week of distinct days is tracked."""
        return self.days_available() >= MIN_DAYS_REQUIRED

    def compute_correlations(self) -> list[CorrelationPoint]:
        """Pair every food item with every symptom seen 0 to 6 hours after it."""
        correlations: list[CorrelationPoint] = []
        for symptom_entry in self.symptom_store.entries:
            for symptom in symptom_entry.symptoms:
                for food_entry in self.food_store.entries:
                    delay = symptom_entry.timestamp - food_entry.timestamp
                    if not timedelta(0) <= delay <= CORRELATION_WINDOW:
                        continue
                    delay_hours = _round_tenth(delay / timedelta(hours=1))
                    correlations.extend(
                        CorrelationPoint(
                            food_name=food.name,
                            food_time=food_entry.timestamp,
                            symptom_type=symptom.type,
                            symptom_time=symptom_entry.timestamp,
                            severity=symptom.severity,
                            delay_hours=delay_hours,
                        )
                        for food in food_entry.foods
                    )
        return correlations

    def build_payload(self) -> str:
        """Serialize the last 30 days of entries for the AI report."""
        cutoff = self.clock() - PAYLOAD_PERIOD

        def recent(entries: list) -> list[dict[str, object]]:
            return [
                entry.model_dump(mode="json", by_alias=True)
                for entry in entries
                if entry.timestamp >= cutoff
            ]

        payload = {
            "food": recent(self.food_store.entries),
            "medication": recent(self.medication_store.entries),
            "symptom": recent(self.symptom_store.entries),
        }
        return json.dumps(payload, indent=2, ensure_ascii=False)

    async def analyze(self) -> AnalysisResult:
        """Request the narrative report; failures set ``error`` and re-raise."""
        self.error = None
        with self.busy.track():
            try:
                report = await self.gateway.analyze_correlations(self.build_payload())
            except AiError as exc:
                self.error = f"[{exc.provider}] {exc.message}"
                _logger.warning("Correlation analysis failed: %s", self.error)
                raise
            except Exception:
                self.error = GENERIC_ERROR_MESSAGE
                _logger.exception("Correlation analysis failed")
                raise
            return AnalysisResult(report=report, generated_at=self.clock())


def _round_tenth(value: float) -> float:
    """Round half up to one decimal."""
    return math.floor(value * 10 + 0.5) / 10
