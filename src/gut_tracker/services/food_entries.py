"""Food entry creation with FODMAP scoring."""

import logging
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

from gut_tracker.domain.ai import FodmapAnalysisFood, FodmapAnalysisResult
from gut_tracker.domain.entries import FodmapScore, Food, FoodEntry, MealType
from gut_tracker.domain.errors import AiError
from gut_tracker.services.ai_gateway import AiGateway
from gut_tracker.services.stores import EntryStore

FREQUENT_FOOD_MIN_COUNT = 3

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _new_id() -> str:
    return str(uuid4())


@dataclass
class FoodEntryService:
    """Creates food entries, scoring them when the AI provider cooperates."""

    store: EntryStore[FoodEntry]
    gateway: AiGateway
    clock: Callable[[], datetime] = _utc_now
    id_factory: Callable[[], str] = _new_id

    def new_food(self, name: str, quantity: str | None = None) -> Food:
        """Create an unscored food item."""
        return Food(id=self.id_factory(), name=name, quantity=quantity)

    async def save_entry(  # noqa: PLR0913
        self,
        meal_type: MealType,
        foods: list[Food],
        *,
        timestamp: datetime | None = None,
        notes: str | None = None,
        photo_url: str | None = None,
    ) -> FoodEntry:
        """Score the foods and store the entry; scoring failures never block saving."""
        scored_foods = foods
        global_score: FodmapScore | None = None
        if foods:
            try:
                analysis = await self.gateway.analyze_fodmap([f.name for f in foods])
            except AiError as exc:
                _logger.warning(
                    "FODMAP scoring failed (%s), saving entry without scores: %s",
                    exc.provider,
                    exc.message,
                )
            except Exception:
                _logger.exception("FODMAP scoring failed, saving entry without scores")
            else:
                now = self.clock()
                scored_foods = _apply_scores(foods, analysis, now)
                if analysis.foods:
                    global_score = FodmapScore(
                        level=analysis.global_level,
                        score=analysis.global_score,
                        details=analysis.advice,
                        analyzed_at=now,
                    )

        entry = FoodEntry(
            id=self.id_factory(),
            timestamp=timestamp or self.clock(),
            meal_type=meal_type,
            foods=scored_foods,
            photo_url=photo_url,
            global_fodmap_score=global_score,
            notes=notes,
        )
        return self.store.add(entry)

    async def score_food(self, food: Food) -> Food:
        """Return the food with a FODMAP score, or unchanged if scoring fails."""
        try:
            analysis = await self.gateway.analyze_fodmap([food.name])
        except AiError as exc:
            _logger.warning("FODMAP scoring of %r failed: %s", food.name, exc.message)
            return food
        except Exception:
            _logger.exception("FODMAP scoring of %r failed", food.name)
            return food
        return _apply_scores([food], analysis, self.clock())[0]


def frequent_foods(
    entries: list[FoodEntry], min_count: int = FREQUENT_FOOD_MIN_COUNT
) -> list[str]:
    """Return names of foods logged at least ``min_count`` times."""
    counts = Counter(food.name for entry in entries for food in entry.foods)
    return [name for name, count in counts.items() if count >= min_count]


def _apply_scores(
    foods: list[Food], analysis: FodmapAnalysisResult, analyzed_at: datetime
) -> list[Food]:
    by_name: dict[str, FodmapAnalysisFood] = {}
    for item in analysis.foods:
        by_name.setdefault(item.name.lower(), item)
    scored = []
    for food in foods:
        match = by_name.get(food.name.lower())
        if match is None:
            scored.append(food)
            continue
        details = "; ".join(
            part for part in (", ".join(match.main_fodmaps), match.notes) if part
        )
        score = FodmapScore(
            level=match.fodmap_level,
            score=match.score,
            details=details,
            analyzed_at=analyzed_at,
        )
        scored.append(food.model_copy(update={"fodmap_score": score}))
    return scored
