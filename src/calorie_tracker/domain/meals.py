"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from calorie_tracker.domain.nutrition import NutrientProfile

MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")


@dataclass(frozen=True)
class MealItem:
    """A logged food portion with its nutrition snapshot."""

    food_id: UUID
    name: str
    category: str
    amount: float
    nutrition: NutrientProfile


@dataclass(frozen=True)
class Meal:
    """A meal with embedded items and derived totals."""

    id: UUID
    user_id: UUID
    date: datetime
    meal_type: str
    items: tuple[MealItem, ...]
    totals: NutrientProfile
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class MealItemRequest:
    """A food reference and consumed amount submitted by a client."""

    food_id: UUID
    amount: float

