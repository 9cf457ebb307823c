"""Meal logging service."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4
from zoneinfo import ZoneInfo

from calorie_tracker.domain.errors import (
    AccessDeniedError,
    InvalidRequestError,
    NotFoundError,
)
from calorie_tracker.domain.meals import Meal, MealItem, MealItemRequest
from calorie_tracker.domain.models import UserRecord
from calorie_tracker.domain.pagination import Page, paginate
from calorie_tracker.domain.stats import DailyTotals, RangeStatistics
from calorie_tracker.services.foods import FoodRepository
from calorie_tracker.services.nutrition import nutrition_for_food, recompute_totals
from calorie_tracker.services.stats import (
    as_utc,
    daily_totals,
    date_range_window,
    day_window,
    group_by_meal_type,
    range_statistics,
    trailing_window,
)

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id."""

    def list_meals(
        self,
        user_id: UUID | None,
        start: datetime | None = None,
        end: datetime | None = None,
        meal_type: str | None = None,
    ) -> list[Meal]:
        """Return meals in [start, end), newest first.

        A ``user_id`` of None lists meals of every user.
        """

    def create_meal(self, meal: Meal) -> Meal:
        """Persist a new meal."""

    def update_meal(self, meal: Meal) -> Meal:
        """Persist changes to a meal."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal."""

    def delete_meals_by_user(self, user_id: UUID) -> int:
        """Delete a user's meals and return how many were removed."""


@dataclass(frozen=True)
class DailySummary:
    """Meals and totals for one calendar day."""

    day: date
    totals: DailyTotals
    meals_by_type: dict[str, list[Meal]]


@dataclass
class MealService:
    """Service that snapshots nutrition into meals and reports on them."""

    repository: MealRepository
    food_repository: FoodRepository
    timezone: str = "UTC"

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def create_meal(  # noqa: PLR0913
        self,
        user: UserRecord,
        meal_type: str,
        items: Sequence[MealItemRequest],
        meal_date: datetime | None = None,
        notes: str | None = None,
    ) -> Meal:
        """Compute item snapshots and totals, then persist the meal."""
        snapshots = self._build_items(user, items)
        now = datetime.now(tz=UTC)
        meal = Meal(
            id=uuid4(),
            user_id=user.id,
            date=as_utc(meal_date) if meal_date else now,
            meal_type=meal_type,
            items=snapshots,
            totals=recompute_totals(snapshots),
            notes=notes,
            created_at=now,
            updated_at=now,
        )
        created = self.repository.create_meal(meal)
        _logger.info(
            "Meal logged: user=%s meal=%s items=%s", user.id, created.id, len(snapshots)
        )
        return created

    def quick_add(  # noqa: PLR0913
        self,
        user: UserRecord,
        food_id: UUID,
        amount: float,
        meal_type: str,
        meal_date: datetime | None = None,
    ) -> Meal:
        """Log a single food as its own meal."""
        return self.create_meal(
            user,
            meal_type,
            [MealItemRequest(food_id=food_id, amount=amount)],
            meal_date=meal_date,
        )

    def update_meal(
        self, meal_id: UUID, user: UserRecord, changes: dict[str, object]
    ) -> Meal:
        """Apply changes; replacing items recomputes snapshots and totals."""
        meal = self.get_meal(meal_id, user)
        updates = dict(changes)
        items = updates.pop("items", None)
        if "date" in updates and isinstance(updates["date"], datetime):
            updates["date"] = as_utc(updates["date"])
        if items is not None:
            snapshots = self._build_items(user, items)
            updates["items"] = snapshots
            updates["totals"] = recompute_totals(snapshots)
        updated = replace(meal, **updates, updated_at=datetime.now(tz=UTC))
        return self.repository.update_meal(updated)

    def get_meal(self, meal_id: UUID, user: UserRecord) -> Meal:
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise NotFoundError("Meal", meal_id)
        if meal.user_id != user.id:
            raise AccessDeniedError("Access denied to this meal")
        return meal

    def delete_meal(self, meal_id: UUID, user: UserRecord) -> None:
        meal = self.get_meal(meal_id, user)
        self.repository.delete_meal(meal.id)

    def list_meals(  # noqa: PLR0913
        self,
        user: UserRecord,
        day: date | None = None,
        start_day: date | None = None,
        end_day: date | None = None,
        meal_type: str | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> Page[Meal]:
        """Return the user's meals filtered by day or date range."""
        start: datetime | None = None
        end: datetime | None = None
        if day is not None:
            start, end = day_window(day, self.tz)
        elif start_day is not None and end_day is not None:
            start, end = date_range_window(start_day, end_day, self.tz)
        meals = self.repository.list_meals(user.id, start, end, meal_type)
        return paginate(meals, page, limit)

    def daily_summary(self, user: UserRecord, day: date) -> DailySummary:
        """Return totals and meals grouped by type for a day."""
        start, end = day_window(day, self.tz)
        meals = sorted(
            self.repository.list_meals(user.id, start, end),
            key=lambda meal: meal.date,
        )
        return DailySummary(
            day=day,
            totals=daily_totals(meals),
            meals_by_type=group_by_meal_type(meals),
        )

    def statistics(
        self,
        user: UserRecord,
        start_day: date | None = None,
        end_day: date | None = None,
        days: int | None = None,
    ) -> RangeStatistics:
        """Return range statistics for explicit dates or the last N days."""
        if start_day is not None and end_day is not None:
            start, end = date_range_window(start_day, end_day, self.tz)
        elif days is not None:
            start, end = trailing_window(days, self.tz)
        else:
            raise InvalidRequestError(
                "Provide start_date and end_date or a number of days"
            )
        meals = self.repository.list_meals(user.id, start, end)
        return range_statistics(meals, start, end, self.tz)

    def _build_items(
        self, user: UserRecord, requests: Sequence[MealItemRequest]
    ) -> tuple[MealItem, ...]:
        items = []
        for request in requests:
            food = self.food_repository.get_food(request.food_id)
            if food is None:
                raise InvalidRequestError(f"Food {request.food_id} not found")
            if not food.is_visible_to(user.id, user.is_admin):
                raise AccessDeniedError(f"Access denied to food {food.name}")
            items.append(
                MealItem(
                    food_id=food.id,
                    name=food.name,
                    category=food.category,
                    amount=request.amount,
                    nutrition=nutrition_for_food(food, request.amount),
                )
            )
        return tuple(items)
