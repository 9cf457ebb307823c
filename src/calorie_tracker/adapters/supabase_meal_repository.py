"""Supabase repository for meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import (
    format_datetime,
    parse_datetime,
    totals_columns,
    totals_from_row,
)
from calorie_tracker.domain.meals import Meal, MealItem
from calorie_tracker.domain.nutrition import NutrientProfile
from calorie_tracker.services.meals import MealRepository


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals with items stored as JSON."""

    client: Client

    def get_meal(self, meal_id: UUID) -> Meal | None:
        """Return a meal by id."""
        response = (
            self.client.table("meals")
            .select("*")
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_meal(response.data[0])

    def list_meals(
        self,
        user_id: UUID | None,
        start: datetime | None = None,
        end: datetime | None = None,
        meal_type: str | None = None,
    ) -> list[Meal]:
        """Return meals within a time range, newest first."""
        query = self.client.table("meals").select("*")
        if user_id is not None:
            query = query.eq("user_id", str(user_id))
        if start is not None:
            query = query.gte("date", start.isoformat())
        if end is not None:
            query = query.lt("date", end.isoformat())
        if meal_type:
            query = query.eq("meal_type", meal_type)
        response = query.order("date", desc=True).execute()
        return [_parse_meal(row) for row in response.data or []]

    def create_meal(self, meal: Meal) -> Meal:
        """Insert a meal row."""
        response = self.client.table("meals").insert(_meal_row(meal)).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_meal(response.data[0])

    def update_meal(self, meal: Meal) -> Meal:
        """Update a meal row, items and totals together."""
        row = _meal_row(meal)
        row.pop("id")
        response = (
            self.client.table("meals").update(row).eq("id", str(meal.id)).execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to update meal {meal.id}")
        return _parse_meal(response.data[0])

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal row."""
        self.client.table("meals").delete().eq("id", str(meal_id)).execute()

    def delete_meals_by_user(self, user_id: UUID) -> int:
        """Delete all meals of a user."""
        response = (
            self.client.table("meals").delete().eq("user_id", str(user_id)).execute()
        )
        return len(response.data or [])


def _meal_row(meal: Meal) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "user_id": str(meal.user_id),
        "date": meal.date.isoformat(),
        "meal_type": meal.meal_type,
        "notes": meal.notes,
        "items": [
            {
                "food_id": str(item.food_id),
                "name": item.name,
                "category": item.category,
                "amount": item.amount,
                "nutrition": item.nutrition.as_dict(),
            }
            for item in meal.items
        ],
        **totals_columns(meal.totals),
        "created_at": format_datetime(meal.created_at),
        "updated_at": format_datetime(meal.updated_at),
    }


def _parse_item(raw: dict[str, object]) -> MealItem:
    nutrition = raw.get("nutrition")
    return MealItem(
        food_id=UUID(str(raw["food_id"])),
        name=str(raw.get("name", "")),
        category=str(raw.get("category") or "other"),
        amount=float(raw.get("amount", 0.0)),
        nutrition=NutrientProfile.from_mapping(nutrition)
        if isinstance(nutrition, dict)
        else NutrientProfile.zero(),
    )


def _parse_meal(row: dict[str, object]) -> Meal:
    return Meal(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        date=datetime.fromisoformat(str(row["date"])),
        meal_type=str(row.get("meal_type", "snack")),
        items=tuple(_parse_item(item) for item in row.get("items") or []),
        totals=totals_from_row(row),
        notes=row.get("notes"),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
