"""Supabase repository for the food database."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import (
    format_datetime,
    parse_datetime,
    parse_uuid,
)
from calorie_tracker.domain.foods import Food
from calorie_tracker.domain.nutrition import NutrientProfile, ServingSize
from calorie_tracker.services.foods import FoodRepository


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for foods."""

    client: Client

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id."""
        response = (
            self.client.table("foods")
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def get_by_barcode(self, barcode: str) -> Food | None:
        """Return the food registered with a barcode."""
        response = (
            self.client.table("foods")
            .select("*")
            .eq("barcode", barcode)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def list_foods(
        self,
        search: str | None,
        category: str | None,
        viewer_id: UUID | None,
        include_private: bool,
    ) -> list[Food]:
        """Return foods matching the filters ordered by name."""
        query = self.client.table("foods").select("*")
        groups: list[str] = []
        if search:
            pattern = _quoted(f"%{search}%")
            groups.append(f"or(name.ilike.{pattern},name_ar.ilike.{pattern})")
        if category:
            query = query.eq("category", category)
        if not include_private:
            if viewer_id is None:
                query = query.eq("is_public", True)
            else:
                groups.append(f"or(is_public.eq.true,created_by.eq.{viewer_id})")
        if groups:
            query = query.or_(f"and({','.join(groups)})")
        response = query.order("name", desc=False).execute()
        return [_parse_food(row) for row in response.data or []]

    def create_food(self, food: Food) -> Food:
        """Insert a food row."""
        response = self.client.table("foods").insert(_food_row(food)).execute()
        if not response.data:
            raise RuntimeError("Failed to create food")
        return _parse_food(response.data[0])

    def update_food(self, food: Food) -> Food:
        """Update a food row."""
        row = _food_row(food)
        row.pop("id")
        response = (
            self.client.table("foods").update(row).eq("id", str(food.id)).execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to update food {food.id}")
        return _parse_food(response.data[0])

    def delete_food(self, food_id: UUID) -> None:
        """Delete a food row."""
        self.client.table("foods").delete().eq("id", str(food_id)).execute()

    def delete_foods_by_creator(self, user_id: UUID) -> int:
        """Delete foods created by a user."""
        response = (
            self.client.table("foods")
            .delete()
            .eq("created_by", str(user_id))
            .execute()
        )
        return len(response.data or [])


def _quoted(value: str) -> str:
    """Quote a value for a PostgREST logic tree."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _food_row(food: Food) -> dict[str, object]:
    serving = food.serving_size
    return {
        "id": str(food.id),
        "name": food.name,
        "name_ar": food.name_ar,
        "category": food.category,
        "brand": food.brand,
        "barcode": food.barcode,
        "nutrition": food.nutrition.as_dict() if food.nutrition else None,
        "serving_size": {"amount": serving.amount, "unit": serving.unit}
        if serving
        else None,
        "created_by": str(food.created_by) if food.created_by else None,
        "is_public": food.is_public,
        "is_verified": food.is_verified,
        "per_100g": food.per_100g,
        "tags": list(food.tags),
        "description": food.description,
        "created_at": format_datetime(food.created_at),
        "updated_at": format_datetime(food.updated_at),
    }


def _parse_food(row: dict[str, object]) -> Food:
    nutrition = row.get("nutrition")
    serving = row.get("serving_size")
    return Food(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        name_ar=row.get("name_ar"),
        category=str(row.get("category") or "other"),
        brand=row.get("brand"),
        barcode=row.get("barcode"),
        nutrition=NutrientProfile.from_mapping(nutrition)
        if isinstance(nutrition, dict)
        else None,
        serving_size=ServingSize(
            amount=float(serving.get("amount") or 100),
            unit=str(serving.get("unit") or "g"),
        )
        if isinstance(serving, dict)
        else None,
        created_by=parse_uuid(row.get("created_by")),
        is_public=bool(row.get("is_public", True)),
        is_verified=bool(row.get("is_verified", False)),
        per_100g=bool(row.get("per_100g", True)),
        tags=tuple(row.get("tags") or ()),
        description=row.get("description"),
        created_at=parse_datetime(row.get("created_at")),
        updated_at=parse_datetime(row.get("updated_at")),
    )
