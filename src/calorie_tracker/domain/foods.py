"""Domain models for the food database."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from calorie_tracker.domain.nutrition import NutrientProfile, ServingSize


@dataclass(frozen=True)
class FoodCategory:
    """A food category with display labels."""

    value: str
    label: str
    label_ar: str


FOOD_CATEGORIES = (
    FoodCategory("fruits", "Fruits", "فواكه"),
    FoodCategory("vegetables", "Vegetables", "خضروات"),
    FoodCategory("grains", "Grains", "حبوب"),
    FoodCategory("protein", "Protein", "بروتين"),
    FoodCategory("dairy", "Dairy", "ألبان"),
    FoodCategory("nuts_seeds", "Nuts & Seeds", "مكسرات وبذور"),
    FoodCategory("oils_fats", "Oils & Fats", "زيوت ودهون"),
    FoodCategory("beverages", "Beverages", "مشروبات"),
    FoodCategory("sweets", "Sweets", "حلويات"),
    FoodCategory("snacks", "Snacks", "وجبات خفيفة"),
    FoodCategory("prepared_foods", "Prepared Foods", "أطعمة جاهزة"),
    FoodCategory("other", "Other", "أخرى"),
)
CATEGORY_VALUES = tuple(category.value for category in FOOD_CATEGORIES)


@dataclass(frozen=True)
class Food:
    """Represents a food record with its nutrient profile."""

    id: UUID
    name: str
    category: str
    nutrition: NutrientProfile | None
    serving_size: ServingSize | None
    created_by: UUID | None
    name_ar: str | None = None
    brand: str | None = None
    barcode: str | None = None
    is_public: bool = True
    is_verified: bool = False
    per_100g: bool = True
    tags: tuple[str, ...] = field(default_factory=tuple)
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_visible_to(self, user_id: UUID | None, is_admin: bool = False) -> bool:
        """Return true when the food is public, owned by the user, or admin."""
        return is_admin or self.is_public or (
            user_id is not None and self.created_by == user_id
        )

    def can_edit(self, user_id: UUID, is_admin: bool = False) -> bool:
        return is_admin or self.created_by == user_id
