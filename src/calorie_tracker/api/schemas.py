"""Pydantic request and response models for the HTTP API."""

import datetime as dt
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from calorie_tracker.domain.foods import Food
from calorie_tracker.domain.nutrition import NutrientProfile, ServingSize
from calorie_tracker.services.nutrition import nutrition_per_serving

Gender = Literal["male", "female", "other"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
Goal = Literal["lose_weight", "maintain_weight", "gain_weight"]
Role = Literal["user", "admin"]
Category = Literal[
    "fruits",
    "vegetables",
    "grains",
    "protein",
    "dairy",
    "nuts_seeds",
    "oils_fats",
    "beverages",
    "sweets",
    "snacks",
    "prepared_foods",
    "other",
]
ServingUnit = Literal["g", "ml", "piece", "cup", "tbsp", "tsp"]
MealType = Literal["breakfast", "lunch", "dinner", "snack"]
ActivityType = Literal["cardio", "strength", "sports", "daily", "other"]
Intensity = Literal["low", "moderate", "high", "very_high"]

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class ApiModel(BaseModel):
    """Base model that reads attributes from domain dataclasses."""

    model_config = ConfigDict(from_attributes=True)


class MessageOut(ApiModel):
    message: str


# Users and auth


class ProfileIn(BaseModel):
    """Partial biometric profile with optional account name and avatar."""

    name: str | None = Field(default=None, min_length=2, max_length=50)
    avatar: str | None = None
    age: int | None = Field(default=None, ge=1, le=120)
    gender: Gender | None = None
    height: float | None = Field(default=None, ge=50, le=300)
    weight: float | None = Field(default=None, ge=20, le=500)
    activity_level: ActivityLevel | None = None
    goal: Goal | None = None


class RegisterRequest(BaseModel):
    name: str = Field(min_length=2, max_length=50)
    email: str = Field(pattern=_EMAIL_PATTERN)
    password: str = Field(min_length=6)
    age: int = Field(ge=1, le=120)
    gender: Gender
    height: float = Field(ge=50, le=300)
    weight: float = Field(ge=20, le=500)
    activity_level: ActivityLevel = "moderate"
    goal: Goal = "maintain_weight"


class LoginRequest(BaseModel):
    email: str = Field(pattern=_EMAIL_PATTERN)
    password: str = Field(min_length=1)


class GoalsIn(BaseModel):
    calories: int | None = Field(default=None, ge=800, le=5000)
    protein: int | None = Field(default=None, ge=20)
    carbs: int | None = Field(default=None, ge=50)
    fat: int | None = Field(default=None, ge=20)


class PreferencesIn(BaseModel):
    language: Literal["en", "ar"] | None = None
    units: Literal["metric", "imperial"] | None = None


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)


class ProfileOut(ApiModel):
    age: int | None
    gender: str | None
    height: float | None
    weight: float | None
    activity_level: str
    goal: str


class GoalsOut(ApiModel):
    calories: int
    protein: int
    carbs: int
    fat: int


class PreferencesOut(ApiModel):
    language: str
    units: str


class UserOut(ApiModel):
    id: UUID
    name: str
    email: str
    role: str
    avatar: str | None
    profile: ProfileOut
    daily_goals: GoalsOut
    preferences: PreferencesOut
    created_at: dt.datetime | None
    last_login_at: dt.datetime | None


class AuthResponse(ApiModel):
    token: str
    user: UserOut


class TokenCheckOut(ApiModel):
    valid: bool
    user: UserOut


class UserStatsOut(ApiModel):
    bmr: int | None
    tdee: int | None
    daily_calories: int
    profile: ProfileOut
    daily_goals: GoalsOut
    joined: dt.datetime | None


class PaginationOut(ApiModel):
    page: int
    limit: int
    total: int
    pages: int


# Foods


class NutritionIn(BaseModel):
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    fiber: float = Field(default=0, ge=0)
    sugar: float = Field(default=0, ge=0)
    sodium: float = Field(default=0, ge=0)

    def to_domain(self) -> NutrientProfile:
        return NutrientProfile(**self.model_dump())


class ServingSizeIn(BaseModel):
    amount: float = Field(default=100, gt=0)
    unit: ServingUnit = "g"

    def to_domain(self) -> ServingSize:
        return ServingSize(amount=self.amount, unit=self.unit)


class FoodIn(BaseModel):
    """Food payload accepting nested or flat nutrition fields."""

    name: str = Field(min_length=1, max_length=100)
    name_ar: str | None = None
    category: Category
    brand: str | None = None
    barcode: str | None = None
    nutrition: NutritionIn | None = None
    calories: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fat: float | None = Field(default=None, ge=0)
    serving_size: ServingSizeIn = Field(default_factory=ServingSizeIn)
    is_public: bool = True
    per_100g: bool = True
    tags: list[str] = Field(default_factory=list)
    description: str | None = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def _merge_flat_nutrition(self) -> "FoodIn":
        if self.nutrition is None:
            flat = (self.calories, self.protein, self.carbs, self.fat)
            if any(value is None for value in flat):
                raise ValueError("Nutrition information is required")
            self.nutrition = NutritionIn(
                calories=self.calories,
                protein=self.protein,
                carbs=self.carbs,
                fat=self.fat,
            )
        return self

    def to_fields(self) -> dict[str, object]:
        return {
            "name": self.name.strip(),
            "name_ar": self.name_ar,
            "category": self.category,
            "brand": self.brand,
            "barcode": self.barcode or None,
            "nutrition": self.nutrition.to_domain() if self.nutrition else None,
            "serving_size": self.serving_size.to_domain(),
            "is_public": self.is_public,
            "per_100g": self.per_100g,
            "tags": tuple(self.tags),
            "description": self.description,
        }


class FoodUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    name_ar: str | None = None
    category: Category | None = None
    brand: str | None = None
    barcode: str | None = None
    nutrition: NutritionIn | None = None
    serving_size: ServingSizeIn | None = None
    is_public: bool | None = None
    per_100g: bool | None = None
    tags: list[str] | None = None
    description: str | None = Field(default=None, max_length=500)

    def to_changes(self) -> dict[str, object]:
        changes = self.model_dump(
            exclude_none=True, exclude={"nutrition", "serving_size", "tags"}
        )
        if self.nutrition is not None:
            changes["nutrition"] = self.nutrition.to_domain()
        if self.serving_size is not None:
            changes["serving_size"] = self.serving_size.to_domain()
        if self.tags is not None:
            changes["tags"] = tuple(self.tags)
        return changes


class NutritionOut(ApiModel):
    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float
    sugar: float
    sodium: float


class ServingSizeOut(ApiModel):
    amount: float
    unit: str


class FoodOut(ApiModel):
    id: UUID
    name: str
    name_ar: str | None
    category: str
    brand: str | None
    barcode: str | None
    nutrition: NutritionOut | None
    serving_size: ServingSizeOut | None
    nutrition_per_serving: NutritionOut | None = None
    created_by: UUID | None
    is_public: bool
    is_verified: bool
    per_100g: bool
    tags: list[str]
    description: str | None
    created_at: dt.datetime | None
    updated_at: dt.datetime | None

    @classmethod
    def from_food(cls, food: Food) -> "FoodOut":
        per_serving = nutrition_per_serving(food)
        return cls.model_validate(food).model_copy(
            update={
                "nutrition_per_serving": NutritionOut.model_validate(per_serving)
                if per_serving
                else None
            }
        )


class FoodListOut(ApiModel):
    foods: list[FoodOut]
    pagination: PaginationOut


class CategoryOut(ApiModel):
    value: str
    label: str
    label_ar: str


# Meals


class MealItemIn(BaseModel):
    food_id: UUID
    amount: float = Field(ge=0.1, le=5000)


class MealCreate(BaseModel):
    date: dt.datetime | None = None
    meal_type: MealType
    items: list[MealItemIn] = Field(min_length=1)
    notes: str | None = Field(default=None, max_length=500)


class MealUpdate(BaseModel):
    date: dt.datetime | None = None
    meal_type: MealType | None = None
    items: list[MealItemIn] | None = None
    notes: str | None = Field(default=None, max_length=500)


class QuickAddRequest(BaseModel):
    food_id: UUID
    amount: float = Field(ge=0.1, le=5000)
    meal_type: MealType
    date: dt.datetime | None = None


class MealItemOut(ApiModel):
    food_id: UUID
    name: str
    category: str
    amount: float
    nutrition: NutritionOut


class MealOut(ApiModel):
    id: UUID
    user_id: UUID
    date: dt.datetime
    meal_type: str
    items: list[MealItemOut]
    totals: NutritionOut
    notes: str | None
    created_at: dt.datetime | None
    updated_at: dt.datetime | None


class MealListOut(ApiModel):
    meals: list[MealOut]
    pagination: PaginationOut


class DailyTotalsOut(ApiModel):
    totals: NutritionOut
    meal_count: int


class DailySummaryOut(ApiModel):
    date: dt.date
    daily_totals: DailyTotalsOut
    meals_by_type: dict[str, list[MealOut]]
    total_meals: int


class DayBucketOut(ApiModel):
    day: str
    calories: float
    protein: float
    carbs: float
    fat: float
    meal_count: int


class RangeStatisticsOut(ApiModel):
    start: dt.date
    end: dt.date
    total_meals: int
    days_with_data: int
    avg_calories_per_day: int
    avg_protein_per_day: float
    avg_carbs_per_day: float
    avg_fat_per_day: float
    most_logged_foods: dict[str, int]
    category_breakdown: dict[str, float]
    daily_data: list[DayBucketOut]


# Activities


class ActivityCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    name_ar: str | None = None
    type: ActivityType
    duration: int | None = Field(default=None, ge=1, le=1440)
    intensity: Intensity | None = None
    met_value: float | None = Field(default=None, ge=1, le=25)
    calories_burned: int | None = Field(default=None, ge=0)
    date: dt.datetime | None = None
    notes: str | None = Field(default=None, max_length=500)


class ActivityUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    name_ar: str | None = None
    type: ActivityType | None = None
    duration: int | None = Field(default=None, ge=1, le=1440)
    intensity: Intensity | None = None
    met_value: float | None = Field(default=None, ge=1, le=25)
    calories_burned: int | None = Field(default=None, ge=0)
    date: dt.datetime | None = None
    notes: str | None = Field(default=None, max_length=500)


class ActivityOut(ApiModel):
    id: UUID
    user_id: UUID
    name: str
    name_ar: str | None
    type: str
    duration: int
    intensity: str
    met_value: float
    calories_burned: int
    date: dt.datetime
    notes: str | None
    created_at: dt.datetime | None


class TypeBreakdownOut(ApiModel):
    calories: int
    duration: int
    count: int


class ActivityTotalsOut(ApiModel):
    total_calories_burned: int
    total_duration: int
    activity_count: int
    type_breakdown: dict[str, TypeBreakdownOut]


class ActivityListOut(ApiModel):
    activities: list[ActivityOut]
    pagination: PaginationOut
    daily_totals: ActivityTotalsOut | None = None


class ActivityDayOut(ApiModel):
    day: str
    calories: int
    duration: int
    count: int


class ActivitySummaryOut(ApiModel):
    start: dt.date
    end: dt.date
    totals: ActivityTotalsOut
    avg_calories_per_activity: int
    avg_duration_per_activity: int
    daily_breakdown: list[ActivityDayOut]


class PredefinedActivityOut(ApiModel):
    name: str
    name_ar: str
    type: str
    met_value: float
    intensity: str


# Admin


class AdminUserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=2, max_length=50)
    email: str | None = Field(default=None, pattern=_EMAIL_PATTERN)
    role: Role | None = None
    profile: ProfileIn | None = None

    def to_changes(self) -> dict[str, object]:
        changes = self.model_dump(exclude_none=True, exclude={"profile"})
        if self.profile is not None:
            changes["profile"] = self.profile.model_dump(exclude_none=True)
        return changes


class UserRoleStatsOut(ApiModel):
    total: int
    roles: dict[str, int]
    recent_users: int


class AdminUserListOut(ApiModel):
    users: list[UserOut]
    pagination: PaginationOut
    stats: UserRoleStatsOut


class UserActivityOut(ApiModel):
    total_meals: int
    total_foods: int
    recent_meals: int
    last_active: dt.datetime | None


class AdminUserDetailOut(ApiModel):
    user: UserOut
    activity: UserActivityOut
    recent_meals: list[MealOut]


class DeletionOut(ApiModel):
    message: str
    users: int
    foods: int
    meals: int
    activities: int
    kept_admins: list[str]


class ActiveUserOut(ApiModel):
    id: UUID
    name: str
    email: str
    meal_count: int


class DashboardOut(ApiModel):
    totals: dict[str, int]
    recent: dict[str, int]
    roles: dict[str, int]
    active_users: list[ActiveUserOut]
