"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.activities import Activity
from calorie_tracker.domain.foods import Food
from calorie_tracker.domain.meals import Meal
from calorie_tracker.domain.models import UserProfile, UserRecord
from calorie_tracker.domain.nutrition import NutrientProfile, ServingSize
from calorie_tracker.services.activities import ActivityRepository, ActivityService
from calorie_tracker.services.admin import AdminService
from calorie_tracker.services.auth import TokenService, hash_password
from calorie_tracker.services.bootstrap import BootstrapService, MarkerRepository
from calorie_tracker.services.foods import FoodRepository, FoodService
from calorie_tracker.services.meals import MealRepository, MealService
from calorie_tracker.services.users import UserRepository, UserService

TEST_PASSWORD = "secret123"
# Fast hash for fixtures; production hashing uses the default iteration count.
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD, iterations=1_000)


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_email(self, email: str) -> UserRecord | None:
        for user in self.users.values():
            if user.email == email.lower():
                return user
        return None

    def create_user(self, user: UserRecord) -> UserRecord:
        self.users[user.id] = user
        return user

    def update_user(self, user: UserRecord) -> UserRecord:
        self.users[user.id] = user
        return user

    def delete_user(self, user_id: UUID) -> None:
        self.users.pop(user_id, None)

    def list_users(self) -> list[UserRecord]:
        return sorted(
            self.users.values(),
            key=lambda user: user.created_at or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food repository for tests."""

    foods: dict[UUID, Food] = field(default_factory=dict)

    def get_food(self, food_id: UUID) -> Food | None:
        return self.foods.get(food_id)

    def get_by_barcode(self, barcode: str) -> Food | None:
        for food in self.foods.values():
            if food.barcode == barcode:
                return food
        return None

    def list_foods(
        self,
        search: str | None,
        category: str | None,
        viewer_id: UUID | None,
        include_private: bool,
    ) -> list[Food]:
        results = [
            food
            for food in self.foods.values()
            if (not search or _matches_name(food, search))
            and (not category or food.category == category)
            and (include_private or food.is_visible_to(viewer_id))
        ]
        return sorted(results, key=lambda food: food.name)

    def create_food(self, food: Food) -> Food:
        self.foods[food.id] = food
        return food

    def update_food(self, food: Food) -> Food:
        self.foods[food.id] = food
        return food

    def delete_food(self, food_id: UUID) -> None:
        self.foods.pop(food_id, None)

    def delete_foods_by_creator(self, user_id: UUID) -> int:
        owned = [food.id for food in self.foods.values() if food.created_by == user_id]
        for food_id in owned:
            del self.foods[food_id]
        return len(owned)


def _matches_name(food: Food, search: str) -> bool:
    needle = search.lower()
    return needle in food.name.lower() or needle in (food.name_ar or "").lower()


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, Meal] = field(default_factory=dict)

    def get_meal(self, meal_id: UUID) -> Meal | None:
        return self.meals.get(meal_id)

    def list_meals(
        self,
        user_id: UUID | None,
        start: datetime | None = None,
        end: datetime | None = None,
        meal_type: str | None = None,
    ) -> list[Meal]:
        results = [
            meal
            for meal in self.meals.values()
            if (user_id is None or meal.user_id == user_id)
            and (start is None or meal.date >= start)
            and (end is None or meal.date < end)
            and (not meal_type or meal.meal_type == meal_type)
        ]
        return sorted(results, key=lambda meal: meal.date, reverse=True)

    def create_meal(self, meal: Meal) -> Meal:
        self.meals[meal.id] = meal
        return meal

    def update_meal(self, meal: Meal) -> Meal:
        self.meals[meal.id] = meal
        return meal

    def delete_meal(self, meal_id: UUID) -> None:
        self.meals.pop(meal_id, None)

    def delete_meals_by_user(self, user_id: UUID) -> int:
        owned = [meal.id for meal in self.meals.values() if meal.user_id == user_id]
        for meal_id in owned:
            del self.meals[meal_id]
        return len(owned)


@dataclass
class InMemoryActivityRepository(ActivityRepository):
    """In-memory activity repository for tests."""

    activities: dict[UUID, Activity] = field(default_factory=dict)

    def get_activity(self, activity_id: UUID) -> Activity | None:
        return self.activities.get(activity_id)

    def list_activities(
        self,
        user_id: UUID | None,
        start: datetime | None = None,
        end: datetime | None = None,
        activity_type: str | None = None,
    ) -> list[Activity]:
        results = [
            activity
            for activity in self.activities.values()
            if (user_id is None or activity.user_id == user_id)
            and (start is None or activity.date >= start)
            and (end is None or activity.date < end)
            and (not activity_type or activity.type == activity_type)
        ]
        return sorted(results, key=lambda activity: activity.date, reverse=True)

    def create_activity(self, activity: Activity) -> Activity:
        self.activities[activity.id] = activity
        return activity

    def update_activity(self, activity: Activity) -> Activity:
        self.activities[activity.id] = activity
        return activity

    def delete_activity(self, activity_id: UUID) -> None:
        self.activities.pop(activity_id, None)

    def delete_activities_by_user(self, user_id: UUID) -> int:
        owned = [
            activity.id
            for activity in self.activities.values()
            if activity.user_id == user_id
        ]
        for activity_id in owned:
            del self.activities[activity_id]
        return len(owned)


@dataclass
class InMemoryMarkerRepository(MarkerRepository):
    """In-memory marker repository for tests."""

    markers: set[str] = field(default_factory=set)

    def has_marker(self, key: str) -> bool:
        return key in self.markers

    def create_marker(self, key: str) -> None:
        self.markers.add(key)


def make_user(
    role: str = "user",
    profile: UserProfile | None = None,
    email: str | None = None,
    created_at: datetime | None = None,
) -> UserRecord:
    user_id = uuid4()
    return UserRecord(
        id=user_id,
        name=f"User {str(user_id)[:8]}",
        email=email or f"{user_id.hex[:12]}@example.com",
        password_hash=TEST_PASSWORD_HASH,
        role=role,
        profile=profile
        or UserProfile(
            age=30, gender="male", height=175, weight=70, activity_level="moderate"
        ),
        created_at=created_at or datetime.now(tz=UTC),
    )


def make_food(  # noqa: PLR0913
    name: str = "Apple",
    category: str = "fruits",
    nutrition: NutrientProfile | None = None,
    serving_size: ServingSize | None = None,
    created_by: UUID | None = None,
    is_public: bool = True,
    per_100g: bool = True,
    barcode: str | None = None,
) -> Food:
    return Food(
        id=uuid4(),
        name=name,
        category=category,
        nutrition=nutrition
        or NutrientProfile(calories=52, protein=0.3, carbs=14, fat=0.2),
        serving_size=serving_size or ServingSize(amount=100, unit="g"),
        created_by=created_by,
        is_public=is_public,
        per_100g=per_100g,
        barcode=barcode,
        created_at=datetime.now(tz=UTC),
        updated_at=datetime.now(tz=UTC),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        jwt_secret="test-jwt-secret-with-enough-length",
        admin_email="admin@example.com",
        admin_password="admin-password",
    )


@pytest.fixture
def tokens(settings: Settings) -> TokenService:
    return TokenService(settings.jwt_secret, settings.jwt_expires_days)


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def activity_repository() -> InMemoryActivityRepository:
    return InMemoryActivityRepository()


@pytest.fixture
def marker_repository() -> InMemoryMarkerRepository:
    return InMemoryMarkerRepository()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    tokens: TokenService,
    user_repository: InMemoryUserRepository,
    food_repository: InMemoryFoodRepository,
    meal_repository: InMemoryMealRepository,
    activity_repository: InMemoryActivityRepository,
    marker_repository: InMemoryMarkerRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        user_service=UserService(user_repository, tokens),
        food_service=FoodService(food_repository),
        meal_service=MealService(
            repository=meal_repository, food_repository=food_repository
        ),
        activity_service=ActivityService(repository=activity_repository),
        admin_service=AdminService(
            users=user_repository,
            foods=food_repository,
            meals=meal_repository,
            activities=activity_repository,
        ),
        bootstrap_service=BootstrapService(
            markers=marker_repository,
            users=user_repository,
            foods=food_repository,
            admin_email=settings.admin_email,
            admin_password=settings.admin_password,
        ),
    )


def auth_headers(container: AppContainer, user: UserRecord) -> dict[str, str]:
    """Store the user and return a bearer header for it."""
    container.user_service.repository.create_user(user)
    token = container.user_service.tokens.issue(user.id)
    return {"Authorization": f"Bearer {token}"}


def with_weight(user: UserRecord, weight: float | None) -> UserRecord:
    return replace(user, profile=replace(user.profile, weight=weight))
