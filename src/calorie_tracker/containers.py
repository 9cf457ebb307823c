"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from calorie_tracker.adapters.supabase_activity_repository import (
    SupabaseActivityRepository,
)
from calorie_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from calorie_tracker.adapters.supabase_marker_repository import (
    SupabaseMarkerRepository,
)
from calorie_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from calorie_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from calorie_tracker.config import Settings
from calorie_tracker.services.activities import ActivityService
from calorie_tracker.services.admin import AdminService
from calorie_tracker.services.auth import TokenService
from calorie_tracker.services.bootstrap import BootstrapService
from calorie_tracker.services.foods import FoodService
from calorie_tracker.services.meals import MealService
from calorie_tracker.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    food_service: FoodService
    meal_service: MealService
    activity_service: ActivityService
    admin_service: AdminService
    bootstrap_service: BootstrapService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    food_repository = SupabaseFoodRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    activity_repository = SupabaseActivityRepository(supabase_client)
    marker_repository = SupabaseMarkerRepository(supabase_client)
    tokens = TokenService(
        secret=resolved_settings.jwt_secret,
        expires_days=resolved_settings.jwt_expires_days,
    )
    return AppContainer(
        settings=resolved_settings,
        user_service=UserService(user_repository, tokens),
        food_service=FoodService(food_repository),
        meal_service=MealService(
            repository=meal_repository,
            food_repository=food_repository,
            timezone=resolved_settings.day_boundary_timezone,
        ),
        activity_service=ActivityService(
            repository=activity_repository,
            timezone=resolved_settings.day_boundary_timezone,
        ),
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
            admin_email=resolved_settings.admin_email,
            admin_password=resolved_settings.admin_password,
            admin_name=resolved_settings.admin_name,
            seed_foods=resolved_settings.seed_initial_foods,
        ),
    )
