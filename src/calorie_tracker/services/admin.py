"""Admin service for user management and reporting."""

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from uuid import UUID

from calorie_tracker.domain.errors import (
    ConflictError,
    InvalidRequestError,
    NotFoundError,
)
from calorie_tracker.domain.meals import Meal
from calorie_tracker.domain.models import UserRecord
from calorie_tracker.domain.pagination import Page, paginate
from calorie_tracker.services.activities import ActivityRepository
from calorie_tracker.services.foods import FoodRepository
from calorie_tracker.services.meals import MealRepository
from calorie_tracker.services.users import UserRepository

_logger = logging.getLogger(__name__)

SORT_FIELDS = ("created_at", "name", "email", "role", "last_login_at")
RECENT_USERS_DAYS = 30
RECENT_ACTIVITY_DAYS = 7
ACTIVE_USERS_LIMIT = 5


@dataclass(frozen=True)
class UserListing:
    """A page of users with role statistics."""

    page: Page[UserRecord]
    roles: dict[str, int]
    recent_users: int


@dataclass(frozen=True)
class UserDetail:
    """A user with meal and food activity figures."""

    user: UserRecord
    total_meals: int
    total_foods: int
    recent_meals_count: int
    last_active: datetime | None
    recent_meals: list[Meal] = field(default_factory=list)


@dataclass(frozen=True)
class DeletionCounts:
    """Rows removed by a delete or purge."""

    users: int
    foods: int
    meals: int
    activities: int
    kept_admins: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ActiveUser:
    """A user ranked by number of logged meals."""

    id: UUID
    name: str
    email: str
    meal_count: int


@dataclass(frozen=True)
class DashboardStats:
    """Totals and recent counts for the admin dashboard."""

    totals: dict[str, int]
    recent: dict[str, int]
    roles: dict[str, int]
    active_users: list[ActiveUser]


@dataclass
class AdminService:
    """Service for admin dashboards and user management."""

    users: UserRepository
    foods: FoodRepository
    meals: MealRepository
    activities: ActivityRepository

    def list_users(  # noqa: PLR0913
        self,
        search: str | None = None,
        role: str | None = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        page: int = 1,
        limit: int = 20,
    ) -> UserListing:
        """Return a filtered, sorted page of users with role counts."""
        everyone = self.users.list_users()
        matches = [
            user
            for user in everyone
            if _matches_search(user, search) and (not role or user.role == role)
        ]
        key = sort_by if sort_by in SORT_FIELDS else "created_at"
        present = [user for user in matches if getattr(user, key) is not None]
        missing = [user for user in matches if getattr(user, key) is None]
        present.sort(key=lambda user: getattr(user, key), reverse=sort_order == "desc")
        since = datetime.now(tz=UTC) - timedelta(days=RECENT_USERS_DAYS)
        return UserListing(
            page=paginate(present + missing, page, limit),
            roles=dict(Counter(user.role for user in everyone)),
            recent_users=sum(
                1 for user in everyone if user.created_at and user.created_at >= since
            ),
        )

    def get_user_detail(self, user_id: UUID) -> UserDetail:
        """Return a user with meal counts and recent meals."""
        user = self._get_user(user_id)
        meals = sorted(
            self.meals.list_meals(user_id),
            key=lambda meal: meal.created_at or meal.date,
            reverse=True,
        )
        since = datetime.now(tz=UTC) - timedelta(days=RECENT_USERS_DAYS)
        foods = [
            food
            for food in self.foods.list_foods(None, None, None, include_private=True)
            if food.created_by == user_id
        ]
        return UserDetail(
            user=user,
            total_meals=len(meals),
            total_foods=len(foods),
            recent_meals_count=sum(
                1 for meal in meals if (meal.created_at or meal.date) >= since
            ),
            last_active=(meals[0].created_at or meals[0].date)
            if meals
            else user.created_at,
            recent_meals=meals[:5],
        )

    def update_user(
        self, user_id: UUID, acting_admin: UserRecord, changes: dict[str, object]
    ) -> UserRecord:
        """Update account fields, role or profile of a user."""
        user = self._get_user(user_id)
        updates = dict(changes)
        if user_id == acting_admin.id and updates.get("role") == "user":
            raise InvalidRequestError("Cannot demote yourself from admin")
        email = updates.get("email")
        if isinstance(email, str):
            updates["email"] = email.strip().lower()
            if updates["email"] != user.email and self.users.get_by_email(
                updates["email"]
            ):
                raise ConflictError("Email already in use")
        profile_changes = updates.pop("profile", None)
        if isinstance(profile_changes, dict):
            updates["profile"] = replace(user.profile, **profile_changes)
        updated = self.users.update_user(replace(user, **updates))
        _logger.info("Admin %s updated user %s", acting_admin.id, user_id)
        return updated

    def delete_user(self, user_id: UUID, acting_admin: UserRecord) -> DeletionCounts:
        """Delete a user with their foods, meals and activities."""
        if user_id == acting_admin.id:
            raise InvalidRequestError("Cannot delete yourself")
        user = self._get_user(user_id)
        counts = self._delete_user_data(user.id)
        _logger.info("Admin %s deleted user %s", acting_admin.id, user_id)
        return counts

    def purge_non_admins(self) -> DeletionCounts:
        """Delete every non-admin user and their data."""
        everyone = self.users.list_users()
        admins = [user for user in everyone if user.is_admin]
        if not admins:
            raise InvalidRequestError("No admin found to keep")
        totals = Counter[str]()
        for user in everyone:
            if user.is_admin:
                continue
            counts = self._delete_user_data(user.id)
            totals.update(
                users=counts.users,
                foods=counts.foods,
                meals=counts.meals,
                activities=counts.activities,
            )
        _logger.warning("Purged %s non-admin users", totals["users"])
        return DeletionCounts(
            users=totals["users"],
            foods=totals["foods"],
            meals=totals["meals"],
            activities=totals["activities"],
            kept_admins=[admin.email for admin in admins],
        )

    def dashboard_stats(self) -> DashboardStats:
        """Return global counts, recent activity and the most active users."""
        users = self.users.list_users()
        foods = self.foods.list_foods(None, None, None, include_private=True)
        meals = self.meals.list_meals(None)
        since = datetime.now(tz=UTC) - timedelta(days=RECENT_ACTIVITY_DAYS)
        meal_counts = Counter(meal.user_id for meal in meals)
        by_id = {user.id: user for user in users}
        active_users = [
            ActiveUser(
                id=user_id,
                name=by_id[user_id].name,
                email=by_id[user_id].email,
                meal_count=count,
            )
            for user_id, count in meal_counts.most_common()
            if user_id in by_id
        ][:ACTIVE_USERS_LIMIT]
        return DashboardStats(
            totals={"users": len(users), "foods": len(foods), "meals": len(meals)},
            recent={
                "users": _count_since((user.created_at for user in users), since),
                "meals": _count_since(
                    (meal.created_at or meal.date for meal in meals), since
                ),
                "foods": _count_since((food.created_at for food in foods), since),
            },
            roles=dict(Counter(user.role for user in users)),
            active_users=active_users,
        )

    def _get_user(self, user_id: UUID) -> UserRecord:
        user = self.users.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def _delete_user_data(self, user_id: UUID) -> DeletionCounts:
        foods = self.foods.delete_foods_by_creator(user_id)
        meals = self.meals.delete_meals_by_user(user_id)
        activities = self.activities.delete_activities_by_user(user_id)
        self.users.delete_user(user_id)
        return DeletionCounts(users=1, foods=foods, meals=meals, activities=activities)


def _matches_search(user: UserRecord, search: str | None) -> bool:
    if not search:
        return True
    needle = search.lower()
    return needle in user.name.lower() or needle in user.email.lower()


def _count_since(moments: Iterable[datetime | None], since: datetime) -> int:
    return sum(1 for moment in moments if moment is not None and moment >= since)
