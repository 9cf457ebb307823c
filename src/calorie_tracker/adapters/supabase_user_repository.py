"""Supabase-backed user repository."""

from dataclasses import asdict, dataclass, fields
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_rows import (
    format_datetime,
    parse_datetime,
)
from calorie_tracker.domain.models import (
    DailyGoals,
    Preferences,
    UserProfile,
    UserRecord,
)
from calorie_tracker.services.users import UserRepository

_USER_COLUMNS = (
    "id, name, email, password_hash, role, avatar, profile, daily_goals, "
    "preferences, created_at, last_login_at"
)
_NULLABLE_PROFILE_FIELDS = {"age", "gender", "height", "weight"}


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an email, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("email", email.lower())
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def create_user(self, user: UserRecord) -> UserRecord:
        """Create a new user row and return it."""
        response = self.client.table("users").insert(_user_row(user)).execute()
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def update_user(self, user: UserRecord) -> UserRecord:
        """Write all user columns and return the stored row."""
        row = _user_row(user)
        row.pop("id")
        response = (
            self.client.table("users").update(row).eq("id", str(user.id)).execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to update user {user.id}")
        return _parse_user(response.data[0])

    def delete_user(self, user_id: UUID) -> None:
        """Delete a user row."""
        self.client.table("users").delete().eq("id", str(user_id)).execute()

    def list_users(self) -> list[UserRecord]:
        """Return all users, newest first."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_user(row) for row in response.data or []]


def _user_row(user: UserRecord) -> dict[str, object]:
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "password_hash": user.password_hash,
        "role": user.role,
        "avatar": user.avatar,
        "profile": asdict(user.profile),
        "daily_goals": asdict(user.daily_goals),
        "preferences": asdict(user.preferences),
        "created_at": format_datetime(user.created_at),
        "last_login_at": format_datetime(user.last_login_at),
    }


def _parse_user(row: dict[str, object]) -> UserRecord:
    profile = row.get("profile") or {}
    goals = row.get("daily_goals") or {}
    preferences = row.get("preferences") or {}
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        email=str(row.get("email", "")),
        password_hash=str(row.get("password_hash", "")),
        role=str(row.get("role") or "user"),
        avatar=row.get("avatar"),
        profile=UserProfile(**_known(profile, UserProfile)),
        daily_goals=DailyGoals(**_known(goals, DailyGoals)),
        preferences=Preferences(**_known(preferences, Preferences)),
        created_at=parse_datetime(row.get("created_at")),
        last_login_at=parse_datetime(row.get("last_login_at")),
    )


def _known(values: dict[str, object], model: type) -> dict[str, object]:
    """Keep keys the dataclass defines, dropping nulls for defaulted fields."""
    names = {item.name for item in fields(model)}
    return {
        name: value
        for name, value in values.items()
        if name in names and (value is not None or name in _NULLABLE_PROFILE_FIELDS)
    }
