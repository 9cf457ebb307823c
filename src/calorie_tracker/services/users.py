"""User accounts, profiles and goals."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from calorie_tracker.domain.errors import (
    AuthenticationError,
    ConflictError,
    InvalidRequestError,
    NotFoundError,
)
from calorie_tracker.domain.models import (
    DailyGoals,
    Preferences,
    UserProfile,
    UserRecord,
)
from calorie_tracker.services.auth import TokenService, hash_password, verify_password
from calorie_tracker.services.energy import bmr, recommended_goals, tdee

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return a user by lower-cased email."""

    def create_user(self, user: UserRecord) -> UserRecord:
        """Persist a new user and return it."""

    def update_user(self, user: UserRecord) -> UserRecord:
        """Persist changes to a user and return it."""

    def delete_user(self, user_id: UUID) -> None:
        """Delete a user row."""

    def list_users(self) -> list[UserRecord]:
        """Return all users, newest first."""


@dataclass(frozen=True)
class UserStats:
    """Energy figures derived from a user's profile."""

    bmr: int | None
    tdee: int | None
    daily_calories: int
    profile: UserProfile
    daily_goals: DailyGoals
    joined: datetime | None


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository
    tokens: TokenService

    def register(
        self, name: str, email: str, password: str, profile: UserProfile
    ) -> tuple[UserRecord, str]:
        """Create an account with goals derived from the profile."""
        normalized = email.strip().lower()
        if self.repository.get_by_email(normalized):
            raise ConflictError("User already exists with this email")
        user = self.repository.create_user(
            UserRecord(
                id=uuid4(),
                name=name.strip(),
                email=normalized,
                password_hash=hash_password(password),
                profile=profile,
                daily_goals=recommended_goals(profile) or DailyGoals(),
                created_at=datetime.now(tz=UTC),
            )
        )
        _logger.info("Registered user %s", user.id)
        return user, self.tokens.issue(user.id)

    def authenticate(self, email: str, password: str) -> tuple[UserRecord, str]:
        """Verify credentials, record the login and return a token."""
        user = self.repository.get_by_email(email.strip().lower())
        if user is None or not verify_password(password, user.password_hash):
            raise AuthenticationError("Invalid email or password")
        user = self.repository.update_user(
            replace(user, last_login_at=datetime.now(tz=UTC))
        )
        return user, self.tokens.issue(user.id)

    def resolve_token(self, token: str) -> UserRecord:
        """Return the user that owns a bearer token."""
        user_id = self.tokens.verify(token)
        user = self.repository.get_user(user_id)
        if user is None:
            raise AuthenticationError("User not found")
        return user

    def get_user(self, user_id: UUID) -> UserRecord:
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserRecord:
        """Apply profile changes and recalculate goals when possible."""
        user = self.get_user(user_id)
        profile = replace(user.profile, **changes)
        goals = recommended_goals(profile) or user.daily_goals
        return self.repository.update_user(
            replace(user, profile=profile, daily_goals=goals)
        )

    def update_goals(self, user_id: UUID, changes: dict[str, object]) -> UserRecord:
        user = self.get_user(user_id)
        return self.repository.update_user(
            replace(user, daily_goals=replace(user.daily_goals, **changes))
        )

    def update_preferences(
        self, user_id: UUID, changes: dict[str, object]
    ) -> UserRecord:
        user = self.get_user(user_id)
        preferences: Preferences = replace(user.preferences, **changes)
        return self.repository.update_user(replace(user, preferences=preferences))

    def update_account(self, user_id: UUID, changes: dict[str, object]) -> UserRecord:
        """Change name or avatar."""
        user = self.get_user(user_id)
        return self.repository.update_user(replace(user, **changes))

    def change_password(
        self, user_id: UUID, current_password: str, new_password: str
    ) -> None:
        """Replace the password after checking the current one."""
        user = self.get_user(user_id)
        if not verify_password(current_password, user.password_hash):
            raise InvalidRequestError("Current password is incorrect")
        if current_password == new_password:
            raise InvalidRequestError(
                "New password must be different from current password"
            )
        self.repository.update_user(
            replace(user, password_hash=hash_password(new_password))
        )
        _logger.info("Password changed for user %s", user_id)

    def get_stats(self, user_id: UUID) -> UserStats:
        """Return BMR, TDEE and goals for the user."""
        user = self.get_user(user_id)
        return UserStats(
            bmr=bmr(user.profile),
            tdee=tdee(user.profile),
            daily_calories=user.daily_goals.calories,
            profile=user.profile,
            daily_goals=user.daily_goals,
            joined=user.created_at,
        )
