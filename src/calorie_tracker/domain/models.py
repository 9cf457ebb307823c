"""Domain models for users and their profiles."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

GENDERS = ("male", "female", "other")
ACTIVITY_LEVELS = ("sedentary", "light", "moderate", "active", "very_active")
GOALS = ("lose_weight", "maintain_weight", "gain_weight")
ROLES = ("user", "admin")
LANGUAGES = ("en", "ar")
UNIT_SYSTEMS = ("metric", "imperial")


@dataclass(frozen=True)
class UserProfile:
    """Biometric inputs used by the energy calculators."""

    age: int | None = None
    gender: str | None = None
    height: float | None = None
    weight: float | None = None
    activity_level: str = "moderate"
    goal: str = "maintain_weight"


@dataclass(frozen=True)
class DailyGoals:
    """Daily calorie and macro targets."""

    calories: int = 2000
    protein: int = 150
    carbs: int = 250
    fat: int = 65


@dataclass(frozen=True)
class Preferences:
    """Display preferences for a user."""

    language: str = "en"
    units: str = "metric"


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    name: str
    email: str
    password_hash: str
    role: str = "user"
    avatar: str | None = None
    profile: UserProfile = field(default_factory=UserProfile)
    daily_goals: DailyGoals = field(default_factory=DailyGoals)
    preferences: Preferences = field(default_factory=Preferences)
    created_at: datetime | None = None
    last_login_at: datetime | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
