"""Idempotent startup seeding of the admin account and starter foods."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from calorie_tracker.domain.foods import Food
from calorie_tracker.domain.models import UserRecord
from calorie_tracker.domain.nutrition import NutrientProfile, ServingSize
from calorie_tracker.services.auth import hash_password
from calorie_tracker.services.foods import FoodRepository
from calorie_tracker.services.users import UserRepository

_logger = logging.getLogger(__name__)

SEED_MARKER = "initial_seed"

# name, Arabic name, category, calories, protein, carbs, fat per 100 g
INITIAL_FOODS = (
    ("Apple", "تفاح", "fruits", 52, 0.3, 14, 0.2),
    ("Banana", "موز", "fruits", 96, 1.3, 27, 0.3),
    ("Rice", "أرز", "grains", 130, 2.7, 28, 0.3),
    ("Chicken breast", "صدر دجاج", "protein", 165, 31, 0, 3.6),
    ("Egg", "بيض", "protein", 155, 13, 1, 11),
    ("Bread", "خبز", "grains", 265, 9, 49, 3.2),
    ("Potato", "بطاطس", "vegetables", 77, 2, 17, 0.1),
    ("Tomato", "طماطم", "vegetables", 18, 0.9, 3.9, 0.2),
    ("Cucumber", "خيار", "vegetables", 16, 0.6, 4, 0.1),
    ("Milk", "حليب", "dairy", 42, 3.4, 5, 1),
)


class MarkerRepository(Protocol):
    """Persistence interface for one-time setup markers."""

    def has_marker(self, key: str) -> bool:
        """Return true when the marker was recorded."""

    def create_marker(self, key: str) -> None:
        """Record a marker."""


@dataclass
class BootstrapService:
    """Seeds the admin account and starter foods once per database."""

    markers: MarkerRepository
    users: UserRepository
    foods: FoodRepository
    admin_email: str
    admin_password: str | None
    admin_name: str = "Administrator"
    seed_foods: bool = True

    def run(self) -> bool:
        """Seed the database unless the marker exists; return true if seeded."""
        if self.markers.has_marker(SEED_MARKER):
            _logger.info("Initial seed already applied")
            return False
        admin = self._ensure_admin()
        if admin is None:
            return False
        if self.seed_foods:
            self._seed_foods(admin)
        self.markers.create_marker(SEED_MARKER)
        return True

    def _ensure_admin(self) -> UserRecord | None:
        email = self.admin_email.strip().lower()
        existing = self.users.get_by_email(email)
        if existing is not None:
            if existing.is_admin:
                return existing
            _logger.warning(
                "Account %s exists without the admin role; skipping seed", email
            )
            return None
        if not self.admin_password:
            _logger.warning("No admin account and no ADMIN_PASSWORD; skipping seed")
            return None
        admin = self.users.create_user(
            UserRecord(
                id=uuid4(),
                name=self.admin_name,
                email=email,
                password_hash=hash_password(self.admin_password),
                role="admin",
                created_at=datetime.now(tz=UTC),
            )
        )
        _logger.info("Admin user created: %s", admin.email)
        return admin

    def _seed_foods(self, admin: UserRecord) -> None:
        if self.foods.list_foods(None, None, None, include_private=True):
            _logger.info("Food table not empty; skipping starter foods")
            return
        now = datetime.now(tz=UTC)
        for name, name_ar, category, calories, protein, carbs, fat in INITIAL_FOODS:
            self.foods.create_food(
                Food(
                    id=uuid4(),
                    name=name,
                    name_ar=name_ar,
                    category=category,
                    nutrition=NutrientProfile(
                        calories=calories, protein=protein, carbs=carbs, fat=fat
                    ),
                    serving_size=ServingSize(amount=100, unit="g"),
                    created_by=admin.id,
                    is_public=True,
                    is_verified=True,
                    per_100g=True,
                    description="Initial seed food (per 100g)",
                    created_at=now,
                    updated_at=now,
                )
            )
        _logger.info("Seeded %s starter foods", len(INITIAL_FOODS))
