"""Food database service."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from calorie_tracker.domain.errors import (
    AccessDeniedError,
    ConflictError,
    NotFoundError,
)
from calorie_tracker.domain.foods import FOOD_CATEGORIES, Food, FoodCategory
from calorie_tracker.domain.models import UserRecord
from calorie_tracker.domain.pagination import Page, paginate

_logger = logging.getLogger(__name__)


class FoodRepository(Protocol):
    """Persistence interface for foods."""

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id."""

    def get_by_barcode(self, barcode: str) -> Food | None:
        """Return the food with a barcode, if any."""

    def list_foods(
        self,
        search: str | None,
        category: str | None,
        viewer_id: UUID | None,
        include_private: bool,
    ) -> list[Food]:
        """Return foods matching the filters ordered by name.

        ``search`` matches the English or Arabic name. Without
        ``include_private`` only public foods and foods created by
        ``viewer_id`` are returned.
        """

    def create_food(self, food: Food) -> Food:
        """Persist a new food."""

    def update_food(self, food: Food) -> Food:
        """Persist changes to a food."""

    def delete_food(self, food_id: UUID) -> None:
        """Delete a food."""

    def delete_foods_by_creator(self, user_id: UUID) -> int:
        """Delete foods created by a user and return how many were removed."""


@dataclass
class FoodService:
    """Service for browsing and curating foods."""

    repository: FoodRepository

    def list_foods(  # noqa: PLR0913
        self,
        viewer: UserRecord | None,
        search: str | None = None,
        category: str | None = None,
        page: int = 1,
        limit: int = 50,
    ) -> Page[Food]:
        """Return foods visible to the viewer."""
        foods = self.repository.list_foods(
            search=search.strip() if search else None,
            category=category,
            viewer_id=viewer.id if viewer else None,
            include_private=bool(viewer and viewer.is_admin),
        )
        return paginate(foods, page, limit)

    def get_food(self, food_id: UUID, viewer: UserRecord | None = None) -> Food:
        """Return a food the viewer may see."""
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFoundError("Food", food_id)
        viewer_id = viewer.id if viewer else None
        if not food.is_visible_to(viewer_id, bool(viewer and viewer.is_admin)):
            raise AccessDeniedError("Access denied to this food")
        return food

    def create_food(self, creator: UserRecord, fields: dict[str, object]) -> Food:
        """Create a food; only admins may add to the shared database."""
        if not creator.is_admin:
            raise AccessDeniedError("Only admins can add foods")
        self._ensure_barcode_free(fields.get("barcode"), None)
        now = datetime.now(tz=UTC)
        values = {"is_verified": True, **fields}
        food = Food(
            id=uuid4(),
            created_by=creator.id,
            created_at=now,
            updated_at=now,
            **values,
        )
        created = self.repository.create_food(food)
        _logger.info("Food created: %s (%s)", created.name, created.id)
        return created

    def update_food(
        self, food_id: UUID, editor: UserRecord, changes: dict[str, object]
    ) -> Food:
        food = self._editable_food(food_id, editor)
        if "barcode" in changes:
            self._ensure_barcode_free(changes["barcode"], food.id)
        updated = replace(food, **changes, updated_at=datetime.now(tz=UTC))
        return self.repository.update_food(updated)

    def delete_food(self, food_id: UUID, editor: UserRecord) -> None:
        food = self._editable_food(food_id, editor)
        self.repository.delete_food(food.id)
        _logger.info("Food deleted: %s", food.id)

    def categories(self) -> tuple[FoodCategory, ...]:
        return FOOD_CATEGORIES

    def _editable_food(self, food_id: UUID, editor: UserRecord) -> Food:
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFoundError("Food", food_id)
        if not food.can_edit(editor.id, editor.is_admin):
            raise AccessDeniedError("Access denied to this food")
        return food

    def _ensure_barcode_free(self, barcode: object, food_id: UUID | None) -> None:
        if not barcode:
            return
        existing = self.repository.get_by_barcode(str(barcode))
        if existing and existing.id != food_id:
            raise ConflictError("Food with this barcode already exists")
