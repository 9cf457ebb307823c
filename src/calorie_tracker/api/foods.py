"""Food database endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from calorie_tracker.api.deps import current_user, get_container, optional_user
from calorie_tracker.api.schemas import (
    Category,
    CategoryOut,
    FoodIn,
    FoodListOut,
    FoodOut,
    FoodUpdate,
    MessageOut,
    PaginationOut,
)
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import UserRecord

router = APIRouter(prefix="/api/foods", tags=["foods"])


@router.get("", response_model=FoodListOut)
async def list_foods(  # noqa: PLR0913
    search: str | None = None,
    category: Category | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=100),
    viewer: UserRecord | None = Depends(optional_user),
    container: AppContainer = Depends(get_container),
) -> FoodListOut:
    """Search foods visible to the caller."""
    result = container.food_service.list_foods(
        viewer, search=search, category=category, page=page, limit=limit
    )
    return FoodListOut(
        foods=[FoodOut.from_food(food) for food in result.items],
        pagination=PaginationOut.model_validate(result),
    )


@router.get("/categories", response_model=list[CategoryOut])
async def list_categories(
    container: AppContainer = Depends(get_container),
) -> list[CategoryOut]:
    return [
        CategoryOut.model_validate(category)
        for category in container.food_service.categories()
    ]


@router.get("/{food_id}", response_model=FoodOut)
async def get_food(
    food_id: UUID,
    viewer: UserRecord | None = Depends(optional_user),
    container: AppContainer = Depends(get_container),
) -> FoodOut:
    return FoodOut.from_food(container.food_service.get_food(food_id, viewer))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=FoodOut)
async def create_food(
    payload: FoodIn,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> FoodOut:
    """Add a food to the shared database."""
    food = container.food_service.create_food(user, payload.to_fields())
    return FoodOut.from_food(food)


@router.put("/{food_id}", response_model=FoodOut)
async def update_food(
    food_id: UUID,
    payload: FoodUpdate,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> FoodOut:
    food = container.food_service.update_food(food_id, user, payload.to_changes())
    return FoodOut.from_food(food)


@router.delete("/{food_id}", response_model=MessageOut)
async def delete_food(
    food_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> MessageOut:
    container.food_service.delete_food(food_id, user)
    return MessageOut(message="Food deleted successfully")
