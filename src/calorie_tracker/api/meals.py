"""Meal logging and nutrition summary endpoints."""

import datetime as dt
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from calorie_tracker.api.deps import current_user, get_container
from calorie_tracker.api.schemas import (
    DailySummaryOut,
    DailyTotalsOut,
    MealCreate,
    MealListOut,
    MealOut,
    MealType,
    MealUpdate,
    MessageOut,
    PaginationOut,
    QuickAddRequest,
    RangeStatisticsOut,
)
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.meals import MealItemRequest
from calorie_tracker.domain.models import UserRecord

router = APIRouter(prefix="/api/meals", tags=["meals"])


@router.get("", response_model=MealListOut)
async def list_meals(  # noqa: PLR0913
    date: dt.date | None = None,
    start_date: dt.date | None = None,
    end_date: dt.date | None = None,
    meal_type: MealType | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> MealListOut:
    """List the caller's meals for a day or a date range."""
    result = container.meal_service.list_meals(
        user,
        day=date,
        start_day=start_date,
        end_day=end_date,
        meal_type=meal_type,
        page=page,
        limit=limit,
    )
    return MealListOut(
        meals=[MealOut.model_validate(meal) for meal in result.items],
        pagination=PaginationOut.model_validate(result),
    )


@router.get("/daily/{day}", response_model=DailySummaryOut)
async def daily_summary(
    day: dt.date,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> DailySummaryOut:
    """Return totals and meals grouped by type for one day."""
    summary = container.meal_service.daily_summary(user, day)
    return DailySummaryOut(
        date=summary.day,
        daily_totals=DailyTotalsOut.model_validate(summary.totals),
        meals_by_type={
            meal_type: [MealOut.model_validate(meal) for meal in meals]
            for meal_type, meals in summary.meals_by_type.items()
        },
        total_meals=summary.totals.meal_count,
    )


@router.get("/stats", response_model=RangeStatisticsOut)
async def meal_statistics(
    start_date: dt.date | None = None,
    end_date: dt.date | None = None,
    days: int | None = Query(default=None, ge=1, le=365),
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> RangeStatisticsOut:
    """Return averages and breakdowns for a date range."""
    statistics = container.meal_service.statistics(
        user, start_day=start_date, end_day=end_date, days=days
    )
    return RangeStatisticsOut.model_validate(statistics)


@router.post("/quick-add", status_code=status.HTTP_201_CREATED, response_model=MealOut)
async def quick_add(
    payload: QuickAddRequest,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> MealOut:
    """Log a single food as a meal."""
    meal = container.meal_service.quick_add(
        user,
        payload.food_id,
        payload.amount,
        payload.meal_type,
        meal_date=payload.date,
    )
    return MealOut.model_validate(meal)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MealOut)
async def create_meal(
    payload: MealCreate,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> MealOut:
    items = [
        MealItemRequest(food_id=item.food_id, amount=item.amount)
        for item in payload.items
    ]
    meal = container.meal_service.create_meal(
        user,
        payload.meal_type,
        items,
        meal_date=payload.date,
        notes=payload.notes,
    )
    return MealOut.model_validate(meal)


@router.get("/{meal_id}", response_model=MealOut)
async def get_meal(
    meal_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> MealOut:
    return MealOut.model_validate(container.meal_service.get_meal(meal_id, user))


@router.put("/{meal_id}", response_model=MealOut)
async def update_meal(
    meal_id: UUID,
    payload: MealUpdate,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> MealOut:
    """Update a meal; new items are re-snapshotted from the food database."""
    changes: dict[str, object] = payload.model_dump(
        exclude_none=True, exclude={"items"}
    )
    if payload.items is not None:
        changes["items"] = [
            MealItemRequest(food_id=item.food_id, amount=item.amount)
            for item in payload.items
        ]
    meal = container.meal_service.update_meal(meal_id, user, changes)
    return MealOut.model_validate(meal)


@router.delete("/{meal_id}", response_model=MessageOut)
async def delete_meal(
    meal_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> MessageOut:
    container.meal_service.delete_meal(meal_id, user)
    return MessageOut(message="Meal deleted successfully")
