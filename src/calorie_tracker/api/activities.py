"""Activity logging endpoints."""

import datetime as dt
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from calorie_tracker.api.deps import current_user, get_container
from calorie_tracker.api.schemas import (
    ActivityCreate,
    ActivityListOut,
    ActivityOut,
    ActivitySummaryOut,
    ActivityTotalsOut,
    ActivityType,
    ActivityUpdate,
    MessageOut,
    PaginationOut,
    PredefinedActivityOut,
)
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import UserRecord

router = APIRouter(prefix="/api/activities", tags=["activities"])


@router.get("/predefined", response_model=list[PredefinedActivityOut])
async def predefined_activities(
    container: AppContainer = Depends(get_container),
) -> list[PredefinedActivityOut]:
    return [
        PredefinedActivityOut.model_validate(template)
        for template in container.activity_service.predefined()
    ]


@router.get("", response_model=ActivityListOut)
async def list_activities(  # noqa: PLR0913
    date: dt.date | None = None,
    type: ActivityType | None = None,  # noqa: A002
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=100),
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> ActivityListOut:
    """List activities, with daily totals when a date is given."""
    service = container.activity_service
    result = service.list_activities(
        user, day=date, activity_type=type, page=page, limit=limit
    )
    totals = service.daily_totals(user, date) if date else None
    return ActivityListOut(
        activities=[ActivityOut.model_validate(item) for item in result.items],
        pagination=PaginationOut.model_validate(result),
        daily_totals=ActivityTotalsOut.model_validate(totals) if totals else None,
    )


@router.get("/stats/summary", response_model=ActivitySummaryOut)
async def activity_summary(
    days: int | None = Query(default=None, ge=1, le=365),
    start_date: dt.date | None = None,
    end_date: dt.date | None = None,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> ActivitySummaryOut:
    """Summarize calories burned over a window, the last week by default."""
    summary = container.activity_service.summary(
        user, days=days, start_day=start_date, end_day=end_date
    )
    return ActivitySummaryOut.model_validate(summary)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ActivityOut)
async def create_activity(
    payload: ActivityCreate,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> ActivityOut:
    activity = container.activity_service.create_activity(
        user, payload.model_dump(exclude_none=True)
    )
    return ActivityOut.model_validate(activity)


@router.get("/{activity_id}", response_model=ActivityOut)
async def get_activity(
    activity_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> ActivityOut:
    activity = container.activity_service.get_activity(activity_id, user)
    return ActivityOut.model_validate(activity)


@router.put("/{activity_id}", response_model=ActivityOut)
async def update_activity(
    activity_id: UUID,
    payload: ActivityUpdate,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> ActivityOut:
    activity = container.activity_service.update_activity(
        activity_id, user, payload.model_dump(exclude_none=True)
    )
    return ActivityOut.model_validate(activity)


@router.post("/{activity_id}/recalculate", response_model=ActivityOut)
async def recalculate_activity(
    activity_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> ActivityOut:
    """Re-estimate calories burned from the current weight."""
    activity = container.activity_service.recalculate(activity_id, user)
    return ActivityOut.model_validate(activity)


@router.delete("/{activity_id}", response_model=MessageOut)
async def delete_activity(
    activity_id: UUID,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> MessageOut:
    container.activity_service.delete_activity(activity_id, user)
    return MessageOut(message="Activity deleted successfully")
