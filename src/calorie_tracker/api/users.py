"""Profile, goals and preference endpoints for the current user."""

from fastapi import APIRouter, Depends

from calorie_tracker.api.deps import current_user, get_container
from calorie_tracker.api.schemas import (
    GoalsIn,
    MessageOut,
    PasswordChangeRequest,
    PreferencesIn,
    ProfileIn,
    UserOut,
    UserStatsOut,
)
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import UserRecord

router = APIRouter(prefix="/api/users", tags=["users"])


@router.put("/profile", response_model=UserOut)
async def update_profile(
    payload: ProfileIn,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> UserOut:
    """Update name, avatar and biometrics, then recalculate daily goals."""
    changes = payload.model_dump(exclude_none=True)
    account = {key: changes.pop(key) for key in ("name", "avatar") if key in changes}
    if account:
        container.user_service.update_account(user.id, account)
    updated = container.user_service.update_profile(user.id, changes)
    return UserOut.model_validate(updated)


@router.put("/goals", response_model=UserOut)
async def update_goals(
    payload: GoalsIn,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> UserOut:
    updated = container.user_service.update_goals(
        user.id, payload.model_dump(exclude_none=True)
    )
    return UserOut.model_validate(updated)


@router.put("/preferences", response_model=UserOut)
async def update_preferences(
    payload: PreferencesIn,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> UserOut:
    updated = container.user_service.update_preferences(
        user.id, payload.model_dump(exclude_none=True)
    )
    return UserOut.model_validate(updated)


@router.get("/stats", response_model=UserStatsOut)
async def user_stats(
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> UserStatsOut:
    """Return BMR, TDEE and goals."""
    return UserStatsOut.model_validate(container.user_service.get_stats(user.id))


@router.put("/password", response_model=MessageOut)
async def change_password(
    payload: PasswordChangeRequest,
    user: UserRecord = Depends(current_user),
    container: AppContainer = Depends(get_container),
) -> MessageOut:
    container.user_service.change_password(
        user.id, payload.current_password, payload.new_password
    )
    return MessageOut(message="Password updated successfully")
