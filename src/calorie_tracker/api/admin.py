"""Admin-only user management and reporting endpoints."""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from calorie_tracker.api.deps import get_container, require_admin
from calorie_tracker.api.schemas import (
    AdminUserDetailOut,
    AdminUserListOut,
    AdminUserUpdate,
    DashboardOut,
    DeletionOut,
    MealOut,
    PaginationOut,
    Role,
    UserActivityOut,
    UserOut,
    UserRoleStatsOut,
)
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import UserRecord

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users", response_model=AdminUserListOut)
async def list_users(  # noqa: PLR0913
    search: str | None = None,
    role: Role | None = None,
    sort_by: str = "created_at",
    sort_order: Literal["asc", "desc"] = "desc",
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    _: UserRecord = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> AdminUserListOut:
    """Return users with role statistics."""
    listing = container.admin_service.list_users(
        search=search,
        role=role,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return AdminUserListOut(
        users=[UserOut.model_validate(user) for user in listing.page.items],
        pagination=PaginationOut.model_validate(listing.page),
        stats=UserRoleStatsOut(
            total=listing.page.total,
            roles=listing.roles,
            recent_users=listing.recent_users,
        ),
    )


@router.get("/users/{user_id}", response_model=AdminUserDetailOut)
async def get_user(
    user_id: UUID,
    _: UserRecord = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> AdminUserDetailOut:
    detail = container.admin_service.get_user_detail(user_id)
    return AdminUserDetailOut(
        user=UserOut.model_validate(detail.user),
        activity=UserActivityOut(
            total_meals=detail.total_meals,
            total_foods=detail.total_foods,
            recent_meals=detail.recent_meals_count,
            last_active=detail.last_active,
        ),
        recent_meals=[MealOut.model_validate(meal) for meal in detail.recent_meals],
    )


@router.put("/users/{user_id}", response_model=UserOut)
async def update_user(
    user_id: UUID,
    payload: AdminUserUpdate,
    admin: UserRecord = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> UserOut:
    user = container.admin_service.update_user(user_id, admin, payload.to_changes())
    return UserOut.model_validate(user)


@router.delete("/users/{user_id}", response_model=DeletionOut)
async def delete_user(
    user_id: UUID,
    admin: UserRecord = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> DeletionOut:
    """Delete a user together with their foods, meals and activities."""
    counts = container.admin_service.delete_user(user_id, admin)
    return DeletionOut(
        message="User and associated data deleted successfully",
        users=counts.users,
        foods=counts.foods,
        meals=counts.meals,
        activities=counts.activities,
        kept_admins=counts.kept_admins,
    )


@router.get("/dashboard-stats", response_model=DashboardOut)
async def dashboard_stats(
    _: UserRecord = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> DashboardOut:
    return DashboardOut.model_validate(container.admin_service.dashboard_stats())


@router.post("/purge-non-admins", response_model=DeletionOut)
async def purge_non_admins(
    _: UserRecord = Depends(require_admin),
    container: AppContainer = Depends(get_container),
) -> DeletionOut:
    """Delete every non-admin account and its data."""
    counts = container.admin_service.purge_non_admins()
    return DeletionOut(
        message="Non-admin users purged",
        users=counts.users,
        foods=counts.foods,
        meals=counts.meals,
        activities=counts.activities,
        kept_admins=counts.kept_admins,
    )
