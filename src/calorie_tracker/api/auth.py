"""Registration, login and token endpoints."""

from fastapi import APIRouter, Depends, status

from calorie_tracker.api.deps import current_user, get_container
from calorie_tracker.api.schemas import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    TokenCheckOut,
    UserOut,
)
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import UserProfile, UserRecord

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse
)
async def register(
    payload: RegisterRequest, container: AppContainer = Depends(get_container)
) -> AuthResponse:
    """Create an account and return a token."""
    profile = UserProfile(
        age=payload.age,
        gender=payload.gender,
        height=payload.height,
        weight=payload.weight,
        activity_level=payload.activity_level,
        goal=payload.goal,
    )
    user, token = container.user_service.register(
        payload.name, payload.email, payload.password, profile
    )
    return AuthResponse(token=token, user=UserOut.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest, container: AppContainer = Depends(get_container)
) -> AuthResponse:
    """Exchange credentials for a token."""
    user, token = container.user_service.authenticate(payload.email, payload.password)
    return AuthResponse(token=token, user=UserOut.model_validate(user))


@router.get("/me", response_model=UserOut)
async def me(user: UserRecord = Depends(current_user)) -> UserOut:
    """Return the authenticated user."""
    return UserOut.model_validate(user)


@router.post("/verify-token", response_model=TokenCheckOut)
async def verify_token(user: UserRecord = Depends(current_user)) -> TokenCheckOut:
    """Confirm that the bearer token is valid."""
    return TokenCheckOut(valid=True, user=UserOut.model_validate(user))
