"""Request dependencies for bearer-token authentication."""

from fastapi import Depends, Header, HTTPException, Request, status

from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import UserRecord


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def current_user(
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> UserRecord:
    """Resolve the bearer token to a user or reject the request."""
    token = _bearer_token(authorization)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token, authorization denied",
        )
    return container.user_service.resolve_token(token)


async def optional_user(
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> UserRecord | None:
    """Resolve the bearer token when one is sent."""
    token = _bearer_token(authorization)
    if token is None:
        return None
    return container.user_service.resolve_token(token)


async def require_admin(user: UserRecord = Depends(current_user)) -> UserRecord:
    """Ensure the authenticated user is an admin."""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Admin access only"
        )
    return user
