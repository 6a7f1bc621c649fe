"""Request dependencies shared by the routers."""

import jwt
from fastapi import Header, Request, status

from virtual_fridge.api.errors import ApiError
from virtual_fridge.containers import AppContainer
from virtual_fridge.domain.users import UserRecord


def get_container(request: Request) -> AppContainer:
    """Return the dependency container attached to the application."""
    return request.app.state.container


async def get_current_user(
    request: Request, authorization: str | None = Header(default=None)
) -> UserRecord:
    """Resolve the bearer token to a stored user or fail with 401."""
    parts = (authorization or "").split(" ")
    token = parts[1] if len(parts) > 1 else None
    if not token:
        raise ApiError(
            status.HTTP_401_UNAUTHORIZED,
            "No token provided",
            error="Access denied",
        )
    container = get_container(request)
    try:
        user_id = container.auth_service.decode_token(token)
    except jwt.ExpiredSignatureError as exc:
        raise ApiError(
            status.HTTP_401_UNAUTHORIZED,
            "Please login again",
            error="Token expired",
        ) from exc
    except jwt.InvalidTokenError as exc:
        raise ApiError(
            status.HTTP_401_UNAUTHORIZED,
            "Token is malformed or expired",
            error="Invalid token",
        ) from exc
    user = container.user_service.get_user(user_id)
    if user is None:
        raise ApiError(
            status.HTTP_401_UNAUTHORIZED,
            "Token is valid but user no longer exists",
            error="User not found",
        )
    return user


async def require_admin(
    request: Request, x_admin_token: str | None = Header(default=None)
) -> None:
    """Check X-Admin-Token when an admin token is configured."""
    expected = get_container(request).settings.admin_token
    if expected and x_admin_token != expected:
        raise ApiError(
            status.HTTP_401_UNAUTHORIZED,
            "Invalid admin token",
            error="Access denied",
        )
