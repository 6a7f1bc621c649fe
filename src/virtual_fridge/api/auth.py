"""Google sign-in endpoints and the test-only login."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from virtual_fridge.api.deps import get_container
from virtual_fridge.api.errors import ApiError
from virtual_fridge.api.schemas import GoogleAuthRequest, IdTokenRequest, user_json
from virtual_fridge.containers import AppContainer
from virtual_fridge.domain.users import GoogleUserInfo
from virtual_fridge.errors import AuthenticationError, ConflictError, NotFoundError

TEST_USER = GoogleUserInfo(
    google_id="test-google-id-e2e-testing",
    email="test-user@virtualfridge.test",
    name="Test User",
    profile_picture="",
)
TEST_TOKEN_HOURS = 24

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])
test_router = APIRouter(prefix="/test-auth", tags=["auth"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def sign_up(
    body: IdTokenRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Create an account for a Google identity."""
    try:
        result = await container.auth_service.sign_up(body.id_token)
    except AuthenticationError as exc:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Invalid Google token") from exc
    except ConflictError as exc:
        raise ApiError(
            status.HTTP_409_CONFLICT, "User already exists, please sign in instead."
        ) from exc
    return {
        "message": "User signed up successfully",
        "data": {"token": result.token, "user": user_json(result.user)},
    }


@router.post("/signin")
async def sign_in(
    body: IdTokenRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Sign in an existing account."""
    try:
        result = await container.auth_service.sign_in(body.id_token)
    except AuthenticationError as exc:
        raise ApiError(status.HTTP_401_UNAUTHORIZED, "Invalid Google token") from exc
    except NotFoundError as exc:
        raise ApiError(
            status.HTTP_404_NOT_FOUND, "User not found, please sign up first."
        ) from exc
    return {
        "message": "User signed in successfully",
        "data": {"token": result.token, "user": user_json(result.user)},
    }


@router.post("/google")
async def google_auth(
    body: GoogleAuthRequest, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Sign in with Google, creating the account on first use."""
    if not body.id_token:
        raise ApiError(status.HTTP_400_BAD_REQUEST, error="idToken is required")
    try:
        result = await container.auth_service.authenticate(body.id_token)
    except AuthenticationError as exc:
        raise ApiError(
            status.HTTP_401_UNAUTHORIZED, error="Invalid Google token"
        ) from exc
    return {"token": result.token, "user": user_json(result.user)}


@test_router.post("/test-user")
async def login_test_user(
    container: AppContainer = Depends(get_container),
) -> JSONResponse:
    """Return a token for a fixed test account without Google."""
    user, created = container.user_service.find_or_create(TEST_USER)
    if created:
        _logger.info("Created test user %s", user.id)
    token = container.auth_service.issue_token(user, expires_hours=TEST_TOKEN_HOURS)
    return JSONResponse({"data": {"token": token, "user": user_json(user)}})
