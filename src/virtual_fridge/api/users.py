"""Profile and hobby endpoints."""

from fastapi import APIRouter, Depends, status

from virtual_fridge.api.deps import get_container, get_current_user
from virtual_fridge.api.errors import ApiError
from virtual_fridge.api.schemas import UpdateProfileRequest, user_json
from virtual_fridge.containers import AppContainer
from virtual_fridge.domain.users import HOBBIES, UserRecord
from virtual_fridge.errors import NotFoundError, ValidationFailedError

router = APIRouter(prefix="/user", tags=["users"])
hobbies_router = APIRouter(prefix="/hobbies", tags=["users"])


@router.get("/profile")
async def get_profile(
    user: UserRecord = Depends(get_current_user),
) -> dict[str, object]:
    """Return the caller's profile."""
    return {
        "message": "Profile fetched successfully",
        "data": {"user": user_json(user)},
    }


@router.post("/profile")
async def update_profile(
    body: UpdateProfileRequest,
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Apply a partial profile update."""
    try:
        updated = container.user_service.update_profile(user.id, body.to_changes())
    except ValidationFailedError as exc:
        raise ApiError(
            status.HTTP_400_BAD_REQUEST, str(exc), error="Validation error"
        ) from exc
    except NotFoundError as exc:
        raise ApiError(status.HTTP_404_NOT_FOUND, "User not found") from exc
    return {
        "message": "User info updated successfully",
        "data": {"user": user_json(updated)},
    }


@router.delete("/profile")
async def delete_profile(
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Delete the caller together with their items and images."""
    container.user_service.delete_profile(user.id)
    return {"message": "User deleted successfully"}


@hobbies_router.get("")
async def list_hobbies(
    _user: UserRecord = Depends(get_current_user),
) -> dict[str, object]:
    """Return the selectable hobbies."""
    return {
        "message": "All hobbies fetched successfully",
        "data": {"hobbies": HOBBIES},
    }
