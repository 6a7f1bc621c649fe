"""Expiry notification endpoints for users and operators."""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from virtual_fridge.api.deps import get_container, get_current_user, require_admin
from virtual_fridge.api.errors import ApiError
from virtual_fridge.api.schemas import SimplePushRequest, expiring_item_json
from virtual_fridge.containers import AppContainer
from virtual_fridge.domain.users import UserRecord
from virtual_fridge.errors import VirtualFridgeError

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])
admin_router = APIRouter(
    prefix="/notifications/admin",
    tags=["notifications"],
    dependencies=[Depends(require_admin)],
)


@router.post("/check")
async def check_notifications(
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> JSONResponse:
    """Run the expiry check for the caller and push when items qualify."""
    try:
        result = await container.expiry_notification_service.check_user(user)
    except Exception as exc:
        _logger.exception("Failed to check notifications for user %s", user.id)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Failed to check notifications", "error": str(exc)},
        )
    return JSONResponse(
        {
            "message": result.message,
            "itemsExpiring": result.items_expiring,
            "notificationSent": result.notification_sent,
        }
    )


@router.post("/test")
async def send_test_notification(
    user: UserRecord = Depends(get_current_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Send the caller an expiry push even when nothing is expiring."""
    if not user.fcm_token:
        raise ApiError(
            status.HTTP_400_BAD_REQUEST,
            "No FCM token registered for this user. "
            "Please register your device first.",
        )
    service = container.expiry_notification_service
    try:
        items = container.food_item_service.list_for_user(user.id)
        if not items:
            return {"message": "No food items found in your fridge"}
        expiring = service.expiring_items(user, items)
        sent = await container.notification_service.send_expiry_notification(
            user.fcm_token, expiring
        )
    except Exception as exc:
        _logger.exception("Failed to send test notification to user %s", user.id)
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(exc) or "Failed to send test notification",
        ) from exc
    if not sent:
        raise ApiError(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to send notification"
        )
    return {
        "message": "Test notification sent successfully",
        "data": {
            "expiringItemsCount": len(expiring),
            "expiringItems": [expiring_item_json(item) for item in expiring],
        },
    }


@admin_router.post("/trigger")
async def trigger_notification_check(
    container: AppContainer = Depends(get_container),
) -> JSONResponse:
    """Run the batch for every user immediately."""
    _logger.info("Manual notification trigger requested via API")
    try:
        await container.expiry_notification_service.trigger_notification_check()
    except Exception as exc:
        _logger.exception("Error triggering notification check")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": "Failed to trigger notification check",
                "error": str(exc),
            },
        )
    return JSONResponse(
        {
            "message": "Notification check triggered successfully. "
            "Check server logs for details."
        }
    )


@admin_router.get("/debug")
async def debug_notifications(
    container: AppContainer = Depends(get_container),
) -> JSONResponse:
    """Report push initialization and per-user item counters."""
    try:
        snapshot = container.expiry_notification_service.debug_snapshot()
    except Exception as exc:
        _logger.exception("Error in debug endpoint")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Debug failed", "error": str(exc)},
        )
    return JSONResponse(
        {
            "firebaseInitialized": snapshot.firebase_initialized,
            "totalUsersWithTokens": snapshot.total_users_with_tokens,
            "users": [
                {
                    "userId": entry.user_id,
                    "email": entry.email,
                    "hasFcmToken": entry.has_fcm_token,
                    "fcmTokenPreview": entry.fcm_token_preview,
                    "totalItems": entry.total_items,
                    "itemsWithExpiry": entry.items_with_expiry,
                    "expiryThreshold": entry.expiry_threshold,
                }
                for entry in snapshot.users
            ],
        }
    )


@admin_router.post("/test-simple")
async def send_simple_notification(
    body: SimplePushRequest, container: AppContainer = Depends(get_container)
) -> JSONResponse:
    """Push a fixed message to an arbitrary device token."""
    if not body.fcm_token:
        raise ApiError(status.HTTP_400_BAD_REQUEST, "fcmToken is required")
    try:
        await container.notification_service.deliver(
            body.fcm_token,
            "Test Notification",
            "This is a test notification from Virtual Fridge",
            {"type": "test"},
        )
    except VirtualFridgeError as exc:
        _logger.warning("Simple test notification failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "message": str(exc)},
        )
    return JSONResponse({"success": True, "message": "Notification sent"})
