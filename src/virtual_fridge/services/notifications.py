"""Push delivery and the expiration notification batch."""

import enum
import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Protocol

from virtual_fridge.domain.expiry import (
    UNKNOWN_ITEM_NAME,
    ExpiringItem,
    ExpiryMessage,
    build_expiry_message,
    days_until,
    expiry_threshold,
    select_expiring,
    to_day,
)
from virtual_fridge.domain.food import FoodItem
from virtual_fridge.domain.users import UserRecord
from virtual_fridge.errors import PushNotConfiguredError, VirtualFridgeError
from virtual_fridge.services.food_items import FoodItemRepository
from virtual_fridge.services.food_types import FoodTypeService
from virtual_fridge.services.users import UserService

_TOKEN_PREVIEW_LENGTH = 20

_logger = logging.getLogger(__name__)


class PushSender(Protocol):
    """Interface for a push messaging backend."""

    def is_initialized(self) -> bool:
        """Return whether credentials were loaded successfully."""

    async def send(
        self, token: str, title: str, body: str, data: dict[str, str]
    ) -> str:
        """Deliver one message and return the backend message id."""


@dataclass
class NotificationService:
    """Formats and delivers push notifications."""

    sender: PushSender

    def is_initialized(self) -> bool:
        """Return whether push delivery is available."""
        return self.sender.is_initialized()

    async def deliver(
        self, token: str, title: str, body: str, data: dict[str, str] | None = None
    ) -> str:
        """Send a push, raising when delivery is unavailable or rejected."""
        if not self.sender.is_initialized():
            raise PushNotConfiguredError(
                "Firebase not initialized. Cannot send notification."
            )
        message_id = await self.sender.send(token, title, body, data or {})
        _logger.info("Successfully sent notification: %s", message_id)
        return message_id

    async def send_notification(
        self, token: str, title: str, body: str, data: dict[str, str] | None = None
    ) -> bool:
        """Send a push and report success instead of raising."""
        try:
            await self.deliver(token, title, body, data)
        except VirtualFridgeError as exc:
            _logger.warning("Error sending notification: %s", exc)
            return False
        return True

    async def send_expiry_notification(
        self, token: str, items: list[ExpiringItem]
    ) -> bool:
        """Send the expiry summary for the given items."""
        message = build_expiry_message(items)
        return await self.send_notification(
            token, message.title, message.body, message.data
        )


class UserOutcome(enum.Enum):
    """Result of evaluating one user during the batch."""

    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class BatchSummary:
    """Aggregate counters for one batch run."""

    users_processed: int = 0
    notifications_sent: int = 0
    errors: int = 0


def summarize(outcomes: Iterable[UserOutcome]) -> BatchSummary:
    """Fold per-user outcomes into batch counters."""
    processed = sent = errors = 0
    for outcome in outcomes:
        if outcome is UserOutcome.FAILED:
            errors += 1
            continue
        processed += 1
        if outcome is UserOutcome.SENT:
            sent += 1
    return BatchSummary(
        users_processed=processed, notifications_sent=sent, errors=errors
    )


@dataclass(frozen=True)
class ExpiryCheckResult:
    """Outcome of an on-demand expiry check for one user."""

    message: str
    items_expiring: int
    notification_sent: bool


@dataclass(frozen=True)
class UserDebugInfo:
    """Diagnostic view of one notification recipient."""

    user_id: str
    email: str
    has_fcm_token: bool
    fcm_token_preview: str | None
    total_items: int
    items_with_expiry: int
    expiry_threshold: int


@dataclass(frozen=True)
class DebugSnapshot:
    """Diagnostic view of the notification pipeline."""

    firebase_initialized: bool
    total_users_with_tokens: int
    users: list[UserDebugInfo]


@dataclass
class ExpiryNotificationService:
    """Finds expiring items and notifies their owners."""

    user_service: UserService
    food_item_repository: FoodItemRepository
    food_type_service: FoodTypeService
    notification_service: NotificationService
    today: Callable[[], date] = field(default=lambda: datetime.now(tz=UTC).date())

    async def run_batch(self) -> BatchSummary | None:
        """Notify every user with a push token about expiring items.

        A failure for one user is logged and counted without affecting the
        others. A failure to list users is logged and the run ends early.
        """
        started = time.monotonic()
        try:
            users = self.user_service.list_users_with_push_tokens()
        except Exception:
            _logger.exception("Expiration notification check failed")
            return None
        _logger.info("Found %d users with FCM tokens", len(users))

        outcomes = []
        for user in users:
            outcomes.append(await self._process_user(user))

        summary = summarize(outcomes)
        _logger.info(
            "Expiration notification check completed in %dms. "
            "Users processed: %d, Notifications sent: %d, Errors: %d",
            (time.monotonic() - started) * 1000,
            summary.users_processed,
            summary.notifications_sent,
            summary.errors,
        )
        return summary

    async def trigger_notification_check(self) -> BatchSummary | None:
        """Run the batch immediately, outside the schedule."""
        _logger.info("Manually triggering expiration notification check")
        return await self.run_batch()

    async def check_user(self, user: UserRecord) -> ExpiryCheckResult:
        """Run the expiry rule for one user and push when items qualify."""
        if not user.fcm_token:
            return ExpiryCheckResult(
                message="No FCM token registered for this user",
                items_expiring=0,
                notification_sent=False,
            )
        items = self.food_item_repository.list_by_user(user.id)
        if not items:
            return ExpiryCheckResult(
                message="No food items found",
                items_expiring=0,
                notification_sent=False,
            )
        expiring = self.expiring_items(user, items)
        if not expiring:
            return ExpiryCheckResult(
                message="No expiring items",
                items_expiring=0,
                notification_sent=False,
            )
        sent = await self.notification_service.send_expiry_notification(
            user.fcm_token, expiring
        )
        return ExpiryCheckResult(
            message=f"Found {len(expiring)} expiring item(s)",
            items_expiring=len(expiring),
            notification_sent=sent,
        )

    def expiring_items(
        self, user: UserRecord, items: list[FoodItem]
    ) -> list[ExpiringItem]:
        """Return the user's items inside their expiry window, with names."""
        today = self.today()
        threshold = expiry_threshold(user)
        selected = select_expiring(items, threshold, today)
        if not selected:
            return []
        names = self.food_type_service.names_by_id(
            list(dict.fromkeys(item.type_id for item in selected))
        )
        expiring = []
        for item in selected:
            name = names.get(item.type_id, UNKNOWN_ITEM_NAME)
            remaining = days_until(item.expiration_date, today)
            _logger.debug(
                "User %s: %r expires in %d days (threshold %d)",
                user.id,
                name,
                remaining,
                threshold,
            )
            expiring.append(
                ExpiringItem(
                    name=name,
                    expiration_date=to_day(item.expiration_date),
                    days_until=remaining,
                )
            )
        return expiring

    def debug_snapshot(self) -> DebugSnapshot:
        """Collect per-user counters for diagnosing delivery problems."""
        users = self.user_service.list_users_with_push_tokens()
        entries = []
        for user in users:
            items = self.food_item_repository.list_by_user(user.id)
            entries.append(
                UserDebugInfo(
                    user_id=str(user.id),
                    email=user.email,
                    has_fcm_token=bool(user.fcm_token),
                    fcm_token_preview=(
                        f"{user.fcm_token[:_TOKEN_PREVIEW_LENGTH]}..."
                        if user.fcm_token
                        else None
                    ),
                    total_items=len(items),
                    items_with_expiry=sum(
                        1 for item in items if item.expiration_date is not None
                    ),
                    expiry_threshold=expiry_threshold(user),
                )
            )
        return DebugSnapshot(
            firebase_initialized=self.notification_service.is_initialized(),
            total_users_with_tokens=len(users),
            users=entries,
        )

    async def _process_user(self, user: UserRecord) -> UserOutcome:
        try:
            items = self.food_item_repository.list_by_user(user.id)
            expiring = self.expiring_items(user, items)
            if not expiring:
                _logger.debug("User %s: no expiring items", user.id)
                return UserOutcome.SKIPPED
            message: ExpiryMessage = build_expiry_message(expiring)
            await self.notification_service.deliver(
                user.fcm_token, message.title, message.body, message.data
            )
        except Exception:
            _logger.exception(
                "Error processing notifications for user %s",
                user.id,
                extra={"user_id": str(user.id)},
            )
            return UserOutcome.FAILED
        _logger.info("Notification sent to user %s", user.id)
        return UserOutcome.SENT
