"""Expiry rule shared by the notification batch and the per-request check."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime

from virtual_fridge.domain.food import FoodItem
from virtual_fridge.domain.users import UserRecord

DEFAULT_EXPIRY_THRESHOLD_DAYS = 2
UNKNOWN_ITEM_NAME = "Unknown item"
_MAX_NAMES_IN_BODY = 3


@dataclass(frozen=True)
class ExpiringItem:
    """An item that falls inside the user's expiry window."""

    name: str
    expiration_date: date
    days_until: int


@dataclass(frozen=True)
class ExpiryMessage:
    """Push notification content for a set of expiring items."""

    title: str
    body: str
    data: dict[str, str]


def expiry_threshold(user: UserRecord) -> int:
    """Return the user's threshold in days, falling back to the default."""
    preferences = user.notification_preferences
    if preferences is None or preferences.expiry_threshold_days is None:
        return DEFAULT_EXPIRY_THRESHOLD_DAYS
    return preferences.expiry_threshold_days


def to_day(value: date | datetime) -> date:
    """Drop the time component of a date or datetime."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_until(expiration: date | datetime, today: date) -> int:
    """Whole days from today to the expiration date; negative when expired."""
    return (to_day(expiration) - today).days


def select_expiring(
    items: Iterable[FoodItem], threshold_days: int, today: date
) -> list[FoodItem]:
    """Return items with an expiration date at most threshold days away."""
    return [
        item
        for item in items
        if item.expiration_date is not None
        and days_until(item.expiration_date, today) <= threshold_days
    ]


def build_expiry_message(items: list[ExpiringItem]) -> ExpiryMessage:
    """Build the title, body and data payload for an expiry push."""
    count = len(items)
    if count == 0:
        return ExpiryMessage(
            title="No Expiring Items",
            body="Great news! You have no items expiring soon.",
            data={"itemCount": "0", "type": "expiry"},
        )
    title = f"{count} Item{'s' if count > 1 else ''} Expiring Soon"
    if count == 1:
        body = _describe_single(items[0])
    else:
        names = ", ".join(item.name for item in items[:_MAX_NAMES_IN_BODY])
        remaining = count - _MAX_NAMES_IN_BODY
        body = f"{names} and {remaining} more" if remaining > 0 else names
    return ExpiryMessage(
        title=title,
        body=body,
        data={"itemCount": str(count), "type": "expiry"},
    )


def _describe_single(item: ExpiringItem) -> str:
    days = item.days_until
    if days == 0:
        return f"{item.name} expires today"
    if days < 0:
        return f"{item.name} expired {-days} day{'s' if days != -1 else ''} ago"
    return f"{item.name} expires in {days} day{'s' if days != 1 else ''}"
