"""Domain models for users."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

HOBBIES = [
    "Reading",
    "Writing",
    "Photography",
    "Cooking",
    "Gardening",
    "Painting",
    "Drawing",
    "Pottery",
    "Running",
    "Yoga",
    "Chess",
    "Video Games",
    "Travel",
    "Coding",
    "Blogging",
    "Surfing",
    "Skiing",
    "Singing",
]


@dataclass(frozen=True)
class DietaryPreferences:
    """Diet flags used when suggesting recipes."""

    vegetarian: bool | None = None
    vegan: bool | None = None
    halal: bool | None = None
    keto: bool | None = None


@dataclass(frozen=True)
class NotificationPreferences:
    """Per-user push notification settings."""

    enable_notifications: bool = True
    expiry_threshold_days: int | None = None
    notification_time: int | None = None


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: UUID
    google_id: str
    email: str
    name: str
    bio: str | None = None
    profile_picture: str | None = None
    hobbies: list[str] = field(default_factory=list)
    dietary_preferences: DietaryPreferences | None = None
    notification_preferences: NotificationPreferences | None = None
    fcm_token: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class GoogleUserInfo:
    """Identity claims extracted from a verified Google ID token."""

    google_id: str
    email: str
    name: str
    profile_picture: str | None = None
