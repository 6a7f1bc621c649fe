"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from virtual_fridge.domain.users import (
    DietaryPreferences,
    GoogleUserInfo,
    NotificationPreferences,
    UserRecord,
)
from virtual_fridge.errors import RepositoryError
from virtual_fridge.services.users import UserRepository

_USER_COLUMNS = (
    "id, google_id, email, name, bio, profile_picture, hobbies, "
    "dietary_preferences, notification_preferences, fcm_token, "
    "created_at, updated_at"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        return _row_to_user(response.data[0]) if response.data else None

    def get_by_google_id(self, google_id: str) -> UserRecord | None:
        """Return the user for a Google account id, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("google_id", google_id)
            .limit(1)
            .execute()
        )
        return _row_to_user(response.data[0]) if response.data else None

    def create_user(self, info: GoogleUserInfo) -> UserRecord:
        """Create a new user row and return it."""
        response = (
            self.client.table("users")
            .insert(
                {
                    "google_id": info.google_id,
                    "email": info.email,
                    "name": info.name,
                    "profile_picture": info.profile_picture,
                }
            )
            .execute()
        )
        if not response.data:
            raise RepositoryError("Failed to create user")
        return _row_to_user(response.data[0])

    def update_user(
        self, user_id: UUID, changes: dict[str, object]
    ) -> UserRecord | None:
        """Apply a partial update and return the updated user."""
        payload = {
            **changes,
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        response = (
            self.client.table("users").update(payload).eq("id", str(user_id)).execute()
        )
        return _row_to_user(response.data[0]) if response.data else None

    def delete_user(self, user_id: UUID) -> None:
        """Delete the user row."""
        self.client.table("users").delete().eq("id", str(user_id)).execute()

    def list_users_with_fcm_tokens(self) -> list[UserRecord]:
        """Return every user holding a non-empty push token."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .neq("fcm_token", "")
            .execute()
        )
        return [
            _row_to_user(row) for row in response.data or [] if row.get("fcm_token")
        ]


def _row_to_user(row: dict) -> UserRecord:
    dietary = row.get("dietary_preferences")
    notifications = row.get("notification_preferences")
    return UserRecord(
        id=UUID(row["id"]),
        google_id=row["google_id"],
        email=row["email"],
        name=row["name"],
        bio=row.get("bio"),
        profile_picture=row.get("profile_picture"),
        hobbies=list(row.get("hobbies") or []),
        dietary_preferences=DietaryPreferences(**dietary) if dietary else None,
        notification_preferences=(
            NotificationPreferences(**notifications) if notifications else None
        ),
        fcm_token=row.get("fcm_token"),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def _parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
