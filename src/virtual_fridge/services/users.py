"""User-related business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from virtual_fridge.domain.users import HOBBIES, GoogleUserInfo, UserRecord
from virtual_fridge.errors import NotFoundError, ValidationFailedError
from virtual_fridge.services.food_items import FoodItemRepository
from virtual_fridge.services.media import MediaService

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        """Return the user with the given id, if present."""

    def get_by_google_id(self, google_id: str) -> UserRecord | None:
        """Return the user for a Google account id, if present."""

    def create_user(self, info: GoogleUserInfo) -> UserRecord:
        """Create and return a new user record."""

    def update_user(
        self, user_id: UUID, changes: dict[str, object]
    ) -> UserRecord | None:
        """Apply a partial update and return the updated user."""

    def delete_user(self, user_id: UUID) -> None:
        """Delete the user row."""

    def list_users_with_fcm_tokens(self) -> list[UserRecord]:
        """Return every user holding a non-empty push token."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository
    food_item_repository: FoodItemRepository
    media_service: MediaService

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id."""
        return self.repository.get_by_id(user_id)

    def find_by_google_id(self, google_id: str) -> UserRecord | None:
        """Return a user by Google account id."""
        return self.repository.get_by_google_id(google_id)

    def create_from_google(self, info: GoogleUserInfo) -> UserRecord:
        """Create a user from verified Google identity claims."""
        return self.repository.create_user(info)

    def find_or_create(self, info: GoogleUserInfo) -> tuple[UserRecord, bool]:
        """Return the user for the Google identity, creating it if needed."""
        existing = self.repository.get_by_google_id(info.google_id)
        if existing:
            _logger.info("Existing user logged in: google_id=%s", info.google_id)
            return existing, False
        created = self.repository.create_user(info)
        _logger.info("New user created: google_id=%s", info.google_id)
        return created, True

    def update_profile(self, user_id: UUID, changes: dict[str, object]) -> UserRecord:
        """Apply profile changes after checking hobbies against the catalogue."""
        hobbies = changes.get("hobbies")
        if hobbies is not None:
            unknown = [hobby for hobby in hobbies if hobby not in HOBBIES]
            if unknown:
                raise ValidationFailedError(
                    "Hobbies must be in the available hobbies list: "
                    + ", ".join(unknown)
                )
        updated = self.repository.update_user(user_id, changes)
        if updated is None:
            raise NotFoundError("User not found")
        return updated

    def delete_profile(self, user_id: UUID) -> None:
        """Delete a user together with their images and fridge items."""
        self.media_service.delete_all_user_images(user_id)
        self.food_item_repository.delete_by_user(user_id)
        self.repository.delete_user(user_id)

    def list_users_with_push_tokens(self) -> list[UserRecord]:
        """Return users that can receive push notifications."""
        return self.repository.list_users_with_fcm_tokens()
