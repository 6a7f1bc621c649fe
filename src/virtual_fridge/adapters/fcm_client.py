"""Firebase Cloud Messaging push sender."""

import asyncio
import json
import logging
from dataclasses import dataclass, field

import firebase_admin
from firebase_admin import credentials, exceptions, messaging

from virtual_fridge.errors import PushDeliveryError, PushNotConfiguredError
from virtual_fridge.services.notifications import PushSender

_logger = logging.getLogger(__name__)


@dataclass
class FirebasePushSender(PushSender):
    """Sends pushes through the Firebase Admin SDK.

    The SDK is initialized once from a service account JSON blob. Missing or
    invalid credentials are logged and leave the sender uninitialized for
    the lifetime of the process.
    """

    service_account: str | None
    _app: firebase_admin.App | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self._app = _initialize(self.service_account)

    def is_initialized(self) -> bool:
        """Return whether credentials were loaded successfully."""
        return self._app is not None

    async def send(
        self, token: str, title: str, body: str, data: dict[str, str]
    ) -> str:
        """Deliver one message and return the Firebase message id."""
        if self._app is None:
            raise PushNotConfiguredError(
                "Firebase not initialized. Cannot send notification."
            )
        message = messaging.Message(
            notification=messaging.Notification(title=title, body=body),
            data=data,
            token=token,
        )
        try:
            return await asyncio.to_thread(messaging.send, message, app=self._app)
        except (exceptions.FirebaseError, ValueError) as exc:
            raise PushDeliveryError(f"Failed to send notification: {exc}") from exc


def _initialize(service_account: str | None) -> firebase_admin.App | None:
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass
    if not service_account:
        _logger.warning(
            "Firebase service account not configured. Notifications will not work."
        )
        return None
    try:
        certificate = credentials.Certificate(json.loads(service_account))
        app = firebase_admin.initialize_app(certificate)
    except (ValueError, OSError) as exc:
        _logger.error("Failed to initialize Firebase Admin: %s", exc)
        return None
    _logger.info("Firebase Admin initialized successfully")
    return app
