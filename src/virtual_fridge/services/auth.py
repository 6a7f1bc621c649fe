"""Google sign-in and access token handling."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

import jwt

from virtual_fridge.domain.users import GoogleUserInfo, UserRecord
from virtual_fridge.errors import AuthenticationError, ConflictError, NotFoundError
from virtual_fridge.services.users import UserService

_JWT_ALGORITHM = "HS256"

_logger = logging.getLogger(__name__)


class GoogleTokenVerifier(Protocol):
    """Interface for verifying Google ID tokens."""

    async def verify(self, id_token: str) -> GoogleUserInfo:
        """Return identity claims or raise AuthenticationError."""


@dataclass(frozen=True)
class AuthResult:
    """Access token issued for a user."""

    token: str
    user: UserRecord


@dataclass
class AuthService:
    """Signs users up and in with Google and issues access tokens."""

    token_verifier: GoogleTokenVerifier
    user_service: UserService
    jwt_secret: str
    expires_hours: int = 19
    clock: Callable[[], datetime] = field(default=lambda: datetime.now(tz=UTC))

    async def sign_up(self, id_token: str) -> AuthResult:
        """Create a new account for the Google identity."""
        info = await self._verify(id_token)
        if self.user_service.find_by_google_id(info.google_id):
            raise ConflictError("User already exists")
        user = self.user_service.create_from_google(info)
        return AuthResult(token=self.issue_token(user), user=user)

    async def sign_in(self, id_token: str) -> AuthResult:
        """Sign in an existing account."""
        info = await self._verify(id_token)
        user = self.user_service.find_by_google_id(info.google_id)
        if user is None:
            raise NotFoundError("User not found")
        return AuthResult(token=self.issue_token(user), user=user)

    async def authenticate(self, id_token: str) -> AuthResult:
        """Sign in, creating the account on first use."""
        info = await self._verify(id_token)
        user, _ = self.user_service.find_or_create(info)
        return AuthResult(token=self.issue_token(user), user=user)

    def issue_token(self, user: UserRecord, expires_hours: int | None = None) -> str:
        """Sign an access token carrying the user id."""
        if expires_hours is None:
            expires_hours = self.expires_hours
        lifetime = timedelta(hours=expires_hours)
        payload = {
            "id": str(user.id),
            "email": user.email,
            "exp": self.clock() + lifetime,
        }
        return jwt.encode(payload, self.jwt_secret, algorithm=_JWT_ALGORITHM)

    def decode_token(self, token: str) -> UUID:
        """Return the user id from a token; raises jwt.InvalidTokenError."""
        payload = jwt.decode(token, self.jwt_secret, algorithms=[_JWT_ALGORITHM])
        try:
            return UUID(str(payload["id"]))
        except (KeyError, ValueError) as exc:
            raise jwt.InvalidTokenError("Token does not carry a user id") from exc

    async def _verify(self, id_token: str) -> GoogleUserInfo:
        try:
            return await self.token_verifier.verify(id_token)
        except AuthenticationError:
            raise
        except Exception as exc:
            _logger.exception("Google token verification failed")
            raise AuthenticationError("Invalid Google token") from exc
