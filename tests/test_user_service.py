"""Tests for user, auth and media services."""

import asyncio
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt
import pytest

from virtual_fridge.domain.users import GoogleUserInfo
from virtual_fridge.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationFailedError,
)
from virtual_fridge.services.auth import AuthService
from virtual_fridge.services.media import MediaService

from tests.conftest import (
    JWT_SECRET,
    FakeGoogleVerifier,
    InMemoryMediaStorage,
    make_user,
)

BOB = GoogleUserInfo(google_id="google-bob", email="bob@example.com", name="Bob")


class _BrokenVerifier:
    async def verify(self, id_token: str) -> GoogleUserInfo:
        raise RuntimeError("tokeninfo unreachable")


def _auth_service(user_service, verifier=None) -> AuthService:
    return AuthService(
        token_verifier=verifier or FakeGoogleVerifier({"token-bob": BOB}),
        user_service=user_service,
        jwt_secret=JWT_SECRET,
        clock=lambda: datetime(2030, 1, 1, tzinfo=UTC),
    )


def test_find_or_create_reuses_existing_user(user_service, user_repository) -> None:
    first, created = user_service.find_or_create(BOB)
    second, created_again = user_service.find_or_create(BOB)

    assert created is True
    assert created_again is False
    assert first.id == second.id
    assert len(user_repository.users) == 1


def test_update_profile_for_missing_user(user_service) -> None:
    with pytest.raises(NotFoundError):
        user_service.update_profile(uuid4(), {"bio": "Hi"})


def test_update_profile_lists_unknown_hobbies(user_service, user_repository) -> None:
    user = user_repository.add(make_user())

    with pytest.raises(ValidationFailedError, match="Skydiving"):
        user_service.update_profile(user.id, {"hobbies": ["Yoga", "Skydiving"]})


def test_sign_up_and_sign_in(user_service) -> None:
    service = _auth_service(user_service)

    signed_up = asyncio.run(service.sign_up("token-bob"))
    signed_in = asyncio.run(service.sign_in("token-bob"))

    assert signed_up.user.id == signed_in.user.id
    assert service.decode_token(signed_in.token) == signed_up.user.id
    with pytest.raises(ConflictError):
        asyncio.run(service.sign_up("token-bob"))


def test_sign_in_unknown_user(user_service) -> None:
    with pytest.raises(NotFoundError):
        asyncio.run(_auth_service(user_service).sign_in("token-bob"))


def test_verifier_failures_become_authentication_errors(user_service) -> None:
    service = _auth_service(user_service, verifier=_BrokenVerifier())

    with pytest.raises(AuthenticationError):
        asyncio.run(service.authenticate("token-bob"))


def test_issued_token_carries_expiry(user_service) -> None:
    user = make_user()
    service = _auth_service(user_service)

    token = service.issue_token(user, expires_hours=24)

    payload = jwt.decode(token, JWT_SECRET, algorithms=["HS256"])
    issued_at = datetime(2030, 1, 1, tzinfo=UTC)
    assert payload["exp"] == int((issued_at + timedelta(hours=24)).timestamp())
    assert payload["email"] == user.email


def test_zero_hour_token_expires_at_issue_time(user_service) -> None:
    token = _auth_service(user_service).issue_token(make_user(), expires_hours=0)

    payload = jwt.decode(
        token, JWT_SECRET, algorithms=["HS256"], options={"verify_exp": False}
    )
    assert payload["exp"] == int(datetime(2030, 1, 1, tzinfo=UTC).timestamp())


def test_decode_token_without_user_id(user_service) -> None:
    token = jwt.encode({"email": "x@example.com"}, JWT_SECRET, algorithm="HS256")

    with pytest.raises(jwt.InvalidTokenError):
        _auth_service(user_service).decode_token(token)


def test_save_image_names_object_by_user_and_time() -> None:
    storage = InMemoryMediaStorage()
    service = MediaService(
        storage, clock=lambda: datetime(2025, 6, 10, 12, 0, tzinfo=UTC)
    )
    user_id = uuid4()

    url = service.save_image(user_id, "fridge.JPG", b"jpeg")

    assert list(storage.objects) == [f"{user_id}-1749556800000.jpg"]
    assert url.endswith(f"{user_id}-1749556800000.jpg")


def test_save_image_rejects_crlf_in_filename() -> None:
    service = MediaService(InMemoryMediaStorage())

    with pytest.raises(ValidationFailedError):
        service.save_image(uuid4(), "evil\r\n.jpg", b"jpeg")


def test_delete_all_user_images_swallows_storage_errors() -> None:
    class _BrokenStorage(InMemoryMediaStorage):
        def list_names(self, prefix: str) -> list[str]:
            raise OSError("storage offline")

    MediaService(_BrokenStorage()).delete_all_user_images(uuid4())
