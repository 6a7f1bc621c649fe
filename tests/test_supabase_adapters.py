"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from virtual_fridge.adapters.supabase_food_item_repository import (
    SupabaseFoodItemRepository,
)
from virtual_fridge.adapters.supabase_food_type_repository import (
    SupabaseFoodTypeRepository,
)
from virtual_fridge.adapters.supabase_media_storage import SupabaseMediaStorage
from virtual_fridge.adapters.supabase_user_repository import SupabaseUserRepository
from virtual_fridge.domain.food import Nutrients
from virtual_fridge.domain.users import GoogleUserInfo
from virtual_fridge.errors import RepositoryError


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "update": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def neq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("neq", column, value))
        return self

    def in_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("in", column, value))
        return self

    def ilike(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("ilike", column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.actions.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeBucket:
    objects: dict[str, bytes] = field(default_factory=dict)
    options: list[dict[str, str]] = field(default_factory=list)

    def upload(self, path: str, content: bytes, options: dict[str, str]) -> None:
        self.objects[path] = content
        self.options.append(options)

    def get_public_url(self, path: str) -> str:
        return f"https://project.supabase.co/storage/v1/object/public/media/{path}"

    def remove(self, paths: list[str]) -> None:
        for path in paths:
            self.objects.pop(path, None)

    def list(self, _path: str, options: dict[str, str]) -> list[dict[str, str]]:
        return [
            {"name": name}
            for name in self.objects
            if options["search"] in name
        ]


@dataclass
class FakeStorage:
    buckets: dict[str, FakeBucket] = field(default_factory=dict)

    def from_(self, name: str) -> FakeBucket:
        return self.buckets.setdefault(name, FakeBucket())


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)
    storage: FakeStorage = field(default_factory=FakeStorage)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _user_row(user_id: str, **values: object) -> dict[str, object]:
    return {
        "id": user_id,
        "google_id": "google-1",
        "email": "user@example.com",
        "name": "User",
        **values,
    }


def test_supabase_user_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    user_id = str(uuid4())
    users_table.queue("insert", [_user_row(user_id)])
    users_table.queue(
        "select",
        [
            _user_row(
                user_id,
                hobbies=["Cooking"],
                dietary_preferences={"vegan": True},
                notification_preferences={"expiry_threshold_days": 3},
                created_at="2025-06-01T10:00:00+00:00",
            )
        ],
    )

    repository = SupabaseUserRepository(client)
    created = repository.create_user(
        GoogleUserInfo(google_id="google-1", email="user@example.com", name="User")
    )
    fetched = repository.get_by_google_id("google-1")

    assert str(created.id) == user_id
    assert users_table.last_payload["google_id"] == "google-1"
    assert fetched is not None
    assert fetched.hobbies == ["Cooking"]
    assert fetched.dietary_preferences.vegan is True
    assert fetched.notification_preferences.expiry_threshold_days == 3
    assert fetched.notification_preferences.enable_notifications is True
    assert fetched.created_at == datetime(2025, 6, 1, 10, tzinfo=UTC)


def test_supabase_user_repository_create_failure() -> None:
    repository = SupabaseUserRepository(FakeSupabaseClient())

    with pytest.raises(RepositoryError):
        repository.create_user(
            GoogleUserInfo(google_id="g", email="e@example.com", name="E")
        )


def test_supabase_user_repository_update_adds_timestamp() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    user_id = str(uuid4())
    users_table.queue("update", [_user_row(user_id, bio="Hello")])

    updated = SupabaseUserRepository(client).update_user(
        uuid4(), {"bio": "Hello"}
    )

    assert updated.bio == "Hello"
    assert users_table.last_payload["bio"] == "Hello"
    assert "updated_at" in users_table.last_payload


def test_supabase_user_repository_lists_push_recipients() -> None:
    client = FakeSupabaseClient()
    users_table = client.table("users")
    users_table.queue(
        "select",
        [
            _user_row(str(uuid4()), fcm_token="device-1"),
            _user_row(str(uuid4()), fcm_token=None),
        ],
    )

    users = SupabaseUserRepository(client).list_users_with_fcm_tokens()

    assert [user.fcm_token for user in users] == ["device-1"]
    assert ("neq", "fcm_token", "") in users_table.last_filters


def test_supabase_food_type_repository() -> None:
    client = FakeSupabaseClient()
    types_table = client.table("food_types")
    type_id = str(uuid4())
    row = {
        "id": type_id,
        "name": "Apple",
        "nutrients": {"calories": 52, "protein": None},
        "shelf_life_days": 30,
        "allergens": None,
    }
    types_table.queue("insert", [row])
    types_table.queue("select", [row])
    types_table.queue("select", [])

    repository = SupabaseFoodTypeRepository(client)
    created = repository.create_type({"name": "Apple"})
    found = repository.find_by_name("100%_apple")
    missing = repository.find_by_barcode("404")

    assert created.nutrients == Nutrients(calories="52")
    assert created.allergens == []
    assert found.name == "Apple"
    assert ("ilike", "name", r"100\%\_apple") in types_table.last_filters
    assert missing is None


def test_supabase_food_type_repository_batch_lookup() -> None:
    client = FakeSupabaseClient()
    types_table = client.table("food_types")
    first, second = uuid4(), uuid4()
    types_table.queue("select", [{"id": str(first), "name": "Kiwi"}])

    found = SupabaseFoodTypeRepository(client).get_types([first, second])

    assert [food_type.name for food_type in found] == ["Kiwi"]
    assert ("in", "id", [str(first), str(second)]) in types_table.last_filters


def test_supabase_food_item_repository_serializes_values() -> None:
    client = FakeSupabaseClient()
    items_table = client.table("food_items")
    item_id, type_id, user_id = uuid4(), uuid4(), uuid4()
    items_table.queue(
        "insert",
        [
            {
                "id": str(item_id),
                "type_id": str(type_id),
                "user_id": str(user_id),
                "expiration_date": "2025-06-12T00:00:00+00:00",
                "percent_left": 100,
            }
        ],
    )

    repository = SupabaseFoodItemRepository(client)
    item = repository.create_item(
        {
            "user_id": user_id,
            "type_id": type_id,
            "expiration_date": datetime(2025, 6, 12, tzinfo=UTC),
            "percent_left": 100,
        }
    )

    assert items_table.last_payload == {
        "user_id": str(user_id),
        "type_id": str(type_id),
        "expiration_date": "2025-06-12T00:00:00+00:00",
        "percent_left": 100,
    }
    assert item.expiration_date == datetime(2025, 6, 12, tzinfo=UTC)


def test_supabase_food_item_repository_delete_by_user() -> None:
    client = FakeSupabaseClient()
    items_table = client.table("food_items")
    user_id = uuid4()

    SupabaseFoodItemRepository(client).delete_by_user(user_id)

    assert items_table.actions == ["delete"]
    assert items_table.last_filters == [("eq", "user_id", str(user_id))]


def test_supabase_media_storage() -> None:
    client = FakeSupabaseClient()
    storage = SupabaseMediaStorage(client, "media")
    user_id = uuid4()

    url = storage.upload(f"{user_id}-1.jpg", b"jpeg", "image/jpeg")
    storage.upload("someone-else.jpg", b"jpeg", "image/jpeg")
    names = storage.list_names(f"{user_id}-")
    storage.remove(names)

    bucket = client.storage.from_("media")
    assert url.endswith(f"/media/{user_id}-1.jpg")
    assert bucket.options[0] == {"content-type": "image/jpeg"}
    assert names == [f"{user_id}-1.jpg"]
    assert list(bucket.objects) == ["someone-else.jpg"]
