"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from uuid import UUID, uuid4

import pytest

from virtual_fridge.config import Settings
from virtual_fridge.containers import AppContainer
from virtual_fridge.domain.food import FoodItem, FoodType, Nutrients
from virtual_fridge.domain.users import (
    DietaryPreferences,
    GoogleUserInfo,
    NotificationPreferences,
    UserRecord,
)
from virtual_fridge.errors import (
    AuthenticationError,
    PushDeliveryError,
    PushNotConfiguredError,
    RepositoryError,
)
from virtual_fridge.services.auth import AuthService, GoogleTokenVerifier
from virtual_fridge.services.food_items import FoodItemRepository, FoodItemService
from virtual_fridge.services.food_types import FoodTypeRepository, FoodTypeService
from virtual_fridge.services.fridge import FridgeService
from virtual_fridge.services.media import MediaService, MediaStorage
from virtual_fridge.services.notifications import (
    ExpiryNotificationService,
    NotificationService,
    PushSender,
)
from virtual_fridge.services.recipes import (
    AiRecipeService,
    MealDbClient,
    RecipeService,
    TextGenerationClient,
)
from virtual_fridge.services.scheduler import NotificationScheduler
from virtual_fridge.services.users import UserRepository, UserService
from virtual_fridge.services.vision import ProduceVisionService, VisionClient

TODAY = date(2025, 6, 10)
JWT_SECRET = "test-secret"


def make_user(
    fcm_token: str | None = "device-token",
    threshold: int | None = None,
    email: str = "user@example.com",
) -> UserRecord:
    """Build a user with an optional push token and expiry threshold."""
    preferences = (
        NotificationPreferences(expiry_threshold_days=threshold)
        if threshold is not None
        else None
    )
    return UserRecord(
        id=uuid4(),
        google_id=f"google-{uuid4()}",
        email=email,
        name="Test User",
        notification_preferences=preferences,
        fcm_token=fcm_token,
    )


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)
    fail_listing: bool = False

    def add(self, user: UserRecord) -> UserRecord:
        self.users[user.id] = user
        return user

    def get_by_id(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def get_by_google_id(self, google_id: str) -> UserRecord | None:
        return next(
            (user for user in self.users.values() if user.google_id == google_id),
            None,
        )

    def create_user(self, info: GoogleUserInfo) -> UserRecord:
        return self.add(
            UserRecord(
                id=uuid4(),
                google_id=info.google_id,
                email=info.email,
                name=info.name,
                profile_picture=info.profile_picture,
            )
        )

    def update_user(
        self, user_id: UUID, changes: dict[str, object]
    ) -> UserRecord | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        values = dict(changes)
        if isinstance(values.get("dietary_preferences"), dict):
            values["dietary_preferences"] = DietaryPreferences(
                **values["dietary_preferences"]
            )
        if isinstance(values.get("notification_preferences"), dict):
            values["notification_preferences"] = NotificationPreferences(
                **values["notification_preferences"]
            )
        return self.add(replace(user, **values))

    def delete_user(self, user_id: UUID) -> None:
        self.users.pop(user_id, None)

    def list_users_with_fcm_tokens(self) -> list[UserRecord]:
        if self.fail_listing:
            raise RepositoryError("users table unavailable")
        return [user for user in self.users.values() if user.fcm_token]


@dataclass
class InMemoryFoodTypeRepository(FoodTypeRepository):
    """In-memory food type repository for tests."""

    types: dict[UUID, FoodType] = field(default_factory=dict)

    def add(self, name: str, **values: object) -> FoodType:
        food_type = FoodType(id=uuid4(), name=name, **values)
        self.types[food_type.id] = food_type
        return food_type

    def create_type(self, payload: dict[str, object]) -> FoodType:
        values = dict(payload)
        nutrients = values.pop("nutrients", None)
        return self.add(
            nutrients=Nutrients.from_dict(nutrients) if nutrients else None,
            **values,
        )

    def update_type(self, type_id: UUID, payload: dict[str, object]) -> FoodType | None:
        food_type = self.types.get(type_id)
        if food_type is None:
            return None
        values = dict(payload)
        if "nutrients" in values:
            values["nutrients"] = Nutrients.from_dict(values["nutrients"])
        updated = replace(food_type, **values)
        self.types[type_id] = updated
        return updated

    def get_type(self, type_id: UUID) -> FoodType | None:
        return self.types.get(type_id)

    def get_types(self, type_ids: list[UUID]) -> list[FoodType]:
        return [self.types[type_id] for type_id in type_ids if type_id in self.types]

    def delete_type(self, type_id: UUID) -> FoodType | None:
        return self.types.pop(type_id, None)

    def find_by_barcode(self, barcode_id: str) -> FoodType | None:
        return next(
            (t for t in self.types.values() if t.barcode_id == barcode_id), None
        )

    def find_by_name(self, name: str) -> FoodType | None:
        return next(
            (t for t in self.types.values() if t.name.lower() == name.lower()), None
        )


@dataclass
class InMemoryFoodItemRepository(FoodItemRepository):
    """In-memory food item repository for tests."""

    items: dict[UUID, FoodItem] = field(default_factory=dict)
    failing_users: set[UUID] = field(default_factory=set)

    def add(
        self,
        user_id: UUID,
        type_id: UUID,
        expiration_date: datetime | None,
        percent_left: int = 100,
    ) -> FoodItem:
        item = FoodItem(
            id=uuid4(),
            type_id=type_id,
            user_id=user_id,
            expiration_date=expiration_date,
            percent_left=percent_left,
        )
        self.items[item.id] = item
        return item

    def create_item(self, payload: dict[str, object]) -> FoodItem:
        return self.add(
            user_id=payload["user_id"],
            type_id=payload["type_id"],
            expiration_date=payload.get("expiration_date"),
            percent_left=payload.get("percent_left", 100),
        )

    def update_item(self, item_id: UUID, payload: dict[str, object]) -> FoodItem | None:
        item = self.items.get(item_id)
        if item is None:
            return None
        updated = replace(item, **payload)
        self.items[item_id] = updated
        return updated

    def get_item(self, item_id: UUID) -> FoodItem | None:
        return self.items.get(item_id)

    def delete_item(self, item_id: UUID) -> FoodItem | None:
        return self.items.pop(item_id, None)

    def list_by_user(self, user_id: UUID) -> list[FoodItem]:
        if user_id in self.failing_users:
            raise RepositoryError("food_items query failed")
        return [item for item in self.items.values() if item.user_id == user_id]

    def delete_by_user(self, user_id: UUID) -> None:
        for item_id in [i.id for i in self.items.values() if i.user_id == user_id]:
            del self.items[item_id]


@dataclass
class InMemoryMediaStorage(MediaStorage):
    """In-memory blob store for tests."""

    objects: dict[str, bytes] = field(default_factory=dict)

    def upload(self, path: str, content: bytes, content_type: str) -> str:
        self.objects[path] = content
        return f"https://storage.test/media/{path}"

    def list_names(self, prefix: str) -> list[str]:
        return [name for name in self.objects if name.startswith(prefix)]

    def remove(self, paths: list[str]) -> None:
        for path in paths:
            self.objects.pop(path, None)


@dataclass
class FakeGoogleVerifier(GoogleTokenVerifier):
    """Accepts only the registered ID tokens."""

    identities: dict[str, GoogleUserInfo] = field(default_factory=dict)

    async def verify(self, id_token: str) -> GoogleUserInfo:
        if id_token not in self.identities:
            raise AuthenticationError("Invalid Google token")
        return self.identities[id_token]


@dataclass
class FakePushSender(PushSender):
    """Records pushes; tokens in failing_tokens are rejected."""

    initialized: bool = True
    sent: list[dict[str, object]] = field(default_factory=list)
    failing_tokens: set[str] = field(default_factory=set)

    def is_initialized(self) -> bool:
        return self.initialized

    async def send(
        self, token: str, title: str, body: str, data: dict[str, str]
    ) -> str:
        if not self.initialized:
            raise PushNotConfiguredError("Firebase not initialized")
        if token in self.failing_tokens:
            raise PushDeliveryError("Requested entity was not found.")
        self.sent.append({"token": token, "title": title, "body": body, "data": data})
        return f"projects/test/messages/{len(self.sent)}"


@dataclass
class FakeOpenFoodFactsClient:
    """Serves products from a dict keyed by barcode."""

    products: dict[str, dict[str, object]] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        self.calls.append(barcode)
        return self.products.get(barcode)


@dataclass
class FakeVisionClient(VisionClient):
    """Fake vision client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "is_produce": True,
            "category": "fruit",
            "name": "Banana",
            "nutrients": {"calories": "89", "protein": "1.1"},
            "shelf_life_days": 5,
        }
    )

    async def extract(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        image_data_url: str,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        return self.payload


@dataclass
class FakeMealDbClient(MealDbClient):
    """Recipe catalogue with one meal."""

    meals: list[dict] = field(
        default_factory=lambda: [
            {
                "idMeal": "52940",
                "strMeal": "Brown Stew Chicken",
                "strInstructions": "Squeeze lime over chicken.",
                "strMealThumb": "https://www.themealdb.com/images/brown.jpg",
                "strYoutube": "https://www.youtube.com/watch?v=_gFB1fkNhXs",
                "strIngredient1": "Chicken",
                "strMeasure1": "1 whole",
                "strIngredient2": "Tomato",
                "strMeasure2": "1 chopped",
                "strIngredient3": "",
                "strMeasure3": " ",
                "strSource": None,
                "strImageSource": None,
            }
        ]
    )
    filters: list[list[str]] = field(default_factory=list)

    async def filter_by_ingredients(self, ingredients: list[str]) -> list[dict]:
        self.filters.append(ingredients)
        return [{"idMeal": meal["idMeal"]} for meal in self.meals]

    async def lookup_meal(self, meal_id: str) -> dict | None:
        return next((m for m in self.meals if m["idMeal"] == meal_id), None)


@dataclass
class FakeTextClient(TextGenerationClient):
    """Returns canned recipe text and records prompts."""

    text: str = "# Chicken Rice\n\n1. Cook the rice."
    prompts: list[str] = field(default_factory=list)

    async def generate(
        self, *, model: str, reasoning_effort: str | None, store: bool, prompt: str
    ) -> tuple[str, str | None]:
        self.prompts.append(prompt)
        return self.text, model


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        jwt_secret=JWT_SECRET,
        google_client_id="client-id.apps.googleusercontent.com",
        openai_api_key="openai-key",
        enable_scheduler=False,
        environment="test",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def food_type_repository() -> InMemoryFoodTypeRepository:
    return InMemoryFoodTypeRepository()


@pytest.fixture
def food_item_repository() -> InMemoryFoodItemRepository:
    return InMemoryFoodItemRepository()


@pytest.fixture
def media_storage() -> InMemoryMediaStorage:
    return InMemoryMediaStorage()


@pytest.fixture
def push_sender() -> FakePushSender:
    return FakePushSender()


@pytest.fixture
def google_verifier() -> FakeGoogleVerifier:
    return FakeGoogleVerifier()


@pytest.fixture
def openfoodfacts_client() -> FakeOpenFoodFactsClient:
    return FakeOpenFoodFactsClient()


@pytest.fixture
def vision_client() -> FakeVisionClient:
    return FakeVisionClient()


@pytest.fixture
def user_service(
    user_repository: InMemoryUserRepository,
    food_item_repository: InMemoryFoodItemRepository,
    media_storage: InMemoryMediaStorage,
) -> UserService:
    return UserService(
        repository=user_repository,
        food_item_repository=food_item_repository,
        media_service=MediaService(media_storage),
    )


@pytest.fixture
def expiry_service(
    user_service: UserService,
    food_item_repository: InMemoryFoodItemRepository,
    food_type_repository: InMemoryFoodTypeRepository,
    push_sender: FakePushSender,
) -> ExpiryNotificationService:
    return ExpiryNotificationService(
        user_service=user_service,
        food_item_repository=food_item_repository,
        food_type_service=FoodTypeService(food_type_repository),
        notification_service=NotificationService(push_sender),
        today=lambda: TODAY,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    user_service: UserService,
    food_type_repository: InMemoryFoodTypeRepository,
    food_item_repository: InMemoryFoodItemRepository,
    google_verifier: FakeGoogleVerifier,
    openfoodfacts_client: FakeOpenFoodFactsClient,
    vision_client: FakeVisionClient,
    expiry_service: ExpiryNotificationService,
) -> AppContainer:
    auth_service = AuthService(
        token_verifier=google_verifier,
        user_service=user_service,
        jwt_secret=settings.jwt_secret,
        expires_hours=settings.jwt_expires_hours,
    )
    vision_service = ProduceVisionService(
        client=vision_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
    )
    fridge_service = FridgeService(
        food_item_repository=food_item_repository,
        food_type_repository=food_type_repository,
        openfoodfacts_client=openfoodfacts_client,
        vision_service=vision_service,
        today=lambda: TODAY,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=user_service,
        auth_service=auth_service,
        media_service=user_service.media_service,
        food_type_service=FoodTypeService(food_type_repository),
        food_item_service=FoodItemService(food_item_repository, food_type_repository),
        fridge_service=fridge_service,
        recipe_service=RecipeService(FakeMealDbClient()),
        ai_recipe_service=AiRecipeService(
            client=FakeTextClient(),
            model=settings.openai_model,
            reasoning_effort=settings.openai_reasoning_effort,
            store=settings.openai_store,
        ),
        notification_service=expiry_service.notification_service,
        expiry_notification_service=expiry_service,
        scheduler=NotificationScheduler(
            job=expiry_service.run_batch,
            cron=settings.notification_cron,
        ),
        close_resources=close_resources,
    )


@pytest.fixture
def auth_headers(container: AppContainer):
    """Return a factory producing bearer headers for a stored user."""

    def factory(user: UserRecord) -> dict[str, str]:
        token = container.auth_service.issue_token(user)
        return {"Authorization": f"Bearer {token}"}

    return factory
