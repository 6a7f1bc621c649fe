"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from virtual_fridge.adapters.fcm_client import FirebasePushSender
from virtual_fridge.adapters.google_token_client import HttpxGoogleTokenVerifier
from virtual_fridge.adapters.mealdb_client import HttpxMealDbClient
from virtual_fridge.adapters.openai_text_client import OpenAITextClient
from virtual_fridge.adapters.openai_vision_client import OpenAIVisionClient
from virtual_fridge.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from virtual_fridge.adapters.supabase_food_item_repository import (
    SupabaseFoodItemRepository,
)
from virtual_fridge.adapters.supabase_food_type_repository import (
    SupabaseFoodTypeRepository,
)
from virtual_fridge.adapters.supabase_media_storage import SupabaseMediaStorage
from virtual_fridge.adapters.supabase_user_repository import SupabaseUserRepository
from virtual_fridge.config import Settings
from virtual_fridge.services.auth import AuthService
from virtual_fridge.services.food_items import FoodItemService
from virtual_fridge.services.food_types import FoodTypeService
from virtual_fridge.services.fridge import FridgeService
from virtual_fridge.services.media import MediaService
from virtual_fridge.services.notifications import (
    ExpiryNotificationService,
    NotificationService,
)
from virtual_fridge.services.recipes import AiRecipeService, RecipeService
from virtual_fridge.services.scheduler import NotificationScheduler
from virtual_fridge.services.users import UserService
from virtual_fridge.services.vision import ProduceVisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    auth_service: AuthService
    media_service: MediaService
    food_type_service: FoodTypeService
    food_item_service: FoodItemService
    fridge_service: FridgeService
    recipe_service: RecipeService
    ai_recipe_service: AiRecipeService
    notification_service: NotificationService
    expiry_notification_service: ExpiryNotificationService
    scheduler: NotificationScheduler
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    food_type_repository = SupabaseFoodTypeRepository(supabase_client)
    food_item_repository = SupabaseFoodItemRepository(supabase_client)
    media_service = MediaService(
        SupabaseMediaStorage(supabase_client, resolved_settings.supabase_media_bucket)
    )
    user_service = UserService(
        repository=user_repository,
        food_item_repository=food_item_repository,
        media_service=media_service,
    )
    google_verifier = HttpxGoogleTokenVerifier.create(
        resolved_settings.google_client_id
    )
    auth_service = AuthService(
        token_verifier=google_verifier,
        user_service=user_service,
        jwt_secret=resolved_settings.jwt_secret,
        expires_hours=resolved_settings.jwt_expires_hours,
    )
    food_type_service = FoodTypeService(food_type_repository)
    food_item_service = FoodItemService(food_item_repository, food_type_repository)

    vision_client = OpenAIVisionClient.create(resolved_settings.openai_api_key)
    text_client = OpenAITextClient.create(resolved_settings.openai_api_key)
    vision_service = ProduceVisionService(
        client=vision_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    openfoodfacts_client = HttpxOpenFoodFactsClient.create(
        resolved_settings.openfoodfacts_base_url
    )
    fridge_service = FridgeService(
        food_item_repository=food_item_repository,
        food_type_repository=food_type_repository,
        openfoodfacts_client=openfoodfacts_client,
        vision_service=vision_service,
    )
    mealdb_client = HttpxMealDbClient.create(resolved_settings.themealdb_base_url)
    recipe_service = RecipeService(mealdb_client)
    ai_recipe_service = AiRecipeService(
        client=text_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )

    notification_service = NotificationService(
        FirebasePushSender(resolved_settings.firebase_service_account)
    )
    expiry_notification_service = ExpiryNotificationService(
        user_service=user_service,
        food_item_repository=food_item_repository,
        food_type_service=food_type_service,
        notification_service=notification_service,
    )
    scheduler = NotificationScheduler(
        job=expiry_notification_service.run_batch,
        cron=resolved_settings.notification_cron,
        timezone=resolved_settings.notification_timezone,
    )

    async def close_resources() -> None:
        await google_verifier.close()
        await openfoodfacts_client.close()
        await mealdb_client.close()
        await vision_client.close()
        await text_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        auth_service=auth_service,
        media_service=media_service,
        food_type_service=food_type_service,
        food_item_service=food_item_service,
        fridge_service=fridge_service,
        recipe_service=recipe_service,
        ai_recipe_service=ai_recipe_service,
        notification_service=notification_service,
        expiry_notification_service=expiry_notification_service,
        scheduler=scheduler,
        close_resources=close_resources,
    )
