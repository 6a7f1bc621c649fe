"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from virtual_fridge.api import (
    auth,
    food_items,
    food_types,
    fridge,
    notifications,
    recipes,
    users,
)
from virtual_fridge.api.errors import register_error_handlers
from virtual_fridge.app_logging import configure_logging
from virtual_fridge.containers import AppContainer

API_PREFIX = "/api"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        if state_container.notification_service.is_initialized():
            logger.info("Firebase Admin SDK: INITIALIZED")
        else:
            logger.error(
                "Firebase Admin SDK: NOT INITIALIZED. Notifications will not work; "
                "set FIREBASE_SERVICE_ACCOUNT"
            )
        if state_container.settings.enable_scheduler:
            state_container.scheduler.start()
        yield
        state_container.scheduler.stop()
        await state_container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    register_error_handlers(app)

    routers = [
        auth.router,
        users.router,
        users.hobbies_router,
        food_types.router,
        food_items.router,
        fridge.router,
        fridge.media_router,
        recipes.router,
        notifications.router,
        notifications.admin_router,
    ]
    if container.settings.test_auth_enabled:
        routers.append(auth.test_router)
    for router in routers:
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
