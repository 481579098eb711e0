"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forum.config import Settings
from forum.interface.api.routes import health, posts, replies
from forum.interface.error import register_error_handlers
from forum.util.di.container import create_container, setup_di
from forum.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before calling this function: start_app.py
    does it in production and tests/conftest.py in tests.

    Args:
        container: DI container to use; the production container by default

    Returns:
        Configured application
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Forum Threads API",
        description="Threaded replies for community forum posts",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",
            "http://localhost:5173",
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance, settings)

    app_instance.include_router(health.router)
    app_instance.include_router(replies.router)
    app_instance.include_router(posts.router)

    return app_instance


# Create app instance for uvicorn
# Logfire must be configured before this module is imported
app = create_app()
