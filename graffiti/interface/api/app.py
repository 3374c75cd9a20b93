"""FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from graffiti.domain.service import SubscriptionHub
from graffiti.interface.api.routes import health, live, tags
from graffiti.util.di.container import create_container, setup_di
from graffiti.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the subscription hub eagerly and close the container on exit."""
    container = app.state.dishka_container
    await container.get(SubscriptionHub)
    yield
    await container.close()


def create_app() -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    """
    app_instance = FastAPI(
        title="Graffiti Core API",
        description="Geotagged content store with live bounding-box subscriptions",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Client-Id"],
        max_age=600,
    )

    container = create_container()
    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(live.router)
    app_instance.include_router(tags.router)

    return app_instance


# Note: Logfire must be configured before this module is imported
app = create_app()
