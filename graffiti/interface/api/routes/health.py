"""Health check routes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from graffiti.config import Settings
from graffiti.domain.service import SubscriptionHub

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    environment: str
    live_subscriptions: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings], hub: FromDishka[SubscriptionHub]
) -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version="0.1.0",
        environment=settings.environment,
        live_subscriptions=hub.active_count,
    )
