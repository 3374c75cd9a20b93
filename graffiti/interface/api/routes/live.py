"""Live subscription WebSocket route.

Protocol (JSON text frames):

    client -> {"type": "subscribe", "lat": .., "lng": .., "lat_delta": .., "lng_delta": ..}
    client -> {"type": "move", "lat": .., "lng": .., "lat_delta": .., "lng_delta": ..}
    client -> {"type": "unsubscribe"}

    server -> {"type": "subscribed", "subscription_id": ..}
    server -> {"type": "update", "subscription_id": .., "items": [..], "truncated": .., "error": ..}
    server -> {"type": "error", "detail": ..}

A connection holds at most one subscription; subscribing again replaces it.
Every outgoing frame goes through one send queue, so updates reach the
client in the order the hub produced them.
"""

import asyncio
from typing import Any

import logfire
from dishka import AsyncContainer
from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import BaseModel, ValidationError as PydanticValidationError

from graffiti.application.usecase.subscription import (
    SubscribeRequest,
    SubscribeUseCase,
    UnsubscribeRequest,
    UnsubscribeUseCase,
    UpdateSubscriptionAreaRequest,
    UpdateSubscriptionAreaUseCase,
)
from graffiti.domain.error import DomainError
from graffiti.domain.model.subscription import SubscriptionUpdate

router = APIRouter(tags=["live"])


class ViewportMessage(BaseModel):
    """Viewport carried by subscribe and move messages."""

    lat: float
    lng: float
    lat_delta: float
    lng_delta: float


class LiveConnection:
    """Per-socket state: current subscription and the outgoing frame queue."""

    def __init__(self, websocket: WebSocket, container: AsyncContainer) -> None:
        self.websocket = websocket
        self.container = container
        self.subscription_id: str | None = None
        self.outbox: asyncio.Queue[dict[str, Any] | None] = asyncio.Queue()

    def on_update(self, update: SubscriptionUpdate) -> None:
        """Hub callback; never blocks the hub worker."""
        frame = {"type": "update", **update.model_dump(mode="json")}
        self.outbox.put_nowait(frame)

    async def send_loop(self) -> None:
        while True:
            frame = await self.outbox.get()
            if frame is None:
                return
            await self.websocket.send_json(frame)

    async def handle(self, message: Any) -> None:
        kind = message.get("type") if isinstance(message, dict) else None
        if kind == "subscribe":
            await self.subscribe(ViewportMessage.model_validate(message))
        elif kind == "move":
            await self.move(ViewportMessage.model_validate(message))
        elif kind == "unsubscribe":
            await self.unsubscribe()
        else:
            self.outbox.put_nowait(
                {"type": "error", "detail": f"Unknown message type: {kind}"}
            )

    async def subscribe(self, viewport: ViewportMessage) -> None:
        await self.unsubscribe()
        async with self.container() as request_container:
            use_case = await request_container.get(SubscribeUseCase)
            # The initial result is delivered before execute returns, so the
            # acknowledgement is queued behind it.
            response = await use_case.execute(
                SubscribeRequest(**viewport.model_dump(), on_update=self.on_update)
            )
        self.subscription_id = response.subscription_id
        self.outbox.put_nowait(
            {"type": "subscribed", "subscription_id": response.subscription_id}
        )

    async def move(self, viewport: ViewportMessage) -> None:
        if self.subscription_id is None:
            self.outbox.put_nowait({"type": "error", "detail": "Not subscribed"})
            return
        async with self.container() as request_container:
            use_case = await request_container.get(UpdateSubscriptionAreaUseCase)
            await use_case.execute(
                UpdateSubscriptionAreaRequest(
                    subscription_id=self.subscription_id, **viewport.model_dump()
                )
            )

    async def unsubscribe(self) -> None:
        if self.subscription_id is None:
            return
        subscription_id, self.subscription_id = self.subscription_id, None
        async with self.container() as request_container:
            use_case = await request_container.get(UnsubscribeUseCase)
            await use_case.execute(UnsubscribeRequest(subscription_id=subscription_id))


@router.websocket("/tags/live")
@inject
async def live_tags(
    websocket: WebSocket, container: FromDishka[AsyncContainer]
) -> None:
    """Stream viewport results as the store changes."""
    await websocket.accept()
    connection = LiveConnection(websocket, container)
    sender = asyncio.create_task(connection.send_loop())

    with logfire.span("api.live_tags"):
        try:
            while True:
                message = await websocket.receive_json()
                try:
                    await connection.handle(message)
                except (DomainError, PydanticValidationError) as e:
                    connection.outbox.put_nowait({"type": "error", "detail": str(e)})
        except WebSocketDisconnect:
            logfire.info(
                "Live connection closed", subscription_id=connection.subscription_id
            )
        finally:
            await connection.unsubscribe()
            connection.outbox.put_nowait(None)
            try:
                await sender
            except (WebSocketDisconnect, RuntimeError):
                # Socket already gone; pending frames are dropped
                pass
