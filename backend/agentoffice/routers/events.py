from __future__ import annotations

import asyncio
import json
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from agentoffice.routers.deps import get_office
from agentoffice.services.office import OfficeSession

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])


@router.get("/events")
async def recent_events(
    limit: int | None = None, office: OfficeSession = Depends(get_office)
):
    return [e.to_dict() for e in office.recent_events(limit)]


@router.delete("/events")
async def clear_events(office: OfficeSession = Depends(get_office)):
    office.clear_events()
    return {"ok": True}


async def _send(ws: WebSocket, payload: dict):
    await ws.send_text(json.dumps(payload, default=str))


@router.websocket("/ws/events")
async def events_ws(ws: WebSocket):
    office: OfficeSession | None = getattr(ws.app.state, "office", None)
    if office is None:
        await ws.accept()
        await _send(ws, {"type": "error", "data": {"message": "Office is not running"}})
        await ws.close()
        return

    # Subscribe before the handshake completes
    queue = office.subscribe()
    forwarder: asyncio.Task | None = None

    async def forward_events():
        while True:
            event = await queue.get()
            await _send(ws, event.to_dict())

    try:
        await ws.accept()
        forwarder = asyncio.create_task(forward_events())
        # Incoming frames are ignored; receiving only detects the disconnect
        while True:
            await ws.receive_text()
    except WebSocketDisconnect:
        logger.info("Event stream client disconnected")
    finally:
        if forwarder is not None:
            forwarder.cancel()
        office.unsubscribe(queue)
