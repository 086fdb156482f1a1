"""
API Router for watch rooms.
"""

import json
import logging

from fastapi import APIRouter, HTTPException, Request, WebSocket, WebSocketDisconnect

from backend.api.v1.schemas import RoomList, RoomSnapshot
from backend.party_service import PartyService

logger = logging.getLogger(__name__)

api_router = APIRouter()


def _service(connection) -> PartyService:
    return connection.app.state.party


@api_router.get("/rooms", response_model=RoomList, tags=["Rooms"])
async def list_rooms(request: Request):
    rooms = _service(request).coordinator.snapshot()
    return {"rooms": rooms, "count": len(rooms)}


@api_router.get("/rooms/{room_name}", response_model=RoomSnapshot, tags=["Rooms"])
async def get_room(room_name: str, request: Request):
    room = _service(request).coordinator.room_snapshot(room_name)
    if room is None:
        raise HTTPException(status_code=404, detail="Room not found.")
    return room


@api_router.websocket("/party/ws")
async def party_ws(websocket: WebSocket):
    service = _service(websocket)
    connection_id = await service.connections.connect(websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                payload = json.loads(raw)
            except json.JSONDecodeError:
                logger.debug("Dropping non-JSON frame from %s", connection_id)
                continue
            if not isinstance(payload, dict):
                continue
            message_type = payload.pop("type", None)
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
            elif isinstance(message_type, str):
                await service.dispatch(connection_id, message_type, payload)
    except WebSocketDisconnect:
        pass
    finally:
        await service.drop(connection_id)
