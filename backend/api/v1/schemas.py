"""
Pydantic schemas for room endpoints.
"""

from typing import Any

from pydantic import BaseModel


class RoomMember(BaseModel):
    connection_id: str
    user_name: str
    room_name: str
    joined_at: str


class RoomSnapshot(BaseModel):
    name: str
    created_at: str
    video_state: dict[str, Any] | None = None
    queue: list[Any]
    members: list[RoomMember]


class RoomList(BaseModel):
    rooms: list[RoomSnapshot]
    count: int
