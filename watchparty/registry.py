"""Process-wide mapping from room name to room."""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from watchparty.models import Room

logger = logging.getLogger(__name__)


class RoomRegistry:
    def __init__(self) -> None:
        self._rooms: Dict[str, Room] = {}

    def ensure_room(self, name: str) -> Room:
        room = self._rooms.get(name)
        if room is None:
            room = Room(name=name, created_at=datetime.now(timezone.utc).isoformat())
            self._rooms[name] = room
            logger.info("Room created: %s", name)
        return room

    def get_room(self, name: Optional[str]) -> Optional[Room]:
        if name is None:
            return None
        return self._rooms.get(name)

    def rooms(self) -> List[Room]:
        return list(self._rooms.values())

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, name: object) -> bool:
        return name in self._rooms
