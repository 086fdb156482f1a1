"""Authoritative per-room video state.

Updates are last-writer-wins: any member may overwrite the room's state at
any time, and no ordering of timestamps or play/pause transitions is checked.
"""

from typing import Optional

from watchparty.constants import Outcome
from watchparty.models import VideoState
from watchparty.registry import RoomRegistry


class RoomStateStore:
    def __init__(self, registry: RoomRegistry) -> None:
        self._registry = registry

    def initialize_state(self, room_name: str, initial_state: VideoState) -> Outcome:
        """Set the room's first state. Never replaces a state that is already set."""
        room = self._registry.get_room(room_name)
        if room is None:
            return Outcome.NOT_FOUND
        if room.video_state is not None:
            return Outcome.UNCHANGED
        room.video_state = initial_state
        return Outcome.APPLIED

    def get_state(self, room_name: str) -> Optional[VideoState]:
        room = self._registry.get_room(room_name)
        if room is None:
            return None
        return room.video_state

    def update_state(self, room_name: str, new_state: VideoState) -> Outcome:
        room = self._registry.get_room(room_name)
        if room is None:
            return Outcome.NOT_FOUND
        room.video_state = new_state
        return Outcome.APPLIED
