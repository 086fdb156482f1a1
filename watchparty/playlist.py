"""Per-room ordered queue of pending videos."""

from dataclasses import dataclass, field
from typing import List, Optional

from watchparty.constants import Outcome
from watchparty.models import Video
from watchparty.registry import RoomRegistry


@dataclass
class QueueResult:
    outcome: Outcome
    queue: List[Video] = field(default_factory=list)


@dataclass
class PopResult:
    outcome: Outcome
    video: Optional[Video] = None
    queue: List[Video] = field(default_factory=list)


class RoomQueue:
    def __init__(self, registry: RoomRegistry) -> None:
        self._registry = registry

    def get_queue(self, room_name: str) -> List[Video]:
        room = self._registry.get_room(room_name)
        if room is None:
            return []
        return list(room.queue)

    def append(self, room_name: str, video: Video) -> QueueResult:
        room = self._registry.get_room(room_name)
        if room is None:
            return QueueResult(Outcome.NOT_FOUND)
        room.queue.append(video)
        return QueueResult(Outcome.APPLIED, list(room.queue))

    def remove_at(self, room_name: str, index: object) -> QueueResult:
        """Remove the entry at ``index``; an out-of-range index leaves the queue as is."""
        room = self._registry.get_room(room_name)
        if room is None:
            return QueueResult(Outcome.NOT_FOUND)
        # bool is an int subclass but never a meaningful position.
        if isinstance(index, bool) or not isinstance(index, int):
            return QueueResult(Outcome.UNCHANGED, list(room.queue))
        if index < 0 or index >= len(room.queue):
            return QueueResult(Outcome.UNCHANGED, list(room.queue))
        room.queue.pop(index)
        return QueueResult(Outcome.APPLIED, list(room.queue))

    def pop_next(self, room_name: str) -> PopResult:
        room = self._registry.get_room(room_name)
        if room is None:
            return PopResult(Outcome.NOT_FOUND)
        if not room.queue:
            return PopResult(Outcome.UNCHANGED)
        video = room.queue.pop(0)
        return PopResult(Outcome.APPLIED, video, list(room.queue))
