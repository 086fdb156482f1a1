"""Connection membership with reverse lookup from connection to room."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional

from watchparty.constants import Outcome
from watchparty.models import Member
from watchparty.registry import RoomRegistry



@dataclass
class MemberRemoval:
    outcome: Outcome
    room_name: Optional[str] = None
    user_name: Optional[str] = None


class MembershipTracker:
    def __init__(self, registry: RoomRegistry) -> None:
        self._registry = registry
        self._members: Dict[str, Member] = {}

    @property
    def members(self) -> Dict[str, Member]:
        return self._members

    def add_member(self, connection_id: str, user_name: str, room_name: str) -> Member:
        """Register a member, replacing any earlier entry for the same connection."""
        if connection_id in self._members:
            self._detach(connection_id)
        member = Member(
            connection_id=connection_id,
            user_name=user_name,
            room_name=room_name,
            joined_at=datetime.now(timezone.utc).isoformat(),
        )
        room = self._registry.ensure_room(room_name)
        room.members.append(connection_id)
        self._members[connection_id] = member
        return member

    def remove_member(self, connection_id: str) -> MemberRemoval:
        member = self._detach(connection_id)
        if member is None:
            return MemberRemoval(Outcome.NOT_FOUND)
        return MemberRemoval(Outcome.APPLIED, member.room_name, member.user_name)

    def get_member(self, connection_id: str) -> Optional[Member]:
        return self._members.get(connection_id)

    def connections_in(self, room_name: Optional[str]) -> List[str]:
        room = self._registry.get_room(room_name)
        if room is None:
            return []
        return list(room.members)

    def _detach(self, connection_id: str) -> Optional[Member]:
        member = self._members.pop(connection_id, None)
        if member is None:
            return None
        room = self._registry.get_room(member.room_name)
        if room and connection_id in room.members:
            room.members = [cid for cid in room.members if cid != connection_id]
        return member
