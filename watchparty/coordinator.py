"""Event coordinator for synchronized watch rooms.

The coordinator turns one inbound client event into store mutations and the
list of outbound envelopes that result from it. Every call runs to completion
synchronously, so on a single event loop one event is fully applied before
the next one is looked at.

Audience rules:
    - chat and the events the sender needs acknowledged (queue changes,
      select, seek, end of video) go to the whole room, sender included;
    - play, pause and join announcements skip the sender, who already knows;
    - the join snapshot (initial sync and queue) goes to the sender only.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Optional

from watchparty.actions import ACTION_REGISTRY, ActionContext
from watchparty.config import PartyConfig
from watchparty.constants import (
    ADMIN_AUTHOR_ID,
    JOIN_MESSAGE,
    LEAVE_MESSAGE,
    Audience,
    InboundEvent,
    Outcome,
    OutboundEvent,
)
from watchparty.errors import ProtocolError
from watchparty.members import MembershipTracker
from watchparty.models import Envelope, Member, Video, VideoState
from watchparty.playlist import RoomQueue
from watchparty.registry import RoomRegistry
from watchparty.state import RoomStateStore

logger = logging.getLogger(__name__)

UNKNOWN_USER_NAME = "Someone"

STATE_BROADCASTS: Dict[str, tuple] = {
    InboundEvent.SELECT.value: (OutboundEvent.SELECT, Audience.ROOM),
    InboundEvent.SEEK.value: (OutboundEvent.SEEK, Audience.ROOM),
    InboundEvent.PAUSE.value: (OutboundEvent.PAUSE, Audience.ROOM_EXCEPT_SENDER),
    InboundEvent.PLAY.value: (OutboundEvent.PLAY, Audience.ROOM_EXCEPT_SENDER),
}


def now_ms() -> int:
    return int(time.time() * 1000)


class Coordinator:
    def __init__(
        self,
        config: Optional[PartyConfig] = None,
        registry: Optional[RoomRegistry] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.config = config or PartyConfig()
        self.registry = registry or RoomRegistry()
        self.states = RoomStateStore(self.registry)
        self.queues = RoomQueue(self.registry)
        self.memberships = MembershipTracker(self.registry)
        self._clock = clock or now_ms

    def handle(self, connection_id: str, event: str, payload: object) -> List[Envelope]:
        """Apply one inbound event and return what must be sent, and to whom.

        Unknown events, malformed payloads and events from connections that
        have not joined a room are dropped without touching any state.
        """
        action_cls = ACTION_REGISTRY.get(event)
        if not action_cls:
            logger.warning("Ignoring unknown event %r from %s", event, connection_id)
            return []
        if not isinstance(payload, dict):
            logger.warning("Ignoring %s from %s: payload is not an object", event, connection_id)
            return []
        member = self.memberships.get_member(connection_id)
        if action_cls.requires_member and (member is None or member.room_name not in self.registry):
            logger.info("Ignoring %s from %s: not in a room", event, connection_id)
            return []
        try:
            return action_cls().apply(self, ActionContext(connection_id, member, payload))
        except ProtocolError as exc:
            logger.warning("Ignoring %s from %s: %s", event, connection_id, exc)
            return []

    def join(self, connection_id: str, user_name: str, room_name: str) -> List[Envelope]:
        self.registry.ensure_room(room_name)
        initial_state = VideoState(
            video_id=self.config.default_video_id,
            timestamp=self._clock(),
            play_status=self.config.default_play_status.value,
        )
        if self.states.initialize_state(room_name, initial_state) is Outcome.APPLIED:
            logger.info("Room %s starts on video %s", room_name, initial_state.video_id)
        state = self.states.get_state(room_name)

        envelopes = [
            self._envelope(
                OutboundEvent.INITIAL_SYNC,
                {"serverVideoState": state.to_dict() if state else None},
                Audience.SENDER,
                room_name,
                connection_id,
            ),
            self._queue_update(user_name, room_name, self.queues.get_queue(room_name), Audience.SENDER, connection_id),
        ]
        self.memberships.add_member(connection_id, user_name, room_name)
        envelopes.append(
            self._envelope(
                OutboundEvent.CHAT_MESSAGE,
                _admin_message(JOIN_MESSAGE.format(name=user_name)),
                Audience.ROOM_EXCEPT_SENDER,
                room_name,
                connection_id,
            )
        )
        logger.info("%s (%s) joined room %s", user_name, connection_id, room_name)
        return envelopes

    def chat(self, member: Member, msg: object) -> List[Envelope]:
        payload = {
            "authorID": member.connection_id,
            "authorUserName": member.user_name,
            "msg": msg,
        }
        return [self._envelope(OutboundEvent.CHAT_MESSAGE, payload, Audience.ROOM, member.room_name, member.connection_id)]

    def append_to_queue(self, member: Member, video: Video) -> List[Envelope]:
        result = self.queues.append(member.room_name, video)
        if result.outcome is Outcome.NOT_FOUND:
            return []
        return [self._queue_update(member.user_name, member.room_name, result.queue, Audience.ROOM, member.connection_id)]

    def remove_from_queue(self, member: Member, index: object) -> List[Envelope]:
        result = self.queues.remove_at(member.room_name, index)
        if result.outcome is Outcome.NOT_FOUND:
            return []
        return [self._queue_update(member.user_name, member.room_name, result.queue, Audience.ROOM, member.connection_id)]

    def end_video(self, member: Member) -> List[Envelope]:
        popped = self.queues.pop_next(member.room_name)
        if popped.video is None:
            return []
        new_state = VideoState(
            video_id=popped.video.external_id,
            timestamp=self._clock(),
            play_status=self.config.default_play_status.value,
        )
        self.states.update_state(member.room_name, new_state)
        logger.info("Room %s advanced to video %s", member.room_name, new_state.video_id)
        return [
            self._queue_update(member.user_name, member.room_name, popped.queue, Audience.ROOM, member.connection_id),
            self._envelope(
                OutboundEvent.SELECT,
                {"requestingUser": member.user_name, "serverVideoState": new_state.to_dict()},
                Audience.ROOM,
                member.room_name,
                member.connection_id,
            ),
        ]

    def apply_state_change(self, member: Member, event: str, state: VideoState) -> List[Envelope]:
        outbound, audience = STATE_BROADCASTS[event]
        if self.states.update_state(member.room_name, state) is Outcome.NOT_FOUND:
            return []
        payload: Dict[str, object] = {"requestingUser": member.user_name}
        # Receivers of play/pause already hold the state and only need the signal.
        if audience is Audience.ROOM:
            payload["serverVideoState"] = state.to_dict()
        return [self._envelope(outbound, payload, audience, member.room_name, member.connection_id)]

    def disconnect(self, connection_id: str) -> List[Envelope]:
        removal = self.memberships.remove_member(connection_id)
        if removal.outcome is Outcome.NOT_FOUND:
            logger.debug("Disconnect from %s without a room", connection_id)
        else:
            logger.info("%s (%s) left room %s", removal.user_name, connection_id, removal.room_name)
        user_name = removal.user_name if removal.user_name is not None else UNKNOWN_USER_NAME
        return [
            self._envelope(
                OutboundEvent.CHAT_MESSAGE,
                _admin_message(LEAVE_MESSAGE.format(name=user_name)),
                Audience.ROOM,
                removal.room_name,
                connection_id,
            )
        ]

    def snapshot(self) -> List[Dict[str, object]]:
        return [room.to_dict(self.memberships.members) for room in self.registry.rooms()]

    def room_snapshot(self, room_name: str) -> Optional[Dict[str, object]]:
        room = self.registry.get_room(room_name)
        if room is None:
            return None
        return room.to_dict(self.memberships.members)

    def _queue_update(
        self, user_name: str, room_name: str, queue: List[Video], audience: Audience, sender_id: str
    ) -> Envelope:
        payload = {
            "requestingUser": user_name,
            "serverQueueState": [video.to_dict() for video in queue],
        }
        return self._envelope(OutboundEvent.QUEUE_UPDATE, payload, audience, room_name, sender_id)

    def _envelope(
        self,
        event: OutboundEvent,
        payload: Dict[str, object],
        audience: Audience,
        room_name: Optional[str],
        sender_id: str,
    ) -> Envelope:
        return Envelope(
            event=event.value,
            payload=payload,
            audience=audience.value,
            room_name=room_name,
            recipients=self._recipients(audience, room_name, sender_id),
        )

    def _recipients(self, audience: Audience, room_name: Optional[str], sender_id: str) -> List[str]:
        if audience is Audience.SENDER:
            return [sender_id]
        connections = self.memberships.connections_in(room_name)
        if audience is Audience.ROOM_EXCEPT_SENDER:
            return [cid for cid in connections if cid != sender_id]
        return connections


def _admin_message(msg: str) -> Dict[str, object]:
    return {"authorID": ADMIN_AUTHOR_ID, "authorUserName": "", "msg": msg}
