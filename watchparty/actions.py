"""Command objects for inbound client events."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Type

from watchparty.constants import InboundEvent
from watchparty.errors import ProtocolError
from watchparty.models import Envelope, Member, Video, VideoState


@dataclass
class ActionContext:
    connection_id: str
    member: Optional[Member]
    payload: Dict[str, object]


class PartyAction:
    name: str = ""
    # Everything except joining needs a connection that already joined a room.
    requires_member: bool = True

    def apply(self, coordinator, context: ActionContext) -> List[Envelope]:
        raise NotImplementedError


class JoinRoomAction(PartyAction):
    name = InboundEvent.ROOM_CONNECTION.value
    requires_member = False

    def apply(self, coordinator, context: ActionContext) -> List[Envelope]:
        user = context.payload.get("user")
        if not isinstance(user, dict):
            raise ProtocolError("Missing user.")
        room_name = user.get("room")
        if not isinstance(room_name, str) or not room_name:
            raise ProtocolError("Missing room name.")
        user_name = user.get("name")
        if user_name is None:
            raise ProtocolError("Missing user name.")
        return coordinator.join(context.connection_id, str(user_name), room_name)


class ChatMessageAction(PartyAction):
    name = InboundEvent.CHAT_MESSAGE.value

    def apply(self, coordinator, context: ActionContext) -> List[Envelope]:
        return coordinator.chat(context.member, context.payload.get("msg", ""))


class QueueAppendAction(PartyAction):
    name = InboundEvent.QUEUE_APPEND.value

    def apply(self, coordinator, context: ActionContext) -> List[Envelope]:
        video = Video.from_payload(context.payload.get("video"))
        return coordinator.append_to_queue(context.member, video)


class QueueRemoveAction(PartyAction):
    name = InboundEvent.QUEUE_REMOVE.value

    def apply(self, coordinator, context: ActionContext) -> List[Envelope]:
        if "index" not in context.payload:
            raise ProtocolError("Missing queue index.")
        return coordinator.remove_from_queue(context.member, context.payload["index"])


class EndAction(PartyAction):
    name = InboundEvent.END.value

    def apply(self, coordinator, context: ActionContext) -> List[Envelope]:
        return coordinator.end_video(context.member)


class _StateAction(PartyAction):
    def apply(self, coordinator, context: ActionContext) -> List[Envelope]:
        state = VideoState.from_payload(context.payload.get("clientVideoState"))
        return coordinator.apply_state_change(context.member, self.name, state)


class SelectAction(_StateAction):
    name = InboundEvent.SELECT.value


class SeekAction(_StateAction):
    name = InboundEvent.SEEK.value


class PauseAction(_StateAction):
    name = InboundEvent.PAUSE.value


class PlayAction(_StateAction):
    name = InboundEvent.PLAY.value


ACTION_REGISTRY: Dict[str, Type[PartyAction]] = {
    JoinRoomAction.name: JoinRoomAction,
    ChatMessageAction.name: ChatMessageAction,
    QueueAppendAction.name: QueueAppendAction,
    QueueRemoveAction.name: QueueRemoveAction,
    EndAction.name: EndAction,
    SelectAction.name: SelectAction,
    SeekAction.name: SeekAction,
    PauseAction.name: PauseAction,
    PlayAction.name: PlayAction,
}
