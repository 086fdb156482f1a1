"""Domain models for synchronized watch rooms."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from watchparty.errors import ProtocolError

VIDEO_STATE_KEYS = ("videoID", "videoTS", "videoPS")


@dataclass
class VideoState:
    video_id: Optional[str]
    timestamp: Optional[int]
    play_status: Optional[str]
    # Keys a client sent beyond the three known ones, echoed back untouched.
    extra: Dict[str, object] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: object) -> "VideoState":
        if not isinstance(payload, dict):
            raise ProtocolError("Video state must be an object.")
        extra = {key: value for key, value in payload.items() if key not in VIDEO_STATE_KEYS}
        return cls(
            video_id=payload.get("videoID"),
            timestamp=payload.get("videoTS"),
            play_status=payload.get("videoPS"),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, object]:
        data = dict(self.extra)
        data["videoID"] = self.video_id
        data["videoTS"] = self.timestamp
        data["videoPS"] = self.play_status
        return data


@dataclass
class Video:
    external_id: Optional[str]
    payload: object

    @classmethod
    def from_payload(cls, payload: object) -> "Video":
        if payload is None:
            raise ProtocolError("Missing video.")
        return cls(external_id=_extract_external_id(payload), payload=payload)

    def to_dict(self) -> object:
        return self.payload


@dataclass
class Member:
    connection_id: str
    user_name: str
    room_name: str
    joined_at: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "connection_id": self.connection_id,
            "user_name": self.user_name,
            "room_name": self.room_name,
            "joined_at": self.joined_at,
        }


@dataclass
class Room:
    name: str
    created_at: str
    video_state: Optional[VideoState] = None
    queue: List[Video] = field(default_factory=list)
    members: List[str] = field(default_factory=list)

    def queue_payload(self) -> List[object]:
        return [video.to_dict() for video in self.queue]

    def to_dict(self, members: Dict[str, Member]) -> Dict[str, object]:
        member_list = []
        for connection_id in self.members:
            member = members.get(connection_id)
            if member:
                member_list.append(member.to_dict())
        return {
            "name": self.name,
            "created_at": self.created_at,
            "video_state": self.video_state.to_dict() if self.video_state else None,
            "queue": self.queue_payload(),
            "members": member_list,
        }


@dataclass
class Envelope:
    """An outbound event together with the connections it must reach."""

    event: str
    payload: Dict[str, object]
    audience: str
    room_name: Optional[str]
    recipients: List[str] = field(default_factory=list)

    def to_message(self) -> Dict[str, object]:
        message: Dict[str, object] = {"type": self.event}
        message.update(self.payload)
        return message


def _extract_external_id(payload: object) -> Optional[str]:
    if isinstance(payload, str):
        return payload
    if not isinstance(payload, dict):
        return None
    raw_id = payload.get("id")
    if isinstance(raw_id, dict):
        video_id = raw_id.get("videoId")
        return str(video_id) if video_id is not None else None
    if raw_id is not None:
        return str(raw_id)
    video_id = payload.get("videoId")
    return str(video_id) if video_id is not None else None
