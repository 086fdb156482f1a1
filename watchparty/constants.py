"""Shared enums and constants for room synchronization."""

from enum import Enum


class PlayStatus(str, Enum):
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"


class Outcome(str, Enum):
    APPLIED = "applied"
    UNCHANGED = "unchanged"
    NOT_FOUND = "not_found"


class Audience(str, Enum):
    SENDER = "sender"
    ROOM = "room"
    ROOM_EXCEPT_SENDER = "room_except_sender"


class InboundEvent(str, Enum):
    ROOM_CONNECTION = "room-connection"
    CHAT_MESSAGE = "chat-message"
    QUEUE_APPEND = "queue-append"
    QUEUE_REMOVE = "queue-remove"
    END = "end"
    SELECT = "select"
    SEEK = "seek"
    PAUSE = "pause"
    PLAY = "play"


class OutboundEvent(str, Enum):
    INITIAL_SYNC = "initial-sync"
    QUEUE_UPDATE = "queue-update"
    CHAT_MESSAGE = "chat-message"
    SELECT = "select"
    SEEK = "seek"
    PAUSE = "pause"
    PLAY = "play"


ADMIN_AUTHOR_ID = "admin"
JOIN_MESSAGE = "{name} has joined the party! Say hi!"
LEAVE_MESSAGE = "{name} has left the party! Adios!"
