"""Runtime configuration for the watch party server."""

import logging
import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from watchparty.constants import PlayStatus

logger = logging.getLogger(__name__)

DEFAULT_VIDEO_ID = "qsdzdUYl5c0"
DEFAULT_PORT = 8080


@dataclass
class PartyConfig:
    default_video_id: str = DEFAULT_VIDEO_ID
    default_play_status: PlayStatus = PlayStatus.PLAYING
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PartyConfig":
        env = os.environ if environ is None else environ
        video_id = env.get("DEFAULT_VIDEO_ID") or env.get("REACT_APP_DEFAULT_VIDEO_ID") or DEFAULT_VIDEO_ID
        raw_status = env.get("DEFAULT_VIDEO_STATE") or env.get("REACT_APP_DEFAULT_VIDEO_STATE")
        origins = [origin.strip() for origin in env.get("CORS_ALLOW_ORIGINS", "*").split(",") if origin.strip()]
        return cls(
            default_video_id=video_id,
            default_play_status=_parse_play_status(raw_status),
            host=env.get("HOST", "0.0.0.0"),
            port=_parse_port(env.get("PORT")),
            cors_allow_origins=origins or ["*"],
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )


def _parse_play_status(raw: Optional[str]) -> PlayStatus:
    if not raw:
        return PlayStatus.PLAYING
    try:
        return PlayStatus(raw.strip().upper())
    except ValueError:
        logger.warning("Unknown default play status %r, using %s", raw, PlayStatus.PLAYING.value)
        return PlayStatus.PLAYING


def _parse_port(raw: Optional[str]) -> int:
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid PORT %r, using %d", raw, DEFAULT_PORT)
        return DEFAULT_PORT
