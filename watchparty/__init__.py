"""Room synchronization core for the watch party server."""

from watchparty.config import PartyConfig
from watchparty.constants import Audience, Outcome, PlayStatus
from watchparty.coordinator import Coordinator

__all__ = ["Coordinator", "PartyConfig", "Audience", "Outcome", "PlayStatus"]
