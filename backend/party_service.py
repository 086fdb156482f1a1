"""Glue between the coordinator and the live connections."""

from typing import Optional

from backend.connections import ConnectionManager
from watchparty.config import PartyConfig
from watchparty.coordinator import Coordinator


class PartyService:
    def __init__(self, config: Optional[PartyConfig] = None, coordinator: Optional[Coordinator] = None) -> None:
        self.config = config or PartyConfig()
        self.coordinator = coordinator or Coordinator(config=self.config)
        self.connections = ConnectionManager()

    async def dispatch(self, connection_id: str, event: str, payload: dict) -> None:
        envelopes = self.coordinator.handle(connection_id, event, payload)
        await self.connections.deliver(envelopes)

    async def drop(self, connection_id: str) -> None:
        self.connections.disconnect(connection_id)
        envelopes = self.coordinator.disconnect(connection_id)
        await self.connections.deliver(envelopes)
