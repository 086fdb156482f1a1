"""Live WebSocket connections and delivery of coordinator envelopes."""

import logging
from typing import Dict, Iterable, List
from uuid import uuid4

from fastapi import WebSocket

from watchparty.models import Envelope

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self) -> None:
        self._connections: Dict[str, WebSocket] = {}

    async def connect(self, websocket: WebSocket) -> str:
        await websocket.accept()
        connection_id = str(uuid4())
        self._connections[connection_id] = websocket
        logger.debug("Connection opened: %s (total: %d)", connection_id, len(self._connections))
        return connection_id

    def disconnect(self, connection_id: str) -> None:
        self._connections.pop(connection_id, None)
        logger.debug("Connection closed: %s (remaining: %d)", connection_id, len(self._connections))

    def __len__(self) -> int:
        return len(self._connections)

    async def deliver(self, envelopes: Iterable[Envelope]) -> None:
        for envelope in envelopes:
            await self._send(envelope.recipients, envelope.to_message())

    async def _send(self, recipients: List[str], message: Dict[str, object]) -> None:
        for connection_id in recipients:
            websocket = self._connections.get(connection_id)
            if websocket is None:
                continue
            try:
                await websocket.send_json(message)
            except Exception as exc:
                # The connection's own receive loop notices the close and runs the disconnect path.
                logger.debug("Failed to send %s to %s: %s", message.get("type"), connection_id, exc)
