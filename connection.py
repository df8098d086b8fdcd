import uuid
from enum import Enum
from typing import Optional

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from logging_config import get_logger
from schemas.signals import OutboundSignal, dump_signal

logger = get_logger(__name__)


class ConnectionState(str, Enum):
    CONNECTING = "connecting"
    OPEN = "open"
    CLOSING = "closing"
    CLOSED = "closed"


class RelayConnection:
    """One relay websocket plus the room id it was opened with."""

    def __init__(self, websocket: WebSocket, room_id: str):
        self.websocket = websocket
        self.room_id = room_id
        self.connection_id = uuid.uuid4().hex
        self.state = ConnectionState.CONNECTING
        client = websocket.client
        self.remote_address: Optional[str] = f"{client.host}:{client.port}" if client else None

    @property
    def is_open(self) -> bool:
        return (
            self.state is ConnectionState.OPEN
            and self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    async def accept(self):
        await self.websocket.accept()
        self.state = ConnectionState.OPEN

    async def send(self, signal: OutboundSignal) -> bool:
        """Write ``signal`` if the connection is open. Returns whether it was written."""
        if not self.is_open:
            logger.debug(f"Skipping send to connection {self.connection_id} in state {self.state.value}")
            return False
        await self.websocket.send_text(dump_signal(signal))
        logger.debug(f"Sent {signal.type} to connection {self.connection_id}")
        return True

    def mark_closing(self):
        if self.state is not ConnectionState.CLOSED:
            self.state = ConnectionState.CLOSING

    async def close(self):
        self.mark_closing()
        if self.websocket.application_state == WebSocketState.CONNECTED \
                and self.websocket.client_state == WebSocketState.CONNECTED:
            try:
                await self.websocket.close()
            except Exception as e:
                logger.debug(f"Error closing WebSocket for connection {self.connection_id}: {e}")

    def __repr__(self):
        return f"RelayConnection(id={self.connection_id!r}, room_id={self.room_id!r}, state={self.state.value})"
