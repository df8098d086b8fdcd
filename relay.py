from typing import Union

from pydantic import ValidationError

from backend import RegisterOutcome, RoomRegistry
from connection import ConnectionState, RelayConnection
from logging_config import get_logger
from schemas.signals import (
    BadRequestNotice,
    ConnectedNotice,
    ForwardedMessage,
    MessageSignal,
    parse_signal,
)

logger = get_logger(__name__)


class SignalRouter:
    """Forwards ``message`` signals to the host of the room they name.

    Only the target room in the payload matters; the sender's own room is
    never consulted, so any connected party can address any room.
    """

    def __init__(self, registry: RoomRegistry):
        self.registry = registry

    async def route(self, raw: Union[str, bytes]) -> bool:
        """Handle one inbound frame. Never raises; returns whether it was delivered."""
        try:
            signal = parse_signal(raw)
        except ValidationError as e:
            logger.error(f"Error parsing signal: {e}")
            return False

        if not isinstance(signal, MessageSignal):
            logger.warning(f"Unknown signal type: {signal.type!r}")
            return False

        try:
            target = self.registry.lookup(signal.room_id)
            if target is None:
                logger.warning(f"Room {signal.room_id!r} not found, dropping message")
                return False
            # the host may be closing but not yet unregistered
            return await target.send(ForwardedMessage(data=signal.data))
        except Exception as e:
            logger.error(f"Error processing message for room {signal.room_id!r}: {e}", exc_info=True)
            return False


class ConnectionLifecycle:
    """Binds connection open/close events to the room registry."""

    def __init__(self, registry: RoomRegistry):
        self.registry = registry

    async def on_open(self, connection: RelayConnection) -> RegisterOutcome:
        logger.info(
            f"New connection {connection.connection_id} from {connection.remote_address} "
            f"for room {connection.room_id!r}"
        )
        outcome = self.registry.register(connection.room_id, connection)
        if outcome is RegisterOutcome.CONFLICT:
            logger.info(f"Room {connection.room_id!r} already has a host, connection {connection.connection_id} is not bound")
            await connection.send(BadRequestNotice())
        await connection.send(ConnectedNotice())
        return outcome

    async def on_close(self, connection: RelayConnection) -> bool:
        connection.mark_closing()
        removed = self.registry.unregister(connection.room_id, connection)
        connection.state = ConnectionState.CLOSED
        logger.info(f"Connection {connection.connection_id} for room {connection.room_id!r} closed")
        return removed
