import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from connection import RelayConnection
from logging_config import get_logger

logger = get_logger(__name__)


class RegisterOutcome(str, Enum):
    CREATED = "created"
    CONFLICT = "conflict"


@dataclass
class Room:
    id: str
    connection: RelayConnection
    created_at: datetime = field(default_factory=datetime.now)


class RoomRegistry:
    """Maps room ids to the single connection hosting each room.

    One instance per running server. Every operation takes the same lock, so
    each is atomic on its own; nothing spans two calls.
    """

    def __init__(self):
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.Lock()
        logger.debug("Initialized empty RoomRegistry")

    def register(self, room_id: str, connection: RelayConnection) -> RegisterOutcome:
        with self._lock:
            if room_id in self._rooms:
                logger.debug(f"Room {room_id!r} already hosted by {self._rooms[room_id].connection.connection_id}")
                return RegisterOutcome.CONFLICT
            self._rooms[room_id] = Room(id=room_id, connection=connection)
        logger.info(f"Room {room_id!r} created for connection {connection.connection_id}")
        return RegisterOutcome.CREATED

    def lookup(self, room_id: str) -> Optional[RelayConnection]:
        with self._lock:
            room = self._rooms.get(room_id)
        return room.connection if room else None

    def unregister(self, room_id: str, connection: Optional[RelayConnection] = None) -> bool:
        """Remove the room for ``room_id``; a no-op if there is none.

        When ``connection`` is given, the room is only removed if that
        connection is its host. Returns whether a room was removed.
        """
        with self._lock:
            room = self._rooms.get(room_id)
            if room is None:
                return False
            if connection is not None and room.connection is not connection:
                return False
            del self._rooms[room_id]
        logger.info(f"Room {room_id!r} deleted")
        return True

    def get_room(self, room_id: str) -> Optional[Room]:
        with self._lock:
            return self._rooms.get(room_id)

    def rooms(self) -> List[Room]:
        with self._lock:
            return list(self._rooms.values())

    def __len__(self):
        with self._lock:
            return len(self._rooms)

    def __contains__(self, room_id):
        with self._lock:
            return room_id in self._rooms
