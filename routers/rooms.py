from fastapi import APIRouter, HTTPException, Request

from backend import Room
from logging_config import get_logger
from schemas.rooms import RoomDetailsResponse, RoomListResponse

logger = get_logger(__name__)

rooms_router = APIRouter(prefix="/rooms", tags=["rooms"])


def to_details(room: Room) -> RoomDetailsResponse:
    return RoomDetailsResponse(
        room_id=room.id,
        connection_id=room.connection.connection_id,
        remote_address=room.connection.remote_address,
        created_at=room.created_at.isoformat(),
    )


@rooms_router.get("/", response_model=RoomListResponse)
async def list_rooms(request: Request):
    rooms = request.app.state.registry.rooms()
    logger.debug(f"Listing {len(rooms)} rooms")
    return RoomListResponse(
        rooms_count=len(rooms),
        rooms=[to_details(room) for room in rooms],
    )


@rooms_router.get("/{room_id}", response_model=RoomDetailsResponse)
async def get_room_details(room_id: str, request: Request):
    """
    Get the host connection of a room.

    Returns 404 if no connection currently hosts ``room_id``.
    """
    room = request.app.state.registry.get_room(room_id)
    if not room:
        logger.warning(f"Room details failed: Room {room_id!r} not found")
        raise HTTPException(status_code=404, detail="Room not found")
    return to_details(room)
