from pydantic import BaseModel
from typing import Optional


class RoomDetailsResponse(BaseModel):
    room_id: str
    connection_id: str
    remote_address: Optional[str] = None
    created_at: str


class RoomListResponse(BaseModel):
    rooms_count: int
    rooms: list[RoomDetailsResponse]


class HealthResponse(BaseModel):
    status: str
    rooms: int
