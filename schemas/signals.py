import json
from typing import Any, Dict, Literal, Union

from pydantic import BaseModel, field_validator

from constants import ROOM_EXISTS_DETAIL, SIGNAL_BAD_REQUEST, SIGNAL_CONNECTED, SIGNAL_MESSAGE


class RawSignal(BaseModel):
    type: str
    data: Any = None


class MessageSignal(BaseModel):
    """A payload addressed to the host of ``data["roomId"]``.

    ``data`` is kept as the client sent it so it can be forwarded verbatim.
    """
    type: Literal["message"]
    data: Dict[str, Any]

    @field_validator("data")
    @classmethod
    def require_room_id(cls, value: Dict[str, Any]) -> Dict[str, Any]:
        if not isinstance(value.get("roomId"), str):
            raise ValueError("data.roomId must be a string")
        return value

    @property
    def room_id(self) -> str:
        return self.data["roomId"]


class UnknownSignal(BaseModel):
    type: str
    data: Any = None


InboundSignal = Union[MessageSignal, UnknownSignal]


def parse_signal(raw: Union[str, bytes]) -> InboundSignal:
    """Parse one inbound frame. Raises pydantic.ValidationError on bad input."""
    envelope = RawSignal.model_validate_json(raw)
    if envelope.type == SIGNAL_MESSAGE:
        return MessageSignal.model_validate(envelope.model_dump())
    return UnknownSignal(type=envelope.type, data=envelope.data)


class ConnectedNotice(BaseModel):
    type: Literal["connected"] = SIGNAL_CONNECTED


class BadRequestNotice(BaseModel):
    type: Literal["bad request"] = SIGNAL_BAD_REQUEST
    data: str = ROOM_EXISTS_DETAIL


class ForwardedMessage(BaseModel):
    type: Literal["message"] = SIGNAL_MESSAGE
    data: Dict[str, Any]


OutboundSignal = Union[ConnectedNotice, BadRequestNotice, ForwardedMessage]


def dump_signal(signal: OutboundSignal) -> str:
    # json.dumps keeps the opaque payload exactly as it was decoded
    return json.dumps(signal.model_dump())
