import json

import pytest
from pydantic import ValidationError

from schemas.signals import (
    BadRequestNotice,
    ConnectedNotice,
    ForwardedMessage,
    MessageSignal,
    UnknownSignal,
    dump_signal,
    parse_signal,
)


def test_parse_message_keeps_data_verbatim():
    raw = '{"type": "message", "data": {"sdp": {"type": "offer"}, "roomId": "alpha", "n": 1.5}}'
    signal = parse_signal(raw)
    assert isinstance(signal, MessageSignal)
    assert signal.room_id == "alpha"
    assert signal.data == {"sdp": {"type": "offer"}, "roomId": "alpha", "n": 1.5}
    assert list(signal.data) == ["sdp", "roomId", "n"]


def test_parse_accepts_bytes():
    signal = parse_signal(b'{"type": "message", "data": {"roomId": ""}}')
    assert isinstance(signal, MessageSignal)
    assert signal.room_id == ""


def test_parse_unknown_type():
    signal = parse_signal('{"type": "offer", "data": [1, 2]}')
    assert isinstance(signal, UnknownSignal)
    assert signal.type == "offer"
    assert signal.data == [1, 2]


def test_unknown_type_needs_no_data():
    signal = parse_signal('{"type": "ping"}')
    assert isinstance(signal, UnknownSignal)
    assert signal.data is None


@pytest.mark.parametrize("raw", [
    "not json",
    "{\"type\": \"message\", \"data\": {\"roomId\": \"alpha\"}",
    "[]",
    '{"data": {"roomId": "alpha"}}',
    '{"type": "message"}',
    '{"type": "message", "data": "alpha"}',
    '{"type": "message", "data": {"foo": 1}}',
    '{"type": "message", "data": {"roomId": 7}}',
])
def test_parse_rejects_malformed(raw):
    with pytest.raises(ValidationError):
        parse_signal(raw)


def test_connected_notice_has_no_data():
    assert json.loads(dump_signal(ConnectedNotice())) == {"type": "connected"}


def test_bad_request_notice():
    assert json.loads(dump_signal(BadRequestNotice())) == {"type": "bad request", "data": "room has exist"}


def test_forwarded_message_wraps_data():
    data = {"roomId": "alpha", "candidate": None, "nested": {"a": [1, "x"]}}
    assert json.loads(dump_signal(ForwardedMessage(data=data))) == {"type": "message", "data": data}
