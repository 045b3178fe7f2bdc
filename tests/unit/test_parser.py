from __future__ import annotations

import json

import pytest

from live_relay.errors import ProtocolParseError
from live_relay.handlers.websocket.parser import parse_client_message


def test_parse_client_message_ok() -> None:
    msg = parse_client_message(json.dumps({"type": " ping ", "extra": 1}))
    assert msg["type"] == "ping"
    assert msg["extra"] == 1


@pytest.mark.parametrize(
    "raw",
    [
        json.dumps([]),
        json.dumps("ping"),
        json.dumps({}),
        json.dumps({"type": 5}),
        json.dumps({"type": None}),
    ],
)
def test_parse_client_message_without_string_type_is_ignored(raw: str) -> None:
    assert parse_client_message(raw) is None


@pytest.mark.parametrize("raw", ["not json", "{", ""])
def test_parse_client_message_invalid_json(raw: str) -> None:
    with pytest.raises(ProtocolParseError):
        parse_client_message(raw)


def test_parse_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        parse_client_message("{")
