"""Client control message parsing/validation."""

from __future__ import annotations

from typing import Any

import orjson

from live_relay.errors import ProtocolParseError
from live_relay.config.websocket import WS_KEY_TYPE


def parse_client_message(raw: str | bytes) -> dict[str, Any] | None:
    """Decode a client text frame.

    Only undecodable JSON is an error. Valid JSON that is not an object with a
    string ``type`` returns None and is ignored like an unknown type.
    """
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ProtocolParseError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        return None

    msg_type = msg.get(WS_KEY_TYPE)
    if not isinstance(msg_type, str):
        return None

    msg[WS_KEY_TYPE] = msg_type.strip()
    return msg


__all__ = ["parse_client_message"]
