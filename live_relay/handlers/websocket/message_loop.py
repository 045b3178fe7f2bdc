"""Client WebSocket receive loop for the relay (/voice)."""

from __future__ import annotations

import logging

from fastapi import WebSocket, WebSocketDisconnect

from live_relay.errors import ProtocolParseError
from live_relay.state.connection import ConnectionRecord
from live_relay.config.websocket import WS_ERROR_INVALID_MESSAGE, WS_MESSAGE_PROCESSING_FAILED

from .errors import send_error
from .parser import parse_client_message
from .dispatch import handle_audio_frame, dispatch_control_message

logger = logging.getLogger(__name__)


async def _handle_text(ws: WebSocket, record: ConnectionRecord, raw: str) -> None:
    record.touch()
    try:
        msg = parse_client_message(raw)
    except ProtocolParseError as exc:
        logger.warning("invalid client message connection_id=%s: %s", record.id, exc)
        await send_error(ws, error_code=WS_ERROR_INVALID_MESSAGE, message=WS_MESSAGE_PROCESSING_FAILED)
        return
    if msg is None:
        logger.info("ignoring message without a string type connection_id=%s", record.id)
        return
    await dispatch_control_message(record, msg)


async def run_message_loop(ws: WebSocket, record: ConnectionRecord) -> None:
    """Relay client frames until the client disconnects or the record is torn down."""
    try:
        while not record.is_closing:
            message = await ws.receive()
            if message.get("type") == "websocket.disconnect":
                return

            data = message.get("bytes")
            if data is not None:
                await handle_audio_frame(record, data)
                continue

            text = message.get("text")
            if text is not None:
                await _handle_text(ws, record, text)
    except WebSocketDisconnect:
        return


__all__ = ["run_message_loop"]
