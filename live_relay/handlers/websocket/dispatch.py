"""Dispatch for inbound client frames (binary audio and JSON control)."""

from __future__ import annotations

import logging
from typing import Any
from collections.abc import Callable, Awaitable

from live_relay.state.connection import ConnectionRecord
from live_relay.upstream.translator import build_pong
from live_relay.config.websocket import WS_TYPE_PING, WS_TYPE_INTERRUPT, WS_TYPE_AUDIO_STREAM_END

from .errors import safe_send_json

logger = logging.getLogger(__name__)

HandlerFn = Callable[[ConnectionRecord, dict[str, Any]], Awaitable[None]]


async def handle_audio_frame(record: ConnectionRecord, audio: bytes) -> bool:
    """Forward one client audio frame; returns False when it was dropped.

    Frames that arrive before the upstream setup completes are dropped rather
    than buffered, because the upstream rejects input sent before setup.
    """
    record.touch()
    upstream = record.upstream
    if not record.ready or upstream is None or not upstream.is_open:
        return False
    return await upstream.send_audio(audio)


async def _handle_ping(record: ConnectionRecord, _msg: dict[str, Any]) -> None:
    await safe_send_json(record.client_ws, build_pong())


async def _handle_interrupt(record: ConnectionRecord, _msg: dict[str, Any]) -> None:
    upstream = record.upstream
    if upstream is not None and upstream.is_open:
        await upstream.send_activity_start()


async def _handle_audio_stream_end(record: ConnectionRecord, _msg: dict[str, Any]) -> None:
    upstream = record.upstream
    if upstream is not None and upstream.is_open:
        await upstream.send_audio_stream_end()


HANDLERS: dict[str, HandlerFn] = {
    WS_TYPE_PING: _handle_ping,
    WS_TYPE_INTERRUPT: _handle_interrupt,
    WS_TYPE_AUDIO_STREAM_END: _handle_audio_stream_end,
}


async def dispatch_control_message(record: ConnectionRecord, msg: dict[str, Any]) -> bool:
    msg_type = msg["type"]
    handler = HANDLERS.get(msg_type)
    if handler is None:
        logger.info("ignoring unknown message type=%r connection_id=%s", msg_type, record.id)
        return False
    await handler(record, msg)
    return True


__all__ = ["HANDLERS", "dispatch_control_message", "handle_audio_frame"]
