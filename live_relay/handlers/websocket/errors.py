"""Send/close helpers for the client WebSocket."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect
from fastapi.websockets import WebSocketState

from live_relay.config.websocket import WS_KEY_CODE, WS_KEY_TYPE, WS_TYPE_ERROR, WS_KEY_MESSAGE

logger = logging.getLogger(__name__)


def build_error_event(code: str, message: str) -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_TYPE_ERROR, WS_KEY_CODE: code, WS_KEY_MESSAGE: message}


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def safe_send_json(ws: WebSocket, payload: dict[str, Any]) -> bool:
    return await safe_send_text(ws, orjson.dumps(payload).decode("utf-8"))


async def safe_send_bytes(ws: WebSocket, data: bytes) -> bool:
    try:
        await ws.send_bytes(data)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket binary send failed", exc_info=True)
        return False
    return True


async def send_error(ws: WebSocket, *, error_code: str, message: str) -> bool:
    return await safe_send_json(ws, build_error_event(error_code, message))


async def safe_close(ws: WebSocket, *, code: int, reason: str = "") -> None:
    if getattr(ws, "application_state", None) == WebSocketState.DISCONNECTED:
        return
    try:
        await ws.close(code=code, reason=reason)
    except Exception:
        # Already closed by the peer or by another task.
        logger.debug("WebSocket close failed", exc_info=True)


__all__ = [
    "build_error_event",
    "safe_close",
    "safe_send_bytes",
    "safe_send_json",
    "safe_send_text",
    "send_error",
]
