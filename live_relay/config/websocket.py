"""Client WebSocket protocol configuration and constants."""

from __future__ import annotations

import os

WS_ENDPOINT_PATH = "/voice"

# Client envelope keys
WS_KEY_TYPE = "type"
WS_KEY_STATUS = "status"
WS_KEY_MESSAGE = "message"
WS_KEY_CODE = "code"
WS_KEY_CONNECTION_ID = "connectionId"

# Client -> server control types
WS_TYPE_PING = "ping"
WS_TYPE_INTERRUPT = "interrupt"
WS_TYPE_AUDIO_STREAM_END = "audio_stream_end"

# Server -> client event types
WS_TYPE_PONG = "pong"
WS_TYPE_ERROR = "error"
WS_TYPE_CONNECTION = "connection"
WS_TYPE_GENERATION_COMPLETE = "generation_complete"
WS_TYPE_INTERRUPTED = "interrupted"
WS_TYPE_TURN_COMPLETE = "turn_complete"

WS_STATUS_CONNECTED = "connected"
WS_STATUS_DISCONNECTED = "disconnected"

# Close codes
WS_CLOSE_CLIENT_REQUEST_CODE = 1000
WS_CLOSE_GOING_AWAY_CODE = 1001
WS_CLOSE_IDLE_CODE = 4000

WS_CLOSE_IDLE_REASON = "idle timeout"
WS_CLOSE_SHUTDOWN_REASON = "server shutting down"


def _get_float(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return float(default)
    try:
        value = float(raw)
    except Exception:
        return float(default)
    return value if value > 0 else float(default)


# Idle reaper
WS_IDLE_TIMEOUT_S: float = _get_float("WS_IDLE_TIMEOUT_S", 5 * 60)
WS_REAPER_INTERVAL_S: float = _get_float("WS_REAPER_INTERVAL_S", 60)

# Errors (code values)
WS_ERROR_CONFIGURATION = "configuration_error"
WS_ERROR_INVALID_MESSAGE = "invalid_message"
WS_ERROR_UPSTREAM = "upstream_error"

WS_MESSAGE_MISSING_API_KEY = "Server is missing Gemini API key. Ask the administrator to set GEMINI_API_KEY."
WS_MESSAGE_PROCESSING_FAILED = "Failed to process message"
WS_MESSAGE_UPSTREAM_FAILED = "Gemini connection failed"
WS_MESSAGE_UPSTREAM_UNREACHABLE = "Failed to connect to Gemini Live API"
WS_MESSAGE_UPSTREAM_ENDED = "Gemini session ended"

__all__ = [
    "WS_ENDPOINT_PATH",
    "WS_KEY_TYPE",
    "WS_KEY_STATUS",
    "WS_KEY_MESSAGE",
    "WS_KEY_CODE",
    "WS_KEY_CONNECTION_ID",
    "WS_TYPE_PING",
    "WS_TYPE_INTERRUPT",
    "WS_TYPE_AUDIO_STREAM_END",
    "WS_TYPE_PONG",
    "WS_TYPE_ERROR",
    "WS_TYPE_CONNECTION",
    "WS_TYPE_GENERATION_COMPLETE",
    "WS_TYPE_INTERRUPTED",
    "WS_TYPE_TURN_COMPLETE",
    "WS_STATUS_CONNECTED",
    "WS_STATUS_DISCONNECTED",
    "WS_CLOSE_CLIENT_REQUEST_CODE",
    "WS_CLOSE_GOING_AWAY_CODE",
    "WS_CLOSE_IDLE_CODE",
    "WS_CLOSE_IDLE_REASON",
    "WS_CLOSE_SHUTDOWN_REASON",
    "WS_IDLE_TIMEOUT_S",
    "WS_REAPER_INTERVAL_S",
    "WS_ERROR_CONFIGURATION",
    "WS_ERROR_INVALID_MESSAGE",
    "WS_ERROR_UPSTREAM",
    "WS_MESSAGE_MISSING_API_KEY",
    "WS_MESSAGE_PROCESSING_FAILED",
    "WS_MESSAGE_UPSTREAM_FAILED",
    "WS_MESSAGE_UPSTREAM_UNREACHABLE",
    "WS_MESSAGE_UPSTREAM_ENDED",
]
