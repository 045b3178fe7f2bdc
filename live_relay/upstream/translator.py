"""Stateless mapping between client messages and Gemini Live wire messages."""

from __future__ import annotations

import base64
import binascii
from typing import Any
from dataclasses import field, dataclass

import orjson

from live_relay.errors import ProtocolParseError
from live_relay.state.settings import UpstreamSettings
from live_relay.config.upstream import (
    GEMINI_ACTIVITY_HANDLING,
    GEMINI_PREFIX_PADDING_MS,
    GEMINI_RESPONSE_MODALITIES,
    GEMINI_SILENCE_DURATION_MS,
    GEMINI_INPUT_AUDIO_MIME_TYPE,
    GEMINI_OUTPUT_AUDIO_MIME_PREFIX,
    GEMINI_END_OF_SPEECH_SENSITIVITY,
    GEMINI_START_OF_SPEECH_SENSITIVITY,
)
from live_relay.config.websocket import (
    WS_KEY_TYPE,
    WS_TYPE_PONG,
    WS_KEY_STATUS,
    WS_KEY_MESSAGE,
    WS_TYPE_CONNECTION,
    WS_TYPE_INTERRUPTED,
    WS_KEY_CONNECTION_ID,
    WS_TYPE_TURN_COMPLETE,
    WS_TYPE_GENERATION_COMPLETE,
)


@dataclass(slots=True)
class UpstreamEvent:
    """Decoded view of one inbound upstream message."""

    setup_complete: bool = False
    model_turn: bool = False
    audio_chunks: list[bytes] = field(default_factory=list)
    generation_complete: bool = False
    interrupted: bool = False
    turn_complete: bool = False

    @property
    def ends_generation(self) -> bool:
        return self.generation_complete or self.interrupted or self.turn_complete


# ---------------------------------------------------------------------------
# Client -> upstream
# ---------------------------------------------------------------------------


def build_setup_message(settings: UpstreamSettings) -> dict[str, Any]:
    return {
        "setup": {
            "model": f"models/{settings.model}",
            "generationConfig": {
                "responseModalities": list(GEMINI_RESPONSE_MODALITIES),
                "speechConfig": {
                    "voiceConfig": {
                        "prebuiltVoiceConfig": {"voiceName": settings.voice},
                    },
                },
            },
            "systemInstruction": {
                "parts": [{"text": settings.system_instruction}],
            },
            "realtimeInputConfig": {
                "automaticActivityDetection": {
                    "disabled": False,
                    "startOfSpeechSensitivity": GEMINI_START_OF_SPEECH_SENSITIVITY,
                    "endOfSpeechSensitivity": GEMINI_END_OF_SPEECH_SENSITIVITY,
                    "prefixPaddingMs": GEMINI_PREFIX_PADDING_MS,
                    "silenceDurationMs": GEMINI_SILENCE_DURATION_MS,
                },
                "activityHandling": GEMINI_ACTIVITY_HANDLING,
            },
        }
    }


def build_audio_input(audio: bytes) -> dict[str, Any]:
    return {
        "realtimeInput": {
            "audio": {
                "mimeType": GEMINI_INPUT_AUDIO_MIME_TYPE,
                "data": base64.b64encode(audio).decode("ascii"),
            }
        }
    }


def build_activity_start() -> dict[str, Any]:
    return {"realtimeInput": {"activityStart": {}}}


def build_audio_stream_end() -> dict[str, Any]:
    return {"realtimeInput": {"audioStreamEnd": True}}


def encode_upstream_message(message: dict[str, Any]) -> str:
    return orjson.dumps(message).decode("utf-8")


# ---------------------------------------------------------------------------
# Upstream -> client
# ---------------------------------------------------------------------------


def _decode_inline_audio(part: Any) -> bytes | None:
    if not isinstance(part, dict):
        return None
    inline = part.get("inlineData")
    if not isinstance(inline, dict):
        return None
    mime_type = inline.get("mimeType")
    if not isinstance(mime_type, str) or not mime_type.startswith(GEMINI_OUTPUT_AUDIO_MIME_PREFIX):
        return None
    data = inline.get("data")
    if not isinstance(data, str) or not data:
        return None
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ProtocolParseError(f"inlineData is not valid base64: {exc}") from exc


def parse_upstream_message(raw: str | bytes) -> UpstreamEvent:
    """Decode an upstream frame (text or binary JSON) into an UpstreamEvent."""
    try:
        message = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ProtocolParseError(f"invalid JSON: {exc}") from exc

    if not isinstance(message, dict):
        raise ProtocolParseError("upstream message must be a JSON object")

    event = UpstreamEvent(setup_complete="setupComplete" in message)

    content = message.get("serverContent")
    if content is None:
        return event
    if not isinstance(content, dict):
        raise ProtocolParseError("serverContent must be an object")

    model_turn = content.get("modelTurn")
    if isinstance(model_turn, dict):
        event.model_turn = True
        parts = model_turn.get("parts") or []
        if not isinstance(parts, list):
            raise ProtocolParseError("modelTurn.parts must be a list")
        for part in parts:
            audio = _decode_inline_audio(part)
            if audio:
                event.audio_chunks.append(audio)

    event.generation_complete = bool(content.get("generationComplete"))
    event.interrupted = bool(content.get("interrupted"))
    event.turn_complete = bool(content.get("turnComplete"))
    return event


def build_connection_status(
    status: str,
    *,
    connection_id: str | None = None,
    message: str | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {WS_KEY_TYPE: WS_TYPE_CONNECTION, WS_KEY_STATUS: status}
    if connection_id is not None:
        payload[WS_KEY_CONNECTION_ID] = connection_id
    if message is not None:
        payload[WS_KEY_MESSAGE] = message
    return payload


def build_pong() -> dict[str, Any]:
    return {WS_KEY_TYPE: WS_TYPE_PONG}


def turn_signal_events(event: UpstreamEvent) -> list[dict[str, Any]]:
    """Client events for the turn signals in ``event``, in a fixed order."""
    events: list[dict[str, Any]] = []
    if event.generation_complete:
        events.append({WS_KEY_TYPE: WS_TYPE_GENERATION_COMPLETE})
    if event.interrupted:
        events.append({WS_KEY_TYPE: WS_TYPE_INTERRUPTED})
    if event.turn_complete:
        events.append({WS_KEY_TYPE: WS_TYPE_TURN_COMPLETE})
    return events


__all__ = [
    "UpstreamEvent",
    "build_activity_start",
    "build_audio_input",
    "build_audio_stream_end",
    "build_connection_status",
    "build_pong",
    "build_setup_message",
    "encode_upstream_message",
    "parse_upstream_message",
    "turn_signal_events",
]
