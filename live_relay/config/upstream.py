"""Upstream (Gemini Live) session configuration (env-resolved constants only)."""

from __future__ import annotations

import os

GEMINI_WS_URL: str = (os.getenv("GEMINI_WS_URL") or "").strip() or (
    "wss://generativelanguage.googleapis.com/ws/"
    "google.ai.generativelanguage.v1alpha.GenerativeService/BidiGenerateContent"
)
GEMINI_API_KEY_HEADER = "x-goog-api-key"

GEMINI_MODEL: str = (os.getenv("GEMINI_MODEL") or "").strip() or "gemini-2.0-flash-live-001"
GEMINI_VOICE: str = (os.getenv("GEMINI_VOICE") or "").strip() or "Aoede"

GEMINI_RESPONSE_MODALITIES: tuple[str, ...] = ("AUDIO",)

# Client audio is forwarded as-is; only the MIME label is attached.
GEMINI_INPUT_AUDIO_MIME_TYPE = "audio/pcm"
GEMINI_OUTPUT_AUDIO_MIME_PREFIX = "audio/"

# Automatic activity detection (server-side VAD).
GEMINI_START_OF_SPEECH_SENSITIVITY = "START_SENSITIVITY_HIGH"
GEMINI_END_OF_SPEECH_SENSITIVITY = "END_SENSITIVITY_HIGH"
GEMINI_PREFIX_PADDING_MS = 300
GEMINI_SILENCE_DURATION_MS = 1000
GEMINI_ACTIVITY_HANDLING = "START_OF_ACTIVITY_INTERRUPTS"

_MAX_MESSAGE_BYTES_RAW = (os.getenv("UPSTREAM_MAX_MESSAGE_BYTES") or "").strip()
try:
    UPSTREAM_MAX_MESSAGE_BYTES: int = int(_MAX_MESSAGE_BYTES_RAW) if _MAX_MESSAGE_BYTES_RAW else 16 * 1024 * 1024
except Exception:
    UPSTREAM_MAX_MESSAGE_BYTES = 16 * 1024 * 1024
UPSTREAM_MAX_MESSAGE_BYTES = max(64 * 1024, int(UPSTREAM_MAX_MESSAGE_BYTES))

__all__ = [
    "GEMINI_ACTIVITY_HANDLING",
    "GEMINI_API_KEY_HEADER",
    "GEMINI_END_OF_SPEECH_SENSITIVITY",
    "GEMINI_INPUT_AUDIO_MIME_TYPE",
    "GEMINI_MODEL",
    "GEMINI_OUTPUT_AUDIO_MIME_PREFIX",
    "GEMINI_PREFIX_PADDING_MS",
    "GEMINI_RESPONSE_MODALITIES",
    "GEMINI_SILENCE_DURATION_MS",
    "GEMINI_START_OF_SPEECH_SENSITIVITY",
    "GEMINI_VOICE",
    "GEMINI_WS_URL",
    "UPSTREAM_MAX_MESSAGE_BYTES",
]
