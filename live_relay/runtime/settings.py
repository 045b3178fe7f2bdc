"""Load runtime settings.

Configuration values are resolved from the environment in `live_relay/config/*`
and exposed here as structured dataclasses for the rest of the server.
"""

from __future__ import annotations

from live_relay.config.persona import SYSTEM_INSTRUCTION
from live_relay.config.secrets import get_gemini_api_key
from live_relay.config.http import HOST, PORT, APP_ENV, CORS_ORIGINS
from live_relay.config.websocket import WS_IDLE_TIMEOUT_S, WS_REAPER_INTERVAL_S
from live_relay.state.settings import AppSettings, HttpSettings, UpstreamSettings, WebSocketSettings
from live_relay.config.upstream import GEMINI_MODEL, GEMINI_VOICE, GEMINI_WS_URL, UPSTREAM_MAX_MESSAGE_BYTES


def load_settings() -> AppSettings:
    return AppSettings(
        upstream=UpstreamSettings(
            url=GEMINI_WS_URL,
            api_key=get_gemini_api_key(),
            model=GEMINI_MODEL,
            voice=GEMINI_VOICE,
            system_instruction=SYSTEM_INSTRUCTION,
            max_message_bytes=UPSTREAM_MAX_MESSAGE_BYTES,
        ),
        websocket=WebSocketSettings(
            idle_timeout_s=WS_IDLE_TIMEOUT_S,
            reaper_interval_s=WS_REAPER_INTERVAL_S,
        ),
        http=HttpSettings(
            host=HOST,
            port=PORT,
            app_env=APP_ENV,
            cors_origins=tuple(CORS_ORIGINS),
        ),
    )


__all__ = ["load_settings"]
