"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class UpstreamSettings:
    url: str
    api_key: str
    model: str
    voice: str
    system_instruction: str
    max_message_bytes: int

    @property
    def api_key_configured(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    idle_timeout_s: float
    reaper_interval_s: float


@dataclass(frozen=True, slots=True)
class HttpSettings:
    host: str
    port: int
    app_env: str
    cors_origins: tuple[str, ...]

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"


@dataclass(frozen=True, slots=True)
class AppSettings:
    upstream: UpstreamSettings
    websocket: WebSocketSettings
    http: HttpSettings


__all__ = [
    "AppSettings",
    "HttpSettings",
    "UpstreamSettings",
    "WebSocketSettings",
]
