"""In-memory stand-ins for the client socket and the Gemini Live upstream."""

from __future__ import annotations

import asyncio
from typing import Any
from collections.abc import Callable

import orjson
from fastapi.websockets import WebSocketState
from websockets.frames import Close
from websockets.exceptions import ConnectionClosedOK, ConnectionClosedError

from live_relay.state.settings import AppSettings, HttpSettings, UpstreamSettings, WebSocketSettings


def make_settings(
    *,
    api_key: str = "test-key",
    idle_timeout_s: float = 300.0,
    reaper_interval_s: float = 60.0,
) -> AppSettings:
    return AppSettings(
        upstream=UpstreamSettings(
            url="wss://upstream.invalid/live",
            api_key=api_key,
            model="test-model",
            voice="Aoede",
            system_instruction="Be brief.",
            max_message_bytes=1 << 20,
        ),
        websocket=WebSocketSettings(idle_timeout_s=idle_timeout_s, reaper_interval_s=reaper_interval_s),
        http=HttpSettings(host="127.0.0.1", port=3001, app_env="test", cors_origins=("http://localhost:3000",)),
    )


async def wait_until(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.005)

    await asyncio.wait_for(_poll(), timeout=timeout)


class FakeClientWebSocket:
    """Records what the relay sends and replays queued inbound frames."""

    def __init__(self) -> None:
        self.accepted = False
        self.sent: list[tuple[str, Any]] = []
        self.close_code: int | None = None
        self.close_reason: str | None = None
        self.closed = asyncio.Event()
        self.application_state = WebSocketState.CONNECTING
        self._inbound: asyncio.Queue[dict[str, Any]] = asyncio.Queue()

    async def accept(self) -> None:
        self.accepted = True
        self.application_state = WebSocketState.CONNECTED

    async def send_text(self, text: str) -> None:
        self.sent.append(("text", text))

    async def send_bytes(self, data: bytes) -> None:
        self.sent.append(("bytes", data))

    async def close(self, code: int = 1000, reason: str | None = None) -> None:
        self.close_code = code
        self.close_reason = reason or ""
        self.application_state = WebSocketState.DISCONNECTED
        self.closed.set()
        self._inbound.put_nowait({"type": "websocket.disconnect", "code": code})

    async def receive(self) -> dict[str, Any]:
        return await self._inbound.get()

    def feed_text(self, text: str) -> None:
        self._inbound.put_nowait({"type": "websocket.receive", "text": text})

    def feed_bytes(self, data: bytes) -> None:
        self._inbound.put_nowait({"type": "websocket.receive", "bytes": data})

    def feed_disconnect(self) -> None:
        self._inbound.put_nowait({"type": "websocket.disconnect", "code": 1000})

    def events(self) -> list[dict[str, Any]]:
        return [orjson.loads(payload) for kind, payload in self.sent if kind == "text"]

    def audio(self) -> list[bytes]:
        return [payload for kind, payload in self.sent if kind == "bytes"]


class FakeUpstream:
    """Upstream socket double: ``push`` queues server messages, ``sent`` holds decoded client ones."""

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.closed = False
        self._inbound: asyncio.Queue[Any] = asyncio.Queue()

    async def send(self, text: str) -> None:
        if self.closed:
            raise ConnectionClosedOK(Close(1000, ""), Close(1000, ""), True)
        self.sent.append(orjson.loads(text))

    async def recv(self) -> str:
        item = await self._inbound.get()
        if isinstance(item, BaseException):
            raise item
        return item

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._inbound.put_nowait(ConnectionClosedOK(Close(1000, ""), Close(1000, ""), True))

    def push(self, message: dict[str, Any]) -> None:
        self._inbound.put_nowait(orjson.dumps(message).decode("utf-8"))

    def push_raw(self, raw: str | bytes) -> None:
        self._inbound.put_nowait(raw)

    def end_normally(self) -> None:
        self._inbound.put_nowait(ConnectionClosedOK(Close(1000, "bye"), None))

    def end_abnormally(self) -> None:
        self._inbound.put_nowait(ConnectionClosedError(None, None))


class FakeConnector:
    """Callable matching ``connect_upstream``; hands out one FakeUpstream per call."""

    def __init__(self, *, auto_setup: bool = False, error: BaseException | None = None) -> None:
        self.auto_setup = auto_setup
        self.error = error
        self.calls: list[tuple[str, dict[str, str], int]] = []
        self.upstreams: list[FakeUpstream] = []

    async def __call__(self, url: str, headers: dict[str, str], max_size: int) -> FakeUpstream:
        self.calls.append((url, dict(headers), max_size))
        if self.error is not None:
            raise self.error
        upstream = FakeUpstream()
        if self.auto_setup:
            upstream.push({"setupComplete": {}})
        self.upstreams.append(upstream)
        return upstream


__all__ = [
    "FakeClientWebSocket",
    "FakeConnector",
    "FakeUpstream",
    "make_settings",
    "wait_until",
]
