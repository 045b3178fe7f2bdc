"""Upstream Gemini Live session owned by a single client connection."""

from __future__ import annotations

import asyncio
import logging
import contextlib
from typing import Any

from websockets.exceptions import ConnectionClosed, ConnectionClosedOK, WebSocketException

from live_relay.state.connection import ConnectionRecord
from live_relay.state.settings import UpstreamSettings
from live_relay.config.upstream import GEMINI_API_KEY_HEADER
from live_relay.errors import TransportError, ConfigurationError, ProtocolParseError
from live_relay.handlers.websocket.errors import send_error, safe_send_json, safe_send_bytes
from live_relay.config.websocket import (
    WS_ERROR_UPSTREAM,
    WS_STATUS_CONNECTED,
    WS_ERROR_CONFIGURATION,
    WS_STATUS_DISCONNECTED,
    WS_MESSAGE_UPSTREAM_ENDED,
    WS_MESSAGE_MISSING_API_KEY,
    WS_MESSAGE_UPSTREAM_FAILED,
    WS_MESSAGE_UPSTREAM_UNREACHABLE,
)

from .connector import UpstreamConnector, connect_upstream
from .translator import (
    UpstreamEvent,
    build_audio_input,
    turn_signal_events,
    build_setup_message,
    build_activity_start,
    build_audio_stream_end,
    parse_upstream_message,
    build_connection_status,
    encode_upstream_message,
)

logger = logging.getLogger(__name__)


class UpstreamSession:
    """Speaks the upstream session protocol on behalf of one ConnectionRecord.

    The session owns the upstream socket and a single reader task. It flips the
    record to ready on ``setupComplete``, relays model audio and turn signals to
    the client, and reports upstream closes as status events without tearing the
    client connection down.
    """

    def __init__(
        self,
        record: ConnectionRecord,
        settings: UpstreamSettings,
        *,
        connector: UpstreamConnector = connect_upstream,
    ) -> None:
        self._record = record
        self._settings = settings
        self._connect = connector
        self._ws: Any | None = None
        self._task: asyncio.Task | None = None
        self._open = False
        self._closing = False

    @property
    def is_open(self) -> bool:
        return self._open and not self._closing

    def start(self) -> asyncio.Task:
        if self._task is None:
            self._task = asyncio.create_task(self.open(), name=f"upstream-{self._record.id}")
        return self._task

    async def wait_closed(self) -> None:
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)

    async def open(self) -> None:
        """Connect, send the setup message, then relay upstream events until close."""
        client = self._record.client_ws
        try:
            api_key = self._require_api_key()
        except ConfigurationError as exc:
            logger.error("%s connection_id=%s", exc, self._record.id)
            await send_error(client, error_code=WS_ERROR_CONFIGURATION, message=WS_MESSAGE_MISSING_API_KEY)
            return

        try:
            self._ws = await self._open_transport(api_key)
        except TransportError as exc:
            logger.warning("%s connection_id=%s", exc, self._record.id)
            await self._report_closed(abnormal=True, message=WS_MESSAGE_UPSTREAM_UNREACHABLE)
            return

        if self._closing:
            await self._close_transport()
            return

        self._open = True
        self._record.mark_upstream_open()
        logger.info("upstream session opened connection_id=%s model=%s", self._record.id, self._settings.model)

        await self.send(build_setup_message(self._settings))

        try:
            await self._read_loop()
        except Exception:
            logger.exception("upstream reader failed connection_id=%s", self._record.id)
            await self._report_closed(abnormal=True, message=WS_MESSAGE_UPSTREAM_FAILED)
        finally:
            self._open = False

    async def send(self, message: dict[str, Any]) -> bool:
        ws = self._ws
        if ws is None or not self.is_open:
            return False
        try:
            await ws.send(encode_upstream_message(message))
        except ConnectionClosed:
            # The reader observes the same close and notifies the client.
            logger.debug("upstream send on closed socket connection_id=%s", self._record.id)
            self._open = False
            return False
        return True

    async def send_audio(self, audio: bytes) -> bool:
        return await self.send(build_audio_input(audio))

    async def send_activity_start(self) -> bool:
        return await self.send(build_activity_start())

    async def send_audio_stream_end(self) -> bool:
        return await self.send(build_audio_stream_end())

    async def close(self) -> None:
        """Close the upstream socket and stop the reader; safe to call repeatedly."""
        if self._closing:
            return
        self._closing = True
        self._open = False
        await self._close_transport()

        task = self._task
        if task is not None and task is not asyncio.current_task() and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

    def _require_api_key(self) -> str:
        if not self._settings.api_key:
            raise ConfigurationError("upstream API key is not configured")
        return self._settings.api_key

    async def _open_transport(self, api_key: str) -> Any:
        headers = {GEMINI_API_KEY_HEADER: api_key}
        try:
            return await self._connect(self._settings.url, headers, self._settings.max_message_bytes)
        except (OSError, TimeoutError, WebSocketException) as exc:
            raise TransportError(f"upstream connect failed: {exc}") from exc

    async def _close_transport(self) -> None:
        ws = self._ws
        if ws is None:
            return
        with contextlib.suppress(Exception):
            await ws.close()

    async def _read_loop(self) -> None:
        ws = self._ws
        try:
            while True:
                raw = await ws.recv()
                await self._handle_message(raw)
        except ConnectionClosedOK:
            self._open = False
            await self._report_closed(abnormal=False)
        except ConnectionClosed as exc:
            self._open = False
            logger.warning("upstream closed abnormally connection_id=%s: %s", self._record.id, exc)
            await self._report_closed(abnormal=True, message=WS_MESSAGE_UPSTREAM_FAILED)

    async def _handle_message(self, raw: str | bytes) -> None:
        try:
            event = parse_upstream_message(raw)
        except ProtocolParseError as exc:
            logger.warning("dropping malformed upstream message connection_id=%s: %s", self._record.id, exc)
            return

        if self._record.is_closing:
            return
        await self._apply_event(event)

    async def _apply_event(self, event: UpstreamEvent) -> None:
        record = self._record
        client = record.client_ws

        if event.setup_complete:
            if record.mark_ready():
                logger.info("upstream setup complete connection_id=%s", record.id)
                await safe_send_json(client, build_connection_status(WS_STATUS_CONNECTED, connection_id=record.id))
            else:
                logger.warning("ignoring repeated setupComplete connection_id=%s", record.id)

        if event.model_turn:
            record.generating = True
        for chunk in event.audio_chunks:
            await safe_send_bytes(client, chunk)

        if event.ends_generation:
            record.generating = False
            for payload in turn_signal_events(event):
                await safe_send_json(client, payload)

    async def _report_closed(self, *, abnormal: bool, message: str | None = None) -> None:
        if self._closing or self._record.is_closing:
            return
        client = self._record.client_ws
        if abnormal:
            await send_error(client, error_code=WS_ERROR_UPSTREAM, message=message or WS_MESSAGE_UPSTREAM_FAILED)
        logger.info("upstream session closed connection_id=%s", self._record.id)
        await safe_send_json(
            client,
            build_connection_status(
                WS_STATUS_DISCONNECTED,
                connection_id=self._record.id,
                message=WS_MESSAGE_UPSTREAM_ENDED,
            ),
        )


__all__ = ["UpstreamSession"]
