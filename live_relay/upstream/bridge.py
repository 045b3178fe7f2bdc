"""Factory pairing client connections with upstream sessions."""

from __future__ import annotations

from live_relay.state.connection import ConnectionRecord
from live_relay.state.settings import UpstreamSettings

from .session import UpstreamSession
from .connector import UpstreamConnector, connect_upstream


class UpstreamBridge:
    def __init__(self, *, settings: UpstreamSettings, connector: UpstreamConnector = connect_upstream) -> None:
        self._settings = settings
        self._connector = connector

    def new_session(self, record: ConnectionRecord) -> UpstreamSession:
        if record.upstream is not None:
            raise RuntimeError(f"connection {record.id} already owns an upstream session")
        session = UpstreamSession(record, self._settings, connector=self._connector)
        record.upstream = session
        return session


__all__ = ["UpstreamBridge"]
