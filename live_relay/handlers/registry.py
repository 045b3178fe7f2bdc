"""Registry of live relay connections."""

from __future__ import annotations

import time
import logging
import secrets
import itertools
from typing import Any

from live_relay.state.connection import ConnectionRecord

logger = logging.getLogger(__name__)

_ID_SEQUENCE = itertools.count(1)


def new_connection_id() -> str:
    """Build an id that is unique for the lifetime of the process."""
    return f"conn_{int(time.time() * 1000)}_{next(_ID_SEQUENCE)}_{secrets.token_hex(4)}"


class ConnectionRegistry:
    """Owns every ConnectionRecord for the process.

    All mutations run on the event loop without awaiting between the lookup and
    the change, so no lock is needed.
    """

    def __init__(self) -> None:
        self._records: dict[str, ConnectionRecord] = {}

    def register(self, connection_id: str, client_ws: Any) -> ConnectionRecord:
        if connection_id in self._records:
            raise ValueError(f"connection id already registered: {connection_id}")
        record = ConnectionRecord(id=connection_id, client_ws=client_ws)
        self._records[connection_id] = record
        return record

    def get(self, connection_id: str) -> ConnectionRecord | None:
        return self._records.get(connection_id)

    async def remove(self, connection_id: str) -> bool:
        """Tear down a record; a second call for the same id is a no-op."""
        record = self._records.pop(connection_id, None)
        if record is None:
            return False

        record.mark_closing()
        upstream = record.upstream
        if upstream is not None:
            try:
                await upstream.close()
            except Exception:
                logger.warning("upstream close failed connection_id=%s", connection_id, exc_info=True)
        record.mark_closed()
        logger.info("connection removed connection_id=%s active=%s", connection_id, len(self._records))
        return True

    def ids(self) -> list[str]:
        return list(self._records)

    def records(self) -> list[ConnectionRecord]:
        return list(self._records.values())

    def snapshot(self) -> list[dict[str, Any]]:
        return [record.summary() for record in self._records.values()]

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, connection_id: object) -> bool:
        return connection_id in self._records


__all__ = ["ConnectionRegistry", "new_connection_id"]
