"""Transport factory for upstream WebSocket connections."""

from __future__ import annotations

from typing import Any
from collections.abc import Callable, Awaitable

import websockets

UpstreamConnector = Callable[[str, dict[str, str], int], Awaitable[Any]]


async def connect_upstream(url: str, headers: dict[str, str], max_size: int) -> Any:
    return await websockets.connect(url, additional_headers=headers, max_size=max_size)


__all__ = ["UpstreamConnector", "connect_upstream"]
