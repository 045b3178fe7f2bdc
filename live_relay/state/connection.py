"""Per-connection relay state."""

from __future__ import annotations

import time
import enum
from typing import TYPE_CHECKING, Any
from dataclasses import field, dataclass

if TYPE_CHECKING:
    from live_relay.upstream.session import UpstreamSession


class ConnectionPhase(str, enum.Enum):
    CONNECTING = "connecting"
    AWAITING_SETUP = "awaiting_setup"
    READY = "ready"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass(slots=True, eq=False)
class ConnectionRecord:
    """State for one client connection and its paired upstream session.

    ``ready`` flips to True once, when the upstream confirms setup, and never
    reverts. ``generating`` is informational and does not gate forwarding.
    """

    id: str
    client_ws: Any
    upstream: UpstreamSession | None = None
    ready: bool = False
    generating: bool = False
    phase: ConnectionPhase = ConnectionPhase.CONNECTING
    created_at: float = field(default_factory=time.time)
    last_activity: float = field(default_factory=time.time)

    def touch(self, now: float | None = None) -> None:
        self.last_activity = time.time() if now is None else float(now)

    @property
    def is_closing(self) -> bool:
        return self.phase in (ConnectionPhase.CLOSING, ConnectionPhase.CLOSED)

    def mark_upstream_open(self) -> None:
        if self.phase == ConnectionPhase.CONNECTING:
            self.phase = ConnectionPhase.AWAITING_SETUP

    def mark_ready(self) -> bool:
        """Return True only for the first setup confirmation."""
        if self.ready or self.is_closing:
            return False
        self.ready = True
        self.phase = ConnectionPhase.READY
        return True

    def mark_closing(self) -> None:
        if self.phase != ConnectionPhase.CLOSED:
            self.phase = ConnectionPhase.CLOSING

    def mark_closed(self) -> None:
        self.phase = ConnectionPhase.CLOSED

    def summary(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "ready": self.ready,
            "generating": self.generating,
            "created_at": self.created_at,
            "last_activity": self.last_activity,
            "phase": self.phase.value,
        }


__all__ = ["ConnectionPhase", "ConnectionRecord"]
