from __future__ import annotations

import pytest

from live_relay.state.connection import ConnectionPhase
from live_relay.handlers.registry import ConnectionRegistry, new_connection_id


class _StubUpstream:
    def __init__(self, *, fail: bool = False) -> None:
        self.close_calls = 0
        self._fail = fail

    async def close(self) -> None:
        self.close_calls += 1
        if self._fail:
            raise RuntimeError("boom")


def test_new_connection_id_is_unique() -> None:
    ids = {new_connection_id() for _ in range(2000)}
    assert len(ids) == 2000
    assert all(cid.startswith("conn_") for cid in ids)


def test_register_and_lookup() -> None:
    registry = ConnectionRegistry()
    record = registry.register("c1", object())

    assert registry.get("c1") is record
    assert "c1" in registry
    assert len(registry) == 1
    assert record.ready is False
    assert record.generating is False
    assert record.phase == ConnectionPhase.CONNECTING


def test_register_duplicate_id_rejected() -> None:
    registry = ConnectionRegistry()
    registry.register("c1", object())
    with pytest.raises(ValueError):
        registry.register("c1", object())


@pytest.mark.asyncio
async def test_remove_closes_upstream_once() -> None:
    registry = ConnectionRegistry()
    record = registry.register("c1", object())
    upstream = _StubUpstream()
    record.upstream = upstream

    assert await registry.remove("c1") is True
    assert await registry.remove("c1") is False

    assert upstream.close_calls == 1
    assert record.phase == ConnectionPhase.CLOSED
    assert "c1" not in registry
    assert registry.get("c1") is None


@pytest.mark.asyncio
async def test_remove_survives_upstream_close_failure() -> None:
    registry = ConnectionRegistry()
    record = registry.register("c1", object())
    record.upstream = _StubUpstream(fail=True)

    assert await registry.remove("c1") is True
    assert len(registry) == 0
    assert record.is_closing


@pytest.mark.asyncio
async def test_remove_unknown_id_is_noop() -> None:
    registry = ConnectionRegistry()
    assert await registry.remove("missing") is False


def test_snapshot_reports_flags() -> None:
    registry = ConnectionRegistry()
    first = registry.register("c1", object())
    registry.register("c2", object())
    first.mark_ready()
    first.generating = True
    first.touch(now=123.0)

    snapshot = {item["id"]: item for item in registry.snapshot()}
    assert snapshot["c1"]["ready"] is True
    assert snapshot["c1"]["generating"] is True
    assert snapshot["c1"]["last_activity"] == 123.0
    assert snapshot["c1"]["created_at"] == first.created_at
    assert snapshot["c2"]["ready"] is False
    assert sorted(registry.ids()) == ["c1", "c2"]


def test_mark_ready_only_once() -> None:
    registry = ConnectionRegistry()
    record = registry.register("c1", object())

    assert record.mark_ready() is True
    assert record.mark_ready() is False
    assert record.ready is True
    assert record.phase == ConnectionPhase.READY
