from __future__ import annotations

import base64

from fastapi.testclient import TestClient

from live_relay.server import create_app
from live_relay.runtime.dependencies import build_runtime_deps
from tests.utils.fakes import FakeConnector, make_settings


def _client(connector: FakeConnector, *, api_key: str = "test-key") -> TestClient:
    app = create_app(
        make_settings(api_key=api_key),
        deps_factory=lambda settings: build_runtime_deps(settings, connector=connector),
    )
    return TestClient(app)


def test_health_endpoints() -> None:
    with _client(FakeConnector()) as client:
        health = client.get("/health").json()
        assert health["status"] == "healthy"
        assert health["activeConnections"] == 0
        assert health["model"] == "test-model"
        assert health["geminiModel"] == "test-model"
        assert health["apiKeyConfigured"] is True
        assert health["uptime"] >= 0
        assert "timestamp" in health

        assert client.get("/healthz").json() == {"status": "ok"}
        assert client.get("/stats").json() == {"totalConnections": 0, "connections": []}


def test_health_reports_missing_key() -> None:
    with _client(FakeConnector(), api_key="") as client:
        assert client.get("/health").json()["apiKeyConfigured"] is False


def test_voice_session_end_to_end() -> None:
    connector = FakeConnector(auto_setup=True)
    with _client(connector) as client:
        with client.websocket_connect("/voice") as ws:
            connected = ws.receive_json()
            assert connected["type"] == "connection"
            assert connected["status"] == "connected"
            assert connected["connectionId"].startswith("conn_")

            ws.send_bytes(b"\x01\x02\x03\x04")
            ws.send_text('{"type": "ping"}')
            assert ws.receive_json() == {"type": "pong"}

            stats = client.get("/stats").json()
            assert stats["totalConnections"] == 1
            assert stats["connections"][0]["id"] == connected["connectionId"]
            entry = stats["connections"][0]
            assert entry["ready"] is True
            assert entry["connected"] is True
            assert entry["generating"] is False
            assert entry["isGenerating"] is False
            assert "createdAt" in entry and "lastActivity" in entry

            upstream = connector.upstreams[0]
            assert "setup" in upstream.sent[0]
            audio = upstream.sent[1]["realtimeInput"]["audio"]
            assert base64.b64decode(audio["data"]) == b"\x01\x02\x03\x04"
            assert len(upstream.sent) == 2

            ws.send_text("garbage")
            assert ws.receive_json() == {
                "type": "error",
                "code": "invalid_message",
                "message": "Failed to process message",
            }


def test_voice_session_without_api_key() -> None:
    connector = FakeConnector()
    with _client(connector, api_key="") as client:
        with client.websocket_connect("/voice") as ws:
            event = ws.receive_json()
            assert event["type"] == "error"
            assert event["code"] == "configuration_error"
    assert connector.calls == []


def test_connections_closed_on_app_shutdown() -> None:
    connector = FakeConnector(auto_setup=True)
    client = _client(connector)
    with client:
        with client.websocket_connect("/voice") as ws:
            assert ws.receive_json()["status"] == "connected"
            runtime_deps = client.app.state.runtime_deps
            assert len(runtime_deps.registry) == 1
    assert len(runtime_deps.registry) == 0
    assert connector.upstreams[0].closed is True
