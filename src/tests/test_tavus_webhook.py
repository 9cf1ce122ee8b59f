"""Tavus webhook relay: routing, parsing, filtering and best-effort forwarding."""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from src.tavus_bridge.main import create_app

TRANSCRIPT_READY = {
    "event_type": "application.transcription_ready",
    "message_type": "application",
    "conversation_id": "c1",
    "timestamp": "2025-07-11T06:48:37Z",
    "webhook_url": "https://provider/hook",
    "properties": {"transcript": [{"role": "user", "content": "Hi."}]},
}

EXPECTED_FORWARD = {
    "source": "tavus",
    "event_type": "application.transcription_ready",
    "message_type": "application",
    "conversation_id": "c1",
    "timestamp": "2025-07-11T06:48:37Z",
    "webhook_url": "https://provider/hook",
    "transcript": [{"role": "user", "content": "Hi."}],
}


@pytest.fixture
def client(make_settings, fake_urlopen) -> TestClient:
    return TestClient(create_app(make_settings()))


def test_transcription_ready_is_forwarded_once(client, fake_urlopen, n8n_url):
    resp = client.post("/tavus/webhook", json=TRANSCRIPT_READY)

    assert resp.status_code == 200
    assert resp.json() == {"status": "success"}
    assert len(fake_urlopen.calls) == 1

    call = fake_urlopen.calls[0]
    assert call.url == n8n_url
    assert call.method == "POST"
    assert call.headers["content-type"] == "application/json"
    assert call.body == EXPECTED_FORWARD
    assert call.timeout is None


def test_missing_transcript_forwards_empty_list(client, fake_urlopen):
    payload = {**TRANSCRIPT_READY, "properties": {"replica_id": "r1"}}

    resp = client.post("/tavus/webhook", json=payload)

    assert resp.status_code == 200
    assert fake_urlopen.calls[0].body["transcript"] == []


def test_missing_properties_forwards_empty_list(client, fake_urlopen):
    payload = {k: v for k, v in TRANSCRIPT_READY.items() if k != "properties"}

    resp = client.post("/tavus/webhook", json=payload)

    assert resp.status_code == 200
    assert fake_urlopen.calls[0].body["transcript"] == []


def test_unknown_fields_are_tolerated_and_not_forwarded(client, fake_urlopen):
    payload = {
        **TRANSCRIPT_READY,
        "future_field": {"nested": True},
        "properties": {
            "transcript": [{"role": "assistant", "content": "How's it going?"}],
            "recording_url": "https://provider/rec.mp4",
        },
    }

    resp = client.post("/tavus/webhook", json=payload)

    assert resp.status_code == 200
    body = fake_urlopen.calls[0].body
    assert "future_field" not in body
    assert "recording_url" not in body
    assert body["transcript"] == [{"role": "assistant", "content": "How's it going?"}]


@pytest.mark.parametrize(
    "event_type",
    ["system.replica_joined", "system.shutdown", "application.perception_analysis", None],
)
def test_other_events_are_acknowledged_without_forwarding(client, fake_urlopen, event_type):
    payload = {**TRANSCRIPT_READY, "event_type": event_type}

    resp = client.post("/tavus/webhook", json=payload)

    assert resp.status_code == 200
    assert resp.json() == {"status": "success"}
    assert fake_urlopen.calls == []


@pytest.mark.parametrize(
    "method,path",
    [
        ("GET", "/tavus/webhook"),
        ("PUT", "/tavus/webhook"),
        ("DELETE", "/tavus/webhook"),
        ("POST", "/tavus/webhook/"),
        ("POST", "/tavus"),
        ("POST", "/webhook"),
        ("GET", "/"),
        ("GET", "/docs"),
    ],
)
def test_wrong_method_or_path_is_not_found(client, fake_urlopen, method, path):
    resp = client.request(method, path, json=TRANSCRIPT_READY)

    assert resp.status_code == 404
    assert resp.json() == {"error": "Not found"}
    assert fake_urlopen.calls == []


@pytest.mark.parametrize(
    "raw",
    [b"{not json", b"", b"[1, 2, 3]", b'"text"', b"null"],
)
def test_invalid_body_is_bad_request(client, fake_urlopen, raw):
    resp = client.post(
        "/tavus/webhook",
        content=raw,
        headers={"Content-Type": "application/json"},
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid JSON"}
    assert fake_urlopen.calls == []


@pytest.mark.parametrize(
    "turns",
    [
        [{"role": "assistant", "content": None, "tool_calls": [{"name": "find_inspiration"}]}],
        [{"content": "no role"}],
        [{"role": "user", "content": 5}],
        "not a list",
    ],
)
def test_unusual_transcripts_are_forwarded_verbatim(client, fake_urlopen, turns):
    payload = {**TRANSCRIPT_READY, "properties": {"transcript": turns}}

    resp = client.post("/tavus/webhook", json=payload)

    assert resp.status_code == 200
    assert len(fake_urlopen.calls) == 1
    assert fake_urlopen.calls[0].body["transcript"] == turns


def test_untyped_envelope_fields_pass_through(client, fake_urlopen):
    payload = {**TRANSCRIPT_READY, "conversation_id": 7, "timestamp": 1720680517, "properties": "x"}

    resp = client.post("/tavus/webhook", json=payload)

    assert resp.status_code == 200
    body = fake_urlopen.calls[0].body
    assert body["conversation_id"] == 7
    assert body["timestamp"] == 1720680517
    assert body["transcript"] == []


def test_non_string_event_type_is_acknowledged(client, fake_urlopen):
    resp = client.post("/tavus/webhook", json={"event_type": 42})

    assert resp.status_code == 200
    assert resp.json() == {"status": "success"}
    assert fake_urlopen.calls == []


def test_no_downstream_url_disables_forwarding(make_settings, fake_urlopen):
    client = TestClient(create_app(make_settings(n8n_webhook_url=None)))

    resp = client.post("/tavus/webhook", json=TRANSCRIPT_READY)

    assert resp.status_code == 200
    assert resp.json() == {"status": "success"}
    assert fake_urlopen.calls == []


def test_downstream_error_status_still_acknowledges(client, fake_urlopen):
    fake_urlopen.responses = [(500, b"n8n exploded")]

    resp = client.post("/tavus/webhook", json=TRANSCRIPT_READY)

    assert resp.status_code == 200
    assert resp.json() == {"status": "success"}
    assert len(fake_urlopen.calls) == 1


def test_downstream_network_error_still_acknowledges(client, fake_urlopen, network_down):
    fake_urlopen.responses = [network_down]

    resp = client.post("/tavus/webhook", json=TRANSCRIPT_READY)

    assert resp.status_code == 200
    assert resp.json() == {"status": "success"}
    assert len(fake_urlopen.calls) == 1


def test_duplicate_callbacks_are_forwarded_twice(client, fake_urlopen):
    # No deduplication: the relay keeps no state between requests.
    client.post("/tavus/webhook", json=TRANSCRIPT_READY)
    client.post("/tavus/webhook", json=TRANSCRIPT_READY)

    assert len(fake_urlopen.calls) == 2
    assert fake_urlopen.calls[0].body == fake_urlopen.calls[1].body == EXPECTED_FORWARD


def test_unexpected_failure_is_server_error(make_settings, fake_urlopen, monkeypatch):
    app = create_app(make_settings())

    def _boom(_envelope):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(
        "src.tavus_bridge.api.tavus_webhook.OutboundForwardEnvelope.from_callback",
        _boom,
    )

    resp = TestClient(app).post("/tavus/webhook", json=TRANSCRIPT_READY)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
    assert "secret" not in resp.text
    assert fake_urlopen.calls == []


def test_route_is_configurable(make_settings, fake_urlopen):
    client = TestClient(create_app(make_settings(tavus_webhook_path="/hooks/cvi")))

    assert client.post("/hooks/cvi", json=TRANSCRIPT_READY).status_code == 200
    assert client.post("/tavus/webhook", json=TRANSCRIPT_READY).status_code == 404
    assert len(fake_urlopen.calls) == 1


def test_forward_timeout_is_passed_through(make_settings, fake_urlopen):
    client = TestClient(create_app(make_settings(n8n_forward_timeout_seconds=2.5)))

    client.post("/tavus/webhook", content=json.dumps(TRANSCRIPT_READY))

    assert fake_urlopen.calls[0].timeout == 2.5
