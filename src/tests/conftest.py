"""Shared fixtures.

Outbound HTTP (n8n, Tavus) all goes through `urlopen` in infra/http_json.py, so
tests swap that single name for a recorder instead of touching the network.
"""

from __future__ import annotations

import io
import json
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union
from urllib.error import HTTPError, URLError

import pytest

from src.tavus_bridge.config.settings import Settings

N8N_URL = "https://n8n.example.test/webhook/tavus-transcript"


@dataclass
class RecordedRequest:
    url: str
    method: str
    headers: dict
    body: Any
    timeout: Optional[float]


class _FakeResponse:
    def __init__(self, status: int, body: bytes) -> None:
        self.status = status
        self._body = body

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> "_FakeResponse":
        return self

    def __exit__(self, *exc: Any) -> None:
        return None


@dataclass
class FakeUrlopen:
    """
    Callable stand-in for urllib.request.urlopen.

    `responses` is consumed in order; each item is (status, json-able body) or an
    exception instance to raise. The last item repeats once the list runs out.
    """

    responses: List[Union[tuple, BaseException]] = field(default_factory=lambda: [(200, {"ok": True})])
    calls: List[RecordedRequest] = field(default_factory=list)

    def __call__(self, req, timeout=None, context=None):
        self.calls.append(
            RecordedRequest(
                url=req.full_url,
                method=req.get_method(),
                headers={k.lower(): v for k, v in req.header_items()},
                body=json.loads(req.data.decode("utf-8")),
                timeout=timeout,
            )
        )
        item = self.responses[min(len(self.calls), len(self.responses)) - 1]
        if isinstance(item, BaseException):
            raise item

        status, body = item
        raw = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
        if status >= 400:
            raise HTTPError(req.full_url, status, "error", hdrs=None, fp=io.BytesIO(raw))
        return _FakeResponse(status, raw)


class _StructuredStub:
    def __init__(self, model: "StubChatModel") -> None:
        self.model = model

    async def ainvoke(self, prompt: str) -> Any:
        self.model.prompts.append(prompt)
        if isinstance(self.model.result, BaseException):
            raise self.model.result
        return self.model.result


class StubChatModel:
    """Just enough of a langchain chat model for with_structured_output().ainvoke()."""

    def __init__(self, result: Any) -> None:
        self.result = result
        self.prompts: List[str] = []
        self.schemas: List[type] = []

    def with_structured_output(self, schema: type) -> _StructuredStub:
        self.schemas.append(schema)
        return _StructuredStub(self)


@pytest.fixture
def make_chat_model():
    return StubChatModel


@pytest.fixture
def fake_urlopen(monkeypatch) -> FakeUrlopen:
    fake = FakeUrlopen()
    monkeypatch.setattr("src.tavus_bridge.infra.http_json.urlopen", fake)
    return fake


@pytest.fixture
def n8n_url() -> str:
    return N8N_URL


@pytest.fixture
def network_down() -> URLError:
    return URLError("connection refused")


@pytest.fixture
def make_settings():
    def _make(**overrides: Any) -> Settings:
        values = {"n8n_webhook_url": N8N_URL, "tavus_api_key": "test-key"}
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make
