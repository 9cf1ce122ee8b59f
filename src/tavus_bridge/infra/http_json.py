"""
JSON-over-HTTP helper.

Design goals:
- No extra dependency (use stdlib urllib)
- Async-friendly (caller should run it via asyncio.to_thread)
- Minimal surface area: "POST dict -> status + decoded body"

HTTP error statuses are returned, not raised: the Tavus client turns them into
TavusAPIError, the n8n forwarder only logs them. Network failures (URLError,
timeouts) still raise.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.error import HTTPError
from urllib.request import Request, urlopen

from src.tavus_bridge.infra.http_ssl import create_ssl_context


@dataclass(frozen=True)
class JsonHttpResponse:
    status_code: int
    body_text: str
    data: Any = None  # decoded JSON, or None if the body was not JSON

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


def _decode(raw_bytes: bytes) -> tuple[str, Any]:
    text = raw_bytes.decode("utf-8", errors="replace")
    if not text.strip():
        return text, None
    try:
        return text, json.loads(text)
    except ValueError:
        return text, None


def post_json(
    url: str,
    payload: Any,
    *,
    headers: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = None,
) -> JsonHttpResponse:
    """
    POST `payload` as JSON and return the response.

    This is a blocking function (urllib). Call it via asyncio.to_thread(...) from async code.
    `timeout=None` keeps urllib's default socket timeout.
    """
    body = json.dumps(payload, ensure_ascii=False).encode("utf-8")

    req = Request(
        url,
        data=body,
        method="POST",
        headers={"Content-Type": "application/json", **dict(headers or {})},
    )

    kwargs: dict[str, Any] = {"context": create_ssl_context()}
    if timeout is not None:
        kwargs["timeout"] = timeout

    try:
        with urlopen(req, **kwargs) as resp:
            status = int(getattr(resp, "status", 0) or 0)
            text, data = _decode(resp.read())
    except HTTPError as err:
        status = int(err.code or 0)
        text, data = _decode(err.read() or b"")

    return JsonHttpResponse(status_code=status, body_text=text, data=data)
