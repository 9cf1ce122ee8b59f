"""
n8n forwarder (delivery, best-effort).

Responsibilities:
- POST a JSON payload to the configured n8n Webhook Trigger URL
- Log success / failure
- Return a ForwardResult instead of raising

IMPORTANT:
- At-most-once: a single POST, no retry, no idempotency key.
- A missing N8N_WEBHOOK_URL makes every forward a no-op.
- Callers (the Tavus relay, call-ended and feedback notifications) never see
  forwarding errors; they only get the ForwardResult for logging/tests.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from src.tavus_bridge.infra.http_json import post_json
from src.tavus_bridge.logging.logger import setup_logger

logger = setup_logger(__name__)

_BODY_LOG_LIMIT = 500


@dataclass(frozen=True)
class ForwardResult:
    attempted: bool
    delivered: bool = False
    status_code: Optional[int] = None
    error: Optional[str] = None


class N8NForwarder:
    def __init__(
        self,
        webhook_url: Optional[str],
        *,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        self.webhook_url = (webhook_url or "").strip() or None
        self.timeout_seconds = timeout_seconds

    @property
    def enabled(self) -> bool:
        return self.webhook_url is not None

    def forward(self, payload: Mapping[str, Any], *, event: str = "unknown") -> ForwardResult:
        """
        Attempt one POST to n8n, log the outcome, discard any error.

        Blocking (urllib). Use forward_async() from request handlers.
        """
        if not self.enabled:
            logger.debug("n8n forward skipped (N8N_WEBHOOK_URL not set) | event=%s", event)
            return ForwardResult(attempted=False)

        try:
            resp = post_json(self.webhook_url, dict(payload), timeout=self.timeout_seconds)
        except Exception as exc:
            logger.error("n8n network/forward error | event=%s", event, exc_info=exc)
            return ForwardResult(attempted=True, error=str(exc) or type(exc).__name__)

        if not resp.ok:
            logger.error(
                "Error forwarding to n8n | event=%s | status=%s | body=%s",
                event,
                resp.status_code,
                resp.body_text[:_BODY_LOG_LIMIT],
            )
            return ForwardResult(
                attempted=True,
                status_code=resp.status_code,
                error=f"HTTP {resp.status_code}",
            )

        logger.info("Forwarded to n8n | event=%s | status=%s", event, resp.status_code)
        return ForwardResult(attempted=True, delivered=True, status_code=resp.status_code)

    async def forward_async(self, payload: Mapping[str, Any], *, event: str = "unknown") -> ForwardResult:
        return await asyncio.to_thread(self.forward, payload, event=event)
