"""
Tavus webhook relay (Tavus -> n8n).

Responsibilities:
- Receive Tavus callbacks on the configured route (default POST /tavus/webhook)
- Parse the JSON envelope loosely
- Forward `application.transcription_ready` events to n8n, reshaped
- Always answer Tavus with 200 {"status": "success"} once the body parsed

NOTE:
- Stateless: nothing from a callback outlives the request
- Forwarding is best-effort (see N8NForwarder); its failures never change the response
- Routing errors (404) are produced by the app-level handlers in api/errors.py
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from src.tavus_bridge.api.errors import error_response
from src.tavus_bridge.config.settings import Settings
from src.tavus_bridge.contracts.tavus_callback import (
    InboundCallbackEnvelope,
    OutboundForwardEnvelope,
)
from src.tavus_bridge.dispatchers.n8n_forwarder import N8NForwarder
from src.tavus_bridge.logging.logger import setup_logger

logger = setup_logger(__name__)


class InvalidCallbackError(ValueError):
    """Body is not JSON, or is JSON but not an object."""


@dataclass(frozen=True)
class RelayConfig:
    webhook_path: str = "/tavus/webhook"
    n8n_webhook_url: Optional[str] = None
    forward_timeout_seconds: Optional[float] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "RelayConfig":
        return cls(
            webhook_path=settings.tavus_webhook_path,
            n8n_webhook_url=settings.n8n_webhook_url,
            forward_timeout_seconds=settings.n8n_forward_timeout_seconds,
        )


def parse_callback(raw_body: bytes) -> InboundCallbackEnvelope:
    try:
        data = json.loads(raw_body)
    except ValueError as exc:
        raise InvalidCallbackError("Body is not valid JSON") from exc

    if not isinstance(data, dict):
        raise InvalidCallbackError(f"Expected a JSON object, got {type(data).__name__}")

    return InboundCallbackEnvelope.model_validate(data)


class TavusWebhookRelay:
    def __init__(self, config: RelayConfig, forwarder: Optional[N8NForwarder] = None) -> None:
        self.config = config
        self.forwarder = forwarder or N8NForwarder(
            config.n8n_webhook_url,
            timeout_seconds=config.forward_timeout_seconds,
        )

    async def handle(self, request: Request) -> JSONResponse:
        """
        received -> parsed (or 400) -> filtered -> forwarded | skipped -> 200.
        Any unexpected failure on the way -> 500.
        """
        try:
            raw_body = await request.body()

            try:
                envelope = parse_callback(raw_body)
            except InvalidCallbackError as exc:
                logger.warning("Failed to parse Tavus callback | reason=%s", exc)
                return error_response(400, "Invalid JSON")

            logger.info(
                "Tavus callback received | event_type=%s | message_type=%s | conversation_id=%s | timestamp=%s",
                envelope.event_type,
                envelope.message_type,
                envelope.conversation_id,
                envelope.timestamp,
            )

            if envelope.is_transcription_ready:
                logger.info("Transcript is ready | conversation_id=%s", envelope.conversation_id)
                outbound = OutboundForwardEnvelope.from_callback(envelope)
                await self.forwarder.forward_async(outbound.to_payload(), event=envelope.event_type)

            # Respond quickly so Tavus considers the webhook successful
            return JSONResponse(status_code=200, content={"status": "success"})

        except Exception:
            logger.exception("Error handling Tavus webhook")
            return error_response(500, "Internal server error")


def build_router(relay: TavusWebhookRelay) -> APIRouter:
    """
    Router with the single relay route. The path comes from RelayConfig, so it is
    registered at build time instead of with a decorator.
    """
    router = APIRouter()

    async def tavus_webhook(request: Request) -> JSONResponse:
        return await relay.handle(request)

    router.add_api_route(
        relay.config.webhook_path,
        tavus_webhook,
        methods=["POST"],
        name="tavus_webhook",
    )
    return router
