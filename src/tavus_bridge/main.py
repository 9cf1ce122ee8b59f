"""
Tavus webhook relay service entrypoint.

Responsibilities:
- Create the FastAPI app for the relay
- Register the single Tavus callback route
- Read configuration once (RelayConfig) and hand it to the relay
- Warn at startup when N8N_WEBHOOK_URL is missing

IMPORTANT:
- This service exposes exactly one route; every other path/method is a JSON 404
- It is independent of the coaching API (see coaching_main.py)
"""

from __future__ import annotations

from typing import Optional

import uvicorn
from fastapi import FastAPI

from src.tavus_bridge.api.errors import install_error_handlers
from src.tavus_bridge.api.tavus_webhook import RelayConfig, TavusWebhookRelay, build_router
from src.tavus_bridge.config.settings import Settings, settings as default_settings
from src.tavus_bridge.dispatchers.n8n_forwarder import N8NForwarder
from src.tavus_bridge.logging.logger import align_uvicorn_logging, setup_logger

logger = setup_logger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    *,
    forwarder: Optional[N8NForwarder] = None,
) -> FastAPI:
    """
    FastAPI application factory.
    """
    app_settings = app_settings or default_settings
    config = RelayConfig.from_settings(app_settings)

    if not config.n8n_webhook_url:
        logger.warning(
            "N8N_WEBHOOK_URL is not set. Webhook will receive Tavus events, "
            "but nothing will be forwarded to n8n."
        )

    relay = TavusWebhookRelay(config, forwarder=forwarder)

    app = FastAPI(
        title="Tavus Webhook Relay",
        redirect_slashes=False,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    install_error_handlers(app)
    app.include_router(build_router(relay))
    app.state.relay = relay

    logger.info(
        "Tavus webhook relay initialized | env=%s | route=%s | forwarding=%s",
        app_settings.app_env,
        config.webhook_path,
        "enabled" if relay.forwarder.enabled else "disabled",
    )

    return app


# ASGI entrypoint (required by uvicorn)
app = create_app()


if __name__ == "__main__":
    logger.info("Tavus webhook server listening on port %s", default_settings.port)
    logger.info(
        "POST callback URL: http://localhost:%s%s",
        default_settings.port,
        default_settings.tavus_webhook_path,
    )
    align_uvicorn_logging()
    uvicorn.run(app, host=default_settings.host, port=default_settings.port, log_config=None)
