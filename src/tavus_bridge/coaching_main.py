"""
Coaching session API entrypoint.

Serves the signup -> call -> feedback flow for the frontend. Runs separately from
the Tavus webhook relay (main.py); the two only share the n8n URL.
"""

from __future__ import annotations

from typing import Optional

import uvicorn
from fastapi import FastAPI

from src.tavus_bridge.api.coaching import CoachingServices, router as coaching_router
from src.tavus_bridge.api.errors import install_error_handlers
from src.tavus_bridge.config.settings import Settings, settings as default_settings
from src.tavus_bridge.dispatchers.n8n_forwarder import N8NForwarder
from src.tavus_bridge.feedback.analyzer import FeedbackAnalyzer
from src.tavus_bridge.logging.logger import align_uvicorn_logging, setup_logger
from src.tavus_bridge.tavus.client import TavusClient

logger = setup_logger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    *,
    services: Optional[CoachingServices] = None,
) -> FastAPI:
    """
    FastAPI application factory.
    """
    app_settings = app_settings or default_settings

    services = services or CoachingServices(
        tavus=TavusClient(app_settings=app_settings),
        forwarder=N8NForwarder(
            app_settings.n8n_webhook_url,
            timeout_seconds=app_settings.n8n_forward_timeout_seconds,
        ),
        analyzer=FeedbackAnalyzer(app_settings=app_settings),
    )

    app = FastAPI(title="Tavus Coaching Session API")
    install_error_handlers(app)
    app.include_router(coaching_router)
    app.state.coaching = services

    logger.info(
        "Coaching API initialized | env=%s | forwarding=%s",
        app_settings.app_env,
        "enabled" if services.forwarder.enabled else "disabled",
    )
    return app


# ASGI entrypoint (required by uvicorn)
app = create_app()


if __name__ == "__main__":
    align_uvicorn_logging()
    uvicorn.run(app, host=default_settings.host, port=default_settings.coaching_port, log_config=None)
