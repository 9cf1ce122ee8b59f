"""
Tavus API client (personas + conversations).

Responsibilities:
- POST JSON to Tavus with the x-api-key header
- Surface every non-2xx as TavusAPIError (status code + response body)
- Keep provider-specific details out of the coaching API

This is blocking (urllib). Call it via asyncio.to_thread(...) from async code.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from src.tavus_bridge.config.settings import Settings, settings as default_settings
from src.tavus_bridge.infra.http_json import post_json
from src.tavus_bridge.logging.logger import setup_logger
from src.tavus_bridge.personas.persona_payload import build_persona_payload
from src.tavus_bridge.personas.scenarios import DEFAULT_SCENARIO_KEY

logger = setup_logger(__name__)


class TavusConfigError(RuntimeError):
    """TAVUS_API_KEY is missing."""


class TavusAPIError(RuntimeError):
    def __init__(self, status_code: int, endpoint: str, payload: Any = None) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        self.payload = payload
        super().__init__(f"Tavus API error: {status_code}")


class TavusClient:
    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        app_settings: Optional[Settings] = None,
    ) -> None:
        self.settings = app_settings or default_settings
        self.api_key = api_key or self.settings.tavus_api_key
        self.base_url = (base_url or self.settings.tavus_base_url).rstrip("/")

    def _url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def post_json(self, endpoint: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST to Tavus, with debug output on 4xx/5xx.
        """
        if not self.api_key:
            raise TavusConfigError("TAVUS_API_KEY is not set in environment variables.")

        url = self._url(endpoint)
        resp = post_json(url, payload, headers={"x-api-key": self.api_key})

        if not resp.ok:
            logger.error(
                "Tavus API error | endpoint=%s | status=%s | response=%s",
                url,
                resp.status_code,
                json.dumps(resp.data, indent=2) if resp.data is not None else resp.body_text,
            )
            raise TavusAPIError(resp.status_code, url, resp.data if resp.data is not None else resp.body_text)

        return resp.data if isinstance(resp.data, dict) else {}

    def create_persona(self, system_prompt: str, scenario_key: str = DEFAULT_SCENARIO_KEY) -> Dict[str, Any]:
        """
        Create the persona via /v2/personas.

        The response carries `persona_id`, reusable for later conversations.
        """
        payload = build_persona_payload(system_prompt, scenario_key, app_settings=self.settings)
        data = self.post_json("personas", payload)
        logger.info("Created persona | persona_id=%s", data.get("persona_id"))
        return data

    def create_conversation(self, persona_id: str, replica_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Spin up a CVI conversation for this persona.

        The persona has default_replica_id set, so replica_id can be omitted.
        """
        body: Dict[str, Any] = {"persona_id": persona_id}
        if replica_id:
            body["replica_id"] = replica_id

        data = self.post_json("conversations", body)
        logger.info(
            "Created conversation | conversation_id=%s | join_url=%s",
            data.get("conversation_id"),
            data.get("conversation_url"),
        )
        return data
