"""
Coaching session API (signup -> call -> feedback).

Responsibilities:
- Validate the signup profile
- Create the Tavus persona + conversation for a profile
- Notify n8n when the user leaves the call (`call.ended`)
- Generate post-call feedback and send the report to n8n

NOTE:
- Stateless: the client sends the profile with every request
- The call-ended notification is a separate path from the Tavus relay and is
  not deduplicated against relay forwards
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from src.tavus_bridge.api.errors import error_response
from src.tavus_bridge.contracts.coaching import (
    CallEndedEnvelope,
    CallEndedRequest,
    FeedbackReportEnvelope,
    FeedbackRequest,
    FeedbackResponse,
    SessionCreated,
    SessionRequest,
    UserProfile,
    format_transcript,
)
from src.tavus_bridge.dispatchers.n8n_forwarder import N8NForwarder
from src.tavus_bridge.feedback.analyzer import FeedbackAnalyzer
from src.tavus_bridge.logging.logger import setup_logger
from src.tavus_bridge.personas.scenarios import UnknownScenarioError, get_scenario
from src.tavus_bridge.personas.system_prompt import build_system_prompt
from src.tavus_bridge.tavus.client import TavusAPIError, TavusClient, TavusConfigError

logger = setup_logger(__name__)

router = APIRouter()


@dataclass
class CoachingServices:
    tavus: TavusClient
    forwarder: N8NForwarder
    analyzer: FeedbackAnalyzer


def get_services(request: Request) -> CoachingServices:
    return request.app.state.coaching


def _utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.post("/signup")
async def signup(profile: UserProfile) -> UserProfile:
    logger.info("Signup accepted | email=%s | role=%s", profile.email, profile.role)
    return profile


@router.post("/sessions", response_model=SessionCreated)
async def create_session(
    req: SessionRequest,
    services: CoachingServices = Depends(get_services),
):
    """
    Build the Jordan Lee prompt for this profile, then create persona + conversation.
    """
    try:
        scenario = get_scenario(req.scenario_key)
    except UnknownScenarioError as exc:
        return error_response(400, str(exc))

    system_prompt = build_system_prompt(
        scenario,
        {"name": req.profile.name, "role": req.profile.role, "topic": req.profile.topic},
    )

    try:
        persona = await asyncio.to_thread(services.tavus.create_persona, system_prompt, scenario.key)
    except TavusConfigError:
        logger.error("Tavus persona creation failed: TAVUS_API_KEY missing")
        return error_response(500, "Tavus API key is missing or invalid. Please check TAVUS_API_KEY.")
    except TavusAPIError as exc:
        return _provider_error("Failed to create persona", exc)

    persona_id = persona.get("persona_id")
    if not persona_id:
        logger.error("Tavus persona response has no persona_id | keys=%s", sorted(persona))
        return error_response(502, "Failed to create persona: missing persona_id")

    try:
        conversation = await asyncio.to_thread(services.tavus.create_conversation, persona_id)
    except TavusAPIError as exc:
        return _provider_error("Failed to create conversation", exc)

    created = SessionCreated(
        persona_id=persona_id,
        conversation_id=conversation.get("conversation_id") or conversation.get("id"),
        conversation_url=conversation.get("conversation_url") or "",
    )
    logger.info(
        "Session created | persona_id=%s | conversation_id=%s",
        created.persona_id,
        created.conversation_id,
    )
    return created


def _provider_error(prefix: str, exc: TavusAPIError) -> JSONResponse:
    logger.warning("%s | status=%s | endpoint=%s", prefix, exc.status_code, exc.endpoint)
    return JSONResponse(
        status_code=502,
        content={"error": f"{prefix}: {exc}", "status_code": exc.status_code},
    )


@router.post("/sessions/{conversation_id}/end")
async def end_session(
    conversation_id: str,
    req: Optional[CallEndedRequest] = None,
    services: CoachingServices = Depends(get_services),
):
    """
    User left the call: tell n8n directly (best-effort).
    """
    profile = req.profile if req else None
    envelope = CallEndedEnvelope.for_profile(conversation_id, _utcnow_iso(), profile)
    result = await services.forwarder.forward_async(envelope.to_payload(), event=envelope.event_type)

    if not result.attempted:
        logger.info("N8N webhook URL not configured | call ended | conversation_id=%s", conversation_id)

    return {"status": "success", "forwarded": result.delivered}


@router.post("/feedback", response_model=FeedbackResponse)
async def create_feedback(
    req: FeedbackRequest,
    services: CoachingServices = Depends(get_services),
):
    """
    Analyze the transcript, then send the report to n8n (which emails it).
    """
    try:
        tips = await services.analyzer.analyze(req.transcript)
    except Exception:
        logger.exception("Error generating feedback | email=%s", req.profile.email)
        return error_response(502, "Feedback generation failed")

    report = FeedbackReportEnvelope(
        email=req.profile.email,
        name=req.profile.name,
        transcript=format_transcript(req.transcript),
        feedback=[t.model_dump() for t in tips],
    )
    result = await services.forwarder.forward_async(report.to_payload(), event="feedback.report")

    return FeedbackResponse(tips=tips, email_sent=result.delivered)
