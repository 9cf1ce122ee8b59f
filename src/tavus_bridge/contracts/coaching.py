"""
Coaching session contracts.

Request/response shapes for the signup -> call -> feedback flow, plus the two
notification payloads that flow sends to n8n outside of the Tavus relay.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.tavus_bridge.inputs.signup import INVALID_EMAIL_MESSAGE, is_valid_email

CALL_ENDED_EVENT = "call.ended"

TipCategory = Literal["Communication", "Tone", "Clarity"]


class UserProfile(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    topic: str = "Salary Negotiation"
    email: str

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        if not is_valid_email(v):
            raise ValueError(INVALID_EMAIL_MESSAGE)
        return v


class ChatMessage(BaseModel):
    role: Literal["user", "model"]
    text: str


class SessionRequest(BaseModel):
    profile: UserProfile
    scenario_key: str = "pip_swe"


class SessionCreated(BaseModel):
    persona_id: str
    conversation_id: Optional[str] = None
    conversation_url: str


class CallEndedRequest(BaseModel):
    profile: Optional[UserProfile] = None


class FeedbackTip(BaseModel):
    title: str = Field(..., description="Short headline for the tip.")
    description: str = Field(..., description="One or two sentences of actionable advice.")
    category: TipCategory = Field(..., description="Communication, Tone or Clarity.")


class FeedbackReport(BaseModel):
    """Structured output contract for the feedback LLM call."""

    tips: List[FeedbackTip] = Field(default_factory=list)


class FeedbackRequest(BaseModel):
    profile: UserProfile
    transcript: List[ChatMessage] = Field(default_factory=list)


class FeedbackResponse(BaseModel):
    tips: List[FeedbackTip]
    email_sent: bool


def format_transcript(transcript: List[ChatMessage]) -> str:
    """Render turns as `ROLE: text` lines."""
    return "\n".join(f"{m.role.upper()}: {m.text}" for m in transcript)


@dataclass(frozen=True)
class CallEndedEnvelope:
    conversation_id: str
    timestamp: str
    user: Dict[str, Optional[str]]
    event_type: str = CALL_ENDED_EVENT
    source: str = "tavus"

    @classmethod
    def for_profile(
        cls, conversation_id: str, timestamp: str, profile: Optional[UserProfile]
    ) -> "CallEndedEnvelope":
        return cls(
            conversation_id=conversation_id,
            timestamp=timestamp,
            user={
                "name": profile.name if profile else None,
                "email": profile.email if profile else None,
                "role": profile.role if profile else None,
            },
        )

    def to_payload(self) -> Dict[str, Any]:
        data = asdict(self)
        return {
            "source": data["source"],
            "event_type": data["event_type"],
            "conversation_id": data["conversation_id"],
            "timestamp": data["timestamp"],
            "user": data["user"],
        }


@dataclass(frozen=True)
class FeedbackReportEnvelope:
    email: str
    name: str
    transcript: str  # "ROLE: text" lines
    feedback: List[Dict[str, Any]]

    def to_payload(self) -> Dict[str, Any]:
        return asdict(self)
