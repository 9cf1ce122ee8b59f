"""
Tavus callback contracts.

InboundCallbackEnvelope is what Tavus POSTs to our webhook. It is parsed loosely:
every field is optional and untyped and unknown keys are kept (extra="allow"), so provider-side
schema additions never break parsing.

OutboundForwardEnvelope is the reshaped payload we POST to the n8n Webhook Trigger.

Example Tavus payload:
{
  "properties": {
    "replica_id": "<replica_id>",
    "transcript": [
      {"role": "system", "content": "..."},
      {"role": "user", "content": "Hi."},
      {"role": "assistant", "content": "How's it going?"}
    ]
  },
  "conversation_id": "<conversation_id>",
  "webhook_url": "<webhook_url>",
  "event_type": "application.transcription_ready",
  "message_type": "application",
  "timestamp": "2025-07-11T06:48:37.566057Z"
}
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict

TRANSCRIPTION_READY_EVENT = "application.transcription_ready"
FORWARD_SOURCE = "tavus"


class InboundCallbackEnvelope(BaseModel):
    """
    Any JSON object is a valid envelope. Field values are not type-checked: a value
    Tavus sends is forwarded as sent, and only event_type is ever compared.
    """

    model_config = ConfigDict(extra="allow")

    event_type: Any = None
    message_type: Any = None
    conversation_id: Any = None
    timestamp: Any = None
    webhook_url: Any = None
    properties: Any = None

    @property
    def is_transcription_ready(self) -> bool:
        return self.event_type == TRANSCRIPTION_READY_EVENT

    @property
    def transcript(self) -> Any:
        """properties.transcript verbatim; [] when properties or transcript is absent or null."""
        if not isinstance(self.properties, dict):
            return []
        turns = self.properties.get("transcript")
        return [] if turns is None else turns


@dataclass(frozen=True)
class OutboundForwardEnvelope:
    event_type: Any
    message_type: Any
    conversation_id: Any
    timestamp: Any
    webhook_url: Any
    transcript: Any = field(default_factory=list)
    source: str = FORWARD_SOURCE

    @classmethod
    def from_callback(cls, envelope: InboundCallbackEnvelope) -> "OutboundForwardEnvelope":
        return cls(
            event_type=envelope.event_type,
            message_type=envelope.message_type,
            conversation_id=envelope.conversation_id,
            timestamp=envelope.timestamp,
            webhook_url=envelope.webhook_url,
            transcript=envelope.transcript,
        )

    def to_payload(self) -> Dict[str, Any]:
        payload = asdict(self)
        return {
            "source": payload.pop("source"),
            **payload,
        }
