"""
Tavus /v2/personas request body for the engineering-manager persona.

Layers:
- llm:        Tavus-hosted model + `find_inspiration` tool
- tts:        ElevenLabs
- stt:        medium pause/interrupt sensitivity + smart turn detection
              (there is no stt_engine field in the persona schema)
- perception: Raven-0 ambient awareness queries for sadness / crying / anger,
              and the `user_performance_emotion_signal` perception tool
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from src.tavus_bridge.config.settings import Settings, settings as default_settings
from src.tavus_bridge.personas.prompts.manager_prompt import PERSONA_CONTEXT
from src.tavus_bridge.personas.scenarios import DEFAULT_SCENARIO_KEY, get_scenario

PERSONA_NAME_PREFIX = "Jordan"

FIND_INSPIRATION_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "find_inspiration",
        "description": (
            "Search the web for short, relevant inspirational words of wisdom, "
            "quotes, or reframes that can help the user feel calmer, more hopeful, "
            "or more resilient during a difficult performance conversation."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "topic": {
                    "type": "string",
                    "description": (
                        "A short phrase describing the focus of the inspiration, "
                        "e.g. 'resilience after failure', 'growth mindset', "
                        "'second chances at work', 'handling criticism'."
                    ),
                },
                "max_results": {
                    "type": "integer",
                    "description": (
                        "Maximum number of inspirational snippets or quotes to return. "
                        "Default is 3. Usually 1–3 is enough."
                    ),
                    "minimum": 1,
                    "maximum": 5,
                },
            },
            "required": ["topic"],
        },
    },
}

EMOTION_SIGNAL_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "user_performance_emotion_signal",
        "description": (
            "Report the user's emotional state during this performance conversation "
            "as inferred from facial expression and body language. This allows the persona "
            "to slow down, empathize, and de-escalate when needed."
        ),
        "parameters": {
            "type": "object",
            "required": ["emotional_state", "indicator"],
            "properties": {
                "emotional_state": {
                    "type": "string",
                    "description": (
                        "The inferred emotion, such as 'sad', 'crying', 'angry', "
                        "'frustrated', 'shocked', 'shutting_down', or 'calm'."
                    ),
                },
                "indicator": {
                    "type": "string",
                    "description": (
                        "Brief description of what Raven observed that supports this "
                        "inference, e.g. 'eyes filling with tears', 'wiping eyes', "
                        "'clenched jaw', 'raised voice', 'looking away silently'."
                    ),
                },
            },
        },
    },
}

AMBIENT_AWARENESS_QUERIES = [
    "Does the user's face show signs of sadness or feeling down (e.g., drooping eyes, downturned mouth)?",
    "Does the user appear to be crying or on the verge of tears (e.g., watery eyes, wiping their face)?",
    "Does the user appear angry or frustrated (e.g., clenched jaw, furrowed brows, tight lips)?",
    "Has the user's emotional state visibly shifted from casual to noticeably distressed or upset?",
]

PERCEPTION_TOOL_PROMPT = (
    "Use the `user_performance_emotion_signal` tool whenever the user's facial expression "
    "or body language suggests a strong emotional state related to this performance conversation, "
    "such as sadness, crying, anger, visible shock, or emotional shutdown. "
    "Only call this tool when you have a reasonably confident signal; otherwise, do not call it."
)


def build_persona_payload(
    system_prompt: str,
    scenario_key: str = DEFAULT_SCENARIO_KEY,
    app_settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    """
    Build the JSON body for POST /v2/personas.

    Raises UnknownScenarioError for an unregistered scenario_key.
    """
    s = app_settings or default_settings
    scenario = get_scenario(scenario_key)

    return {
        "persona_name": f"{PERSONA_NAME_PREFIX} – {scenario.label}",
        "pipeline_mode": "full",
        "system_prompt": system_prompt,
        "context": PERSONA_CONTEXT,
        "default_replica_id": s.tavus_replica_id,
        "layers": {
            "llm": {
                "model": s.tavus_llm_model,
                "speculative_inference": True,
                "tools": [FIND_INSPIRATION_TOOL],
            },
            "tts": {
                "tts_engine": s.tavus_tts_engine,
            },
            "stt": {
                "participant_pause_sensitivity": "medium",
                "participant_interrupt_sensitivity": "medium",
                "smart_turn_detection": True,
            },
            "perception": {
                "perception_model": s.tavus_perception_model,
                "ambient_awareness_queries": list(AMBIENT_AWARENESS_QUERIES),
                "perception_tool_prompt": PERCEPTION_TOOL_PROMPT,
                "perception_tools": [EMOTION_SIGNAL_TOOL],
            },
        },
    }
