"""
Persona domain package.

This centralizes:
- conversation scenarios (scenario_key -> ScenarioConfig)
- Jordan Lee system prompt assembly
- the Tavus /v2/personas request body
"""

from __future__ import annotations

from src.tavus_bridge.personas.persona_payload import build_persona_payload
from src.tavus_bridge.personas.scenarios import (
    DEFAULT_SCENARIO_KEY,
    SCENARIOS,
    ScenarioConfig,
    UnknownScenarioError,
    get_scenario,
)
from src.tavus_bridge.personas.system_prompt import build_system_prompt, get_jordan_lee_system_prompt

__all__ = [
    "DEFAULT_SCENARIO_KEY",
    "SCENARIOS",
    "ScenarioConfig",
    "UnknownScenarioError",
    "build_persona_payload",
    "build_system_prompt",
    "get_jordan_lee_system_prompt",
    "get_scenario",
]
