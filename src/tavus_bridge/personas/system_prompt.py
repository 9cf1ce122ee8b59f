"""
System prompt assembly for the Jordan Lee persona.

scenario -> conversation situation -> manager template, optionally prefixed with
who the persona is talking to (name / role / topic from the signup profile).
"""

from __future__ import annotations

from typing import Mapping, Optional

from src.tavus_bridge.personas.prompts.manager_prompt import (
    CONVERSATION_SITUATION_PROMPT,
    MANAGER_SYSTEM_PROMPT,
    USER_CONTEXT_PROMPT,
)
from src.tavus_bridge.personas.scenarios import DEFAULT_SCENARIO_KEY, ScenarioConfig, get_scenario


def build_conversation_situation(employee_type: str, scenario_description: str) -> str:
    return CONVERSATION_SITUATION_PROMPT.format(
        employee_type=employee_type,
        scenario_description=scenario_description,
    ).strip()


def _build_user_context(scenario: ScenarioConfig, user_profile: Mapping[str, Optional[str]]) -> str:
    topic = user_profile.get("topic")
    return USER_CONTEXT_PROMPT.format(
        name=user_profile.get("name") or "your employee",
        role=user_profile.get("role") or scenario.employee_type,
        topic_line=f'The conversation topic is: "{topic}"' if topic else "",
    ).strip()


def build_system_prompt(
    scenario: ScenarioConfig,
    user_profile: Optional[Mapping[str, Optional[str]]] = None,
) -> str:
    """
    Build the persona system prompt for `scenario`.

    `user_profile` may carry name / role / topic; missing values fall back to
    "your employee" and the scenario's employee_type.
    """
    situation = build_conversation_situation(scenario.employee_type, scenario.description)
    prompt = MANAGER_SYSTEM_PROMPT.format(conversation_situation=situation).strip()

    if user_profile is not None:
        prompt = f"{_build_user_context(scenario, user_profile)}\n\n{prompt}"

    return prompt


def get_jordan_lee_system_prompt(user_profile: Optional[Mapping[str, Optional[str]]] = None) -> str:
    """Default-scenario prompt (SWE going into a PIP)."""
    return build_system_prompt(get_scenario(DEFAULT_SCENARIO_KEY), user_profile)
