"""
Conversation scenarios for the engineering-manager persona.

A scenario fills the replaceable "conversation situation" slot of the system prompt.
The client picks a scenario_key; unknown keys fail loudly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

DEFAULT_SCENARIO_KEY = "pip_swe"


@dataclass(frozen=True)
class ScenarioConfig:
    key: str
    label: str
    employee_type: str
    description: str


class UnknownScenarioError(KeyError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Unknown scenario_key={key}. Known: {', '.join(SCENARIOS)}")

    def __str__(self) -> str:
        return self.args[0]


SCENARIOS: Dict[str, ScenarioConfig] = {
    # Default: poorly performing tech SWE going into PIP
    "pip_swe": ScenarioConfig(
        key="pip_swe",
        label="Performance Conversation – SWE PIP",
        employee_type="backend software engineer (individual contributor)",
        description=(
            "The engineer has missed multiple sprint commitments, left stories half-finished or "
            "under-tested, and rarely surfaces blockers until very late. You need to walk them "
            "through a Performance Improvement Plan (PIP) in a way that is clear but supportive. "
            "They will likely start off sounding casual or detached about the situation, but may "
            "suddenly become sad, tearful, or angry once the consequences land. Your job is to "
            "keep them regulated, empathize, and help them engage with the plan."
        ),
    ),
}


def get_scenario(key: str = DEFAULT_SCENARIO_KEY) -> ScenarioConfig:
    try:
        return SCENARIOS[key]
    except KeyError:
        raise UnknownScenarioError(key) from None
