"""
Create a Tavus persona + conversation from the command line.

Usage:
  python -m src.tavus_bridge.tavus.provision --scenario pip_swe

Prints the join URL; the frontend can embed it in an iframe.
"""

from __future__ import annotations

import argparse
from typing import Optional

from src.tavus_bridge.logging.logger import setup_logger
from src.tavus_bridge.personas.scenarios import DEFAULT_SCENARIO_KEY, SCENARIOS, get_scenario
from src.tavus_bridge.personas.system_prompt import build_system_prompt
from src.tavus_bridge.tavus.client import TavusClient

logger = setup_logger(__name__)


def main(argv: Optional[list[str]] = None, client: Optional[TavusClient] = None) -> int:
    ap = argparse.ArgumentParser(description="Provision a Tavus persona and conversation.")
    ap.add_argument("--scenario", default=DEFAULT_SCENARIO_KEY, choices=sorted(SCENARIOS))
    ap.add_argument("--replica-id", default=None)
    args = ap.parse_args(argv)

    client = client or TavusClient()

    try:
        prompt = build_system_prompt(get_scenario(args.scenario))
        persona = client.create_persona(prompt, args.scenario)
        conversation = client.create_conversation(persona["persona_id"], args.replica_id)
    except Exception:
        logger.exception("Error running provisioning script")
        return 1

    print(f"Conversation URL: {conversation.get('conversation_url')}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
