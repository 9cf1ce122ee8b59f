"""
Post-call feedback generation.

Responsibilities:
- Render the call transcript into the feedback prompt
- Ask the chat model for a FeedbackReport via with_structured_output()
- Return the tips; no delivery logic here (the API layer forwards them to n8n)
"""

from __future__ import annotations

from typing import Any, List, Optional

from langchain.chat_models import init_chat_model
from langchain_core.language_models.chat_models import BaseChatModel

from src.tavus_bridge.config.settings import Settings, settings as default_settings
from src.tavus_bridge.contracts.coaching import (
    ChatMessage,
    FeedbackReport,
    FeedbackTip,
    format_transcript,
)
from src.tavus_bridge.feedback.prompts.feedback_prompt import FEEDBACK_PROMPT
from src.tavus_bridge.logging.logger import setup_logger

logger = setup_logger(__name__)


def _as_report(result: Any) -> FeedbackReport:
    # Some providers hand back a dict even with a pydantic schema
    if isinstance(result, FeedbackReport):
        return result
    return FeedbackReport.model_validate(result)


class FeedbackAnalyzer:
    """
    Turns a transcript into 3 coaching tips.
    """

    def __init__(
        self,
        model: Optional[BaseChatModel] = None,
        app_settings: Optional[Settings] = None,
    ) -> None:
        """
        Args:
            model: Chat model instance. Defaults to init_chat_model("<provider>:<model>")
                from settings, created on first use.
        """
        self.settings = app_settings or default_settings
        self._model = model

    @property
    def model(self) -> BaseChatModel:
        if self._model is None:
            model_id = f"{self.settings.llm_provider}:{self.settings.llm_model_name}"
            logger.info("Initializing feedback model | model=%s", model_id)
            self._model = init_chat_model(model_id)
        return self._model

    async def analyze(self, transcript: List[ChatMessage]) -> List[FeedbackTip]:
        if not transcript:
            logger.warning("No transcript provided; skipping feedback generation")
            return []

        prompt = FEEDBACK_PROMPT.format(transcript=format_transcript(transcript))
        structured = self.model.with_structured_output(FeedbackReport)
        report = _as_report(await structured.ainvoke(prompt))

        logger.info("Feedback generated | turns=%s | tips=%s", len(transcript), len(report.tips))
        return report.tips
