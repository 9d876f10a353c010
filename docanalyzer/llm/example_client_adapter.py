"""Offline client adapter.

Returns canned JSON for both prompt kinds so the whole pipeline can run
without credentials or network access.
"""

import json
from typing import ClassVar

from docanalyzer.llm.client_base import BaseLlmClient


class ExampleClientAdapter(BaseLlmClient):
    """Answers with a fixed, valid response shaped after the prompt it receives."""

    SUMMARY_RESPONSE: ClassVar[dict[str, object]] = {
        "summary": "Example summary.",
        "title": "Example document",
        "keywords": ["example"],
        "language": "en",
        "domain": "general",
        "sentiment": "neutral",
    }
    ANALYSIS_RESPONSE: ClassVar[dict[str, object]] = {
        "summary": "Example summary.",
        "docType": "other",
        "metadata": {},
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
    ) -> str:
        _ = model, temperature, system_prompt
        if '"docType"' in user_prompt:
            return json.dumps(self.ANALYSIS_RESPONSE)
        return json.dumps(self.SUMMARY_RESPONSE)
