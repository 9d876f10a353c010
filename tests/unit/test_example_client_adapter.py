import json

from docanalyzer.llm.example_client_adapter import ExampleClientAdapter
from docanalyzer.llm.models import ANALYSIS_REQUIRED_FIELDS, SUMMARY_REQUIRED_FIELDS
from docanalyzer.llm.prompt_builder import PromptBuilder


def _complete(prompt: str) -> dict:
    raw = ExampleClientAdapter().create_chat_completion(
        model="example", temperature=0.0, system_prompt="", user_prompt=prompt
    )
    return json.loads(raw)


def test_answers_summary_prompts_with_summary_fields() -> None:
    data = _complete(PromptBuilder().build_summary_prompt("Some text here."))
    assert all(field in data for field in SUMMARY_REQUIRED_FIELDS)


def test_answers_analysis_prompts_with_analysis_fields() -> None:
    data = _complete(PromptBuilder().build_analysis_prompt("Some text here."))
    assert all(field in data for field in ANALYSIS_REQUIRED_FIELDS)
    assert data["docType"] == "other"
