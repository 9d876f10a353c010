from pathlib import Path

from docanalyzer.llm.models import SummarizeOptions
from docanalyzer.llm.prompt_loader import load_prompt_template

DEFAULT_MAX_CHARS = 8000

_LENGTH_INSTRUCTIONS = {
    "short": "short summary of 2-3 sentences",
    "medium": "summary of one paragraph (4-6 sentences)",
    "long": "detailed summary of several paragraphs covering every main point",
}
_DEFAULT_LENGTH_INSTRUCTION = "concise human-readable summary"


class PromptBuilder:
    """Builds the instruction sent to the model for each workflow.

    Input text is cut to the first ``max_chars`` characters. This is a fixed
    token-budget guard, not chunking.
    """

    def __init__(
        self,
        *,
        max_chars: int = DEFAULT_MAX_CHARS,
        default_max_keywords: int = 5,
        prompt_dir: Path | None = None,
    ) -> None:
        self._max_chars = max_chars
        self._default_max_keywords = default_max_keywords
        self._summary_template = load_prompt_template("summary_prompt.txt", prompt_dir)
        self._analysis_template = load_prompt_template("analysis_prompt.txt", prompt_dir)

    def truncate(self, text: str) -> str:
        return text[: self._max_chars]

    def build_summary_prompt(self, text: str, options: SummarizeOptions | None = None) -> str:
        options = options or SummarizeOptions()
        length_instruction = _LENGTH_INSTRUCTIONS.get(
            options.desired_length or "", _DEFAULT_LENGTH_INSTRUCTION
        )
        return self._summary_template.format(
            length_instruction=length_instruction,
            max_keywords=options.max_keywords or self._default_max_keywords,
            text=self.truncate(text),
        )

    def build_analysis_prompt(self, text: str) -> str:
        return self._analysis_template.format(text=self.truncate(text))
