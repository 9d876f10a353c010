from pathlib import Path

from docanalyzer.config.exceptions import ConfigurationError

PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(name: str, directory: Path | None = None) -> str:
    """Load a bundled prompt template by file name.

    Args:
        name: File name inside the prompt directory, e.g. ``summary_prompt.txt``.
        directory: Alternative directory; defaults to the bundled prompts.

    Returns:
        The raw template string with ``str.format`` placeholders.

    Raises:
        ConfigurationError: if the file cannot be read.
    """
    path = (directory or PROMPT_DIR) / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Failed to load prompt template {path}: {exc}") from exc
