"""Pulls one JSON object out of free-form model output."""

import json
import re
from collections.abc import Sequence
from typing import Any

from docanalyzer.llm.exceptions import MalformedJsonError, MissingFieldError
from docanalyzer.llm.models import METADATA_TRUNCATED_NOTICE
from docanalyzer.logging.logger import Log

_FENCED_JSON = re.compile(r"```json([\s\S]*?)```", re.IGNORECASE)


def extract_json_candidate(raw: str) -> str:
    """Return the part of ``raw`` most likely to hold the JSON object.

    Preference order: interior of a ```json fenced block, then the span from
    the first ``{`` to the last ``}``, then the whole trimmed text.
    """
    fenced = _FENCED_JSON.search(raw)
    if fenced:
        return fenced.group(1).strip()

    first = raw.find("{")
    last = raw.rfind("}")
    if first != -1 and last > first:
        return raw[first : last + 1]
    return raw.strip()


def parse_model_response(
    raw: str,
    required_fields: Sequence[str],
    metadata_max_chars: int | None = None,
) -> dict[str, Any]:
    """Parse model output and check that every required key is present.

    Fields are checked in the given order and the first missing one is
    reported. When ``metadata_max_chars`` is set, a ``metadata`` value whose
    JSON serialization is longer than that is replaced by a fixed notice.

    Raises:
        MalformedJsonError: no JSON object could be parsed.
        MissingFieldError: a required key is absent.
    """
    candidate = extract_json_candidate(raw)
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        Log.warning(f"Model output is not valid JSON: {exc.msg}", position=exc.pos)
        Log.debug(f"Unparseable model output:\n{raw}")
        raise MalformedJsonError("AI response is not valid JSON.") from exc

    if not isinstance(parsed, dict):
        raise MalformedJsonError("AI response must be a JSON object")

    for field_name in required_fields:
        if field_name not in parsed:
            raise MissingFieldError(field_name)

    if metadata_max_chars is not None and parsed.get("metadata") is not None:
        serialized = json.dumps(parsed["metadata"], ensure_ascii=False)
        if len(serialized) > metadata_max_chars:
            Log.warning(
                "Metadata too large, replacing with notice",
                size=len(serialized),
                limit=metadata_max_chars,
            )
            parsed["metadata"] = dict(METADATA_TRUNCATED_NOTICE)

    return parsed
