"""Builds typed results from parsed model output."""

from typing import Any

from docanalyzer.llm.exceptions import InvalidFieldError
from docanalyzer.llm.models import (
    DOC_TYPES,
    SENTIMENTS,
    DocumentAnalysis,
    SummaryResult,
)


def build_summary_result(data: dict[str, Any], max_keywords: int) -> SummaryResult:
    """Validate a parsed summary object.

    Keywords beyond ``max_keywords`` are dropped, keeping the model's order.

    Raises:
        InvalidFieldError: a field holds the wrong kind of value.
    """
    return SummaryResult(
        summary=_require_str(data, "summary"),
        title=_require_str(data, "title"),
        keywords=_build_keywords(data["keywords"], max_keywords),
        language=_require_str(data, "language"),
        domain=_require_str(data, "domain"),
        sentiment=_build_sentiment(data["sentiment"]),
    )


def build_document_analysis(data: dict[str, Any]) -> DocumentAnalysis:
    """Validate a parsed analysis object.

    An unknown ``docType`` is recorded as ``other``; a missing or null
    ``metadata`` becomes an empty mapping.

    Raises:
        InvalidFieldError: a field holds the wrong kind of value.
    """
    summary = _require_str(data, "summary")
    if not summary.strip():
        raise InvalidFieldError("summary", "must not be empty")
    return DocumentAnalysis(
        summary=summary,
        doc_type=_build_doc_type(data["docType"]),
        metadata=_build_metadata(data.get("metadata")),
    )


def _require_str(data: dict[str, Any], field_name: str) -> str:
    value = data[field_name]
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidFieldError(field_name, "must be a string")
    return value


def _build_keywords(raw: Any, max_keywords: int) -> list[str]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise InvalidFieldError("keywords", "must be a list of strings")
    keywords: list[str] = []
    for item in raw:
        if not isinstance(item, str):
            raise InvalidFieldError("keywords", "must be a list of strings")
        if item.strip():
            keywords.append(item.strip())
    return keywords[:max_keywords]


def _build_sentiment(raw: Any) -> str:
    if not isinstance(raw, str) or raw.strip().lower() not in SENTIMENTS:
        raise InvalidFieldError("sentiment", f"must be one of {sorted(SENTIMENTS)}")
    return raw.strip().lower()


def _build_doc_type(raw: Any) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidFieldError("docType", "must be a non-empty string")
    doc_type = raw.strip().lower()
    return doc_type if doc_type in DOC_TYPES else "other"


def _build_metadata(raw: Any) -> dict[str, object]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise InvalidFieldError("metadata", "must be an object")
    return {str(key): value for key, value in raw.items()}
