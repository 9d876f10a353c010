"""JSON payloads returned to the HTTP or CLI layer."""

from dataclasses import asdict
from datetime import datetime
from typing import Any

from docanalyzer.database.models import DocumentRecord
from docanalyzer.llm.models import SummaryResult


def _timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def summary_payload(result: SummaryResult) -> dict[str, Any]:
    return asdict(result)


def upload_payload(record: DocumentRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "originalName": record.original_name,
        "mimeType": record.mime_type,
        "size": record.size,
        "status": record.status.value,
        "createdAt": _timestamp(record.created_at),
    }


def analysis_payload(record: DocumentRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "status": record.status.value,
        "summary": record.summary,
        "docType": record.doc_type,
        "metadata": record.metadata,
    }


def document_payload(record: DocumentRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "originalName": record.original_name,
        "mimeType": record.mime_type,
        "size": record.size,
        "storagePath": record.storage_path,
        "status": record.status.value,
        "summary": record.summary,
        "docType": record.doc_type,
        "metadata": record.metadata,
        "extractedText": record.extracted_text,
        "createdAt": _timestamp(record.created_at),
        "updatedAt": _timestamp(record.updated_at),
    }
