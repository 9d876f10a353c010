from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class DocumentStatus(str, Enum):
    UPLOADED = "uploaded"
    PROCESSING = "processing"
    ANALYZED = "analyzed"
    FAILED = "failed"


# Source states from which each target state may be entered.
ALLOWED_TRANSITIONS: dict[DocumentStatus, frozenset[DocumentStatus]] = {
    DocumentStatus.PROCESSING: frozenset({DocumentStatus.UPLOADED, DocumentStatus.FAILED}),
    DocumentStatus.ANALYZED: frozenset({DocumentStatus.PROCESSING}),
    DocumentStatus.FAILED: frozenset({DocumentStatus.PROCESSING}),
}


def can_transition(current: DocumentStatus, target: DocumentStatus) -> bool:
    return current in ALLOWED_TRANSITIONS.get(target, frozenset())


@dataclass
class NewDocument:
    """Fields supplied when a document record is created."""

    original_name: str
    mime_type: str
    size: int
    storage_path: str
    extracted_text: str


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: str
    original_name: str
    mime_type: str
    size: int
    storage_path: str
    extracted_text: str
    status: DocumentStatus
    summary: str | None = None
    doc_type: str | None = None
    metadata: dict[str, object] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
