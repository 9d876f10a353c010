import copy
import threading
import uuid
from datetime import datetime, timezone

from docanalyzer.database.models import (
    DocumentRecord,
    DocumentStatus,
    NewDocument,
    can_transition,
)
from docanalyzer.database.repositories.base import BaseDocumentRepository
from docanalyzer.llm.models import DocumentAnalysis
from docanalyzer.processor.exceptions import InvalidTransitionError


class InMemoryDocumentRepository(BaseDocumentRepository):
    """Process-local store for local runs and tests.

    One lock guards every read-check-write so status transitions behave like
    the conditional UPDATEs of the database store. Records handed out are
    copies; callers cannot mutate stored state.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, DocumentRecord] = {}

    def create(self, document: NewDocument) -> DocumentRecord:
        now = datetime.now(timezone.utc)
        record = DocumentRecord(
            id=str(uuid.uuid4()),
            original_name=document.original_name,
            mime_type=document.mime_type,
            size=document.size,
            storage_path=document.storage_path,
            extracted_text=document.extracted_text,
            status=DocumentStatus.UPLOADED,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._records[record.id] = record
            return copy.deepcopy(record)

    def find_by_id(self, document_id: str) -> DocumentRecord | None:
        with self._lock:
            record = self._records.get(document_id)
            return copy.deepcopy(record) if record is not None else None

    def claim_for_processing(self, document_id: str) -> DocumentRecord | None:
        with self._lock:
            record = self._records.get(document_id)
            if record is None or not can_transition(record.status, DocumentStatus.PROCESSING):
                return None
            record.status = DocumentStatus.PROCESSING
            record.updated_at = datetime.now(timezone.utc)
            return copy.deepcopy(record)

    def mark_analyzed(self, document_id: str, analysis: DocumentAnalysis) -> DocumentRecord:
        with self._lock:
            record = self._records.get(document_id)
            if record is None or not can_transition(record.status, DocumentStatus.ANALYZED):
                raise InvalidTransitionError(f"Document {document_id} is not being processed")
            record.summary = analysis.summary
            record.doc_type = analysis.doc_type
            record.metadata = copy.deepcopy(analysis.metadata)
            record.status = DocumentStatus.ANALYZED
            record.updated_at = datetime.now(timezone.utc)
            return copy.deepcopy(record)

    def mark_failed(self, document_id: str) -> None:
        with self._lock:
            record = self._records.get(document_id)
            if record is None or not can_transition(record.status, DocumentStatus.FAILED):
                return
            record.status = DocumentStatus.FAILED
            record.updated_at = datetime.now(timezone.utc)
