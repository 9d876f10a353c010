import uuid
from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docanalyzer.database.connection import get_connection
from docanalyzer.database.models import (
    ALLOWED_TRANSITIONS,
    DocumentRecord,
    DocumentStatus,
    NewDocument,
)
from docanalyzer.database.repositories.base import BaseDocumentRepository
from docanalyzer.llm.models import DocumentAnalysis
from docanalyzer.processor.exceptions import InvalidTransitionError

_COLUMNS = """
    id, original_name, mime_type, size, storage_path, extracted_text,
    summary, doc_type, metadata, status, created_at, updated_at
"""


def _sources(target: DocumentStatus) -> list[str]:
    return [status.value for status in ALLOWED_TRANSITIONS[target]]


def _row_to_record(row: dict[str, Any]) -> DocumentRecord:
    return DocumentRecord(
        id=row["id"],
        original_name=row["original_name"],
        mime_type=row["mime_type"],
        size=row["size"],
        storage_path=row["storage_path"],
        extracted_text=row["extracted_text"],
        status=DocumentStatus(row["status"]),
        summary=row["summary"],
        doc_type=row["doc_type"],
        metadata=row["metadata"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class DocumentRepository(BaseDocumentRepository):
    """Database operations for the documents table."""

    def create(self, document: NewDocument) -> DocumentRecord:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO documents
                    (id, original_name, mime_type, size, storage_path,
                     extracted_text, status)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        str(uuid.uuid4()),
                        document.original_name,
                        document.mime_type,
                        document.size,
                        document.storage_path,
                        document.extracted_text,
                        DocumentStatus.UPLOADED.value,
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        assert row is not None
        return _row_to_record(row)

    def find_by_id(self, document_id: str) -> DocumentRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM documents WHERE id = %s",
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return _row_to_record(row)

    def claim_for_processing(self, document_id: str) -> DocumentRecord | None:
        """Single conditional UPDATE; the row lock serializes concurrent claims."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    UPDATE documents
                    SET status = %s, updated_at = NOW()
                    WHERE id = %s AND status = ANY(%s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        DocumentStatus.PROCESSING.value,
                        document_id,
                        _sources(DocumentStatus.PROCESSING),
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            return None
        return _row_to_record(row)

    def mark_analyzed(self, document_id: str, analysis: DocumentAnalysis) -> DocumentRecord:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    UPDATE documents
                    SET status = %s, summary = %s, doc_type = %s,
                        metadata = %s, updated_at = NOW()
                    WHERE id = %s AND status = ANY(%s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        DocumentStatus.ANALYZED.value,
                        analysis.summary,
                        analysis.doc_type,
                        Jsonb(analysis.metadata),
                        document_id,
                        _sources(DocumentStatus.ANALYZED),
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise InvalidTransitionError(f"Document {document_id} is not being processed")
        return _row_to_record(row)

    def mark_failed(self, document_id: str) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE documents
                SET status = %s, updated_at = NOW()
                WHERE id = %s AND status = ANY(%s)
                """,
                (
                    DocumentStatus.FAILED.value,
                    document_id,
                    _sources(DocumentStatus.FAILED),
                ),
            )
            conn.commit()
