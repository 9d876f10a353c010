from abc import ABC, abstractmethod

from docanalyzer.database.models import DocumentRecord, NewDocument
from docanalyzer.llm.models import DocumentAnalysis


class BaseDocumentRepository(ABC):
    """Contract for document record stores.

    The store is the only writer of status, summary, doc_type and metadata.
    Every method is atomic on its own.
    """

    @abstractmethod
    def create(self, document: NewDocument) -> DocumentRecord:
        """Insert a new record in status ``uploaded`` and return it."""

    @abstractmethod
    def find_by_id(self, document_id: str) -> DocumentRecord | None:
        """Return the record, or None if no record has this id."""

    @abstractmethod
    def claim_for_processing(self, document_id: str) -> DocumentRecord | None:
        """Move an ``uploaded`` or ``failed`` record to ``processing``.

        This is a compare-and-set: it returns the updated record if the
        transition happened and None if the record is missing or in any
        other status, so two concurrent claims cannot both succeed.
        """

    @abstractmethod
    def mark_analyzed(self, document_id: str, analysis: DocumentAnalysis) -> DocumentRecord:
        """Write the analysis and status ``analyzed`` in one update.

        Raises:
            InvalidTransitionError: if the record is not currently ``processing``.
        """

    @abstractmethod
    def mark_failed(self, document_id: str) -> None:
        """Move a ``processing`` record to ``failed``. No-op in any other status."""
