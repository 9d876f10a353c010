import threading

import pytest

from docanalyzer.database.models import DocumentStatus, NewDocument, can_transition
from docanalyzer.database.repositories.memory_repository import InMemoryDocumentRepository
from docanalyzer.llm.models import DocumentAnalysis
from docanalyzer.processor.exceptions import InvalidTransitionError


def _new_document() -> NewDocument:
    return NewDocument(
        original_name="notes.txt",
        mime_type="text/plain",
        size=11,
        storage_path="/tmp/notes.txt",
        extracted_text="hello world",
    )


def _analysis() -> DocumentAnalysis:
    return DocumentAnalysis(summary="s", doc_type="letter", metadata={"sender": "Ann"})


class TestTransitions:
    @pytest.mark.parametrize(
        ("current", "target", "allowed"),
        [
            (DocumentStatus.UPLOADED, DocumentStatus.PROCESSING, True),
            (DocumentStatus.FAILED, DocumentStatus.PROCESSING, True),
            (DocumentStatus.PROCESSING, DocumentStatus.PROCESSING, False),
            (DocumentStatus.ANALYZED, DocumentStatus.PROCESSING, False),
            (DocumentStatus.PROCESSING, DocumentStatus.ANALYZED, True),
            (DocumentStatus.UPLOADED, DocumentStatus.ANALYZED, False),
            (DocumentStatus.PROCESSING, DocumentStatus.FAILED, True),
            (DocumentStatus.ANALYZED, DocumentStatus.FAILED, False),
            (DocumentStatus.ANALYZED, DocumentStatus.UPLOADED, False),
        ],
    )
    def test_can_transition(
        self, current: DocumentStatus, target: DocumentStatus, allowed: bool
    ) -> None:
        assert can_transition(current, target) is allowed


class TestInMemoryDocumentRepository:
    def test_create_starts_uploaded(self) -> None:
        repo = InMemoryDocumentRepository()
        record = repo.create(_new_document())
        assert record.status is DocumentStatus.UPLOADED
        assert record.id
        assert record.created_at is not None
        assert record.summary is None

    def test_find_by_id(self) -> None:
        repo = InMemoryDocumentRepository()
        record = repo.create(_new_document())
        found = repo.find_by_id(record.id)
        assert found == record
        assert repo.find_by_id("missing") is None

    def test_returned_records_are_copies(self) -> None:
        repo = InMemoryDocumentRepository()
        record = repo.create(_new_document())
        record.status = DocumentStatus.ANALYZED
        stored = repo.find_by_id(record.id)
        assert stored is not None
        assert stored.status is DocumentStatus.UPLOADED

    def test_claim_moves_to_processing_once(self) -> None:
        repo = InMemoryDocumentRepository()
        record = repo.create(_new_document())
        claimed = repo.claim_for_processing(record.id)
        assert claimed is not None
        assert claimed.status is DocumentStatus.PROCESSING
        assert repo.claim_for_processing(record.id) is None

    def test_claim_missing_record(self) -> None:
        assert InMemoryDocumentRepository().claim_for_processing("missing") is None

    def test_mark_analyzed_writes_fields_with_status(self) -> None:
        repo = InMemoryDocumentRepository()
        record = repo.create(_new_document())
        repo.claim_for_processing(record.id)
        analyzed = repo.mark_analyzed(record.id, _analysis())
        assert analyzed.status is DocumentStatus.ANALYZED
        assert analyzed.summary == "s"
        assert analyzed.doc_type == "letter"
        assert analyzed.metadata == {"sender": "Ann"}

    def test_mark_analyzed_requires_processing(self) -> None:
        repo = InMemoryDocumentRepository()
        record = repo.create(_new_document())
        with pytest.raises(InvalidTransitionError):
            repo.mark_analyzed(record.id, _analysis())

    def test_failed_record_can_be_claimed_again(self) -> None:
        repo = InMemoryDocumentRepository()
        record = repo.create(_new_document())
        repo.claim_for_processing(record.id)
        repo.mark_failed(record.id)
        assert repo.find_by_id(record.id).status is DocumentStatus.FAILED  # type: ignore[union-attr]
        assert repo.claim_for_processing(record.id) is not None

    def test_mark_failed_ignores_other_states(self) -> None:
        repo = InMemoryDocumentRepository()
        record = repo.create(_new_document())
        repo.mark_failed(record.id)
        repo.mark_failed("missing")
        assert repo.find_by_id(record.id).status is DocumentStatus.UPLOADED  # type: ignore[union-attr]

    def test_concurrent_claims_have_one_winner(self) -> None:
        repo = InMemoryDocumentRepository()
        record = repo.create(_new_document())
        barrier = threading.Barrier(8)
        results: list[object] = []
        lock = threading.Lock()

        def claim() -> None:
            barrier.wait()
            outcome = repo.claim_for_processing(record.id)
            with lock:
                results.append(outcome)

        threads = [threading.Thread(target=claim) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(1 for r in results if r is not None) == 1
