from pathlib import Path

from docanalyzer.config.settings import Settings
from docanalyzer.database.models import DocumentRecord, DocumentStatus, NewDocument
from docanalyzer.database.repositories.base import BaseDocumentRepository
from docanalyzer.database.repositories.factory import DocumentRepositoryFactory
from docanalyzer.extraction.exceptions import EmptyTextError, ExtractionError
from docanalyzer.extraction.factory import build_text_extractor
from docanalyzer.extraction.text_extractor import TextExtractor, file_extension
from docanalyzer.llm.exceptions import (
    EmptyResponseError,
    InvalidFieldError,
    LlmProviderError,
    MalformedJsonError,
    MissingFieldError,
    ModelTimeoutError,
    ResponseError,
)
from docanalyzer.llm.factory import LlmClientFactory
from docanalyzer.llm.invoker import ModelInvoker
from docanalyzer.llm.models import (
    ANALYSIS_REQUIRED_FIELDS,
    DESIRED_LENGTHS,
    SUMMARY_REQUIRED_FIELDS,
    DocumentAnalysis,
    SummarizeOptions,
    SummaryResult,
)
from docanalyzer.llm.prompt_builder import PromptBuilder
from docanalyzer.llm.response_parser import parse_model_response
from docanalyzer.llm.validator import build_document_analysis, build_summary_result
from docanalyzer.logging.logger import Log
from docanalyzer.processor.exceptions import (
    AnalysisFailedError,
    AnalysisInProgressError,
    DocumentNotFoundError,
    InvalidInputError,
    StorageError,
)
from docanalyzer.processor.models import UploadedFile
from docanalyzer.storage.file_storage import LocalFileStorage

MAX_KEYWORDS_LIMIT = 10

_ANALYSIS_FAILED_MESSAGE = (
    "AI analysis failed. Please try again later or with a smaller document."
)
_NO_TEXT_MESSAGE = (
    "The uploaded document contains no readable text. "
    "If it is scanned or image-only, OCR is not supported."
)


def failure_reason(exc: Exception) -> str:
    """Short machine-readable name for the kind of analysis failure."""
    if isinstance(exc, ModelTimeoutError):
        return "timeout"
    if isinstance(exc, EmptyResponseError):
        return "empty_response"
    if isinstance(exc, LlmProviderError):
        return "provider"
    if isinstance(exc, MalformedJsonError):
        return "malformed_json"
    if isinstance(exc, MissingFieldError):
        return "missing_field"
    if isinstance(exc, InvalidFieldError):
        return "invalid_field"
    return "unexpected"


class DocumentService:
    """Orchestrates extraction, prompting, the model call and record state.

    Two workflows share the same collaborators:

    * ``summarize_and_extract``: one call, one model attempt, nothing stored.
    * ``upload`` / ``analyze`` / ``get``: the document is stored first and
      analyzed on request, with retries and status tracking.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        text_extractor: TextExtractor,
        prompt_builder: PromptBuilder,
        invoker: ModelInvoker,
        repository: BaseDocumentRepository,
        storage: LocalFileStorage,
    ) -> None:
        self._settings = settings
        self._text_extractor = text_extractor
        self._prompt_builder = prompt_builder
        self._invoker = invoker
        self._repository = repository
        self._storage = storage

    # -- synchronous workflow -------------------------------------------

    def summarize_and_extract(
        self,
        upload: UploadedFile | None,
        options: SummarizeOptions | None = None,
    ) -> SummaryResult:
        """Summarize an upload without persisting anything.

        Raises:
            InvalidInputError: missing file, bad extension, size or options.
            ExtractionError: the document could not be read or has no text.
            ResponseError: the model output was not usable JSON.
            AnalysisFailedError: the provider call failed.
        """
        options = self._validate_options(options or SummarizeOptions())
        upload = self._validate_upload(upload, self._settings.summarize_max_file_size_bytes)
        text = self._extract_text(upload)

        prompt = self._prompt_builder.build_summary_prompt(text, options)
        Log.debug(f"Summary prompt:\n{prompt}")
        try:
            raw = self._invoker.invoke(
                prompt,
                timeout_seconds=self._settings.llm_timeout_seconds,
                max_attempts=1,
            )
        except Exception as exc:
            reason = failure_reason(exc)
            Log.error(f"Summarization model call failed: {exc}", reason=reason)
            raise AnalysisFailedError(_ANALYSIS_FAILED_MESSAGE, reason=reason) from exc

        try:
            parsed = parse_model_response(raw, SUMMARY_REQUIRED_FIELDS)
            result = build_summary_result(
                parsed,
                max_keywords=options.max_keywords or self._settings.default_max_keywords,
            )
        except ResponseError as exc:
            Log.warning(f"Unusable summary response: {exc}", filename=upload.filename)
            raise

        Log.info(
            "Summary generated",
            filename=upload.filename,
            keywords=len(result.keywords),
            sentiment=result.sentiment,
        )
        return result

    # -- persisted workflow ---------------------------------------------

    def upload(self, upload: UploadedFile | None) -> DocumentRecord:
        """Store an upload, extract its text and create an ``uploaded`` record.

        On any failure after the file is written, the file is removed and no
        record exists.

        Raises:
            InvalidInputError: missing file, bad extension or size.
            StorageError: the file or the record could not be saved.
            ExtractionError: the document could not be read or has no text.
        """
        upload = self._validate_upload(upload, self._settings.max_upload_size_bytes)
        storage_path = self._storage.store(upload.filename, upload.content)

        try:
            text = self._extract_text(upload)
            record = self._repository.create(
                NewDocument(
                    original_name=upload.filename,
                    mime_type=upload.mime_type,
                    size=upload.byte_size,
                    storage_path=str(storage_path),
                    extracted_text=text,
                )
            )
        except ExtractionError:
            self._storage.delete(storage_path)
            raise
        except Exception as exc:
            Log.exception("Failed to create document record", filename=upload.filename)
            self._storage.delete(storage_path)
            raise StorageError("Failed to save uploaded document.") from exc

        Log.info(
            "Document uploaded",
            document_id=record.id,
            size=record.size,
            chars=len(record.extracted_text),
        )
        return record

    def analyze(self, document_id: str) -> DocumentRecord:
        """Analyze a stored document, or return the stored result if already analyzed.

        Raises:
            DocumentNotFoundError: no record with this id.
            AnalysisInProgressError: another request is analyzing the record.
            AnalysisFailedError: the analysis failed; the record is now ``failed``.
            StorageError: the record store could not be read or updated.
        """
        record = self._require_record(document_id)

        if record.status is DocumentStatus.ANALYZED:
            Log.info("Document already analyzed, returning stored result", document_id=document_id)
            return record
        if record.status is DocumentStatus.PROCESSING:
            raise AnalysisInProgressError("Document analysis is already in progress.")

        claimed = self._claim(document_id)
        if claimed is None:
            current = self._require_record(document_id)
            if current.status is DocumentStatus.ANALYZED:
                return current
            if current.status is DocumentStatus.PROCESSING:
                raise AnalysisInProgressError("Document analysis is already in progress.")
            # A concurrent attempt already ended in failed; this request may retry it.
            claimed = self._claim(document_id)
            if claimed is None:
                raise AnalysisInProgressError("Document analysis is already in progress.")
        Log.info("Document marked as processing", document_id=document_id)

        try:
            analysis = self._run_analysis(claimed)
            analyzed = self._repository.mark_analyzed(document_id, analysis)
        except Exception as exc:
            reason = failure_reason(exc)
            Log.error(
                f"Document analysis failed: {exc}",
                document_id=document_id,
                reason=reason,
            )
            self._mark_failed(document_id)
            raise AnalysisFailedError(_ANALYSIS_FAILED_MESSAGE, reason=reason) from exc

        Log.info(
            "Document analyzed",
            document_id=document_id,
            doc_type=analyzed.doc_type,
        )
        return analyzed

    def get(self, document_id: str) -> DocumentRecord:
        """Return the current record including its extracted text.

        Raises:
            DocumentNotFoundError: no record with this id.
            StorageError: the record store could not be read.
        """
        return self._require_record(document_id)

    # -- helpers --------------------------------------------------------

    def _run_analysis(self, record: DocumentRecord) -> DocumentAnalysis:
        prompt = self._prompt_builder.build_analysis_prompt(record.extracted_text)
        Log.debug(f"Analysis prompt:\n{prompt}")
        raw = self._invoker.invoke(
            prompt,
            timeout_seconds=self._settings.llm_timeout_seconds,
            max_attempts=self._settings.llm_max_attempts,
        )
        parsed = parse_model_response(
            raw,
            ANALYSIS_REQUIRED_FIELDS,
            metadata_max_chars=self._settings.metadata_max_chars,
        )
        return build_document_analysis(parsed)

    def _mark_failed(self, document_id: str) -> None:
        try:
            self._repository.mark_failed(document_id)
        except Exception as exc:
            Log.error(f"Could not mark document as failed: {exc}", document_id=document_id)
        else:
            Log.warning("Document marked as failed", document_id=document_id)

    def _claim(self, document_id: str) -> DocumentRecord | None:
        try:
            return self._repository.claim_for_processing(document_id)
        except Exception as exc:
            Log.exception("Failed to claim document for processing", document_id=document_id)
            raise StorageError("Failed to update document record.") from exc

    def _require_record(self, document_id: str) -> DocumentRecord:
        try:
            record = self._repository.find_by_id(document_id)
        except Exception as exc:
            Log.exception("Failed to read document record", document_id=document_id)
            raise StorageError("Failed to read document record.") from exc
        if record is None:
            raise DocumentNotFoundError("Document not found.")
        return record

    def _extract_text(self, upload: UploadedFile) -> str:
        try:
            text = self._text_extractor.extract(upload.content, upload.filename, upload.mime_type)
        except ExtractionError as exc:
            Log.warning(f"Text extraction failed: {exc}", filename=upload.filename)
            raise

        if len(text.strip()) < self._settings.min_text_length:
            Log.warning("Extracted text too short", filename=upload.filename, chars=len(text))
            raise EmptyTextError(_NO_TEXT_MESSAGE)
        return text

    def _validate_upload(self, upload: UploadedFile | None, max_size: int) -> UploadedFile:
        if upload is None:
            raise InvalidInputError("File is required.")
        if not upload.content:
            raise InvalidInputError("Uploaded file is empty or unreadable.")
        if upload.byte_size > max_size:
            max_mb = round(max_size / (1024 * 1024))
            raise InvalidInputError(f"File too large. Max allowed size is {max_mb}MB.")

        allowed = self._settings.allowed_extensions
        if file_extension(upload.filename) not in allowed:
            raise InvalidInputError(
                f"Unsupported file type. Allowed types: {', '.join(allowed)}"
            )
        return upload

    @staticmethod
    def _validate_options(options: SummarizeOptions) -> SummarizeOptions:
        if options.desired_length is not None and options.desired_length not in DESIRED_LENGTHS:
            raise InvalidInputError(
                f"desiredLength must be one of {sorted(DESIRED_LENGTHS)}"
            )
        if options.max_keywords is not None and not (
            1 <= options.max_keywords <= MAX_KEYWORDS_LIMIT
        ):
            raise InvalidInputError(
                f"maxKeywords must be between 1 and {MAX_KEYWORDS_LIMIT}"
            )
        return options


def build_document_service(
    settings: Settings,
    upload_dir: Path | None = None,
) -> DocumentService:
    """Build a DocumentService with all configured adapters.

    Provider credentials are checked here, so a missing key fails at startup.
    """
    return DocumentService(
        settings=settings,
        text_extractor=build_text_extractor(settings),
        prompt_builder=PromptBuilder(
            max_chars=settings.prompt_max_chars,
            default_max_keywords=settings.default_max_keywords,
        ),
        invoker=LlmClientFactory.create_invoker(settings),
        repository=DocumentRepositoryFactory.create(settings),
        storage=LocalFileStorage(upload_dir or Path(settings.upload_dir)),
    )
