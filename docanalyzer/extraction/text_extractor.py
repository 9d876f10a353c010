"""Turns uploaded document bytes into plain text.

Dispatch is by filename extension only. The declared MIME type comes from the
client and is accepted for logging, never for choosing a parser.
"""

from pathlib import PurePosixPath, PureWindowsPath

from docanalyzer.extraction.base import BasePdfExtractor
from docanalyzer.extraction.docx_reader import read_docx_text
from docanalyzer.extraction.exceptions import (
    CorruptDocumentError,
    PdfExtractionError,
    UnsupportedTypeError,
)
from docanalyzer.logging.logger import Log

SUPPORTED_EXTENSIONS = frozenset({".pdf", ".docx", ".txt"})


def file_extension(filename: str) -> str:
    """Lowercased extension of the last path component, e.g. ``.pdf``."""
    name = PureWindowsPath(PurePosixPath(filename).name).name
    return PurePosixPath(name).suffix.lower()


class TextExtractor:
    """Extracts trimmed text from PDF, DOCX and TXT bytes."""

    def __init__(self, pdf_extractor: BasePdfExtractor) -> None:
        self._pdf_extractor = pdf_extractor

    def extract(self, data: bytes, filename: str, declared_mime_type: str | None = None) -> str:
        """Extract text from ``data``.

        Raises:
            UnsupportedTypeError: extension is not .pdf, .docx or .txt.
            CorruptDocumentError: the parser library rejected the bytes.
        """
        ext = file_extension(filename)
        Log.debug(
            "Extracting text",
            filename=filename,
            extension=ext or "<none>",
            declared_mime_type=declared_mime_type,
        )

        if ext == ".pdf":
            try:
                text = self._pdf_extractor.extract(data)
            except PdfExtractionError as exc:
                raise CorruptDocumentError("PDF is corrupt or unreadable.") from exc
        elif ext == ".docx":
            text = read_docx_text(data)
        elif ext == ".txt":
            text = data.decode("utf-8", errors="replace")
        else:
            raise UnsupportedTypeError(f"Unsupported file type: {ext or '<none>'}")

        return text.strip()
