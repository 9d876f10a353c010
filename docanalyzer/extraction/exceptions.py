class ExtractionError(Exception):
    """Base class for failures turning document bytes into text."""


class UnsupportedTypeError(ExtractionError):
    """Raised when the filename extension has no registered extractor."""


class CorruptDocumentError(ExtractionError):
    """Raised when a parser library cannot read the document."""


class EmptyTextError(ExtractionError):
    """Raised when a document yields too little text to analyze."""


class PdfExtractionError(Exception):
    """Raised by PDF adapters; mapped to CorruptDocumentError by TextExtractor."""
