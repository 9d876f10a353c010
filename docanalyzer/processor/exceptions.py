class ProcessorError(Exception):
    """Base exception for orchestration errors surfaced to callers."""


class InvalidInputError(ProcessorError):
    """Raised when the upload is missing, empty, too large or of a disallowed type."""


class DocumentNotFoundError(ProcessorError):
    """Raised when no document record has the requested id."""


class AnalysisInProgressError(ProcessorError):
    """Raised when analysis is requested for a record that is already processing.

    The caller should retry later rather than resubmit the document.
    """


class InvalidTransitionError(ProcessorError):
    """Raised when the store refuses a status change the state machine forbids."""


class StorageError(ProcessorError):
    """Raised when an uploaded file or a document record cannot be read or written."""


class AnalysisFailedError(ProcessorError):
    """Raised when the model step fails; the specific cause is only logged.

    ``reason`` names the failure kind (``timeout``, ``provider``, ``response``,
    ...) for callers that map errors to status codes.
    """

    def __init__(self, message: str, reason: str = "unknown") -> None:
        super().__init__(message)
        self.reason = reason
