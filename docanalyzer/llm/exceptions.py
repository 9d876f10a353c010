class LlmError(Exception):
    """Base class for failures around the generative model call."""


class LlmProviderError(LlmError):
    """Raised when the provider call fails due to network or provider-side issues."""


class ModelTimeoutError(LlmProviderError):
    """Raised when an attempt does not finish within the configured timeout."""


class EmptyResponseError(LlmProviderError):
    """Raised when the provider answers with no text."""


class ResponseError(LlmError):
    """Base class for model output that cannot be turned into a result."""


class MalformedJsonError(ResponseError):
    """Raised when no JSON object can be parsed from the model output."""


class MissingFieldError(ResponseError):
    """Raised when a required key is absent from the parsed object."""

    def __init__(self, field_name: str) -> None:
        super().__init__(f"Missing required field: {field_name}")
        self.field_name = field_name


class InvalidFieldError(ResponseError):
    """Raised when a required key is present but holds the wrong kind of value."""

    def __init__(self, field_name: str, reason: str) -> None:
        super().__init__(f"Invalid field '{field_name}': {reason}")
        self.field_name = field_name
