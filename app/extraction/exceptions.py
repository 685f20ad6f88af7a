class ExtractionError(Exception):
    """Raised when structured receipt extraction fails."""


class ExtractionUnavailableError(ExtractionError):
    """Raised when no completion backend credential is configured."""


class EmptyResponseError(ExtractionError):
    """Raised when the completion backend returns no content."""


class MalformedResponseError(ExtractionError):
    """Raised when the completion content does not match the receipt schema."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
