class RecognitionError(Exception):
    """Base exception for text recognition failures."""


class BackendUnavailableError(RecognitionError):
    """Raised when a backend cannot run, e.g. its credential is missing."""


class RecognitionFailedError(RecognitionError):
    """Raised when a backend ran but produced no usable text."""


class RecognitionNetworkError(RecognitionFailedError):
    """Raised when a remote backend could not be reached."""


class RecognitionTimeoutError(RecognitionError):
    """Raised when a backend attempt exceeds its deadline."""


class AllBackendsFailedError(RecognitionError):
    """Raised when every backend tried under the auto policy failed."""

    def __init__(self, failures: list[RecognitionError]) -> None:
        self.failures = list(failures)
        reasons = "; ".join(f"{type(f).__name__}: {f}" for f in self.failures)
        super().__init__(f"All OCR backends failed: {reasons}")
