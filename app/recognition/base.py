from abc import ABC, abstractmethod

from app.documents.models import Document
from app.recognition.models import RecognitionOutcome


class BaseRecognitionBackend(ABC):
    """Contract for all OCR backend adapters."""

    name: str = ""

    @property
    def available(self) -> bool:
        """Whether the backend is configured well enough to attempt a call."""
        return True

    @abstractmethod
    def recognize(self, document: Document) -> RecognitionOutcome:
        """Recognize the text of an image or PDF.

        The coordinator validates the document before calling and stamps the
        attempt duration afterwards, so adapters leave ``elapsed_ms`` at 0.

        Raises:
            BackendUnavailableError: if the backend is not configured.
            RecognitionFailedError: if no usable text was produced.
            RecognitionTimeoutError: if the attempt exceeded its deadline.
        """
