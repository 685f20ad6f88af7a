"""Backend selection and fallback for text recognition."""

import time
from dataclasses import replace

from app.documents.models import Document
from app.documents.validator import DocumentValidator
from app.logging.logger import Log
from app.recognition.base import BaseRecognitionBackend
from app.recognition.exceptions import AllBackendsFailedError, RecognitionError
from app.recognition.models import BackendPolicy, RecognitionOutcome


class TextExtractionCoordinator:
    """Runs the recognition backend(s) a policy calls for.

    ``auto`` tries the remote service first and falls back to the local
    engine on any failure. A successful remote result is never second-guessed
    on confidence.
    """

    def __init__(
        self,
        *,
        local: BaseRecognitionBackend,
        remote: BaseRecognitionBackend,
        validator: DocumentValidator,
    ) -> None:
        self._local = local
        self._remote = remote
        self._validator = validator

    def extract_text(
        self,
        document: Document,
        policy: BackendPolicy | str = BackendPolicy.AUTO,
    ) -> RecognitionOutcome:
        """Recognize the document text under the given backend policy.

        Raises:
            InvalidDocumentError: before any backend runs, if the document
                is missing, too large, or of an unsupported type.
            RecognitionError: the backend's own failure under ``local`` or
                ``remote``; AllBackendsFailedError under ``auto``.
        """
        policy = BackendPolicy.parse(policy)
        self._validator.validate(document)
        Log.info(f"Extracting text from {document.name} with policy '{policy.value}'")

        if policy is BackendPolicy.LOCAL:
            return _unwrap(self._attempt(self._local, document))
        if policy is BackendPolicy.REMOTE:
            return _unwrap(self._attempt(self._remote, document))

        remote = self._attempt(self._remote, document)
        if isinstance(remote, RecognitionOutcome):
            return remote
        Log.warning(
            f"{self._remote.name} failed for {document.name}, "
            f"falling back to {self._local.name}"
        )

        local = self._attempt(self._local, document)
        if isinstance(local, RecognitionOutcome):
            return local
        raise AllBackendsFailedError([remote, local])

    @staticmethod
    def _attempt(
        backend: BaseRecognitionBackend, document: Document
    ) -> RecognitionOutcome | RecognitionError:
        """Run one backend, timed; its failure is returned rather than raised."""
        started = time.perf_counter()
        try:
            outcome = backend.recognize(document)
        except RecognitionError as exc:
            elapsed_ms = _elapsed_ms(started)
            Log.warning(f"OCR backend {backend.name} failed after {elapsed_ms}ms: {exc}")
            return exc

        elapsed_ms = _elapsed_ms(started)
        Log.info(
            f"OCR backend {backend.name} recognized {len(outcome.raw_text)} chars "
            f"in {elapsed_ms}ms"
        )
        return replace(
            outcome,
            elapsed_ms=elapsed_ms,
            backend=outcome.backend or backend.name,
        )


def _unwrap(result: RecognitionOutcome | RecognitionError) -> RecognitionOutcome:
    if isinstance(result, RecognitionError):
        raise result
    return result


def _elapsed_ms(started: float) -> int:
    return max(0, round((time.perf_counter() - started) * 1000))
