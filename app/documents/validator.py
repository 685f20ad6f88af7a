from app.documents.exceptions import InvalidDocumentError
from app.documents.models import MIME_TYPES_BY_EXTENSION, Document

DEFAULT_MAX_SIZE_BYTES = 10 * 1024 * 1024
SUPPORTED_MIME_TYPES = frozenset(MIME_TYPES_BY_EXTENSION.values())


class DocumentValidator:
    """Checks the preconditions every recognition backend relies on."""

    def __init__(self, max_size_bytes: int = DEFAULT_MAX_SIZE_BYTES) -> None:
        self._max_size_bytes = max_size_bytes

    def validate(self, document: Document) -> None:
        """Reject documents that must not reach a backend.

        Raises:
            InvalidDocumentError: if the document is missing, larger than the
                size limit, or neither an image nor a PDF.
        """
        if not document.exists():
            raise InvalidDocumentError(f"File not found: {document.name}")
        if document.size_bytes > self._max_size_bytes:
            limit_mb = self._max_size_bytes // (1024 * 1024)
            raise InvalidDocumentError(
                f"File too large: {document.size_bytes} bytes (max {limit_mb}MB)"
            )
        if document.mime_type not in SUPPORTED_MIME_TYPES:
            raise InvalidDocumentError(
                f"Unsupported file type '{document.mime_type}': "
                "file must be an image (JPG, PNG, GIF, BMP, TIFF) or PDF"
            )
