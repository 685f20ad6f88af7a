class DocumentError(Exception):
    """Base exception for document handling errors."""


class InvalidDocumentError(DocumentError):
    """Raised when a document is missing, too large, or not an image/PDF."""
