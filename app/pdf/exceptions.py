class PdfRenderError(Exception):
    """Raised when PDF pages cannot be rendered to images."""
