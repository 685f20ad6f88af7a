from collections.abc import Iterator

import pymupdf
from PIL import Image

from app.pdf.base import BasePdfRasterizer
from app.pdf.exceptions import PdfRenderError


class PyMuPdfAdapter(BasePdfRasterizer):
    """Renders PDF pages using PyMuPDF."""

    def render(self, pdf_bytes: bytes, dpi: int) -> Iterator[Image.Image]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                for page in doc:
                    pix = page.get_pixmap(dpi=dpi, alpha=False)
                    yield Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
        except Exception as exc:
            raise PdfRenderError(f"pymupdf rendering failed: {exc}") from exc
