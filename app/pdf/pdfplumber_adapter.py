import io
from collections.abc import Iterator

import pdfplumber
from PIL import Image

from app.pdf.base import BasePdfRasterizer
from app.pdf.exceptions import PdfRenderError


class PdfPlumberAdapter(BasePdfRasterizer):
    """Renders PDF pages using pdfplumber."""

    def render(self, pdf_bytes: bytes, dpi: int) -> Iterator[Image.Image]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                for page in pdf.pages:
                    yield page.to_image(resolution=dpi).original.convert("RGB")
                    # drop pdfplumber's cached layout objects for the page
                    page.close()
        except Exception as exc:
            raise PdfRenderError(f"pdfplumber rendering failed: {exc}") from exc
