from abc import ABC, abstractmethod
from collections.abc import Iterator

from PIL import Image


class BasePdfRasterizer(ABC):
    """Contract for all PDF page rendering adapters."""

    @abstractmethod
    def render(self, pdf_bytes: bytes, dpi: int) -> Iterator[Image.Image]:
        """Render the pages of a PDF to RGB images, one at a time.

        Pages are rendered lazily as the caller iterates, so only the
        current page image is held in memory.

        Args:
            pdf_bytes: Raw PDF file content.
            dpi: Target resolution; OCR accuracy drops noticeably below 200.

        Yields:
            One image per page, in page order.

        Raises:
            PdfRenderError: if rendering fails for any reason.
        """
