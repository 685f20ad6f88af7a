"""Local OCR backend running the Tesseract engine on the host.

Tesseract is CPU-bound and takes seconds to tens of seconds per page, but it
needs no network and no credential, so it is the backend of last resort.
A single ``image_to_data`` pass per page yields the words (reassembled into
lines and paragraphs here) together with per-word confidences.
"""

import io
from collections.abc import Iterator

import pytesseract
from PIL import Image

from app.documents.models import Document
from app.logging.logger import Log
from app.pdf.base import BasePdfRasterizer
from app.pdf.exceptions import PdfRenderError
from app.recognition.base import BaseRecognitionBackend
from app.recognition.exceptions import (
    BackendUnavailableError,
    RecognitionFailedError,
    RecognitionTimeoutError,
)
from app.recognition.models import RecognitionOutcome

PageWords = dict[str, list[object]]


class TesseractAdapter(BaseRecognitionBackend):
    """Recognizes text with Tesseract via pytesseract."""

    name = "tesseract"

    def __init__(
        self,
        *,
        pdf_rasterizer: BasePdfRasterizer,
        languages: str = "eng+vie",
        timeout_seconds: int = 60,
        pdf_dpi: int = 300,
    ) -> None:
        self._pdf_rasterizer = pdf_rasterizer
        self._languages = languages
        self._timeout_seconds = timeout_seconds
        self._pdf_dpi = pdf_dpi

    def recognize(self, document: Document) -> RecognitionOutcome:
        page_texts: list[str] = []
        confidences: list[float] = []
        for page_number, image in enumerate(self._iter_images(document), start=1):
            data = self._run_tesseract(image)
            image.close()
            page_texts.append(self._assemble_text(data))
            confidences.extend(self._word_confidences(data))
            Log.debug(f"Tesseract page {page_number} of {document.name} done")

        text = "\n\n".join(t for t in page_texts if t)
        if not text.strip():
            raise RecognitionFailedError("No text found in image")

        confidence = sum(confidences) / len(confidences) if confidences else 0.0
        return RecognitionOutcome(
            raw_text=text,
            confidence=round(confidence, 2),
            backend=self.name,
        )

    def _iter_images(self, document: Document) -> Iterator[Image.Image]:
        """Yield the document's pages one at a time, PDFs rendered lazily."""
        try:
            content = document.read_bytes()
            if document.is_pdf:
                yield from self._pdf_rasterizer.render(content, self._pdf_dpi)
                return
            with Image.open(io.BytesIO(content)) as img:
                yield img.convert("RGB")
        except (OSError, Image.DecompressionBombError, PdfRenderError) as exc:
            raise RecognitionFailedError(f"Cannot read {document.name}: {exc}") from exc

    def _run_tesseract(self, image: Image.Image) -> PageWords:
        try:
            return pytesseract.image_to_data(
                image,
                lang=self._languages,
                output_type=pytesseract.Output.DICT,
                timeout=self._timeout_seconds,
            )
        except pytesseract.TesseractNotFoundError as exc:
            raise BackendUnavailableError(f"Tesseract binary not found: {exc}") from exc
        except pytesseract.TesseractError as exc:
            raise RecognitionFailedError(f"Tesseract OCR failed: {exc}") from exc
        except RuntimeError as exc:
            # pytesseract signals an expired timeout with a bare RuntimeError
            if "timeout" in str(exc).lower():
                raise RecognitionTimeoutError(
                    f"Tesseract exceeded {self._timeout_seconds}s"
                ) from exc
            raise RecognitionFailedError(f"Tesseract OCR failed: {exc}") from exc

    @staticmethod
    def _assemble_text(data: PageWords) -> str:
        """Join recognized words into lines, and lines into paragraphs."""
        lines: dict[tuple[int, int, int], list[str]] = {}
        for i, word in enumerate(data.get("text", [])):
            word = str(word).strip()
            if not word:
                continue
            key = (
                int(data["block_num"][i]),  # type: ignore[call-overload]
                int(data["par_num"][i]),  # type: ignore[call-overload]
                int(data["line_num"][i]),  # type: ignore[call-overload]
            )
            lines.setdefault(key, []).append(word)

        paragraphs: dict[tuple[int, int], list[str]] = {}
        for (block, par, _line), words in lines.items():
            paragraphs.setdefault((block, par), []).append(" ".join(words))
        return "\n\n".join("\n".join(p) for p in paragraphs.values())

    @staticmethod
    def _word_confidences(data: PageWords) -> list[float]:
        confidences = []
        for word, conf in zip(data.get("text", []), data.get("conf", [])):
            if not str(word).strip():
                continue
            try:
                value = float(conf)  # type: ignore[arg-type]
            except (TypeError, ValueError):
                continue
            if value >= 0:
                confidences.append(value)
        return confidences
