import pytesseract

from app.config.settings import Settings
from app.documents.validator import DocumentValidator
from app.pdf.factory import PdfRasterizerFactory
from app.recognition.coordinator import TextExtractionCoordinator
from app.recognition.ocr_space_adapter import OcrSpaceAdapter
from app.recognition.tesseract_adapter import TesseractAdapter


class RecognitionFactory:
    """Creates the recognition backends and their coordinator from settings."""

    @classmethod
    def create_local(cls, settings: Settings) -> TesseractAdapter:
        if settings.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = settings.tesseract_cmd
        return TesseractAdapter(
            pdf_rasterizer=PdfRasterizerFactory.create(settings),
            languages=settings.tesseract_languages,
            timeout_seconds=settings.tesseract_timeout_seconds,
            pdf_dpi=settings.pdf_render_dpi,
        )

    @classmethod
    def create_remote(cls, settings: Settings) -> OcrSpaceAdapter:
        return OcrSpaceAdapter(
            api_key=settings.ocr_space_api_key,
            url=settings.ocr_space_url,
            language=settings.ocr_space_language,
            engine=settings.ocr_space_engine,
            timeout_seconds=settings.ocr_space_timeout_seconds,
        )

    @classmethod
    def create(cls, settings: Settings) -> TextExtractionCoordinator:
        return TextExtractionCoordinator(
            local=cls.create_local(settings),
            remote=cls.create_remote(settings),
            validator=DocumentValidator(settings.max_document_size_bytes),
        )
