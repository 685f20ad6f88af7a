from app.config.settings import Settings
from app.documents.models import Document
from app.extraction.base import BaseStructuredExtractor
from app.extraction.factory import StructuredExtractorFactory
from app.extraction.models import StructuredReceipt
from app.processor.models import OCRResult, ProcessingOptions
from app.processor.processor import Processor, build_steps
from app.recognition.coordinator import TextExtractionCoordinator
from app.recognition.factory import RecognitionFactory
from app.recognition.models import BackendPolicy, RecognitionOutcome
from app.text.normalizer import TextNormalizer


class OCRService:
    """Entry points of the OCR core for an outer layer such as an HTTP API."""

    def __init__(
        self,
        coordinator: TextExtractionCoordinator,
        normalizer: TextNormalizer,
        extractor: BaseStructuredExtractor,
    ) -> None:
        self._coordinator = coordinator
        self._normalizer = normalizer
        self._extractor = extractor
        self._processor = Processor(build_steps(coordinator, normalizer, extractor))

    def extract_text(
        self,
        document: Document,
        policy: BackendPolicy | str = BackendPolicy.AUTO,
    ) -> RecognitionOutcome:
        return self._coordinator.extract_text(document, policy)

    def clean_text(self, raw_text: str) -> str:
        return self._normalizer.normalize(raw_text)

    def extract_structured(self, text: str) -> StructuredReceipt:
        return self._extractor.extract(text)

    def process(
        self,
        document: Document,
        options: ProcessingOptions | None = None,
    ) -> OCRResult:
        return self._processor.process(document, options)


def build_service(settings: Settings) -> OCRService:
    """Wire the OCR service from application settings."""
    return OCRService(
        coordinator=RecognitionFactory.create(settings),
        normalizer=TextNormalizer(),
        extractor=StructuredExtractorFactory.create(settings),
    )
