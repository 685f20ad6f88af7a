from dataclasses import dataclass

from app.extraction.models import StructuredReceipt
from app.recognition.models import BackendPolicy


@dataclass(frozen=True)
class ProcessingOptions:
    """Per-request switches for the receipt pipeline."""

    backend_policy: BackendPolicy = BackendPolicy.AUTO
    extract_structured: bool = True
    clean_text: bool = True


@dataclass(frozen=True)
class OCRResult:
    """Final output of one pipeline run."""

    raw_text: str
    processing_time_ms: int
    backend: str = ""
    processed_text: str | None = None
    confidence: float | None = None
    extracted_data: StructuredReceipt | None = None

    def to_dict(self) -> dict[str, object]:
        """JSON-ready form; absent optional fields are left out."""
        payload: dict[str, object] = {
            "rawText": self.raw_text,
            "processingTime": self.processing_time_ms,
            "backend": self.backend,
        }
        if self.processed_text is not None:
            payload["processedText"] = self.processed_text
        if self.confidence is not None:
            payload["confidence"] = self.confidence
        if self.extracted_data is not None:
            payload["extractedData"] = self.extracted_data.to_dict()
        return payload
