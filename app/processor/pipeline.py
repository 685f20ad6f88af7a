from abc import ABC, abstractmethod
from dataclasses import dataclass

from app.documents.models import Document
from app.extraction.models import StructuredReceipt
from app.processor.models import ProcessingOptions
from app.recognition.models import RecognitionOutcome


@dataclass(slots=True)
class PipelineContext:
    document: Document
    options: ProcessingOptions
    outcome: RecognitionOutcome | None = None
    processed_text: str | None = None
    extracted_data: StructuredReceipt | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
