from app.documents.models import Document
from app.extraction.base import BaseStructuredExtractor
from app.logging.logger import Log
from app.processor.exceptions import PipelineStateError
from app.processor.models import OCRResult, ProcessingOptions
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.steps import CleanTextStep, ExtractStructuredStep, ExtractTextStep
from app.recognition.coordinator import TextExtractionCoordinator
from app.text.normalizer import TextNormalizer


class Processor:
    """Runs the receipt pipeline: extract text -> clean -> structure.

    Text extraction is mandatory and its failure propagates. Structuring is
    best-effort and never fails the run.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def process(
        self,
        document: Document,
        options: ProcessingOptions | None = None,
    ) -> OCRResult:
        """Run every step for one document and assemble the result."""
        context = PipelineContext(document=document, options=options or ProcessingOptions())
        Log.info(f"Processing {document.name} ({document.size_bytes} bytes)")
        try:
            for step in self._steps:
                context = step.run(context)
        except Exception as exc:
            Log.error(f"Receipt processing failed for {document.name}: {exc}")
            raise
        return self._build_result(context)

    @staticmethod
    def _build_result(context: PipelineContext) -> OCRResult:
        outcome = context.outcome
        if outcome is None:
            raise PipelineStateError("Pipeline finished without a recognition outcome")
        return OCRResult(
            raw_text=outcome.raw_text,
            processing_time_ms=outcome.elapsed_ms,
            backend=outcome.backend,
            processed_text=context.processed_text,
            confidence=outcome.confidence,
            extracted_data=context.extracted_data,
        )


def build_steps(
    coordinator: TextExtractionCoordinator,
    normalizer: TextNormalizer,
    extractor: BaseStructuredExtractor,
) -> list[PipelineStep]:
    return [
        ExtractTextStep(coordinator),
        CleanTextStep(normalizer),
        ExtractStructuredStep(extractor),
    ]

