from app.extraction.base import BaseStructuredExtractor
from app.extraction.exceptions import ExtractionError
from app.extraction.models import StructuredReceipt
from app.logging.logger import Log
from app.processor.exceptions import PipelineStateError
from app.processor.pipeline import PipelineContext, PipelineStep
from app.recognition.coordinator import TextExtractionCoordinator
from app.text.normalizer import TextNormalizer


class ExtractTextStep(PipelineStep):
    def __init__(self, coordinator: TextExtractionCoordinator) -> None:
        self._coordinator = coordinator

    def run(self, context: PipelineContext) -> PipelineContext:
        context.outcome = self._coordinator.extract_text(
            context.document,
            context.options.backend_policy,
        )
        Log.info(
            f"Extracted {len(context.outcome.raw_text)} chars from {context.document.name} "
            f"via {context.outcome.backend}"
        )
        return context


class CleanTextStep(PipelineStep):
    def __init__(self, normalizer: TextNormalizer) -> None:
        self._normalizer = normalizer

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.options.clean_text:
            return context
        if context.outcome is None:
            raise PipelineStateError("PipelineContext.outcome must be set before cleaning")
        context.processed_text = self._normalizer.normalize(context.outcome.raw_text)
        return context


class ExtractStructuredStep(PipelineStep):
    """Best-effort structuring: a failure leaves extracted_data unset."""

    def __init__(self, extractor: BaseStructuredExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if not context.options.extract_structured:
            return context
        if not self._extractor.available:
            Log.debug("Structured extraction skipped: no AI backend configured")
            return context
        if context.outcome is None:
            raise PipelineStateError(
                "PipelineContext.outcome must be set before structured extraction"
            )
        text = context.processed_text or context.outcome.raw_text
        context.extracted_data = self._try_extract(text)
        return context

    def _try_extract(self, text: str) -> StructuredReceipt | None:
        try:
            return self._extractor.extract(text)
        except ExtractionError as exc:
            Log.warning(
                f"AI extraction failed, continuing without structured data: "
                f"{type(exc).__name__}: {exc}"
            )
            return None
