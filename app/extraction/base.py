from abc import ABC, abstractmethod

from app.extraction.models import StructuredReceipt


class BaseStructuredExtractor(ABC):
    """Contract for all structured receipt extractors."""

    @property
    @abstractmethod
    def available(self) -> bool:
        """Whether a completion backend is configured."""

    @abstractmethod
    def extract(self, text: str) -> StructuredReceipt:
        """Turn recognized receipt text into structured fields.

        Args:
            text: Cleaned or raw OCR text.

        Returns:
            StructuredReceipt with whatever fields the backend found.

        Raises:
            ExtractionUnavailableError: if no completion backend is configured.
            EmptyResponseError: if the backend returned no content.
            MalformedResponseError: if the content does not fit the schema.
            ExtractionNetworkError: if the backend could not be reached.
        """
