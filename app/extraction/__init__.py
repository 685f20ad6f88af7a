from app.extraction.base import BaseStructuredExtractor
from app.extraction.extractor import StructuredDataExtractor
from app.extraction.factory import StructuredExtractorFactory
from app.extraction.models import LineItem, StructuredReceipt

__all__ = [
    "BaseStructuredExtractor",
    "LineItem",
    "StructuredDataExtractor",
    "StructuredExtractorFactory",
    "StructuredReceipt",
]
