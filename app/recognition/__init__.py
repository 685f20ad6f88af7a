from app.recognition.base import BaseRecognitionBackend
from app.recognition.coordinator import TextExtractionCoordinator
from app.recognition.factory import RecognitionFactory
from app.recognition.models import BackendPolicy, RecognitionOutcome

__all__ = [
    "BackendPolicy",
    "BaseRecognitionBackend",
    "RecognitionFactory",
    "RecognitionOutcome",
    "TextExtractionCoordinator",
]
