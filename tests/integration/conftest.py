import json
import shutil
from collections.abc import Callable
from unittest.mock import MagicMock

import httpx
import pytest

from app.documents.validator import DocumentValidator
from app.extraction.client_base import BaseCompletionClient
from app.extraction.extractor import StructuredDataExtractor
from app.pdf.pymupdf_adapter import PyMuPdfAdapter
from app.recognition.coordinator import TextExtractionCoordinator
from app.recognition.ocr_space_adapter import OcrSpaceAdapter
from app.recognition.tesseract_adapter import TesseractAdapter
from app.service import OCRService
from app.text.normalizer import TextNormalizer

Handler = Callable[[httpx.Request], httpx.Response]

RECEIPT_JSON = json.dumps({
    "vendorName": "CO.OP MART",
    "invoiceNumber": None,
    "date": "2024-03-15",
    "totalAmount": 42.5,
    "items": [{"name": "Sữa tươi", "quantity": 1, "price": 42.5}],
    "taxAmount": None,
    "subtotal": None,
    "currency": "VND",
})


def _ocr_space_handler(parsed_text: str | None, calls: list[httpx.Request]) -> Handler:
    """Answer like OCR.space; ``None`` simulates a processing error."""

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if parsed_text is None:
            return httpx.Response(
                200,
                json={"IsErroredOnProcessing": True, "ErrorMessage": ["E500: busy"]},
            )
        return httpx.Response(
            200,
            json={"IsErroredOnProcessing": False, "ParsedResults": [{"ParsedText": parsed_text}]},
        )

    return handler


def _build_test_service(
    *,
    handler: Handler,
    api_key: str = "test-key",
    completion_client: BaseCompletionClient | None = None,
    tesseract_languages: str = "eng",
) -> OCRService:
    remote = OcrSpaceAdapter(
        api_key=api_key,
        url="https://api.ocr.space/parse/image",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    local = TesseractAdapter(
        pdf_rasterizer=PyMuPdfAdapter(),
        languages=tesseract_languages,
        timeout_seconds=60,
        pdf_dpi=150,
    )
    coordinator = TextExtractionCoordinator(
        local=local, remote=remote, validator=DocumentValidator()
    )
    extractor = StructuredDataExtractor(client=completion_client, model="test-model")
    return OCRService(coordinator, TextNormalizer(), extractor)


@pytest.fixture
def completion_client() -> MagicMock:
    client = MagicMock(spec=BaseCompletionClient)
    client.create_chat_completion.return_value = RECEIPT_JSON
    return client


@pytest.fixture
def requires_tesseract() -> None:
    if shutil.which("tesseract") is None:
        pytest.skip("tesseract binary not installed")


@pytest.fixture
def ocr_space() -> Callable[..., Handler]:
    return _ocr_space_handler


@pytest.fixture
def make_service() -> Callable[..., OCRService]:
    return _build_test_service
