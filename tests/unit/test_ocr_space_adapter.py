from collections.abc import Callable

import httpx
import pytest

from app.documents.models import Document
from app.recognition.exceptions import (
    BackendUnavailableError,
    RecognitionFailedError,
    RecognitionNetworkError,
    RecognitionTimeoutError,
)
from app.recognition.ocr_space_adapter import OcrSpaceAdapter

URL = "https://api.ocr.space/parse/image"

Handler = Callable[[httpx.Request], httpx.Response]


def _make_adapter(handler: Handler, api_key: str = "test-key") -> OcrSpaceAdapter:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return OcrSpaceAdapter(api_key=api_key, url=URL, language="eng", engine=2, http_client=client)


def _ok(payload: object) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    return handler


class TestRecognizeSuccess:
    def test_returns_first_parsed_text(self, png_document: Document) -> None:
        adapter = _make_adapter(_ok({
            "ParsedResults": [{"ParsedText": "TOTAL: 42.50"}, {"ParsedText": "page 2"}],
            "IsErroredOnProcessing": False,
        }))
        outcome = adapter.recognize(png_document)
        assert outcome.raw_text == "TOTAL: 42.50"
        assert outcome.confidence is None
        assert outcome.backend == "ocrspace"

    def test_posts_document_and_options(self, png_document: Document) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json={"ParsedResults": [{"ParsedText": "x"}]})

        _make_adapter(handler).recognize(png_document)

        assert len(captured) == 1
        request = captured[0]
        assert request.method == "POST"
        assert str(request.url) == URL
        body = request.read()
        assert b'name="apikey"' in body and b"test-key" in body
        assert b'name="isOverlayRequired"' in body
        assert b'name="OCREngine"' in body
        assert b'name="filetype"' in body and b"PNG" in body
        assert b'filename="receipt.png"' in body


class TestRecognizeFailures:
    def test_missing_key_makes_no_call(self, png_document: Document) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={})

        adapter = _make_adapter(handler, api_key="")
        assert adapter.available is False
        with pytest.raises(BackendUnavailableError, match="OCR_SPACE_API_KEY"):
            adapter.recognize(png_document)
        assert calls == []

    def test_empty_parsed_results(self, png_document: Document) -> None:
        adapter = _make_adapter(_ok({"ParsedResults": [], "IsErroredOnProcessing": False}))
        with pytest.raises(RecognitionFailedError, match="No text found"):
            adapter.recognize(png_document)

    def test_missing_parsed_results(self, png_document: Document) -> None:
        adapter = _make_adapter(_ok({"OCRExitCode": 1}))
        with pytest.raises(RecognitionFailedError, match="No text found"):
            adapter.recognize(png_document)

    def test_blank_parsed_text(self, png_document: Document) -> None:
        adapter = _make_adapter(_ok({"ParsedResults": [{"ParsedText": " \r\n"}]}))
        with pytest.raises(RecognitionFailedError, match="No text found"):
            adapter.recognize(png_document)

    def test_processing_error_message(self, png_document: Document) -> None:
        adapter = _make_adapter(_ok({
            "IsErroredOnProcessing": True,
            "ErrorMessage": ["File failed validation", "Unable to recognize the file type"],
        }))
        with pytest.raises(RecognitionFailedError, match="File failed validation; Unable"):
            adapter.recognize(png_document)

    def test_string_payload(self, png_document: Document) -> None:
        adapter = _make_adapter(_ok("The API key is invalid"))
        with pytest.raises(RecognitionFailedError, match="API key is invalid"):
            adapter.recognize(png_document)

    def test_http_error_status(self, png_document: Document) -> None:
        adapter = _make_adapter(lambda request: httpx.Response(403, text="Forbidden"))
        with pytest.raises(RecognitionFailedError, match="HTTP 403"):
            adapter.recognize(png_document)

    def test_invalid_json(self, png_document: Document) -> None:
        adapter = _make_adapter(lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(RecognitionFailedError, match="invalid JSON"):
            adapter.recognize(png_document)

    def test_timeout(self, png_document: Document) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(RecognitionTimeoutError, match="timed out"):
            _make_adapter(handler).recognize(png_document)

    def test_unreachable_is_network_error(self, png_document: Document) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(RecognitionNetworkError, match="network error"):
            _make_adapter(handler).recognize(png_document)

    def test_network_error_counts_as_recognition_failure(self) -> None:
        assert issubclass(RecognitionNetworkError, RecognitionFailedError)

    def test_undecodable_body_is_network_error(self, png_document: Document) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, headers={"content-encoding": "gzip"}, content=b"not gzip"
            )

        with pytest.raises(RecognitionNetworkError, match="request failed"):
            _make_adapter(handler).recognize(png_document)

    def test_redirect_loop_is_network_error(self, png_document: Document) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=request)

        with pytest.raises(RecognitionNetworkError, match="redirects"):
            _make_adapter(handler).recognize(png_document)
