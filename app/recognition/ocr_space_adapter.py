import httpx

from app.documents.models import Document
from app.logging.logger import Log
from app.recognition.base import BaseRecognitionBackend
from app.recognition.exceptions import (
    BackendUnavailableError,
    RecognitionFailedError,
    RecognitionNetworkError,
    RecognitionTimeoutError,
)
from app.recognition.models import RecognitionOutcome

_FILETYPES = {
    "application/pdf": "PDF",
    "image/jpeg": "JPG",
    "image/png": "PNG",
    "image/gif": "GIF",
    "image/bmp": "BMP",
    "image/tiff": "TIF",
}


class OcrSpaceAdapter(BaseRecognitionBackend):
    """Remote OCR backend built on the OCR.space parse API."""

    name = "ocrspace"

    def __init__(
        self,
        *,
        api_key: str,
        url: str,
        language: str = "eng",
        engine: int = 1,
        timeout_seconds: int = 30,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key.strip()
        self._url = url
        self._language = language
        self._engine = engine
        self._client = http_client or httpx.Client(timeout=timeout_seconds)

    @property
    def available(self) -> bool:
        return bool(self._api_key)

    def recognize(self, document: Document) -> RecognitionOutcome:
        if not self.available:
            raise BackendUnavailableError("OCR_SPACE_API_KEY is not configured")

        payload = self._post(document)
        if payload.get("IsErroredOnProcessing"):
            raise RecognitionFailedError(
                f"OCR.space processing error: {self._error_message(payload)}"
            )

        results = payload.get("ParsedResults")
        if not isinstance(results, list) or not results:
            raise RecognitionFailedError("No text found in image")
        if len(results) > 1:
            Log.debug(f"OCR.space returned {len(results)} results, using the first")
        first = results[0] if isinstance(results[0], dict) else {}
        text = str(first.get("ParsedText") or "")
        if not text.strip():
            raise RecognitionFailedError("No text found in image")
        return RecognitionOutcome(raw_text=text, backend=self.name)

    def _post(self, document: Document) -> dict[str, object]:
        data = {
            "apikey": self._api_key,
            "language": self._language,
            "isOverlayRequired": "false",
            "OCREngine": str(self._engine),
        }
        filetype = _FILETYPES.get(document.mime_type)
        if filetype:
            data["filetype"] = filetype
        files = {"file": (document.name, document.read_bytes(), document.mime_type)}

        try:
            response = self._client.post(self._url, data=data, files=files)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise RecognitionTimeoutError(f"OCR.space request timed out: {exc}") from exc
        except httpx.HTTPStatusError as exc:
            raise RecognitionFailedError(
                f"OCR.space returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.TransportError as exc:
            raise RecognitionNetworkError(f"OCR.space network error: {exc}") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            # undecodable body, redirect loop, malformed endpoint URL
            raise RecognitionNetworkError(f"OCR.space request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise RecognitionFailedError(f"OCR.space returned invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            # the API answers quota and auth problems with a bare string
            raise RecognitionFailedError(f"OCR.space error: {payload}")
        return payload

    @staticmethod
    def _error_message(payload: dict[str, object]) -> str:
        message = payload.get("ErrorMessage") or "unknown error"
        if isinstance(message, list):
            return "; ".join(str(m) for m in message)
        return str(message)
