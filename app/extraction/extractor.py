"""AI-powered receipt field extractor."""

import json
from decimal import Decimal
from pathlib import Path

from app.extraction.base import BaseStructuredExtractor
from app.extraction.client_base import BaseCompletionClient
from app.extraction.exceptions import (
    EmptyResponseError,
    ExtractionUnavailableError,
    MalformedResponseError,
)
from app.extraction.models import StructuredReceipt
from app.extraction.prompt_loader import load_json_schema, load_prompt_template
from app.extraction.validator import validate_and_build
from app.logging.logger import Log

_MAX_TEMPERATURE = 0.2


class StructuredDataExtractor(BaseStructuredExtractor):
    """Extracts receipt fields from OCR text with one completion call.

    Built without a client when no credential is configured; it then reports
    itself unavailable and refuses to extract.
    """

    def __init__(
        self,
        *,
        client: BaseCompletionClient | None,
        model: str,
        temperature: float = 0.1,
        max_tokens: int = 1000,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = "You extract structured data from receipts and invoices.",
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(_MAX_TEMPERATURE, temperature))
        self._max_tokens = max_tokens
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)

    @property
    def available(self) -> bool:
        return self._client is not None

    def extract(self, text: str) -> StructuredReceipt:
        if self._client is None:
            raise ExtractionUnavailableError("AI extraction API key not configured")

        prompt = self._build_prompt(text)
        if Log.is_debug():
            Log.debug(f"Extraction prompt:\n{prompt}")

        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._json_schema_dict,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        if not raw_response or not raw_response.strip():
            raise EmptyResponseError("No response from AI")
        result = validate_and_build(self._parse_json(raw_response))

        Log.info(f"Structured extraction complete: {len(result.items)} items")
        return result

    def _build_prompt(self, text: str) -> str:
        return self._prompt_template.format(
            ocr_text=text,
            json_schema=self._json_schema,
        )

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines)

        try:
            parsed = json.loads(cleaned, parse_float=Decimal, parse_constant=_reject_constant)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(f"Invalid JSON response from AI: {exc}") from exc

        if not isinstance(parsed, dict):
            raise MalformedResponseError("JSON response must be an object")
        return parsed


def _reject_constant(name: str) -> object:
    raise MalformedResponseError(f"Invalid JSON response from AI: {name} is not a number")
