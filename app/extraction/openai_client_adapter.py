import httpx
import openai

from app.extraction.client_base import BaseCompletionClient
from app.extraction.exceptions import EmptyResponseError, ExtractionNetworkError


class OpenAIClientAdapter(BaseCompletionClient):
    """Completion client for OpenAI and OpenAI-compatible chat APIs.

    The SDK's own retries are disabled: a receipt gets exactly one request.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
                response_format=_receipt_response_format(json_schema),
                messages=messages,  # type: ignore[arg-type]
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExtractionNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIStatusError as exc:
            raise ExtractionNetworkError(
                f"AI provider API error: HTTP {exc.status_code}: {exc.message}"
            ) from exc
        except openai.APIError as exc:
            raise ExtractionNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise EmptyResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise EmptyResponseError("AI returned empty response")
        return content


def _receipt_response_format(json_schema: dict[str, object]) -> dict[str, object]:
    return {
        "type": "json_schema",
        "json_schema": {"name": "receipt", "strict": True, "schema": json_schema},
    }
