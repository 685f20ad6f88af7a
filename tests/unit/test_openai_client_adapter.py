from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from app.extraction.exceptions import EmptyResponseError, ExtractionNetworkError
from app.extraction.openai_client_adapter import OpenAIClientAdapter

_SCHEMA = {"type": "object"}


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _complete(adapter: OpenAIClientAdapter) -> str:
    return adapter.create_chat_completion(
        model="m",
        temperature=0.1,
        max_tokens=1000,
        system_prompt="system",
        user_prompt="user",
        json_schema=_SCHEMA,
    )


def _make_adapter(mock_client: MagicMock) -> OpenAIClientAdapter:
    with patch(
        "app.extraction.openai_client_adapter.openai.OpenAI",
        return_value=mock_client,
    ):
        return OpenAIClientAdapter(api_key="k", timeout_seconds=30, base_url=None)


class TestOpenAIClientAdapter:
    def test_returns_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response('{"ok": true}')
        adapter = _make_adapter(mock_client)
        assert _complete(adapter) == '{"ok": true}'

    def test_sends_schema_and_limits(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("{}")
        adapter = _make_adapter(mock_client)
        _complete(adapter)

        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "m"
        assert kwargs["temperature"] == 0.1
        assert kwargs["max_tokens"] == 1000
        assert kwargs["response_format"]["type"] == "json_schema"
        assert kwargs["response_format"]["json_schema"]["schema"] == _SCHEMA
        assert kwargs["messages"][0] == {"role": "system", "content": "system"}
        assert kwargs["messages"][1] == {"role": "user", "content": "user"}

    def test_client_is_built_without_retries(self) -> None:
        with patch("app.extraction.openai_client_adapter.openai.OpenAI") as mock_cls:
            OpenAIClientAdapter(api_key="k", timeout_seconds=12, base_url="http://x/v1")
        mock_cls.assert_called_once_with(
            api_key="k", timeout=12, base_url="http://x/v1", max_retries=0
        )

    def test_raises_error_for_empty_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(None)
        adapter = _make_adapter(mock_client)
        with pytest.raises(EmptyResponseError, match="empty response"):
            _complete(adapter)

    def test_raises_error_for_no_choices(self) -> None:
        mock_client = MagicMock()
        response = MagicMock()
        response.choices = []
        mock_client.chat.completions.create.return_value = response
        adapter = _make_adapter(mock_client)
        with pytest.raises(EmptyResponseError, match="no choices"):
            _complete(adapter)

    def test_raises_network_error_on_connection_failure(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=MagicMock()
        )
        adapter = _make_adapter(mock_client)
        with pytest.raises(ExtractionNetworkError, match="network error"):
            _complete(adapter)

    def test_raises_network_error_on_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = httpx.TimeoutException("timeout")
        adapter = _make_adapter(mock_client)
        with pytest.raises(ExtractionNetworkError, match="network error"):
            _complete(adapter)

    def test_raises_network_error_on_api_error(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIError(
            message="server error",
            request=MagicMock(),
            body=None,
        )
        adapter = _make_adapter(mock_client)
        with pytest.raises(ExtractionNetworkError, match="API error"):
            _complete(adapter)

    def test_status_error_reports_http_code(self) -> None:
        mock_client = MagicMock()
        response = httpx.Response(
            429, request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
        )
        mock_client.chat.completions.create.side_effect = openai.APIStatusError(
            "rate limited", response=response, body=None
        )
        adapter = _make_adapter(mock_client)
        with pytest.raises(ExtractionNetworkError, match="HTTP 429"):
            _complete(adapter)
