from typing import ClassVar

from app.config.settings import Settings
from app.extraction.client_base import BaseCompletionClient
from app.extraction.example_client_adapter import ExampleClientAdapter
from app.extraction.extractor import StructuredDataExtractor
from app.extraction.openai_client_adapter import OpenAIClientAdapter
from app.logging.logger import Log


class StructuredExtractorFactory:
    """Creates the structured extractor for the configured AI provider."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }
    KEYLESS_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"example", "ollama"})

    @classmethod
    def create(cls, settings: Settings) -> StructuredDataExtractor:
        """Create an extractor; it has no client when the key is missing."""
        provider = settings.extraction_provider.lower()
        base_url = cls._resolve_base_url(provider, settings)
        return StructuredDataExtractor(
            client=cls._create_client(provider, base_url, settings),
            model=settings.extraction_model_name,
            temperature=settings.extraction_temperature,
            max_tokens=settings.extraction_max_tokens,
        )

    @classmethod
    def _create_client(
        cls,
        provider: str,
        base_url: str | None,
        settings: Settings,
    ) -> BaseCompletionClient | None:
        if provider == "example":
            return ExampleClientAdapter()
        if not settings.extraction_configured and provider not in cls.KEYLESS_PROVIDERS:
            Log.info(f"No API key for extraction provider '{provider}', AI extraction disabled")
            return None
        return OpenAIClientAdapter(
            # the SDK rejects an empty key even for servers that ignore it
            api_key=settings.extraction_api_key or provider,
            timeout_seconds=settings.extraction_timeout_seconds,
            base_url=base_url,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider in ("openai", "example"):
            return settings.extraction_base_url.strip() or None
        if provider == "openai_compatible":
            url = settings.extraction_base_url.strip()
            if not url:
                raise ValueError(
                    "extraction_base_url is required for "
                    "extraction_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return settings.extraction_base_url.strip() or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown extraction provider '{provider}'. Choose from: {supported}"
        )
