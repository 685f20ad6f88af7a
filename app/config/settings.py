from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_document_size_bytes: int = 10 * 1024 * 1024
    default_backend_policy: str = "auto"

    tesseract_languages: str = "eng+vie"
    tesseract_cmd: str = ""
    tesseract_timeout_seconds: int = 60
    pdf_engine: str = "pymupdf"
    pdf_render_dpi: int = 300

    ocr_space_api_key: str = ""
    ocr_space_url: str = "https://api.ocr.space/parse/image"
    ocr_space_language: str = "eng"
    ocr_space_engine: int = 1
    ocr_space_timeout_seconds: int = 30

    extraction_provider: str = "openai"
    extraction_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("extraction_api_key", "openai_api_key"),
    )
    extraction_model_name: str = "gpt-4o-mini"
    extraction_base_url: str = ""
    extraction_timeout_seconds: int = 30
    extraction_temperature: float = 0.1
    extraction_max_tokens: int = 1000

    @property
    def ocr_space_configured(self) -> bool:
        """Whether a remote recognition credential is present."""
        return bool(self.ocr_space_api_key.strip())

    @property
    def extraction_configured(self) -> bool:
        """Whether a completion backend credential is present."""
        return bool(self.extraction_api_key.strip())
