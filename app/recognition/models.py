from dataclasses import dataclass
from enum import Enum


class BackendPolicy(str, Enum):
    """Which recognition backend(s) a request may use."""

    LOCAL = "local"
    REMOTE = "remote"
    AUTO = "auto"

    @classmethod
    def parse(cls, value: "str | BackendPolicy") -> "BackendPolicy":
        """Resolve a policy name, accepting the legacy engine names.

        Raises:
            ValueError: if the name matches no policy.
        """
        if isinstance(value, cls):
            return value
        key = value.strip().lower()
        key = _LEGACY_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            choices = [p.value for p in cls] + sorted(_LEGACY_ALIASES)
            raise ValueError(
                f"Unknown backend policy '{value}'. Choose from: {choices}"
            ) from None


_LEGACY_ALIASES = {
    "tesseract": "local",
    "ocrspace": "remote",
    "both": "auto",
}


@dataclass(frozen=True)
class RecognitionOutcome:
    """Result of a single backend attempt."""

    raw_text: str
    confidence: float | None = None  # 0-100, local engine only
    elapsed_ms: int = 0
    backend: str = ""
