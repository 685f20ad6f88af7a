import re

_LINE_ENDINGS = re.compile(r"\r\n?")
_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")
_WHITESPACE_RUN = re.compile(r"\s+")


class TextNormalizer:
    """Deterministic cleanup of raw OCR text.

    The steps run in a fixed order. The whitespace collapse in step 3 also
    folds the paragraph breaks kept by step 2, so the output is always a
    single line; callers rely on that.
    """

    def normalize(self, raw_text: str) -> str:
        text = _LINE_ENDINGS.sub("\n", raw_text)
        text = _EXCESS_BLANK_LINES.sub("\n\n", text)
        text = _WHITESPACE_RUN.sub(" ", text)
        return text.strip()
