import io
from pathlib import Path

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from app.documents.models import Document

_SETTINGS_ENV_VARS = (
    "OPENAI_API_KEY",
    "EXTRACTION_API_KEY",
    "EXTRACTION_PROVIDER",
    "EXTRACTION_BASE_URL",
    "OCR_SPACE_API_KEY",
    "DEFAULT_BACKEND_POLICY",
    "PDF_ENGINE",
)


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep a developer's shell variables and .env file out of Settings()."""
    for var in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "TOTAL: 42.50")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    """A small blank PNG; OCR calls are patched so its pixels never matter."""
    buf = io.BytesIO()
    Image.new("RGB", (120, 60), "white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def png_document(png_bytes: bytes) -> Document:
    return Document.from_bytes(png_bytes, name="receipt.png")
