from dataclasses import dataclass
from pathlib import Path

PDF_MIME_TYPE = "application/pdf"
DEFAULT_MIME_TYPE = "application/octet-stream"

MIME_TYPES_BY_EXTENSION: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".tiff": "image/tiff",
    ".tif": "image/tiff",
    ".pdf": PDF_MIME_TYPE,
}


def guess_mime_type(name: str) -> str:
    """Map a file name to a MIME type by extension."""
    return MIME_TYPES_BY_EXTENSION.get(Path(name).suffix.lower(), DEFAULT_MIME_TYPE)


@dataclass(frozen=True)
class Document:
    """Read-only handle to an uploaded image or PDF.

    Exactly one of ``path`` and ``content`` is set. The pipeline only reads
    the document; moving or deleting the file belongs to the caller.
    """

    name: str
    mime_type: str
    size_bytes: int
    path: Path | None = None
    content: bytes | None = None

    @classmethod
    def from_path(cls, path: Path | str, mime_type: str | None = None) -> "Document":
        path = Path(path)
        size = path.stat().st_size if path.is_file() else 0
        return cls(
            name=path.name,
            mime_type=mime_type or guess_mime_type(path.name),
            size_bytes=size,
            path=path,
        )

    @classmethod
    def from_bytes(
        cls,
        content: bytes,
        name: str,
        mime_type: str | None = None,
    ) -> "Document":
        return cls(
            name=name,
            mime_type=mime_type or guess_mime_type(name),
            size_bytes=len(content),
            content=content,
        )

    @property
    def is_pdf(self) -> bool:
        return self.mime_type == PDF_MIME_TYPE

    def exists(self) -> bool:
        if self.content is not None:
            return True
        return self.path is not None and self.path.is_file()

    def read_bytes(self) -> bytes:
        """Return the document bytes.

        Raises:
            FileNotFoundError: if a path-backed document no longer exists.
        """
        if self.content is not None:
            return self.content
        if self.path is None or not self.path.is_file():
            raise FileNotFoundError(f"File not found: {self.path}")
        return self.path.read_bytes()
