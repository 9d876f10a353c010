from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class UploadedFile:
    """A decoded multipart upload.

    Only ``content`` and the extension of ``filename`` are trusted; the
    declared MIME type and size are client-supplied.
    """

    content: bytes
    filename: str
    mime_type: str = "application/octet-stream"
    size: int | None = None

    @property
    def byte_size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Path, mime_type: str | None = None) -> "UploadedFile":
        content = path.read_bytes()
        return cls(
            content=content,
            filename=path.name,
            mime_type=mime_type or "application/octet-stream",
            size=len(content),
        )
