import re
import secrets
import time
from pathlib import Path, PurePosixPath, PureWindowsPath

from docanalyzer.logging.logger import Log
from docanalyzer.processor.exceptions import StorageError

_DISALLOWED_CHARS = re.compile(r"[^a-zA-Z0-9.\-_]")
_MAX_NAME_LENGTH = 80


def sanitize_filename(original_name: str) -> str:
    """Strip directories, replace unsafe characters and keep the last 80 chars."""
    base = PureWindowsPath(PurePosixPath(original_name).name).name
    safe = _DISALLOWED_CHARS.sub("_", base)[-_MAX_NAME_LENGTH:]
    return safe or f"file_{int(time.time() * 1000)}"


class LocalFileStorage:
    """Writes uploads under a root directory with collision-free names."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def store(self, original_name: str, content: bytes) -> Path:
        """Write ``content`` as ``<ms>-<12 hex>-<sanitized name>`` and return its path.

        Raises:
            StorageError: if the directory or file cannot be written.
        """
        stored_name = (
            f"{int(time.time() * 1000)}-{secrets.token_hex(6)}-{sanitize_filename(original_name)}"
        )
        path = self._root / stored_name
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
        except OSError as exc:
            Log.error(f"Failed to store file on disk: {exc}", path=path)
            raise StorageError("Failed to store uploaded file.") from exc
        return path

    def delete(self, path: Path) -> bool:
        """Remove a stored file. Failures are logged, never raised."""
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            Log.warning(f"Failed to delete stored file: {exc}", path=path)
            return False
        return True
