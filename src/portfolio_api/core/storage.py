"""
Image storage abstraction: local filesystem for serving, in-memory for tests.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol
from urllib.parse import urlparse

from src.portfolio_api.core.logging import get_logger

logger = get_logger(__name__)


class ImageStorage(Protocol):
    """Defines the operations the API needs from image storage."""

    def store(self, filename: str, data: bytes) -> str:
        """Persist ``data`` under ``filename`` and return its public path."""
        ...

    def delete(self, path: str) -> bool:
        """Remove the file behind a public path. Returns False if there was none."""
        ...


@dataclass
class LocalImageStorage:
    """Stores images in a directory served under ``url_prefix``."""

    root: Path
    url_prefix: str = "/uploads"

    def __post_init__(self):
        self.root = Path(self.root)
        self.url_prefix = "/" + self.url_prefix.strip("/")

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def store(self, filename: str, data: bytes) -> str:
        self.ensure_root()
        target = self._resolve(filename)
        if target is None:
            raise ValueError(f"Refusing to store outside upload directory: {filename!r}")
        target.write_bytes(data)
        return f"{self.url_prefix}/{target.name}"

    def delete(self, path: str) -> bool:
        filename = self._filename_from_path(path)
        if filename is None:
            return False
        target = self._resolve(filename)
        if target is None or not target.is_file():
            return False
        target.unlink()
        logger.info("Deleted image file", path=str(target))
        return True

    def _filename_from_path(self, path: str) -> str | None:
        # Accepts "/uploads/x.png" as well as absolute URLs pointing at it
        try:
            url_path = urlparse(path).path
        except ValueError:
            return None
        prefix = self.url_prefix + "/"
        if not url_path.startswith(prefix):
            return None
        return url_path[len(prefix) :] or None

    def _resolve(self, filename: str) -> Path | None:
        if "/" in filename or "\\" in filename or filename in (".", ".."):
            return None
        root = self.root.resolve()
        try:
            target = (root / filename).resolve()
        except (OSError, ValueError):
            return None
        if target.parent != root:
            return None
        return target


@dataclass
class InMemoryImageStorage:
    """Test double for storage interactions."""

    url_prefix: str = "/uploads"
    stored_objects: dict[str, bytes] = field(default_factory=dict)
    fail_deletes: bool = False

    def store(self, filename: str, data: bytes) -> str:
        path = f"{self.url_prefix}/{filename}"
        self.stored_objects[path] = data
        return path

    def delete(self, path: str) -> bool:
        if self.fail_deletes:
            raise OSError(f"Simulated delete failure for {path}")
        return self.stored_objects.pop(path, None) is not None
