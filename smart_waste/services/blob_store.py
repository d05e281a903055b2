"""
Filesystem storage for uploaded images.

Files are named "<epoch millis>-<original name>". Two uploads of the same name
within the same millisecond would collide; that window is accepted.
"""

import os
import re
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional

from ..core.logger import get_logger

_logger = get_logger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class StoredBlob:
    """Location of a stored file."""
    name: str
    path: str


def _safe_name(filename: Optional[str]) -> str:
    base = os.path.basename((filename or "").replace("\\", "/"))
    base = _UNSAFE_CHARS.sub("_", base).strip("._")
    return base or "image"


# PUBLIC_INTERFACE
class BlobStore:
    """Stores uploaded files under a single directory."""

    def __init__(self, directory: str):
        self.directory = Path(directory)

    def ensure_dir(self) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)

    def save(self, stream: BinaryIO, filename: Optional[str]) -> StoredBlob:
        """Copy the stream into the directory under a timestamped name."""
        self.ensure_dir()
        name = f"{int(time.time() * 1000)}-{_safe_name(filename)}"
        target = self.directory / name
        with target.open("wb") as out:
            shutil.copyfileobj(stream, out)
        _logger.info("Stored upload", extra={"blob": name, "bytes": target.stat().st_size})
        return StoredBlob(name=name, path=str(target))

    def exists(self, path: Optional[str]) -> bool:
        return bool(path) and os.path.isfile(path)

    def remove(self, path: Optional[str]) -> bool:
        """Delete a stored file if present.

        Returns True when a file was removed. Failures are logged, not raised.
        """
        if not self.exists(path):
            return False
        try:
            os.remove(path)
            return True
        except OSError as exc:
            _logger.warning("Could not remove stored file", extra={"path": path, "error": str(exc)})
            return False
