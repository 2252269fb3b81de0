from __future__ import annotations

import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path

from yrno.core.errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class FileDocumentCache:
    """Flat file cache; a file is fresh while its mtime is within the TTL."""

    def check_writable(self, directory: Path) -> None:
        if not directory.is_dir() or not os.access(directory, os.W_OK):
            raise InvalidArgumentError(f"Cache path ({directory}) is not writable")

    def exists(self, path: Path) -> bool:
        return path.is_file()

    def is_fresh(self, path: Path, *, ttl_seconds: int, now: datetime) -> bool:
        try:
            mtime = path.stat().st_mtime
        except FileNotFoundError:
            return False
        return now.timestamp() - mtime <= ttl_seconds

    def read(self, path: Path) -> bytes:
        return path.read_bytes()

    def write(self, path: Path, data: bytes) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.debug("Cached %d bytes in %s", len(data), path)
