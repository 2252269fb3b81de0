from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Protocol


class DocumentCache(Protocol):
    def check_writable(self, directory: Path) -> None: ...

    def exists(self, path: Path) -> bool: ...

    def is_fresh(self, path: Path, *, ttl_seconds: int, now: datetime) -> bool: ...

    def read(self, path: Path) -> bytes: ...

    def write(self, path: Path, data: bytes) -> None: ...
