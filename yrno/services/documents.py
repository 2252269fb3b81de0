from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from yrno.clients.yrno import YrNoClient
from yrno.core.errors import ServiceUnavailableError
from yrno.repositories.cache import DocumentCache

logger = logging.getLogger(__name__)


class DocumentFetcher:
    def __init__(self, *, client: YrNoClient, cache: DocumentCache) -> None:
        self._client = client
        self._cache = cache

    def fetch_with_cache(
        self,
        url: str,
        path: Path,
        ttl_seconds: int,
        *,
        now: datetime | None = None,
    ) -> bytes:
        """Return the cached document while fresh, otherwise refetch it.

        A failed or empty download falls back to the stale cached copy.
        """
        now = now or datetime.now(tz=timezone.utc)
        if self._cache.is_fresh(path, ttl_seconds=ttl_seconds, now=now):
            logger.debug("Using cached %s", path)
            return self._cache.read(path)

        body = self._client.fetch(url)
        if body:
            self._cache.write(path, body)
            return body

        if self._cache.exists(path):
            logger.warning("Nothing fetched from %s, using stale cache %s", url, path)
            return self._cache.read(path)

        raise ServiceUnavailableError(f"No data from {url} and no cached copy at {path}")
