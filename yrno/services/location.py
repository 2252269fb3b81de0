from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path

import httpx

from yrno.clients.yrno import (
    HOURLY_DOCUMENT,
    PERIODIC_DOCUMENT,
    ServiceStatus,
    YrNoClient,
)
from yrno.core.config import DEFAULT_API_URL, Settings, load_settings
from yrno.core.errors import InvalidArgumentError, ServiceUnavailableError
from yrno.models.location import Location
from yrno.repositories.cache import DocumentCache
from yrno.repositories.file_cache import FileDocumentCache
from yrno.services.assembly import build_location_from_xml
from yrno.services.documents import DocumentFetcher

logger = logging.getLogger(__name__)

DEFAULT_PLACE_PATH = "place/"

LANGUAGE_PATHS: dict[str, str] = {
    "english": "place/",
    "norwegian": "sted/",
    "bokmal": "sted/",
    "newnorwegian": "stad/",
    "neonorwegian": "stad/",
    "nynorsk": "stad/",
    "sami": "sadji/",
    "northernsami": "sadji/",
    "kven": "paikka/",
}


def api_url_for_language(language: str | None, *, api_url: str = DEFAULT_API_URL) -> str:
    """Base URL of the place pages for ``language``; unknown languages get English."""
    key = (language or "").strip().lower().replace(" ", "").replace("-", "")
    if not api_url.endswith("/"):
        api_url += "/"
    return api_url + LANGUAGE_PATHS.get(key, DEFAULT_PLACE_PATH)


@dataclass(frozen=True)
class CachePaths:
    periodic: Path
    hourly: Path


def cache_paths_for(cache_dir: Path, base_url: str, location: str, *, prefix: str) -> CachePaths:
    digest = hashlib.md5((base_url + location).encode("utf-8")).hexdigest()
    return CachePaths(
        periodic=cache_dir / f"{prefix}{digest}_periodic.xml",
        hourly=cache_dir / f"{prefix}{digest}_hourly.xml",
    )


class LocationService:
    def __init__(
        self,
        *,
        client: YrNoClient,
        cache: DocumentCache,
        settings: Settings | None = None,
    ) -> None:
        self._client = client
        self._cache = cache
        self._settings = settings or load_settings()
        self._fetcher = DocumentFetcher(client=client, cache=cache)

    def build_location(
        self,
        location: str,
        *,
        cache_path: str | Path | None = None,
        cache_ttl_minutes: int | None = None,
        language: str | None = None,
    ) -> Location:
        """Fetch (or reuse cached) documents for ``location`` and assemble them.

        ``location`` is the place path as used on yr.no, for example
        ``"Norway/Vestfold/Sandefjord/Sandefjord"``.
        """
        location = (location or "").strip().strip("/")
        if not location:
            raise InvalidArgumentError("Location need to be set")

        cache_path = cache_path or self._settings.cache_path
        if not cache_path:
            raise InvalidArgumentError("Cache path need to be set")

        ttl_minutes = (
            self._settings.cache_ttl_minutes if cache_ttl_minutes is None else cache_ttl_minutes
        )
        if ttl_minutes < 0:
            raise InvalidArgumentError("Cache TTL can not be negative")

        cache_dir = Path(cache_path).expanduser().resolve()
        self._cache.check_writable(cache_dir)

        base_url = api_url_for_language(
            language or self._settings.language, api_url=self._settings.base_url
        )
        paths = cache_paths_for(
            cache_dir, base_url, location, prefix=self._settings.cache_prefix
        )
        url_root = f"{base_url}{location}"

        # Without a cache, a bad place path would otherwise surface as an XML error
        if not self._cache.exists(paths.periodic) or not self._cache.exists(paths.hourly):
            status = self._client.probe_location(url_root)
            if status is ServiceStatus.LOCATION_INVALID:
                raise ServiceUnavailableError(
                    f"The location ({location}) is wrong, use the place path from yr.no",
                    status=status,
                )
            if status is ServiceStatus.UNKNOWN:
                raise ServiceUnavailableError(
                    "Could not connect to the yr service; the location may be invalid "
                    "or the service may be down",
                    status=status,
                )

        ttl_seconds = ttl_minutes * 60
        periodic_xml = self._fetcher.fetch_with_cache(
            f"{url_root}/{PERIODIC_DOCUMENT}", paths.periodic, ttl_seconds
        )
        hourly_xml = self._fetcher.fetch_with_cache(
            f"{url_root}/{HOURLY_DOCUMENT}", paths.hourly, ttl_seconds
        )
        logger.debug("Building location %s from %s", location, url_root)
        return build_location_from_xml(periodic_xml, hourly_xml)


def build_location(
    location: str,
    cache_path: str | Path | None = None,
    cache_ttl_minutes: int | None = None,
    language: str | None = None,
    *,
    settings: Settings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> Location:
    settings = settings or load_settings()
    client = YrNoClient(
        user_agent=settings.user_agent,
        timeout_seconds=settings.timeout_seconds,
        probe_attempts=settings.probe_attempts,
        transport=transport,
    )
    try:
        service = LocationService(client=client, cache=FileDocumentCache(), settings=settings)
        return service.build_location(
            location,
            cache_path=cache_path,
            cache_ttl_minutes=cache_ttl_minutes,
            language=language,
        )
    finally:
        client.close()
