from __future__ import annotations

import logging
from enum import Enum

import httpx

from yrno.core.errors import ServiceUnavailableError

logger = logging.getLogger(__name__)

PERIODIC_DOCUMENT = "forecast.xml"
HOURLY_DOCUMENT = "forecast_hour_by_hour.xml"

XML_CONTENT_TYPES = ("text/xml", "application/xml")


class ServiceStatus(Enum):
    OK = "ok"
    LOCATION_INVALID = "location_invalid"
    UNKNOWN = "unknown"


class YrNoClient:
    def __init__(
        self,
        *,
        user_agent: str,
        timeout_seconds: float,
        probe_attempts: int = 7,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._probe_attempts = max(int(probe_attempts), 1)
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers={
                "User-Agent": user_agent,
                "Accept": "text/xml, application/xml",
            },
            follow_redirects=True,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def probe(self, url: str) -> ServiceStatus:
        """Check that ``url`` serves an XML document.

        yr answers HTTP 500 for places nobody asked about for a while; the
        error goes away after a handful of requests, so 500 is retried.
        """
        for attempt in range(self._probe_attempts):
            try:
                resp = self._client.head(url)
            except httpx.TransportError as e:
                raise ServiceUnavailableError(
                    "Could not reach the yr service, check your internet connection"
                ) from e

            if resp.status_code == 500:
                logger.warning(
                    "yr %s returned 500, retrying (attempt %d/%d)",
                    url, attempt + 1, self._probe_attempts,
                )
                continue
            if resp.status_code == 404:
                return ServiceStatus.LOCATION_INVALID
            if resp.status_code == 200:
                # 200 with html is what yr serves for a malformed place path
                if _is_xml(resp):
                    return ServiceStatus.OK
                return ServiceStatus.LOCATION_INVALID

            logger.warning("yr %s returned unexpected status %d", url, resp.status_code)

        return ServiceStatus.UNKNOWN

    def probe_location(self, url_root: str) -> ServiceStatus:
        hourly = self.probe(f"{url_root}/{HOURLY_DOCUMENT}")
        if hourly is not ServiceStatus.OK:
            return hourly
        return self.probe(f"{url_root}/{PERIODIC_DOCUMENT}")

    def fetch(self, url: str) -> bytes:
        """Download a document; an empty result means nothing usable came back."""
        try:
            resp = self._client.get(url)
            resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Fetching %s failed: %s", url, e)
            return b""
        return resp.content


def _is_xml(resp: httpx.Response) -> bool:
    content_type = resp.headers.get("content-type", "")
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type in XML_CONTENT_TYPES
