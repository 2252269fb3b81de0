from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from yrno.clients.yrno import HOURLY_DOCUMENT, PERIODIC_DOCUMENT
from yrno.core.config import Settings
from yrno.models.location import Location
from yrno.services.assembly import build_location_from_xml
from tests.fakes import FakeYrNoClient, InMemoryDocumentCache

FIXTURE_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture()
def periodic_xml() -> bytes:
    return (FIXTURE_DIR / "periodic.xml").read_bytes()


@pytest.fixture()
def hourly_xml() -> bytes:
    return (FIXTURE_DIR / "hourly.xml").read_bytes()


@pytest.fixture()
def location(periodic_xml: bytes, hourly_xml: bytes) -> Location:
    return build_location_from_xml(periodic_xml, hourly_xml)


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        _env_file=None,
        api_url="http://yr.test/",
        user_agent="test-agent",
        timeout_seconds=1.0,
        probe_attempts=3,
        cache_path=None,
        cache_ttl_minutes=10,
        cache_prefix="yrno_",
        language="english",
    )


@pytest.fixture()
def fake_client(periodic_xml: bytes, hourly_xml: bytes) -> FakeYrNoClient:
    return FakeYrNoClient(
        documents={
            f"/{HOURLY_DOCUMENT}": hourly_xml,
            f"/{PERIODIC_DOCUMENT}": periodic_xml,
        }
    )


@pytest.fixture()
def memory_cache() -> InMemoryDocumentCache:
    return InMemoryDocumentCache()


@pytest.fixture()
def morning() -> datetime:
    return datetime(2014, 3, 7, 9, 0, 0)
