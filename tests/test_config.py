from __future__ import annotations

import pytest
from pydantic import ValidationError

from yrno.core.config import Settings


def test_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.base_url == "http://www.yr.no/"
    assert settings.cache_ttl_minutes == 10
    assert settings.probe_attempts == 7
    assert settings.language == "english"
    assert settings.cache_path is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("YRNO_CACHE_TTL_MINUTES", "5")
    monkeypatch.setenv("YRNO_CACHE_PATH", "/var/cache/yr")
    monkeypatch.setenv("YRNO_LANGUAGE", "nynorsk")
    settings = Settings(_env_file=None)
    assert settings.cache_ttl_minutes == 5
    assert settings.cache_path == "/var/cache/yr"
    assert settings.language == "nynorsk"


def test_invalid_values() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, probe_attempts=0)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, cache_ttl_minutes=-1)
