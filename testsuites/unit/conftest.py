"""Offline fixtures for framework unit tests: no browser, no network."""

import pytest

from testsuites.api_testing.framework.config_loader import ConfigLoader
from testsuites.api_testing.framework import token_manager as token_module
from testsuites.api_testing.framework.token_manager import TokenManager

from .fakes import DummyConfig


@pytest.fixture
def dummy_config() -> DummyConfig:
    return DummyConfig(
        {
            "api.base_url": "https://qademo.test/api",
            "api.timeout": 5,
            "api.retry_count": 2,
            "api.retry_backoff": 0.0,
            "api.retry_max_wait": 0.0,
        }
    )


@pytest.fixture
def token_cache(monkeypatch, tmp_path):
    """Point the token file cache at a temp directory and reset the singleton."""
    cache_dir = tmp_path / "token_cache"
    monkeypatch.setattr(token_module, "TOKEN_CACHE_DIR", cache_dir)
    monkeypatch.setattr(token_module, "TOKEN_CACHE_FILE", cache_dir / "cache.json")
    monkeypatch.setattr(token_module, "TOKEN_LOCK_FILE", cache_dir / "cache.lock")
    cache_dir.mkdir(parents=True, exist_ok=True)
    TokenManager.reset()
    yield cache_dir
    TokenManager.reset()


@pytest.fixture(autouse=True)
def isolated_config():
    """Tests that build a ConfigLoader from a temp file must not leak it."""
    yield
    ConfigLoader.reset()
