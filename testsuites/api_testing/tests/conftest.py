"""
================================================================================
API Testing Pytest Configuration
================================================================================

Shared fixtures for the QADemo REST API suite.

Fixtures:
    - config: Configuration loader instance
    - http_client: Configured HTTP client for API requests
    - api: QADemoApi facade over the client
    - session_id: Cart session identifier (X-Session-ID)
    - order_flow_state: State shared by the serial order-flow steps

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Generator

import allure
import pytest

from testsuites.api_testing.framework import ConfigLoader, HttpClient, QADemoApi, TokenManager


# =============================================================================
# Session-Scoped Fixtures (Shared across all tests)
# =============================================================================

@pytest.fixture(scope="session")
def config() -> ConfigLoader:
    """
    Provide configuration loader instance.

    Session-scoped to ensure configuration is loaded only once.
    """
    return ConfigLoader()


@pytest.fixture(scope="session")
def base_url(config: ConfigLoader) -> str:
    """Get API base URL from configuration."""
    return config.get("api.base_url", "https://qademo.com/api")


@pytest.fixture(scope="session")
def token_manager(config: ConfigLoader) -> Generator[TokenManager, None, None]:
    """
    Login cache for this worker.

    The file cache is left in place on teardown: every xdist worker reads
    it, and expired tokens are refreshed on use.
    """
    yield TokenManager.instance(config)
    TokenManager.reset(clear_cache=False)


# =============================================================================
# Function-Scoped Fixtures (Fresh for each test)
# =============================================================================

@pytest.fixture
def http_client(config: ConfigLoader, token_manager: TokenManager) -> Generator[HttpClient, None, None]:
    """
    Provide configured HTTP client for API requests.

    Usage:
        def test_example(http_client):
            response = http_client.get("/products/id/1")
            assert response.status_code == 200
    """
    with HttpClient(config) as client:
        yield client


@pytest.fixture
def api(http_client: HttpClient) -> QADemoApi:
    return QADemoApi(http_client)


# =============================================================================
# Order Flow State
# =============================================================================

@pytest.fixture(scope="session")
def session_id() -> str:
    """
    One anonymous cart for the whole run, like a browser tab keeping its
    cart between pages.
    """
    return str(uuid.uuid4())


@pytest.fixture(scope="module")
def order_flow_state(session_id: str) -> Dict[str, Any]:
    """
    Mutable state carried from one order-flow step to the next
    (cart, order id, initial stock).
    """
    return {"session_id": session_id}


# =============================================================================
# Allure Reporting Hooks
# =============================================================================

def pytest_exception_interact(node, call, report):
    """Attach additional info on test failure."""
    if report.failed:
        allure.attach(
            str(call.excinfo.value),
            name="Error Details",
            attachment_type=allure.attachment_type.TEXT
        )
