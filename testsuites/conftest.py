"""
================================================================================
Test Suites Pytest Configuration
================================================================================

Registers the project markers and tags each collected test with its domain
(``ui``, ``api`` or ``unit``) from the directory it lives in.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "p1: Critical path tests (login, add to cart, checkout)"
    )
    config.addinivalue_line(
        "markers", "p2: Core functionality tests"
    )
    config.addinivalue_line(
        "markers", "p3: Extended coverage tests"
    )
    config.addinivalue_line(
        "markers", "p4: Edge case and cosmetic tests"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )
    config.addinivalue_line(
        "markers", "setup: Authentication setup (storage state generation)"
    )
    config.addinivalue_line(
        "markers", "agent: Exploratory seed flows"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "api: API-specific tests"
    )
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )
    config.addinivalue_line(
        "markers", "unit: Offline framework tests"
    )

    # Feature markers
    for feature, description in (
        ("auth", "Authentication"),
        ("cart", "Shopping cart"),
        ("catalog", "Product catalog and detail"),
        ("checkout", "Checkout flow"),
        ("orders", "Order history and detail"),
        ("admin", "Admin dashboard and admin API"),
        ("navigation", "Navbar and footer navigation"),
    ):
        config.addinivalue_line("markers", f"{feature}: {description}")

    # Dependency markers
    config.addinivalue_line(
        "markers", "requires_external: Tests requiring the live QADemo deployment"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-add the domain marker from the test's directory."""
    for item in items:
        path = str(item.fspath)
        if "api_testing" in path:
            item.add_marker(pytest.mark.api)
        elif "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
        elif "unit" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "QADemo E2E Automation",
        "=" * 60,
        "",
    ]
