"""
Repository-level pytest configuration.

Responsibilities:
  - Configure loguru once per process (controller and every xdist worker)
  - ``--priority`` selection for the UI and API suites (default ``run.priorities``)
  - Liveness guard: tests marked ``requires_external`` are skipped when the
    QADemo deployment cannot be reached, unless ``--require-live`` is given

Browser choice and headed mode come from configuration (``UI_BROWSER``,
``UI_HEADLESS``), which ``run_tests.py`` sets from its own flags.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import httpx
import pytest
from loguru import logger

from autotest_tools.common import init_logger
from testsuites.api_testing.framework.config_loader import ConfigLoader


PRIORITY_MARKERS = ("p1", "p2", "p3", "p4")
PRIORITIZED_SUITES = ("api_testing", "ui_testing")
LIVENESS_TIMEOUT = 5.0

_liveness: Dict[str, Optional[str]] = {}


def pytest_addoption(parser):
    group = parser.getgroup("qademo")
    group.addoption(
        "--priority",
        action="append",
        default=[],
        help="Run only UI/API tests with this priority (p1..p4). Repeatable; "
             "'all' disables filtering. Default: run.priorities from config.",
    )
    group.addoption(
        "--require-live",
        action="store_true",
        default=False,
        help="Fail instead of skip when QADemo or the browser is unavailable.",
    )


def pytest_configure(config):
    init_logger()
    if ConfigLoader().get("run.require_live", False):
        config.option.require_live = True


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


# =============================================================================
# Priority Selection
# =============================================================================

def selected_priorities(config) -> Optional[List[str]]:
    """Priorities to run, or None when every priority is selected."""
    requested = [p.strip().lower() for value in config.getoption("--priority") for p in value.split(",")]
    if not requested:
        requested = [p.lower() for p in ConfigLoader().get_list("run.priorities", ["p1", "p2"])]
    if "all" in requested:
        return None

    unknown = sorted(set(requested) - set(PRIORITY_MARKERS))
    if unknown:
        raise pytest.UsageError(f"Unknown priority {unknown}; expected {PRIORITY_MARKERS} or 'all'")
    return requested


def pytest_collection_modifyitems(config, items):
    """
    Deselect UI/API tests outside the selected priorities.

    Tests without a priority marker, and unit tests, always run.
    """
    priorities = selected_priorities(config)
    if priorities is None:
        return

    selected, deselected = [], []
    for item in items:
        path = str(item.fspath)
        marked = [m for m in PRIORITY_MARKERS if item.get_closest_marker(m)]
        if any(suite in path for suite in PRIORITIZED_SUITES) and marked and not set(marked) & set(priorities):
            deselected.append(item)
        else:
            selected.append(item)

    if deselected:
        logger.debug(f"Deselected {len(deselected)} tests outside priorities {priorities}")
        config.hook.pytest_deselected(items=deselected)
        items[:] = selected


# =============================================================================
# Liveness Guard
# =============================================================================

def probe(url: str) -> Optional[str]:
    """
    Return None when ``url`` answers, or the reason it does not.

    Any HTTP response counts as reachable; only transport errors do not.
    """
    try:
        httpx.get(url, timeout=LIVENESS_TIMEOUT, follow_redirects=True)
    except httpx.HTTPError as e:
        return f"{type(e).__name__}: {e}"
    return None


def pytest_runtest_setup(item):
    if item.get_closest_marker("requires_external") is None:
        return

    url = ConfigLoader().get("ui.base_url", "https://qademo.com")
    if url not in _liveness:
        _liveness[url] = probe(url)
        if _liveness[url]:
            logger.warning(f"QADemo unreachable at {url}: {_liveness[url]}")

    reason = _liveness[url]
    if reason and not item.config.getoption("--require-live"):
        pytest.skip(f"QADemo not reachable at {url} ({reason}); use --require-live to fail instead")
