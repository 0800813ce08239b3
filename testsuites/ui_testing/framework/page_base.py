"""
================================================================================
Base Page Object
================================================================================

Foundation class for the QADemo Page Object Model.

Provides:
    - Navigation relative to the configured base URL
    - Smart (fallback) element location
    - Screenshot and failure-context capture
    - Wait strategies
    - API response capture for debugging

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Pattern, Union

import allure
from loguru import logger
from playwright.async_api import Page, Response

from autotest_tools.report_tools.allure_utils import attach_failure_context, attach_png
from testsuites.api_testing.framework.config_loader import ConfigLoader

from .smart_locator import SmartLocator


SCREENSHOT_DIR = Path(__file__).parent.parent.parent.parent / "reports" / "screenshots"

# Number of /api/ responses kept per page object
MAX_CAPTURED_RESPONSES = 20


class BasePage:
    """
    Base class for all page objects.

    Subclasses set ``URL_PATH`` and expose locators as properties; locators
    are lazy Playwright ``Locator`` objects, so declaring them costs nothing
    and every access re-queries the live DOM.

    Usage:
        class CartPage(BasePage):
            URL_PATH = "/cart"

            @property
            def page_heading(self) -> Locator:
                return self.page.get_by_role("heading", name=re.compile("Cart", re.I))
    """

    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(self, page: Page, base_url: str = ""):
        """
        Args:
            page: Playwright Page object
            base_url: Application base URL (defaults to ``ui.base_url`` config)
        """
        self.page = page
        if not base_url:
            base_url = ConfigLoader().get("ui.base_url", "https://qademo.com")
        self.base_url = base_url.rstrip("/")
        self.smart = SmartLocator(page)

        self._captured_responses: List[Dict[str, Any]] = []
        self._setup_response_capture()

    def _setup_response_capture(self) -> None:
        """Keep the most recent /api/ responses for failure reports."""

        async def capture_response(response: Response) -> None:
            if "/api/" not in response.url:
                return
            try:
                body = await response.text()
            except Exception:
                # Body is unavailable for redirects and closed pages
                body = "<unable to read>"

            self._captured_responses.append({
                "timestamp": datetime.now().isoformat(),
                "method": response.request.method,
                "url": response.url,
                "status": response.status,
                "body": body[:1000],
            })
            if len(self._captured_responses) > MAX_CAPTURED_RESPONSES:
                self._captured_responses.pop(0)

        self.page.on("response", capture_response)

    @property
    def url(self) -> str:
        """Full URL of this page."""
        return f"{self.base_url}{self.URL_PATH}"

    @property
    def captured_responses(self) -> List[Dict[str, Any]]:
        return list(self._captured_responses)

    def url_pattern(self, path: Optional[str] = None) -> Pattern[str]:
        """Regex matching this page's path (or ``path``) at the end of a URL."""
        target = path if path is not None else self.URL_PATH
        return re.compile(rf"{re.escape(target)}/?(\?.*)?$")

    # =========================================================================
    # Navigation
    # =========================================================================

    async def goto(self, wait_for: str = "domcontentloaded") -> None:
        """
        Navigate to this page.

        Args:
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        await self.navigate_to(self.URL_PATH, wait_for=wait_for)

    async def navigate_to(self, path: str, wait_for: str = "domcontentloaded") -> None:
        """Navigate to ``path`` relative to the base URL."""
        full_url = f"{self.base_url}{path}"
        with allure.step(f"Navigate to {path}"):
            await self.page.goto(full_url, wait_until=wait_for)
            logger.debug(f"Navigated to: {full_url}")

    async def reload(self, wait_for: str = "domcontentloaded") -> None:
        with allure.step("Reload page"):
            await self.page.reload(wait_until=wait_for)

    async def wait_for_page_load(self, state: str = "networkidle", timeout: int = 15000) -> None:
        """
        Wait for the page to reach a stable load state.

        Args:
            state: Playwright load state ('load', 'domcontentloaded', 'networkidle')
            timeout: Timeout in milliseconds
        """
        await self.page.wait_for_load_state(state, timeout=timeout)

    async def wait_for_url(
        self,
        url_pattern: Union[str, Pattern[str]],
        timeout: int = 10000,
    ) -> None:
        """
        Wait for URL to match a glob string or compiled regex.
        """
        description = url_pattern if isinstance(url_pattern, str) else url_pattern.pattern
        with allure.step(f"Wait for URL: {description}"):
            await self.page.wait_for_url(url_pattern, timeout=timeout)

    def current_path(self) -> str:
        """Path part of the current URL (``/orders/12``)."""
        url = self.page.url or ""
        if url.startswith(self.base_url):
            url = url[len(self.base_url):]
        return url.split("?")[0] or "/"

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        content = await self.page.screenshot(path=str(filepath), full_page=full_page)
        if attach_to_allure:
            attach_png(content, name=name)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """
        Attach a full-page screenshot, the current URL and recent API
        responses to the report.
        """
        content: Optional[bytes] = None
        try:
            content = await self.page.screenshot(full_page=True)
        except Exception as e:
            logger.warning(f"Screenshot failed for {test_name}: {e}")
        attach_failure_context(content, self.page.url, self._captured_responses)


__all__ = [
    "BasePage",
    "PageBase",
    "SCREENSHOT_DIR",
]

PageBase = BasePage
