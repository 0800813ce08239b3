"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - Single browser instance per worker
    - Isolated contexts per test
    - Default action/navigation timeouts from configuration
    - Storage-state (cookies + localStorage) persistence per user

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from testsuites.api_testing.framework.config_loader import ConfigLoader


SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


class BrowserManager:
    """
    Manages browser instances and contexts for UI testing.

    Usage:
        async with BrowserManager() as manager:
            page = await manager.new_page()
            await page.goto("https://qademo.com")

        # Restoring a saved session
        async with BrowserManager() as manager:
            context = await manager.new_context(storage_state=path)
    """

    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": ["--ignore-certificate-errors"],
    }

    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        headless: Optional[bool] = None,
        browser_type: Optional[str] = None,
        config: Optional[ConfigLoader] = None,
    ):
        """
        Args:
            headless: Run browser in headless mode (default ``ui.headless``)
            browser_type: 'chromium', 'firefox' or 'webkit' (default ``ui.browser``)
            config: Configuration loader
        """
        self.config = config or ConfigLoader()
        self.headless = self.config.get("ui.headless", True) if headless is None else headless
        self.browser_type = browser_type or self.config.get("ui.browser", "chromium")
        if self.browser_type not in SUPPORTED_BROWSERS:
            raise ValueError(
                f"Unsupported browser '{self.browser_type}', expected one of {SUPPORTED_BROWSERS}"
            )

        self.base_url = self.config.get("ui.base_url", "https://qademo.com")
        self.action_timeout = int(self.config.get("ui.action_timeout", 15000))
        self.navigation_timeout = int(self.config.get("ui.navigation_timeout", 30000))

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    async def __aenter__(self) -> "BrowserManager":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def start(self) -> Browser:
        """Start Playwright and launch the configured browser."""
        self._playwright = await async_playwright().start()
        launcher = getattr(self._playwright, self.browser_type)

        launch_options = {**self.DEFAULT_LAUNCH_OPTIONS, "headless": self.headless}
        if self.browser_type != "chromium":
            launch_options.pop("args", None)

        try:
            self._browser = await launcher.launch(**launch_options)
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise

        logger.debug(f"Browser started: {self.browser_type} (headless={self.headless})")
        return self._browser

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            try:
                await context.close()
            except Exception as e:
                # Already closed by the test or the browser went away
                logger.debug(f"Context close skipped: {e}")
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    async def new_context(
        self,
        storage_state: Optional[Path] = None,
        **options: Any,
    ) -> BrowserContext:
        """
        Create an isolated browser context.

        Args:
            storage_state: Saved session file to restore, if any
            **options: Additional context options

        Returns:
            New BrowserContext with default timeouts applied
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        viewport = self.config.get("ui.viewport", None)
        context_options = {**self.DEFAULT_CONTEXT_OPTIONS, "base_url": self.base_url}
        if isinstance(viewport, dict):
            context_options["viewport"] = viewport
        context_options.update(options)

        if storage_state is not None:
            context_options["storage_state"] = str(storage_state)
            logger.debug(f"Restoring storage state from {storage_state}")

        context = await self._browser.new_context(**context_options)
        context.set_default_timeout(self.action_timeout)
        context.set_default_navigation_timeout(self.navigation_timeout)
        self._contexts.append(context)
        return context

    async def close_context(self, context: BrowserContext) -> None:
        """Close a context created by this manager."""
        if context in self._contexts:
            self._contexts.remove(context)
        await context.close()

    async def new_page(
        self,
        context: Optional[BrowserContext] = None,
        **context_options: Any,
    ) -> Page:
        """Create a page in the given context, or in a new one."""
        if context is None:
            context = await self.new_context(**context_options)
        return await context.new_page()

    async def save_storage_state(self, context: BrowserContext, path: Path) -> Path:
        """
        Save cookies and localStorage of ``context`` to ``path``.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        await context.storage_state(path=str(path))
        logger.info(f"Storage state saved to: {path}")
        return path

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser


__all__ = [
    "BrowserManager",
    "SUPPORTED_BROWSERS",
]
