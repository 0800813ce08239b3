"""
================================================================================
Smart Locator
================================================================================

Element location with ordered fallback strategies.

A strategy is either a CSS selector string or a ready Playwright ``Locator``
(``get_by_role``, ``get_by_label``, ``get_by_text`` ...). Page objects declare
accessible queries as the primary strategy and structural CSS as fallbacks,
so a markup change degrades to a logged warning instead of a failed run.

Two ways to use a strategy map:
    - ``await smart.locate(strategies)`` resolves eagerly before an action,
      trying strategies in order, and records which one matched (locator
      health). Fallback usage is logged as a warning.
    - ``smart.combined(strategies)`` returns one lazy locator joining every
      strategy with ``Locator.or_()``, for ``expect()`` assertions.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

from loguru import logger
from playwright.async_api import Locator, Page


Strategy = Union[str, Locator]


class ElementNotFoundError(Exception):
    """Raised when all locator strategies fail to find element."""
    pass


@dataclass
class LocatorHealth:
    """
    Tracks which strategy resolved an element.

    Attributes:
        element_name: Human-readable element name
        primary_selector: The preferred strategy (description)
        used_fallback: Whether a fallback was used
        fallback_name: Name of fallback used (if any)
        fallback_selector: The fallback strategy used (if any)
    """
    element_name: str
    primary_selector: str
    used_fallback: bool = False
    fallback_name: Optional[str] = None
    fallback_selector: Optional[str] = None


def describe_strategy(strategy: Strategy) -> str:
    """Printable form of a strategy for logs and reports."""
    if isinstance(strategy, str):
        return strategy
    return repr(strategy)


class SmartLocator:
    """
    Element locator with fallback strategies and usage analytics.

    A strategy map is ordered: ``primary`` first, then ``fallback_1``,
    ``fallback_2`` ... Page objects build the map from their own page so
    role and label queries can be used as strategies::

        >>> smart = SmartLocator(page)
        >>> cart_link = {
        ...     "primary": page.get_by_role("link", name=re.compile("Cart", re.I)),
        ...     "fallback_1": "nav a[href='/cart']",
        ... }
        >>> await smart.click(cart_link, element_name="cart_icon")
        >>> await expect(smart.combined(cart_link)).to_be_visible()

    Element mode binds one map to the instance, so ``locate()`` needs no
    arguments::

        >>> heading = SmartLocator(
        ...     page,
        ...     element_name="catalog_heading",
        ...     locators={
        ...         "primary": page.get_by_role("heading", name="Products", level=1),
        ...         "fallback_1": "main h1",
        ...     },
        ... )
        >>> await heading.locate()
    """

    def __init__(
        self,
        page: Page,
        element_name: Optional[str] = None,
        locators: Optional[Dict[str, Strategy]] = None,
    ):
        """
        Args:
            page: Playwright Page object
            element_name: Optional human-readable element name (element mode)
            locators: Optional strategy map (element mode)
        """
        self.page = page
        self._element_name = element_name
        self._element_locators = locators
        self._health_records: List[LocatorHealth] = []
        self._fallback_used: Dict[str, LocatorHealth] = {}

    def _to_locator(self, strategy: Strategy) -> Locator:
        if isinstance(strategy, str):
            return self.page.locator(strategy)
        return strategy

    def _resolve_target(
        self,
        target: Optional[Dict[str, Strategy]],
        element_name: Optional[str],
    ) -> tuple:
        locators = target if target is not None else self._element_locators
        return locators or {}, element_name or self._element_name or "custom_element"

    async def locate(
        self,
        target: Optional[Dict[str, Strategy]] = None,
        timeout: int = 5000,
        element_name: Optional[str] = None,
    ) -> Locator:
        """
        Locate element using smart fallback strategy.

        Tries each strategy in order, waiting up to ``timeout`` ms for it to
        become visible, and returns the first match.

        Args:
            target: Strategy map, or None to use the instance's own map
                (element mode).
            timeout: Timeout in milliseconds for each attempt
            element_name: Optional human-readable name for logging

        Returns:
            Playwright Locator for the found element (first match)

        Raises:
            ElementNotFoundError: When all strategies fail
        """
        locators, display_name = self._resolve_target(target, element_name)

        if not locators:
            raise ElementNotFoundError(f"No locators defined for element: {display_name}")

        primary = describe_strategy(locators.get("primary", next(iter(locators.values()))))
        errors = []

        for strategy_name, strategy in locators.items():
            locator = self._to_locator(strategy).first
            try:
                await locator.wait_for(state="visible", timeout=timeout)
            except Exception as e:
                errors.append(f"{strategy_name}: {describe_strategy(strategy)} -> {str(e)[:80]}")
                continue

            is_fallback = strategy_name != "primary"
            health = LocatorHealth(
                element_name=display_name,
                primary_selector=primary,
                used_fallback=is_fallback,
                fallback_name=strategy_name if is_fallback else None,
                fallback_selector=describe_strategy(strategy) if is_fallback else None,
            )
            self._health_records.append(health)

            if is_fallback:
                logger.warning(
                    f"Element '{display_name}' used fallback: "
                    f"{strategy_name} -> {describe_strategy(strategy)}"
                )
                self._fallback_used[display_name] = health
            else:
                logger.debug(f"Element '{display_name}' found: {primary}")

            return locator

        error_msg = f"All locators failed for '{display_name}':\n" + "\n".join(
            f"  - {err}" for err in errors
        )
        logger.error(error_msg)
        raise ElementNotFoundError(error_msg)

    def combined(
        self,
        target: Optional[Dict[str, Strategy]] = None,
        first: bool = True,
    ) -> Locator:
        """
        Build one lazy locator matching any strategy (``Locator.or_``).

        Nothing is resolved until the locator is used, so it works with
        ``expect()`` auto-waiting. ``first=True`` avoids strict-mode
        violations when several strategies match the same element.
        Nothing is recorded in the health report.
        """
        locators, display_name = self._resolve_target(target, None)
        if not locators:
            raise ElementNotFoundError(f"No locators defined for element: {display_name}")

        strategies = iter(locators.values())
        locator = self._to_locator(next(strategies))
        for strategy in strategies:
            locator = locator.or_(self._to_locator(strategy))
        return locator.first if first else locator

    async def click(
        self,
        target: Optional[Dict[str, Strategy]] = None,
        timeout: int = 5000,
        element_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """Click element using smart location."""
        locator = await self.locate(target, timeout=timeout, element_name=element_name)
        await locator.click(**kwargs)

    @property
    def health_records(self) -> List[LocatorHealth]:
        return list(self._health_records)

    @property
    def used_fallbacks(self) -> bool:
        return bool(self._fallback_used)

    def get_health_report(self) -> str:
        """
        Generate locator health report.

        Lists elements that needed a fallback during this session; their
        primary strategies are maintenance candidates.
        """
        if not self._fallback_used:
            return "All elements used primary locators. No maintenance needed."

        report_lines = [
            "Locator Health Report - Fallbacks Used:",
            "",
            "The following elements used fallback locators.",
            "Consider updating the primary selectors:",
            "",
        ]
        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary_selector}",
                f"    Used: {health.fallback_name} -> {health.fallback_selector}",
                "",
            ])
        return "\n".join(report_lines)


def log_fallback_reports(owners: Iterable[Any]) -> List[str]:
    """
    Log the health report of every page object or component whose
    ``smart`` locator needed a fallback, and return the reports.
    """
    reports = []
    for owner in owners:
        smart = getattr(owner, "smart", None)
        if isinstance(smart, SmartLocator) and smart.used_fallbacks:
            report = f"{type(owner).__name__}: {smart.get_health_report()}"
            logger.warning(report)
            reports.append(report)
    return reports


__all__ = [
    "log_fallback_reports",
    "SmartLocator",
    "ElementNotFoundError",
    "LocatorHealth",
    "Strategy",
    "describe_strategy",
]
