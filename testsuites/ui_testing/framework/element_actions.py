# ================================================================================
# Element Actions Module
# ================================================================================
#
# Async interaction helpers for elements that React re-renders or that may be
# absent. Waiting for state (enabled buttons, badge text) is left to
# Playwright's auto-retrying ``expect`` assertions.
#
# Key Features:
#   - DOM-dispatched clicks for re-render sensitive controls
#   - Empty-state aware counting
#   - Text getters that return "" for missing elements
#   - Allure step integration
#
# ================================================================================

from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Locator


async def dom_click(locator: Locator, description: str = "element") -> None:
    """
    Dispatch a click through ``HTMLElement.click()`` in the page.

    Used for cart quantity/remove icon buttons: they re-render on every
    cart update, which detaches the node between Playwright's actionability
    checks and the pointer event.
    """
    with allure.step(f"DOM click: {description}"):
        await locator.evaluate("(el) => el.click()")
        logger.debug(f"DOM click dispatched on {description}")


async def count_or_zero(items: Locator, empty_state: Optional[Locator] = None) -> int:
    """
    Count matching elements, returning 0 while an empty-state marker is shown.
    """
    if empty_state is not None and await empty_state.is_visible():
        return 0
    return await items.count()


async def text_or_empty(locator: Locator) -> str:
    """Return the first match's text, or ``""`` when nothing matches."""
    if await locator.count() == 0:
        return ""
    return (await locator.first.text_content() or "").strip()


__all__ = [
    "dom_click",
    "count_or_zero",
    "text_or_empty",
]
