"""
================================================================================
UI Testing Framework
================================================================================

Playwright (async) building blocks shared by the QADemo page objects.

Components:
    - smart_locator: Element location with fallback strategies
    - page_base: Base page object for navigation, waits and failure capture
    - element_actions: Re-render safe clicks and empty-state aware getters
    - browser_manager: Browser lifecycle and isolated contexts
    - auth_setup: Saved login sessions (storage state) per user

================================================================================
"""

from .smart_locator import SmartLocator, ElementNotFoundError
from .page_base import BasePage, PageBase
from .browser_manager import BrowserManager

__all__ = [
    "SmartLocator",
    "ElementNotFoundError",
    "BasePage",
    "PageBase",
    "BrowserManager",
]
