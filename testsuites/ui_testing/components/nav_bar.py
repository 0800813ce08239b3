"""
================================================================================
Navigation Bar Component
================================================================================

Header navigation shared by every QADemo page: logo, Products, cart icon with
item badge, Sign In / username / Admin / Logout links and the mobile menu.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from typing import Dict

import allure
from playwright.async_api import Locator, Page, expect

from testsuites.ui_testing.framework.element_actions import text_or_empty
from testsuites.ui_testing.framework.smart_locator import SmartLocator, Strategy


# Nav links that are not the logged-in username link
_NON_USERNAME_LINKS = re.compile(r"^(?!Products|Cart|Sign In|Admin).*$")


class NavBar:
    """Page component for the top navigation bar."""

    def __init__(self, page: Page):
        self.page = page
        self.smart = SmartLocator(page)

    # =========================================================================
    # Locators
    # =========================================================================

    @property
    def navigation(self) -> Locator:
        return self.page.get_by_role("navigation").first

    @property
    def logo(self) -> Locator:
        return self.page.get_by_role("link", name=re.compile(r"QA Demo|Logo", re.I)).first

    @property
    def products_link(self) -> Locator:
        return self.navigation.get_by_role("link", name="Products", exact=True)

    def cart_link_strategies(self) -> Dict[str, Strategy]:
        return {
            "primary": self.page.get_by_role("link", name=re.compile("Cart", re.I)),
            "fallback_1": "nav a[href='/cart']",
        }

    @property
    def cart_icon(self) -> Locator:
        return self.smart.combined(self.cart_link_strategies())

    @property
    def cart_link(self) -> Locator:
        """Cart link in the header nav; its text includes the badge count."""
        return self.page.locator("nav a[href='/cart']")

    @property
    def cart_badge(self) -> Locator:
        """Item count inside the cart link; absent while the cart is empty."""
        return self.cart_icon.get_by_text(re.compile(r"\d+"))

    @property
    def sign_in_button(self) -> Locator:
        return self.page.get_by_role("link", name=re.compile("Sign In", re.I)).first

    @property
    def username_link(self) -> Locator:
        return self.navigation.get_by_role("link").filter(has_text=_NON_USERNAME_LINKS).last

    @property
    def admin_button(self) -> Locator:
        return self.page.get_by_role("link", name="Admin", exact=True)

    @property
    def logout_button(self) -> Locator:
        return self.page.get_by_role("button", name=re.compile(r"Logout|Sign Out", re.I))

    @property
    def mobile_menu_button(self) -> Locator:
        return self.page.get_by_role("button", name=re.compile(r"Menu|Toggle navigation", re.I))

    @property
    def mobile_menu(self) -> Locator:
        return self.page.get_by_role("navigation").get_by_role("menu")

    @property
    def my_orders_link(self) -> Locator:
        return self.page.get_by_role("link", name=re.compile("My Orders", re.I))

    # =========================================================================
    # Actions
    # =========================================================================

    @allure.step("Click logo")
    async def click_logo(self) -> None:
        await self.logo.click()

    @allure.step("Click Products")
    async def click_products(self) -> None:
        await self.products_link.click()

    @allure.step("Click cart icon")
    async def click_cart(self) -> None:
        await self.smart.click(self.cart_link_strategies(), element_name="cart_icon")

    @allure.step("Click Sign In")
    async def click_sign_in(self) -> None:
        await self.sign_in_button.click()

    @allure.step("Click username")
    async def click_username(self) -> None:
        await self.username_link.click()

    @allure.step("Click Admin")
    async def click_admin(self) -> None:
        await self.admin_button.click()

    @allure.step("Logout")
    async def click_logout(self) -> None:
        await self.logout_button.click()

    async def open_mobile_menu(self) -> None:
        await self.mobile_menu_button.click()

    async def click_my_orders(self) -> None:
        await self.my_orders_link.click()

    # =========================================================================
    # State
    # =========================================================================

    async def get_cart_item_count(self) -> int:
        """Number shown on the cart badge; 0 when no badge is displayed."""
        if not await self.cart_badge.first.is_visible():
            return 0
        text = await text_or_empty(self.cart_badge)
        digits = re.search(r"\d+", text)
        return int(digits.group()) if digits else 0

    async def wait_for_cart_count(self, expected: int, timeout: int = 10000) -> None:
        """
        Wait until the nav cart link text contains ``expected``.

        Cart mutations update the badge asynchronously after the API call.
        """
        with allure.step(f"Wait for cart badge: {expected}"):
            await expect(self.cart_link).to_contain_text(str(expected), timeout=timeout)

    async def get_username(self) -> str:
        """Displayed username; ``""`` when logged out."""
        if not await self.is_logged_in():
            return ""
        return await text_or_empty(self.username_link)

    async def is_logged_in(self) -> bool:
        return await self.logout_button.is_visible()

    async def is_admin_visible(self) -> bool:
        return await self.admin_button.is_visible()

    async def is_sign_in_visible(self) -> bool:
        return await self.sign_in_button.is_visible()


__all__ = ["NavBar"]
