"""
================================================================================
Catalog Page Object (Async / Playwright)
================================================================================

``/catalog``: product grid with per-card Add / In Cart / Remove controls and
stock badges.

Add buttons render disabled until the product's stock has loaded, and the
navbar badge updates only after the cart API call returns, so
``add_first_available_to_cart`` waits on both instead of sleeping.

================================================================================
"""

from __future__ import annotations

import re
from typing import Dict

import allure
from playwright.async_api import Locator, expect

from testsuites.ui_testing.components.nav_bar import NavBar
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.smart_locator import Strategy


PRICE_PATTERN = re.compile(r"\$\d+\.\d{2}")


class CatalogPage(PageBase):
    """Catalog page object (async)."""

    URL_PATH = "/catalog"
    PAGE_TITLE = "Products"

    # Milliseconds; stock data can take a while on a cold backend
    ADD_BUTTON_TIMEOUT = 15000

    @property
    def page_heading(self) -> Locator:
        return self.page.get_by_role("heading", name=re.compile("Products", re.I), level=1)

    @property
    def product_grid(self) -> Locator:
        return self.page.get_by_role("main")

    def product_card_strategies(self) -> Dict[str, Strategy]:
        return {
            "primary": self.page.get_by_role("article"),
            "fallback_1": "[data-testid^='product-card-']",
        }

    @property
    def product_cards(self) -> Locator:
        return self.smart.combined(self.product_card_strategies(), first=False)

    @property
    def add_to_cart_buttons(self) -> Locator:
        return self.page.get_by_role("button", name=re.compile(r"Add .+ to cart", re.I))

    @property
    def in_cart_buttons(self) -> Locator:
        return self.page.get_by_role("button", name=re.compile("In Cart", re.I))

    # =========================================================================
    # Per-product locators
    # =========================================================================

    def get_product_card(self, product_name: str) -> Locator:
        return self.page.get_by_role("article").filter(has_text=product_name)

    def get_product_name(self, product_name: str) -> Locator:
        return self.get_product_card(product_name).get_by_role("heading")

    def get_product_price(self, product_name: str) -> Locator:
        return self.get_product_card(product_name).get_by_text(PRICE_PATTERN)

    def get_add_button(self, product_name: str) -> Locator:
        return self.get_product_card(product_name).get_by_role("button", name="Add")

    def get_in_cart_button(self, product_name: str) -> Locator:
        return self.get_product_card(product_name).get_by_role(
            "button", name=re.compile("In Cart", re.I)
        )

    def get_remove_button(self, product_name: str) -> Locator:
        return self.get_product_card(product_name).get_by_role(
            "button", name=re.compile("Remove", re.I)
        )

    def get_low_stock_badge(self, product_name: str) -> Locator:
        return self.get_product_card(product_name).get_by_text("Low Stock")

    def get_out_of_stock_badge(self, product_name: str) -> Locator:
        return self.get_product_card(product_name).get_by_text("Out of Stock")

    # =========================================================================
    # Actions
    # =========================================================================

    async def wait_for_products(self, timeout: int = 10000) -> Locator:
        """Wait until a product card is rendered and return the first one."""
        return await self.smart.locate(
            self.product_card_strategies(), timeout=timeout, element_name="product_card"
        )

    async def click_product(self, product_name: str) -> None:
        await self.get_product_name(product_name).click()

    async def click_first_product(self) -> None:
        card = await self.wait_for_products()
        await card.get_by_role("heading").first.click()

    @allure.step("Add '{product_name}' to cart")
    async def add_to_cart(self, product_name: str) -> None:
        await self.get_add_button(product_name).click()

    @allure.step("Add first available product to cart")
    async def add_first_available_to_cart(self) -> None:
        """
        Add the first product whose Add button is enabled and wait for the
        navbar cart badge to show a count.
        """
        await self.wait_for_products()
        button = self.add_to_cart_buttons.first
        await expect(button).to_be_enabled(timeout=self.ADD_BUTTON_TIMEOUT)
        await button.click()
        await expect(NavBar(self.page).cart_link).to_contain_text(re.compile(r"\d+"), timeout=10000)

    async def click_in_cart_button(self, product_name: str) -> None:
        await self.get_in_cart_button(product_name).click()

    async def click_first_in_cart_button(self) -> None:
        await self.in_cart_buttons.first.click()

    async def remove_from_cart(self, product_name: str) -> None:
        await self.get_remove_button(product_name).click()

    async def get_product_count(self) -> int:
        return await self.page.get_by_role("article").count()

    async def is_product_in_stock(self, product_name: str) -> bool:
        return not await self.get_out_of_stock_badge(product_name).is_visible()

    async def has_low_stock(self, product_name: str) -> bool:
        return await self.get_low_stock_badge(product_name).is_visible()


__all__ = ["CatalogPage", "PRICE_PATTERN"]
