"""
================================================================================
Cart Page Object (Async / Playwright)
================================================================================

``/cart``: cart line items with quantity controls, order summary and the
checkout / clear / continue-shopping actions.

The quantity and remove controls are icon-only buttons (an SVG each, in the
order minus, plus, trash). They re-render on every cart update, so the
``*_first_item_*`` helpers click them through the DOM, and
``goto_via_navbar`` keeps client-side cart state that a hard reload of
/cart can drop for guests.

================================================================================
"""

from __future__ import annotations

import re

import allure
from playwright.async_api import Locator

from testsuites.ui_testing.framework.element_actions import (
    count_or_zero,
    dom_click,
    text_or_empty,
)
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.pages.catalog_page import PRICE_PATTERN


# Index of each icon button within a cart line
_MINUS, _PLUS, _TRASH = 0, 1, 2


class CartPage(PageBase):
    """Cart page object (async)."""

    URL_PATH = "/cart"
    PAGE_TITLE = "Shopping Cart"

    @property
    def page_heading(self) -> Locator:
        return self.page.get_by_role("heading", name=re.compile(r"Cart|Shopping Cart", re.I), level=1)

    @property
    def empty_cart_message(self) -> Locator:
        return self.page.get_by_text(re.compile("Your cart is empty", re.I))

    @property
    def continue_shopping_button(self) -> Locator:
        return self.page.get_by_role("link", name=re.compile("Continue Shopping", re.I))

    @property
    def clear_cart_button(self) -> Locator:
        return self.page.get_by_role("button", name=re.compile("Clear Cart", re.I))

    @property
    def cart_items(self) -> Locator:
        return self.page.get_by_role("listitem")

    @property
    def cart_product_links(self) -> Locator:
        return self.page.get_by_role("main").locator("a[href^='/products/']")

    @property
    def order_summary(self) -> Locator:
        return self.page.get_by_role("region", name=re.compile("Order Summary", re.I))

    @property
    def subtotal_amount(self) -> Locator:
        return self.page.get_by_text(re.compile("Subtotal", re.I)).locator("..").get_by_text(PRICE_PATTERN)

    @property
    def shipping_amount(self) -> Locator:
        return (
            self.page.get_by_text(re.compile("Shipping", re.I))
            .locator("..")
            .get_by_text(re.compile(r"Free|\$\d+\.\d{2}", re.I))
        )

    @property
    def total_amount(self) -> Locator:
        return self.page.get_by_text(re.compile(r"^Total$", re.I)).locator("..").get_by_text(PRICE_PATTERN)

    @property
    def proceed_to_checkout_button(self) -> Locator:
        return self.page.get_by_role("button", name=re.compile("Proceed to Checkout", re.I))

    @property
    def cart_badge_link(self) -> Locator:
        return self.page.get_by_role("navigation").locator("a[href='/cart']")

    @property
    def icon_buttons(self) -> Locator:
        """Icon-only buttons in ``main``: minus, plus, trash per line item."""
        return self.page.get_by_role("main").locator("button:has(svg)")

    # =========================================================================
    # Per-item locators
    # =========================================================================

    def get_cart_item(self, product_name: str) -> Locator:
        return self.page.get_by_role("main").locator("a").filter(has_text=product_name).locator("..")

    def get_item_quantity(self, product_name: str) -> Locator:
        """Quantity text between the minus and plus buttons."""
        return (
            self.get_cart_item(product_name)
            .locator("button")
            .first.locator("..")
            .get_by_text(re.compile(r"^\d+$"))
        )

    def get_increase_quantity_button(self, product_name: str) -> Locator:
        return self.get_cart_item(product_name).get_by_role("button").nth(_PLUS)

    def get_decrease_quantity_button(self, product_name: str) -> Locator:
        return self.get_cart_item(product_name).get_by_role("button").nth(_MINUS)

    def get_remove_item_button(self, product_name: str) -> Locator:
        return self.get_cart_item(product_name).get_by_role(
            "button", name=re.compile(r"Remove|Delete", re.I)
        )

    def get_item_subtotal(self, product_name: str) -> Locator:
        return self.get_cart_item(product_name).get_by_text(PRICE_PATTERN).last

    def first_item_decrease_button(self) -> Locator:
        """Minus button of the first line; disabled at quantity 1."""
        item = self.cart_items.first.locator("..")
        return item.locator("button").filter(has_text="-").or_(item.locator("button:has(svg)").first).first

    # =========================================================================
    # Navigation
    # =========================================================================

    @allure.step("Open cart via navbar")
    async def goto_via_navbar(self) -> None:
        """Client-side navigation to /cart through the navbar cart link."""
        await self.cart_badge_link.first.click()
        await self.wait_for_url(self.url_pattern())

    async def wait_for_cart_items(self, timeout: int = 10000) -> None:
        """Wait until either a cart line or the empty-cart message is rendered."""
        await self.cart_product_links.first.or_(self.empty_cart_message).first.wait_for(
            state="visible", timeout=timeout
        )

    # =========================================================================
    # Actions
    # =========================================================================

    async def increase_quantity(self, product_name: str) -> None:
        await self.get_increase_quantity_button(product_name).click()

    async def decrease_quantity(self, product_name: str) -> None:
        await self.get_decrease_quantity_button(product_name).click()

    async def remove_item(self, product_name: str) -> None:
        await self.get_remove_item_button(product_name).click()

    async def increase_first_item_quantity(self) -> None:
        await dom_click(self.icon_buttons.nth(_PLUS), "increase quantity")

    async def decrease_first_item_quantity(self) -> None:
        await dom_click(self.icon_buttons.nth(_MINUS), "decrease quantity")

    async def remove_first_item(self) -> None:
        await dom_click(self.icon_buttons.nth(_TRASH), "remove item")

    @allure.step("Clear cart")
    async def clear_cart(self) -> None:
        await self.clear_cart_button.click()

    async def click_continue_shopping(self) -> None:
        await self.continue_shopping_button.click()

    @allure.step("Proceed to checkout")
    async def click_proceed_to_checkout(self) -> None:
        await self.proceed_to_checkout_button.click()

    # =========================================================================
    # State
    # =========================================================================

    async def get_cart_item_count(self) -> int:
        """Number of cart lines; 0 while the empty-cart message is shown."""
        return await count_or_zero(self.cart_items, self.empty_cart_message)

    async def get_total_amount_text(self) -> str:
        return await text_or_empty(self.total_amount)

    async def is_cart_empty(self) -> bool:
        return await self.empty_cart_message.is_visible()

    async def get_quantity_value(self, product_name: str) -> str:
        """Displayed quantity for ``product_name``; ``""`` if not in the cart."""
        return await text_or_empty(self.get_item_quantity(product_name))


__all__ = ["CartPage"]
