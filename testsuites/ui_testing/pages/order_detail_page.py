"""
Order detail / confirmation page (``/orders/<id>``).

Reached right after checkout (heading "Order Confirmed") or from the order
list (heading "Order Details").
"""

from __future__ import annotations

import re

import allure
from playwright.async_api import Locator

from testsuites.ui_testing.framework.element_actions import text_or_empty
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.pages.catalog_page import PRICE_PATTERN


ORDER_DETAIL_URL = re.compile(r"/orders/\d+")


class OrderDetailPage(PageBase):
    """Order detail page object (async)."""

    URL_PATH = "/orders"

    @property
    def order_confirmed_heading(self) -> Locator:
        return self.page.get_by_role("heading", name=re.compile(r"Order Confirmed|Order Details", re.I))

    @property
    def order_id_text(self) -> Locator:
        return self.page.get_by_text(re.compile(r"Order #|Order ID", re.I))

    @property
    def order_status_badge(self) -> Locator:
        return self.page.get_by_role("status")

    @property
    def shipping_address(self) -> Locator:
        return self.page.get_by_role("region", name=re.compile("Shipping", re.I))

    @property
    def payment_info(self) -> Locator:
        return self.page.get_by_role("region", name=re.compile("Payment", re.I))

    @property
    def ordered_items(self) -> Locator:
        return self.page.get_by_role("list").get_by_role("listitem")

    @property
    def order_total(self) -> Locator:
        return self.page.get_by_text(re.compile("Total", re.I)).locator("..").get_by_text(PRICE_PATTERN)

    @property
    def back_to_orders_link(self) -> Locator:
        return self.page.get_by_role("link", name=re.compile(r"Back to Orders|View All Orders", re.I))

    @property
    def not_found_message(self) -> Locator:
        return self.page.get_by_text(re.compile(r"404|Not Found|Order not found", re.I))

    async def goto(self, order_id: str = "", wait_for: str = "domcontentloaded") -> None:
        await self.navigate_to(f"{self.URL_PATH}/{order_id}", wait_for=wait_for)

    @allure.step("Wait for order confirmation")
    async def wait_for_confirmation(self, timeout: int = 15000) -> None:
        """Wait for the post-checkout redirect to /orders/<id>."""
        await self.page.wait_for_url(ORDER_DETAIL_URL, timeout=timeout)
        await self.order_confirmed_heading.first.wait_for(state="visible", timeout=timeout)

    async def get_order_id(self) -> str:
        """Order number shown on the page; ``""`` when not displayed."""
        text = await text_or_empty(self.order_id_text)
        match = re.search(r"#?(\d+)", text)
        return match.group(1) if match else ""

    async def get_order_status_text(self) -> str:
        return await text_or_empty(self.order_status_badge)

    async def get_shipping_address_text(self) -> str:
        return await text_or_empty(self.shipping_address)

    async def get_payment_info_text(self) -> str:
        return await text_or_empty(self.payment_info)

    async def get_ordered_item_count(self) -> int:
        return await self.ordered_items.count()

    async def get_order_total_text(self) -> str:
        return await text_or_empty(self.order_total)

    def get_ordered_item(self, product_name: str) -> Locator:
        return self.page.get_by_role("listitem").filter(has_text=product_name)

    def get_item_quantity(self, product_name: str) -> Locator:
        return self.get_ordered_item(product_name).get_by_text(re.compile(r"Qty:|Quantity:|x\s*\d+", re.I))

    def get_item_subtotal(self, product_name: str) -> Locator:
        return self.get_ordered_item(product_name).get_by_text(PRICE_PATTERN)

    async def click_back_to_orders(self) -> None:
        await self.back_to_orders_link.click()

    async def is_order_found(self) -> bool:
        return not await self.not_found_message.first.is_visible()


__all__ = ["OrderDetailPage", "ORDER_DETAIL_URL"]
