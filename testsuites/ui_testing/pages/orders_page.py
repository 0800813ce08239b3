"""Order history page (``/orders``)."""

from __future__ import annotations

import re

import allure
from playwright.async_api import Locator

from testsuites.ui_testing.framework.element_actions import count_or_zero
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.pages.catalog_page import PRICE_PATTERN


DATE_PATTERN = re.compile(r"\d{1,2}/\d{1,2}/\d{4}|\d{4}-\d{2}-\d{2}")


class OrdersPage(PageBase):
    """Orders list page object (async)."""

    URL_PATH = "/orders"
    PAGE_TITLE = "My Orders"

    @property
    def page_heading(self) -> Locator:
        return self.page.get_by_role("heading", name=re.compile("My Orders", re.I), level=1)

    @property
    def empty_orders_message(self) -> Locator:
        return self.page.get_by_text(re.compile("No orders yet", re.I))

    @property
    def start_shopping_button(self) -> Locator:
        return self.page.get_by_role("link", name=re.compile("Start Shopping", re.I))

    @property
    def orders_list(self) -> Locator:
        return self.page.get_by_role("list")

    @property
    def order_items(self) -> Locator:
        return self.page.get_by_role("listitem")

    @property
    def order_links(self) -> Locator:
        return self.page.get_by_role("main").locator("a[href^='/orders/']")

    def get_order_by_id(self, order_id: str) -> Locator:
        return self.order_items.filter(has_text=order_id)

    def get_order_status(self, order_id: str) -> Locator:
        return self.get_order_by_id(order_id).get_by_role("status")

    def get_order_date(self, order_id: str) -> Locator:
        return self.get_order_by_id(order_id).get_by_text(DATE_PATTERN)

    def get_order_total(self, order_id: str) -> Locator:
        return self.get_order_by_id(order_id).get_by_text(PRICE_PATTERN)

    @allure.step("Open order {order_id}")
    async def click_order(self, order_id: str) -> None:
        await self.get_order_by_id(order_id).click()

    async def click_first_order(self) -> None:
        await self.order_links.first.click()

    async def get_order_count(self) -> int:
        """Number of orders listed; 0 while "No orders yet" is shown."""
        return await count_or_zero(self.order_items, self.empty_orders_message)

    async def has_no_orders(self) -> bool:
        return await self.empty_orders_message.is_visible()

    async def click_start_shopping(self) -> None:
        await self.start_shopping_button.click()


__all__ = ["OrdersPage", "DATE_PATTERN"]
