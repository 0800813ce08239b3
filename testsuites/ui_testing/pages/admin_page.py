"""
================================================================================
Admin Dashboard Page Object (Async / Playwright)
================================================================================

``/admin``: overview statistics, product management and order management,
split into three tabs. Non-admin users see an access-denied message (or are
redirected away).

================================================================================
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Union

import allure
from loguru import logger
from playwright.async_api import Locator

from testsuites.ui_testing.framework.page_base import PageBase


class AdminPage(PageBase):
    """Admin dashboard page object (async)."""

    URL_PATH = "/admin"
    PAGE_TITLE = "Admin Dashboard"

    @property
    def page_heading(self) -> Locator:
        return self.page.get_by_role("heading", name=re.compile("Admin Dashboard", re.I), level=1)

    @property
    def access_denied_message(self) -> Locator:
        return self.page.get_by_text(re.compile(r"Access Denied|Forbidden|Unauthorized", re.I))

    # Tabs ----------------------------------------------------------------

    @property
    def overview_tab(self) -> Locator:
        return self.page.get_by_role("tab", name=re.compile("Overview", re.I))

    @property
    def products_tab(self) -> Locator:
        return self.page.get_by_role("tab", name=re.compile("Products", re.I))

    @property
    def orders_tab(self) -> Locator:
        return self.page.get_by_role("tab", name=re.compile("Orders", re.I))

    # Overview statistics -------------------------------------------------

    def _stat_value(self, label: str) -> Locator:
        return self.page.get_by_text(re.compile(label, re.I)).locator("..").get_by_role("heading")

    @property
    def products_count(self) -> Locator:
        return self._stat_value("Products")

    @property
    def orders_count(self) -> Locator:
        return self._stat_value("Orders")

    @property
    def users_count(self) -> Locator:
        return self._stat_value("Users")

    @property
    def pending_orders_count(self) -> Locator:
        return self._stat_value("Pending")

    @property
    def low_stock_section(self) -> Locator:
        return self.page.get_by_role("region", name=re.compile("Low Stock", re.I))

    @property
    def low_stock_items(self) -> Locator:
        return self.low_stock_section.get_by_role("listitem")

    @property
    def recent_orders_section(self) -> Locator:
        return self.page.get_by_role("region", name=re.compile("Recent Orders", re.I))

    @property
    def recent_order_items(self) -> Locator:
        return self.recent_orders_section.get_by_role("listitem")

    # Products tab --------------------------------------------------------

    @property
    def products_table(self) -> Locator:
        return self.page.get_by_role("table")

    @property
    def product_rows(self) -> Locator:
        return self.page.get_by_role("row")

    @property
    def add_product_button(self) -> Locator:
        return self.page.get_by_role("button", name=re.compile("Add Product", re.I))

    @property
    def product_modal(self) -> Locator:
        return self.page.get_by_role("dialog")

    @property
    def product_name_input(self) -> Locator:
        return self.page.get_by_label("Name")

    @property
    def product_description_input(self) -> Locator:
        return self.page.get_by_label("Description")

    @property
    def product_price_input(self) -> Locator:
        return self.page.get_by_label("Price")

    @property
    def product_stock_input(self) -> Locator:
        return self.page.get_by_label("Stock")

    @property
    def product_active_toggle(self) -> Locator:
        return self.page.get_by_label(re.compile("Active", re.I))

    @property
    def product_image_upload(self) -> Locator:
        return self.page.get_by_label(re.compile(r"Image|Upload", re.I))

    @property
    def save_product_button(self) -> Locator:
        return self.page.get_by_role("button", name=re.compile(r"Save|Submit", re.I))

    @property
    def cancel_product_button(self) -> Locator:
        return self.page.get_by_role("button", name=re.compile("Cancel", re.I))

    # Orders tab ----------------------------------------------------------

    @property
    def orders_table(self) -> Locator:
        return self.page.get_by_role("table")

    @property
    def order_rows(self) -> Locator:
        return self.page.get_by_role("row")

    # =========================================================================
    # Tab navigation
    # =========================================================================

    @allure.step("Open Overview tab")
    async def click_overview_tab(self) -> None:
        await self.overview_tab.click()

    @allure.step("Open Products tab")
    async def click_products_tab(self) -> None:
        await self.products_tab.click()

    @allure.step("Open Orders tab")
    async def click_orders_tab(self) -> None:
        await self.orders_tab.click()

    # =========================================================================
    # Product management
    # =========================================================================

    def get_product_row(self, product_name: str) -> Locator:
        return self.product_rows.filter(has_text=product_name)

    def get_product_stock_input(self, product_name: str) -> Locator:
        return self.get_product_row(product_name).get_by_role("spinbutton")

    def get_product_edit_button(self, product_name: str) -> Locator:
        return self.get_product_row(product_name).get_by_role("button", name=re.compile("Edit", re.I))

    def get_product_status(self, product_name: str) -> Locator:
        return self.get_product_row(product_name).get_by_role("status")

    async def update_product_stock(self, product_name: str, new_stock: int) -> None:
        """Edit the inline stock field; the change is saved on blur."""
        with allure.step(f"Set stock of {product_name} to {new_stock}"):
            stock_input = self.get_product_stock_input(product_name)
            await stock_input.fill(str(new_stock))
            await stock_input.blur()

    async def click_add_product(self) -> None:
        await self.add_product_button.click()

    async def click_edit_product(self, product_name: str) -> None:
        await self.get_product_edit_button(product_name).click()

    async def fill_product_form(
        self,
        name: str,
        description: str,
        price: float,
        stock: int,
        is_active: bool = True,
    ) -> None:
        """
        Fill the add/edit product modal.

        The Active toggle is clicked only when its current state differs from
        ``is_active``.
        """
        with allure.step(f"Fill product form: {name}"):
            await self.product_name_input.fill(name)
            await self.product_description_input.fill(description)
            await self.product_price_input.fill(str(price))
            await self.product_stock_input.fill(str(stock))

            if await self.product_active_toggle.is_checked() != is_active:
                await self.product_active_toggle.click()

    async def save_product(self) -> None:
        await self.save_product_button.click()

    async def cancel_product_modal(self) -> None:
        await self.cancel_product_button.click()

    async def upload_product_image(self, file_path: Union[str, Path]) -> None:
        await self.product_image_upload.set_input_files(str(file_path))

    # =========================================================================
    # Order management
    # =========================================================================

    def get_order_row(self, order_id: str) -> Locator:
        return self.order_rows.filter(has_text=order_id)

    def get_order_status_dropdown(self, order_id: str) -> Locator:
        return self.get_order_row(order_id).get_by_role("combobox")

    async def update_order_status(self, order_id: str, new_status: str) -> None:
        """Select ``new_status`` by its visible label, e.g. "Processing"."""
        with allure.step(f"Set order {order_id} status to {new_status}"):
            await self.get_order_status_dropdown(order_id).select_option(label=new_status)
            logger.debug(f"Order {order_id} status changed to {new_status}")

    def get_low_stock_item(self, product_name: str) -> Locator:
        return self.low_stock_items.filter(has_text=product_name)

    def get_recent_order_item(self, order_id: str) -> Locator:
        return self.recent_order_items.filter(has_text=order_id)

    async def has_admin_access(self) -> bool:
        """False while the access-denied message is shown."""
        return not await self.access_denied_message.first.is_visible()


__all__ = ["AdminPage"]
