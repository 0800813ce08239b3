"""Product detail page (``/products/<slug>``)."""

from __future__ import annotations

import re

import allure
from playwright.async_api import Locator

from testsuites.ui_testing.framework.element_actions import text_or_empty
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.pages.catalog_page import PRICE_PATTERN


class ProductDetailPage(PageBase):
    """Product detail page object (async)."""

    URL_PATH = "/products"

    @property
    def product_image(self) -> Locator:
        return self.page.get_by_role("img", name=re.compile("product", re.I))

    @property
    def product_name(self) -> Locator:
        return self.page.get_by_role("heading", level=1)

    @property
    def product_description(self) -> Locator:
        return self.page.get_by_role("article").locator("p")

    @property
    def product_price(self) -> Locator:
        return self.page.get_by_text(PRICE_PATTERN)

    @property
    def stock_availability(self) -> Locator:
        return self.page.get_by_text(re.compile(r"In Stock|Out of Stock|Low Stock", re.I))

    @property
    def add_to_cart_button(self) -> Locator:
        return self.page.get_by_role("button", name="Add to Cart")

    @property
    def in_cart_button(self) -> Locator:
        return self.page.get_by_role("button", name=re.compile("In Cart", re.I))

    @property
    def back_to_products_link(self) -> Locator:
        return self.page.get_by_role("link", name=re.compile("Back to Products", re.I))

    @property
    def not_found_message(self) -> Locator:
        return self.page.get_by_text(re.compile(r"404|Not Found", re.I))

    async def goto(self, product_slug: str = "", wait_for: str = "domcontentloaded") -> None:
        await self.navigate_to(f"{self.URL_PATH}/{product_slug}", wait_for=wait_for)

    @allure.step("Add product to cart from detail page")
    async def add_to_cart(self) -> None:
        await self.add_to_cart_button.click()

    async def click_in_cart_button(self) -> None:
        await self.in_cart_button.click()

    async def click_back_to_products(self) -> None:
        await self.back_to_products_link.click()

    async def get_product_name_text(self) -> str:
        return await text_or_empty(self.product_name)

    async def get_product_description_text(self) -> str:
        return await text_or_empty(self.product_description)

    async def get_product_price_text(self) -> str:
        return await text_or_empty(self.product_price)

    async def is_add_to_cart_enabled(self) -> bool:
        return await self.add_to_cart_button.is_enabled()


__all__ = ["ProductDetailPage"]
