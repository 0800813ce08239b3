"""Home page (``/``): hero banner, calls to action and featured products."""

from __future__ import annotations

import re

import allure
from playwright.async_api import Locator

from testsuites.ui_testing.framework.page_base import PageBase


class HomePage(PageBase):
    """Home page object (async)."""

    URL_PATH = "/"

    @property
    def hero_section(self) -> Locator:
        return self.page.get_by_role("banner")

    @property
    def welcome_message(self) -> Locator:
        return self.page.get_by_role("heading", level=1)

    @property
    def shop_now_button(self) -> Locator:
        return self.page.get_by_role("link", name=re.compile("Shop Now", re.I))

    @property
    def browse_products_button(self) -> Locator:
        return self.page.get_by_role("link", name=re.compile("Browse Products", re.I))

    @property
    def logo(self) -> Locator:
        return self.page.get_by_role("img", name=re.compile("QA Demo", re.I))

    @property
    def featured_products_grid(self) -> Locator:
        return self.page.get_by_role("region", name=re.compile("Featured Products", re.I))

    @property
    def featured_products_heading(self) -> Locator:
        return self.page.get_by_role("heading", name=re.compile("Featured Products", re.I))

    @property
    def product_cards(self) -> Locator:
        return self.page.get_by_role("article")

    @allure.step("Click Shop Now")
    async def click_shop_now(self) -> None:
        await self.shop_now_button.click()

    @allure.step("Click Browse Products")
    async def click_browse_products(self) -> None:
        await self.browse_products_button.click()

    async def click_primary_cta(self) -> None:
        """Click Shop Now, or Browse Products on builds that only show that one."""
        if await self.shop_now_button.first.is_visible():
            await self.shop_now_button.first.click()
        else:
            await self.browse_products_button.first.click()

    async def click_featured_product(self, product_name: str) -> None:
        await self.page.get_by_role("link", name=product_name).first.click()

    async def add_featured_product_to_cart(self, product_name: str) -> None:
        card = self.product_cards.filter(has_text=product_name)
        await card.get_by_role("button", name="Add").click()

    async def get_featured_product_count(self) -> int:
        return await self.product_cards.count()


__all__ = ["HomePage"]
