"""Footer component (``contentinfo`` landmark) with Products, Sign In and Cart links."""

from __future__ import annotations

import re

import allure
from playwright.async_api import Locator, Page


class Footer:
    """Page component for the site footer."""

    def __init__(self, page: Page):
        self.page = page

    @property
    def container(self) -> Locator:
        return self.page.get_by_role("contentinfo")

    @property
    def products_link(self) -> Locator:
        return self.container.get_by_role("link", name="Products")

    @property
    def sign_in_link(self) -> Locator:
        return self.container.get_by_role("link", name=re.compile("Sign In", re.I))

    @property
    def cart_link(self) -> Locator:
        return self.container.get_by_role("link", name=re.compile("Cart", re.I))

    @allure.step("Footer: click Products")
    async def click_products(self) -> None:
        await self.products_link.click()

    @allure.step("Footer: click Sign In")
    async def click_sign_in(self) -> None:
        await self.sign_in_link.click()

    @allure.step("Footer: click Cart")
    async def click_cart(self) -> None:
        await self.cart_link.click()

    async def is_sign_in_visible(self) -> bool:
        return await self.sign_in_link.is_visible()


__all__ = ["Footer"]
