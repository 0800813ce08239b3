"""
================================================================================
Checkout Page Object (Async / Playwright)
================================================================================

``/checkout``: shipping and payment form, order summary and Place Order.
Guests are redirected to /login; an empty cart shows the empty-cart state
instead of the form.

================================================================================
"""

from __future__ import annotations

import re
from typing import List

import allure
from playwright.async_api import Locator

from testsuites.test_data import CheckoutData, PaymentInfo, ShippingInfo
from testsuites.ui_testing.framework.element_actions import text_or_empty
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.pages.catalog_page import PRICE_PATTERN


class CheckoutPage(PageBase):
    """Checkout page object (async)."""

    URL_PATH = "/checkout"
    PAGE_TITLE = "Checkout"

    @property
    def page_heading(self) -> Locator:
        return self.page.get_by_role("heading", name=re.compile("Checkout", re.I), level=1)

    @property
    def empty_cart_message(self) -> Locator:
        return self.page.get_by_text(re.compile("Your cart is empty", re.I))

    @property
    def continue_shopping_button(self) -> Locator:
        return self.page.get_by_role("link", name=re.compile("Continue Shopping", re.I))

    # Shipping ------------------------------------------------------------

    @property
    def shipping_section(self) -> Locator:
        return self.page.get_by_role("heading", name=re.compile("Shipping Information", re.I)).locator("..")

    @property
    def first_name_input(self) -> Locator:
        return self.page.get_by_label("First Name")

    @property
    def last_name_input(self) -> Locator:
        return self.page.get_by_label("Last Name")

    @property
    def address_input(self) -> Locator:
        # The address textarea has a placeholder but no label
        return self.page.get_by_placeholder("Enter your full address")

    # Payment -------------------------------------------------------------

    @property
    def payment_section(self) -> Locator:
        return self.page.get_by_role("group", name=re.compile("Payment Information", re.I))

    @property
    def card_number_input(self) -> Locator:
        return self.page.get_by_label(re.compile("Card Number", re.I))

    @property
    def expiry_date_input(self) -> Locator:
        return self.page.get_by_label(re.compile(r"Expiry Date|Expiration", re.I))

    @property
    def cvv_input(self) -> Locator:
        return self.page.get_by_label(re.compile(r"CVV|CVC|Security Code", re.I))

    @property
    def cardholder_name_input(self) -> Locator:
        return self.page.get_by_label(re.compile(r"Name on Card|Cardholder Name", re.I))

    # Summary -------------------------------------------------------------

    @property
    def order_summary_section(self) -> Locator:
        return self.page.get_by_role("region", name=re.compile("Order Summary", re.I))

    @property
    def order_items(self) -> Locator:
        return self.page.get_by_role("listitem")

    @property
    def subtotal_amount(self) -> Locator:
        return self.page.get_by_text(re.compile("Subtotal", re.I)).locator("..").get_by_text(PRICE_PATTERN)

    @property
    def total_amount(self) -> Locator:
        return self.page.get_by_text(re.compile(r"^Total$", re.I)).locator("..").get_by_text(PRICE_PATTERN)

    @property
    def place_order_button(self) -> Locator:
        # Name includes the amount, e.g. "Place Order - $129.99"
        return self.page.get_by_role("button", name=re.compile("Place Order", re.I))

    @property
    def validation_errors(self) -> Locator:
        return self.page.get_by_role("alert")

    # =========================================================================
    # Actions
    # =========================================================================

    @allure.step("Fill shipping information")
    async def fill_shipping_info(self, shipping: ShippingInfo) -> None:
        await self.first_name_input.fill(shipping.first_name)
        await self.last_name_input.fill(shipping.last_name)
        await self.address_input.fill(shipping.address)

    @allure.step("Fill payment information")
    async def fill_payment_info(self, payment: PaymentInfo) -> None:
        await self.card_number_input.fill(payment.card_number)
        await self.expiry_date_input.fill(payment.expiry_date)
        await self.cvv_input.fill(payment.cvv)
        await self.cardholder_name_input.fill(payment.cardholder_name)

    async def fill_checkout_form(self, data: CheckoutData) -> None:
        await self.fill_shipping_info(data.shipping)
        await self.fill_payment_info(data.payment)

    @allure.step("Place order")
    async def click_place_order(self) -> None:
        await self.place_order_button.click()

    async def complete_checkout(self, data: CheckoutData) -> None:
        await self.fill_checkout_form(data)
        await self.click_place_order()

    async def get_validation_errors(self) -> List[str]:
        """Texts of every visible alert; empty list when the form is valid."""
        messages = []
        for text in await self.validation_errors.all_text_contents():
            if text.strip():
                messages.append(text.strip())
        return messages

    async def is_checkout_form_visible(self) -> bool:
        return await self.first_name_input.is_visible()

    async def get_total_amount_text(self) -> str:
        return await text_or_empty(self.total_amount)

    def get_field_error(self, field_label: str) -> Locator:
        """Alert rendered next to the input labelled ``field_label``."""
        return self.page.get_by_label(field_label).locator("..").get_by_role("alert")


__all__ = ["CheckoutPage"]
