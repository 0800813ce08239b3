"""
================================================================================
Checkout Test Data
================================================================================

Shipping and payment records for the checkout form and ``POST /orders``.
Card 4242 4242 4242 4242 passes the Luhn check; 1234 5678 9012 3456 does not.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class ShippingInfo:
    first_name: str
    last_name: str
    address: str

    def to_api(self) -> Dict[str, str]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "address": self.address,
        }


@dataclass(frozen=True)
class PaymentInfo:
    """
    Card details as typed into the checkout form.

    ``expiry_date`` is MMYY for the form; the REST API expects MM/YY, see
    :meth:`to_api`.
    """
    card_number: str
    expiry_date: str
    cvv: str
    cardholder_name: str

    @property
    def last_four(self) -> str:
        return self.card_number[-4:]

    def to_api(self) -> Dict[str, str]:
        expiry = self.expiry_date
        if len(expiry) == 4 and expiry.isdigit():
            expiry = f"{expiry[:2]}/{expiry[2:]}"
        return {
            "cardNumber": self.card_number,
            "expiryDate": expiry,
            "cvv": self.cvv,
            "cardholderName": self.cardholder_name,
        }


@dataclass(frozen=True)
class CheckoutData:
    shipping: ShippingInfo
    payment: PaymentInfo

    def to_api(self) -> Dict[str, Any]:
        """Request body for ``POST /orders``."""
        return {"shipping": self.shipping.to_api(), "payment": self.payment.to_api()}


VALID_SHIPPING = ShippingInfo(
    first_name="John",
    last_name="Doe",
    address="123 Test Street, Test City, TC 12345",
)

VALID_PAYMENT = PaymentInfo(
    card_number="4242424242424242",
    expiry_date="1226",
    cvv="123",
    cardholder_name="John Doe",
)

VALID_CHECKOUT_DATA = CheckoutData(shipping=VALID_SHIPPING, payment=VALID_PAYMENT)

INVALID_CARD_NUMBER = PaymentInfo(
    card_number="1234567890123456",
    expiry_date="1226",
    cvv="123",
    cardholder_name="John Doe",
)

EXPIRED_CARD = PaymentInfo(
    card_number="4242424242424242",
    expiry_date="0120",
    cvv="123",
    cardholder_name="John Doe",
)

EMPTY_SHIPPING = ShippingInfo(first_name="", last_name="", address="")

EMPTY_PAYMENT = PaymentInfo(card_number="", expiry_date="", cvv="", cardholder_name="")

# Only some fields filled, for required-field validation
PARTIAL_SHIPPING = ShippingInfo(first_name="John", last_name="", address="")

PARTIAL_PAYMENT = PaymentInfo(
    card_number="4242424242424242",
    expiry_date="",
    cvv="",
    cardholder_name="",
)

ALT_SHIPPING_ADDRESSES: List[ShippingInfo] = [
    ShippingInfo(
        first_name="Jane",
        last_name="Smith",
        address="456 Commerce Ave, Business District, BD 67890",
    ),
    ShippingInfo(
        first_name="Bob",
        last_name="Johnson",
        address="789 Market Street, Suite 100, Downtown, DT 11111",
    ),
]


__all__ = [
    "ShippingInfo",
    "PaymentInfo",
    "CheckoutData",
    "VALID_SHIPPING",
    "VALID_PAYMENT",
    "VALID_CHECKOUT_DATA",
    "INVALID_CARD_NUMBER",
    "EXPIRED_CARD",
    "EMPTY_SHIPPING",
    "EMPTY_PAYMENT",
    "PARTIAL_SHIPPING",
    "PARTIAL_PAYMENT",
    "ALT_SHIPPING_ADDRESSES",
]
