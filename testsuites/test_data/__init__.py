"""
================================================================================
QADemo Test Data
================================================================================

Single source of truth for accounts, checkout records, routes and expected
messages. Tests import from here instead of hard-coding literals.

================================================================================
"""

from .checkout import (
    ALT_SHIPPING_ADDRESSES,
    EMPTY_PAYMENT,
    EMPTY_SHIPPING,
    EXPIRED_CARD,
    INVALID_CARD_NUMBER,
    PARTIAL_PAYMENT,
    PARTIAL_SHIPPING,
    VALID_CHECKOUT_DATA,
    VALID_PAYMENT,
    VALID_SHIPPING,
    CheckoutData,
    PaymentInfo,
    ShippingInfo,
)
from .constants import ERROR_MESSAGES, ORDER_STATUSES, SUCCESS_MESSAGES, URLS
from .users import (
    ADMIN_USER,
    ALL_USERS,
    EMPTY_CREDENTIALS,
    INVALID_CREDENTIALS,
    LOCKED_USER,
    STANDARD_USER,
    Credentials,
    TestUser,
    UserType,
)

__all__ = [
    "ADMIN_USER",
    "ALL_USERS",
    "ALT_SHIPPING_ADDRESSES",
    "CheckoutData",
    "Credentials",
    "EMPTY_CREDENTIALS",
    "EMPTY_PAYMENT",
    "EMPTY_SHIPPING",
    "ERROR_MESSAGES",
    "EXPIRED_CARD",
    "INVALID_CARD_NUMBER",
    "INVALID_CREDENTIALS",
    "LOCKED_USER",
    "ORDER_STATUSES",
    "PARTIAL_PAYMENT",
    "PARTIAL_SHIPPING",
    "PaymentInfo",
    "STANDARD_USER",
    "SUCCESS_MESSAGES",
    "ShippingInfo",
    "TestUser",
    "URLS",
    "UserType",
    "VALID_CHECKOUT_DATA",
    "VALID_PAYMENT",
    "VALID_SHIPPING",
]
