"""Routes, user-facing messages and order statuses of the QADemo storefront."""

from typing import Dict, List

URLS: Dict[str, str] = {
    "home": "/",
    "login": "/login",
    "catalog": "/catalog",
    "cart": "/cart",
    "checkout": "/checkout",
    "orders": "/orders",
    "admin": "/admin",
}

ERROR_MESSAGES: Dict[str, str] = {
    "invalid_credentials": "Invalid username or password",
    "account_locked": "Account is locked",
    "empty_cart": "Your cart is empty",
    "invalid_card_number": "Invalid card number. Please check and try again.",
    "out_of_stock": "is out of stock",
    "not_found": "Not Found",
    "unauthorized": "Unauthorized",
    "forbidden": "Forbidden",
}

SUCCESS_MESSAGES: Dict[str, str] = {
    "order_confirmed": "Order Confirmed",
    "added_to_cart": "In Cart",
    "logged_out": "Sign In",
}

ORDER_STATUSES: List[str] = ["Pending", "Processing", "Shipped", "Delivered", "Cancelled"]

__all__ = ["URLS", "ERROR_MESSAGES", "SUCCESS_MESSAGES", "ORDER_STATUSES"]
