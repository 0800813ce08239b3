"""
================================================================================
Test Data Generator
================================================================================

Small parsing, validation and value helpers used by the QADemo test suites:
prices, card numbers and expiry dates, order-id extraction and slugs.

Features:
- Price formatting and parsing ("$12.50" <-> 12.5)
- Test card numbers, future expiry dates (MMYY) and CVVs
- Luhn card validation

================================================================================
"""

import random
import re
import string
from datetime import date
from typing import Optional


# ================================================================================
# Constants
# ================================================================================

# Card number accepted by the QADemo payment stub
TEST_CARD_NUMBER = "4242424242424242"

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_ORDER_URL_PATTERN = re.compile(r"/orders/(\d+)")


# ================================================================================
# Prices
# ================================================================================

def format_price(price: float) -> str:
    """Format a number as a dollar price, e.g. ``12.5 -> "$12.50"``."""
    return f"${price:.2f}"


def parse_price(price_text: str) -> float:
    """
    Parse a price string into a float.

    Every character except digits and dots is dropped, so ``"$1,299.00"``
    parses to ``1299.0``. Returns ``0.0`` when nothing numeric remains.
    """
    cleaned = re.sub(r"[^\d.]", "", price_text or "")
    if not cleaned:
        return 0.0
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


# ================================================================================
# Payment Data
# ================================================================================

def generate_future_expiry_date(months_ahead: int = 12, today: Optional[date] = None) -> str:
    """
    Return an expiry date ``months_ahead`` months from today in MMYY format.
    """
    today = today or date.today()
    month_index = today.month - 1 + months_ahead
    year = today.year + month_index // 12
    month = month_index % 12 + 1
    return f"{month:02d}{year % 100:02d}"


def generate_random_cvv(length: int = 3) -> str:
    """Return a random CVV of 3 (Visa/Mastercard) or 4 (Amex) digits."""
    if length not in (3, 4):
        raise ValueError(f"CVV length must be 3 or 4, got {length}")
    return "".join(random.choice(string.digits) for _ in range(length))


def is_valid_card_number(card_number: str) -> bool:
    """
    Validate a card number with the Luhn checksum.

    Spaces and dashes are ignored; the number must have 13-19 digits.
    """
    digits = re.sub(r"[\s-]", "", card_number or "")
    if not digits.isdigit() or not 13 <= len(digits) <= 19:
        return False

    total = 0
    for index, char in enumerate(reversed(digits)):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


# ================================================================================
# Text Helpers
# ================================================================================

def extract_order_id_from_url(url: str) -> Optional[str]:
    """Return the numeric order id from a ``/orders/<id>`` URL, or None."""
    match = _ORDER_URL_PATTERN.search(url or "")
    return match.group(1) if match else None


def generate_slug(text: str) -> str:
    """
    Convert a product name into a URL slug.

    ``"Wireless Mouse (Pro)" -> "wireless-mouse-pro"``
    """
    slug = re.sub(r"[^a-z0-9]+", "-", (text or "").lower())
    return slug.strip("-")


def is_valid_email(email: str) -> bool:
    """Return True when the value looks like an email address."""
    return bool(_EMAIL_PATTERN.match(email or ""))


__all__ = [
    "TEST_CARD_NUMBER",
    "format_price",
    "parse_price",
    "generate_future_expiry_date",
    "generate_random_cvv",
    "is_valid_card_number",
    "extract_order_id_from_url",
    "generate_slug",
    "is_valid_email",
]
