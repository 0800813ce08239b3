"""Price, card and URL helpers for the QADemo suites."""

from .qademo_data import (
    TEST_CARD_NUMBER,
    extract_order_id_from_url,
    format_price,
    generate_future_expiry_date,
    generate_random_cvv,
    generate_slug,
    is_valid_card_number,
    is_valid_email,
    parse_price,
)

__all__ = [
    "TEST_CARD_NUMBER",
    "extract_order_id_from_url",
    "format_price",
    "generate_future_expiry_date",
    "generate_random_cvv",
    "generate_slug",
    "is_valid_card_number",
    "is_valid_email",
    "parse_price",
]
