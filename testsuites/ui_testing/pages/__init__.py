"""
QADemo Page Objects

One class per storefront page; each takes a Playwright ``Page`` and exposes
lazy locators plus async actions.
"""

from .admin_page import AdminPage
from .cart_page import CartPage
from .catalog_page import CatalogPage
from .checkout_page import CheckoutPage
from .home_page import HomePage
from .login_page import LoginPage
from .order_detail_page import OrderDetailPage
from .orders_page import OrdersPage
from .product_detail_page import ProductDetailPage

__all__ = [
    "AdminPage",
    "CartPage",
    "CatalogPage",
    "CheckoutPage",
    "HomePage",
    "LoginPage",
    "OrderDetailPage",
    "OrdersPage",
    "ProductDetailPage",
]
