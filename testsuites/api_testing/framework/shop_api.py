"""
================================================================================
QADemo REST API
================================================================================

One method per QADemo backend endpoint. Each method validates the
``{success, data}`` envelope and returns the unwrapped ``data``; the raw
``httpx.Response`` of the last call stays available as ``last_response`` for
status-code assertions.

Endpoints (relative to ``api.base_url``):
    POST   /auth/login
    GET    /products/id/:id
    POST   /cart/items                   (X-Session-ID)
    PATCH  /cart/items/:productId        (X-Session-ID)
    GET    /cart                         (X-Session-ID)
    POST   /orders                       (Bearer + X-Session-ID)
    GET    /orders/:id                   (Bearer)
    PATCH  /admin/orders/:id/status      (Bearer, admin)
    GET    /admin/orders/:id             (Bearer, admin)
    PATCH  /admin/products/:id/stock     (Bearer, admin)
    GET    /admin/products               (Bearer, admin)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import allure
import httpx
from loguru import logger

from .http_client import HttpClient


class ApiResponseError(Exception):
    """Raised when a response is not a successful ``{success, data}`` envelope."""

    def __init__(self, message: str, response: Optional[httpx.Response] = None):
        super().__init__(message)
        self.response = response

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response is not None else None


class QADemoApi:
    """
    Typed facade over the QADemo REST API.

    Usage:
        >>> with HttpClient(config) as client:
        ...     api = QADemoApi(client)
        ...     api.add_to_cart(session_id, product_id=1, quantity=1)
        ...     order = api.place_order(STANDARD_USER, session_id, VALID_CHECKOUT_DATA.to_api())
        ...     assert api.last_response.status_code == 201
    """

    def __init__(self, client: HttpClient):
        self.client = client
        self.last_response: Optional[httpx.Response] = None

    # =========================================================================
    # Authentication
    # =========================================================================

    def login(self, user: Any) -> Dict[str, Any]:
        """
        Log in and return ``{accessToken, user: {username, userType, ...}}``.

        Goes straight to the endpoint without the token cache.
        """
        with allure.step(f"API: login as {user.username}"):
            response = self.client.post(
                "/auth/login",
                json={"username": user.username, "password": user.password},
            )
            return self._unwrap(response)

    # =========================================================================
    # Catalog
    # =========================================================================

    @allure.step("API: get product {product_id}")
    def get_product(self, product_id: int) -> Dict[str, Any]:
        return self._unwrap(self.client.get(f"/products/id/{product_id}"))

    # =========================================================================
    # Cart (anonymous, keyed by session id)
    # =========================================================================

    @allure.step("API: add product {product_id} x{quantity} to cart")
    def add_to_cart(self, session_id: str, product_id: int, quantity: int = 1) -> Dict[str, Any]:
        """Returns ``{productId, quantity, totalItems}``."""
        response = self.client.post(
            "/cart/items",
            session_id=session_id,
            json={"productId": product_id, "quantity": quantity},
        )
        return self._unwrap(response)

    @allure.step("API: set cart quantity of product {product_id} to {quantity}")
    def update_cart_item(self, session_id: str, product_id: int, quantity: int) -> Dict[str, Any]:
        response = self.client.patch(
            f"/cart/items/{product_id}",
            session_id=session_id,
            json={"quantity": quantity},
        )
        return self._unwrap(response)

    @allure.step("API: get cart")
    def get_cart(self, session_id: str) -> Dict[str, Any]:
        """Returns ``{items: [{productId, quantity, ...}], totalItems}``."""
        return self._unwrap(self.client.get("/cart", session_id=session_id))

    # =========================================================================
    # Orders
    # =========================================================================

    @allure.step("API: place order")
    def place_order(self, user: Any, session_id: str, checkout: Dict[str, Any]) -> Dict[str, Any]:
        """
        Turn the session cart into an order owned by ``user``.

        Args:
            user: Account placing the order
            session_id: Cart session
            checkout: ``{shipping: {...}, payment: {...}}`` (``CheckoutData.to_api()``)
        """
        response = self.client.post("/orders", user=user, session_id=session_id, json=checkout)
        order = self._unwrap(response)
        logger.info(f"Order created with ID: {order.get('id')}")
        return order

    @allure.step("API: get order {order_id}")
    def get_order(self, user: Any, order_id: int) -> Dict[str, Any]:
        return self._unwrap(self.client.get(f"/orders/{order_id}", user=user))

    # =========================================================================
    # Admin
    # =========================================================================

    @allure.step("API (admin): set order {order_id} status to {status}")
    def update_order_status(self, admin: Any, order_id: int, status: str) -> Dict[str, Any]:
        response = self.client.patch(
            f"/admin/orders/{order_id}/status",
            user=admin,
            json={"status": status},
        )
        return self._unwrap(response)

    @allure.step("API (admin): get order {order_id}")
    def admin_get_order(self, admin: Any, order_id: int) -> Dict[str, Any]:
        return self._unwrap(self.client.get(f"/admin/orders/{order_id}", user=admin))

    @allure.step("API (admin): set product {product_id} stock to {stock}")
    def update_product_stock(self, admin: Any, product_id: int, stock: int) -> Dict[str, Any]:
        response = self.client.patch(
            f"/admin/products/{product_id}/stock",
            user=admin,
            json={"stock": stock},
        )
        return self._unwrap(response)

    @allure.step("API (admin): list products")
    def list_products(self, admin: Any) -> List[Dict[str, Any]]:
        return self._unwrap(self.client.get("/admin/products", user=admin))

    # =========================================================================
    # Envelope handling
    # =========================================================================

    def _unwrap(self, response: httpx.Response) -> Any:
        """
        Return ``data`` from a successful envelope.

        Raises:
            ApiResponseError: On HTTP errors, non-JSON bodies or
                ``success != true``
        """
        self.last_response = response

        try:
            body = response.json()
        except ValueError as e:
            raise ApiResponseError(
                f"{response.request.method} {response.request.url} returned non-JSON "
                f"body (HTTP {response.status_code})",
                response,
            ) from e

        if not response.is_success or not isinstance(body, dict) or body.get("success") is not True:
            error = body.get("error") if isinstance(body, dict) else None
            raise ApiResponseError(
                f"{response.request.method} {response.request.url} failed "
                f"(HTTP {response.status_code}): {error or body}",
                response,
            )

        if "data" not in body:
            raise ApiResponseError(
                f"{response.request.method} {response.request.url} envelope has no data",
                response,
            )
        return body["data"]


__all__ = [
    "ApiResponseError",
    "QADemoApi",
]
