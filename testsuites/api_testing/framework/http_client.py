"""
================================================================================
HTTP Client with Allure Integration
================================================================================

HTTP client for the QADemo REST API featuring:
    - Automatic retry with exponential backoff
    - Rate limit (429) handling with Retry-After parsing
    - Allure reporting with cURL command generation
    - Per-request authentication (Bearer token per account)
    - Cart session header (``X-Session-ID``) for anonymous carts
    - Redaction of secrets in reports

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import time
from typing import Any, Dict, Optional

import allure
import httpx
from allure_commons.types import AttachmentType
from loguru import logger

from .config_loader import ConfigLoader
from .token_manager import TokenManager


# Maximum response length to include in Allure reports
MAX_RESPONSE_LENGTH = 3000

# Default retry settings
DEFAULT_RETRY_COUNT = 3
DEFAULT_RETRY_BACKOFF = 0.5
DEFAULT_RETRY_MAX_WAIT = 5.0

SESSION_HEADER = "X-Session-ID"

SENSITIVE_HEADERS = {"authorization", "x-api-key", "cookie", "set-cookie"}
SENSITIVE_BODY_KEYS = (
    "password", "secret", "token", "api_key", "authorization", "cardnumber", "cvv",
)


class HttpClientError(Exception):
    """Base exception for HTTP client errors."""
    pass


class RateLimitExceeded(HttpClientError):
    """Raised when rate limit is exceeded and all retries are exhausted."""
    pass


class HttpClient:
    """
    HTTP client with built-in resilience and reporting.

    Usage:
        >>> with HttpClient(config) as client:
        ...     response = client.get("/products/id/1")
        ...     response = client.post(
        ...         "/orders", json=payload, user=STANDARD_USER, session_id=cart_id
        ...     )
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """
        Initialize HTTP client with configuration.

        Args:
            config: Configuration loader instance. Creates new one if None.
            transport: Optional httpx transport (e.g. ``httpx.MockTransport``)
        """
        if config is None:
            config = ConfigLoader()

        self.config = config
        self.base_url = config.get("api.base_url", "https://qademo.com/api")
        self.timeout = int(config.get("api.timeout", 30))
        self.retry_count = int(config.get("api.retry_count", DEFAULT_RETRY_COUNT))
        self.retry_backoff = float(config.get("api.retry_backoff", DEFAULT_RETRY_BACKOFF))
        self.retry_max_wait = float(config.get("api.retry_max_wait", DEFAULT_RETRY_MAX_WAIT))

        self.transport = transport
        self.session: Optional[httpx.Client] = None
        self.token_manager = TokenManager.instance(config)

    def __enter__(self) -> "HttpClient":
        """Enter context manager - initialize HTTP session."""
        self.session = httpx.Client(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout),
            transport=self.transport,
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit context manager - close HTTP session."""
        if self.session:
            self.session.close()
            self.session = None

    def request(
        self,
        method: str,
        url: str,
        user: Any = None,
        session_id: Optional[str] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Execute HTTP request with automatic retry and Allure logging.

        All requests are automatically:
            - Retried on network errors with exponential backoff
            - Retried on 429 with Retry-After header parsing
            - Logged to Allure with full request/response details

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, PATCH)
            url: Request URL (relative to base_url)
            user: Account to authenticate as (Bearer token); anonymous if None
            session_id: Cart session identifier sent as ``X-Session-ID``
            **kwargs: Additional arguments passed to httpx.request

        Returns:
            httpx.Response object

        Raises:
            RateLimitExceeded: When rate limit retries are exhausted
            httpx.HTTPError: When network retries are exhausted
        """
        if self.session is None:
            raise HttpClientError(
                "HttpClient must be used within a context manager. "
                "Use 'with HttpClient() as client:'"
            )

        headers = self.token_manager.apply(kwargs.pop("headers", {}), user=user)
        if session_id:
            headers[SESSION_HEADER] = session_id
        kwargs["headers"] = headers

        for attempt in range(self.retry_count):
            try:
                response = self.session.request(method, url, **kwargs)

                # Handle rate limiting
                if response.status_code == 429:
                    retry_after = self._parse_retry_after(response)
                    logger.warning(
                        f"Rate limited (429). Waiting {retry_after}s before retry. "
                        f"Attempt {attempt + 1}/{self.retry_count}"
                    )
                    time.sleep(retry_after)
                    continue

                self._log_to_allure(method, url, kwargs, response)
                return response

            except (httpx.TimeoutException, httpx.NetworkError) as e:
                if attempt < self.retry_count - 1:
                    wait_time = self._calculate_backoff(attempt)
                    logger.warning(
                        f"Network error: {e}. Retrying in {wait_time}s. "
                        f"Attempt {attempt + 1}/{self.retry_count}"
                    )
                    time.sleep(wait_time)
                else:
                    logger.error(f"All retries exhausted. Last error: {e}")
                    raise

        # If we get here, rate limit retries were exhausted
        raise RateLimitExceeded(
            f"Rate limit exceeded after {self.retry_count} retries"
        )

    def get(self, url: str, **kwargs: Any) -> httpx.Response:
        """Execute GET request."""
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs: Any) -> httpx.Response:
        """Execute POST request."""
        return self.request("POST", url, **kwargs)

    def put(self, url: str, **kwargs: Any) -> httpx.Response:
        """Execute PUT request."""
        return self.request("PUT", url, **kwargs)

    def patch(self, url: str, **kwargs: Any) -> httpx.Response:
        """Execute PATCH request."""
        return self.request("PATCH", url, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> httpx.Response:
        """Execute DELETE request."""
        return self.request("DELETE", url, **kwargs)

    def _parse_retry_after(self, response: httpx.Response) -> float:
        """
        Parse Retry-After header from 429 response.

        Only the seconds form ("60") is honoured; a missing or HTTP-date
        value falls back to the base backoff.

        Returns:
            Wait time in seconds (capped at retry_max_wait)
        """
        retry_after = response.headers.get("Retry-After", "")

        try:
            wait_time = float(retry_after)
        except ValueError:
            wait_time = self.retry_backoff

        return min(wait_time, self.retry_max_wait)

    def _calculate_backoff(self, attempt: int) -> float:
        """
        Calculate exponential backoff wait time.

        Formula: base * (2 ^ attempt), capped at max_wait
        """
        wait_time = self.retry_backoff * (2 ** attempt)
        return min(wait_time, self.retry_max_wait)

    def _log_to_allure(
        self,
        method: str,
        url: str,
        kwargs: Dict[str, Any],
        response: httpx.Response,
    ) -> None:
        """
        Log HTTP request/response to Allure report.

        Attaches:
            - Request URL with query parameters
            - Request headers (redacted)
            - Request body (redacted, if present)
            - cURL command for reproduction
            - Response status
            - Response body (truncated if too long)
        """
        full_url = f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"
        params = kwargs.get("params")
        if params:
            query_string = "&".join(
                f"{k}={v}" for k, v in params.items() if v is not None
            )
            if query_string:
                full_url = f"{full_url}?{query_string}"

        status_emoji = "✅" if response.status_code < 400 else "❌"
        step_title = f"{status_emoji} {method} {url} → {response.status_code}"

        with allure.step(step_title):
            allure.attach(
                full_url,
                name="🔗 Request URL",
                attachment_type=AttachmentType.TEXT
            )

            headers = kwargs.get("headers", {})
            safe_headers = self._redact_headers(headers)
            if safe_headers:
                allure.attach(
                    json.dumps(safe_headers, ensure_ascii=False, indent=2),
                    name="📤 Request Headers",
                    attachment_type=AttachmentType.JSON
                )

            body = kwargs.get("json")
            safe_body = self._redact_body(body)
            if safe_body:
                allure.attach(
                    json.dumps(safe_body, ensure_ascii=False, indent=2),
                    name="📤 Request Body",
                    attachment_type=AttachmentType.JSON
                )

            if params:
                allure.attach(
                    json.dumps(params, ensure_ascii=False, indent=2),
                    name="📤 Query Params",
                    attachment_type=AttachmentType.JSON
                )

            curl_cmd = self._build_curl(method, full_url, safe_headers, safe_body)
            allure.attach(
                curl_cmd,
                name="🔧 cURL Command",
                attachment_type=AttachmentType.TEXT
            )

            allure.attach(
                f"{status_emoji} {response.status_code}",
                name="📥 Response Status",
                attachment_type=AttachmentType.TEXT
            )

            try:
                response_body = response.json()
                response_content = json.dumps(
                    self._redact_body(response_body), ensure_ascii=False, indent=2
                )
            except (json.JSONDecodeError, ValueError):
                response_content = response.text or "<empty>"

            if len(response_content) > MAX_RESPONSE_LENGTH:
                response_content = (
                    f"{response_content[:MAX_RESPONSE_LENGTH]}\n\n"
                    f"... [Truncated, full length: {len(response_content)} chars] ..."
                )

            allure.attach(
                response_content,
                name="📥 Response Body",
                attachment_type=AttachmentType.JSON
            )

    def _redact_headers(self, headers: Dict[str, Any]) -> Dict[str, Any]:
        """
        Mask sensitive header values before logging.

        ``X-Session-ID`` only identifies an anonymous cart and is kept.
        """
        masked = {}
        for key, value in headers.items():
            if key.lower() in SENSITIVE_HEADERS:
                masked[key] = "***MASKED***"
            else:
                masked[key] = value
        return masked

    def _redact_body(self, payload: Any) -> Any:
        """
        Recursively mask sensitive fields (credentials, tokens, card data).
        """
        if isinstance(payload, dict):
            redacted = {}
            for key, value in payload.items():
                if any(token in key.lower() for token in SENSITIVE_BODY_KEYS):
                    redacted[key] = "***MASKED***"
                else:
                    redacted[key] = self._redact_body(value)
            return redacted
        if isinstance(payload, list):
            return [self._redact_body(item) for item in payload]
        return payload

    def _build_curl(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[Dict[str, Any]],
    ) -> str:
        """
        Build cURL command for request reproduction.

        Headers and body are expected to be redacted already.
        """
        parts = [f"curl -X {method}"]

        for key, value in headers.items():
            parts.append(f"-H '{key}: {value}'")

        if body:
            body_json = json.dumps(body, ensure_ascii=False)
            parts.append(f"-d '{body_json}'")

        parts.append(f"'{url}'")

        return " \\\n  ".join(parts)


__all__ = [
    "HttpClient",
    "HttpClientError",
    "RateLimitExceeded",
    "SESSION_HEADER",
]
