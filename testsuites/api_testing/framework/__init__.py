"""
================================================================================
API Testing Framework
================================================================================

Components for the QADemo REST API suite.

Modules:
    - http_client: HTTP client with retry and Allure logging
    - config_loader: YAML configuration management
    - token_manager: Per-account login token handling
    - shop_api: One method per QADemo endpoint
    - response_validator: Envelope and field rule validation
    - wait_helpers: Backoff polling for eventually-consistent state

Author: Automation Team
License: MIT
================================================================================
"""

from .config_loader import ConfigLoader, ConfigurationError
from .http_client import HttpClient, HttpClientError, RateLimitExceeded
from .response_validator import ResponseValidator, ValidationType
from .shop_api import ApiResponseError, QADemoApi
from .token_manager import TokenManager, TokenError
from .wait_helpers import WaitTimeoutError, wait_for_product_stock, wait_with_backoff

__all__ = [
    "ApiResponseError",
    "ConfigLoader",
    "ConfigurationError",
    "HttpClient",
    "HttpClientError",
    "QADemoApi",
    "RateLimitExceeded",
    "ResponseValidator",
    "TokenManager",
    "TokenError",
    "ValidationType",
    "WaitTimeoutError",
    "wait_for_product_stock",
    "wait_with_backoff",
]
