"""
================================================================================
Token Manager with Per-User Caching
================================================================================

Manages QADemo access tokens with:
    - Login through ``POST /auth/login`` per account (standard, admin ...)
    - Automatic refresh before expiration
    - Cross-process token caching using filelock (xdist workers share logins)
    - Singleton pattern

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Dict, Optional

import httpx
from filelock import FileLock
from loguru import logger


# Token cache configuration
TOKEN_CACHE_DIR = Path(__file__).parent.parent.parent / ".token_cache"
TOKEN_CACHE_FILE = TOKEN_CACHE_DIR / "cache.json"
TOKEN_LOCK_FILE = TOKEN_CACHE_DIR / "cache.lock"

# Default token TTL (1 hour in seconds); QADemo does not report an expiry
DEFAULT_TOKEN_TTL = 3600

# Refresh token when less than this many seconds remain
TOKEN_REFRESH_BUFFER = 300  # 5 minutes

LOGIN_ENDPOINT = "/auth/login"


class TokenError(Exception):
    """Raised when token operations fail."""
    pass


class TokenManager:
    """
    Token manager with automatic refresh and cross-process caching.

    Tokens are kept per username, so one manager serves both the shopper
    and the admin account. Any object with ``username`` and ``password``
    attributes can be passed as a user.

    Usage:
        >>> token_manager = TokenManager.instance(config)
        >>> headers = token_manager.auth_headers(STANDARD_USER)
        >>> # {"Authorization": "Bearer eyJ..."}
    """

    _instance: Optional["TokenManager"] = None

    def __new__(cls, config=None) -> "TokenManager":
        """Singleton pattern - return existing instance if available."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config=None) -> None:
        """
        Initialize token manager.

        Args:
            config: ConfigLoader instance for configuration access
        """
        if getattr(self, "_initialized", False):
            return

        self.config = config
        self.transport: Optional[httpx.BaseTransport] = None
        self._tokens: Dict[str, Dict[str, Any]] = {}

        TOKEN_CACHE_DIR.mkdir(parents=True, exist_ok=True)

        self._initialized = True

    @classmethod
    def instance(cls, config=None) -> "TokenManager":
        """
        Get singleton instance of TokenManager.

        Args:
            config: ConfigLoader instance (required on first call)
        """
        if cls._instance is None:
            cls._instance = cls(config)
        return cls._instance

    # =========================================================================
    # Public API
    # =========================================================================

    def token_for(self, user: Any) -> str:
        """
        Return a valid access token for ``user``, logging in if necessary.

        Checks, in order: the in-memory token, the shared file cache (another
        worker may have logged in already), then a fresh login.
        """
        entry = self._valid_entry(user.username)
        if entry is None:
            entry = self._fetch_token(user)
        return entry["token"]

    def user_info(self, user: Any) -> Dict[str, Any]:
        """The ``user`` object returned by the login call (id, username, userType)."""
        self.token_for(user)
        return dict(self._tokens[user.username].get("user") or {})

    def auth_headers(self, user: Any) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token_for(user)}"}

    def apply(self, headers: Dict[str, str], user: Any = None) -> Dict[str, str]:
        """
        Return ``headers`` with the Bearer token of ``user`` added.

        Anonymous requests (``user`` is None) are returned unchanged.
        """
        result = dict(headers)
        if user is not None:
            result.update(self.auth_headers(user))
        return result

    def invalidate(self, username: Optional[str] = None) -> None:
        """
        Invalidate the token of ``username``, or every token when omitted.

        Forces the next request to log in again.
        """
        if username is None:
            self._tokens.clear()
        else:
            self._tokens.pop(username, None)

        with FileLock(str(TOKEN_LOCK_FILE)):
            if username is None:
                if TOKEN_CACHE_FILE.exists():
                    TOKEN_CACHE_FILE.unlink()
                return
            cache = self._load_cache()
            if cache.pop(username, None) is not None:
                self._write_cache(cache)

    @classmethod
    def reset(cls, clear_cache: bool = True) -> None:
        """
        Drop the singleton instance.

        With ``clear_cache=False`` the shared file cache survives, so other
        workers and later runs keep reusing valid logins.
        """
        if cls._instance and clear_cache:
            cls._instance.invalidate()
        cls._instance = None

    # =========================================================================
    # Internals
    # =========================================================================

    def _valid_entry(self, username: str) -> Optional[Dict[str, Any]]:
        deadline = time.time() + TOKEN_REFRESH_BUFFER

        entry = self._tokens.get(username)
        if entry and entry["expires_at"] > deadline:
            return entry

        cached = self._load_cache().get(username)
        if cached and cached.get("expires_at", 0) > deadline:
            self._tokens[username] = cached
            return cached
        return None

    def _fetch_token(self, user: Any) -> Dict[str, Any]:
        """
        Log in and cache the token.

        The file lock prevents several workers from logging the same user in
        at once.
        """
        with FileLock(str(TOKEN_LOCK_FILE)):
            # Double-check cache after acquiring lock
            entry = self._valid_entry(user.username)
            if entry is not None:
                return entry

            token_data = self._request_new_token(user)
            ttl = token_data.get("ttl", DEFAULT_TOKEN_TTL)
            entry = {
                "token": token_data["token"],
                "user": token_data.get("user"),
                "expires_at": time.time() + ttl,
            }
            self._tokens[user.username] = entry

            cache = self._load_cache()
            cache[user.username] = entry
            self._write_cache(cache)

            logger.info(f"Token refreshed and cached for {user.username}")
            return entry

    def _request_new_token(self, user: Any) -> Dict[str, Any]:
        """
        Log ``user`` in through the authentication API.

        Returns:
            Dictionary with token, user and optional ttl

        Raises:
            TokenError: On HTTP errors or an unsuccessful envelope
        """
        base_url = self.config.get("api.base_url", "https://qademo.com/api") if self.config else ""
        timeout = float(self.config.get("api.timeout", 30)) if self.config else 30.0

        try:
            with httpx.Client(timeout=timeout, transport=self.transport) as client:
                response = client.post(
                    f"{base_url.rstrip('/')}{LOGIN_ENDPOINT}",
                    json={"username": user.username, "password": user.password},
                )
                response.raise_for_status()
                body = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TokenError(f"Failed to log in as {user.username}: {e}") from e

        data = body.get("data") or {}
        if body.get("success") is not True or not data.get("accessToken"):
            raise TokenError(f"Login for {user.username} returned no access token: {body}")

        return {"token": data["accessToken"], "user": data.get("user")}

    def _load_cache(self) -> Dict[str, Dict[str, Any]]:
        """Load the username -> token map from the file cache."""
        try:
            if TOKEN_CACHE_FILE.exists():
                with open(TOKEN_CACHE_FILE, "r") as f:
                    data = json.load(f)
                    return data if isinstance(data, dict) else {}
        except (json.JSONDecodeError, IOError):
            pass
        return {}

    def _write_cache(self, cache: Dict[str, Dict[str, Any]]) -> None:
        try:
            TOKEN_CACHE_DIR.mkdir(parents=True, exist_ok=True)
            with open(TOKEN_CACHE_FILE, "w") as f:
                json.dump(cache, f)
        except IOError as e:
            logger.warning(f"Failed to cache token: {e}")


__all__ = [
    "TokenManager",
    "TokenError",
]
