"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

``/login``: username/password form, error alert and the "Test Credentials"
quick-fill buttons.

The Sign In button is scoped to ``main`` because the navbar has a Sign In
link with the same accessible name.

================================================================================
"""

from __future__ import annotations

import re
from typing import Union

import allure
from loguru import logger
from playwright.async_api import Locator

from testsuites.test_data import Credentials, TestUser
from testsuites.ui_testing.framework.element_actions import text_or_empty
from testsuites.ui_testing.framework.page_base import PageBase


class LoginPage(PageBase):
    """Login page object (async)."""

    URL_PATH = "/login"
    PAGE_TITLE = "Sign In"

    # Milliseconds to wait for the post-login redirect
    LOGIN_REDIRECT_TIMEOUT = 10000

    @property
    def username_input(self) -> Locator:
        return self.page.get_by_label("Username")

    @property
    def password_input(self) -> Locator:
        return self.page.get_by_label("Password")

    @property
    def sign_in_button(self) -> Locator:
        return self.page.get_by_role("main").get_by_role("button", name="Sign In")

    @property
    def error_message(self) -> Locator:
        return self.page.get_by_role("alert")

    @property
    def back_to_home_link(self) -> Locator:
        return self.page.get_by_role("link", name="Back to Home")

    @property
    def test_credentials_section(self) -> Locator:
        return self.page.get_by_text("Test Credentials")

    @property
    def standard_user_credential(self) -> Locator:
        return self.page.get_by_role("button", name=re.compile("Standard User", re.I))

    @property
    def locked_user_credential(self) -> Locator:
        return self.page.get_by_role("button", name=re.compile("Locked User", re.I))

    @property
    def admin_user_credential(self) -> Locator:
        return self.page.get_by_role("button", name=re.compile("Admin User", re.I))

    async def fill_username(self, username: str) -> None:
        await self.username_input.fill(username)

    async def fill_password(self, password: str) -> None:
        await self.password_input.fill(password)

    async def click_sign_in(self) -> None:
        await self.sign_in_button.click()

    @allure.step("Login (username={username})")
    async def login(self, username: str, password: str) -> None:
        """
        Submit the login form and wait for the redirect away from /login.

        A failed login (error alert, locked account) leaves the browser on
        /login; the wait times out quietly and the caller asserts on the
        error message instead.
        """
        await self.fill_username(username)
        await self.fill_password(password)
        await self.click_sign_in()
        try:
            await self.page.wait_for_url(
                lambda url: "/login" not in url,
                timeout=self.LOGIN_REDIRECT_TIMEOUT,
            )
        except Exception:
            logger.debug(f"Still on {self.page.url} after login attempt for {username!r}")

    async def login_as(self, user: Union[TestUser, Credentials]) -> None:
        """Login with a record from ``testsuites.test_data``."""
        await self.login(user.username, user.password)

    async def click_standard_user_credential(self) -> None:
        await self.standard_user_credential.click()

    async def click_locked_user_credential(self) -> None:
        await self.locked_user_credential.click()

    async def click_admin_user_credential(self) -> None:
        await self.admin_user_credential.click()

    async def click_back_to_home(self) -> None:
        await self.back_to_home_link.click()

    async def get_error_message_text(self) -> str:
        """Error alert text; ``""`` when no alert is shown."""
        return await text_or_empty(self.error_message)


__all__ = ["LoginPage"]
