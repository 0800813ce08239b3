"""
================================================================================
Authentication Setup
================================================================================

Logs a user in through the real login form once and saves the browser
context's storage state (cookies + localStorage), so authenticated tests
start already signed in instead of repeating the login flow.

Files live under ``ui.storage_state_dir`` as ``<user>-user.json``. Writes are
serialized with an ``AsyncFileLock`` so parallel workers generate each file
once and reuse it afterwards, without blocking the event loop while another
worker holds the lock.

================================================================================
"""

from __future__ import annotations

import re
import time
from pathlib import Path
from typing import Optional

import allure
from filelock import AsyncFileLock
from loguru import logger
from playwright.async_api import expect

from testsuites.api_testing.framework.config_loader import ConfigLoader
from testsuites.test_data import TestUser, UserType
from testsuites.ui_testing.components.nav_bar import NavBar
from testsuites.ui_testing.pages.login_page import LoginPage

from .browser_manager import BrowserManager


REPO_ROOT = Path(__file__).parent.parent.parent.parent


def storage_state_dir(config: Optional[ConfigLoader] = None) -> Path:
    """Directory for saved sessions; relative config paths resolve from the repo root."""
    config = config or ConfigLoader()
    directory = Path(config.get("ui.storage_state_dir", "playwright/.auth"))
    if not directory.is_absolute():
        directory = REPO_ROOT / directory
    return directory


def storage_state_path(user: TestUser, config: Optional[ConfigLoader] = None) -> Path:
    return storage_state_dir(config) / f"{user.storage_state_name}.json"


def is_state_fresh(path: Path, max_age: float, now: Optional[float] = None) -> bool:
    """True when ``path`` exists and was written less than ``max_age`` seconds ago."""
    if not path.exists():
        return False
    now = time.time() if now is None else now
    return (now - path.stat().st_mtime) < max_age


async def authenticate(manager: BrowserManager, user: TestUser, path: Path) -> Path:
    """
    Sign ``user`` in through the login form and save the session to ``path``.

    The login must land on ``/catalog``; for the admin account the exact
    "Admin" navbar link must be visible as well.
    """
    context = await manager.new_context()
    try:
        page = await context.new_page()
        login_page = LoginPage(page)

        with allure.step(f"Authenticate {user.username}"):
            await login_page.goto()
            await login_page.login_as(user)
            await expect(page).to_have_url(re.compile(r"/catalog"))

            if user.user_type == UserType.ADMIN:
                await expect(NavBar(page).admin_button).to_be_visible()

        await manager.save_storage_state(context, path)
    finally:
        await manager.close_context(context)

    return path


async def ensure_storage_state(
    manager: BrowserManager,
    user: TestUser,
    config: Optional[ConfigLoader] = None,
    force: bool = False,
) -> Path:
    """
    Return a usable storage-state file for ``user``, creating it if needed.

    An existing file younger than ``ui.storage_state_max_age`` seconds is
    reused unless ``force`` is set.
    """
    config = config or ConfigLoader()
    path = storage_state_path(user, config)
    max_age = float(config.get("ui.storage_state_max_age", 3600))

    path.parent.mkdir(parents=True, exist_ok=True)
    async with AsyncFileLock(str(path) + ".lock"):
        if not force and is_state_fresh(path, max_age):
            logger.debug(f"Reusing storage state for {user.username}: {path}")
            return path
        logger.info(f"Generating storage state for {user.username}")
        return await authenticate(manager, user, path)


__all__ = [
    "authenticate",
    "ensure_storage_state",
    "is_state_fresh",
    "storage_state_dir",
    "storage_state_path",
]
