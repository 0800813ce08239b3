"""
Storage-state generation for the standard and admin accounts.

Runs the login flow through the real form and saves each session under
``ui.storage_state_dir`` so other tests can start signed in.
"""

import json

import allure
import pytest

from testsuites.test_data import ADMIN_USER, STANDARD_USER, TestUser
from testsuites.ui_testing.framework.auth_setup import ensure_storage_state
from testsuites.ui_testing.framework.browser_manager import BrowserManager


pytestmark = [
    pytest.mark.asyncio(loop_scope="session"),
    pytest.mark.setup,
    pytest.mark.auth,
    pytest.mark.requires_external,
]


@allure.epic("UI Testing")
@allure.feature("Authentication Setup")
class TestAuthSetup:

    @allure.title("Authenticate as {user.username} and save storage state")
    @allure.severity(allure.severity_level.BLOCKER)
    @pytest.mark.p1
    @pytest.mark.parametrize("user", [STANDARD_USER, ADMIN_USER], ids=lambda u: u.username)
    async def test_authenticate(self, browser_manager: BrowserManager, user: TestUser):
        with allure.step(f"Log in as {user.username} and save the session"):
            path = await ensure_storage_state(browser_manager, user, force=True)

        with allure.step("Verify the saved state holds session data"):
            state = json.loads(path.read_text(encoding="utf-8"))
            assert path.name == f"{user.storage_state_name}.json"
            assert state.get("cookies") or state.get("origins"), \
                f"Storage state for {user.username} is empty"
