"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Fixture composition for the QADemo browser suite: every page object and
component is a fixture built on the per-test ``page``.

Key Features:
- One browser per session (per xdist worker), one isolated context per test
- Page Object fixtures for all pages and components
- Saved login sessions for the standard and admin accounts
- Screenshot, URL and recent API responses attached on failure

================================================================================
"""

from pathlib import Path
from typing import AsyncGenerator, Optional

import allure
import pytest
import pytest_asyncio
from loguru import logger
from playwright.async_api import Browser, BrowserContext, Page, expect

from testsuites.api_testing.framework.config_loader import ConfigLoader
from testsuites.test_data import ADMIN_USER, STANDARD_USER, VALID_CHECKOUT_DATA
from testsuites.ui_testing.components import Footer, NavBar
from testsuites.ui_testing.framework.auth_setup import ensure_storage_state
from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.page_base import PageBase
from testsuites.ui_testing.framework.smart_locator import log_fallback_reports
from testsuites.ui_testing.pages import (
    AdminPage,
    CartPage,
    CatalogPage,
    CheckoutPage,
    HomePage,
    LoginPage,
    OrderDetailPage,
    OrdersPage,
    ProductDetailPage,
)


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser_manager(request) -> AsyncGenerator[BrowserManager, None]:
    """
    Session-scoped browser manager with a launched browser.

    A browser that cannot be launched (Playwright browsers not installed)
    skips the UI suite unless ``--require-live`` is given.
    """
    config = ConfigLoader()
    expect.set_options(timeout=int(config.get("ui.expect_timeout", 10000)))

    manager = BrowserManager(config=config)
    try:
        await manager.start()
    except Exception as e:
        if request.config.getoption("--require-live"):
            raise
        pytest.skip(f"Browser '{manager.browser_type}' could not be launched: {e}")

    yield manager
    await manager.close()


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser(browser_manager: BrowserManager) -> Browser:
    """Session-scoped browser instance shared across all tests."""
    return browser_manager.browser


@pytest_asyncio.fixture(loop_scope="session")
async def context(browser_manager: BrowserManager) -> AsyncGenerator[BrowserContext, None]:
    """
    Function-scoped browser context fixture.

    Creates a fresh context per test (no cookies, empty cart) with the
    configured viewport and default timeouts.
    """
    context = await browser_manager.new_context()
    yield context
    await browser_manager.close_context(context)


@pytest_asyncio.fixture(loop_scope="session")
async def page(request, context: BrowserContext) -> AsyncGenerator[Page, None]:
    """Function-scoped page fixture."""
    page = await context.new_page()
    yield page
    await _capture_if_failed(request, page)


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def login_page(page: Page) -> LoginPage:
    return LoginPage(page)


@pytest.fixture
def home_page(page: Page) -> HomePage:
    return HomePage(page)


@pytest.fixture
def catalog_page(page: Page) -> CatalogPage:
    return CatalogPage(page)


@pytest.fixture
def product_detail_page(page: Page) -> ProductDetailPage:
    return ProductDetailPage(page)


@pytest.fixture
def cart_page(page: Page) -> CartPage:
    return CartPage(page)


@pytest.fixture
def checkout_page(page: Page) -> CheckoutPage:
    return CheckoutPage(page)


@pytest.fixture
def orders_page(page: Page) -> OrdersPage:
    return OrdersPage(page)


@pytest.fixture
def order_detail_page(page: Page) -> OrderDetailPage:
    return OrderDetailPage(page)


@pytest.fixture
def admin_page(page: Page) -> AdminPage:
    return AdminPage(page)


@pytest.fixture
def nav_bar(page: Page) -> NavBar:
    return NavBar(page)


@pytest.fixture
def footer(page: Page) -> Footer:
    return Footer(page)


# ================================================================================
# Authentication Fixtures
# ================================================================================

@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def standard_user_state(browser_manager: BrowserManager) -> Path:
    """Saved session of the standard account (regenerated when stale)."""
    return await ensure_storage_state(browser_manager, STANDARD_USER)


@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def admin_user_state(browser_manager: BrowserManager) -> Path:
    """Saved session of the admin account (regenerated when stale)."""
    return await ensure_storage_state(browser_manager, ADMIN_USER)


async def _authenticated_page(
    request,
    browser_manager: BrowserManager,
    state: Path,
) -> AsyncGenerator[Page, None]:
    context = await browser_manager.new_context(storage_state=state)
    page = await context.new_page()
    yield page
    await _capture_if_failed(request, page)
    await browser_manager.close_context(context)


@pytest_asyncio.fixture(loop_scope="session")
async def standard_user_page(
    request,
    browser_manager: BrowserManager,
    standard_user_state: Path,
) -> AsyncGenerator[Page, None]:
    """
    Page in a context restored from the standard user's saved session.

    Use this fixture for tests that need a signed-in shopper without
    exercising the login form.
    """
    async for page in _authenticated_page(request, browser_manager, standard_user_state):
        yield page


@pytest_asyncio.fixture(loop_scope="session")
async def admin_user_page(
    request,
    browser_manager: BrowserManager,
    admin_user_state: Path,
) -> AsyncGenerator[Page, None]:
    """Page in a context restored from the admin user's saved session."""
    async for page in _authenticated_page(request, browser_manager, admin_user_state):
        yield page


# ================================================================================
# Shopping Flow Fixtures
# ================================================================================

@pytest_asyncio.fixture(loop_scope="session")
async def cart_with_item(
    login_page: LoginPage,
    catalog_page: CatalogPage,
    cart_page: CartPage,
) -> CartPage:
    """
    Standard user signed in through the form, one product in the cart,
    cart opened through the navbar (client-side cart state is preserved).
    """
    with allure.step("Login as standard user"):
        await login_page.goto()
        await login_page.login_as(STANDARD_USER)

    with allure.step("Add first available product from the catalog"):
        await catalog_page.goto()
        await catalog_page.add_first_available_to_cart()

    with allure.step("Open cart via navbar"):
        await cart_page.goto_via_navbar()
        await cart_page.wait_for_cart_items()

    return cart_page


@pytest_asyncio.fixture(loop_scope="session")
async def checkout_with_item(cart_with_item: CartPage, checkout_page: CheckoutPage) -> CheckoutPage:
    """Checkout form for a one-item cart."""
    await cart_with_item.click_proceed_to_checkout()
    await checkout_page.wait_for_url(checkout_page.url_pattern())
    return checkout_page


@pytest_asyncio.fixture(loop_scope="session")
async def placed_order(
    checkout_with_item: CheckoutPage,
    order_detail_page: OrderDetailPage,
) -> OrderDetailPage:
    """Order placed with valid checkout data; the confirmation page is open."""
    with allure.step("Complete checkout with the test card"):
        await checkout_with_item.complete_checkout(VALID_CHECKOUT_DATA)
        await order_detail_page.wait_for_confirmation()
    return order_detail_page


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Keep each phase's report on the item (``item.rep_setup``,
    ``item.rep_call``) so page fixtures can react to failures in teardown,
    while the page is still open.
    """
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


async def _capture_if_failed(request, page: Page) -> None:
    report: Optional[pytest.TestReport] = getattr(request.node, "rep_call", None)
    if report is None or not report.failed:
        return
    # Prefer a page object the test used: it holds the captured API responses
    page_object = next(
        (
            value for value in request.node.funcargs.values()
            if isinstance(value, PageBase) and value.page is page
        ),
        None,
    ) or PageBase(page)
    try:
        await page_object.capture_failure(request.node.name)
    except Exception as e:
        # The page may already be gone when the browser crashed
        logger.warning(f"Failed to capture failure context for {request.node.name}: {e}")
    log_fallback_reports(request.node.funcargs.values())
