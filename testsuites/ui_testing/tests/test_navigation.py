"""
================================================================================
Navigation & Layout UI Tests (Async / Playwright)
================================================================================

Navbar links, the cart badge, guest versus signed-in navbar state and the
footer links.

================================================================================
"""

import re

import allure
import pytest
from playwright.async_api import Page, expect

from testsuites.test_data import STANDARD_USER
from testsuites.ui_testing.components import Footer, NavBar
from testsuites.ui_testing.pages import CatalogPage, HomePage, LoginPage


pytestmark = [
    pytest.mark.asyncio(loop_scope="session"),
    pytest.mark.navigation,
    pytest.mark.requires_external,
]


@allure.epic("UI Testing")
@allure.feature("Navigation")
class TestNavBarLinks:

    @allure.story("Logo Navigation")
    @allure.title("Clicking the logo navigates home")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.p1
    async def test_logo_navigates_home(
        self,
        catalog_page: CatalogPage,
        home_page: HomePage,
        nav_bar: NavBar,
        page: Page,
    ):
        await catalog_page.goto()

        with allure.step("Click QA Demo logo"):
            await nav_bar.click_logo()

        with allure.step("Verify navigated to home page"):
            await expect(page).to_have_url(home_page.url)

    @allure.story("Products Link")
    @allure.title("Products link navigates to the catalog")
    @allure.severity(allure.severity_level.CRITICAL)
    @pytest.mark.p1
    async def test_products_link(self, home_page: HomePage, nav_bar: NavBar, page: Page):
        await home_page.goto()

        with allure.step("Click Products link"):
            await nav_bar.click_products()

        with allure.step("Verify navigated to catalog page"):
            await expect(page).to_have_url(re.compile(r"catalog"))


@allure.epic("UI Testing")
@allure.feature("Navigation")
class TestCartIcon:

    @allure.story("Cart Icon with Badge")
    @allure.title("Cart badge shows the item count after adding a product")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.p3
    async def test_cart_badge_after_add(
        self,
        login_page: LoginPage,
        catalog_page: CatalogPage,
        nav_bar: NavBar,
    ):
        await login_page.goto()
        await login_page.login_as(STANDARD_USER)
        await catalog_page.goto()

        with allure.step("Get initial cart count"):
            assert await nav_bar.get_cart_item_count() >= 0

        with allure.step("Add a product to cart"):
            await catalog_page.add_first_available_to_cart()

        with allure.step("Verify cart badge updates"):
            assert await nav_bar.get_cart_item_count() >= 1

    @allure.story("Cart Icon with Badge")
    @allure.title("Clicking the cart icon navigates to the cart")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.p3
    async def test_cart_icon_navigates(
        self,
        login_page: LoginPage,
        catalog_page: CatalogPage,
        nav_bar: NavBar,
        page: Page,
    ):
        await login_page.goto()
        await login_page.login_as(STANDARD_USER)
        await catalog_page.goto()

        with allure.step("Click cart icon"):
            await nav_bar.click_cart()

        with allure.step("Verify navigated to cart page"):
            await expect(page).to_have_url(re.compile(r"cart"))


@allure.epic("UI Testing")
@allure.feature("Navigation")
class TestNavBarAuthState:

    @allure.story("Sign In Button (Guest)")
    @allure.title("Sign In button is shown for guests")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.p3
    async def test_sign_in_visible_for_guest(self, home_page: HomePage, nav_bar: NavBar):
        await home_page.goto()

        with allure.step("Verify Sign In button is visible"):
            await expect(nav_bar.sign_in_button).to_be_visible()

    @allure.story("Sign In Button (Guest)")
    @allure.title("Sign In button navigates to login")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.p3
    async def test_sign_in_navigates_to_login(self, home_page: HomePage, nav_bar: NavBar, page: Page):
        await home_page.goto()

        with allure.step("Click Sign In button"):
            await nav_bar.click_sign_in()

        with allure.step("Verify navigated to login page"):
            await expect(page).to_have_url(re.compile(r"login"))

    @allure.story("User Menu (Authenticated)")
    @allure.title("Signed-in user sees logout instead of Sign In")
    @allure.severity(allure.severity_level.MINOR)
    @pytest.mark.p3
    async def test_logged_in_navbar(self, login_page: LoginPage, nav_bar: NavBar):
        await login_page.goto()
        await login_page.login_as(STANDARD_USER)

        with allure.step("Verify logout button is visible"):
            await expect(nav_bar.logout_button).to_be_visible()

        with allure.step("Verify Sign In button is NOT visible"):
            await expect(nav_bar.sign_in_button).not_to_be_visible()
            assert await nav_bar.get_username()


@allure.epic("UI Testing")
@allure.feature("Navigation")
class TestFooterLinks:

    @allure.story("Footer Links")
    @allure.title("Footer contains the {link} link")
    @allure.severity(allure.severity_level.TRIVIAL)
    @pytest.mark.p4
    @pytest.mark.parametrize("link", ["products_link", "cart_link"])
    async def test_footer_link_visible(self, home_page: HomePage, footer: Footer, link: str):
        await home_page.goto()

        with allure.step(f"Verify {link} is visible in footer"):
            await expect(getattr(footer, link)).to_be_visible()

    @allure.story("Footer Links")
    @allure.title("Footer Sign In link is visible for guests")
    @allure.severity(allure.severity_level.TRIVIAL)
    @pytest.mark.p4
    async def test_footer_sign_in_for_guest(self, home_page: HomePage, footer: Footer):
        await home_page.goto()

        with allure.step("Verify Sign In link is visible for guests"):
            await expect(footer.sign_in_link).to_be_visible()
            assert await footer.is_sign_in_visible()
