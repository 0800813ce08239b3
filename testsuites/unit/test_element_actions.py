import pytest

from testsuites.ui_testing.components import nav_bar as nav_bar_module
from testsuites.ui_testing.components.nav_bar import NavBar
from testsuites.ui_testing.framework.element_actions import count_or_zero, dom_click, text_or_empty
from testsuites.ui_testing.pages.cart_page import CartPage
from testsuites.ui_testing.pages.order_detail_page import OrderDetailPage

from .fakes import FakeLocator, FakePage


BASE_URL = "https://qademo.test"


def use_locator(monkeypatch, page_class, name, locator):
    monkeypatch.setattr(page_class, name, property(lambda self: locator))


class RecordingExpect:
    """Stand-in for ``playwright.async_api.expect`` with substring semantics."""

    def __init__(self):
        self.calls = []

    def __call__(self, locator):
        recorder = self

        class Assertions:
            async def to_contain_text(self, expected, timeout=None):
                recorder.calls.append((locator.name, expected, timeout))
                text = await locator.text_content()
                assert expected in text, f"{text!r} does not contain {expected!r}"

        return Assertions()


# =============================================================================
# element_actions
# =============================================================================

async def test_dom_click_dispatches_in_page():
    button = FakeLocator("plus")

    await dom_click(button, "increase quantity")

    assert button.evaluated == ["(el) => el.click()"]
    assert button.clicks == 0


async def test_count_or_zero_honours_empty_state():
    items = FakeLocator("listitem", matches=3)

    assert await count_or_zero(items) == 3
    assert await count_or_zero(items, FakeLocator("empty", visible=False)) == 3
    assert await count_or_zero(items, FakeLocator("empty", visible=True)) == 0


async def test_text_or_empty():
    assert await text_or_empty(FakeLocator("missing", visible=False)) == ""
    assert await text_or_empty(FakeLocator("total", text="  $59.98 \n")) == "$59.98"
    assert await text_or_empty(FakeLocator("blank", text="")) == ""


# =============================================================================
# Getters on absent elements
# =============================================================================

async def test_nav_cart_count_without_badge_is_zero(monkeypatch):
    nav_bar = NavBar(FakePage({}))
    use_locator(monkeypatch, NavBar, "cart_badge", FakeLocator("badge", visible=False))

    assert await nav_bar.get_cart_item_count() == 0


async def test_nav_cart_count_reads_badge(monkeypatch):
    nav_bar = NavBar(FakePage({}))
    use_locator(monkeypatch, NavBar, "cart_badge", FakeLocator("badge", text="3"))

    assert await nav_bar.get_cart_item_count() == 3


async def test_nav_username_empty_when_logged_out(monkeypatch):
    nav_bar = NavBar(FakePage({}))
    use_locator(monkeypatch, NavBar, "logout_button", FakeLocator("logout", visible=False))

    assert await nav_bar.get_username() == ""
    assert await nav_bar.is_logged_in() is False


async def test_cart_count_is_zero_while_empty_message_shows(monkeypatch):
    cart = CartPage(FakePage({}), base_url=BASE_URL)
    use_locator(monkeypatch, CartPage, "cart_items", FakeLocator("listitem", matches=2))
    use_locator(monkeypatch, CartPage, "empty_cart_message", FakeLocator("empty", visible=True))

    assert await cart.get_cart_item_count() == 0
    assert await cart.is_cart_empty() is True


async def test_cart_total_empty_when_summary_missing(monkeypatch):
    cart = CartPage(FakePage({}), base_url=BASE_URL)
    use_locator(monkeypatch, CartPage, "total_amount", FakeLocator("total", visible=False))

    assert await cart.get_total_amount_text() == ""


@pytest.mark.parametrize("text, expected", [
    (None, ""),
    ("Order #42", "42"),
    ("Order ID: 7", "7"),
    ("Order", ""),
])
async def test_order_id_parsing(monkeypatch, text, expected):
    order = OrderDetailPage(FakePage({}), base_url=BASE_URL)
    locator = FakeLocator("order id", visible=text is not None, text=text)
    use_locator(monkeypatch, OrderDetailPage, "order_id_text", locator)

    assert await order.get_order_id() == expected


# =============================================================================
# Cart badge wait
# =============================================================================

async def test_cart_badge_wait_matches_label_and_count_run_together(monkeypatch):
    page = FakePage({"nav a[href='/cart']": True})
    page.locators["nav a[href='/cart']"].text = "Cart2"
    recording_expect = RecordingExpect()
    monkeypatch.setattr(nav_bar_module, "expect", recording_expect)

    await NavBar(page).wait_for_cart_count(2, timeout=300)

    assert recording_expect.calls == [("nav a[href='/cart']", "2", 300)]
