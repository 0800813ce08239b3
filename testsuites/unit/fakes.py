"""Fake HTTP handlers and Playwright stand-ins shared by the unit tests."""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx


def envelope(data: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json={"success": True, "data": data})


def login_handler(calls: List[httpx.Request]) -> Callable[[httpx.Request], httpx.Response]:
    """Fake ``POST /auth/login``: token is ``token-<username>-<n>``."""

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        body = json.loads(request.content)
        if body["password"] == "wrong":
            return httpx.Response(401, json={"success": False, "error": "Invalid credentials"})
        user_type = "admin" if body["username"].startswith("admin") else "standard"
        return envelope({
            "accessToken": f"token-{body['username']}-{len(calls)}",
            "user": {"username": body["username"], "userType": user_type},
        })

    return handler


class DummyConfig:
    """Dict-backed stand-in for ConfigLoader."""

    def __init__(self, data: Dict[str, Any]):
        self.data = data

    def get(self, key, default=None):
        return self.data.get(key, default)


class FakeLocator:
    """
    Minimal async stand-in for a Playwright ``Locator``.

    ``visible`` decides whether ``wait_for(state="visible")`` succeeds;
    ``matches`` is what ``count()`` reports, 1 when visible and 0 otherwise
    unless given.
    """

    def __init__(
        self,
        name: str,
        visible: bool = True,
        page: "FakePage" = None,
        text: Optional[str] = None,
        matches: Optional[int] = None,
    ):
        self.name = name
        self.visible = visible
        self.page = page
        self.text = text
        self.matches = matches
        self.clicks = 0
        self.filled: List[str] = []
        self.evaluated: List[str] = []
        self.alternatives: List["FakeLocator"] = [self]

    @property
    def first(self) -> "FakeLocator":
        return self

    async def wait_for(self, state: str = "visible", timeout: float = 0) -> None:
        if not self.visible:
            raise TimeoutError(f"{self.name} not visible within {timeout}ms")

    async def is_visible(self) -> bool:
        return self.visible

    async def count(self) -> int:
        if self.matches is not None:
            return self.matches
        return 1 if self.visible else 0

    async def click(self, **kwargs) -> None:
        self.clicks += 1

    async def fill(self, value: str, **kwargs) -> None:
        self.filled.append(value)

    async def evaluate(self, expression: str) -> None:
        self.evaluated.append(expression)

    async def text_content(self) -> Optional[str]:
        if self.text is not None:
            return self.text
        return f"{self.name} text"

    def or_(self, other: "FakeLocator") -> "FakeLocator":
        combined = FakeLocator(f"{self.name}|{other.name}", self.visible or other.visible)
        combined.alternatives = self.alternatives + other.alternatives
        return combined

    def __repr__(self) -> str:
        return f"<FakeLocator {self.name}>"


class FakePage:
    """
    Page whose ``locator(css)`` returns pre-registered FakeLocators.

    ``get_by_role(role)`` is registered under the key ``role=<role>``.
    """

    def __init__(self, visible_selectors: Dict[str, bool]):
        self.locators = {
            selector: FakeLocator(selector, visible) for selector, visible in visible_selectors.items()
        }
        self.handlers: Dict[str, List[Callable]] = {}
        self.url = "https://qademo.test/"

    def locator(self, selector: str) -> FakeLocator:
        return self.locators.setdefault(selector, FakeLocator(selector, visible=False))

    def get_by_role(self, role: str, **kwargs) -> FakeLocator:
        return self.locator(f"role={role}")

    def on(self, event: str, handler: Callable) -> None:
        self.handlers.setdefault(event, []).append(handler)
