"""
================================================================================
QADemo Test Users
================================================================================

Seeded accounts of the QADemo deployment plus invalid credential sets for
negative authentication tests.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class UserType(str, Enum):
    """Account role as reported by the API (``user.userType``)."""
    STANDARD = "standard"
    LOCKED = "locked"
    ADMIN = "admin"


@dataclass(frozen=True)
class TestUser:
    """A seeded QADemo account."""
    username: str
    password: str
    user_type: UserType
    description: str

    __test__ = False

    @property
    def storage_state_name(self) -> str:
        """File stem for this user's saved browser session."""
        return f"{self.user_type.value}-user"

    def credentials(self) -> Dict[str, str]:
        """Login request body for ``POST /auth/login``."""
        return {"username": self.username, "password": self.password}


@dataclass(frozen=True)
class Credentials:
    """Username/password pair that does not map to a usable account."""
    username: str
    password: str

    def credentials(self) -> Dict[str, str]:
        return {"username": self.username, "password": self.password}


STANDARD_USER = TestUser(
    username="standard_user",
    password="standard123",
    user_type=UserType.STANDARD,
    description="Regular customer - can browse, cart, checkout, view orders",
)

LOCKED_USER = TestUser(
    username="locked_user",
    password="locked123",
    user_type=UserType.LOCKED,
    description='Blocked account - login should fail with "Account is locked"',
)

ADMIN_USER = TestUser(
    username="admin_user",
    password="admin123",
    user_type=UserType.ADMIN,
    description="Administrator - all standard permissions plus admin dashboard",
)

ALL_USERS: List[TestUser] = [STANDARD_USER, LOCKED_USER, ADMIN_USER]

INVALID_CREDENTIALS = Credentials(username="invalid_user", password="wrong_password")

EMPTY_CREDENTIALS = Credentials(username="", password="")


__all__ = [
    "UserType",
    "TestUser",
    "Credentials",
    "STANDARD_USER",
    "LOCKED_USER",
    "ADMIN_USER",
    "ALL_USERS",
    "INVALID_CREDENTIALS",
    "EMPTY_CREDENTIALS",
]
