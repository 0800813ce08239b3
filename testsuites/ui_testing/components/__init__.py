"""Reusable page components shared across QADemo pages."""

from .footer import Footer
from .nav_bar import NavBar

__all__ = ["Footer", "NavBar"]
