"""
================================================================================
Autotest Tools
================================================================================

Supporting utilities for the QADemo test suites.

Modules:
    - common: Shared configuration and logging utilities
    - data_generator: Price, card and URL helpers
    - report_tools: Allure attachment and report helpers

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "data_generator",
    "report_tools",
]
