"""
================================================================================
Autotest Tools Common Utilities
================================================================================

Shared configuration and logging setup for the runner and the test suites.

Usage:
    from autotest_tools.common import get_config, init_logger

    init_logger()
    priorities = get_config("run.priorities", ["p1", "p2"])

================================================================================
"""

from .global_config import (
    get_config,
    init_logger,
)

__all__ = [
    "get_config",
    "init_logger",
]
