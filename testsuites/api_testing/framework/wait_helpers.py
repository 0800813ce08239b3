# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# Polling with exponential backoff for eventually-consistent API state, such
# as stock levels that are updated after an order or an admin edit.
#
# Key Features:
#   - Exponential backoff with jitter
#   - Named wait scenarios
#   - Timeout management
#   - Allure integration for step reporting
#
# Usage:
#   product = wait_for_product_stock(api, 1, lambda stock: stock == 100)
#   result = wait_with_backoff(check_function, scenario="fast")
#
# ================================================================================

import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar

import allure
from loguru import logger


T = TypeVar('T')


@dataclass
class WaitConfig:
    """
    Configuration for wait operations.

    Attributes:
        initial_interval: Initial wait interval in seconds
        multiplier: Multiplier for exponential backoff
        max_interval: Maximum interval between attempts
        timeout: Total timeout in seconds
        jitter: Add random jitter to prevent thundering herd
    """
    initial_interval: float = 1.0
    multiplier: float = 2.0
    max_interval: float = 10.0
    timeout: float = 30.0
    jitter: bool = True


# Pre-configured wait strategies for common scenarios
WAIT_SCENARIOS: Dict[str, WaitConfig] = {
    "default": WaitConfig(),

    # Plain read-after-write on the public API
    "fast": WaitConfig(
        initial_interval=0.5,
        multiplier=1.5,
        max_interval=2.0,
        timeout=10.0
    ),

    # Stock changes propagated from orders and admin edits
    "stock_update": WaitConfig(
        initial_interval=0.5,
        multiplier=2.0,
        max_interval=3.0,
        timeout=15.0
    ),

    # Order status transitions made by the admin API
    "order_status": WaitConfig(
        initial_interval=1.0,
        multiplier=1.5,
        max_interval=5.0,
        timeout=30.0
    ),
}


class WaitTimeoutError(Exception):
    """Raised when a wait operation times out."""

    def __init__(self, message: str, last_result: Any = None):
        super().__init__(message)
        self.last_result = last_result


def get_wait_config(scenario: str) -> WaitConfig:
    """
    Get wait configuration for a specific scenario.

    Returns:
        WaitConfig for the scenario, or default if not found
    """
    return WAIT_SCENARIOS.get(scenario, WAIT_SCENARIOS["default"])


def calculate_next_interval(current_interval: float, config: WaitConfig) -> float:
    """
    Calculate the next wait interval with exponential backoff and jitter.
    """
    next_interval = min(current_interval * config.multiplier, config.max_interval)

    if config.jitter:
        # Add +/- 25% jitter
        jitter_factor = 0.75 + (random.random() * 0.5)
        next_interval = next_interval * jitter_factor

    return next_interval


@allure.step("Waiting with backoff: {description}")
def wait_with_backoff(
    check_fn: Callable[[], Tuple[bool, T]],
    scenario: str = "default",
    description: str = "Waiting for condition",
    config: Optional[WaitConfig] = None,
    sleep: Optional[Callable[[float], None]] = None,
) -> T:
    """
    Wait for a condition with exponential backoff.

    The check runs at least once even when the timeout is zero.

    Args:
        check_fn: Function that returns (success: bool, result: T)
        scenario: Predefined scenario name for configuration
        description: Human-readable description for logging
        config: Optional custom WaitConfig (overrides scenario)
        sleep: Sleep function, defaults to time.sleep

    Returns:
        Result from check_fn when successful

    Raises:
        WaitTimeoutError: If timeout is reached without success; carries the
            last result so callers can report the value they saw
    """
    if config is None:
        config = get_wait_config(scenario)
    sleep = sleep or time.sleep

    start_time = time.monotonic()
    current_interval = config.initial_interval
    attempt = 0
    last_result = None
    last_error = None

    logger.info(f"Starting wait: {description} (timeout={config.timeout}s, scenario={scenario})")

    while True:
        attempt += 1

        try:
            success, result = check_fn()
            last_result = result

            if success:
                logger.info(
                    f"Wait successful after {attempt} attempts "
                    f"({time.monotonic() - start_time:.1f}s): {description}"
                )
                return result

            logger.debug(f"Attempt {attempt}: condition not met. Result: {result}")

        except Exception as e:
            last_error = str(e)
            logger.warning(f"Attempt {attempt} failed with error: {e}")

        elapsed = time.monotonic() - start_time
        if elapsed + current_interval > config.timeout:
            error_msg = (
                f"Timeout after {elapsed:.1f}s ({attempt} attempts) waiting for: "
                f"{description}. Last result: {last_result}, Last error: {last_error}"
            )
            logger.error(error_msg)
            raise WaitTimeoutError(error_msg, last_result=last_result)

        sleep(current_interval)
        current_interval = calculate_next_interval(current_interval, config)


def wait_for_product_stock(
    api,
    product_id: int,
    condition: Callable[[int], bool],
    scenario: str = "stock_update",
    description: str = "",
) -> Dict[str, Any]:
    """
    Poll ``GET /products/id/:id`` until ``condition(stock)`` holds.

    Args:
        api: QADemoApi instance
        product_id: Product to read
        condition: Predicate on the stock value
        scenario: Wait scenario name

    Returns:
        The product payload that satisfied the condition

    Raises:
        WaitTimeoutError: With the last product payload as ``last_result``
    """
    def check_stock() -> Tuple[bool, Dict[str, Any]]:
        product = api.get_product(product_id)
        return condition(product["stock"]), product

    return wait_with_backoff(
        check_fn=check_stock,
        scenario=scenario,
        description=description or f"Product {product_id} stock",
    )


__all__ = [
    "WaitConfig",
    "WaitTimeoutError",
    "WAIT_SCENARIOS",
    "get_wait_config",
    "calculate_next_interval",
    "wait_with_backoff",
    "wait_for_product_stock",
]
