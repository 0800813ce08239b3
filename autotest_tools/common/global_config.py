"""
================================================================================
Global Configuration for Automation Tools
================================================================================

Centralized logging setup and configuration file loading shared by the test
runner, the pytest plugins and the QADemo test suites.

Features:
    - Loads config/config.yaml once per process
    - Optional environment overlay (config/{ENV}.yaml)
    - Environment variable overrides (LOGGING__LEVEL=DEBUG)
    - Centralized Loguru logging configuration

Author: Automation Team
License: MIT
================================================================================
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

CONFIG_DIR = Path(__file__).parent.parent.parent / "config"

DEFAULT_LOG_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"
)

# Global configuration storage
_config: Dict[str, Any] = {}
_logger_initialized: bool = False


def init_logger(
    level: Optional[str] = None,
    format_str: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Safe to call repeatedly; only the first call configures sinks.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        format_str: Custom log format string. Defaults to config value.
        log_file: Optional log file path. Defaults to ``logging.file``.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    _ensure_config_loaded()

    log_level = (level or get_config("logging.level", "INFO")).upper()
    log_format = format_str or get_config("logging.format", DEFAULT_LOG_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    log_file = log_file or get_config("logging.file", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format.replace("{level: <8}", "{level}"),
            rotation=get_config("logging.rotation", "10 MB"),
            retention=get_config("logging.retention", "7 days"),
            enqueue=True,
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def _ensure_config_loaded() -> None:
    if not _config:
        _load_config()


def _load_config() -> None:
    """
    Loads configuration from YAML files and environment variables.

    Loading order:
        1. config/config.yaml
        2. config/{ENV}.yaml (optional)
        3. Environment variables with double underscores (LOGGING__LEVEL)
    """
    global _config

    default_config_path = CONFIG_DIR / "config.yaml"
    if default_config_path.exists():
        with open(default_config_path, "r", encoding="utf-8") as f:
            _config = yaml.safe_load(f) or {}
        logger.debug(f"Loaded configuration from {default_config_path}")
    else:
        logger.warning(f"Configuration file not found: {default_config_path}. Using defaults.")
        _config = _get_defaults()

    env = os.getenv("ENVIRONMENT", os.getenv("ENV", ""))
    if env:
        env_config_path = CONFIG_DIR / f"{env}.yaml"
        if env_config_path.exists():
            with open(env_config_path, "r", encoding="utf-8") as f:
                env_config = yaml.safe_load(f) or {}
            _config = _deep_merge(_config, env_config)
            logger.debug(f"Merged environment config: {env_config_path}")

    _apply_env_overrides()


def _get_defaults() -> Dict[str, Any]:
    return {
        "logging": {"level": "INFO", "format": DEFAULT_LOG_FORMAT},
        "ui": {"base_url": "https://qademo.com"},
        "api": {"base_url": "https://qademo.com/api", "timeout": 30},
        "run": {"priorities": ["p1", "p2"]},
    }


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_env_overrides() -> None:
    """
    Applies environment variable overrides to the configuration.

    Nested keys are separated by a double underscore:
    LOGGING__LEVEL=DEBUG overrides logging.level.
    """
    for key, value in os.environ.items():
        if "__" in key and not key.startswith("_"):
            parts = [p.lower() for p in key.split("__")]
            _set_nested(_config, parts, value)


def _set_nested(d: Dict, keys: list, value: Any) -> None:
    for key in keys[:-1]:
        existing = d.get(key)
        if not isinstance(existing, dict):
            existing = d[key] = {}
        d = existing
    d[keys[-1]] = value


def get_config(key: str, default: Any = None) -> Any:
    """
    Retrieves a configuration value using a dot-separated key path.

    Args:
        key: Dot-separated key path (e.g., "logging.level", "run.priorities").
        default: Default value to return if key is not found.

    Returns:
        The configuration value, or the default if not found.
    """
    _ensure_config_loaded()

    value: Any = _config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value

