"""Utilities package initialization."""
from .config import (
    GlobalSettings,
    ensure_runtime_configuration,
    get_settings,
    load_yaml_config,
)
from .logging import log_chat_attempt, setup_logger
from .retry import RetryConfig, execute_with_retry

__all__ = [
    "GlobalSettings",
    "RetryConfig",
    "ensure_runtime_configuration",
    "execute_with_retry",
    "get_settings",
    "load_yaml_config",
    "log_chat_attempt",
    "setup_logger",
]
