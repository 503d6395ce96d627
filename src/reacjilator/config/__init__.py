"""Configuration loading and validation."""

from .loader import load_config
from .schema import (
    BridgeConfig,
    DispatchConfig,
    LanguagesConfig,
    LoggingConfig,
    ServerConfig,
    SlackConfig,
    TranslateConfig,
)

__all__ = [
    # Loader
    "load_config",
    # Root config
    "BridgeConfig",
    # Sections
    "DispatchConfig",
    "LanguagesConfig",
    "LoggingConfig",
    "ServerConfig",
    "SlackConfig",
    "TranslateConfig",
]
