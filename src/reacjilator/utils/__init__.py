"""Utility functions and helpers.

- security: Secret redaction, Slack request signature verification
- async_helpers: Exceptions, startup delay, timeouts
- logging: Structured logging with secret sanitization
"""

from reacjilator.utils.async_helpers import (
    AuthenticationError,
    BridgeError,
    FetchError,
    PostError,
    TranslationError,
    no_delay,
    random_jitter,
    with_timeout,
)
from reacjilator.utils.logging import (
    LogFormat,
    LogLevel,
    bind_context,
    configure_logging,
    unbind_context,
)
from reacjilator.utils.security import (
    RedactionError,
    SecretRedactor,
    SecurityError,
    SlackRequestVerifier,
)

__all__ = [
    # Errors
    "AuthenticationError",
    "BridgeError",
    "FetchError",
    "PostError",
    "TranslationError",
    # Async helpers
    "no_delay",
    "random_jitter",
    "with_timeout",
    # Logging
    "LogFormat",
    "LogLevel",
    "bind_context",
    "configure_logging",
    "unbind_context",
    # Security
    "RedactionError",
    "SecretRedactor",
    "SecurityError",
    "SlackRequestVerifier",
]
