"""Security utilities for secret redaction and request verification.

Redaction is fail-closed: if a pattern fails to compile or execute, an
exception is raised rather than letting potentially sensitive text through.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

import structlog
from slack_sdk.signature import SignatureVerifier

log = structlog.get_logger()


class SecurityError(Exception):
    """Base exception for security-related errors."""


class RedactionError(SecurityError):
    """Raised when secret redaction fails."""


class SecretRedactor:
    """Detects and redacts secrets from text.

    Usage:
        redactor = SecretRedactor()
        safe_text = redactor.redact(potentially_sensitive_text)

    Attributes:
        patterns: List of compiled regex patterns to detect secrets.
        placeholder: The string to replace secrets with (default: "[REDACTED]").
    """

    DEFAULT_PATTERNS: tuple[tuple[str, str], ...] = (
        # Generic patterns
        (
            r"(?i)(api[_-]?key|secret|token|password|credential)\s*[=:]\s*[\"']?[\w-]{16,}",
            "Generic secret",
        ),
        # Slack
        (r"xox[baprse]-[\w-]+", "Slack token"),
        (r"https://hooks\.slack\.com/services/[\w/]+", "Slack incoming webhook"),
        # Google Cloud
        (r"AIza[0-9A-Za-z\-_]{35}", "Google API key"),
        (r"ya29\.[0-9A-Za-z\-_]+", "Google OAuth access token"),
        (r"GOCSPX-[a-zA-Z0-9_-]+", "Google OAuth client secret"),
        (r'"type"\s*:\s*"service_account"', "Google service account JSON"),
        (r'"private_key_id"\s*:\s*"[a-f0-9]{40}"', "Google service account key id"),
        # Private keys
        (
            r"-----BEGIN (?:RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----",
            "Private key header",
        ),
        # JWT tokens
        (
            r"eyJ[a-zA-Z0-9_-]*\.eyJ[a-zA-Z0-9_-]*\.[a-zA-Z0-9_-]*",
            "JWT token",
        ),
    )

    def __init__(
        self,
        placeholder: str = "[REDACTED]",
    ) -> None:
        """Initialize the SecretRedactor.

        Args:
            placeholder: String to replace detected secrets with.

        Raises:
            RedactionError: If any pattern fails to compile.
        """
        self.placeholder = placeholder
        self._pattern_names: dict[re.Pattern[str], str] = {}

        for pattern_str, name in self.DEFAULT_PATTERNS:
            try:
                compiled = re.compile(pattern_str)
            except re.error as e:
                log.error("pattern_compilation_failed", pattern=pattern_str, error=str(e))
                raise RedactionError(
                    f"Failed to compile secret pattern '{pattern_str}': {e}"
                ) from e
            self._pattern_names[compiled] = name

    @property
    def patterns(self) -> list[re.Pattern[str]]:
        """Return the list of compiled patterns."""
        return list(self._pattern_names.keys())

    def redact(self, text: str) -> str:
        """Redact all secrets from the given text.

        Args:
            text: The text to scan and redact secrets from.

        Returns:
            The text with all detected secrets replaced with placeholder.

        Raises:
            RedactionError: If redaction fails for any reason.
        """
        if not text:
            return text

        try:
            result = text
            for pattern in self._pattern_names:
                result = pattern.sub(self.placeholder, result)
            return result
        except Exception as e:
            log.error("redaction_failed", error=str(e))
            raise RedactionError(f"Redaction failed: {e}") from e


class SlackRequestVerifier:
    """Checks the ``X-Slack-Signature`` of an inbound webhook request.

    Implements the ``RequestVerifier`` protocol. Signature comparison and the
    five minute replay window are delegated to ``slack_sdk``.
    """

    def __init__(self, signing_secret: str, verifier: SignatureVerifier | None = None) -> None:
        self._verifier = verifier or SignatureVerifier(signing_secret=signing_secret)

    def is_authentic(self, body: bytes, headers: Mapping[str, str]) -> bool:
        # slack_sdk looks headers up by lowercase name
        normalized = {key.lower(): value for key, value in headers.items()}
        try:
            valid = self._verifier.is_valid_request(body, normalized)
        except (TypeError, ValueError) as e:
            log.warning("signature_check_error", error=str(e))
            return False

        if not valid:
            log.warning(
                "signature_rejected",
                request_timestamp=normalized.get("x-slack-request-timestamp"),
            )
        return bool(valid)


def mask_config_value(key: str, value: str) -> str:
    """Mask sensitive config values for logging.

    Args:
        key: The configuration key name.
        value: The configuration value.

    Returns:
        The masked value if the key indicates sensitivity, otherwise the original.
    """
    sensitive_keys = {"token", "key", "secret", "password", "credential"}

    key_lower = key.lower()
    if any(s in key_lower for s in sensitive_keys):
        if len(value) > 8:
            return f"{value[:4]}...{value[-4:]}"
        return "***"

    return value
