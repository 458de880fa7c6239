"""
Custom exceptions for the AITP end-to-end suite.

This module defines the errors raised by the session bootstrap, the mail API
client and the configuration layer, so a failing test reports *why* setup
could not proceed instead of a bare timeout.
"""

from typing import Any, Optional


class AitpE2EError(Exception):
    """Base exception for all suite errors."""

    def __init__(self, message: str,
                 details: Optional[dict[str, Any]] = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


# Configuration Exceptions
class ConfigurationError(AitpE2EError):
    """Base exception for configuration-related errors."""


class MissingConfigError(ConfigurationError):
    """Raised when a required configuration value is missing."""

    def __init__(
        self, config_key: str, details: Optional[dict[str, Any]] = None
    ) -> None:
        """
        Initialize missing config error.

        Args:
            config_key: The missing environment variable.
            details: Optional dictionary with additional error details.
        """
        super().__init__(
            f"Missing required environment variable: {config_key}", details)
        self.config_key = config_key


class InvalidConfigError(ConfigurationError):
    """Raised when a configuration value is invalid."""

    def __init__(
        self,
        config_key: str,
        value: Any,
        reason: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"Invalid configuration value for '{config_key}': {value}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, details)
        self.config_key = config_key
        self.value = value
        self.reason = reason


# Mail API Exceptions
class MailApiError(AitpE2EError):
    """Raised when the mail API answers with an error or cannot be reached."""

    def __init__(
        self,
        url: str,
        status: Optional[int] = None,
        reason: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize mail API error.

        Args:
            url: The request URL.
            status: HTTP status code, or None for transport failures.
            reason: Response text or transport error message.
            details: Optional dictionary with additional error details.
        """
        message = f"Mail API request to {url} failed"
        if status is not None:
            message += f" with status {status}"
        if reason:
            message += f": {reason}"
        super().__init__(message, details)
        self.url = url
        self.status = status
        self.reason = reason


class MailboxSetupError(AitpE2EError):
    """Raised when the inbox for a role can be neither found nor created."""

    def __init__(
        self,
        inbox_name: str,
        reason: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        message = f"Could not find or create inbox '{inbox_name}'"
        if reason:
            message += f": {reason}"
        super().__init__(message, details)
        self.inbox_name = inbox_name


# Login Exceptions
class LoginError(AitpE2EError):
    """Base exception for a failed interactive login."""


class VerificationEmailNotReceivedError(LoginError):
    """Raised when no verification email arrived before polling gave up."""

    def __init__(
        self,
        address: str,
        attempts: int,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Initialize the not-received error.

        Args:
            address: The tagged address the code was requested for.
            attempts: Number of mailbox polls performed.
            details: Optional dictionary with additional error details.
        """
        super().__init__(
            f"No verification email for {address} after {attempts} attempts",
            details,
        )
        self.address = address
        self.attempts = attempts


class VerificationCodeNotFoundError(LoginError):
    """Raised when a matched email does not contain a verification code."""

    def __init__(
        self, email_id: str, details: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            f"Verification code not found in email '{email_id}'", details)
        self.email_id = email_id


# Session Exceptions
class SessionError(AitpE2EError):
    """Raised when a role has no usable session or resolved identity."""


class RetryExhausted(AitpE2EError):
    """Raised by the polling helper when every attempt came back empty."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Gave up after {attempts} attempts")
        self.attempts = attempts
