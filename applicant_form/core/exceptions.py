"""
This module centralizes all custom exceptions used by the applicant form validators.

Rule failures are never raised: they are returned as violations. Exceptions are
reserved for infrastructure problems such as an unreachable email service.
"""

from typing import Optional, Dict, Any


class ApplicationFormError(Exception):
    """
    Base exception class for all applicant form errors.
    This provides a consistent structure for error handling across the package.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "general_error",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_type = error_type
        self.details = details or {}
        super().__init__(self.message)


class EmailCheckError(ApplicationFormError):
    """
    Raised when the email plausibility service cannot give an answer.
    This includes network errors, timeouts, error statuses and malformed bodies.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_type="email_check_error",
            details=details,
        )


class ConfigurationError(ApplicationFormError):
    """Raised when a helper is used with settings or arguments it cannot handle."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_type="configuration_error",
            details=details,
        )
