"""
Application exceptions

Raised by services and translated to HTTP responses by the handlers
registered in main.py.
"""
from typing import Any, Dict, Optional


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(ApplicationException):
    """Malformed or incomplete request, rejected before any remote call."""


class NotFoundError(ApplicationException):
    """A requested ticket does not exist."""

    def __init__(
        self,
        resource_type: str,
        resource_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = resource_type
        if resource_id:
            message += f" {resource_id}"
        message += " not found"
        super().__init__(message, details)


class ConfigurationError(ApplicationException):
    """Operator configuration does not match the remote instance."""


class RemoteClientError(ApplicationException):
    """
    ServiceNow call failed.

    Attributes:
        status_code: HTTP status returned by the instance (None for transport errors)
        retryable: Whether the retry policy treats the failure as transient
    """

    retryable = False

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        super().__init__(message, details)


class RetryableRemoteError(RemoteClientError):
    """Rate limit (429) or server error (5xx)."""

    retryable = True


class TerminalRemoteError(RemoteClientError):
    """Any other 4xx, transport failure, or unusable payload; never retried."""


class AnnotationWriteError(ApplicationException):
    """Writing a work note failed; callers downgrade this to a warning."""


class IntakeTimeoutError(ApplicationException):
    """The ticket create call did not finish within the intake timeout."""
