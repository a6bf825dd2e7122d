"""
Custom exceptions for the comparison API client library.
"""

import json
from typing import Optional

SUPPORT_NOTICE = (
    "Contact support@draftable.com for assistance, or open an issue on GitHub."
)


def _pretty_content(content: str) -> str:
    """Return the response body re-indented when it is JSON, unchanged otherwise."""
    try:
        return json.dumps(json.loads(content), indent=2, ensure_ascii=False)
    except ValueError:
        return content


class CompareAPIError(Exception):
    """Base exception for comparison API client errors."""
    pass


class ConfigurationError(CompareAPIError):
    """Raised when client configuration is invalid."""
    pass


class ValidationError(CompareAPIError, ValueError):
    """Raised when a caller-supplied argument is rejected before any request is made."""
    pass


class ClientClosedError(CompareAPIError):
    """Raised when an operation is started on a closed client."""
    pass


class OperationCancelledError(CompareAPIError):
    """Raised when cancellation was requested while a request was in flight."""
    pass


class RequestError(CompareAPIError):
    """
    Base exception for errors reported by the API.

    Attributes:
        response_content: Raw response body ("" when none was received)
        status_code: HTTP status returned by the server, if any
    """

    def __init__(self, message: str, response_content: str = "",
                 status_code: Optional[int] = None):
        super().__init__(message)
        self.response_content = response_content
        self.status_code = status_code

    @classmethod
    def matches(cls, status_code: int) -> bool:
        """Whether this error kind describes the given HTTP status."""
        return False

    @classmethod
    def from_fault(cls, fault) -> "RequestError":
        """Build the error from a transport fault with a matching status."""
        return cls(
            f"The API responded with HTTP {fault.actual_status} ({fault.response_reason}).",
            fault.response_content,
            fault.actual_status,
        )


class BadRequestError(RequestError):
    """Raised when the server rejects the request parameters (HTTP 400)."""

    @classmethod
    def matches(cls, status_code: int) -> bool:
        return status_code == 400

    @classmethod
    def from_fault(cls, fault) -> "BadRequestError":
        if not fault.response_content:
            message = "Bad request - ensure that the parameters are valid."
        else:
            message = (
                "Bad request - invalid parameters were provided. Details:\n"
                f"{_pretty_content(fault.response_content)}"
            )
        return cls(message, fault.response_content, fault.actual_status)


class InvalidCredentialsError(RequestError):
    """Raised when the account ID or auth token is rejected (HTTP 401/403)."""

    @classmethod
    def matches(cls, status_code: int) -> bool:
        return status_code in (401, 403)

    @classmethod
    def from_fault(cls, fault) -> "InvalidCredentialsError":
        if not fault.response_content:
            message = (
                "Invalid authorization credentials. Please check your account ID "
                "and auth token were provided correctly."
            )
            if fault.response_reason:
                message = f"{message}\n{fault.response_reason}"
        else:
            message = (
                "Invalid authorization credentials. Details:\n"
                f"{_pretty_content(fault.response_content)}"
            )
        return cls(message, fault.response_content, fault.actual_status)


class NotFoundError(RequestError):
    """Raised when the requested resource does not exist (HTTP 404)."""

    @classmethod
    def matches(cls, status_code: int) -> bool:
        return status_code == 404

    @classmethod
    def from_fault(cls, fault) -> "NotFoundError":
        return cls("Resource not found.", fault.response_content, fault.actual_status)


class UnknownResponseError(RequestError):
    """
    Raised for any response the client cannot interpret.

    Either the status code was not one the operation expects, or a
    successful response body could not be deserialized.
    """

    @classmethod
    def from_fault(cls, fault) -> "UnknownResponseError":
        return cls(
            f"An unknown response was received. {SUPPORT_NOTICE}",
            fault.response_content,
            fault.actual_status,
        )

    @classmethod
    def for_content(cls, response_content: str, message: str) -> "UnknownResponseError":
        """Build the error for a successful response whose body could not be parsed."""
        return cls(
            f"{message}\nA deserialization error indicates an issue in this client "
            f"library, or the comparison API. {SUPPORT_NOTICE}",
            response_content,
        )
