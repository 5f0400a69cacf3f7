"""Exception hierarchy for kubekit.

All custom exceptions inherit from KubekitError. Transport failures share
the TransportError base so callers can decide what is worth retrying.
"""

from __future__ import annotations


class KubekitError(Exception):
    """Base exception for all kubekit errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigurationError(KubekitError):
    """Raised when credentials or environment are missing or invalid."""


class ValidationError(KubekitError):
    """Raised when a resource document or call parameters are malformed."""


class UnsupportedKindError(KubekitError):
    """Raised when a resource kind has no operation mapped to it."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Resource kind '{kind}' not implemented yet")


class UnknownOperationError(KubekitError, KeyError):
    """Raised when an operation id is not part of the operation surface."""

    def __init__(self, operation_id: str):
        self.operation_id = operation_id
        super().__init__(f"Unknown operation: {operation_id}")

    def __str__(self) -> str:
        return self.message


# Transport Errors
class TransportError(KubekitError):
    """Base exception for failures of a single API call."""

    @property
    def retryable(self) -> bool:
        """Whether repeating the same call could succeed."""
        return False


class RequestTimeoutError(TransportError):
    """Raised when a call does not complete before its deadline."""

    def __init__(self, url: str, timeout_ms: int):
        self.url = url
        self.timeout_ms = timeout_ms
        super().__init__(f"Request to {url} timed out after {timeout_ms}ms")

    @property
    def retryable(self) -> bool:
        return True


class NetworkError(TransportError):
    """Raised when a call never reached a server (DNS, connection refused)."""

    @property
    def retryable(self) -> bool:
        return True


class HttpError(TransportError):
    """Raised when the server answers with a non-success status code.

    The body is kept as raw text because error responses are not
    guaranteed to be JSON.
    """

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(
            f"HTTP error! status: {status}",
            details=f"Response body: {body}" if body else None,
        )

    @property
    def retryable(self) -> bool:
        return self.status >= 500


class DecodeError(TransportError):
    """Raised when a success response body is not valid JSON."""
