"""SDK-specific exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from .response import RateLimitInfo


class InheritageError(Exception):
    """Base exception for all Inheritage SDK failures."""


class InheritageConfigError(InheritageError, ValueError):
    """Raised when a client configuration is invalid."""


class InheritageValidationError(InheritageError):
    """Raised when request arguments or response payloads are invalid."""

    def __init__(self, message: str, *, body: object = None, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.body = body
        self.cause = cause


class InheritageDecodeError(InheritageError, ValueError):
    """Raised when a newline-delimited JSON payload contains an invalid record."""

    def __init__(self, message: str, *, line_number: int | None = None, line: str | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class InheritageCancelledError(InheritageError):
    """Raised when a request is aborted through its cancellation token."""


class InheritageApiError(InheritageError):
    """Raised for HTTP non-success responses."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        code: str,
        hint: str | None = None,
        doc: str | None = None,
        trace_id: str | None = None,
        retry_after: int | None = None,
        rate_limit: RateLimitInfo | None = None,
        payload: object = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.hint = hint
        self.doc = doc
        self.trace_id = trace_id
        self.retry_after = retry_after
        self.rate_limit = rate_limit
        self.payload = payload
        self.headers = dict(headers) if headers is not None else {}

    def __str__(self) -> str:
        return f"{self.status} {self.code}: {self.message}"


class InheritageAuthError(InheritageApiError):
    """Raised for authentication and authorization failures."""


class InheritageNotFoundError(InheritageApiError):
    """Raised for HTTP 404 responses."""


class InheritageRateLimitError(InheritageApiError):
    """Raised for HTTP 429 responses."""
