"""Response envelopes and the content-type driven decoding policy."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Mapping, TypeVar

import httpx

from .exceptions import (
    InheritageApiError,
    InheritageAuthError,
    InheritageNotFoundError,
    InheritageRateLimitError,
)
from .security import parse_retry_after

T = TypeVar("T")

TRACE_ID_HEADER = "X-Trace-Id"
RATE_LIMIT_LIMIT_HEADER = "X-RateLimit-Limit"
RATE_LIMIT_REMAINING_HEADER = "X-RateLimit-Remaining"
RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"
DEFAULT_ERROR_CODE = "INTERNAL_SERVER_ERROR"


class ResponseType(str, Enum):
    JSON = "json"
    TEXT = "text"
    BINARY = "binary"


_BINARY_MEDIA_TYPES = ("application/zip", "application/octet-stream")
_LINE_DELIMITED_MEDIA_TYPES = ("application/x-ndjson", "application/jsonl", "application/x-jsonlines")


def infer_response_type(content_type: str | None) -> ResponseType:
    """Pick a decoding strategy from a Content-Type header value.

    Line-delimited JSON is checked before JSON so ``application/jsonl`` stays text.
    """
    normalized = (content_type or "").strip().lower()
    if not normalized:
        return ResponseType.TEXT
    if any(media_type in normalized for media_type in _BINARY_MEDIA_TYPES):
        return ResponseType.BINARY
    if any(media_type in normalized for media_type in _LINE_DELIMITED_MEDIA_TYPES):
        return ResponseType.TEXT
    if "application/json" in normalized or "+json" in normalized:
        return ResponseType.JSON
    return ResponseType.TEXT


def resolve_response_type(inferred: ResponseType, hint: ResponseType | None) -> ResponseType:
    """Apply a caller hint; a JSON response is always decoded as JSON."""
    if inferred is ResponseType.JSON or hint is None:
        return inferred
    return ResponseType(hint)


def empty_body(response_type: ResponseType) -> Any:
    if response_type is ResponseType.BINARY:
        return b""
    if response_type is ResponseType.TEXT:
        return ""
    return None


def _charset(content_type: str | None) -> str:
    for part in (content_type or "").split(";")[1:]:
        key, _, value = part.strip().partition("=")
        if key.lower() == "charset" and value:
            return value.strip().strip('"')
    return "utf-8"


def decode_body(content: bytes, response_type: ResponseType, content_type: str | None = None) -> Any:
    """Decode a response body; failures degrade to the type's empty value."""
    if response_type is ResponseType.BINARY:
        return bytes(content)
    if response_type is ResponseType.TEXT:
        try:
            return content.decode(_charset(content_type), errors="replace")
        except LookupError:
            return content.decode("utf-8", errors="replace")
    if not content:
        return None
    try:
        return json.loads(content)
    except (ValueError, RecursionError):
        return None


@dataclass(frozen=True)
class RateLimitInfo:
    limit: int
    remaining: int
    reset: int


def _parse_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        return int(raw.strip())
    except ValueError:
        return None


def parse_rate_limit(headers: Mapping[str, str]) -> RateLimitInfo | None:
    """Read the rate-limit triple; any missing or non-numeric part discards it."""
    headers = httpx.Headers(headers)
    limit = _parse_int(headers.get(RATE_LIMIT_LIMIT_HEADER))
    remaining = _parse_int(headers.get(RATE_LIMIT_REMAINING_HEADER))
    reset = _parse_int(headers.get(RATE_LIMIT_RESET_HEADER))
    if limit is None or remaining is None or reset is None:
        return None
    return RateLimitInfo(limit=limit, remaining=remaining, reset=reset)


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    status: int
    data: T
    headers: httpx.Headers
    trace_id: str | None = None
    rate_limit: RateLimitInfo | None = None
    not_modified: bool = False

    @property
    def etag(self) -> str | None:
        return self.headers.get("ETag")

    @property
    def last_modified(self) -> str | None:
        return self.headers.get("Last-Modified")


_ERROR_CLASSES: dict[int, type[InheritageApiError]] = {
    401: InheritageAuthError,
    403: InheritageAuthError,
    404: InheritageNotFoundError,
    429: InheritageRateLimitError,
}


def build_api_error(
    *,
    status: int,
    reason_phrase: str,
    headers: httpx.Headers,
    body: Any,
    trace_id: str | None,
    rate_limit: RateLimitInfo | None,
) -> InheritageApiError:
    """Turn a failed response into an error, falling back field by field."""
    envelope = body.get("error") if isinstance(body, Mapping) else None
    if not isinstance(envelope, Mapping):
        envelope = {}

    code = envelope.get("code")
    message = envelope.get("message")
    trace = envelope.get("trace_id")
    error_cls = _ERROR_CLASSES.get(status, InheritageApiError)
    return error_cls(
        message if message is not None else (reason_phrase or httpx.codes.get_reason_phrase(status)),
        status=status,
        code=code if code is not None else DEFAULT_ERROR_CODE,
        hint=envelope.get("hint"),
        doc=envelope.get("doc"),
        trace_id=trace if trace is not None else trace_id,
        retry_after=parse_retry_after(headers.get("Retry-After")),
        rate_limit=rate_limit,
        payload=body,
        headers=headers,
    )


def classify_response(
    *,
    status: int,
    headers: httpx.Headers,
    content: bytes,
    reason_phrase: str = "",
    response_type: ResponseType | None = None,
) -> ApiResponse[Any]:
    """Return an envelope for 2xx and 304 responses, raise for everything else."""
    trace_id = headers.get(TRACE_ID_HEADER)
    rate_limit = parse_rate_limit(headers)

    if status == 304:
        return ApiResponse(
            status=status,
            data=None,
            headers=headers,
            trace_id=trace_id,
            rate_limit=rate_limit,
            not_modified=True,
        )

    content_type = headers.get("Content-Type")
    final_type = resolve_response_type(infer_response_type(content_type), response_type)
    if status == 204:
        data = empty_body(final_type)
    else:
        data = decode_body(content, final_type, content_type)

    if not 200 <= status < 300:
        raise build_api_error(
            status=status,
            reason_phrase=reason_phrase,
            headers=headers,
            body=data,
            trace_id=trace_id,
            rate_limit=rate_limit,
        )

    return ApiResponse(
        status=status,
        data=data,
        headers=headers,
        trace_id=trace_id,
        rate_limit=rate_limit,
        not_modified=False,
    )
