"""Security and header helpers."""

from __future__ import annotations

import datetime as _dt
import math
from email.utils import parsedate_to_datetime
from typing import Mapping
from urllib.parse import urlparse


SENSITIVE_HEADERS = {
    "authorization",
    "cookie",
    "proxy-authorization",
    "x-api-key",
    "x-inheritage-api-key",
}


def sanitize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return headers with sensitive values redacted for logging."""
    redacted: dict[str, str] = {}
    for key, value in headers.items():
        if key.lower() in SENSITIVE_HEADERS:
            redacted[key] = "[REDACTED]"
        else:
            redacted[key] = value
    return redacted


def validate_base_url(url: str, *, allow_http: bool = False) -> None:
    """Validate base URL to avoid open redirect and scheme abuse."""
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("base_url must include scheme and host")
    if parsed.scheme not in {"http", "https"}:
        raise ValueError(f"Unsupported base_url scheme: {parsed.scheme}")
    if parsed.scheme == "http" and not allow_http:
        allowed = {"localhost", "127.0.0.1", "::1"}
        host = (parsed.hostname or "").lower()
        if host not in allowed:
            raise ValueError("Non-HTTPS base_url is not allowed without allow_http=True")
    if "\x00" in url:
        raise ValueError("Invalid base_url")


def parse_retry_after(raw: str | None, *, now: _dt.datetime | None = None) -> int | None:
    """Parse a Retry-After header value into whole seconds.

    Accepts either a delay in seconds or an HTTP date. Dates in the past yield
    0; anything unparseable yields None.
    """
    if raw is None:
        return None

    raw = raw.strip()
    if not raw:
        return None

    try:
        return max(0, int(raw))
    except ValueError:
        pass

    try:
        seconds = float(raw)
    except ValueError:
        pass
    else:
        if math.isfinite(seconds):
            return max(0, math.ceil(seconds))
        return None

    try:
        parsed = parsedate_to_datetime(raw)
    except (ValueError, TypeError, OverflowError, IndexError):
        return None

    if parsed is None:
        return None

    current = now or _dt.datetime.now(_dt.timezone.utc)
    if parsed.utcoffset() is None:
        parsed_utc = parsed.replace(tzinfo=_dt.timezone.utc)
    else:
        parsed_utc = parsed.astimezone(_dt.timezone.utc)

    delta = (parsed_utc - current).total_seconds()
    return max(0, math.ceil(delta))
