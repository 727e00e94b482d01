"""Per-request overrides for the Inheritage clients."""

from __future__ import annotations

import asyncio
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping

from .response import ResponseType


@dataclass(frozen=True)
class RequestOptions:
    timeout: float | None = None
    headers: Mapping[str, str] | None = None
    query: Mapping[str, object] | None = None
    if_none_match: str | None = None
    if_modified_since: str | datetime | None = None
    cancel_event: threading.Event | asyncio.Event | None = None
    response_type: ResponseType | None = None
    response_validation: bool = True


@dataclass(frozen=True)
class FormBody:
    """Form payload sent as-is.

    Sent URL-encoded, or as multipart when ``files`` is given.
    """

    data: Mapping[str, Any]
    files: Mapping[str, Any] | None = None
