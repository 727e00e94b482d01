"""Python SDK for the Inheritage Foundation cultural-heritage API."""

from ._version import __version__
from .client import AsyncInheritageClient, InheritageClient, build_url, serialize_query
from .config import ClientConfig
from .exceptions import (
    InheritageApiError,
    InheritageAuthError,
    InheritageCancelledError,
    InheritageConfigError,
    InheritageDecodeError,
    InheritageError,
    InheritageNotFoundError,
    InheritageRateLimitError,
    InheritageValidationError,
)
from .request_options import FormBody, RequestOptions
from .response import ApiResponse, RateLimitInfo, ResponseType, infer_response_type
from .streams import parse_ndjson

__all__ = [
    "__version__",
    "ApiResponse",
    "AsyncInheritageClient",
    "ClientConfig",
    "FormBody",
    "InheritageApiError",
    "InheritageAuthError",
    "InheritageCancelledError",
    "InheritageClient",
    "InheritageConfigError",
    "InheritageDecodeError",
    "InheritageError",
    "InheritageNotFoundError",
    "InheritageRateLimitError",
    "InheritageValidationError",
    "RateLimitInfo",
    "RequestOptions",
    "ResponseType",
    "build_url",
    "infer_response_type",
    "parse_ndjson",
    "serialize_query",
]
