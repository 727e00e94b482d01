"""Client configuration for the Inheritage API."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal, Mapping

import httpx

from ._version import __version__
from .exceptions import InheritageConfigError
from .security import validate_base_url

AttributionMode = Literal["visible", "suppressed"]
PlanMode = Literal["public", "commercial"]

ATTRIBUTION_VISIBLE = "visible"
ATTRIBUTION_SUPPRESSED = "suppressed"
PLAN_PUBLIC = "public"
PLAN_COMMERCIAL = "commercial"

ATTRIBUTION_HEADER = "X-Inheritage-Attribution"
PLAN_HEADER = "X-Inheritage-Plan"

DEFAULT_BASE_URL = "https://inheritage.foundation/api/v1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = f"inheritage-sdk-python/{__version__} (+https://inheritage.foundation/docs/api)"

BASE_URL_ENV_VAR = "INHERITAGE_API_BASE_URL"
ATTRIBUTION_ENV_VAR = "INHERITAGE_ATTRIBUTION"
PLAN_ENV_VAR = "INHERITAGE_PLAN"
TIMEOUT_ENV_VAR = "INHERITAGE_TIMEOUT"


def _normalize_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    if not headers:
        return {}
    clean: dict[str, str] = {}
    for key, value in headers.items():
        clean[str(key)] = str(value)
    return clean


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings shared by every request a client issues.

    ``suppressed`` attribution is a commercial-plan feature; any other pairing
    is rejected here, before a client can issue a single request.
    """

    base_url: str = DEFAULT_BASE_URL
    attribution: AttributionMode = ATTRIBUTION_VISIBLE
    plan: PlanMode = PLAN_PUBLIC
    user_agent: str = DEFAULT_USER_AGENT
    headers: Mapping[str, str] = field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT
    allow_http: bool = False

    def __post_init__(self) -> None:
        base_url = (self.base_url or "").rstrip("/")
        try:
            validate_base_url(base_url, allow_http=self.allow_http)
        except ValueError as exc:
            raise InheritageConfigError(str(exc)) from exc

        if self.attribution not in (ATTRIBUTION_VISIBLE, ATTRIBUTION_SUPPRESSED):
            raise InheritageConfigError(f"Unknown attribution mode: {self.attribution!r}")
        if self.plan not in (PLAN_PUBLIC, PLAN_COMMERCIAL):
            raise InheritageConfigError(f"Unknown plan: {self.plan!r}")
        if self.attribution == ATTRIBUTION_SUPPRESSED and self.plan != PLAN_COMMERCIAL:
            raise InheritageConfigError(
                'Attribution mode "suppressed" requires plan="commercial"; '
                "the public tier must display attribution."
            )
        if self.timeout <= 0:
            raise InheritageConfigError("timeout must be greater than 0")

        object.__setattr__(self, "base_url", base_url)
        object.__setattr__(self, "headers", MappingProxyType(_normalize_headers(self.headers)))

    @classmethod
    def from_env(
        cls,
        *,
        base_url: str | None = None,
        attribution: AttributionMode | None = None,
        plan: PlanMode | None = None,
        user_agent: str | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
        allow_http: bool = False,
    ) -> "ClientConfig":
        """Build a configuration from keyword arguments, then environment, then defaults.

        Environment variables:
            INHERITAGE_API_BASE_URL: API root, e.g. a staging deployment.
            INHERITAGE_ATTRIBUTION: ``visible`` or ``suppressed``.
            INHERITAGE_PLAN: ``public`` or ``commercial``.
            INHERITAGE_TIMEOUT: Default request timeout in seconds.

        Raises:
            InheritageConfigError: If the resulting settings are invalid.
        """
        env_timeout = os.getenv(TIMEOUT_ENV_VAR)
        if timeout is None and env_timeout:
            try:
                timeout = float(env_timeout)
            except ValueError as exc:
                raise InheritageConfigError(f"{TIMEOUT_ENV_VAR} must be a number") from exc

        return cls(
            base_url=base_url or os.getenv(BASE_URL_ENV_VAR) or DEFAULT_BASE_URL,
            attribution=attribution or os.getenv(ATTRIBUTION_ENV_VAR) or ATTRIBUTION_VISIBLE,  # type: ignore[arg-type]
            plan=plan or os.getenv(PLAN_ENV_VAR) or PLAN_PUBLIC,  # type: ignore[arg-type]
            user_agent=user_agent or DEFAULT_USER_AGENT,
            headers=headers or {},
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
            allow_http=allow_http,
        )

    def baseline_headers(self) -> httpx.Headers:
        """Headers sent with every request before per-call overrides."""
        headers = httpx.Headers()
        headers["Accept"] = "application/json"
        headers[ATTRIBUTION_HEADER] = self.attribution
        if self.plan == PLAN_COMMERCIAL:
            headers[PLAN_HEADER] = PLAN_COMMERCIAL
        headers["User-Agent"] = self.user_agent
        for key, value in self.headers.items():
            headers[key] = value
        return headers
