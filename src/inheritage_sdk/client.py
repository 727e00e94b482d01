"""Synchronous and asynchronous clients for the Inheritage API."""

from __future__ import annotations

import asyncio
import contextlib
import dataclasses
import io
import json
import logging
import math
from datetime import datetime, timezone
from email.utils import format_datetime
from enum import Enum
from functools import lru_cache
from typing import Any, AsyncIterator, Iterable, Iterator, Mapping, Sequence, cast
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter, ValidationError

from .config import AttributionMode, ClientConfig, PlanMode, _normalize_headers
from .exceptions import InheritageCancelledError, InheritageValidationError
from .models import (
    AATStyle,
    AATStyleListResponse,
    AIContextResponse,
    AIEmbeddingResponse,
    AILicenseResponse,
    AIMetadataResponse,
    AISimilarResponse,
    AIVectorRecord,
    AIVisionRequest,
    AIVisionResponse,
    ChangefeedResponse,
    CitationReportRequest,
    CitationReportResponse,
    CitationResponse,
    DatasetManifest,
    GeoFeature,
    GeoFeatureCollection,
    Heritage,
    HeritageFiltersResponse,
    HeritageListResponse,
    HeritageSearchResponse,
    HeritageSort,
    JsonValue,
    MediaItemType,
    MediaResponse,
    MediaSearchResponse,
    MetadataPrefix,
    StatsResponse,
    TimelineFeaturedResponse,
    coerce_model_payload,
)
from .request_options import FormBody, RequestOptions
from .response import ApiResponse, ResponseType, classify_response
from .security import sanitize_headers
from .streams import parse_ndjson, parse_ndjson_lines, parse_ndjson_lines_async

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
NDJSON_MEDIA_TYPE = "application/x-ndjson"
JSONL_MEDIA_TYPE = "application/jsonl"
HERITAGE_DUMP_PATH = "/dump/heritage.ndjson"
AI_CONTEXT_DUMP_PATH = "/dump/ai-context.jsonl"
METADATA_PREFIXES = frozenset({"oai_dc", "lido"})


def _stringify_query_value(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def serialize_query(query: Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """Flatten a query mapping into ordered key/value pairs.

    None values are dropped, including inside lists; lists and tuples repeat
    their key once per entry in order.
    """
    params: list[tuple[str, str]] = []
    if not query:
        return params
    for key, value in query.items():
        if isinstance(value, (list, tuple)):
            for entry in value:
                text = _stringify_query_value(entry)
                if text is not None:
                    params.append((key, text))
            continue
        text = _stringify_query_value(value)
        if text is not None:
            params.append((key, text))
    return params


def build_url(base_url: str, path: str) -> str:
    """Join a relative path onto the base URL with exactly one slash between them."""
    if "://" in path:
        raise InheritageValidationError("Full URLs are not allowed in path for request method")
    if "\x00" in path:
        raise InheritageValidationError("Invalid path characters")
    base = base_url if base_url.endswith("/") else f"{base_url}/"
    return base + path.lstrip("/")


def _http_date(value: str | datetime) -> str:
    if isinstance(value, datetime):
        if value.utcoffset() is None:
            value = value.replace(tzinfo=timezone.utc)
        return format_datetime(value.astimezone(timezone.utc), usegmt=True)
    return value


def _encode_body(body: Any) -> tuple[dict[str, Any], bool]:
    """Return httpx request kwargs for a body and whether it was JSON-encoded."""
    if body is None:
        return {}, False
    if isinstance(body, FormBody):
        return {"data": dict(body.data), "files": dict(body.files) if body.files else None}, False
    if isinstance(body, (str, bytes)):
        return {"content": body}, False
    if isinstance(body, (bytearray, memoryview)):
        return {"content": bytes(body)}, False
    if isinstance(body, io.IOBase):
        return {"content": body.read()}, False
    payload = coerce_model_payload(body)
    encoded = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return {"content": encoded}, True


def _raise_if_cancelled(cancel_event: Any) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise InheritageCancelledError("Request was cancelled")


def _cancellable(lines: Iterable[str], cancel_event: Any) -> Iterator[str]:
    for line in lines:
        _raise_if_cancelled(cancel_event)
        yield line


async def _cancellable_async(lines: AsyncIterator[str], cancel_event: Any) -> AsyncIterator[str]:
    async for line in lines:
        _raise_if_cancelled(cancel_event)
        yield line


@lru_cache(maxsize=None)
def _type_adapter(model: Any) -> TypeAdapter[Any]:
    return TypeAdapter(model)


def _without_conditionals(options: RequestOptions | None) -> RequestOptions | None:
    if options is None:
        return None
    return dataclasses.replace(options, if_none_match=None, if_modified_since=None)


def _segment(value: str, name: str) -> str:
    if not isinstance(value, str) or not value:
        raise InheritageValidationError(f"{name} is required")
    return quote(value, safe="!*'()")


def _join(values: Sequence[str] | None) -> str | None:
    if not values:
        return None
    return ",".join(values)


def _is_finite_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _search_query(
    q: str,
    *,
    state: str | None,
    style: str | None,
    country: str | None,
    limit: int | None,
    fields: Sequence[str] | None,
) -> dict[str, Any]:
    if not isinstance(q, str) or not q.strip():
        raise InheritageValidationError("search query `q` is required")
    return {
        "q": q,
        "state": state,
        "style": style,
        "country": country,
        "limit": limit,
        "fields": _join(fields),
    }


def _nearby_query(lat: float, lon: float, *, radius_km: float | None, limit: int | None) -> dict[str, Any]:
    if not _is_finite_number(lat) or not _is_finite_number(lon):
        raise InheritageValidationError("lat and lon parameters are required numeric values")
    return {"lat": lat, "lon": lon, "radius_km": radius_km, "limit": limit}


def _ai_context_dump_query(batch: int | None, include_embedding: bool) -> dict[str, Any]:
    return {"batch": batch, "include": "embedding" if include_embedding else None}


def _vector_index_query(limit: int | None, offset: int | None) -> dict[str, Any]:
    if limit is not None and not _is_finite_number(limit):
        raise InheritageValidationError("limit must be a finite number")
    if offset is not None and not _is_finite_number(offset):
        raise InheritageValidationError("offset must be a finite number")
    return {"limit": limit, "offset": offset}


def _citation_report_body(body: CitationReportRequest | Mapping[str, Any]) -> dict[str, Any]:
    try:
        report = body if isinstance(body, CitationReportRequest) else CitationReportRequest.model_validate(body)
    except ValidationError as exc:
        raise InheritageValidationError("entity, app_name, and domain are required fields", cause=exc) from exc
    if not report.entity or not report.app_name or not report.domain:
        raise InheritageValidationError("entity, app_name, and domain are required fields")
    return coerce_model_payload(report)


def _similar_body(slug: str | None, embedding: Sequence[float] | None, limit: int | None) -> dict[str, Any]:
    if not slug and not embedding:
        raise InheritageValidationError("Provide either a slug or an embedding array")
    body: dict[str, Any] = {}
    if slug:
        body["slug"] = slug
    if embedding:
        if isinstance(embedding, (str, bytes)) or not all(_is_finite_number(v) for v in embedding):
            raise InheritageValidationError("embedding must be an array of numbers")
        body["embedding"] = list(embedding)
    if limit is not None:
        body["limit"] = limit
    return body


def _vision_body(body: AIVisionRequest | Mapping[str, Any]) -> dict[str, Any]:
    try:
        request = body if isinstance(body, AIVisionRequest) else AIVisionRequest.model_validate(body)
    except ValidationError as exc:
        raise InheritageValidationError(
            "Provide either image_url or image_base64 in the request body",
            cause=exc,
        ) from exc
    return coerce_model_payload(request)


def _metadata_prefix(metadata_prefix: str) -> str:
    if metadata_prefix not in METADATA_PREFIXES:
        raise InheritageValidationError(f"Unsupported metadataPrefix: {metadata_prefix!r}")
    return metadata_prefix


def _oai_list_query(
    verb: str,
    metadata_prefix: str,
    from_: str | None,
    until: str | None,
    set_: str | None,
    resumption_token: str | None,
) -> dict[str, Any]:
    return {
        "verb": verb,
        "metadataPrefix": _metadata_prefix(metadata_prefix),
        "from": from_,
        "until": until,
        "set": set_,
        "resumptionToken": resumption_token,
    }


class _BaseInheritageClient:
    def __init__(
        self,
        *,
        base_url: str | None = None,
        attribution: AttributionMode | None = None,
        plan: PlanMode | None = None,
        user_agent: str | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
        allow_http: bool = False,
        config: ClientConfig | None = None,
    ) -> None:
        self.config = config or ClientConfig.from_env(
            base_url=base_url,
            attribution=attribution,
            plan=plan,
            user_agent=user_agent,
            headers=headers,
            timeout=timeout,
            allow_http=allow_http,
        )
        self.base_url = self.config.base_url
        self._default_headers = self.config.baseline_headers()

    @property
    def attribution(self) -> str:
        return self.config.attribution

    @property
    def plan(self) -> str:
        return self.config.plan

    @staticmethod
    def _request_options(options: RequestOptions | None) -> RequestOptions:
        return options or RequestOptions()

    def _url(self, path: str) -> str:
        return build_url(self.base_url, path)

    def _headers(
        self,
        request_options: RequestOptions,
        headers: Mapping[str, str] | None,
        json_body: bool,
    ) -> httpx.Headers:
        merged = httpx.Headers(self._default_headers)
        for source in (request_options.headers, headers):
            for key, value in _normalize_headers(source).items():
                merged[key] = value
        if request_options.if_none_match:
            merged["If-None-Match"] = request_options.if_none_match
        if request_options.if_modified_since:
            merged["If-Modified-Since"] = _http_date(request_options.if_modified_since)
        if json_body and "Content-Type" not in merged:
            merged["Content-Type"] = JSON_CONTENT_TYPE
        return merged

    def _build_request_timeout(self, request_options: RequestOptions) -> float:
        timeout = request_options.timeout if request_options.timeout is not None else self.config.timeout
        if timeout <= 0:
            raise InheritageValidationError("timeout must be greater than 0")
        return float(timeout)

    @staticmethod
    def _merge_query(query: Mapping[str, Any] | None, request_options: RequestOptions) -> list[tuple[str, str]]:
        merged: dict[str, Any] = {}
        for source in (query, request_options.query):
            if source is None:
                continue
            merged.update((key, value) for key, value in source.items() if value is not None)
        return serialize_query(merged)

    def _build_request(
        self,
        http: httpx.Client | httpx.AsyncClient,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | None,
        body: Any,
        headers: Mapping[str, str] | None,
        request_options: RequestOptions,
    ) -> httpx.Request:
        url = self._url(path)
        body_kwargs, json_body = _encode_body(body)
        request_headers = self._headers(request_options, headers, json_body)
        request = http.build_request(
            method.upper(),
            url,
            params=self._merge_query(query, request_options) or None,
            headers=request_headers,
            timeout=self._build_request_timeout(request_options),
            **body_kwargs,
        )
        logger.debug(
            "Inheritage request %s %s headers=%s",
            request.method,
            request.url,
            sanitize_headers(request_headers),
        )
        return request

    def _handle_response(
        self,
        request: httpx.Request,
        response: httpx.Response,
        content: bytes,
        *,
        response_type: ResponseType | None,
        model: Any,
        request_options: RequestOptions,
    ) -> ApiResponse[Any]:
        logger.debug(
            "Inheritage response %s %s -> %s trace_id=%s",
            request.method,
            request.url,
            response.status_code,
            response.headers.get("X-Trace-Id"),
        )
        result = classify_response(
            status=response.status_code,
            headers=response.headers,
            content=content,
            reason_phrase=response.reason_phrase,
            response_type=request_options.response_type or response_type,
        )
        return self._validate(result, model, request_options)

    @staticmethod
    def _validate(response: ApiResponse[Any], model: Any, request_options: RequestOptions) -> ApiResponse[Any]:
        if model is None or not request_options.response_validation:
            return response
        if response.data is None or isinstance(response.data, (str, bytes)):
            return response
        try:
            data = _type_adapter(model).validate_python(response.data)
        except ValidationError as exc:
            name = getattr(model, "__name__", str(model))
            raise InheritageValidationError(
                f"Response body did not match {name}",
                body=response.data,
                cause=exc,
            ) from exc
        return dataclasses.replace(response, data=data)

    def _vector_records(
        self,
        response: ApiResponse[Any],
        request_options: RequestOptions,
    ) -> ApiResponse[list[AIVectorRecord]]:
        if response.not_modified:
            return cast(ApiResponse[list[AIVectorRecord]], response)
        records = parse_ndjson(response.data if isinstance(response.data, str) else "")
        parsed = dataclasses.replace(response, data=records)
        return self._validate(parsed, list[AIVectorRecord], request_options)


class InheritageClient(_BaseInheritageClient):
    """Synchronous client."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        attribution: AttributionMode | None = None,
        plan: PlanMode | None = None,
        user_agent: str | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
        allow_http: bool = False,
        config: ClientConfig | None = None,
        httpx_client: httpx.Client | None = None,
    ) -> None:
        super().__init__(
            base_url=base_url,
            attribution=attribution,
            plan=plan,
            user_agent=user_agent,
            headers=headers,
            timeout=timeout,
            allow_http=allow_http,
            config=config,
        )
        self._owns_httpx = httpx_client is None
        self._httpx = httpx_client or httpx.Client(timeout=self.config.timeout, trust_env=False)

    def __enter__(self) -> "InheritageClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_httpx:
            self._httpx.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        response_type: ResponseType | None = None,
        model: Any = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[Any]:
        """Perform one round trip and normalize the outcome.

        Raises:
            InheritageApiError: The server answered with a non-2xx, non-304 status.
            InheritageCancelledError: ``options.cancel_event`` was set before the
                body finished downloading.
            httpx.TransportError: Connection-level failures, unwrapped.
        """
        request_options = self._request_options(options)
        request = self._build_request(
            self._httpx,
            method,
            path,
            query=query,
            body=body,
            headers=headers,
            request_options=request_options,
        )
        response, content = self._send(request, request_options)
        return self._handle_response(
            request,
            response,
            content,
            response_type=response_type,
            model=model,
            request_options=request_options,
        )

    def _send(self, request: httpx.Request, request_options: RequestOptions) -> tuple[httpx.Response, bytes]:
        cancel_event = request_options.cancel_event
        _raise_if_cancelled(cancel_event)
        response = self._httpx.send(request, stream=True)
        try:
            chunks: list[bytes] = []
            for chunk in response.iter_bytes():
                _raise_if_cancelled(cancel_event)
                chunks.append(chunk)
        finally:
            response.close()
        _raise_if_cancelled(cancel_event)
        return response, b"".join(chunks)

    def _stream_records(
        self,
        path: str,
        *,
        query: Mapping[str, Any],
        accept: str,
        options: RequestOptions | None,
    ) -> Iterator[Any]:
        request_options = self._request_options(options)
        request = self._build_request(
            self._httpx,
            "GET",
            path,
            query=query,
            body=None,
            headers={"Accept": accept},
            request_options=request_options,
        )
        _raise_if_cancelled(request_options.cancel_event)
        response = self._httpx.send(request, stream=True)
        try:
            if not response.is_success:
                content = response.read()
                self._handle_response(
                    request,
                    response,
                    content,
                    response_type=ResponseType.TEXT,
                    model=None,
                    request_options=request_options,
                )
                return
            lines = _cancellable(response.iter_lines(), request_options.cancel_event)
            for record in parse_ndjson_lines(lines):
                yield record
        finally:
            response.close()

    def stream_heritage_dump(
        self,
        *,
        batch: int | None = None,
        options: RequestOptions | None = None,
    ) -> Iterator[Any]:
        """Yield heritage dump records one NDJSON line at a time."""
        return self._stream_records(
            HERITAGE_DUMP_PATH,
            query={"batch": batch},
            accept=NDJSON_MEDIA_TYPE,
            options=_without_conditionals(options),
        )

    def stream_ai_context_dump(
        self,
        *,
        batch: int | None = None,
        include_embedding: bool = False,
        options: RequestOptions | None = None,
    ) -> Iterator[Any]:
        return self._stream_records(
            AI_CONTEXT_DUMP_PATH,
            query=_ai_context_dump_query(batch, include_embedding),
            accept=JSONL_MEDIA_TYPE,
            options=_without_conditionals(options),
        )

    def get_dataset_manifest(self, *, options: RequestOptions | None = None) -> ApiResponse[DatasetManifest]:
        """Fetch the dataset manifest (JSON-LD Dataset plus discovery links)."""
        return self.request("GET", "/", model=DatasetManifest, options=options)

    def get_stats(self, *, options: RequestOptions | None = None) -> ApiResponse[StatsResponse]:
        return self.request("GET", "/stats", model=StatsResponse, options=options)

    def list_heritage(
        self,
        *,
        state: str | None = None,
        dynasty: str | None = None,
        style: str | None = None,
        material: str | None = None,
        period: str | None = None,
        country: str | None = None,
        sort: HeritageSort | None = None,
        limit: int | None = None,
        offset: int | None = None,
        fields: Sequence[str] | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[HeritageListResponse]:
        return self.request(
            "GET",
            "/heritage",
            query={
                "state": state,
                "dynasty": dynasty,
                "style": style,
                "material": material,
                "period": period,
                "country": country,
                "sort": sort,
                "limit": limit,
                "offset": offset,
                "fields": _join(fields),
            },
            model=HeritageListResponse,
            options=options,
        )

    def get_heritage_filters(self, *, options: RequestOptions | None = None) -> ApiResponse[HeritageFiltersResponse]:
        return self.request("GET", "/heritage/filters", model=HeritageFiltersResponse, options=options)

    def get_heritage(
        self,
        slug: str,
        *,
        fields: Sequence[str] | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[Heritage]:
        return self.request(
            "GET",
            f"/heritage/{_segment(slug, 'slug')}",
            query={"fields": _join(fields)},
            model=Heritage,
            options=options,
        )

    def search_heritage(
        self,
        q: str,
        *,
        state: str | None = None,
        style: str | None = None,
        country: str | None = None,
        limit: int | None = None,
        fields: Sequence[str] | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[HeritageSearchResponse]:
        return self.request(
            "GET",
            "/heritage/search",
            query=_search_query(q, state=state, style=style, country=country, limit=limit, fields=fields),
            model=HeritageSearchResponse,
            options=options,
        )

    def get_random_heritage(self, *, options: RequestOptions | None = None) -> ApiResponse[Heritage]:
        return self.request("GET", "/heritage/random", model=Heritage, options=options)

    def get_timeline_featured(self, *, options: RequestOptions | None = None) -> ApiResponse[TimelineFeaturedResponse]:
        return self.request("GET", "/timeline/featured", model=TimelineFeaturedResponse, options=options)

    def list_geo_heritage(
        self,
        *,
        state: str | None = None,
        country: str | None = None,
        category: str | None = None,
        featured: bool | None = None,
        limit: int | None = None,
        bbox: str | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[GeoFeatureCollection]:
        """GeoJSON FeatureCollection of heritage sites."""
        return self.request(
            "GET",
            "/geo/heritage",
            query={
                "state": state,
                "country": country,
                "category": category,
                "featured": True if featured else None,
                "limit": limit,
                "bbox": bbox,
            },
            model=GeoFeatureCollection,
            options=options,
        )

    def get_geo_feature(self, slug: str, *, options: RequestOptions | None = None) -> ApiResponse[GeoFeature]:
        return self.request("GET", f"/geo/heritage/{_segment(slug, 'slug')}", model=GeoFeature, options=options)

    def get_geo_nearby(
        self,
        lat: float,
        lon: float,
        *,
        radius_km: float | None = None,
        limit: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[GeoFeatureCollection]:
        return self.request(
            "GET",
            "/geo/nearby",
            query=_nearby_query(lat, lon, radius_km=radius_km, limit=limit),
            model=GeoFeatureCollection,
            options=options,
        )

    def get_heritage_dump(self, *, batch: int | None = None, options: RequestOptions | None = None) -> ApiResponse[str]:
        """Download the heritage NDJSON dump as text; split lines with parse_ndjson."""
        return self.request(
            "GET",
            HERITAGE_DUMP_PATH,
            query={"batch": batch},
            headers={"Accept": NDJSON_MEDIA_TYPE},
            response_type=ResponseType.TEXT,
            options=options,
        )

    def get_geo_dump(self, *, options: RequestOptions | None = None) -> ApiResponse[GeoFeatureCollection]:
        return self.request(
            "GET",
            "/dump/geo.geojson",
            headers={"Accept": "application/geo+json"},
            model=GeoFeatureCollection,
            options=options,
        )

    def get_ai_context_dump(
        self,
        *,
        batch: int | None = None,
        include_embedding: bool = False,
        options: RequestOptions | None = None,
    ) -> ApiResponse[str]:
        return self.request(
            "GET",
            AI_CONTEXT_DUMP_PATH,
            query=_ai_context_dump_query(batch, include_embedding),
            headers={"Accept": JSONL_MEDIA_TYPE},
            response_type=ResponseType.TEXT,
            options=options,
        )

    def get_changefeed(
        self,
        *,
        since: str | datetime | None = None,
        limit: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[ChangefeedResponse]:
        return self.request(
            "GET",
            "/changes",
            query={"since": since or None, "limit": limit},
            model=ChangefeedResponse,
            options=options,
        )

    def get_media(self, slug: str, *, options: RequestOptions | None = None) -> ApiResponse[MediaResponse]:
        return self.request("GET", f"/media/{_segment(slug, 'slug')}", model=MediaResponse, options=options)

    def search_media(
        self,
        *,
        type: MediaItemType | None = None,
        state: str | None = None,
        style: str | None = None,
        country: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[MediaSearchResponse]:
        return self.request(
            "GET",
            "/media/search",
            query={
                "type": type,
                "state": state,
                "style": style,
                "country": country,
                "limit": limit,
                "offset": offset,
            },
            model=MediaSearchResponse,
            options=options,
        )

    def get_random_media(self, *, options: RequestOptions | None = None) -> ApiResponse[MediaResponse]:
        return self.request("GET", "/media/random", model=MediaResponse, options=options)

    def get_citation(self, entity_id: str, *, options: RequestOptions | None = None) -> ApiResponse[CitationResponse]:
        """Canonical citation snippet for an entity."""
        return self.request(
            "GET",
            f"/citation/{_segment(entity_id, 'entity_id')}",
            model=CitationResponse,
            options=options,
        )

    def report_citation(
        self,
        body: CitationReportRequest | Mapping[str, Any],
        *,
        options: RequestOptions | None = None,
    ) -> ApiResponse[CitationReportResponse]:
        """Record citation display telemetry."""
        return self.request(
            "POST",
            "/citation/report",
            body=_citation_report_body(body),
            model=CitationReportResponse,
            options=_without_conditionals(options),
        )

    def get_ai_context(self, slug: str, *, options: RequestOptions | None = None) -> ApiResponse[AIContextResponse]:
        return self.request("GET", f"/ai/context/{_segment(slug, 'slug')}", model=AIContextResponse, options=options)

    def get_ai_embedding(self, slug: str, *, options: RequestOptions | None = None) -> ApiResponse[AIEmbeddingResponse]:
        return self.request(
            "GET",
            f"/ai/embedding/{_segment(slug, 'slug')}",
            model=AIEmbeddingResponse,
            options=options,
        )

    def find_similar(
        self,
        *,
        slug: str | None = None,
        embedding: Sequence[float] | None = None,
        limit: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[AISimilarResponse]:
        """Embedding similarity search by reference slug or raw vector."""
        return self.request(
            "POST",
            "/ai/similar",
            body=_similar_body(slug, embedding, limit),
            model=AISimilarResponse,
            options=_without_conditionals(options),
        )

    def get_ai_metadata(self, slug: str, *, options: RequestOptions | None = None) -> ApiResponse[AIMetadataResponse]:
        return self.request("GET", f"/ai/meta/{_segment(slug, 'slug')}", model=AIMetadataResponse, options=options)

    def get_ai_vision_context(
        self,
        body: AIVisionRequest | Mapping[str, Any],
        *,
        options: RequestOptions | None = None,
    ) -> ApiResponse[AIVisionResponse]:
        """Classify an image into heritage metadata."""
        return self.request(
            "POST",
            "/ai/vision/context",
            body=_vision_body(body),
            model=AIVisionResponse,
            options=_without_conditionals(options),
        )

    def get_ai_vector_index(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[list[AIVectorRecord]]:
        """NDJSON vector feed parsed into records.

        Raises:
            InheritageDecodeError: If any line of the feed is not valid JSON.
        """
        response = self.request(
            "GET",
            "/ai/vector-index.ndjson",
            query=_vector_index_query(limit, offset),
            headers={"Accept": NDJSON_MEDIA_TYPE},
            response_type=ResponseType.TEXT,
            options=options,
        )
        return self._vector_records(response, self._request_options(options))

    def get_ai_license(self, *, options: RequestOptions | None = None) -> ApiResponse[AILicenseResponse]:
        return self.request("GET", "/license/ai", model=AILicenseResponse, options=options)

    def get_heritage_cidoc(self, slug: str, *, options: RequestOptions | None = None) -> ApiResponse[JsonValue]:
        """CIDOC-CRM JSON-LD document for a heritage site."""
        return self.request(
            "GET",
            f"/cidoc/{_segment(slug, 'slug')}",
            headers={"Accept": "application/ld+json"},
            options=options,
        )

    def get_heritage_lido(
        self,
        slug: str,
        *,
        download: bool = False,
        options: RequestOptions | None = None,
    ) -> ApiResponse[str]:
        """LIDO 1.1 XML record for a heritage site."""
        return self.request(
            "GET",
            f"/lido/{_segment(slug, 'slug')}",
            query={"download": True if download else None},
            headers={"Accept": "application/xml"},
            response_type=ResponseType.TEXT,
            options=options,
        )

    def export_heritage_lido(
        self,
        *,
        state: str | None = None,
        country: str | None = None,
        category: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[bytes]:
        """Bulk LIDO export as ZIP archive bytes."""
        return self.request(
            "GET",
            "/lido/export",
            query={
                "state": state or None,
                "country": country or None,
                "category": category or None,
                "limit": limit,
                "offset": offset,
            },
            headers={"Accept": "application/zip"},
            response_type=ResponseType.BINARY,
            options=_without_conditionals(options),
        )

    def search_aat(
        self,
        *,
        q: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        regions: Sequence[str] | None = None,
        time_periods: Sequence[str] | None = None,
        dynasties: Sequence[str] | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[AATStyleListResponse]:
        """Search Art & Architecture Thesaurus style terms."""
        return self.request(
            "GET",
            "/aat",
            query={
                "q": q or None,
                "limit": limit,
                "offset": offset,
                "regions": _join(regions),
                "timePeriods": _join(time_periods),
                "dynasties": _join(dynasties),
            },
            model=AATStyleListResponse,
            options=options,
        )

    def get_aat_term(self, id_or_slug: str, *, options: RequestOptions | None = None) -> ApiResponse[AATStyle]:
        return self.request("GET", f"/aat/{_segment(id_or_slug, 'id_or_slug')}", model=AATStyle, options=options)

    def oaipmh_identify(self, *, options: RequestOptions | None = None) -> ApiResponse[str]:
        return self._oaipmh({"verb": "Identify"}, options)

    def oaipmh_list_metadata_formats(self, *, options: RequestOptions | None = None) -> ApiResponse[str]:
        return self._oaipmh({"verb": "ListMetadataFormats"}, options)

    def oaipmh_list_sets(self, *, options: RequestOptions | None = None) -> ApiResponse[str]:
        return self._oaipmh({"verb": "ListSets"}, options)

    def oaipmh_list_identifiers(
        self,
        metadata_prefix: MetadataPrefix,
        *,
        from_: str | None = None,
        until: str | None = None,
        set_: str | None = None,
        resumption_token: str | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[str]:
        return self._oaipmh(
            _oai_list_query("ListIdentifiers", metadata_prefix, from_, until, set_, resumption_token),
            options,
        )

    def oaipmh_list_records(
        self,
        metadata_prefix: MetadataPrefix,
        *,
        from_: str | None = None,
        until: str | None = None,
        set_: str | None = None,
        resumption_token: str | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[str]:
        return self._oaipmh(
            _oai_list_query("ListRecords", metadata_prefix, from_, until, set_, resumption_token),
            options,
        )

    def oaipmh_get_record(
        self,
        identifier: str,
        metadata_prefix: MetadataPrefix,
        *,
        options: RequestOptions | None = None,
    ) -> ApiResponse[str]:
        if not isinstance(identifier, str) or not identifier:
            raise InheritageValidationError("identifier is required")
        return self._oaipmh(
            {
                "verb": "GetRecord",
                "identifier": identifier,
                "metadataPrefix": _metadata_prefix(metadata_prefix),
            },
            options,
        )

    def _oaipmh(self, query: Mapping[str, Any], options: RequestOptions | None) -> ApiResponse[str]:
        return self.request(
            "GET",
            "/oai-pmh",
            query=query,
            headers={"Accept": "text/xml"},
            response_type=ResponseType.TEXT,
            options=options,
        )


class AsyncInheritageClient(_BaseInheritageClient):
    """Asynchronous client."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        attribution: AttributionMode | None = None,
        plan: PlanMode | None = None,
        user_agent: str | None = None,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
        allow_http: bool = False,
        config: ClientConfig | None = None,
        httpx_client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(
            base_url=base_url,
            attribution=attribution,
            plan=plan,
            user_agent=user_agent,
            headers=headers,
            timeout=timeout,
            allow_http=allow_http,
            config=config,
        )
        self._owns_httpx = httpx_client is None
        self._httpx = httpx_client or httpx.AsyncClient(timeout=self.config.timeout, trust_env=False)

    async def __aenter__(self) -> "AsyncInheritageClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_httpx:
            await self._httpx.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        query: Mapping[str, Any] | None = None,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        response_type: ResponseType | None = None,
        model: Any = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[Any]:
        """Perform one round trip and normalize the outcome.

        Setting an ``asyncio.Event`` passed as ``options.cancel_event`` aborts
        the in-flight request with InheritageCancelledError. Cancelling the
        calling task propagates asyncio.CancelledError as usual.
        """
        request_options = self._request_options(options)
        request = self._build_request(
            self._httpx,
            method,
            path,
            query=query,
            body=body,
            headers=headers,
            request_options=request_options,
        )
        response, content = await self._send(request, request_options)
        return self._handle_response(
            request,
            response,
            content,
            response_type=response_type,
            model=model,
            request_options=request_options,
        )

    async def _receive(self, request: httpx.Request) -> tuple[httpx.Response, bytes]:
        response = await self._httpx.send(request, stream=True)
        try:
            content = await response.aread()
        finally:
            await response.aclose()
        return response, content

    async def _send(self, request: httpx.Request, request_options: RequestOptions) -> tuple[httpx.Response, bytes]:
        cancel_event = request_options.cancel_event
        _raise_if_cancelled(cancel_event)
        if not isinstance(cancel_event, asyncio.Event):
            result = await self._receive(request)
            _raise_if_cancelled(cancel_event)
            return result

        receive = asyncio.ensure_future(self._receive(request))
        cancelled = asyncio.ensure_future(cancel_event.wait())
        try:
            done, _ = await asyncio.wait({receive, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            cancelled.cancel()
            if not receive.done():
                receive.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await receive
        if receive in done:
            return receive.result()
        raise InheritageCancelledError("Request was cancelled")

    async def _stream_records(
        self,
        path: str,
        *,
        query: Mapping[str, Any],
        accept: str,
        options: RequestOptions | None,
    ) -> AsyncIterator[Any]:
        request_options = self._request_options(options)
        request = self._build_request(
            self._httpx,
            "GET",
            path,
            query=query,
            body=None,
            headers={"Accept": accept},
            request_options=request_options,
        )
        _raise_if_cancelled(request_options.cancel_event)
        response = await self._httpx.send(request, stream=True)
        try:
            if not response.is_success:
                content = await response.aread()
                self._handle_response(
                    request,
                    response,
                    content,
                    response_type=ResponseType.TEXT,
                    model=None,
                    request_options=request_options,
                )
                return
            lines = _cancellable_async(response.aiter_lines(), request_options.cancel_event)
            async for record in parse_ndjson_lines_async(lines):
                yield record
        finally:
            await response.aclose()

    def stream_heritage_dump(
        self,
        *,
        batch: int | None = None,
        options: RequestOptions | None = None,
    ) -> AsyncIterator[Any]:
        """Yield heritage dump records one NDJSON line at a time."""
        return self._stream_records(
            HERITAGE_DUMP_PATH,
            query={"batch": batch},
            accept=NDJSON_MEDIA_TYPE,
            options=_without_conditionals(options),
        )

    def stream_ai_context_dump(
        self,
        *,
        batch: int | None = None,
        include_embedding: bool = False,
        options: RequestOptions | None = None,
    ) -> AsyncIterator[Any]:
        return self._stream_records(
            AI_CONTEXT_DUMP_PATH,
            query=_ai_context_dump_query(batch, include_embedding),
            accept=JSONL_MEDIA_TYPE,
            options=_without_conditionals(options),
        )

    async def get_dataset_manifest(self, *, options: RequestOptions | None = None) -> ApiResponse[DatasetManifest]:
        """Fetch the dataset manifest (JSON-LD Dataset plus discovery links)."""
        return await self.request("GET", "/", model=DatasetManifest, options=options)

    async def get_stats(self, *, options: RequestOptions | None = None) -> ApiResponse[StatsResponse]:
        return await self.request("GET", "/stats", model=StatsResponse, options=options)

    async def list_heritage(
        self,
        *,
        state: str | None = None,
        dynasty: str | None = None,
        style: str | None = None,
        material: str | None = None,
        period: str | None = None,
        country: str | None = None,
        sort: HeritageSort | None = None,
        limit: int | None = None,
        offset: int | None = None,
        fields: Sequence[str] | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[HeritageListResponse]:
        return await self.request(
            "GET",
            "/heritage",
            query={
                "state": state,
                "dynasty": dynasty,
                "style": style,
                "material": material,
                "period": period,
                "country": country,
                "sort": sort,
                "limit": limit,
                "offset": offset,
                "fields": _join(fields),
            },
            model=HeritageListResponse,
            options=options,
        )

    async def get_heritage_filters(self, *, options: RequestOptions | None = None) -> ApiResponse[HeritageFiltersResponse]:
        return await self.request("GET", "/heritage/filters", model=HeritageFiltersResponse, options=options)

    async def get_heritage(
        self,
        slug: str,
        *,
        fields: Sequence[str] | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[Heritage]:
        return await self.request(
            "GET",
            f"/heritage/{_segment(slug, 'slug')}",
            query={"fields": _join(fields)},
            model=Heritage,
            options=options,
        )

    async def search_heritage(
        self,
        q: str,
        *,
        state: str | None = None,
        style: str | None = None,
        country: str | None = None,
        limit: int | None = None,
        fields: Sequence[str] | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[HeritageSearchResponse]:
        return await self.request(
            "GET",
            "/heritage/search",
            query=_search_query(q, state=state, style=style, country=country, limit=limit, fields=fields),
            model=HeritageSearchResponse,
            options=options,
        )

    async def get_random_heritage(self, *, options: RequestOptions | None = None) -> ApiResponse[Heritage]:
        return await self.request("GET", "/heritage/random", model=Heritage, options=options)

    async def get_timeline_featured(self, *, options: RequestOptions | None = None) -> ApiResponse[TimelineFeaturedResponse]:
        return await self.request("GET", "/timeline/featured", model=TimelineFeaturedResponse, options=options)

    async def list_geo_heritage(
        self,
        *,
        state: str | None = None,
        country: str | None = None,
        category: str | None = None,
        featured: bool | None = None,
        limit: int | None = None,
        bbox: str | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[GeoFeatureCollection]:
        """GeoJSON FeatureCollection of heritage sites."""
        return await self.request(
            "GET",
            "/geo/heritage",
            query={
                "state": state,
                "country": country,
                "category": category,
                "featured": True if featured else None,
                "limit": limit,
                "bbox": bbox,
            },
            model=GeoFeatureCollection,
            options=options,
        )

    async def get_geo_feature(self, slug: str, *, options: RequestOptions | None = None) -> ApiResponse[GeoFeature]:
        return await self.request("GET", f"/geo/heritage/{_segment(slug, 'slug')}", model=GeoFeature, options=options)

    async def get_geo_nearby(
        self,
        lat: float,
        lon: float,
        *,
        radius_km: float | None = None,
        limit: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[GeoFeatureCollection]:
        return await self.request(
            "GET",
            "/geo/nearby",
            query=_nearby_query(lat, lon, radius_km=radius_km, limit=limit),
            model=GeoFeatureCollection,
            options=options,
        )

    async def get_heritage_dump(self, *, batch: int | None = None, options: RequestOptions | None = None) -> ApiResponse[str]:
        """Download the heritage NDJSON dump as text; split lines with parse_ndjson."""
        return await self.request(
            "GET",
            HERITAGE_DUMP_PATH,
            query={"batch": batch},
            headers={"Accept": NDJSON_MEDIA_TYPE},
            response_type=ResponseType.TEXT,
            options=options,
        )

    async def get_geo_dump(self, *, options: RequestOptions | None = None) -> ApiResponse[GeoFeatureCollection]:
        return await self.request(
            "GET",
            "/dump/geo.geojson",
            headers={"Accept": "application/geo+json"},
            model=GeoFeatureCollection,
            options=options,
        )

    async def get_ai_context_dump(
        self,
        *,
        batch: int | None = None,
        include_embedding: bool = False,
        options: RequestOptions | None = None,
    ) -> ApiResponse[str]:
        return await self.request(
            "GET",
            AI_CONTEXT_DUMP_PATH,
            query=_ai_context_dump_query(batch, include_embedding),
            headers={"Accept": JSONL_MEDIA_TYPE},
            response_type=ResponseType.TEXT,
            options=options,
        )

    async def get_changefeed(
        self,
        *,
        since: str | datetime | None = None,
        limit: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[ChangefeedResponse]:
        return await self.request(
            "GET",
            "/changes",
            query={"since": since or None, "limit": limit},
            model=ChangefeedResponse,
            options=options,
        )

    async def get_media(self, slug: str, *, options: RequestOptions | None = None) -> ApiResponse[MediaResponse]:
        return await self.request("GET", f"/media/{_segment(slug, 'slug')}", model=MediaResponse, options=options)

    async def search_media(
        self,
        *,
        type: MediaItemType | None = None,
        state: str | None = None,
        style: str | None = None,
        country: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[MediaSearchResponse]:
        return await self.request(
            "GET",
            "/media/search",
            query={
                "type": type,
                "state": state,
                "style": style,
                "country": country,
                "limit": limit,
                "offset": offset,
            },
            model=MediaSearchResponse,
            options=options,
        )

    async def get_random_media(self, *, options: RequestOptions | None = None) -> ApiResponse[MediaResponse]:
        return await self.request("GET", "/media/random", model=MediaResponse, options=options)

    async def get_citation(self, entity_id: str, *, options: RequestOptions | None = None) -> ApiResponse[CitationResponse]:
        """Canonical citation snippet for an entity."""
        return await self.request(
            "GET",
            f"/citation/{_segment(entity_id, 'entity_id')}",
            model=CitationResponse,
            options=options,
        )

    async def report_citation(
        self,
        body: CitationReportRequest | Mapping[str, Any],
        *,
        options: RequestOptions | None = None,
    ) -> ApiResponse[CitationReportResponse]:
        """Record citation display telemetry."""
        return await self.request(
            "POST",
            "/citation/report",
            body=_citation_report_body(body),
            model=CitationReportResponse,
            options=_without_conditionals(options),
        )

    async def get_ai_context(self, slug: str, *, options: RequestOptions | None = None) -> ApiResponse[AIContextResponse]:
        return await self.request("GET", f"/ai/context/{_segment(slug, 'slug')}", model=AIContextResponse, options=options)

    async def get_ai_embedding(self, slug: str, *, options: RequestOptions | None = None) -> ApiResponse[AIEmbeddingResponse]:
        return await self.request(
            "GET",
            f"/ai/embedding/{_segment(slug, 'slug')}",
            model=AIEmbeddingResponse,
            options=options,
        )

    async def find_similar(
        self,
        *,
        slug: str | None = None,
        embedding: Sequence[float] | None = None,
        limit: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[AISimilarResponse]:
        """Embedding similarity search by reference slug or raw vector."""
        return await self.request(
            "POST",
            "/ai/similar",
            body=_similar_body(slug, embedding, limit),
            model=AISimilarResponse,
            options=_without_conditionals(options),
        )

    async def get_ai_metadata(self, slug: str, *, options: RequestOptions | None = None) -> ApiResponse[AIMetadataResponse]:
        return await self.request("GET", f"/ai/meta/{_segment(slug, 'slug')}", model=AIMetadataResponse, options=options)

    async def get_ai_vision_context(
        self,
        body: AIVisionRequest | Mapping[str, Any],
        *,
        options: RequestOptions | None = None,
    ) -> ApiResponse[AIVisionResponse]:
        """Classify an image into heritage metadata."""
        return await self.request(
            "POST",
            "/ai/vision/context",
            body=_vision_body(body),
            model=AIVisionResponse,
            options=_without_conditionals(options),
        )

    async def get_ai_vector_index(
        self,
        *,
        limit: int | None = None,
        offset: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[list[AIVectorRecord]]:
        """NDJSON vector feed parsed into records.

        Raises:
            InheritageDecodeError: If any line of the feed is not valid JSON.
        """
        response = await self.request(
            "GET",
            "/ai/vector-index.ndjson",
            query=_vector_index_query(limit, offset),
            headers={"Accept": NDJSON_MEDIA_TYPE},
            response_type=ResponseType.TEXT,
            options=options,
        )
        return self._vector_records(response, self._request_options(options))

    async def get_ai_license(self, *, options: RequestOptions | None = None) -> ApiResponse[AILicenseResponse]:
        return await self.request("GET", "/license/ai", model=AILicenseResponse, options=options)

    async def get_heritage_cidoc(self, slug: str, *, options: RequestOptions | None = None) -> ApiResponse[JsonValue]:
        """CIDOC-CRM JSON-LD document for a heritage site."""
        return await self.request(
            "GET",
            f"/cidoc/{_segment(slug, 'slug')}",
            headers={"Accept": "application/ld+json"},
            options=options,
        )

    async def get_heritage_lido(
        self,
        slug: str,
        *,
        download: bool = False,
        options: RequestOptions | None = None,
    ) -> ApiResponse[str]:
        """LIDO 1.1 XML record for a heritage site."""
        return await self.request(
            "GET",
            f"/lido/{_segment(slug, 'slug')}",
            query={"download": True if download else None},
            headers={"Accept": "application/xml"},
            response_type=ResponseType.TEXT,
            options=options,
        )

    async def export_heritage_lido(
        self,
        *,
        state: str | None = None,
        country: str | None = None,
        category: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[bytes]:
        """Bulk LIDO export as ZIP archive bytes."""
        return await self.request(
            "GET",
            "/lido/export",
            query={
                "state": state or None,
                "country": country or None,
                "category": category or None,
                "limit": limit,
                "offset": offset,
            },
            headers={"Accept": "application/zip"},
            response_type=ResponseType.BINARY,
            options=_without_conditionals(options),
        )

    async def search_aat(
        self,
        *,
        q: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        regions: Sequence[str] | None = None,
        time_periods: Sequence[str] | None = None,
        dynasties: Sequence[str] | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[AATStyleListResponse]:
        """Search Art & Architecture Thesaurus style terms."""
        return await self.request(
            "GET",
            "/aat",
            query={
                "q": q or None,
                "limit": limit,
                "offset": offset,
                "regions": _join(regions),
                "timePeriods": _join(time_periods),
                "dynasties": _join(dynasties),
            },
            model=AATStyleListResponse,
            options=options,
        )

    async def get_aat_term(self, id_or_slug: str, *, options: RequestOptions | None = None) -> ApiResponse[AATStyle]:
        return await self.request("GET", f"/aat/{_segment(id_or_slug, 'id_or_slug')}", model=AATStyle, options=options)

    async def oaipmh_identify(self, *, options: RequestOptions | None = None) -> ApiResponse[str]:
        return await self._oaipmh({"verb": "Identify"}, options)

    async def oaipmh_list_metadata_formats(self, *, options: RequestOptions | None = None) -> ApiResponse[str]:
        return await self._oaipmh({"verb": "ListMetadataFormats"}, options)

    async def oaipmh_list_sets(self, *, options: RequestOptions | None = None) -> ApiResponse[str]:
        return await self._oaipmh({"verb": "ListSets"}, options)

    async def oaipmh_list_identifiers(
        self,
        metadata_prefix: MetadataPrefix,
        *,
        from_: str | None = None,
        until: str | None = None,
        set_: str | None = None,
        resumption_token: str | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[str]:
        return await self._oaipmh(
            _oai_list_query("ListIdentifiers", metadata_prefix, from_, until, set_, resumption_token),
            options,
        )

    async def oaipmh_list_records(
        self,
        metadata_prefix: MetadataPrefix,
        *,
        from_: str | None = None,
        until: str | None = None,
        set_: str | None = None,
        resumption_token: str | None = None,
        options: RequestOptions | None = None,
    ) -> ApiResponse[str]:
        return await self._oaipmh(
            _oai_list_query("ListRecords", metadata_prefix, from_, until, set_, resumption_token),
            options,
        )

    async def oaipmh_get_record(
        self,
        identifier: str,
        metadata_prefix: MetadataPrefix,
        *,
        options: RequestOptions | None = None,
    ) -> ApiResponse[str]:
        if not isinstance(identifier, str) or not identifier:
            raise InheritageValidationError("identifier is required")
        return await self._oaipmh(
            {
                "verb": "GetRecord",
                "identifier": identifier,
                "metadataPrefix": _metadata_prefix(metadata_prefix),
            },
            options,
        )

    async def _oaipmh(self, query: Mapping[str, Any], options: RequestOptions | None) -> ApiResponse[str]:
        return await self.request(
            "GET",
            "/oai-pmh",
            query=query,
            headers={"Accept": "text/xml"},
            response_type=ResponseType.TEXT,
            options=options,
        )
