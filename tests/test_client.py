from __future__ import annotations

import asyncio
import json
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable

import httpx
import pytest

from inheritage_sdk import (
    AsyncInheritageClient,
    FormBody,
    InheritageCancelledError,
    InheritageClient,
    InheritageDecodeError,
    InheritageNotFoundError,
    InheritageRateLimitError,
    InheritageValidationError,
    RateLimitInfo,
    RequestOptions,
    ResponseType,
    build_url,
    serialize_query,
)
from inheritage_sdk.models import AIVectorRecord, GeoFeatureCollection, Heritage

BASE_URL = "https://inheritage.foundation/api/v1"

TAJ_MAHAL = {"slug": "taj-mahal", "name": "Taj Mahal", "state": "Uttar Pradesh", "country": "India"}

VECTOR_FEED = "\n".join(
    json.dumps({"slug": slug, "vector": [0.1, 0.2], "model": "text-embedding-3-large"})
    for slug in ("taj-mahal", "hampi", "konark")
) + "\n"


def _client(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> InheritageClient:
    return InheritageClient(httpx_client=httpx.Client(transport=httpx.MockTransport(handler)), **kwargs)


def _async_client(handler: Callable[..., Any], **kwargs: Any) -> AsyncInheritageClient:
    return AsyncInheritageClient(httpx_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)), **kwargs)


def _recorder(
    status: int = 200, **response_kwargs: Any
) -> tuple[list[httpx.Request], Callable[[httpx.Request], httpx.Response]]:
    if not response_kwargs and status == 200:
        response_kwargs = {"json": {}}
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(status, **response_kwargs)

    return captured, handler


def test_build_url_joins_with_single_slash() -> None:
    assert build_url(BASE_URL, "/heritage") == f"{BASE_URL}/heritage"
    assert build_url(BASE_URL + "/", "//heritage") == f"{BASE_URL}/heritage"
    assert build_url(BASE_URL, "heritage") == f"{BASE_URL}/heritage"
    assert build_url(BASE_URL, "/") == f"{BASE_URL}/"


def test_build_url_rejects_absolute_urls() -> None:
    with pytest.raises(InheritageValidationError, match="Full URLs"):
        build_url(BASE_URL, "https://evil.example/heritage")


def test_serialize_query_drops_none_and_repeats_sequences() -> None:
    params = serialize_query(
        {
            "q": "temple",
            "state": None,
            "tag": ["stone", None, "granite"],
            "featured": True,
            "download": False,
            "limit": 10,
        }
    )

    assert params == [
        ("q", "temple"),
        ("tag", "stone"),
        ("tag", "granite"),
        ("featured", "true"),
        ("download", "false"),
        ("limit", "10"),
    ]


def test_request_uses_base_url_and_baseline_headers() -> None:
    captured, handler = _recorder()

    with _client(handler, headers={"X-App": "atlas"}) as client:
        client.get_stats()

    request = captured[0]
    assert str(request.url) == f"{BASE_URL}/stats"
    assert request.method == "GET"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["X-Inheritage-Attribution"] == "visible"
    assert "X-Inheritage-Plan" not in request.headers
    assert request.headers["User-Agent"].startswith("inheritage-sdk-python/")
    assert request.headers["X-App"] == "atlas"


def test_commercial_plan_headers() -> None:
    captured, handler = _recorder()

    with _client(handler, attribution="suppressed", plan="commercial") as client:
        client.get_stats()

    assert captured[0].headers["X-Inheritage-Attribution"] == "suppressed"
    assert captured[0].headers["X-Inheritage-Plan"] == "commercial"


def test_custom_base_url_trailing_slash_and_leading_path_slash() -> None:
    captured, handler = _recorder()

    with _client(handler, base_url="https://staging.inheritage.foundation/api/v1/") as client:
        client.request("GET", "//heritage/filters")

    assert str(captured[0].url) == "https://staging.inheritage.foundation/api/v1/heritage/filters"


def test_header_layering_order() -> None:
    captured, handler = _recorder(200, text="<lido/>", headers={"Content-Type": "application/xml"})
    options = RequestOptions(headers={"X-App": "override", "Accept": "text/plain"})

    with _client(handler, headers={"X-App": "atlas"}) as client:
        client.get_heritage_lido("taj-mahal", options=options)

    request = captured[0]
    assert request.headers["X-App"] == "override"
    assert request.headers["Accept"] == "application/xml"


def test_conditional_headers_are_sent() -> None:
    captured, handler = _recorder()
    options = RequestOptions(
        if_none_match='"v1"',
        if_modified_since=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )

    with _client(handler) as client:
        client.get_stats(options=options)

    assert captured[0].headers["If-None-Match"] == '"v1"'
    assert captured[0].headers["If-Modified-Since"] == "Wed, 01 Jan 2025 00:00:00 GMT"


def test_post_endpoints_never_send_conditional_headers() -> None:
    captured, handler = _recorder(200, json={"data": []})

    with _client(handler) as client:
        client.find_similar(slug="taj-mahal", limit=5, options=RequestOptions(if_none_match='"v1"'))

    assert "If-None-Match" not in captured[0].headers


def test_query_from_endpoint_and_options_are_merged() -> None:
    captured, handler = _recorder(200, json={"data": [], "meta": {"total": 0}})

    with _client(handler) as client:
        client.list_heritage(
            state="Karnataka",
            limit=10,
            fields=["slug", "name"],
            options=RequestOptions(query={"limit": 50, "lang": "hi"}),
        )

    assert captured[0].url.params.multi_items() == [
        ("state", "Karnataka"),
        ("limit", "50"),
        ("fields", "slug,name"),
        ("lang", "hi"),
    ]


def test_boolean_flags_serialize_lowercase() -> None:
    captured, handler = _recorder(200, json={"type": "FeatureCollection", "features": []})

    with _client(handler) as client:
        client.list_geo_heritage(featured=True, limit=3)
        client.list_geo_heritage(featured=False)

    assert captured[0].url.params.multi_items() == [("featured", "true"), ("limit", "3")]
    assert captured[1].url.params.multi_items() == []


def test_path_segments_are_percent_encoded() -> None:
    captured, handler = _recorder(200, json=TAJ_MAHAL)

    with _client(handler) as client:
        client.get_heritage("a b/c")

    assert captured[0].url.raw_path == b"/api/v1/heritage/a%20b%2Fc"


def test_json_body_is_compact_utf8_with_content_type() -> None:
    captured, handler = _recorder(200, json={"data": []})

    with _client(handler) as client:
        client.find_similar(slug="taj-mahal", limit=5)

    request = captured[0]
    assert request.method == "POST"
    assert request.content == b'{"slug":"taj-mahal","limit":5}'
    assert request.headers["Content-Type"] == "application/json; charset=utf-8"


def test_text_body_is_sent_verbatim() -> None:
    captured, handler = _recorder()

    with _client(handler) as client:
        client.request("POST", "/citation/report", body="raw=payload")
        client.request("POST", "/citation/report", body=b"\x00\x01", headers={"Content-Type": "application/octet-stream"})

    assert captured[0].content == b"raw=payload"
    assert "Content-Type" not in captured[0].headers
    assert captured[1].content == b"\x00\x01"
    assert captured[1].headers["Content-Type"] == "application/octet-stream"


def test_form_body_is_url_encoded() -> None:
    captured, handler = _recorder()

    with _client(handler) as client:
        client.request("POST", "/citation/report", body=FormBody({"entity": "taj-mahal"}))

    assert captured[0].content == b"entity=taj-mahal"
    assert captured[0].headers["Content-Type"] == "application/x-www-form-urlencoded"


def test_etag_round_trip_returns_not_modified() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.headers.get("If-None-Match") == '"v1"':
            return httpx.Response(304, headers={"ETag": '"v1"', "X-Trace-Id": "trace-2"})
        return httpx.Response(
            200,
            json=TAJ_MAHAL,
            headers={
                "ETag": '"v1"',
                "Last-Modified": "Wed, 01 Jan 2025 00:00:00 GMT",
                "X-Trace-Id": "trace-1",
                "X-RateLimit-Limit": "120",
                "X-RateLimit-Remaining": "119",
                "X-RateLimit-Reset": "1767225600",
            },
        )

    with _client(handler) as client:
        first = client.get_heritage("taj-mahal")
        second = client.get_heritage("taj-mahal", options=RequestOptions(if_none_match=first.etag))

    assert first.status == 200
    assert isinstance(first.data, Heritage)
    assert first.data.name == "Taj Mahal"
    assert first.not_modified is False
    assert first.trace_id == "trace-1"
    assert first.last_modified == "Wed, 01 Jan 2025 00:00:00 GMT"
    assert first.rate_limit == RateLimitInfo(limit=120, remaining=119, reset=1767225600)

    assert second.status == 304
    assert second.not_modified is True
    assert second.data is None
    assert second.trace_id == "trace-2"


def test_not_found_raises_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            404,
            json={"error": {"code": "NOT_FOUND", "message": "Heritage site not found.", "hint": "Check the slug."}},
            headers={"X-Trace-Id": "trace-404"},
        )

    with _client(handler) as client:
        with pytest.raises(InheritageNotFoundError) as exc_info:
            client.get_heritage("atlantis")

    error = exc_info.value
    assert error.status == 404
    assert error.code == "NOT_FOUND"
    assert error.hint == "Check the slug."
    assert error.trace_id == "trace-404"


def test_rate_limited_response_carries_retry_after() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            429,
            json={"error": {"code": "RATE_LIMITED", "message": "Slow down."}},
            headers={"Retry-After": "30"},
        )

    with _client(handler) as client:
        with pytest.raises(InheritageRateLimitError) as exc_info:
            client.list_heritage()

    assert exc_info.value.retry_after == 30
    assert exc_info.value.code == "RATE_LIMITED"


def test_transport_errors_are_not_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(httpx.ConnectError):
            client.get_stats()


def test_no_content_response() -> None:
    _, handler = _recorder(204, headers={"Content-Type": "application/json"})

    with _client(handler) as client:
        response = client.get_stats()

    assert response.status == 204
    assert response.data is None


def test_response_validation_can_be_disabled() -> None:
    _, handler = _recorder(200, json=TAJ_MAHAL)

    with _client(handler) as client:
        response = client.get_heritage("taj-mahal", options=RequestOptions(response_validation=False))

    assert response.data == TAJ_MAHAL


def test_response_validation_failure() -> None:
    _, handler = _recorder(200, json={"type": "FeatureCollection", "features": "nope"})

    with _client(handler) as client:
        with pytest.raises(InheritageValidationError, match="GeoFeatureCollection") as exc_info:
            client.list_geo_heritage()

    assert exc_info.value.body == {"type": "FeatureCollection", "features": "nope"}


def test_geojson_response_is_parsed() -> None:
    body = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "geometry": {"type": "Point", "coordinates": [78.0421, 27.1751]},
                "properties": {"slug": "taj-mahal", "name": "Taj Mahal"},
            }
        ],
    }
    captured, handler = _recorder(200, content=json.dumps(body).encode(), headers={"Content-Type": "application/geo+json"})

    with _client(handler) as client:
        response = client.get_geo_nearby(27.17, 78.04, radius_km=5, limit=1)

    assert captured[0].url.params.multi_items() == [
        ("lat", "27.17"),
        ("lon", "78.04"),
        ("radius_km", "5"),
        ("limit", "1"),
    ]
    assert isinstance(response.data, GeoFeatureCollection)
    assert response.data.features[0].properties.slug == "taj-mahal"


def test_vector_index_parses_ndjson_records() -> None:
    captured, handler = _recorder(200, text=VECTOR_FEED, headers={"Content-Type": "application/x-ndjson"})

    with _client(handler) as client:
        response = client.get_ai_vector_index(limit=3, offset=0)

    assert captured[0].headers["Accept"] == "application/x-ndjson"
    assert captured[0].url.params.multi_items() == [("limit", "3"), ("offset", "0")]
    assert [record.slug for record in response.data] == ["taj-mahal", "hampi", "konark"]
    assert all(isinstance(record, AIVectorRecord) for record in response.data)


def test_vector_index_malformed_line_fails_whole_call() -> None:
    feed = '{"slug":"taj-mahal"}\n{broken\n{"slug":"konark"}\n'
    _, handler = _recorder(200, text=feed, headers={"Content-Type": "application/x-ndjson"})

    with _client(handler) as client:
        with pytest.raises(InheritageDecodeError) as exc_info:
            client.get_ai_vector_index()

    assert exc_info.value.line_number == 2


def test_vector_index_not_modified_has_no_records() -> None:
    _, handler = _recorder(304)

    with _client(handler) as client:
        response = client.get_ai_vector_index(options=RequestOptions(if_none_match='"feed"'))

    assert response.not_modified is True
    assert response.data is None


def test_heritage_dump_returns_text() -> None:
    captured, handler = _recorder(200, text='{"slug":"taj-mahal"}\n', headers={"Content-Type": "application/x-ndjson"})

    with _client(handler) as client:
        response = client.get_heritage_dump(batch=2)

    assert captured[0].url.params["batch"] == "2"
    assert response.data == '{"slug":"taj-mahal"}\n'


def test_stream_heritage_dump_yields_records() -> None:
    captured, handler = _recorder(200, text=VECTOR_FEED, headers={"Content-Type": "application/x-ndjson"})

    with _client(handler) as client:
        records = list(client.stream_heritage_dump(batch=1))

    assert captured[0].headers["Accept"] == "application/x-ndjson"
    assert [record["slug"] for record in records] == ["taj-mahal", "hampi", "konark"]


def test_stream_ai_context_dump_raises_api_errors() -> None:
    captured, handler = _recorder(429, json={"error": {"code": "RATE_LIMITED", "message": "Slow down."}})

    with _client(handler) as client:
        with pytest.raises(InheritageRateLimitError):
            list(client.stream_ai_context_dump(include_embedding=True))

    assert captured[0].url.params["include"] == "embedding"
    assert captured[0].headers["Accept"] == "application/jsonl"


def test_lido_export_returns_bytes() -> None:
    captured, handler = _recorder(200, content=b"PK\x03\x04zip", headers={"Content-Type": "application/zip"})

    with _client(handler) as client:
        response = client.export_heritage_lido(state="Karnataka", limit=10, options=RequestOptions(if_none_match='"x"'))

    assert response.data == b"PK\x03\x04zip"
    assert captured[0].headers["Accept"] == "application/zip"
    assert "If-None-Match" not in captured[0].headers


def test_cidoc_returns_json_ld() -> None:
    body = {"@context": "https://linked.art/ns/v1/linked-art.json", "id": "taj-mahal"}
    _, handler = _recorder(200, content=json.dumps(body).encode(), headers={"Content-Type": "application/ld+json"})

    with _client(handler) as client:
        response = client.get_heritage_cidoc("taj-mahal")

    assert response.data == body


def test_oaipmh_list_records_query() -> None:
    xml = "<OAI-PMH><ListRecords/></OAI-PMH>"
    captured, handler = _recorder(200, text=xml, headers={"Content-Type": "text/xml; charset=utf-8"})

    with _client(handler) as client:
        response = client.oaipmh_list_records("oai_dc", from_="2025-01-01", set_="state:karnataka")

    assert captured[0].url.params.multi_items() == [
        ("verb", "ListRecords"),
        ("metadataPrefix", "oai_dc"),
        ("from", "2025-01-01"),
        ("set", "state:karnataka"),
    ]
    assert captured[0].headers["Accept"] == "text/xml"
    assert response.data == xml


def test_response_type_option_forces_binary_text() -> None:
    _, handler = _recorder(200, text="<lido/>", headers={"Content-Type": "application/xml"})

    with _client(handler) as client:
        response = client.get_heritage_lido("taj-mahal", options=RequestOptions(response_type=ResponseType.BINARY))

    assert response.data == b"<lido/>"


def test_request_timeout_is_forwarded() -> None:
    captured, handler = _recorder()

    with _client(handler) as client:
        client.get_stats(options=RequestOptions(timeout=5))

    assert captured[0].extensions["timeout"]["read"] == 5.0

    with _client(handler) as client:
        with pytest.raises(InheritageValidationError):
            client.get_stats(options=RequestOptions(timeout=0))


@pytest.mark.parametrize(
    "call",
    [
        lambda client: client.search_heritage("   "),
        lambda client: client.get_heritage(""),
        lambda client: client.get_geo_nearby(float("nan"), 78.0),
        lambda client: client.find_similar(),
        lambda client: client.find_similar(embedding=[0.1, "x"]),
        lambda client: client.get_ai_vision_context({"hint": "temple"}),
        lambda client: client.report_citation({"entity": "taj-mahal"}),
        lambda client: client.get_ai_vector_index(limit=float("inf")),
        lambda client: client.oaipmh_list_records("marc21"),
        lambda client: client.oaipmh_get_record("", "oai_dc"),
    ],
)
def test_argument_validation_happens_before_dispatch(call: Callable[[InheritageClient], Any]) -> None:
    captured, handler = _recorder()

    with _client(handler) as client:
        with pytest.raises(InheritageValidationError):
            call(client)

    assert captured == []


def test_report_citation_sends_required_fields() -> None:
    captured, handler = _recorder(200, json={"status": "ok"})

    with _client(handler) as client:
        response = client.report_citation({"entity": "taj-mahal", "app_name": "atlas", "domain": "atlas.example"})

    assert json.loads(captured[0].content) == {"entity": "taj-mahal", "app_name": "atlas", "domain": "atlas.example"}
    assert response.data.status == "ok"


def test_cancelled_before_dispatch() -> None:
    captured, handler = _recorder()
    cancel = threading.Event()
    cancel.set()

    with _client(handler) as client:
        with pytest.raises(InheritageCancelledError):
            client.get_stats(options=RequestOptions(cancel_event=cancel))

    assert captured == []


def test_cancelled_while_receiving() -> None:
    cancel = threading.Event()

    def handler(request: httpx.Request) -> httpx.Response:
        cancel.set()
        return httpx.Response(200, json={"counts": {"heritage": 1}})

    with _client(handler) as client:
        with pytest.raises(InheritageCancelledError):
            client.get_stats(options=RequestOptions(cancel_event=cancel))


def test_request_logging_redacts_credentials(caplog: pytest.LogCaptureFixture) -> None:
    _, handler = _recorder()
    caplog.set_level(logging.DEBUG, logger="inheritage_sdk.client")

    with _client(handler, headers={"Authorization": "Bearer secret-token"}) as client:
        client.get_stats()

    assert "Inheritage request GET" in caplog.text
    assert "secret-token" not in caplog.text
    assert "[REDACTED]" in caplog.text


def test_async_client_round_trip() -> None:
    captured, handler = _recorder(200, json=TAJ_MAHAL, headers={"X-Trace-Id": "trace-a"})

    async def run() -> Any:
        async with _async_client(handler) as client:
            return await client.get_heritage("taj-mahal", fields=["slug", "name"])

    response = asyncio.run(run())

    assert captured[0].url.params["fields"] == "slug,name"
    assert isinstance(response.data, Heritage)
    assert response.trace_id == "trace-a"


def test_async_client_raises_api_errors() -> None:
    _, handler = _recorder(404, json={"error": {"code": "NOT_FOUND", "message": "Missing"}})

    async def run() -> None:
        async with _async_client(handler) as client:
            await client.get_media("atlantis")

    with pytest.raises(InheritageNotFoundError):
        asyncio.run(run())


def test_async_stream_yields_records() -> None:
    _, handler = _recorder(200, text=VECTOR_FEED, headers={"Content-Type": "application/jsonl"})

    async def run() -> list[Any]:
        async with _async_client(handler) as client:
            return [record async for record in client.stream_ai_context_dump()]

    records = asyncio.run(run())

    assert [record["slug"] for record in records] == ["taj-mahal", "hampi", "konark"]


def test_async_vector_index() -> None:
    _, handler = _recorder(200, text=VECTOR_FEED, headers={"Content-Type": "application/x-ndjson"})

    async def run() -> Any:
        async with _async_client(handler) as client:
            return await client.get_ai_vector_index()

    response = asyncio.run(run())

    assert len(response.data) == 3


def test_async_cancel_event_aborts_in_flight_request() -> None:
    async def run() -> None:
        cancel = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            cancel.set()
            await asyncio.sleep(5)
            return httpx.Response(200, json={})

        async with _async_client(handler) as client:
            await client.get_stats(options=RequestOptions(cancel_event=cancel))

    with pytest.raises(InheritageCancelledError):
        asyncio.run(run())


def test_async_cancelled_before_dispatch() -> None:
    captured, handler = _recorder()

    async def run() -> None:
        cancel = asyncio.Event()
        cancel.set()
        async with _async_client(handler) as client:
            await client.get_stats(options=RequestOptions(cancel_event=cancel))

    with pytest.raises(InheritageCancelledError):
        asyncio.run(run())

    assert captured == []


def test_cancelled_while_in_flight_with_empty_body() -> None:
    cancel = threading.Event()

    def handler(request: httpx.Request) -> httpx.Response:
        cancel.set()
        return httpx.Response(304)

    with _client(handler) as client:
        with pytest.raises(InheritageCancelledError):
            client.get_stats(options=RequestOptions(cancel_event=cancel, if_none_match='"v1"'))


def test_none_query_override_keeps_endpoint_value() -> None:
    captured, handler = _recorder(200, json={"data": []})

    with _client(handler) as client:
        client.search_heritage("temple", options=RequestOptions(query={"q": None, "limit": None}))

    assert captured[0].url.params.multi_items() == [("q", "temple")]


def test_stream_dump_never_sends_conditional_headers() -> None:
    captured, handler = _recorder(200, text=VECTOR_FEED, headers={"Content-Type": "application/x-ndjson"})
    options = RequestOptions(
        if_none_match='"dump"',
        if_modified_since=datetime(2025, 1, 1, tzinfo=timezone.utc),
    )

    with _client(handler) as client:
        records = list(client.stream_heritage_dump(options=options))

    assert len(records) == 3
    assert "If-None-Match" not in captured[0].headers
    assert "If-Modified-Since" not in captured[0].headers
