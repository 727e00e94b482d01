#!/usr/bin/env python3
"""Live smoke run: call every public endpoint method on InheritageClient.

Point INHERITAGE_API_BASE_URL at a staging deployment to avoid the public
rate limit. Exits non-zero when any call fails unexpectedly.
"""

from __future__ import annotations

import logging
import sys

from inheritage_sdk import InheritageApiError, InheritageClient, RequestOptions

passed: list[str] = []
failed: list[tuple[str, str]] = []
skipped: list[tuple[str, str]] = []


def ok(name: str, result: object = None) -> None:
    tag = type(getattr(result, "data", result)).__name__ if result is not None else "None"
    print(f"  PASS  {name}  -> {tag}")
    passed.append(name)


def fail(name: str, err: Exception) -> None:
    msg = str(err)[:200]
    print(f"  FAIL  {name}  -> {msg}")
    failed.append((name, msg))


def skip(name: str, reason: str) -> None:
    print(f"  SKIP  {name}  ({reason})")
    skipped.append((name, reason))


def crash(name: str, exc: Exception) -> None:
    msg = f"{type(exc).__name__}: {exc}"[:200]
    print(f"  CRASH {name}  -> {msg}")
    failed.append((name, msg))


def run(name: str, fn, *, allowed: set[int] | None = None):
    """Run fn(), record pass/fail/expected-error."""
    try:
        result = fn()
        ok(name, result)
        return result
    except InheritageApiError as e:
        if allowed and e.status in allowed:
            ok(name, e)
        else:
            fail(name, e)
        return None
    except Exception as e:
        crash(name, e)
        return None


def main() -> None:
    if "-v" in sys.argv:
        logging.basicConfig(level=logging.DEBUG)

    client = InheritageClient(timeout=20.0)
    slug = "taj-mahal"

    print("\n=== Catalogue ===")

    run("get_dataset_manifest", lambda: client.get_dataset_manifest())
    run("get_stats", lambda: client.get_stats())
    listing = run("list_heritage", lambda: client.list_heritage(limit=3))
    if listing and listing.data.data:
        slug = listing.data.data[0].slug or slug
    run("get_heritage_filters", lambda: client.get_heritage_filters())
    site = run("get_heritage", lambda: client.get_heritage(slug), allowed={404})
    if site and site.etag:
        cached = run(
            "get_heritage (conditional)",
            lambda: client.get_heritage(slug, options=RequestOptions(if_none_match=site.etag)),
        )
        if cached and not cached.not_modified:
            skip("get_heritage (conditional)", "server ignored If-None-Match")
    run("search_heritage", lambda: client.search_heritage("temple", limit=3))
    run("get_random_heritage", lambda: client.get_random_heritage())
    run("get_timeline_featured", lambda: client.get_timeline_featured())

    print("\n=== Geo ===")

    run("list_geo_heritage", lambda: client.list_geo_heritage(limit=3))
    run("get_geo_feature", lambda: client.get_geo_feature(slug), allowed={404})
    run("get_geo_nearby", lambda: client.get_geo_nearby(27.1751, 78.0421, radius_km=10, limit=3))

    print("\n=== Dumps and changefeed ===")

    run("get_heritage_dump", lambda: client.get_heritage_dump(batch=1))
    run("get_geo_dump", lambda: client.get_geo_dump())
    run("get_ai_context_dump", lambda: client.get_ai_context_dump(batch=1))
    run("stream_heritage_dump", lambda: next(iter(client.stream_heritage_dump(batch=1)), None))
    run("get_changefeed", lambda: client.get_changefeed(limit=5))

    print("\n=== Media and citation ===")

    run("get_media", lambda: client.get_media(slug), allowed={404})
    run("search_media", lambda: client.search_media(type="image", limit=3))
    run("get_random_media", lambda: client.get_random_media(), allowed={404})
    run("get_citation", lambda: client.get_citation(slug), allowed={404})
    run(
        "report_citation",
        lambda: client.report_citation({"entity": slug, "app_name": "inheritage-sdk-smoke", "domain": "localhost"}),
        allowed={400, 401, 403, 422},
    )

    print("\n=== AI ===")

    run("get_ai_context", lambda: client.get_ai_context(slug), allowed={404})
    run("get_ai_embedding", lambda: client.get_ai_embedding(slug), allowed={404})
    run("find_similar", lambda: client.find_similar(slug=slug, limit=3), allowed={404})
    run("get_ai_metadata", lambda: client.get_ai_metadata(slug), allowed={404})
    run(
        "get_ai_vision_context",
        lambda: client.get_ai_vision_context({"image_url": "https://inheritage.foundation/og-image.png"}),
        allowed={400, 422, 503},
    )
    run("get_ai_vector_index", lambda: client.get_ai_vector_index(limit=3))
    run("get_ai_license", lambda: client.get_ai_license())

    print("\n=== Interoperability ===")

    run("get_heritage_cidoc", lambda: client.get_heritage_cidoc(slug), allowed={404})
    run("get_heritage_lido", lambda: client.get_heritage_lido(slug), allowed={404})
    run("export_heritage_lido", lambda: client.export_heritage_lido(limit=2))
    terms = run("search_aat", lambda: client.search_aat(q="dravidian", limit=3))
    term_id = None
    if terms and terms.data.data:
        term_id = terms.data.data[0].slug or terms.data.data[0].id
    if term_id:
        run("get_aat_term", lambda: client.get_aat_term(term_id), allowed={404})
    else:
        skip("get_aat_term", "no AAT term available")

    print("\n=== OAI-PMH ===")

    run("oaipmh_identify", lambda: client.oaipmh_identify())
    run("oaipmh_list_metadata_formats", lambda: client.oaipmh_list_metadata_formats())
    run("oaipmh_list_sets", lambda: client.oaipmh_list_sets())
    run("oaipmh_list_identifiers", lambda: client.oaipmh_list_identifiers("oai_dc"))
    run("oaipmh_list_records", lambda: client.oaipmh_list_records("lido"))
    run("oaipmh_get_record", lambda: client.oaipmh_get_record(f"oai:inheritage.foundation:{slug}", "oai_dc"))

    client.close()

    print("\n" + "=" * 60)
    print(f"PASSED: {len(passed)}   FAILED: {len(failed)}   SKIPPED: {len(skipped)}")
    if failed:
        print("\nFailed methods:")
        for name, err in failed:
            print(f"  - {name}: {err}")
    if skipped:
        print("\nSkipped methods:")
        for name, reason in skipped:
            print(f"  - {name}: {reason}")
    print("=" * 60)

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
