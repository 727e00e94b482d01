"""CLI utilities for developer workflows."""

from __future__ import annotations

import argparse
import json
import re
from pathlib import Path

from inheritage_sdk.contracts import SDK_ENDPOINT_COVERAGE


HTTP_METHODS = {"get", "post", "put", "patch", "delete", "head", "options", "trace"}
_PATH_PARAM = re.compile(r"\{[^}]*\}")


def _normalize_endpoint(endpoint: str, prefix: str = "") -> str:
    method, _, path = endpoint.partition(" ")
    if prefix and path.startswith(prefix):
        path = path[len(prefix) :] or "/"
    return f"{method.upper()} {_PATH_PARAM.sub('{}', path)}"


def _load_openapi(path: Path, prefix: str = "") -> set[str]:
    payload = json.loads(path.read_text())
    paths = payload.get("paths", {})
    discovered: set[str] = set()
    for api_path, operations in paths.items():
        for method in operations:
            if not isinstance(method, str) or method.lower() not in HTTP_METHODS:
                continue
            discovered.add(_normalize_endpoint(f"{method} {api_path}", prefix))
    return discovered


def _diff_contracts(discovered: set[str], contract: dict[str, str]) -> tuple[list[str], list[str]]:
    expected = {_normalize_endpoint(endpoint): endpoint for endpoint in contract}
    missing = sorted(expected[key] for key in set(expected) - discovered)
    extra = sorted(discovered - set(expected))
    return missing, extra


def _main() -> int:
    parser = argparse.ArgumentParser(
        description="Compare the SDK endpoint coverage map against an OpenAPI document.",
    )
    parser.add_argument("--openapi", required=True, type=Path, help="Path to the OpenAPI JSON document")
    parser.add_argument(
        "--prefix",
        default="",
        help="Path prefix to strip from OpenAPI paths, e.g. /api/v1",
    )
    args = parser.parse_args()

    discovered = _load_openapi(args.openapi, args.prefix.rstrip("/"))
    missing, extra = _diff_contracts(discovered, SDK_ENDPOINT_COVERAGE)

    if missing:
        print("Missing endpoints in OpenAPI for covered SDK methods:")
        for endpoint in missing:
            method = SDK_ENDPOINT_COVERAGE[endpoint]
            print(f"  - {endpoint} ({method})")

    if extra:
        print("OpenAPI endpoints not represented in SDK coverage map:")
        for endpoint in extra:
            print(f"  - {endpoint}")

    if missing or extra:
        print("Contract coverage check failed")
        return 1

    print("Contract coverage check passed")
    return 0


def main() -> None:
    raise SystemExit(_main())
