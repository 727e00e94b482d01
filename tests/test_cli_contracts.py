from __future__ import annotations

import inspect
import json
import sys

import pytest

import inheritage_sdk.cli as cli
from inheritage_sdk.client import AsyncInheritageClient, InheritageClient
from inheritage_sdk.contracts import SDK_ENDPOINT_COVERAGE


def test_diff_contracts_handles_missing_and_extra() -> None:
    discovered = {"GET /heritage/{}", "GET /stats/live"}
    contract = {
        "GET /heritage/{slug}": "get_heritage",
        "GET /stats": "get_stats",
    }
    missing, extra = cli._diff_contracts(discovered, contract)
    assert missing == ["GET /stats"]
    assert extra == ["GET /stats/live"]


def test_normalize_endpoint_strips_prefix_and_param_names() -> None:
    assert cli._normalize_endpoint("get /api/v1/heritage/{id}", "/api/v1") == "GET /heritage/{}"
    assert cli._normalize_endpoint("get /api/v1", "/api/v1") == "GET /"


def test_cli_main_passes_with_matching_contract(monkeypatch, tmp_path) -> None:
    monkeypatch.setattr(
        sys,
        "argv",
        ["inheritage-check-contract", "--openapi", str(tmp_path / "openapi.json"), "--prefix", "/api/v1/"],
    )
    monkeypatch.setattr(
        cli,
        "SDK_ENDPOINT_COVERAGE",
        {"GET /heritage/{slug}": "get_heritage", "POST /citation/report": "report_citation"},
    )
    (tmp_path / "openapi.json").write_text(
        json.dumps(
            {
                "paths": {
                    "/api/v1/heritage/{heritageSlug}": {"get": {}, "parameters": []},
                    "/api/v1/citation/report": {"post": {}},
                }
            }
        )
    )

    assert cli._main() == 0


def test_cli_main_fails_on_mismatch(monkeypatch, tmp_path, capsys) -> None:
    monkeypatch.setattr(
        sys,
        "argv",
        ["inheritage-check-contract", "--openapi", str(tmp_path / "openapi.json")],
    )
    monkeypatch.setattr(
        cli,
        "SDK_ENDPOINT_COVERAGE",
        {"GET /stats": "get_stats"},
    )
    (tmp_path / "openapi.json").write_text(json.dumps({"paths": {}}))

    assert cli._main() == 1
    output = capsys.readouterr().out
    assert "GET /stats (get_stats)" in output
    assert "Contract coverage check failed" in output


@pytest.mark.parametrize("method_name", sorted(set(SDK_ENDPOINT_COVERAGE.values())))
def test_coverage_map_names_existing_methods(method_name: str) -> None:
    sync_method = getattr(InheritageClient, method_name)
    async_method = getattr(AsyncInheritageClient, method_name)

    assert not inspect.iscoroutinefunction(sync_method)
    assert inspect.iscoroutinefunction(async_method)
