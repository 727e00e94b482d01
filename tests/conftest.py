from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("INHERITAGE_API_BASE_URL", "INHERITAGE_ATTRIBUTION", "INHERITAGE_PLAN", "INHERITAGE_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
