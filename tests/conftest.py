"""Isolate every test from a developer's config.yaml and CRYPTO_LOOKUP_* env vars."""

from __future__ import annotations

import pytest

_ENV_VARS = (
    "CRYPTO_LOOKUP_HTTP_TIMEOUT",
    "CRYPTO_LOOKUP_USER_AGENT",
    "CRYPTO_LOOKUP_SEARCH_LIMIT",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CRYPTO_LOOKUP_CONFIG", str(tmp_path / "absent-config.yaml"))
    return tmp_path
