"""Config layering: defaults <- config.yaml <- env, and validation of bad values."""

from __future__ import annotations

import pytest

from crypto_lookup import config
from crypto_lookup._version import __version__
from crypto_lookup.core.errors import ConfigError


def _write_config(tmp_path, monkeypatch, text: str):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    monkeypatch.setenv("CRYPTO_LOOKUP_CONFIG", str(path))
    return path


def test_defaults_without_yaml():
    assert config.http_timeout_s() == 10.0
    assert config.search_limit() == 10
    assert config.search_max_workers() == 8
    assert config.user_agent() == f"crypto-lookup/{__version__}"
    assert config.endpoint_override("coingecko") is None
    assert config.provider_priorities() == {
        "price_priority": [],
        "info_priority": [],
        "address_priority": [],
        "search_providers": [],
    }


def test_yaml_overrides_defaults_and_keeps_siblings(tmp_path, monkeypatch):
    _write_config(
        tmp_path,
        monkeypatch,
        "http:\n  timeout_s: 3\nendpoints:\n  coingecko: https://proxy.example/cg\n",
    )
    assert config.http_timeout_s() == 3.0
    # Sibling key under http still comes from defaults.
    assert config.user_agent().startswith("crypto-lookup/")
    assert config.endpoint_override("coingecko") == "https://proxy.example/cg"
    assert config.endpoint_override("binance") is None


def test_env_overrides_yaml(tmp_path, monkeypatch):
    _write_config(tmp_path, monkeypatch, "search:\n  max_results_per_provider: 5\n")
    monkeypatch.setenv("CRYPTO_LOOKUP_SEARCH_LIMIT", "7")
    monkeypatch.setenv("CRYPTO_LOOKUP_HTTP_TIMEOUT", "2.5")
    monkeypatch.setenv("CRYPTO_LOOKUP_USER_AGENT", "tests/1.0")
    assert config.search_limit() == 7
    assert config.http_timeout_s() == 2.5
    assert config.user_agent() == "tests/1.0"


def test_empty_or_non_mapping_yaml_is_ignored(tmp_path, monkeypatch):
    _write_config(tmp_path, monkeypatch, "")
    assert config.http_timeout_s() == 10.0
    _write_config(tmp_path, monkeypatch, "- just\n- a list\n")
    assert config.search_limit() == 10


@pytest.mark.parametrize("value", ["abc", "0", "-1"])
def test_bad_timeout_raises_config_error(monkeypatch, value):
    monkeypatch.setenv("CRYPTO_LOOKUP_HTTP_TIMEOUT", value)
    with pytest.raises(ConfigError):
        config.http_timeout_s()


def test_priority_lists_are_lowercased(tmp_path, monkeypatch):
    _write_config(tmp_path, monkeypatch, "providers:\n  search_providers: [CoinGecko, DexScreener]\n")
    assert config.provider_priorities()["search_providers"] == ["coingecko", "dexscreener"]


def test_priority_must_be_a_list(tmp_path, monkeypatch):
    _write_config(tmp_path, monkeypatch, "providers:\n  price_priority: binance\n")
    with pytest.raises(ConfigError):
        config.provider_priorities()


def test_http_provider_picks_up_config(tmp_path, monkeypatch):
    from crypto_lookup.providers.indices.coingecko import CoinGeckoProvider

    _write_config(
        tmp_path,
        monkeypatch,
        "http:\n  timeout_s: 4\nendpoints:\n  coingecko: https://proxy.example/cg/\n",
    )
    monkeypatch.setenv("CRYPTO_LOOKUP_SEARCH_LIMIT", "3")
    p = CoinGeckoProvider()
    assert p.base_url == "https://proxy.example/cg"
    assert p.timeout_s == 4.0
    assert p.search_limit == 3
    explicit = CoinGeckoProvider(base_url="https://other.example", timeout_s=1.0, search_limit=2)
    assert (explicit.base_url, explicit.timeout_s, explicit.search_limit) == (
        "https://other.example",
        1.0,
        2,
    )
