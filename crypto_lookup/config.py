"""
Load config from config.yaml with optional env overrides.
Single source of truth for HTTP timeout, search caps, provider priority lists and endpoints.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ._version import __version__
from .core.errors import ConfigError

# Defaults if no YAML or env. Provider lists are empty here: an empty list means
# "use the built-in order" from crypto_lookup.providers.defaults.
_DEFAULTS = {
    "http": {
        "timeout_s": 10.0,
        "user_agent": f"crypto-lookup/{__version__}",
    },
    "search": {
        "max_results_per_provider": 10,
        "max_workers": 8,
    },
    "providers": {
        "price_priority": [],
        "info_priority": [],
        "address_priority": [],
        "search_providers": [],
    },
    "endpoints": {},
}


def _config_yaml_path() -> Path:
    """$CRYPTO_LOOKUP_CONFIG, else config.yaml at repo root (parent of package dir)."""
    override = os.environ.get("CRYPTO_LOOKUP_CONFIG")
    if override:
        return Path(override)
    return Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml() -> dict:
    config_path = _config_yaml_path()
    if not config_path.exists():
        return {}
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def _deep_merge(base: dict, override: dict) -> dict:
    out = dict(base)
    for k, v in override.items():
        if k in out and isinstance(out[k], dict) and isinstance(v, dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _env_overrides() -> dict:
    overrides: dict = {}
    timeout = os.environ.get("CRYPTO_LOOKUP_HTTP_TIMEOUT")
    if timeout:
        overrides.setdefault("http", {})["timeout_s"] = timeout
    user_agent = os.environ.get("CRYPTO_LOOKUP_USER_AGENT")
    if user_agent:
        overrides.setdefault("http", {})["user_agent"] = user_agent
    limit = os.environ.get("CRYPTO_LOOKUP_SEARCH_LIMIT")
    if limit:
        overrides.setdefault("search", {})["max_results_per_provider"] = limit
    return overrides


def get_config() -> dict:
    """Return merged config: defaults <- config.yaml <- env."""
    merged = _deep_merge(_DEFAULTS, _load_yaml())
    merged = _deep_merge(merged, _env_overrides())
    return merged


def _positive(value: Any, key: str, cast: Any) -> Any:
    try:
        out = cast(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{key} must be a number, got {value!r}") from exc
    if out <= 0:
        raise ConfigError(f"{key} must be positive, got {value!r}")
    return out


# Convenience accessors
def http_timeout_s() -> float:
    return _positive(get_config()["http"]["timeout_s"], "http.timeout_s", float)


def user_agent() -> str:
    return str(get_config()["http"]["user_agent"])


def search_limit() -> int:
    return _positive(
        get_config()["search"]["max_results_per_provider"],
        "search.max_results_per_provider",
        int,
    )


def search_max_workers() -> int:
    return _positive(get_config()["search"]["max_workers"], "search.max_workers", int)


def provider_priorities() -> Dict[str, List[str]]:
    """Configured provider-name lists; empty lists mean built-in defaults."""
    providers = get_config().get("providers") or {}
    out: Dict[str, List[str]] = {}
    for key in ("price_priority", "info_priority", "address_priority", "search_providers"):
        names = providers.get(key) or []
        if not isinstance(names, list):
            raise ConfigError(f"providers.{key} must be a list of provider names")
        out[key] = [str(n).lower() for n in names]
    return out


def endpoint_override(provider_key: str) -> Optional[str]:
    """Base URL override for one provider (endpoints.<name> in config.yaml)."""
    endpoints = get_config().get("endpoints") or {}
    url = endpoints.get(provider_key)
    return str(url) if url else None
